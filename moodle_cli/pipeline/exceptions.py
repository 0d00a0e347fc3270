class PipelineError(Exception):
    """Base exception for failures that abort a pipeline run."""


class NothingToSelectError(PipelineError):
    """Raised when the operator is asked to choose from an empty list."""
