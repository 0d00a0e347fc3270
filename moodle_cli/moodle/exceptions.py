from moodle_cli.pipeline.exceptions import PipelineError


class MoodleError(PipelineError):
    """Base exception for all Moodle service errors."""


class AuthenticationError(MoodleError):
    """Raised when credentials are absent or rejected by Moodle."""


class RemoteFetchError(MoodleError):
    """Raised when a listing or download call fails at the transport or protocol level."""
