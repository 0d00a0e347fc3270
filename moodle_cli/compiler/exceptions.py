class CompileError(Exception):
    """Raised when a compiler cannot process a submission at all.

    Diagnostics found in the source are not errors of this kind; they are
    reported through CompileResult counts.
    """
