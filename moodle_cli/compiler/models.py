from dataclasses import dataclass


@dataclass(frozen=True)
class CompileResult:
    """Outcome of compiling one submission.

    A result with ``failure`` set means the compiler could not process the
    file; its counts are zero and carry no meaning.
    """

    errors: int = 0
    warnings: int = 0
    messages: tuple[str, ...] = ()
    failure: str | None = None

    def __post_init__(self) -> None:
        if self.errors < 0 or self.warnings < 0:
            raise ValueError("Diagnostic counts must be non-negative")

    @classmethod
    def failed(cls, reason: str) -> "CompileResult":
        return cls(messages=(reason,), failure=reason)

    @property
    def is_failure(self) -> bool:
        return self.failure is not None

    @property
    def is_clean(self) -> bool:
        return not self.is_failure and self.errors == 0 and self.warnings == 0
