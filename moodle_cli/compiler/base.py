from abc import ABC, abstractmethod

from moodle_cli.compiler.models import CompileResult


class BaseCompiler(ABC):
    """Contract for all compiler adapters."""

    @abstractmethod
    def compile(self, source: bytes, filename: str) -> CompileResult:
        """Compile a submitted file and count its diagnostics.

        Args:
            source: Raw file content as downloaded.
            filename: Original filename, used for diagnostics and file type.

        Returns:
            CompileResult with error/warning counts and diagnostic messages.

        Raises:
            CompileError: if the compiler cannot process the file.
        """
