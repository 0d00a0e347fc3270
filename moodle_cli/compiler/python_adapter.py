import threading
import warnings

from moodle_cli.compiler.base import BaseCompiler
from moodle_cli.compiler.exceptions import CompileError
from moodle_cli.compiler.models import CompileResult

_WARNING_CATEGORIES = (SyntaxWarning, DeprecationWarning)

# warnings.catch_warnings swaps process-wide state; one recorder at a time
_RECORDER_LOCK = threading.Lock()


class PythonCompilerAdapter(BaseCompiler):
    """Byte-compiles Python sources in-process with the builtin compile().

    Safe to call from several threads: the warning capture around each
    compile is serialized, so every result only holds its own warnings.
    """

    def compile(self, source: bytes, filename: str) -> CompileResult:
        try:
            text = source.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CompileError(f"{filename} is not valid UTF-8: {exc}") from exc

        errors: list[str] = []
        with _RECORDER_LOCK, warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            try:
                compile(text, filename, "exec", dont_inherit=True)
            except SyntaxError as exc:
                errors.append(f"{filename}:{exc.lineno}: error: {exc.msg}")
            except ValueError as exc:
                raise CompileError(f"{filename} cannot be compiled: {exc}") from exc

        # compile() may report the same warning more than once
        found = dict.fromkeys(
            f"{filename}:{w.lineno}: warning: {w.message}"
            for w in caught
            if issubclass(w.category, _WARNING_CATEGORIES)
        )
        return CompileResult(
            errors=len(errors),
            warnings=len(found),
            messages=(*errors, *found),
        )
