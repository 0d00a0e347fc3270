import re
import shlex
import subprocess
import tempfile
from pathlib import Path

from moodle_cli.compiler.base import BaseCompiler
from moodle_cli.compiler.exceptions import CompileError
from moodle_cli.compiler.models import CompileResult
from moodle_cli.logging.logger import Log

# "<path>:<line>[:<col>]: [fatal ]error:" (gcc, clang, javac) or
# "<path>(<line>[,<col>]): error CS1002:" (csc, msvc). Echoed source lines
# are indented or start with a "|" gutter and never match.
_DIAGNOSTIC_RE = re.compile(
    r"^(?P<path>[^\s|][^|]*?)"
    r"(?::\d+(?::\d+)?|\(\d+(?:,\d+)?\))"
    r":\s*(?:fatal\s+)?(?P<kind>error|warning)(?:\s+[A-Z]+\d+)?\s*:",
    re.IGNORECASE,
)


def parse_diagnostics(output: str) -> CompileResult:
    """Count error and warning lines in compiler output."""
    errors = 0
    warnings = 0
    messages: list[str] = []
    for line in output.splitlines():
        match = _DIAGNOSTIC_RE.search(line)
        if match is None:
            continue
        if match.group("kind").lower() == "error":
            errors += 1
        else:
            warnings += 1
        messages.append(line.strip())
    return CompileResult(errors=errors, warnings=warnings, messages=tuple(messages))


class CommandCompilerAdapter(BaseCompiler):
    """Runs an external compiler on a temporary copy of the submission.

    The command template is split shell-style; ``{file}`` is replaced with the
    path of the written file and appended when absent.
    """

    def __init__(self, *, command: str, timeout_seconds: int = 60) -> None:
        if not command.strip():
            raise ValueError("Compiler command must not be empty")
        args = shlex.split(command)
        if not any("{file}" in arg for arg in args):
            args.append("{file}")
        self._args = args
        self._timeout_seconds = timeout_seconds

    def compile(self, source: bytes, filename: str) -> CompileResult:
        with tempfile.TemporaryDirectory(prefix="moodle-cli-") as tmp:
            path = Path(tmp) / (Path(filename).name or "submission")
            path.write_bytes(source)
            args = [arg.replace("{file}", str(path)) for arg in self._args]
            Log.debug(f"Running compiler: {' '.join(args)}")
            try:
                completed = subprocess.run(
                    args,
                    cwd=tmp,
                    capture_output=True,
                    text=True,
                    errors="replace",
                    timeout=self._timeout_seconds,
                    check=False,
                )
            except FileNotFoundError as exc:
                raise CompileError(f"Compiler executable not found: {args[0]}") from exc
            except subprocess.TimeoutExpired as exc:
                raise CompileError(
                    f"Compiler timed out after {self._timeout_seconds}s on {filename}"
                ) from exc

        result = parse_diagnostics(f"{completed.stdout}\n{completed.stderr}")
        if completed.returncode != 0 and result.errors == 0:
            raise CompileError(
                f"Compiler exited with status {completed.returncode} "
                f"without reporting an error for {filename}"
            )
        return result
