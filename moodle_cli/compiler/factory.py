from moodle_cli.compiler.base import BaseCompiler
from moodle_cli.compiler.command_adapter import CommandCompilerAdapter
from moodle_cli.compiler.python_adapter import PythonCompilerAdapter
from moodle_cli.config.settings import Settings


class CompilerFactory:
    """Creates the correct compiler adapter based on settings."""

    ENGINES = ("python", "command")

    @classmethod
    def create(cls, settings: Settings) -> BaseCompiler:
        engine = settings.compiler_engine.lower()
        if engine == "python":
            return PythonCompilerAdapter()
        if engine == "command":
            command = settings.compiler_command.strip()
            if not command:
                raise ValueError("compiler_command is required for compiler_engine=command")
            return CommandCompilerAdapter(
                command=command,
                timeout_seconds=settings.compile_timeout_seconds,
            )
        raise ValueError(
            f"Unknown compiler engine '{engine}'. Choose from: {list(cls.ENGINES)}"
        )
