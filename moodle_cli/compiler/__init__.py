from moodle_cli.compiler.base import BaseCompiler
from moodle_cli.compiler.factory import CompilerFactory
from moodle_cli.compiler.models import CompileResult

__all__ = ["BaseCompiler", "CompileResult", "CompilerFactory"]
