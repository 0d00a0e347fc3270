import asyncio
from typing import Annotated

import typer
from rich.console import Console

from moodle_cli.config.exceptions import ConfigurationError
from moodle_cli.config.settings import Settings
from moodle_cli.logging.logger import Log
from moodle_cli.pipeline.exceptions import PipelineError
from moodle_cli.pipeline.orchestrator import build_orchestrator
from moodle_cli.view.console import ConsoleView
from moodle_cli.view.prompter import RichSelectionPrompter

EXIT_FATAL = 1
EXIT_CONFIGURATION = 2

app = typer.Typer(
    name="moodle-cli",
    help="Compile Moodle assignment submissions and report errors and warnings per student.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def run(
    details: Annotated[
        bool,
        typer.Option("--details", "-d", help="Print compiler messages for rows needing attention."),
    ] = False,
    compile_concurrency: Annotated[
        int | None,
        typer.Option(min=1, help="Number of files compiled in parallel."),
    ] = None,
    log_level: Annotated[str | None, typer.Option(help="Override LOG_LEVEL.")] = None,
) -> None:
    """Pick a course and an assignment, then compile every submitted file."""
    console = Console()
    view = ConsoleView(console)

    try:
        settings = Settings()
        if compile_concurrency is not None:
            settings = settings.model_copy(update={"compile_concurrency": compile_concurrency})
        Log.configure(log_level or settings.log_level)
        settings.require_credentials()
        orchestrator = build_orchestrator(settings, RichSelectionPrompter(console), view)
    except (ConfigurationError, ValueError) as exc:
        Log.error(f"Configuration error: {exc}")
        view.show_error(str(exc))
        raise typer.Exit(code=EXIT_CONFIGURATION) from exc

    try:
        rows = asyncio.run(orchestrator.run())
    except PipelineError as exc:
        view.show_error(str(exc))
        raise typer.Exit(code=EXIT_FATAL) from exc

    if details:
        view.show_diagnostics(rows)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
