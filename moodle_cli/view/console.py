from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from moodle_cli.moodle.models import Assignment, Course
from moodle_cli.pipeline.models import ReportRow

_FAILED_MARKUP = "[bold red]failed[/]"
_STATUS_MARKUP = {
    "clean": "[green]clean[/]",
    "attention": "[yellow]attention[/]",
    "failed": _FAILED_MARKUP,
}


def _count_markup(count: int, color: str) -> str:
    if count == 0:
        return f"[green]{count}[/]"
    return f"[{color}]{count}[/]"


def build_report_table(rows: Sequence[ReportRow]) -> Table:
    """Render report rows as a rich table; zero counts green, others colored."""
    table = Table()
    table.add_column("Student")
    table.add_column("Filename")
    table.add_column("Size", justify="center")
    table.add_column("Errors", justify="center")
    table.add_column("Warnings", justify="center")
    table.add_column("Status", justify="center")

    for row in rows:
        if row.failure is not None:
            errors = warnings = _FAILED_MARKUP
        else:
            errors = _count_markup(row.errors, "red")
            warnings = _count_markup(row.warnings, "yellow")
        table.add_row(
            f"[blue]{row.user_id}[/]",
            escape(row.filename),
            f"{row.size} B",
            errors,
            warnings,
            _STATUS_MARKUP[row.status],
        )
    return table


class ConsoleView:
    """Terminal output for a run: spinners, announcements, report, errors."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console if console is not None else Console()

    @contextmanager
    def status(self, message: str) -> Iterator[None]:
        with self._console.status(message):
            yield

    def course_selected(self, course: Course) -> None:
        self._console.print(f"You chose the course [green]{escape(course.full_name)}[/]!")

    def assignment_selected(self, assignment: Assignment) -> None:
        self._console.print(f"You chose the assignment [green]{escape(assignment.name)}[/]!")

    def submissions_found(self, count: int) -> None:
        self._console.print(f"Found [green]{count} submissions[/]!")

    def show_report(self, rows: Sequence[ReportRow]) -> None:
        self._console.print(build_report_table(rows))

    def show_diagnostics(self, rows: Sequence[ReportRow]) -> None:
        """Print the compiler messages of every row that is not clean."""
        for row in rows:
            if row.status == "clean":
                continue
            self._console.print(f"[bold]{row.user_id}[/] {escape(row.filename)}")
            for message in row.messages:
                self._console.print(f"  {escape(message)}")

    def show_error(self, message: str) -> None:
        self._console.print(f"[bold red]Error:[/] {escape(message)}")
