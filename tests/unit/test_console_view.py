import io

from rich.console import Console

from moodle_cli.moodle.models import Assignment, Course
from moodle_cli.pipeline.models import ReportRow
from moodle_cli.view.console import ConsoleView, build_report_table


def _make_view() -> tuple[ConsoleView, io.StringIO]:
    buffer = io.StringIO()
    console = Console(file=buffer, width=120, color_system=None)
    return ConsoleView(console), buffer


def _cell_values(table_rows: list[ReportRow], column: int) -> list[str]:
    table = build_report_table(table_rows)
    return [str(cell) for cell in table.columns[column].cells]


class TestBuildReportTable:
    def test_zero_counts_are_green_and_others_colored(self) -> None:
        rows = [
            ReportRow(user_id=1, filename="a.py", size=10, errors=0, warnings=0),
            ReportRow(user_id=2, filename="b.py", size=20, errors=2, warnings=1),
        ]

        assert _cell_values(rows, 3) == ["[green]0[/]", "[red]2[/]"]
        assert _cell_values(rows, 4) == ["[green]0[/]", "[yellow]1[/]"]

    def test_failed_row_is_marked_in_both_count_columns(self) -> None:
        rows = [
            ReportRow(user_id=1, filename="a.py", size=10, errors=0, warnings=0, failure="boom"),
        ]

        assert _cell_values(rows, 3) == ["[bold red]failed[/]"]
        assert _cell_values(rows, 4) == ["[bold red]failed[/]"]

    def test_size_and_status_columns(self) -> None:
        rows = [ReportRow(user_id=1, filename="a.py", size=42, errors=0, warnings=0)]

        assert _cell_values(rows, 2) == ["42 B"]
        assert _cell_values(rows, 5) == ["[green]clean[/]"]

    def test_empty_report_has_headers_only(self) -> None:
        table = build_report_table([])

        assert table.row_count == 0
        assert [str(c.header) for c in table.columns] == [
            "Student",
            "Filename",
            "Size",
            "Errors",
            "Warnings",
            "Status",
        ]


class TestConsoleView:
    def test_show_report_prints_rows(self) -> None:
        view, buffer = _make_view()

        view.show_report([ReportRow(user_id=7, filename="main.py", size=5, errors=1, warnings=0)])

        out = buffer.getvalue()
        assert "main.py" in out
        assert "5 B" in out
        assert "attention" in out

    def test_announcements(self) -> None:
        view, buffer = _make_view()

        view.course_selected(Course(id=1, full_name="Programming 1", short_name="P1"))
        view.assignment_selected(Assignment(id=2, name="Loops [part 1]"))
        view.submissions_found(3)

        out = buffer.getvalue()
        assert "You chose the course Programming 1!" in out
        assert "You chose the assignment Loops [part 1]!" in out
        assert "Found 3 submissions!" in out

    def test_diagnostics_skip_clean_rows(self) -> None:
        view, buffer = _make_view()

        view.show_diagnostics(
            [
                ReportRow(user_id=1, filename="ok.py", size=1, errors=0, warnings=0),
                ReportRow(
                    user_id=2,
                    filename="bad.py",
                    size=1,
                    errors=1,
                    warnings=0,
                    messages=("bad.py:1: error: invalid syntax",),
                ),
            ]
        )

        out = buffer.getvalue()
        assert "ok.py" not in out
        assert "bad.py:1: error: invalid syntax" in out

    def test_show_error(self) -> None:
        view, buffer = _make_view()

        view.show_error("Moodle rejected the credentials: [invalidlogin]")

        assert "Error: Moodle rejected the credentials: [invalidlogin]" in buffer.getvalue()

    def test_status_is_a_context_manager(self) -> None:
        view, _buffer = _make_view()

        with view.status("Loading courses..."):
            pass
