from collections.abc import Iterable

from moodle_cli.pipeline.models import CompiledSubmission, ReportRow


class ReportBuilder:
    """Projects compiled submissions into report rows, one row per pair, order kept."""

    def build(self, compiled: Iterable[CompiledSubmission]) -> list[ReportRow]:
        return [self._to_row(item) for item in compiled]

    def _to_row(self, item: CompiledSubmission) -> ReportRow:
        return ReportRow(
            user_id=item.submission.user_id,
            filename=item.submission.filename,
            size=item.submission.size,
            errors=item.result.errors,
            warnings=item.result.warnings,
            messages=item.result.messages,
            failure=item.result.failure,
        )
