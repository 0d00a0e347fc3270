from dataclasses import dataclass, field
from enum import Enum

from moodle_cli.compiler.models import CompileResult
from moodle_cli.config.models import Credentials
from moodle_cli.moodle.models import Assignment, Course, SubmissionFile, User


class PipelineStage(str, Enum):
    IDLE = "idle"
    AUTHENTICATED = "authenticated"
    COURSE_LIST_LOADED = "course_list_loaded"
    COURSE_SELECTED = "course_selected"
    ASSIGNMENT_LIST_LOADED = "assignment_list_loaded"
    ASSIGNMENT_SELECTED = "assignment_selected"
    SUBMISSIONS_LOADED = "submissions_loaded"
    DOWNLOADED = "downloaded"
    COMPILED = "compiled"
    REPORTED = "reported"
    FAILED = "failed"


@dataclass(frozen=True)
class PipelineConfig:
    """Everything the orchestrator needs besides its collaborators."""

    credentials: Credentials
    compile_concurrency: int = 1


@dataclass(frozen=True)
class DownloadedSubmission:
    submission: SubmissionFile
    content: bytes


@dataclass(frozen=True)
class CompiledSubmission:
    submission: SubmissionFile
    result: CompileResult


@dataclass(frozen=True)
class ReportRow:
    """One line of the final report."""

    user_id: int
    filename: str
    size: int
    errors: int
    warnings: int
    messages: tuple[str, ...] = ()
    failure: str | None = None

    @property
    def status(self) -> str:
        if self.failure is not None:
            return "failed"
        if self.errors == 0 and self.warnings == 0:
            return "clean"
        return "attention"


@dataclass(slots=True)
class RunContext:
    """Accumulates data as a run moves through the pipeline stages."""

    stage: PipelineStage = PipelineStage.IDLE
    user: User | None = None
    courses: list[Course] = field(default_factory=list)
    course: Course | None = None
    assignments: list[Assignment] = field(default_factory=list)
    assignment: Assignment | None = None
    submissions: list[SubmissionFile] = field(default_factory=list)
    downloaded: list[DownloadedSubmission] = field(default_factory=list)
    compiled: list[CompiledSubmission] = field(default_factory=list)
    rows: list[ReportRow] = field(default_factory=list)
    error_message: str = ""
