import asyncio
from collections.abc import Callable, Sequence
from typing import TypeVar

from moodle_cli.compiler.base import BaseCompiler
from moodle_cli.compiler.exceptions import CompileError
from moodle_cli.compiler.factory import CompilerFactory
from moodle_cli.compiler.models import CompileResult
from moodle_cli.config.settings import Settings
from moodle_cli.logging.logger import Log
from moodle_cli.moodle.base import BaseMoodleService
from moodle_cli.moodle.exceptions import AuthenticationError, RemoteFetchError
from moodle_cli.moodle.factory import MoodleServiceFactory
from moodle_cli.moodle.models import Assignment, Course, SubmissionFile, User
from moodle_cli.pipeline.exceptions import NothingToSelectError, PipelineError
from moodle_cli.pipeline.models import (
    CompiledSubmission,
    DownloadedSubmission,
    PipelineConfig,
    PipelineStage,
    ReportRow,
    RunContext,
)
from moodle_cli.pipeline.report import ReportBuilder
from moodle_cli.view.console import ConsoleView
from moodle_cli.view.prompter import BaseSelectionPrompter

_T = TypeVar("_T", Course, Assignment)


class Orchestrator:
    """Drives one interactive run against Moodle.

    Pipeline: authenticate -> pick course -> pick assignment -> list
    submissions -> download all -> compile each -> report.
    """

    def __init__(
        self,
        config: PipelineConfig,
        moodle: BaseMoodleService,
        compiler: BaseCompiler,
        prompter: BaseSelectionPrompter,
        view: ConsoleView,
        report_builder: ReportBuilder | None = None,
    ) -> None:
        self._config = config
        self._moodle = moodle
        self._compiler = compiler
        self._prompter = prompter
        self._view = view
        self._report_builder = report_builder if report_builder is not None else ReportBuilder()
        self.context = RunContext()

    async def run(self) -> list[ReportRow]:
        """Run every stage once. Fatal errors mark the context failed and propagate."""
        self.context = RunContext()
        try:
            async with self._moodle:
                await self._run_stages(self.context)
        except PipelineError as exc:
            self.context.stage = PipelineStage.FAILED
            self.context.error_message = str(exc)
            Log.error(f"Run failed: {exc}")
            raise
        return self.context.rows

    async def _run_stages(self, context: RunContext) -> None:
        with self._view.status("Loading user data..."):
            context.user = await self.authenticate()
        context.stage = PipelineStage.AUTHENTICATED

        with self._view.status("Loading courses..."):
            context.courses = await self.list_courses(context.user)
        context.stage = PipelineStage.COURSE_LIST_LOADED

        context.course = self._choose(
            "Which course do you want to choose?",
            context.courses,
            lambda course: course.short_name,
            kind="courses",
        )
        context.stage = PipelineStage.COURSE_SELECTED
        self._view.course_selected(context.course)

        with self._view.status("Loading assignments..."):
            context.assignments = await self.list_assignments(context.course)
        context.stage = PipelineStage.ASSIGNMENT_LIST_LOADED

        context.assignment = self._choose(
            "Which assignment do you want to choose?",
            context.assignments,
            lambda assignment: assignment.name,
            kind="assignments",
        )
        context.stage = PipelineStage.ASSIGNMENT_SELECTED
        self._view.assignment_selected(context.assignment)

        with self._view.status("Loading submissions..."):
            context.submissions = await self.list_submissions(context.assignment)
        context.stage = PipelineStage.SUBMISSIONS_LOADED
        self._view.submissions_found(len(context.submissions))

        with self._view.status("Downloading the files..."):
            context.downloaded = await self.download_all(context.submissions)
        context.stage = PipelineStage.DOWNLOADED

        with self._view.status("Compiling the files..."):
            context.compiled = await self.compile_all(context.downloaded)
        # file contents are not needed past this point
        context.downloaded = []
        context.stage = PipelineStage.COMPILED

        context.rows = self._report_builder.build(context.compiled)
        self._view.show_report(context.rows)
        context.stage = PipelineStage.REPORTED

    async def authenticate(self) -> User:
        credentials = self._config.credentials
        if not credentials.is_complete:
            raise AuthenticationError("Moodle credentials are missing")
        await self._moodle.login(credentials)
        user = await self._moodle.get_current_user()
        Log.info(f"Authenticated as {user.full_name} (id {user.id})")
        return user

    async def list_courses(self, user: User) -> list[Course]:
        courses = await self._moodle.get_courses_for_user(user.id)
        Log.info(f"Loaded {len(courses)} courses for user {user.id}")
        return courses

    async def list_assignments(self, course: Course) -> list[Assignment]:
        assignments = await self._moodle.get_assignments_for_course(course.id)
        Log.info(f"Loaded {len(assignments)} assignments for course {course.id}")
        return assignments

    async def list_submissions(self, assignment: Assignment) -> list[SubmissionFile]:
        submissions = await self._moodle.get_submissions_for_assignment(assignment.id)
        Log.info(f"Loaded {len(submissions)} submission files for assignment {assignment.id}")
        return submissions

    async def download_all(
        self, submissions: Sequence[SubmissionFile]
    ) -> list[DownloadedSubmission]:
        """Download every file concurrently; results keep the input order.

        Raises:
            RemoteFetchError: if any single download fails. Outstanding
                downloads are cancelled and nothing is returned.
        """
        if not submissions:
            return []
        tasks = [asyncio.create_task(self._download(submission)) for submission in submissions]
        try:
            downloaded = await asyncio.gather(*tasks)
        except Exception as exc:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            if isinstance(exc, RemoteFetchError):
                raise
            raise RemoteFetchError(f"Download batch failed: {exc}") from exc
        Log.info(f"Downloaded {len(downloaded)} submission files")
        return list(downloaded)

    async def _download(self, submission: SubmissionFile) -> DownloadedSubmission:
        content = await self._moodle.download_submission_file(submission)
        return DownloadedSubmission(submission=submission, content=content)

    async def compile_all(
        self, downloaded: Sequence[DownloadedSubmission]
    ) -> list[CompiledSubmission]:
        """Compile each file; a failing compile becomes a failure marker, never an abort."""
        if self._config.compile_concurrency <= 1:
            return [self._compile_one(item) for item in downloaded]

        semaphore = asyncio.Semaphore(self._config.compile_concurrency)

        async def _bounded(item: DownloadedSubmission) -> CompiledSubmission:
            async with semaphore:
                return await asyncio.to_thread(self._compile_one, item)

        return list(await asyncio.gather(*(_bounded(item) for item in downloaded)))

    def _compile_one(self, item: DownloadedSubmission) -> CompiledSubmission:
        submission = item.submission
        try:
            result = self._compiler.compile(item.content, submission.filename)
        except CompileError as exc:
            Log.warning(
                f"Compile failed for {submission.filename} (user {submission.user_id}): {exc}"
            )
            result = CompileResult.failed(str(exc))
        except Exception as exc:
            Log.error(
                f"Unexpected compiler error for {submission.filename} "
                f"(user {submission.user_id}): {exc}"
            )
            result = CompileResult.failed(f"Unexpected compiler error: {exc}")
        else:
            Log.debug(
                f"Compiled {submission.filename} (user {submission.user_id}): "
                f"{result.errors} errors, {result.warnings} warnings"
            )
        return CompiledSubmission(submission=submission, result=result)

    def _choose(
        self,
        title: str,
        items: Sequence[_T],
        label: Callable[[_T], str],
        *,
        kind: str,
    ) -> _T:
        if not items:
            raise NothingToSelectError(f"No {kind} available to choose from")
        picked = self._prompter.select(title, [(item.id, label(item)) for item in items])
        for item in items:
            if item.id == picked:
                return item
        raise ValueError(f"Prompter returned unknown identifier {picked}")


def build_orchestrator(
    settings: Settings,
    prompter: BaseSelectionPrompter,
    view: ConsoleView,
) -> Orchestrator:
    """Build an Orchestrator with the configured Moodle and compiler adapters."""
    config = PipelineConfig(
        credentials=settings.credentials(),
        compile_concurrency=settings.compile_concurrency,
    )
    compiler = CompilerFactory.create(settings)
    return Orchestrator(
        config=config,
        moodle=MoodleServiceFactory.create(settings),
        compiler=compiler,
        prompter=prompter,
        view=view,
    )
