from abc import ABC, abstractmethod
from types import TracebackType

from moodle_cli.config.models import Credentials
from moodle_cli.moodle.models import Assignment, Course, SubmissionFile, User


class BaseMoodleService(ABC):
    """Contract for all Moodle service adapters."""

    @abstractmethod
    async def login(self, credentials: Credentials) -> None:
        """Exchange credentials for a session with the backend.

        Raises:
            AuthenticationError: if the credentials are rejected.
        """

    @abstractmethod
    async def get_current_user(self) -> User:
        """Return the identity behind the current session.

        Raises:
            AuthenticationError: if there is no valid session.
        """

    @abstractmethod
    async def get_courses_for_user(self, user_id: int) -> list[Course]:
        """Raises RemoteFetchError on any transport or protocol failure."""

    @abstractmethod
    async def get_assignments_for_course(self, course_id: int) -> list[Assignment]:
        """Raises RemoteFetchError on any transport or protocol failure."""

    @abstractmethod
    async def get_submissions_for_assignment(self, assignment_id: int) -> list[SubmissionFile]:
        """Return every submitted file of the assignment in backend order.

        Raises:
            RemoteFetchError: on any transport or protocol failure.
        """

    @abstractmethod
    async def download_submission_file(self, submission: SubmissionFile) -> bytes:
        """Raises RemoteFetchError on any transport or protocol failure."""

    async def aclose(self) -> None:
        """Release network resources. No-op by default."""

    async def __aenter__(self) -> "BaseMoodleService":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
