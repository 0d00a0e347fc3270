"""Example Moodle service adapter.

Serves a fixed course with two Python submissions, one of which does not
compile. No network calls.
"""

from typing import ClassVar

from moodle_cli.moodle.base import BaseMoodleService
from moodle_cli.moodle.exceptions import AuthenticationError, RemoteFetchError
from moodle_cli.config.models import Credentials
from moodle_cli.moodle.models import Assignment, Course, SubmissionFile, User


class ExampleMoodleAdapter(BaseMoodleService):
    """Offline adapter for local development and demos."""

    USER: ClassVar[User] = User(id=2, full_name="Example Teacher")
    COURSES: ClassVar[list[Course]] = [
        Course(id=10, full_name="Introduction to Programming", short_name="PROG1"),
    ]
    ASSIGNMENTS: ClassVar[dict[int, list[Assignment]]] = {
        10: [Assignment(id=100, name="Hello World")],
    }
    FILES: ClassVar[dict[int, list[tuple[SubmissionFile, bytes]]]] = {
        100: [
            (
                SubmissionFile(user_id=31, filename="hello.py", size=23),
                b'print("Hello, World!")\n',
            ),
            (
                SubmissionFile(user_id=32, filename="hello.py", size=22),
                b'print("Hello, World!"\n',
            ),
        ],
    }

    def __init__(self) -> None:
        self._logged_in = False

    async def login(self, credentials: Credentials) -> None:
        if not credentials.is_complete:
            raise AuthenticationError("Credentials are incomplete")
        self._logged_in = True

    async def get_current_user(self) -> User:
        if not self._logged_in:
            raise AuthenticationError("Not logged in")
        return self.USER

    async def get_courses_for_user(self, user_id: int) -> list[Course]:
        _ = user_id
        return list(self.COURSES)

    async def get_assignments_for_course(self, course_id: int) -> list[Assignment]:
        return list(self.ASSIGNMENTS.get(course_id, []))

    async def get_submissions_for_assignment(self, assignment_id: int) -> list[SubmissionFile]:
        return [submission for submission, _ in self.FILES.get(assignment_id, [])]

    async def download_submission_file(self, submission: SubmissionFile) -> bytes:
        for files in self.FILES.values():
            for known, content in files:
                if known == submission:
                    return content
        raise RemoteFetchError(f"Unknown submission file {submission.filename}")
