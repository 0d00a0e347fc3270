import pytest

from moodle_cli.config.models import Credentials
from moodle_cli.moodle.example_adapter import ExampleMoodleAdapter
from moodle_cli.moodle.exceptions import AuthenticationError, RemoteFetchError
from moodle_cli.moodle.models import SubmissionFile


class TestExampleMoodleAdapter:
    @pytest.mark.asyncio
    async def test_walks_fixed_course_data(self) -> None:
        async with ExampleMoodleAdapter() as adapter:
            await adapter.login(Credentials(username="demo", password="demo"))
            user = await adapter.get_current_user()
            courses = await adapter.get_courses_for_user(user.id)
            assignments = await adapter.get_assignments_for_course(courses[0].id)
            files = await adapter.get_submissions_for_assignment(assignments[0].id)
            content = await adapter.download_submission_file(files[0])

        assert user.full_name == "Example Teacher"
        assert [course.short_name for course in courses] == ["PROG1"]
        assert len(files) == 2
        assert content == b'print("Hello, World!")\n'

    @pytest.mark.asyncio
    async def test_rejects_incomplete_credentials(self) -> None:
        adapter = ExampleMoodleAdapter()
        with pytest.raises(AuthenticationError):
            await adapter.login(Credentials(username="demo", password=""))

    @pytest.mark.asyncio
    async def test_requires_login(self) -> None:
        with pytest.raises(AuthenticationError):
            await ExampleMoodleAdapter().get_current_user()

    @pytest.mark.asyncio
    async def test_unknown_file_raises_remote_fetch_error(self) -> None:
        with pytest.raises(RemoteFetchError, match="other.py"):
            await ExampleMoodleAdapter().download_submission_file(
                SubmissionFile(user_id=1, filename="other.py", size=0)
            )
