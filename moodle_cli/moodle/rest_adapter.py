from typing import Any

import httpx

from moodle_cli.config.models import Credentials
from moodle_cli.logging.logger import Log
from moodle_cli.moodle.base import BaseMoodleService
from moodle_cli.moodle.exceptions import AuthenticationError, MoodleError, RemoteFetchError
from moodle_cli.moodle.models import Assignment, Course, SubmissionFile, User


class MoodleRestAdapter(BaseMoodleService):
    """Moodle service adapter built on the REST web-service protocol."""

    TOKEN_PATH = "/login/token.php"
    REST_PATH = "/webservice/rest/server.php"

    def __init__(
        self,
        *,
        base_url: str,
        service: str = "moodle_mobile_app",
        timeout_seconds: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._service = service
        self._token: str | None = None
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def login(self, credentials: Credentials) -> None:
        try:
            response = await self._client.post(
                self.TOKEN_PATH,
                data={
                    "username": credentials.username,
                    "password": credentials.password,
                    "service": self._service,
                },
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise RemoteFetchError(f"Moodle network error during login: {exc}") from exc
        except ValueError as exc:
            raise AuthenticationError(f"Invalid JSON from Moodle login: {exc}") from exc

        if not isinstance(payload, dict) or not payload.get("token"):
            reason = "no token returned"
            if isinstance(payload, dict):
                reason = payload.get("error", reason)
            raise AuthenticationError(f"Moodle rejected the credentials: {reason}")
        token = str(payload["token"])
        self._token = token
        Log.info(f"Obtained Moodle token for user {credentials.username}")

    async def get_current_user(self) -> User:
        payload = await self._call(
            "core_webservice_get_site_info",
            error_cls=AuthenticationError,
        )
        return _build(payload, _build_user, "core_webservice_get_site_info", AuthenticationError)

    async def get_courses_for_user(self, user_id: int) -> list[Course]:
        payload = await self._call("core_enrol_get_users_courses", {"userid": str(user_id)})
        return _build(payload, _build_courses, "core_enrol_get_users_courses")

    async def get_assignments_for_course(self, course_id: int) -> list[Assignment]:
        payload = await self._call("mod_assign_get_assignments", {"courseids[0]": str(course_id)})
        return _build(payload, _build_assignments, "mod_assign_get_assignments")

    async def get_submissions_for_assignment(self, assignment_id: int) -> list[SubmissionFile]:
        payload = await self._call(
            "mod_assign_get_submissions", {"assignmentids[0]": str(assignment_id)}
        )
        return _build(payload, _build_submission_files, "mod_assign_get_submissions")

    async def download_submission_file(self, submission: SubmissionFile) -> bytes:
        if not submission.file_url:
            raise RemoteFetchError(f"No download URL for {submission.filename}")
        try:
            response = await self._client.get(
                submission.file_url, params={"token": self._require_token()}
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise RemoteFetchError(
                f"Download of {submission.filename} (user {submission.user_id}) failed: {exc}"
            ) from exc
        Log.debug(f"Downloaded {len(response.content)} bytes for {submission.filename}")
        return response.content

    async def _call(
        self,
        function: str,
        params: dict[str, str] | None = None,
        *,
        error_cls: type[MoodleError] = RemoteFetchError,
    ) -> Any:
        data = {
            "wstoken": self._require_token(),
            "wsfunction": function,
            "moodlewsrestformat": "json",
            **(params or {}),
        }
        Log.debug(f"Calling Moodle function {function}")
        try:
            response = await self._client.post(self.REST_PATH, data=data)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise RemoteFetchError(f"Moodle network error calling {function}: {exc}") from exc
        except ValueError as exc:
            raise RemoteFetchError(f"Invalid JSON from {function}: {exc}") from exc

        if isinstance(payload, dict) and "exception" in payload:
            raise error_cls(
                f"Moodle error in {function}: "
                f"{payload.get('errorcode', 'unknown')}: {payload.get('message', '')}"
            )
        return payload

    def _require_token(self) -> str:
        if self._token is None:
            raise AuthenticationError("Not logged in to Moodle; call login() first")
        return self._token


def _build(
    payload: Any,
    builder: Any,
    function: str,
    error_cls: type[MoodleError] = RemoteFetchError,
) -> Any:
    try:
        return builder(payload)
    except (KeyError, TypeError, ValueError) as exc:
        raise error_cls(f"Unexpected response shape from {function}: {exc!r}") from exc


def _build_user(raw: dict[str, Any]) -> User:
    return User(id=int(raw["userid"]), full_name=str(raw["fullname"]))


def _build_courses(raw: list[dict[str, Any]]) -> list[Course]:
    return [
        Course(
            id=int(item["id"]),
            full_name=str(item["fullname"]),
            short_name=str(item["shortname"]),
        )
        for item in raw
    ]


def _build_assignments(raw: dict[str, Any]) -> list[Assignment]:
    return [
        Assignment(id=int(item["id"]), name=str(item["name"]))
        for course in raw["courses"]
        for item in course["assignments"]
    ]


def _build_submission_files(raw: dict[str, Any]) -> list[SubmissionFile]:
    files: list[SubmissionFile] = []
    for assignment in raw["assignments"]:
        for submission in assignment["submissions"]:
            user_id = int(submission["userid"])
            for plugin in submission.get("plugins", []):
                if plugin.get("type") != "file":
                    continue
                for area in plugin.get("fileareas", []):
                    for item in area.get("files", []):
                        files.append(
                            SubmissionFile(
                                user_id=user_id,
                                filename=str(item["filename"]),
                                size=int(item.get("filesize", 0)),
                                file_url=str(item["fileurl"]),
                            )
                        )
    return files
