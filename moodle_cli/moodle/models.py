from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """The authenticated Moodle user."""

    id: int
    full_name: str


@dataclass(frozen=True)
class Course:
    id: int
    full_name: str
    short_name: str


@dataclass(frozen=True)
class Assignment:
    id: int
    name: str


@dataclass(frozen=True)
class SubmissionFile:
    """One file uploaded by a student for an assignment.

    file_url is the adapter-specific download locator and is empty for
    offline data.
    """

    user_id: int
    filename: str
    size: int
    file_url: str = ""
