from dataclasses import dataclass


@dataclass(frozen=True)
class Credentials:
    """Username/password pair used to obtain a Moodle web-service token."""

    username: str
    password: str

    @property
    def is_complete(self) -> bool:
        return bool(self.username.strip()) and bool(self.password.strip())
