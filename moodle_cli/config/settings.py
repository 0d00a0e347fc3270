from pydantic_settings import BaseSettings, SettingsConfigDict

from moodle_cli.config.exceptions import ConfigurationError
from moodle_cli.config.models import Credentials


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "WARNING"

    moodle_user: str = ""
    moodle_password: str = ""
    moodle_url: str = ""
    moodle_service: str = "moodle_mobile_app"
    moodle_provider: str = "rest"
    request_timeout_seconds: int = 30

    compiler_engine: str = "python"
    compiler_command: str = ""
    compile_timeout_seconds: int = 60
    compile_concurrency: int = 1

    def credentials(self) -> Credentials:
        return Credentials(username=self.moodle_user, password=self.moodle_password)

    def require_credentials(self) -> Credentials:
        """Return the Moodle credentials or fail before any remote call is made.

        Raises:
            ConfigurationError: if MOODLE_USER or MOODLE_PASSWORD is blank.
        """
        missing = [
            name
            for name, value in (
                ("MOODLE_USER", self.moodle_user),
                ("MOODLE_PASSWORD", self.moodle_password),
            )
            if not value.strip()
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}"
            )
        return self.credentials()
