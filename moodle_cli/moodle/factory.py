from moodle_cli.config.settings import Settings
from moodle_cli.moodle.base import BaseMoodleService
from moodle_cli.moodle.example_adapter import ExampleMoodleAdapter
from moodle_cli.moodle.rest_adapter import MoodleRestAdapter


class MoodleServiceFactory:
    """Creates the configured Moodle service adapter."""

    PROVIDERS = ("rest", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseMoodleService:
        """Create a configured Moodle service from application settings."""
        provider = settings.moodle_provider.lower()
        if provider == "example":
            return ExampleMoodleAdapter()
        if provider == "rest":
            url = settings.moodle_url.strip()
            if not url:
                raise ValueError("moodle_url is required for moodle_provider=rest")
            return MoodleRestAdapter(
                base_url=url,
                service=settings.moodle_service,
                timeout_seconds=settings.request_timeout_seconds,
            )
        raise ValueError(
            f"Unknown Moodle provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
