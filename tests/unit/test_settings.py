from pathlib import Path

import pytest
from pydantic import ValidationError

from moodle_cli.config.exceptions import ConfigurationError
from moodle_cli.config.models import Credentials
from moodle_cli.config.settings import Settings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("MOODLE_USER", "MOODLE_PASSWORD", "MOODLE_URL", "LOG_LEVEL", "COMPILER_ENGINE"):
        monkeypatch.delenv(name, raising=False)


class TestSettingsDefaults:
    def test_default_log_level(self) -> None:
        s = Settings()
        assert s.log_level == "WARNING"

    def test_default_moodle_provider(self) -> None:
        s = Settings()
        assert s.moodle_provider == "rest"

    def test_default_moodle_service(self) -> None:
        s = Settings()
        assert s.moodle_service == "moodle_mobile_app"

    def test_default_compiler_engine(self) -> None:
        s = Settings()
        assert s.compiler_engine == "python"

    def test_default_compile_concurrency(self) -> None:
        s = Settings()
        assert s.compile_concurrency == 1

    def test_moodle_url_blank_by_default(self) -> None:
        s = Settings()
        assert s.moodle_url == ""

    def test_credentials_blank_by_default(self) -> None:
        s = Settings()
        assert s.credentials() == Credentials(username="", password="")


class TestSettingsFromEnv:
    def test_loads_credentials(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MOODLE_USER", "teacher")
        monkeypatch.setenv("MOODLE_PASSWORD", "s3cret")
        s = Settings()
        assert s.credentials() == Credentials(username="teacher", password="s3cret")

    def test_loads_moodle_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MOODLE_URL", "https://lms.school.test")
        s = Settings()
        assert s.moodle_url == "https://lms.school.test"

    def test_loads_from_dotenv_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("MOODLE_USER=from-file\nCOMPILE_CONCURRENCY=4\n")
        s = Settings()
        assert s.moodle_user == "from-file"
        assert s.compile_concurrency == 4


class TestSettingsValidation:
    def test_invalid_timeout_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "soon")
        with pytest.raises(ValidationError):
            Settings()


class TestRequireCredentials:
    def test_returns_credentials_when_present(self) -> None:
        s = Settings(moodle_user="teacher", moodle_password="pw")
        assert s.require_credentials() == Credentials(username="teacher", password="pw")

    def test_names_missing_user(self) -> None:
        s = Settings(moodle_password="pw")
        with pytest.raises(ConfigurationError, match="MOODLE_USER"):
            s.require_credentials()

    def test_names_both_when_both_missing(self) -> None:
        s = Settings()
        with pytest.raises(ConfigurationError, match="MOODLE_USER, MOODLE_PASSWORD"):
            s.require_credentials()

    def test_whitespace_only_counts_as_missing(self) -> None:
        s = Settings(moodle_user="teacher", moodle_password="   ")
        with pytest.raises(ConfigurationError, match="MOODLE_PASSWORD"):
            s.require_credentials()


class TestCredentials:
    def test_complete(self) -> None:
        assert Credentials(username="a", password="b").is_complete

    def test_incomplete(self) -> None:
        assert not Credentials(username="a", password="").is_complete
