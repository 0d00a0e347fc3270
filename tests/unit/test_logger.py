import logging
from collections.abc import Iterator

import pytest
from rich.logging import RichHandler

from moodle_cli.logging.logger import Log


@pytest.fixture(autouse=True)
def _restore_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("moodle_cli")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestLogConfigure:
    def test_attaches_single_stderr_rich_handler(self, _restore_logger: logging.Logger) -> None:
        Log.configure("info")
        Log.configure("debug")

        handlers = _restore_logger.handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], RichHandler)
        assert handlers[0].console.stderr
        assert _restore_logger.level == logging.DEBUG

    def test_records_stay_off_stdout(
        self, capsys: pytest.CaptureFixture[str], _restore_logger: logging.Logger
    ) -> None:
        Log.configure("WARNING")

        Log.warning("Compile failed for main.c")

        assert "Compile failed" not in capsys.readouterr().out

    def test_level_filters_messages(self, _restore_logger: logging.Logger) -> None:
        Log.configure("WARNING")

        assert not _restore_logger.isEnabledFor(logging.INFO)
        assert _restore_logger.isEnabledFor(logging.ERROR)
