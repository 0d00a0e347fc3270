import logging

from rich.console import Console
from rich.logging import RichHandler


class Log:
    """Centralized logging rendered by rich on stderr.

    Stdout is reserved for the menus, spinners and the report table, so log
    records go to a separate stderr console and never tear a live status line.
    """

    _logger: logging.Logger = logging.getLogger("moodle_cli")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach the stderr handler once."""
        cls._logger.setLevel(log_level.upper())
        cls._logger.propagate = False
        if not any(isinstance(h, RichHandler) for h in cls._logger.handlers):
            handler = RichHandler(
                console=Console(stderr=True),
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
            handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
