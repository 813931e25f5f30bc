"""Logging configuration for the formlogic CLI.

The library only creates module loggers; handlers are installed here and
only by the CLI. Output goes to stderr through rich so it does not mix
with tables printed on stdout.
"""

import logging
from logging.config import dictConfig

from rich.console import Console

stderr_console = Console(stderr=True)


def _dict_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": "%(name)s: %(message)s"},
        },
        "handlers": {
            "console": {
                "class": "rich.logging.RichHandler",
                "level": level,
                "formatter": "default",
                "console": "ext://formlogic.logging_setup.stderr_console",
                "show_path": False,
                "rich_tracebacks": True,
            }
        },
        "root": {"level": level, "handlers": ["console"]},
    }


def configure_logging(level: str = "WARNING") -> None:
    """Configure logging once.

    If the root logger already has handlers, only adjust its level so
    repeated calls never add duplicate handlers.
    """
    level = level.upper()
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return
    dictConfig(_dict_config(level))
