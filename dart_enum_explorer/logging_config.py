"""Logging setup for dart_enum_explorer.

Library modules obtain loggers through :func:`get_logger` and never install
handlers themselves. The CLI calls :func:`setup_logging` once at startup.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "dart_enum_explorer"

LOG_FORMAT = "%(message)s"
FILE_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the package logger hierarchy.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger named ``name`` if it already lives under the package root,
        otherwise a child of the package root logger.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(
    level: str | int = "WARNING",
    log_file: str | Path | None = None,
) -> logging.Logger:
    """Configure console (and optionally file) logging for the package.

    Args:
        level: Log level name or number.
        log_file: Optional path of a plain-text log file.

    Returns:
        The configured package root logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    # Re-running setup must not stack handlers
    for handler in list(root.handlers):
        if not isinstance(handler, logging.NullHandler):
            root.removeHandler(handler)
            handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        root.addHandler(file_handler)

    root.propagate = False
    return root
