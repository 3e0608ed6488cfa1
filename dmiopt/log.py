"""
Logging setup for dmiopt.

Modules log through ``logging.getLogger(__name__)`` under the "dmiopt"
logger. setup_logging() attaches a Rich console handler (WARNING and up by
default) and, when a path is configured, a plain file handler that keeps
everything down to DEBUG.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from . import config

__all__ = ['setup_logging']


def setup_logging(
    name: str = config.LOGGER_NAME,
    console_level: Union[int, str, None] = None,
    log_file: Union[str, Path, None] = None,
) -> logging.Logger:
    """
    Configure and return the package logger.

    console_level defaults to $DMIOPT_LOG_LEVEL (or WARNING); log_file
    defaults to $DMIOPT_LOG_FILE. Calling again is a no-op once handlers
    are attached.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    if console_level is None:
        console_level = config.console_level()
    ch = RichHandler(
        console=Console(stderr=True),
        level=console_level,
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    logger.addHandler(ch)

    log_file = log_file or config.log_file()
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(config.FILE_LOG_FORMAT,
                                          datefmt=config.FILE_LOG_DATEFMT))
        logger.addHandler(fh)
        logger.debug("Log file: %s", path)

    return logger
