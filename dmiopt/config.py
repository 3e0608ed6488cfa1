"""
dmiopt - Static configuration
==============================

Module-level constants shared by the parser, the CLI and the logging
setup. The two environment overrides only affect logging; option parsing
itself has no configuration beyond the command line.
"""

from __future__ import annotations

import os

# =============================================================================
#  PROGRAM IDENTITY
# =============================================================================
PROGRAM_NAME = "dmicli"
VERSION = "2.9.0"


# =============================================================================
#  MEMORY SOURCE
# =============================================================================
DEFAULT_MEM_DEV = "/dev/mem"      # used when -d/--dev-mem is not given


# =============================================================================
#  LOGGING
# =============================================================================
LOGGER_NAME = "dmiopt"
LOG_LEVEL_ENV = "DMIOPT_LOG_LEVEL"
LOG_FILE_ENV = "DMIOPT_LOG_FILE"

DEFAULT_CONSOLE_LEVEL = "WARNING"
FILE_LOG_FORMAT = (
    "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
)
FILE_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def console_level() -> str:
    """Console log level name, from $DMIOPT_LOG_LEVEL or the default."""
    return os.environ.get(LOG_LEVEL_ENV, DEFAULT_CONSOLE_LEVEL).upper()


def log_file() -> str | None:
    """Optional log file path from $DMIOPT_LOG_FILE."""
    return os.environ.get(LOG_FILE_ENV) or None
