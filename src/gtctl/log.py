"""
Logging setup for the `gt` command.

Level comes from --verbose, else LOG_LEVEL, else DEBUG=1; the default keeps
stderr quiet apart from warnings.
"""

import logging
import os
import sys
from typing import Optional

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_logging_configured = False


def get_log_level() -> int:
    level_str = os.environ.get("LOG_LEVEL", "").upper().strip()
    if not level_str:
        debug_flag = os.environ.get("DEBUG", "").lower().strip()
        level_str = "DEBUG" if debug_flag in ("1", "true", "yes", "on") else DEFAULT_LOG_LEVEL
    level = logging.getLevelName(level_str)
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(verbose: bool = False, level: Optional[int] = None, force: bool = False) -> logging.Logger:
    """Attach one stderr handler to the ``gtctl`` logger."""
    global _logging_configured
    logger = logging.getLogger("gtctl")
    if _logging_configured and not force:
        return logger

    if level is None:
        level = logging.DEBUG if verbose else get_log_level()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    _logging_configured = True
    return logger
