"""Application logging to a rotating file under the platform log dir.

Nothing is written to the terminal; commands talk to the user through the
Rich console. Set ``TASKDECK_LOG_LEVEL`` (e.g. ``INFO``) to log less.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

LOGGER_NAME = "taskdeck_cli"
LOG_FILE_NAME = "taskdeck.log"
LEVEL_ENV_VAR = "TASKDECK_LOG_LEVEL"

_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    return Path(user_log_dir(LOGGER_NAME)) / LOG_FILE_NAME


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def _configured_level() -> int:
    name = os.environ.get(LEVEL_ENV_VAR, "DEBUG").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.DEBUG


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the application logger, or its ``component`` child.

    The file handler is attached on first use; children such as
    ``get_logger("sqlite")`` write through it as ``taskdeck_cli.sqlite``.
    """
    global _logger
    if _logger is None:
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(_configured_level())
        if not logger.handlers:
            logger.addHandler(_file_handler(log_file_path()))
        logger.propagate = False
        _logger = logger
    return _logger.getChild(component) if component else _logger
