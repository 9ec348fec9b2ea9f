"""Logging for the ``careerflow`` logger tree.

Modules log through ``logging.getLogger("careerflow.<area>")``; this module
attaches the handlers once, at the top of that tree. Records go to a rotating
``careerflow.log`` under the configured log directory and, unless disabled,
to a console stream.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from careerflow.config import LoggingConfig

ROOT_LOGGER = "careerflow"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: Union[int, str]) -> int:
    """Accept a level number or a name such as "debug" or "WARNING"."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def _detach_handlers(logger: logging.Logger):
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _file_handler(log_dir: str, settings: LoggingConfig) -> logging.Handler:
    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path / settings.file_name,
        maxBytes=settings.max_bytes,
        backupCount=settings.backup_count,
        encoding="utf-8",
    )


def setup_logging(
    log_dir: str = "logs",
    level: Optional[Union[int, str]] = None,
    stream=None,
    settings: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """(Re)configure the ``careerflow`` logger and return it.

    ``level`` overrides ``settings.level``; an unknown level name falls back
    to INFO with a warning. Console output goes to ``stream``, or stdout when
    none is given. Calling this again replaces the previous handlers.
    """
    settings = settings or LoggingConfig()
    problem = None
    try:
        resolved = resolve_level(settings.level if level is None else level)
    except ValueError as e:
        resolved, problem = logging.INFO, str(e)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(resolved)
    _detach_handlers(logger)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [_file_handler(log_dir, settings)]
    if settings.console:
        handlers.append(logging.StreamHandler(stream or sys.stdout))
    for handler in handlers:
        handler.setLevel(resolved)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if problem:
        logger.warning("%s, logging at INFO", problem)
    return logger
