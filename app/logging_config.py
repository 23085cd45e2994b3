"""Process-wide logging setup.

Everything goes to stdout and ``settings.log_file``. The access log keeps
its own bare stdout stream, and the song pipeline additionally writes to
``settings.pipeline_log_file`` so a generation can be traced end to end.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import sys
from pathlib import Path

from app.config.settings import Settings

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
PIPELINE_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

ACCESS_LOGGER = "app.middleware.structured"
PIPELINE_LOGGER = "app.pipelines.song"

QUIET_LOGGERS = (
    "botocore",
    "boto3",
    "urllib3",
    "httpx",
    "httpcore",
    "sqlalchemy.engine",
)


def _rotating_file(path: str, max_bytes: int, fmt: str) -> RotatingFileHandler:
    log_path = Path(path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=5, encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _stdout(fmt: str) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _reset(name: str, *handlers: logging.Handler, level: int = logging.INFO) -> logging.Logger:
    target = logging.getLogger(name)
    target.handlers.clear()
    for handler in handlers:
        target.addHandler(handler)
    target.setLevel(level)
    return target


def configure_logging(settings: Settings) -> None:
    """Install handlers; safe to call more than once."""

    _reset(
        "",
        _stdout(DEFAULT_FORMAT),
        _rotating_file(settings.log_file, 1_000_000, DEFAULT_FORMAT),
        level=logging.DEBUG if settings.debug else logging.INFO,
    )

    # ANSI-colored access lines; kept out of the root handlers.
    _reset(ACCESS_LOGGER, _stdout("%(message)s")).propagate = False

    _reset(PIPELINE_LOGGER, _rotating_file(settings.pipeline_log_file, 500_000, PIPELINE_FORMAT))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["configure_logging"]
