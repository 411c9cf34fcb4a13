"""loguru setup shared by the app, the CLI entry point and the tests."""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_NO_CORRELATION = "-"
_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default=_NO_CORRELATION)

# Chatty third-party loggers routed through loguru
_QUIET_LOGGERS = {"werkzeug": logging.INFO, "sqlalchemy.engine": logging.WARNING}


class _InterceptHandler(logging.Handler):
    """Forward stdlib records (werkzeug, SQLAlchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        _logger.bind(correlation_id=_CORRELATION_ID.get()).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


class ContextualLogger:
    """Proxy for loguru that binds the current request's correlation id."""

    def __getattr__(self, name):  # pragma: no cover
        return getattr(_logger.bind(correlation_id=_CORRELATION_ID.get()), name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or _NO_CORRELATION)


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set(_NO_CORRELATION)


def _add_sink(sink, level: str, **options) -> None:
    _logger.add(
        sink,
        level=level,
        format=_FMT,
        backtrace=False,
        diagnose=False,
        filter=sanitize_record,
        **options,
    )


def setup_logging(level: str | None = None, *, log_file: Path | str | None = None) -> None:
    """(Re)configure sinks; safe to call once per app instance."""
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()

    _logger.remove()
    _logger.configure(extra={"correlation_id": _NO_CORRELATION})
    _add_sink(sys.stderr, level, colorize=True)
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        _add_sink(str(path), level, colorize=False, enqueue=True, encoding="utf-8")

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


logger = ContextualLogger()

__all__ = [
    "logger",
    "setup_logging",
    "set_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
]
