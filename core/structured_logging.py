"""Structured logging helpers with run and source-file context."""

from __future__ import annotations

import contextvars
import logging
import sys
import uuid
from contextlib import contextmanager
from typing import Iterator

_RUN_ID_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "run_id", default="-"
)
_SOURCE_FILE_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "source_file", default="-"
)

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | run_id=%(run_id)s | file=%(source_file)s | "
    "%(name)s | %(message)s"
)


class _OutlineContextFilter(logging.Filter):
    """Inject run id and current source file into all log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID_VAR.get("-")
        record.source_file = _SOURCE_FILE_VAR.get("-")
        return True


def _ensure_filter_on_root_handlers() -> None:
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        has_filter = any(isinstance(f, _OutlineContextFilter) for f in handler.filters)
        if not has_filter:
            handler.addFilter(_OutlineContextFilter())


def configure_structured_logging(level: int = logging.INFO) -> None:
    """Configure root logging on stderr with run/file context.

    stdout is left untouched so it can carry the rendered outline.
    """
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    else:
        root_logger.setLevel(level)
        formatter = logging.Formatter(LOG_FORMAT)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)
    _ensure_filter_on_root_handlers()


def set_run_id(run_id: str | None = None) -> str:
    """Set or generate run correlation ID."""
    value = run_id or uuid.uuid4().hex[:12]
    _RUN_ID_VAR.set(value)
    return value


def get_run_id() -> str:
    """Get current run correlation ID."""
    return _RUN_ID_VAR.get("-")


def get_source_file() -> str:
    """Get the source file currently being scanned, or ``-``."""
    return _SOURCE_FILE_VAR.get("-")


@contextmanager
def file_scope(path: str) -> Iterator[None]:
    """Temporarily tag emitted logs with the file being scanned."""
    token = _SOURCE_FILE_VAR.set(path)
    try:
        yield
    finally:
        _SOURCE_FILE_VAR.reset(token)
