r"""Structured log records for the dispatcher and the pagination engine.

Request and response records carry their fields (method, URL, status
code, host) through the ``extra`` mechanism of ``logging``.
``StructuredFormatter`` renders them as one JSON object per line, plain
formatters ignore them.

Every paginated operation runs inside a ``correlation_scope``, so the
records of all its pages share one ``correlation_id``. Callers can set
their own identifier beforehand with ``set_correlation_id``; the scope
then keeps it.

Example:
    ```python
    import logging
    from restcore.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logging.getLogger("restcore").addHandler(handler)
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "correlation_scope",
    "get_correlation_id",
    "log_structured",
    "redact_headers",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
import uuid
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "restcore_correlation_id", default=None
)

# Attributes of logging.LogRecord itself, never rendered as extra fields
_RECORD_ATTRIBUTES = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "msecs",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
    }
)

_SENSITIVE_HEADERS = frozenset({"authorization", "proxy-authorization"})


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> contextvars.Token[str | None]:
    """Attach ``correlation_id`` to the records logged from the current
    context.

    Returns:
        The token restoring the previous identifier.

    Example:
        ```pycon
        >>> from restcore.utils.structured_logging import (
        ...     clear_correlation_id,
        ...     get_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> _ = set_correlation_id("list-legs-42")
        >>> get_correlation_id()
        'list-legs-42'
        >>> clear_correlation_id()

        ```
    """
    return _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    _correlation_id.set(None)


@contextmanager
def correlation_scope() -> Iterator[str]:
    """Run a block under one correlation identifier.

    The identifier already set in the context is reused. Otherwise a
    new one is generated for the block and removed when it exits.

    Yields:
        The correlation identifier of the block.

    Example:
        ```pycon
        >>> from restcore.utils.structured_logging import correlation_scope, get_correlation_id
        >>> with correlation_scope() as correlation_id:
        ...     get_correlation_id() == correlation_id
        ...
        True
        >>> get_correlation_id() is None
        True

        ```
    """
    current = _correlation_id.get()
    if current is not None:
        yield current
        return
    correlation_id = uuid.uuid4().hex
    token = set_correlation_id(correlation_id)
    try:
        yield correlation_id
    finally:
        _correlation_id.reset(token)


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of ``headers`` with credential values masked.

    Example:
        ```pycon
        >>> from restcore.utils.structured_logging import redact_headers
        >>> redact_headers({"Authorization": "Bearer abc", "Accept": "*/*"})
        {'Authorization': '[REDACTED]', 'Accept': '*/*'}

        ```
    """
    return {
        key: "[REDACTED]" if key.lower() in _SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


class StructuredFormatter(logging.Formatter):
    """Render log records as JSON lines.

    Each line holds ``timestamp`` (UTC, ISO 8601 with milliseconds),
    ``level``, ``logger``, ``message``, the origin of the record
    (``module``, ``function``, ``line``), the ``correlation_id`` when one
    is set, the formatted ``exception`` if any, and every field passed
    through ``extra``. Values JSON cannot encode are rendered with
    ``str``.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from restcore.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doctest_formatter")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Received response", extra={"status_code": 200})
        >>> '"status_code": 200' in stream.getvalue()
        True

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        correlation_id = get_correlation_id()
        if correlation_id is not None:
            log_data["correlation_id"] = correlation_id
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        log_data.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRIBUTES
        )
        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        # datefmt is ignored, timestamps are always ISO 8601 in UTC
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(logger: logging.Logger, level: int, message: str, **extra: Any) -> None:
    """Log ``message`` with ``extra`` as structured fields."""
    logger.log(level, message, extra=extra)
