r"""Utility functions shared by the dispatcher and the pagination
engine."""

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

from restcore.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    correlation_scope,
    get_correlation_id,
    log_structured,
    redact_headers,
    set_correlation_id,
)
