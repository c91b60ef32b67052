"""Logging building blocks (formatter, context) used by base.logging."""

from .json_formatter import TIMESTAMP_FORMAT, JsonFormatter
from .logging_context import LogContext

__all__ = ["JsonFormatter", "TIMESTAMP_FORMAT", "LogContext"]
