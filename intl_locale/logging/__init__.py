"""Structured logging for intl_locale."""

from .redaction import TagRedactor
from .structured import LogLevel, StructuredLogger, create_logger

__all__ = [
    "StructuredLogger",
    "LogLevel",
    "create_logger",
    "TagRedactor",
]
