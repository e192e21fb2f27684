"""Formatter and request context used by :mod:`openai_api.base.logging`."""

from .logging_context import LogContext
from .json_formatter import ISO, JsonFormatter

__all__ = ["LogContext", "JsonFormatter", "ISO"]
