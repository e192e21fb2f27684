"""Unified API error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``openai_api.base.errors_parts`` to maintain a stable import path while
enforcing the one-class-per-file governance rule.
"""

from .errors_parts.error_kind import ErrorKind
from .errors_parts.api_error import APIError
from .errors_parts.classification import (
    ERROR_DETAILS_UNAVAILABLE,
    classify_response,
    classify_transport_error,
    parse_error_body,
    raise_for_response,
)

__all__ = [
    "ErrorKind",
    "APIError",
    "ERROR_DETAILS_UNAVAILABLE",
    "classify_response",
    "classify_transport_error",
    "parse_error_body",
    "raise_for_response",
]
