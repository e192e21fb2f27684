"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `openai_api.base.errors` for the stable surface.
"""

from .error_kind import ErrorKind
from .api_error import APIError
from .classification import (
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
