"""
Normalized API error kinds (taxonomy).

Defines the `ErrorKind` enumeration carried by every :class:`APIError`. Values
are lowercase snake_case and are considered a stable public contract for
logging and for callers branching on failure categories.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Enumerated error kinds representing failure categories."""

    CONNECTION = "connection"
    TIMEOUT = "timeout"
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    NOT_FOUND = "not_found"
    DEPLOYMENT_NOT_FOUND = "deployment_not_found"
    INVALID_REQUEST = "invalid_request"
    CONTENT_FILTER = "content_filter"
    UNEXPECTED_RESPONSE = "unexpected_response"


__all__ = ["ErrorKind"]
