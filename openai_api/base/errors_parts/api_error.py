"""
Structured API error exception type.

A single exception class covers the whole taxonomy; the ``kind`` attribute is
the discriminant and the remaining fields carry kind-specific payload (for
example ``content_filters`` for :attr:`ErrorKind.CONTENT_FILTER`).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .error_kind import ErrorKind


@dataclass
class APIError(Exception):
    """Represents a classified API failure.

    Attributes:
        kind: :class:`ErrorKind` classification for the failure.
        message: Human-readable error message suitable for logging.
        status: HTTP status code when the failure came from a response.
        details: Parsed ``error`` member of the response body, or a placeholder
            string when the body could not be parsed.
        body: Raw response body text, when one was received.
        content_filters: Content filter results for content-filter failures.
        model: Display name of the model the request targeted.
        raw: Original transport exception for diagnostics.
    """

    kind: ErrorKind
    message: str
    status: Optional[int] = None
    details: Any = None
    body: Optional[str] = None
    content_filters: Optional[Any] = None
    model: Optional[str] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:
        """Return a compact string combining model, kind, and message."""
        return f"{self.model or '-'} {self.kind.value}: {self.message}"


__all__ = ["APIError"]
