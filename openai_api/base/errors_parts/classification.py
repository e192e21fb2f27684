"""
Error classification helpers mapping HTTP outcomes to :class:`APIError`.

Two entry points exist:

- :func:`classify_response` inspects a non-success status code together with
  the response body and selects the error kind from the status table,
  refining 400 and 404 responses by the ``error.code`` discriminator.
- :func:`classify_transport_error` maps ``httpx`` transport exceptions
  (connection failures, timeouts and body decoding failures) which never
  reach the status table.

Both return the error instead of raising so callers decide how to chain it.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, NoReturn, Optional, Union

import httpx

from .api_error import APIError
from .error_kind import ErrorKind

ERROR_DETAILS_UNAVAILABLE = "Error details not available"

Body = Union[bytes, str, None]


def _body_text(body: Body) -> str:
    """Return the raw body as text, replacing undecodable bytes."""
    if body is None:
        return ""
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def parse_error_body(body: Body) -> Any:
    """Extract the ``error`` member from an error response body.

    Returns:
        ``""`` when the body is empty, the ``error`` member (or ``""`` when the
        object has none) for a JSON object, and
        :data:`ERROR_DETAILS_UNAVAILABLE` when the body is not a JSON object.
    """
    text = _body_text(body)
    if not text.strip():
        return ""
    try:
        data = json.loads(text)
    except ValueError:
        return ERROR_DETAILS_UNAVAILABLE
    if not isinstance(data, dict):
        return ERROR_DETAILS_UNAVAILABLE
    error = data.get("error")
    return "" if error is None else error


def _error_code(details: Any) -> Optional[str]:
    if isinstance(details, dict):
        code = details.get("code")
        return code if isinstance(code, str) else None
    return None


def _content_filters(details: Any) -> Optional[Any]:
    """Return content filter results from Azure or flat error shapes."""
    if not isinstance(details, dict):
        return None
    inner = details.get("innererror")
    if isinstance(inner, dict) and inner.get("content_filter_result") is not None:
        return inner["content_filter_result"]
    return details.get("content_filter_result")


def _bad_request(status: int, details: Any, text: str, model: Optional[str]) -> APIError:
    if _error_code(details) == "content_filter":
        return APIError(
            kind=ErrorKind.CONTENT_FILTER,
            message=f"Content filter triggered: \n{details}",
            status=status,
            details=details,
            body=text,
            content_filters=_content_filters(details),
            model=model,
        )
    return APIError(
        kind=ErrorKind.INVALID_REQUEST,
        message=f"Invalid request: \n{details}",
        status=status,
        details=details,
        body=text,
        model=model,
    )


def _not_found(status: int, details: Any, text: str, model: Optional[str]) -> APIError:
    if _error_code(details) == "DeploymentNotFound":
        return APIError(
            kind=ErrorKind.DEPLOYMENT_NOT_FOUND,
            message=f"Deployment not found: \n{details}",
            status=status,
            details=details,
            body=text,
            model=model,
        )
    return APIError(
        kind=ErrorKind.NOT_FOUND,
        message=f"Resource not found: \n{details}",
        status=status,
        details=details,
        body=text,
        model=model,
    )


def _authentication(status: int, details: Any, text: str, model: Optional[str]) -> APIError:
    return APIError(
        kind=ErrorKind.AUTHENTICATION,
        message=f"Invalid API key: \n{details}",
        status=status,
        details=details,
        body=text,
        model=model,
    )


def _rate_limit(status: int, details: Any, text: str, model: Optional[str]) -> APIError:
    return APIError(
        kind=ErrorKind.RATE_LIMIT,
        message=f"Rate limit exceeded: \n{details}",
        status=status,
        details=details,
        body=text,
        model=model,
    )


_STATUS_HANDLERS: Dict[int, Callable[[int, Any, str, Optional[str]], APIError]] = {
    400: _bad_request,
    401: _authentication,
    404: _not_found,
    429: _rate_limit,
}


def classify_response(status: int, body: Body = None, model: Optional[str] = None) -> APIError:
    """Classify a non-success HTTP response into an :class:`APIError`.

    Parameters:
        status: HTTP status code of the response.
        body: Raw response body (bytes or text); may be empty or not JSON.
        model: Optional model display name recorded on the error.

    Returns:
        The classified error. Unmapped statuses yield
        :attr:`ErrorKind.UNEXPECTED_RESPONSE` whose message includes the
        status and, when non-empty, the raw body.
    """
    text = _body_text(body)
    details = parse_error_body(body)
    handler = _STATUS_HANDLERS.get(status)
    if handler is not None:
        return handler(status, details, text, model)
    message = f"Unexpected response from API: \n{status}"
    if text.strip():
        message += f" - {text}"
    return APIError(
        kind=ErrorKind.UNEXPECTED_RESPONSE,
        message=message,
        status=status,
        details=details,
        body=text,
        model=model,
    )


def raise_for_response(status: int, body: Body = None, model: Optional[str] = None) -> NoReturn:
    """Raise the :class:`APIError` produced by :func:`classify_response`."""
    raise classify_response(status, body, model)


def classify_transport_error(exc: Exception, model: Optional[str] = None) -> APIError:
    """Map an ``httpx`` request exception to a connection, timeout or decoding error.

    Timeouts (connect, read, write, pool) are checked first because
    ``httpx.ConnectTimeout`` is a timeout rather than a connection failure.
    ``httpx.DecodingError`` (a body whose content-encoding cannot be decoded)
    is classified as an unexpected response.
    """
    if isinstance(exc, httpx.DecodingError):
        return APIError(
            kind=ErrorKind.UNEXPECTED_RESPONSE,
            message=f"Response body could not be decoded: {exc}",
            model=model,
            raw=exc,
        )
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return APIError(
            kind=ErrorKind.TIMEOUT,
            message=f"API request timed out: {exc}",
            model=model,
            raw=exc,
        )
    return APIError(
        kind=ErrorKind.CONNECTION,
        message=f"Connection to API failed: {exc}",
        model=model,
        raw=exc,
    )


__all__ = [
    "ERROR_DETAILS_UNAVAILABLE",
    "classify_response",
    "classify_transport_error",
    "parse_error_body",
    "raise_for_response",
]
