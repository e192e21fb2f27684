"""Sequential fallback across candidate models.

Purpose
-------
``run_with_fallback`` tries an operation against each candidate in order and
returns the first success. It is the only place in the package that recovers
from an :class:`APIError` locally.

Fallback semantics
------------------
- Candidates are attempted strictly one at a time, in list order; a candidate
  is only tried after the previous attempt has fully completed.
- Errors whose kind is in :data:`FALLBACK_ERROR_KINDS` (the model is
  unavailable for this request) are logged and the next candidate is tried.
- ``CONNECTION``, ``TIMEOUT`` and ``CONTENT_FILTER`` errors, and any other
  exception, propagate immediately and abort the sequence.
- An empty candidate list, or exhausting every candidate, raises
  ``APIError(NOT_FOUND, "No models available")``. Individual failures are
  reported through logging only; they are not aggregated into the final error.

Timeout strategy
----------------
No blocking work happens here; each attempt carries its own transport
timeouts.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, TypeVar

from ..errors import APIError, ErrorKind
from ..logging import LogContext, get_logger, normalized_log_event

C = TypeVar("C")
T = TypeVar("T")

NO_MODELS_AVAILABLE = "No models available"

FALLBACK_ERROR_KINDS = frozenset(
    {
        ErrorKind.NOT_FOUND,
        ErrorKind.DEPLOYMENT_NOT_FOUND,
        ErrorKind.AUTHENTICATION,
        ErrorKind.RATE_LIMIT,
        ErrorKind.INVALID_REQUEST,
        ErrorKind.UNEXPECTED_RESPONSE,
    }
)


def run_with_fallback(
    candidates: Iterable[C],
    attempt: Callable[[C], T],
    *,
    describe: Callable[[C], str] = str,
    logger: Optional[logging.Logger] = None,
) -> T:
    """Return the result of ``attempt`` for the first candidate that succeeds.

    Parameters
    ----------
    candidates: Iterable[C]
        Ordered candidates (typically :class:`ModelReference` objects).
    attempt: Callable[[C], T]
        Performs the operation for one candidate; raises :class:`APIError` on
        failure.
    describe: Callable[[C], str]
        Produces the candidate label used in log events.
    logger: Optional[logging.Logger]
        Destination for ``fallback.*`` events; defaults to the package
        fallback logger.

    Returns
    -------
    T
        The first successful result.

    Raises
    ------
    APIError
        Non-fallback errors unchanged, or ``NOT_FOUND`` with message
        ``"No models available"`` when no candidate succeeded.
    """
    log = logger or get_logger("openai_api.fallback")
    tried = 0
    for position, candidate in enumerate(candidates, start=1):
        tried = position
        try:
            return attempt(candidate)
        except APIError as e:
            if e.kind not in FALLBACK_ERROR_KINDS:
                raise
            normalized_log_event(
                log,
                "fallback.model_unavailable",
                LogContext(model=describe(candidate)),
                phase="attempt",
                attempt=position,
                emitted=False,
                error_code=e.kind.value,
                level=logging.WARNING,
                error=e.message,
                status=e.status,
            )
    normalized_log_event(
        log,
        "fallback.exhausted",
        phase="finalize",
        attempt=tried or None,
        emitted=False,
        error_code=ErrorKind.NOT_FOUND.value,
        level=logging.WARNING,
    )
    raise APIError(kind=ErrorKind.NOT_FOUND, message=NO_MODELS_AVAILABLE)


__all__ = [
    "FALLBACK_ERROR_KINDS",
    "NO_MODELS_AVAILABLE",
    "run_with_fallback",
]
