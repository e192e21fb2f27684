"""
Client Base Package

Exports the building blocks shared by the OpenAI-style clients:
- Errors: the ``APIError`` taxonomy and its classifiers
- Models: the ``ModelReference`` value object
- Streaming: the SSE decoder and the delta merger
- Resilience: the sequential multi-model fallback policy
- Infrastructure: timeouts, pooled HTTP clients, structured logging
"""

from .errors import (
    APIError,
    ErrorKind,
    classify_response,
    classify_transport_error,
    parse_error_body,
    raise_for_response,
)
from .models import ModelReference
from .timeouts import TimeoutConfig, get_timeout_config, httpx_timeout
from .http import get_httpx_client, close_all_clients
from .logging import LogContext, get_logger, log_event, normalized_log_event
from .streaming import ServerSentEvent, SSEDecoder, StreamMerger, iter_sse_events, merge_stream
from .resilience import FALLBACK_ERROR_KINDS, run_with_fallback

__all__ = [
    # Errors
    "APIError",
    "ErrorKind",
    "classify_response",
    "classify_transport_error",
    "parse_error_body",
    "raise_for_response",
    # Models
    "ModelReference",
    # Infrastructure
    "TimeoutConfig",
    "get_timeout_config",
    "httpx_timeout",
    "get_httpx_client",
    "close_all_clients",
    "LogContext",
    "get_logger",
    "log_event",
    "normalized_log_event",
    # Streaming
    "ServerSentEvent",
    "SSEDecoder",
    "StreamMerger",
    "iter_sse_events",
    "merge_stream",
    # Resilience
    "FALLBACK_ERROR_KINDS",
    "run_with_fallback",
]
