"""Streaming package for the client layer.

Exposes the SSE decoder and the delta merger under a single namespace.
"""

from .sse import ServerSentEvent, SSEDecoder, iter_sse_events
from .stream_merger import StreamMerger, merge_stream

__all__ = [
    "ServerSentEvent",
    "SSEDecoder",
    "iter_sse_events",
    "StreamMerger",
    "merge_stream",
]
