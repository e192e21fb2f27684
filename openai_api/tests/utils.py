"""Shared helpers for building mock API responses in tests."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Iterator


def sse_body(events: Iterable[Dict[str, Any]], done: bool = True) -> bytes:
    """Render ``events`` as a complete SSE response body."""
    parts = [f"data: {json.dumps(event)}\n\n" for event in events]
    if done:
        parts.append("data: [DONE]\n\n")
    return "".join(parts).encode("utf-8")


def split_every(data: bytes, size: int) -> Iterator[bytes]:
    """Yield ``data`` in slices of ``size`` bytes."""
    for start in range(0, len(data), size):
        yield data[start : start + size]


def chat_body(content: str = "Hello!", usage: Dict[str, int] | None = None) -> Dict[str, Any]:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "model": "gpt-4o",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
        "usage": usage or {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }


def error_body(code: str | None, message: str = "boom") -> Dict[str, Any]:
    error: Dict[str, Any] = {"message": message}
    if code is not None:
        error["code"] = code
    return {"error": error}


__all__ = ["sse_body", "split_every", "chat_body", "error_body"]
