"""Unified timeout configuration for API clients.

This module centralizes the per-call-kind timeout values used by the HTTP
client pool. Chat completions (including streams) get a long read timeout
because generation can take minutes; embeddings get short timeouts.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values in seconds.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and whenever the relevant variables change. Supported
    environment variables (all optional, positive floats):
        OPENAI_API_CHAT_CONNECT_TIMEOUT
        OPENAI_API_CHAT_READ_TIMEOUT
        OPENAI_API_EMBED_CONNECT_TIMEOUT
        OPENAI_API_EMBED_READ_TIMEOUT

httpx_timeout(purpose)
    Builds the ``httpx.Timeout`` for a pool purpose (``chat``, ``stream`` or
    ``embedding``).

Failure Modes
-------------
Invalid or non-positive overrides are ignored and the default is kept.
Expired timeouts surface from ``httpx`` as ``httpx.TimeoutException`` and are
classified as :attr:`ErrorKind.TIMEOUT` by the clients.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx

from ..config.defaults import (
    CHAT_CONNECT_TIMEOUT_SECONDS,
    CHAT_READ_TIMEOUT_SECONDS,
    EMBEDDING_CONNECT_TIMEOUT_SECONDS,
    EMBEDDING_READ_TIMEOUT_SECONDS,
)

_ENV_NAMES = (
    "OPENAI_API_CHAT_CONNECT_TIMEOUT",
    "OPENAI_API_CHAT_READ_TIMEOUT",
    "OPENAI_API_EMBED_CONNECT_TIMEOUT",
    "OPENAI_API_EMBED_READ_TIMEOUT",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        chat_connect_seconds: Connection timeout for chat and stream requests.
        chat_read_seconds: Read timeout for chat and stream requests; for
            streams it bounds the wait for each chunk.
        embedding_connect_seconds: Connection timeout for embedding requests.
        embedding_read_seconds: Read timeout for embedding requests.
    """

    chat_connect_seconds: float = CHAT_CONNECT_TIMEOUT_SECONDS
    chat_read_seconds: float = CHAT_READ_TIMEOUT_SECONDS
    embedding_connect_seconds: float = EMBEDDING_CONNECT_TIMEOUT_SECONDS
    embedding_read_seconds: float = EMBEDDING_READ_TIMEOUT_SECONDS


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`.

    The cache is refreshed when any of the override variables changes so tests
    can adjust values at runtime with ``monkeypatch.setenv``.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED

    _CACHED = TimeoutConfig(
        chat_connect_seconds=_parse_env_float("OPENAI_API_CHAT_CONNECT_TIMEOUT", CHAT_CONNECT_TIMEOUT_SECONDS),
        chat_read_seconds=_parse_env_float("OPENAI_API_CHAT_READ_TIMEOUT", CHAT_READ_TIMEOUT_SECONDS),
        embedding_connect_seconds=_parse_env_float(
            "OPENAI_API_EMBED_CONNECT_TIMEOUT", EMBEDDING_CONNECT_TIMEOUT_SECONDS
        ),
        embedding_read_seconds=_parse_env_float("OPENAI_API_EMBED_READ_TIMEOUT", EMBEDDING_READ_TIMEOUT_SECONDS),
    )
    _ENV_GUARD = guard
    return _CACHED


def httpx_timeout(purpose: str) -> httpx.Timeout:
    """Return the ``httpx.Timeout`` for a client pool purpose.

    ``embedding`` uses the short embedding values; any other purpose (``chat``,
    ``stream``) uses the chat values.
    """
    cfg = get_timeout_config()
    if purpose == "embedding":
        return httpx.Timeout(cfg.embedding_read_seconds, connect=cfg.embedding_connect_seconds)
    return httpx.Timeout(cfg.chat_read_seconds, connect=cfg.chat_connect_seconds)


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "httpx_timeout",
]
