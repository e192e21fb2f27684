"""openai_api.config.defaults
==========================

Central place for small, stable default values used across the openai_api
package. These defaults can be overridden via environment variables or a
models configuration file, but provide sensible fallbacks for local
development and tests.

This module intentionally avoids importing from other openai_api packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Endpoints ----
OPENAI_CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"
OPENAI_EMBEDDINGS_URL = "https://api.openai.com/v1/embeddings"

# ---- Models ----
OPENAI_DEFAULT_CHAT_MODEL = "gpt-4o"
OPENAI_DEFAULT_EMBEDDING_MODEL = "text-embedding-ada-002"

# ---- Timeouts (seconds) ----
# Chat completions may generate for minutes; embeddings should answer quickly.
CHAT_CONNECT_TIMEOUT_SECONDS = 60.0
CHAT_READ_TIMEOUT_SECONDS = 300.0
EMBEDDING_CONNECT_TIMEOUT_SECONDS = 10.0
EMBEDDING_READ_TIMEOUT_SECONDS = 60.0

# ---- Streaming ----
END_OF_STREAM_MARKER = "[DONE]"


__all__ = [
    "OPENAI_CHAT_COMPLETIONS_URL",
    "OPENAI_EMBEDDINGS_URL",
    "OPENAI_DEFAULT_CHAT_MODEL",
    "OPENAI_DEFAULT_EMBEDDING_MODEL",
    "CHAT_CONNECT_TIMEOUT_SECONDS",
    "CHAT_READ_TIMEOUT_SECONDS",
    "EMBEDDING_CONNECT_TIMEOUT_SECONDS",
    "EMBEDDING_READ_TIMEOUT_SECONDS",
    "END_OF_STREAM_MARKER",
]
