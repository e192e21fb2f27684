"""openai_api.config.env
=====================

Environment variable helpers for credentials.

Purpose
-------
- Provide a single source of truth for the environment variable names that
  may hold the API key (canonical first, then aliases).
- Detect placeholder values so that example ``.env`` files never leak into
  real requests.

Failure Modes
-------------
Helpers never raise on unset variables; they return ``None`` and callers
decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Optional, Tuple

# Canonical name first; Azure deployments commonly export the second.
API_KEY_ENV_NAMES: Tuple[str, ...] = ("OPENAI_API_KEY", "AZURE_OPENAI_API_KEY")


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def resolve_api_key() -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-empty, non-placeholder
        candidate, or ``(None, None)`` when nothing usable is set.
    """
    for name in API_KEY_ENV_NAMES:
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "API_KEY_ENV_NAMES",
    "is_placeholder",
    "resolve_api_key",
]
