"""Per-request context merged into every structured log event.

A :class:`LogContext` is created when a request starts (model display name
and endpoint) and refined with :meth:`LogContext.bind` once the server
returns identifiers such as the completion id.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LogContext:
    """Fields shared by every event of one request."""

    model: Optional[str] = None
    endpoint: Optional[str] = None
    request_id: Optional[str] = None
    response_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def bind(self, **values: Any) -> "LogContext":
        """Return a copy with known fields replaced and the rest added to ``extra``."""
        known = {f.name for f in fields(self)} - {"extra"}
        updates = {k: v for k, v in values.items() if k in known}
        extra = {**self.extra, **{k: v for k, v in values.items() if k not in known}}
        return replace(self, extra=extra, **updates)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into a mapping; ``None`` values are dropped."""
        out = {
            "model": self.model,
            "endpoint": self.endpoint,
            "request_id": self.request_id,
            "response_id": self.response_id,
        }
        out.update(self.extra)
        return {k: v for k, v in out.items() if v is not None}


__all__ = ["LogContext"]
