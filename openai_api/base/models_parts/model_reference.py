"""
Model reference value object.

A :class:`ModelReference` identifies one backend: a display name, the
credential sent as a Bearer token, an optional endpoint override and an
optional model identifier (injected into embedding requests). Clients only
read it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class ModelReference:
    """Immutable identity used to target one backend.

    Attributes:
        name: Display name used in logs and error messages.
        api_key: Opaque credential sent as ``Authorization: Bearer``.
        api_url: Full endpoint URL; ``None`` selects the client's default.
        model: Model identifier for request bodies (e.g.
            ``"text-embedding-ada-002"``).
    """

    name: str
    api_key: str
    api_url: Optional[str] = None
    model: Optional[str] = None

    @classmethod
    def from_configuration(cls, name: str, configuration: Mapping[str, Any]) -> "ModelReference":
        """Build a reference from a ``configuration`` mapping.

        Reads the ``api_key``, ``model`` and ``api_url`` keys; unknown keys are
        ignored.
        """
        return cls(
            name=name,
            api_key=str(configuration.get("api_key") or ""),
            api_url=configuration.get("api_url"),
            model=configuration.get("model"),
        )

    def __repr__(self) -> str:
        return f"ModelReference(name={self.name!r}, api_url={self.api_url!r}, model={self.model!r})"


__all__ = ["ModelReference"]
