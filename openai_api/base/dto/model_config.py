"""Pydantic DTOs validating model entries loaded from configuration files.

Purpose
-------
A models file lists the backends the fallback client may try. Entries are
validated here before they are turned into :class:`ModelReference` objects so
that typos fail at load time instead of at request time.

External dependencies: Pydantic only (no network/CLI calls).

Failure modes: invalid entries raise ``pydantic.ValidationError``.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


ModelKind = Literal["completion", "embedding"]


class ModelConfigDTO(BaseModel):
    """One model entry of a models configuration file.

    ``api_key`` may be omitted; the loader then resolves it from the
    environment.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., min_length=1)
    kind: ModelKind = "completion"
    api_key: Optional[str] = None
    api_url: Optional[str] = None
    model: Optional[str] = None


class ModelsFileDTO(BaseModel):
    """Top-level document shape: ``{"models": [...]}``."""

    model_config = ConfigDict(extra="ignore")

    models: List[ModelConfigDTO] = Field(default_factory=list)


__all__ = ["ModelKind", "ModelConfigDTO", "ModelsFileDTO"]
