"""Configuration layer for model references.

Goals
-----
* Centralize defaults (endpoints, model identifiers, timeouts).
* Load the ordered list of candidate models for the fallback client from a
  JSON or YAML file pointed to by ``OPENAI_API_MODELS_FILE`` (or an explicit
  path).
* Resolve credentials from the environment when an entry omits ``api_key``.

Models File
-----------
JSON is tried first, then YAML. Structure example:

```
models:
  - name: GPT-4o (Azure)
    api_url: https://example.openai.azure.com/openai/deployments/gpt4o/chat/completions?api-version=2024-02-01
    api_key: azure-key-1
  - name: GPT-4-Turbo
    model: gpt-4-turbo
  - name: Ada2
    kind: embedding
    model: text-embedding-ada-002
```

Public API
----------
* load_model_references(path=None, kind="completion") -> list[ModelReference]
* default_model_reference(kind="completion") -> ModelReference
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json
import os

import yaml

from ..base.dto.model_config import ModelConfigDTO, ModelKind, ModelsFileDTO
from ..base.models_parts.model_reference import ModelReference
from .defaults import OPENAI_DEFAULT_CHAT_MODEL, OPENAI_DEFAULT_EMBEDDING_MODEL
from .env import resolve_api_key

MODELS_FILE_ENV = "OPENAI_API_MODELS_FILE"


def _read_document(path: Path) -> Dict[str, Any]:
    """Parse ``path`` as JSON, falling back to YAML; non-mappings become ``{}``."""
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        data = yaml.safe_load(text)
    return data if isinstance(data, dict) else {}


def _to_reference(entry: ModelConfigDTO) -> ModelReference:
    api_key = entry.api_key
    if not api_key:
        api_key, _ = resolve_api_key()
    return ModelReference(
        name=entry.name,
        api_key=api_key or "",
        api_url=entry.api_url,
        model=entry.model,
    )


def load_model_references(
    path: Optional[Union[str, Path]] = None,
    kind: Optional[ModelKind] = "completion",
) -> List[ModelReference]:
    """Return the model references declared in a models file, in file order.

    Parameters:
        path: File to read; defaults to ``$OPENAI_API_MODELS_FILE``.
        kind: Keep only entries of this kind; ``None`` keeps every entry.

    Returns:
        A possibly empty list. A missing path or file yields ``[]``.

    Raises:
        pydantic.ValidationError: When an entry is malformed.
    """
    raw_path = path if path is not None else os.getenv(MODELS_FILE_ENV)
    if not raw_path:
        return []
    p = Path(raw_path).expanduser()
    if not p.exists():
        return []
    document = ModelsFileDTO.model_validate(_read_document(p))
    return [_to_reference(entry) for entry in document.models if kind is None or entry.kind == kind]


def default_model_reference(kind: ModelKind = "completion") -> ModelReference:
    """Return a reference to the public OpenAI endpoint using the env API key."""
    api_key, _ = resolve_api_key()
    if kind == "embedding":
        return ModelReference(name="openai-embedding", api_key=api_key or "", model=OPENAI_DEFAULT_EMBEDDING_MODEL)
    return ModelReference(name="openai-chat", api_key=api_key or "", model=OPENAI_DEFAULT_CHAT_MODEL)


__all__ = [
    "MODELS_FILE_ENV",
    "load_model_references",
    "default_model_reference",
]
