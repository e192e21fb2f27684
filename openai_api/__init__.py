"""openai_api package

Client-side protocol layer for OpenAI-style chat completion and embedding
APIs.

Purpose:
    Issue authenticated requests, rebuild one completion from a streamed
    sequence of deltas, classify every failure into a typed taxonomy and fall
    back across an ordered list of candidate models.

Public API (re-exported):
    - Version: ``__version__``
    - Clients: :class:`Completion`, :class:`CompletionMultiModel`,
      :class:`Embedding`
    - Streaming: :class:`StreamMerger`, :class:`SSEDecoder`
    - Errors: :class:`APIError`, :class:`ErrorKind`
    - Models: :class:`ModelReference`
    - Helpers: :func:`clean_body`, :func:`load_model_references`
"""

from .base.errors import APIError, ErrorKind
from .base.models import ModelReference
from .base.streaming import SSEDecoder, StreamMerger
from .config import load_model_references
from .openai import Completion, CompletionMultiModel, Embedding, clean_body

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "APIError",
    "ErrorKind",
    "ModelReference",
    "SSEDecoder",
    "StreamMerger",
    "Completion",
    "CompletionMultiModel",
    "Embedding",
    "clean_body",
    "load_model_references",
]
