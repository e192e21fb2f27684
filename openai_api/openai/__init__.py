"""
OpenAI-style client package.

Exports:
- Completion: single-model chat client (non-streaming and streaming)
- CompletionMultiModel: chat with sequential fallback across models
- Embedding: single-model embeddings client
- clean_body: trims a chat completion body to messages and usage
"""

from .completion import Completion, StreamSink
from .completion_multi_model import CompletionMultiModel
from .embedding import Embedding
from .helpers import clean_body

__all__ = ["Completion", "CompletionMultiModel", "Embedding", "StreamSink", "clean_body"]
