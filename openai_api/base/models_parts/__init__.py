"""Models parts package public surface.

Re-exports individual value objects so callers can import from
`openai_api.base.models_parts` if needed, while `openai_api.base.models`
remains the primary stable import path.
"""

from .model_reference import ModelReference

__all__ = ["ModelReference"]
