"""Resilience policies for the client layer."""

from .fallback import FALLBACK_ERROR_KINDS, NO_MODELS_AVAILABLE, run_with_fallback

__all__ = ["FALLBACK_ERROR_KINDS", "NO_MODELS_AVAILABLE", "run_with_fallback"]
