"""Stable import path for client value objects."""

from .models_parts.model_reference import ModelReference

__all__ = ["ModelReference"]
