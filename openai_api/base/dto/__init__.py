"""DTO validation package for client configuration."""

from .model_config import ModelKind, ModelConfigDTO, ModelsFileDTO

__all__ = [
    "ModelKind",
    "ModelConfigDTO",
    "ModelsFileDTO",
]
