"""Interfaces the import engine consumes: data services and the models provider."""

from __future__ import annotations

from .data_service import OrphanSupplier, ProjectDataService
from .models_provider import ModelsProviderFactory, ModifiableModelsProvider

__all__ = [
    "ModelsProviderFactory",
    "ModifiableModelsProvider",
    "OrphanSupplier",
    "ProjectDataService",
]
