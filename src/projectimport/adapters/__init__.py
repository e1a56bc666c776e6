"""Concrete collaborators: the in-memory project model and tree loaders."""

from __future__ import annotations

from .in_memory import InMemoryModelsProvider, InMemoryProject, ProviderClosedError
from .json_tree import TreeFormatError, load_record_trees

__all__ = [
    "InMemoryModelsProvider",
    "InMemoryProject",
    "ProviderClosedError",
    "TreeFormatError",
    "load_record_trees",
]
