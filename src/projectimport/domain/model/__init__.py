"""Data node tree, the built-in project payloads and project model entities."""

from __future__ import annotations

from .key import Key
from .keys import KeyIndex, ProjectKeys, UnknownKeyError, builtin_key_index
from .node import DataNode
from .project import (
    DependencyScope,
    ExternalEntityData,
    LibraryData,
    LibraryDependencyData,
    LibraryLevel,
    ModuleData,
    ProjectData,
)
from .workspace import Library, LibraryOrderEntry, Module

__all__ = [
    "DataNode",
    "DependencyScope",
    "ExternalEntityData",
    "Key",
    "KeyIndex",
    "Library",
    "LibraryData",
    "LibraryDependencyData",
    "LibraryLevel",
    "LibraryOrderEntry",
    "Module",
    "ModuleData",
    "ProjectData",
    "ProjectKeys",
    "UnknownKeyError",
    "builtin_key_index",
]
