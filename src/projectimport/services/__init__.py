"""Built-in data services for project structure keys."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from projectimport.domain.data_import import HandlerRegistry

from .library import LibraryDataService
from .library_dependency import LibraryDependencyDataService
from .module import ModuleDataService
from .project import ProjectSettingsDataService

if TYPE_CHECKING:
    from projectimport.domain.ports import ProjectDataService


def builtin_services() -> tuple[ProjectDataService[Any, Any], ...]:
    return (
        ProjectSettingsDataService(),
        ModuleDataService(),
        LibraryDataService(),
        LibraryDependencyDataService(),
    )


def default_registry(*, load_entry_points: bool = True) -> HandlerRegistry:
    """Registry with the built-in services, then any installed plugin services."""

    registry = HandlerRegistry(builtin_services())
    if load_entry_points:
        registry.load_entry_points()
    return registry


__all__ = [
    "LibraryDataService",
    "LibraryDependencyDataService",
    "ModuleDataService",
    "ProjectSettingsDataService",
    "builtin_services",
    "default_registry",
]
