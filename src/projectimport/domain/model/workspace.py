"""Entities of the modifiable project model that data services write into."""

from __future__ import annotations

from dataclasses import dataclass, field

from .project import DependencyScope, LibraryLevel


@dataclass(eq=False, kw_only=True)
class Library:
    name: str
    external_system_id: str | None = None
    linked_project_path: str | None = None
    paths: list[str] = field(default_factory=list[str])
    unresolved: bool = False


@dataclass(eq=False, kw_only=True)
class LibraryOrderEntry:
    """Dependency of a module on a project- or module-level library."""

    library_name: str
    level: LibraryLevel = LibraryLevel.PROJECT
    scope: DependencyScope = DependencyScope.COMPILE
    exported: bool = False
    module_library: Library | None = None


@dataclass(eq=False, kw_only=True)
class Module:
    name: str
    type_id: str
    directory: str
    external_system_id: str | None = None
    external_config_path: str | None = None
    linked_project_path: str | None = None
    order_entries: list[LibraryOrderEntry] = field(default_factory=list[LibraryOrderEntry])

    def find_library_entry(self, library_name: str) -> LibraryOrderEntry | None:
        for entry in self.order_entries:
            if entry.library_name == library_name:
                return entry
        return None

    def remove_entry(self, entry: LibraryOrderEntry) -> None:
        if entry not in self.order_entries:
            raise ValueError(f"entry {entry.library_name!r} not owned by module {self.name!r}")
        self.order_entries.remove(entry)
