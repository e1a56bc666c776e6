"""Data service for module dependencies on libraries."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeAlias

from projectimport.domain.model import (
    Library,
    LibraryDependencyData,
    LibraryLevel,
    LibraryOrderEntry,
    Module,
    ProjectKeys,
)
from projectimport.domain.ports import ProjectDataService

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from projectimport.domain.model import DataNode, Key, ProjectData
    from projectimport.domain.ports import ModifiableModelsProvider, OrphanSupplier

log = logging.getLogger(__name__)

DependencyEntry: TypeAlias = tuple[Module, LibraryOrderEntry]


class LibraryDependencyDataService(ProjectDataService[LibraryDependencyData, DependencyEntry]):
    """Maintains library order entries of the modules present in the batch.

    Orphans are entries of those modules that the batch no longer lists.
    Modules outside the batch keep their entries untouched.
    """

    order = ProjectKeys.LIBRARY_DEPENDENCY.processing_weight

    @property
    def target_key(self) -> Key[LibraryDependencyData]:
        return ProjectKeys.LIBRARY_DEPENDENCY

    def compute_orphan_data(
        self,
        to_import: Sequence[DataNode[LibraryDependencyData]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> OrphanSupplier[DependencyEntry]:
        wanted: dict[str, set[str]] = {}
        for node in to_import:
            data = node.data
            wanted.setdefault(data.owner_module.external_name, set()).add(data.library_name)

        def orphans() -> list[DependencyEntry]:
            found: list[DependencyEntry] = []
            for module_name, library_names in wanted.items():
                module = models_provider.find_module(module_name)
                if module is None:
                    continue
                found.extend(
                    (module, entry)
                    for entry in module.order_entries
                    if entry.library_name not in library_names
                )
            return found

        return orphans

    def remove_data(
        self,
        to_remove: Collection[DependencyEntry],
        to_ignore: Sequence[DataNode[LibraryDependencyData]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> None:
        keep = {
            (node.data.owner_module.external_name, node.data.library_name) for node in to_ignore
        }
        for module, entry in to_remove:
            if (module.name, entry.library_name) in keep:
                continue
            if entry in module.order_entries:
                module.remove_entry(entry)

    def import_data(
        self,
        to_import: Sequence[DataNode[LibraryDependencyData]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> None:
        for node in to_import:
            data = node.data
            module = models_provider.find_module(data.owner_module.external_name)
            if module is None:
                log.warning(
                    "Module %r not found; skipping dependency on %r",
                    data.owner_module.external_name,
                    data.library_name,
                )
                continue
            entry = module.find_library_entry(data.library_name)
            if entry is None:
                entry = LibraryOrderEntry(library_name=data.library_name)
                module.order_entries.append(entry)
            entry.level = data.level
            entry.scope = data.scope
            entry.exported = data.exported
            if data.level is LibraryLevel.MODULE:
                entry.module_library = Library(
                    name=data.library_name,
                    external_system_id=data.external_system_id,
                    paths=list(data.target.paths),
                    unresolved=data.target.unresolved,
                )
            else:
                entry.module_library = None
                self._ensure_project_library(data, models_provider)

    @staticmethod
    def _ensure_project_library(
        data: LibraryDependencyData, models_provider: ModifiableModelsProvider
    ) -> None:
        if models_provider.find_library(data.library_name) is not None:
            return
        log.warning("Project library %r missing; creating it unresolved", data.library_name)
        library = models_provider.create_library(data.library_name)
        library.external_system_id = data.external_system_id
        library.unresolved = True
