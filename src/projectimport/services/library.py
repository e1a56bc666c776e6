"""Data service for project-level libraries."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from projectimport.domain.model import Library, LibraryData, ProjectKeys
from projectimport.domain.ports import ProjectDataService

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from projectimport.domain.model import DataNode, Key, ProjectData
    from projectimport.domain.ports import ModifiableModelsProvider, OrphanSupplier

log = logging.getLogger(__name__)


class LibraryDataService(ProjectDataService[LibraryData, Library]):
    order = ProjectKeys.LIBRARY.processing_weight

    @property
    def target_key(self) -> Key[LibraryData]:
        return ProjectKeys.LIBRARY

    def compute_orphan_data(
        self,
        to_import: Sequence[DataNode[LibraryData]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> OrphanSupplier[Library]:
        names = {node.data.external_name for node in to_import}
        system_ids = {node.data.external_system_id for node in to_import}
        linked_path = project_data.linked_config_path if project_data else None

        def orphans() -> list[Library]:
            return [
                library
                for library in models_provider.libraries()
                if library.external_system_id in system_ids
                and library.linked_project_path == linked_path
                and library.name not in names
            ]

        return orphans

    def remove_data(
        self,
        to_remove: Collection[Library],
        to_ignore: Sequence[DataNode[LibraryData]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> None:
        keep = {node.data.external_name for node in to_ignore}
        for library in to_remove:
            if library.name in keep:
                continue
            log.info("Removing library %r", library.name)
            models_provider.remove_library(library)

    def import_data(
        self,
        to_import: Sequence[DataNode[LibraryData]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> None:
        linked_path = project_data.linked_config_path if project_data else None
        for node in to_import:
            data = node.data
            library = models_provider.find_library(data.external_name)
            if library is None:
                library = models_provider.create_library(data.external_name)
            library.external_system_id = data.external_system_id
            library.linked_project_path = linked_path
            library.paths = list(data.paths)
            library.unresolved = data.unresolved
