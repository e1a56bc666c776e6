"""Data service for modules."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from projectimport.domain.model import Module, ModuleData, ProjectKeys
from projectimport.domain.ports import ProjectDataService

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from projectimport.domain.model import DataNode, Key, ProjectData
    from projectimport.domain.ports import ModifiableModelsProvider, OrphanSupplier

log = logging.getLogger(__name__)


class ModuleDataService(ProjectDataService[ModuleData, Module]):
    """Creates and updates modules; orphans are modules the external project dropped."""

    order = ProjectKeys.MODULE.processing_weight

    @property
    def target_key(self) -> Key[ModuleData]:
        return ProjectKeys.MODULE

    def compute_orphan_data(
        self,
        to_import: Sequence[DataNode[ModuleData]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> OrphanSupplier[Module]:
        names = {node.data.external_name for node in to_import}
        system_ids = {node.data.external_system_id for node in to_import}
        linked_path = project_data.linked_config_path if project_data else None

        def orphans() -> list[Module]:
            return [
                module
                for module in models_provider.modules()
                if module.external_system_id in system_ids
                and module.linked_project_path == linked_path
                and module.name not in names
            ]

        return orphans

    def remove_data(
        self,
        to_remove: Collection[Module],
        to_ignore: Sequence[DataNode[ModuleData]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> None:
        keep = {node.data.external_name for node in to_ignore}
        for module in to_remove:
            if module.name in keep:
                continue
            log.info("Removing module %r", module.name)
            models_provider.dispose_module(module)

    def import_data(
        self,
        to_import: Sequence[DataNode[ModuleData]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> None:
        linked_path = project_data.linked_config_path if project_data else None
        for node in to_import:
            data = node.data
            module = models_provider.find_module(data.external_name)
            if module is None:
                module = models_provider.new_module(
                    name=data.external_name,
                    type_id=data.module_type_id,
                    directory=data.module_file_directory,
                )
            module.type_id = data.module_type_id
            module.directory = data.module_file_directory
            module.external_system_id = data.external_system_id
            module.external_config_path = data.external_config_path
            module.linked_project_path = linked_path
