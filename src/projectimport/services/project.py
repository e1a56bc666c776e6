"""Data service for the project node itself."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from projectimport.domain.model import ProjectData, ProjectKeys
from projectimport.domain.ports import ProjectDataService

if TYPE_CHECKING:
    from collections.abc import Sequence

    from projectimport.domain.model import DataNode, Key
    from projectimport.domain.ports import ModifiableModelsProvider

log = logging.getLogger(__name__)


class ProjectSettingsDataService(ProjectDataService[ProjectData, object]):
    """Names the project and links it to the external projects it was imported from."""

    order = ProjectKeys.PROJECT.processing_weight

    @property
    def target_key(self) -> Key[ProjectData]:
        return ProjectKeys.PROJECT

    def import_data(
        self,
        to_import: Sequence[DataNode[ProjectData]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> None:
        if not to_import:
            return
        if len(to_import) > 1:
            log.warning("%s project nodes in one import; naming after the first", len(to_import))
        for node in to_import:
            data = node.data
            models_provider.link_external_project(data.external_system_id, data.linked_config_path)
        models_provider.set_project_name(to_import[0].data.external_name)
