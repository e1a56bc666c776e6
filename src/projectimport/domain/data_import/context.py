"""Mutable state shared by the import phases of one call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from projectimport.domain.model import ProjectKeys

from .report import ImportReport

if TYPE_CHECKING:
    from collections.abc import Sequence

    from projectimport.domain.model import DataNode, Key, ProjectData
    from projectimport.domain.ports import ModifiableModelsProvider, OrphanSupplier

    from .registry import HandlerRegistry


@dataclass(slots=True)
class ImportContext:
    registry: HandlerRegistry
    project: object
    models_provider: ModifiableModelsProvider
    report: ImportReport = field(default_factory=ImportReport)
    deserialize_workers: int = 1
    orphan_suppliers: dict[Key[Any], OrphanSupplier[Any]] = field(default_factory=dict)

    def project_data_for(self, records: Sequence[DataNode[Any]]) -> ProjectData | None:
        """Project payload enclosing ``records``, or ``None`` at the top level."""

        if not records:
            return None
        project_node = records[0].find_parent(ProjectKeys.PROJECT)
        if project_node is None:
            return None
        data = project_node.data_or_none
        if project_node.fault is not None or not ProjectKeys.PROJECT.accepts(data):
            return None
        return data
