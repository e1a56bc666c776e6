"""Application entry points wiring the engine to the in-memory project model."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from projectimport.adapters import InMemoryModelsProvider, InMemoryProject, load_record_trees
from projectimport.config import get_import_config
from projectimport.domain.data_import import ProjectDataManager
from projectimport.services import default_registry

if TYPE_CHECKING:
    from pathlib import Path

    from projectimport.config import ImportConfig
    from projectimport.domain.data_import import HandlerRegistry, ImportReport

log = getLogger(__name__)


def build_manager(
    *,
    config: ImportConfig | None = None,
    registry: HandlerRegistry | None = None,
) -> ProjectDataManager:
    return ProjectDataManager(
        registry if registry is not None else default_registry(),
        models_provider_factory=InMemoryModelsProvider.for_project,
        config=config or get_import_config(),
    )


def import_tree_file(
    path: Path | str,
    *,
    project: InMemoryProject | None = None,
    config: ImportConfig | None = None,
    registry: HandlerRegistry | None = None,
) -> tuple[InMemoryProject, ImportReport]:
    """Replay a dumped data node tree into ``project`` (a fresh one by default)."""

    target = project or InMemoryProject()
    roots = load_record_trees(path)
    log.info("Replaying %s tree(s) from %s", len(roots), path)
    with build_manager(config=config, registry=registry) as manager:
        report = manager.import_data(roots, target)
    log.info(
        "Replayed %s: project=%s, modules=%s, libraries=%s",
        path,
        target.name,
        len(target.modules),
        len(target.libraries),
    )
    return target, report
