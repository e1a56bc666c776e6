"""Per-key data service contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Collection
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeAlias, TypeVar

if TYPE_CHECKING:
    from collections.abc import Sequence

    from projectimport.domain.model import DataNode, Key, ProjectData
    from projectimport.domain.ports.models_provider import ModifiableModelsProvider


T = TypeVar("T")
E = TypeVar("E")

OrphanSupplier: TypeAlias = Callable[[], Collection[E]]


def _no_orphans() -> Collection[Any]:
    return ()


class ProjectDataService(ABC, Generic[T, E]):
    """Imports every node of one key into the project model.

    ``T`` is the payload type of :attr:`target_key`, ``E`` the model entry type
    this service considers when looking for orphans. ``order`` is the default
    priority used by the registry; lower runs first.
    """

    order: ClassVar[int] = 0

    @property
    @abstractmethod
    def target_key(self) -> Key[T]: ...

    def compute_orphan_data(
        self,
        to_import: Sequence[DataNode[T]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> OrphanSupplier[E]:
        """Return a deferred computation of model entries no longer backed by data.

        The supplier is invoked at most once, during the removal stage.
        """

        _ = (to_import, project_data, project, models_provider)
        return _no_orphans

    def remove_data(
        self,
        to_remove: Collection[E],
        to_ignore: Sequence[DataNode[T]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> None:
        _ = (to_remove, to_ignore, project_data, project, models_provider)

    @abstractmethod
    def import_data(
        self,
        to_import: Sequence[DataNode[T]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> None: ...

    def on_success_import(
        self,
        imported: Sequence[DataNode[T]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> None:
        _ = (imported, project_data, project, models_provider)

    def on_failure_import(self, project: object) -> None:
        _ = project
