from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from projectimport.domain.model import DataNode, Key, ProjectData
from projectimport.domain.ports import ModifiableModelsProvider, OrphanSupplier, ProjectDataService


class Payload(BaseModel):
    name: str


K1: Key[Payload] = Key("k1", Payload, processing_weight=1)
K2: Key[Payload] = Key("k2", Payload, processing_weight=2)
K3: Key[Payload] = Key("k3", Payload, processing_weight=3)


@dataclass(slots=True)
class Call:
    operation: str
    records: tuple[DataNode[Any], ...] = ()
    to_remove: tuple[object, ...] = ()
    project_data: ProjectData | None = None


@dataclass(eq=False)
class TracingService(ProjectDataService[Payload, object]):
    """Data service that appends ``<label>.<operation>`` to a shared trace."""

    key: Key[Payload]
    trace: list[str]
    label: str = ""
    orphans: tuple[object, ...] = ()
    fail_on: frozenset[str] = frozenset()
    calls: list[Call] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.label:
            self.label = self.key.name

    @property
    def target_key(self) -> Key[Payload]:
        return self.key

    def _record(self, operation: str, **details: Any) -> None:
        self.trace.append(f"{self.label}.{operation}")
        self.calls.append(Call(operation=operation, **details))
        if operation in self.fail_on:
            raise RuntimeError(f"{self.label} failed in {operation}")

    def calls_to(self, operation: str) -> list[Call]:
        return [call for call in self.calls if call.operation == operation]

    def compute_orphan_data(
        self,
        to_import: Sequence[DataNode[Payload]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> OrphanSupplier[object]:
        self._record("computeOrphanData", records=tuple(to_import), project_data=project_data)

        def supplier() -> Collection[object]:
            self._record("orphanSupplier")
            return self.orphans

        return supplier

    def remove_data(
        self,
        to_remove: Collection[object],
        to_ignore: Sequence[DataNode[Payload]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> None:
        self._record(
            "removeData",
            records=tuple(to_ignore),
            to_remove=tuple(to_remove),
            project_data=project_data,
        )

    def import_data(
        self,
        to_import: Sequence[DataNode[Payload]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> None:
        self._record("importData", records=tuple(to_import), project_data=project_data)

    def on_success_import(
        self,
        imported: Sequence[DataNode[Payload]],
        project_data: ProjectData | None,
        project: object,
        models_provider: ModifiableModelsProvider,
    ) -> None:
        self._record("onSuccessImport", records=tuple(imported))

    def on_failure_import(self, project: object) -> None:
        self._record("onFailureImport")


def main_trace(trace: list[str]) -> list[str]:
    """Trace without supplier and post-import hook entries."""

    hidden = (".orphanSupplier", ".onSuccessImport", ".onFailureImport")
    return [entry for entry in trace if not entry.endswith(hidden)]


class FakeModelsProvider:
    """Models provider that only tracks its lifecycle."""

    def __init__(self) -> None:
        self.committed = 0
        self.disposed = 0

    def commit(self) -> None:
        self.committed += 1

    def dispose(self) -> None:
        self.disposed += 1
