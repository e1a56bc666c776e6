"""Outcome of one import call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from projectimport.domain.faults import HandlerFault, ImportFault, ImportFaultsError, RecordFault

if TYPE_CHECKING:
    from projectimport.domain.model import Key


@dataclass(slots=True)
class ImportReport:
    """Faults and counters collected while the stages ran.

    Counters are keyed by key name so reports stay readable in logs.
    """

    faults: list[ImportFault] = field(default_factory=list[ImportFault])
    imported: dict[str, int] = field(default_factory=dict[str, int])
    removed: dict[str, int] = field(default_factory=dict[str, int])
    records_seen: int = 0
    records_ignored: int = 0

    @property
    def ok(self) -> bool:
        return not self.faults

    @property
    def record_faults(self) -> list[RecordFault]:
        return [fault for fault in self.faults if isinstance(fault, RecordFault)]

    @property
    def handler_faults(self) -> list[HandlerFault]:
        return [fault for fault in self.faults if isinstance(fault, HandlerFault)]

    def add_fault(self, fault: ImportFault) -> None:
        self.faults.append(fault)

    def count_imported(self, key: Key[Any], count: int) -> None:
        self.imported[key.name] = self.imported.get(key.name, 0) + count

    def count_removed(self, key: Key[Any], count: int) -> None:
        self.removed[key.name] = self.removed.get(key.name, 0) + count

    def raise_for_faults(self) -> None:
        if self.faults:
            raise ImportFaultsError(
                f"Import finished with {len(self.faults)} fault(s)", list(self.faults), self
            )

    def summary(self) -> str:
        return (
            f"records={self.records_seen}, ignored={self.records_ignored}, "
            f"imported={sum(self.imported.values())}, removed={sum(self.removed.values())}, "
            f"faults={len(self.faults)}"
        )
