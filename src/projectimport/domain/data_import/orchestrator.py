"""Phase-based orchestrator for the data import."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .batch import RecordBatch
    from .context import ImportContext


class ImportPhase(Protocol):
    """Contract implemented by each import phase."""

    name: str

    def run(self, batch: RecordBatch, *, context: ImportContext) -> None: ...


@dataclass(slots=True)
class ImportPipeline:
    """Compose and execute the ordered import phases.

    Phases run strictly one after another; a phase contains its own faults
    in ``context.report`` and never aborts the ones that follow.
    """

    phases: Sequence[ImportPhase] = field(default_factory=tuple)

    def with_phase(self, phase: ImportPhase) -> ImportPipeline:
        """Return a new pipeline appending ``phase`` at the end."""

        return ImportPipeline(phases=(*self.phases, phase))

    def extend(self, phases: Iterable[ImportPhase]) -> ImportPipeline:
        """Return a new pipeline with the provided ``phases`` concatenated."""

        return ImportPipeline(phases=(*self.phases, *tuple(phases)))

    def run(self, batch: RecordBatch, *, context: ImportContext) -> RecordBatch:
        """Execute the configured phases in-order against ``batch``."""

        for phase in self.phases:
            phase.run(batch, context=context)
        return batch


def default_pipeline() -> ImportPipeline:
    """Deserialization followed by the phases that read or change the model."""

    from .deserialization import DeserializationPhase
    from .importing import DataImportPhase
    from .orphans import OrphanResolutionPhase
    from .removal import RemovalPhase

    model_phases = (OrphanResolutionPhase(), RemovalPhase(), DataImportPhase())
    return ImportPipeline().with_phase(DeserializationPhase()).extend(model_phases)
