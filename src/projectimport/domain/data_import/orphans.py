"""Orphan resolution phase: discover, per key, what the batch no longer mentions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from projectimport.domain.faults import HandlerFault, ImportStage, IntegrityFault

if TYPE_CHECKING:
    from .batch import RecordBatch
    from .context import ImportContext

log = logging.getLogger(__name__)


class OrphanResolutionPhase:
    """Collect one deferred orphan supplier per handled key, in registry order.

    No model mutation happens here; suppliers are only invoked by the removal
    phase.
    """

    name: str = "orphan_resolution"

    def run(self, batch: RecordBatch, *, context: ImportContext) -> None:
        for entry in context.registry.entries():
            key = entry.key
            records = batch.group(key)
            if not records:
                continue
            service = entry.service
            project_data = context.project_data_for(records)
            try:
                supplier = service.compute_orphan_data(
                    tuple(records), project_data, context.project, context.models_provider
                )
            except Exception as exc:
                fault = HandlerFault(service, key, ImportStage.COMPUTE_ORPHANS, cause=exc)
                log.warning("%s", fault, exc_info=exc)
                context.report.add_fault(fault)
                continue
            if not callable(supplier):
                context.report.add_fault(
                    IntegrityFault(
                        f"{type(service).__name__} returned a non-callable orphan supplier "
                        f"for key {key.name!r}",
                        stage=ImportStage.COMPUTE_ORPHANS,
                        key=key,
                    )
                )
                continue
            context.orphan_suppliers[key] = supplier
