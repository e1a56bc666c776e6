"""Import phase: create and update model entries key by key."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from projectimport.domain.faults import HandlerFault, ImportStage

if TYPE_CHECKING:
    from .batch import RecordBatch
    from .context import ImportContext

log = logging.getLogger(__name__)


class DataImportPhase:
    """Run each service's import in registry order.

    Parent keys are expected to carry a lower ``order`` than their children.
    A failing service is reported and the remaining services still run.
    """

    name: str = "import"

    def run(self, batch: RecordBatch, *, context: ImportContext) -> None:
        for entry in context.registry.entries():
            key = entry.key
            records = tuple(batch.group(key))
            if not records:
                continue
            service = entry.service
            try:
                service.import_data(
                    records,
                    context.project_data_for(records),
                    context.project,
                    context.models_provider,
                )
            except Exception as exc:
                fault = HandlerFault(service, key, ImportStage.IMPORT, cause=exc)
                log.warning("%s", fault, exc_info=exc)
                context.report.add_fault(fault)
                continue
            context.report.count_imported(key, len(records))
