"""Removal phase: drop orphaned model entries key by key."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from projectimport.domain.faults import HandlerFault, ImportStage

from .deserialization import prepare_record

if TYPE_CHECKING:
    from .batch import RecordBatch
    from .context import ImportContext

log = logging.getLogger(__name__)


class RemovalPhase:
    """Materialize each orphan supplier and hand the result to its service.

    Services run in registry order, each one completing before the next
    starts. Records present in the batch, and ignored records of the same
    key that deserialize cleanly, are passed along as ``to_ignore``.
    """

    name: str = "removal"

    def run(self, batch: RecordBatch, *, context: ImportContext) -> None:
        for entry in context.registry.entries():
            key = entry.key
            supplier = context.orphan_suppliers.pop(key, None)
            if supplier is None:
                continue
            service = entry.service
            records = batch.group(key)
            ignored = [node for node in batch.ignored_for(key) if prepare_record(node) is None]
            to_ignore = (*records, *ignored)
            try:
                to_remove = tuple(supplier())
                service.remove_data(
                    to_remove,
                    to_ignore,
                    context.project_data_for(records),
                    context.project,
                    context.models_provider,
                )
            except Exception as exc:
                fault = HandlerFault(service, key, ImportStage.REMOVE, cause=exc)
                log.warning("%s", fault, exc_info=exc)
                context.report.add_fault(fault)
                continue
            if to_remove:
                log.debug("Removed %s orphan(s) for key %r", len(to_remove), key.name)
            context.report.count_removed(key, len(to_remove))
