"""Deserialization phase: prepare every payload, one record at a time."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

from projectimport.domain.faults import ImportStage, IntegrityFault, RecordFault

if TYPE_CHECKING:
    from projectimport.domain.model import DataNode

    from .batch import RecordBatch
    from .context import ImportContext

log = logging.getLogger(__name__)


def prepare_record(record: DataNode[Any]) -> RecordFault | None:
    """Make ``record`` ready for use, returning its fault instead of raising.

    Nodes that override ``ensure_deserialized`` itself may raise anything;
    such failures are still attributed to ``record``.
    """

    try:
        record.ensure_deserialized()
    except RecordFault as fault:
        return fault
    except Exception as exc:
        return RecordFault(record, cause=exc)
    return None


class DeserializationPhase:
    """Deserialize all records and group the usable ones by key.

    A record that fails is reported and left out of every later phase; its
    children are unaffected and stay in the tree.
    """

    name: str = "deserialization"

    def run(self, batch: RecordBatch, *, context: ImportContext) -> None:
        records = batch.records
        report = context.report
        report.records_seen += len(records)
        report.records_ignored += len(batch.ignored)

        if context.deserialize_workers > 1 and len(records) > 1:
            with ThreadPoolExecutor(
                max_workers=context.deserialize_workers,
                thread_name_prefix="projectimport-deserialize",
            ) as pool:
                faults = list(pool.map(prepare_record, records))
        else:
            faults = [prepare_record(record) for record in records]

        for record, fault in zip(records, faults, strict=True):
            if fault is not None:
                log.warning("Skipping %r: %s", record, fault, exc_info=fault)
                report.add_fault(fault)
                continue
            integrity = _check_ready(record)
            if integrity is not None:
                log.warning("Skipping %r: %s", record, integrity)
                report.add_fault(integrity)
                continue
            batch.add_to_group(record)

        log.debug(
            "Deserialized %s record(s) into %s key group(s), %s fault(s)",
            len(records),
            len(batch.groups),
            sum(1 for fault in faults if fault is not None),
        )


def _check_ready(record: DataNode[Any]) -> IntegrityFault | None:
    data = record.data_or_none
    if data is None:
        return IntegrityFault(
            f"{record!r} has no payload after deserialization",
            stage=ImportStage.DESERIALIZE,
            record=record,
        )
    if not record.key.accepts(data):
        return IntegrityFault(
            f"{record!r} payload is {type(data).__name__}, "
            f"expected {record.key.data_type.__name__}",
            stage=ImportStage.DESERIALIZE,
            record=record,
        )
    return None
