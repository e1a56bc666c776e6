"""Phased import of data node trees into a modifiable project model.

One call walks the submitted trees once, then runs four phases in order:
deserialization, orphan resolution, removal and import. Every phase contains
its faults at record or data-service granularity and records them in an
``ImportReport``; the manager raises them together once the call finished.
"""

from __future__ import annotations

from .batch import RecordBatch
from .context import ImportContext
from .deserialization import DeserializationPhase, prepare_record
from .importing import DataImportPhase
from .manager import ProjectDataManager
from .orchestrator import ImportPhase, ImportPipeline, default_pipeline
from .orphans import OrphanResolutionPhase
from .registry import (
    HANDLER_ENTRY_POINT_GROUP,
    HandlerAlreadyRegisteredError,
    HandlerRegistry,
    RegisteredService,
)
from .removal import RemovalPhase
from .report import ImportReport

__all__ = [
    "HANDLER_ENTRY_POINT_GROUP",
    "DataImportPhase",
    "DeserializationPhase",
    "HandlerAlreadyRegisteredError",
    "HandlerRegistry",
    "ImportContext",
    "ImportPhase",
    "ImportPipeline",
    "ImportReport",
    "OrphanResolutionPhase",
    "ProjectDataManager",
    "RecordBatch",
    "RegisteredService",
    "RemovalPhase",
    "default_pipeline",
    "prepare_record",
]
