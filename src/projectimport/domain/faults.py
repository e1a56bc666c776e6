"""Fault taxonomy for the data import engine.

Faults are contained where they happen (one record, or one data service at
one stage) and collected into an :class:`~projectimport.domain.data_import.ImportReport`.
Nothing here is retried; a caller that wants to retry starts a fresh import.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from projectimport.domain.data_import.report import ImportReport
    from projectimport.domain.model.key import Key
    from projectimport.domain.model.node import DataNode
    from projectimport.domain.ports.data_service import ProjectDataService


class ImportStage(StrEnum):
    DESERIALIZE = "deserialize"
    COMPUTE_ORPHANS = "compute_orphans"
    REMOVE = "remove"
    IMPORT = "import"
    POST_IMPORT = "post_import"


class ImportFault(Exception):
    """Base class of every contained import failure."""

    stage: ImportStage

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class RecordFault(ImportFault):
    """A single data node failed to deserialize."""

    stage = ImportStage.DESERIALIZE

    def __init__(self, record: DataNode[Any], *, cause: BaseException | None = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to prepare {record!r}{detail}", cause=cause)
        self.record = record


class IntegrityFault(ImportFault):
    """A node or data service entered a stage without the state it requires."""

    def __init__(
        self,
        message: str,
        *,
        stage: ImportStage = ImportStage.DESERIALIZE,
        record: DataNode[Any] | None = None,
        key: Key[Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.stage = stage
        self.record = record
        self.key = key if key is not None or record is None else record.key


class HandlerFault(ImportFault):
    """A data service raised while computing orphans, removing or importing its key."""

    def __init__(
        self,
        service: ProjectDataService[Any, Any],
        key: Key[Any],
        stage: ImportStage,
        *,
        cause: BaseException | None = None,
    ) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(
            f"{type(service).__name__} failed at {stage} for key {key.name!r}{detail}",
            cause=cause,
        )
        self.service = service
        self.key = key
        self.stage = stage


class ImportFaultsError(ExceptionGroup):
    """Raised once an import finished with contained faults.

    The partially applied import is kept; ``report`` describes what happened.
    """

    def __new__(
        cls, message: str, faults: Sequence[ImportFault], report: ImportReport
    ) -> ImportFaultsError:
        self = super().__new__(cls, message, faults)
        self.report = report
        return self

    def __init__(
        self, message: str, faults: Sequence[ImportFault], report: ImportReport
    ) -> None:
        super().__init__(message, faults)

    def derive(self, excs: Sequence[Exception]) -> ImportFaultsError:  # type: ignore[override]
        return ImportFaultsError(self.message, excs, self.report)  # type: ignore[arg-type]
