"""Entry point of the data import engine."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Literal, overload

from projectimport.config import ImportConfig
from projectimport.domain.faults import HandlerFault, ImportStage

from .batch import RecordBatch
from .context import ImportContext
from .deserialization import prepare_record
from .orchestrator import default_pipeline
from .registry import HandlerRegistry
from .report import ImportReport

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType

    from projectimport.domain.model import DataNode
    from projectimport.domain.ports import (
        ModelsProviderFactory,
        ModifiableModelsProvider,
        ProjectDataService,
    )

    from .orchestrator import ImportPipeline

log = logging.getLogger(__name__)


class ProjectDataManager:
    """Import data node trees into a project through the registered data services.

    Each call is independent: the manager keeps no state about earlier imports
    beyond its registry and configuration. Asynchronous imports are queued on a
    single worker so two imports never touch a models provider at the same time.
    """

    def __init__(
        self,
        registry: HandlerRegistry | Iterable[ProjectDataService[Any, Any]] | None = None,
        *,
        models_provider_factory: ModelsProviderFactory | None = None,
        config: ImportConfig | None = None,
        pipeline: ImportPipeline | None = None,
    ) -> None:
        if isinstance(registry, HandlerRegistry):
            self.registry = registry
        else:
            self.registry = HandlerRegistry(registry or ())
        self.config = config or ImportConfig()
        self.pipeline = pipeline or default_pipeline()
        self._models_provider_factory = models_provider_factory
        self._executor: ThreadPoolExecutor | None = None
        self._executor_lock = threading.Lock()

    def __enter__(self) -> ProjectDataManager:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        self.close()
        return False

    def close(self) -> None:
        """Wait for queued imports and release the worker thread."""

        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    @staticmethod
    def ensure_record_ready(record: DataNode[Any]) -> None:
        """Deserialize ``record`` once; raise a :class:`RecordFault` for it alone."""

        fault = prepare_record(record)
        if fault is not None:
            raise fault

    @overload
    def import_data(
        self,
        records: Iterable[DataNode[Any]],
        project: object,
        models_provider: ModifiableModelsProvider | None = None,
        *,
        synchronous: Literal[True] = True,
    ) -> ImportReport: ...
    @overload
    def import_data(
        self,
        records: Iterable[DataNode[Any]],
        project: object,
        models_provider: ModifiableModelsProvider | None = None,
        *,
        synchronous: Literal[False],
    ) -> Future[ImportReport]: ...
    def import_data(
        self,
        records: Iterable[DataNode[Any]],
        project: object,
        models_provider: ModifiableModelsProvider | None = None,
        *,
        synchronous: bool = True,
    ) -> ImportReport | Future[ImportReport]:
        """Import the trees rooted at ``records`` into ``project``.

        Without a ``models_provider`` one is created from the factory, committed
        once all phases ran and disposed if an uncontained error escapes.
        With ``synchronous=False`` the import is queued and a future returned.
        Contained faults are collected in the report; with ``raise_on_faults``
        they are raised together as :class:`ImportFaultsError` after the call
        completed everything it could.
        """

        roots = tuple(records)
        if synchronous:
            return self._run(roots, project, models_provider)
        return self._queue().submit(self._run, roots, project, models_provider)

    def _queue(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix="projectimport"
                )
            return self._executor

    def _run(
        self,
        roots: tuple[DataNode[Any], ...],
        project: object,
        models_provider: ModifiableModelsProvider | None,
    ) -> ImportReport:
        batch = RecordBatch.from_roots(roots)
        if batch.is_empty:
            log.debug("Nothing to import")
            return ImportReport()

        owns_provider = models_provider is None
        provider = (
            self._create_models_provider(project) if models_provider is None else models_provider
        )
        context = ImportContext(
            registry=self.registry,
            project=project,
            models_provider=provider,
            deserialize_workers=self.config.deserialize_workers,
        )
        log.info(
            "Starting import: roots=%s, records=%s, services=%s",
            len(roots),
            len(batch.records),
            len(self.registry),
        )
        try:
            self.pipeline.run(batch, context=context)
            if owns_provider:
                provider.commit()
        except BaseException:
            if owns_provider:
                provider.dispose()
            raise

        self._notify_services(batch, context)
        report = context.report
        log.info("Finished import: %s", report.summary())
        if self.config.raise_on_faults:
            report.raise_for_faults()
        return report

    def _create_models_provider(self, project: object) -> ModifiableModelsProvider:
        if self._models_provider_factory is None:
            raise ValueError(
                "No models provider given and no models_provider_factory configured"
            )
        return self._models_provider_factory(project)

    def _notify_services(self, batch: RecordBatch, context: ImportContext) -> None:
        report = context.report
        succeeded = report.ok
        for entry in self.registry.entries():
            records = tuple(batch.group(entry.key))
            if not records:
                continue
            service = entry.service
            try:
                if succeeded:
                    service.on_success_import(
                        records,
                        context.project_data_for(records),
                        context.project,
                        context.models_provider,
                    )
                else:
                    service.on_failure_import(context.project)
            except Exception as exc:
                fault = HandlerFault(service, entry.key, ImportStage.POST_IMPORT, cause=exc)
                log.warning("%s", fault, exc_info=exc)
                report.add_fault(fault)
