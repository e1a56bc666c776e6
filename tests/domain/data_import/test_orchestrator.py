from __future__ import annotations

from dataclasses import dataclass

from projectimport.adapters import InMemoryModelsProvider, InMemoryProject
from projectimport.domain.data_import import (
    HandlerRegistry,
    ImportContext,
    ImportPipeline,
    ImportPhase,
    RecordBatch,
    default_pipeline,
)


@dataclass(slots=True)
class _RecordingPhase(ImportPhase):
    name: str
    calls: list[str]

    def run(self, batch: RecordBatch, *, context: ImportContext) -> None:
        _ = (batch, context)
        self.calls.append(self.name)


def _context() -> ImportContext:
    project = InMemoryProject()
    return ImportContext(
        registry=HandlerRegistry(),
        project=project,
        models_provider=InMemoryModelsProvider(project),
    )


def test_pipeline_runs_phases_in_order() -> None:
    calls: list[str] = []
    first = _RecordingPhase(name="first", calls=calls)
    second = _RecordingPhase(name="second", calls=calls)
    pipeline = ImportPipeline(phases=(first, second))

    pipeline.run(RecordBatch(), context=_context())

    assert calls == ["first", "second"]


def test_with_phase_and_extend_return_new_pipelines() -> None:
    calls: list[str] = []
    base = ImportPipeline()
    extended = base.with_phase(_RecordingPhase(name="a", calls=calls)).extend(
        [_RecordingPhase(name="b", calls=calls)]
    )

    extended.run(RecordBatch(), context=_context())

    assert base.phases == ()
    assert calls == ["a", "b"]


def test_default_pipeline_phase_order() -> None:
    assert [phase.name for phase in default_pipeline().phases] == [
        "deserialization",
        "orphan_resolution",
        "removal",
        "import",
    ]
