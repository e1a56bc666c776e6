from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from projectimport.domain.data_import import (
    HANDLER_ENTRY_POINT_GROUP,
    HandlerAlreadyRegisteredError,
    HandlerRegistry,
)
from projectimport.domain.data_import import registry as registry_module
from projectimport.domain.model import Key
from tests.support.tracing import K1, K2, K3, Payload, TracingService


class LateService(TracingService):
    order = 50


def _service(key: Key[Payload]) -> TracingService:
    return TracingService(key=key, trace=[])


def test_ordered_handlers_sort_by_priority_not_registration() -> None:
    registry = HandlerRegistry()
    high = _service(K1)
    low = _service(K2)

    registry.register(high, order=2)
    registry.register(low, order=1)

    assert registry.ordered_handlers() == (low, high)


def test_ties_keep_registration_order_across_runs() -> None:
    keys = [Key(f"tie{i}", Payload) for i in range(5)]

    def build() -> list[str]:
        registry = HandlerRegistry()
        for key in keys:
            registry.register(_service(key), order=7)
        return [key.name for key in registry.ordered_keys()]

    assert build() == [key.name for key in keys]
    assert build() == build()


def test_class_order_is_the_default_priority() -> None:
    registry = HandlerRegistry()
    late = LateService(key=K1, trace=[])
    early = _service(K2)

    registry.register(late)
    registry.register(early)

    assert [entry.order for entry in registry.entries()] == [0, 50]
    assert registry.ordered_handlers() == (early, late)


def test_resolve_unknown_key_returns_none() -> None:
    registry = HandlerRegistry([_service(K1)])

    assert registry.resolve(K3) is None
    assert K1 in registry
    assert K3 not in registry


def test_one_service_per_key() -> None:
    registry = HandlerRegistry([_service(K1)])

    with pytest.raises(HandlerAlreadyRegisteredError, match="'k1'"):
        registry.register(_service(K1))


def test_register_rejects_non_services() -> None:
    registry = HandlerRegistry()

    with pytest.raises(TypeError):
        registry.register(object())  # type: ignore[arg-type]


@dataclass
class _EntryPoint:
    name: str
    target: Any

    def load(self) -> Any:
        if isinstance(self.target, Exception):
            raise self.target
        return self.target


class _K2Service(TracingService):
    def __init__(self) -> None:
        super().__init__(key=K2, trace=[])


class _K3Service(TracingService):
    def __init__(self) -> None:
        super().__init__(key=K3, trace=[])


def test_load_entry_points_registers_in_name_order(monkeypatch: pytest.MonkeyPatch) -> None:
    seen_groups: list[str] = []

    def fake_entry_points(*, group: str) -> list[_EntryPoint]:
        seen_groups.append(group)
        return [
            _EntryPoint("zeta", _K3Service),
            _EntryPoint("broken", ImportError("missing module")),
            _EntryPoint("alpha", _K2Service),
            _EntryPoint("duplicate", _service(K1)),
        ]

    monkeypatch.setattr(registry_module.importlib.metadata, "entry_points", fake_entry_points)
    registry = HandlerRegistry([_service(K1)])

    loaded = registry.load_entry_points()

    assert seen_groups == [HANDLER_ENTRY_POINT_GROUP]
    assert loaded == 2
    assert [key.name for key in registry.ordered_keys()] == ["k1", "k2", "k3"]
