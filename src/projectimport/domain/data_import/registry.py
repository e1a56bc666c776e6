"""Registry of data services, one per key, in a deterministic order."""

from __future__ import annotations

import importlib.metadata
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from projectimport.domain.ports.data_service import ProjectDataService

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from projectimport.domain.model import Key

log = logging.getLogger(__name__)

HANDLER_ENTRY_POINT_GROUP = "projectimport.handlers"


class HandlerAlreadyRegisteredError(ValueError):
    """Raised when a second data service is registered for the same key."""

    def __init__(self, key: Key[Any], existing: ProjectDataService[Any, Any]) -> None:
        self.key = key
        self.existing = existing
        super().__init__(
            f"Key {key.name!r} is already handled by {type(existing).__name__}. "
            "Only one data service per key can be registered."
        )


@dataclass(frozen=True, slots=True)
class RegisteredService:
    service: ProjectDataService[Any, Any]
    order: int
    sequence: int

    @property
    def key(self) -> Key[Any]:
        return self.service.target_key

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.order, self.sequence)


class HandlerRegistry:
    """Resolve data services by key and expose them in registry order.

    Registry order sorts by ``order`` (the service's class attribute unless
    overridden at registration) and then by registration sequence, so two
    registries fed the same services in the same order always agree.
    """

    def __init__(self, services: Iterable[ProjectDataService[Any, Any]] = ()) -> None:
        self._by_key: dict[Key[Any], RegisteredService] = {}
        self._sequence = 0
        self._ordered: tuple[RegisteredService, ...] | None = None
        for service in services:
            self.register(service)

    def register(self, service: ProjectDataService[Any, Any], *, order: int | None = None) -> None:
        if not isinstance(service, ProjectDataService):
            raise TypeError(
                f"Cannot register {service!r}: it must be a ProjectDataService instance."
            )
        key = service.target_key
        existing = self._by_key.get(key)
        if existing is not None:
            raise HandlerAlreadyRegisteredError(key, existing.service)
        entry = RegisteredService(
            service=service,
            order=type(service).order if order is None else order,
            sequence=self._sequence,
        )
        self._sequence += 1
        self._by_key[key] = entry
        self._ordered = None
        log.debug(
            "Registered %s for key %r (order=%s, sequence=%s)",
            type(service).__qualname__,
            key.name,
            entry.order,
            entry.sequence,
        )

    def resolve(self, key: Key[Any]) -> ProjectDataService[Any, Any] | None:
        entry = self._by_key.get(key)
        return entry.service if entry is not None else None

    def entries(self) -> tuple[RegisteredService, ...]:
        if self._ordered is None:
            self._ordered = tuple(sorted(self._by_key.values(), key=lambda e: e.sort_key))
        return self._ordered

    def ordered_handlers(self) -> tuple[ProjectDataService[Any, Any], ...]:
        return tuple(entry.service for entry in self.entries())

    def ordered_keys(self) -> tuple[Key[Any], ...]:
        return tuple(entry.key for entry in self.entries())

    def load_entry_points(self, group: str = HANDLER_ENTRY_POINT_GROUP) -> int:
        """Register data services published by installed distributions.

        Entry points are visited in name order. Each value is either a service
        class (instantiated without arguments) or a service instance. Entry
        points that fail to load or register are logged and skipped. Returns
        the number of services registered.
        """

        registered = 0
        for ep in sorted(importlib.metadata.entry_points(group=group), key=lambda ep: ep.name):
            try:
                loaded = ep.load()
                service = loaded() if isinstance(loaded, type) else loaded
                self.register(service)
            except (HandlerAlreadyRegisteredError, TypeError):
                log.warning(
                    "Entry-point %r loaded but could not be registered; skipping.",
                    ep.name,
                    exc_info=True,
                )
                continue
            except Exception:
                log.exception("Failed to load entry-point %r from group %r; skipping.", ep.name, group)
                continue
            registered += 1
        return registered

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __len__(self) -> int:
        return len(self._by_key)

    def __iter__(self) -> Iterator[ProjectDataService[Any, Any]]:
        return iter(self.ordered_handlers())

    def __repr__(self) -> str:
        names = ", ".join(key.name for key in self.ordered_keys())
        return f"HandlerRegistry([{names}])"
