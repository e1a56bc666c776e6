"""Typed tree nodes produced by external systems and consumed by the import engine."""

from __future__ import annotations

import threading
import weakref
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from projectimport.domain.faults import IntegrityFault, RecordFault

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .key import Key

T = TypeVar("T")
C = TypeVar("C")
P = TypeVar("P")


class _State(Enum):
    PENDING = auto()
    READY = auto()
    FAILED = auto()


class DataNode(Generic[T]):
    """A keyed payload owned by at most one parent node.

    The payload is either supplied ready-made (``data``) or in serialized form
    (``raw``) and validated into ``key.data_type`` by :meth:`ensure_deserialized`.
    Children can only be attached through :meth:`create_child` or
    :meth:`add_child`, which keeps ownership tree-shaped.
    """

    __slots__ = (
        "__weakref__",
        "_children",
        "_data",
        "_fault",
        "_lock",
        "_parent",
        "_raw",
        "_state",
        "ignored",
        "key",
    )

    def __init__(
        self,
        key: Key[T],
        data: T | None = None,
        *,
        raw: object = None,
        ignored: bool = False,
    ) -> None:
        if data is not None and raw is not None:
            raise ValueError("DataNode takes either data or raw payload, not both")
        self.key = key
        self.ignored = ignored
        self._data: T | None = data
        self._raw = raw
        self._parent: weakref.ref[DataNode[Any]] | None = None
        self._children: list[DataNode[Any]] = []
        self._lock = threading.RLock()
        self._state = _State.PENDING
        self._fault: RecordFault | None = None

    def __repr__(self) -> str:
        return f"DataNode({self.key.name!r}, state={self._state.name.lower()})"

    # --- tree ----------------------------------------------------------------

    @property
    def parent(self) -> DataNode[Any] | None:
        return self._parent() if self._parent is not None else None

    @property
    def children(self) -> tuple[DataNode[Any], ...]:
        return tuple(self._children)

    @property
    def root(self) -> DataNode[Any]:
        node: DataNode[Any] = self
        while (parent := node.parent) is not None:
            node = parent
        return node

    def create_child(
        self,
        key: Key[C],
        data: C | None = None,
        *,
        raw: object = None,
        ignored: bool = False,
    ) -> DataNode[C]:
        child = DataNode(key, data, raw=raw, ignored=ignored)
        self.add_child(child)
        return child

    def add_child(self, child: DataNode[Any]) -> None:
        """Attach a detached subtree as the last child of this node."""

        if child.parent is not None:
            raise ValueError(f"{child!r} already has a parent")
        if child is self.root:
            raise ValueError(f"Attaching {child!r} to {self!r} would create a cycle")
        child._parent = weakref.ref(self)  # noqa: SLF001
        self._children.append(child)

    def walk(self) -> Iterator[DataNode[Any]]:
        """Yield this node and its descendants in pre-order (parents first)."""

        stack: list[DataNode[Any]] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))  # noqa: SLF001

    def find_parent(self, key: Key[P]) -> DataNode[P] | None:
        """Return the nearest strict ancestor keyed ``key``."""

        node = self.parent
        while node is not None:
            if node.key == key:
                return cast("DataNode[P]", node)
            node = node.parent
        return None

    # --- payload -------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        return self._state is _State.READY

    @property
    def fault(self) -> RecordFault | None:
        return self._fault

    @property
    def data_or_none(self) -> T | None:
        """Current payload without triggering deserialization."""

        return self._data

    @property
    def data(self) -> T:
        self.ensure_deserialized()
        data = self._data
        if data is None:
            raise IntegrityFault(f"{self!r} lost its payload", record=self)
        return data

    def ensure_deserialized(self) -> None:
        """Prepare the payload exactly once.

        A failure is remembered: later calls raise the same :class:`RecordFault`
        without running :meth:`deserialize` again.
        """

        with self._lock:
            if self._state is _State.READY:
                return
            if self._state is _State.FAILED:
                raise cast("RecordFault", self._fault)
            try:
                self.deserialize()
                self._check_integrity()
            except Exception as exc:
                self._state = _State.FAILED
                self._fault = RecordFault(self, cause=exc)
                raise self._fault from exc
            self._state = _State.READY

    def deserialize(self) -> None:
        """Validate the raw payload into ``key.data_type``."""

        if self._raw is None:
            return
        self._data = self.key.validate(self._raw)
        self._raw = None

    def clear_data(self) -> None:
        """Drop the payload, keeping the node in its tree."""

        with self._lock:
            self._data = None
            self._raw = None

    def _check_integrity(self) -> None:
        if self._data is None:
            raise IntegrityFault(f"{self!r} has no payload", record=self)
        if not self.key.accepts(self._data):
            raise IntegrityFault(
                f"{self!r} payload is {type(self._data).__name__}, "
                f"expected {self.key.data_type.__name__}",
                record=self,
            )
