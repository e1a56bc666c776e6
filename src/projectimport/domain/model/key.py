"""Typed, weighted identifiers for data node payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import total_ordering
from typing import Any, Generic, TypeVar, get_origin

from pydantic import TypeAdapter

T = TypeVar("T")


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class Key(Generic[T]):
    """Identifies a payload type and its processing weight.

    Two nodes sharing a key are handled by the same data service. Keys compare
    by ``(processing_weight, name)``; identity is the name alone so a key can
    be looked up again from its serialized form.
    """

    name: str
    data_type: type[T]
    processing_weight: int = 0
    _adapter: TypeAdapter[Any] | None = field(default=None, init=False, repr=False)

    def __hash__(self) -> int:
        return hash(self.name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        return (self.processing_weight, self.name) < (other.processing_weight, other.name)

    @property
    def adapter(self) -> TypeAdapter[T]:
        adapter = self._adapter
        if adapter is None:
            adapter = TypeAdapter(self.data_type)
            object.__setattr__(self, "_adapter", adapter)
        return adapter

    def validate(self, raw: object) -> T:
        """Turn a serialized payload into an instance of ``data_type``."""

        if isinstance(raw, str | bytes | bytearray):
            return self.adapter.validate_json(raw)
        return self.adapter.validate_python(raw)

    def accepts(self, data: object) -> bool:
        """Whether ``data`` is an instance of ``data_type``.

        Parameterized generics are checked against their origin class. Forms
        that support no instance check at all, such as ``Any`` or ``Literal``,
        accept whatever the adapter validated.
        """

        try:
            return isinstance(data, self.data_type)
        except TypeError:
            origin = get_origin(self.data_type)
        if isinstance(origin, type):
            return isinstance(data, origin)
        return True
