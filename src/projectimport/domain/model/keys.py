"""Well-known keys for project structure data."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from .key import Key
from .project import LibraryData, LibraryDependencyData, ModuleData, ProjectData

if TYPE_CHECKING:
    from collections.abc import Iterable


class ProjectKeys:
    PROJECT: Final = Key("project", ProjectData, processing_weight=10)
    MODULE: Final = Key("module", ModuleData, processing_weight=50)
    LIBRARY: Final = Key("library", LibraryData, processing_weight=100)
    LIBRARY_DEPENDENCY: Final = Key(
        "library_dependency", LibraryDependencyData, processing_weight=110
    )

    @classmethod
    def all(cls) -> tuple[Key[Any], ...]:
        return (cls.PROJECT, cls.MODULE, cls.LIBRARY, cls.LIBRARY_DEPENDENCY)


class UnknownKeyError(LookupError):
    """Raised when a serialized key name has no registered :class:`Key`."""


class KeyIndex:
    """Lookup of keys by name, for rebuilding trees from serialized form."""

    def __init__(self, keys: Iterable[Key[Any]] = ()) -> None:
        self._keys: dict[str, Key[Any]] = {}
        for key in keys:
            self.add(key)

    def add(self, key: Key[Any]) -> None:
        existing = self._keys.get(key.name)
        if existing is not None and existing.data_type is not key.data_type:
            raise ValueError(f"Key name {key.name!r} already bound to {existing.data_type}")
        self._keys[key.name] = key

    def get(self, name: str) -> Key[Any]:
        try:
            return self._keys[name]
        except KeyError as exc:
            raise UnknownKeyError(f"Unknown key: {name!r}") from exc

    def __contains__(self, name: object) -> bool:
        return name in self._keys


def builtin_key_index() -> KeyIndex:
    return KeyIndex(ProjectKeys.all())
