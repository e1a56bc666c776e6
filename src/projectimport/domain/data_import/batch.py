"""The set of data nodes submitted to one import call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from projectimport.domain.model import DataNode, Key


@dataclass(slots=True)
class RecordBatch:
    """Flattened view of the submitted trees.

    ``records`` lists every node that takes part in the import, parents before
    children and siblings in insertion order. Ignored nodes and their subtrees
    are kept apart in ``ignored`` so removal can still protect them.
    """

    roots: tuple[DataNode[Any], ...] = ()
    records: list[DataNode[Any]] = field(default_factory=list)
    ignored: list[DataNode[Any]] = field(default_factory=list)
    groups: dict[Key[Any], list[DataNode[Any]]] = field(default_factory=dict)

    @classmethod
    def from_roots(cls, roots: Iterable[DataNode[Any]]) -> RecordBatch:
        batch = cls(roots=tuple(roots))
        for root in batch.roots:
            batch._collect(root)
        return batch

    def _collect(self, root: DataNode[Any]) -> None:
        stack: list[tuple[DataNode[Any], bool]] = [(root, False)]
        while stack:
            node, inherited_ignore = stack.pop()
            ignored = inherited_ignore or node.ignored
            if ignored:
                self.ignored.append(node)
            else:
                self.records.append(node)
            stack.extend((child, ignored) for child in reversed(node.children))

    def add_to_group(self, record: DataNode[Any]) -> None:
        self.groups.setdefault(record.key, []).append(record)

    def group(self, key: Key[Any]) -> list[DataNode[Any]]:
        return self.groups.get(key, [])

    def ignored_for(self, key: Key[Any]) -> list[DataNode[Any]]:
        return [node for node in self.ignored if node.key == key]

    @property
    def is_empty(self) -> bool:
        return not self.records and not self.ignored
