"""Rebuild data node trees from their JSON dump.

A node is written as ``{"key": <name>, "data": <payload>, "ignored": <bool>,
"children": [<node>, ...]}``. Payloads are kept raw so that a broken payload
only fails its own node once the import deserializes it.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from projectimport.domain.model import DataNode, KeyIndex, UnknownKeyError, builtin_key_index

if TYPE_CHECKING:
    from collections.abc import Sequence


class TreeFormatError(ValueError):
    """Raised when a dump does not describe a data node tree."""


def load_record_trees(
    source: Path | str | Mapping[str, Any] | Sequence[Mapping[str, Any]],
    *,
    keys: KeyIndex | None = None,
) -> list[DataNode[Any]]:
    """Load one or more root nodes from a file path or an already parsed document."""

    document: object
    if isinstance(source, Path | str):
        path = Path(source)
        try:
            with path.open(encoding="utf-8") as handle:
                document = json.load(handle)
        except json.JSONDecodeError as exc:
            raise TreeFormatError(f"{path}: invalid JSON: {exc}") from exc
    else:
        document = source

    index = keys or builtin_key_index()
    if isinstance(document, Mapping):
        return [_build(document, index, "$")]
    if isinstance(document, list):
        return [_build(item, index, f"$[{position}]") for position, item in enumerate(document)]
    raise TreeFormatError("Expected a node object or a list of node objects")


def _build(item: object, keys: KeyIndex, location: str) -> DataNode[Any]:
    root = _node(item, keys, location)
    stack: list[tuple[DataNode[Any], Mapping[str, Any], str]] = [
        (root, _as_mapping(item, location), location)
    ]
    while stack:
        parent, entry, where = stack.pop()
        children = entry.get("children", [])
        if not isinstance(children, list):
            raise TreeFormatError(f"{where}.children must be a list")
        for position, child_entry in enumerate(children):
            child_where = f"{where}.children[{position}]"
            child = _node(child_entry, keys, child_where)
            parent.add_child(child)
            stack.append((child, _as_mapping(child_entry, child_where), child_where))
    return root


def _node(item: object, keys: KeyIndex, location: str) -> DataNode[Any]:
    entry = _as_mapping(item, location)
    name = entry.get("key")
    if not isinstance(name, str):
        raise TreeFormatError(f"{location}.key must be a string")
    try:
        key = keys.get(name)
    except UnknownKeyError as exc:
        raise TreeFormatError(f"{location}: {exc}") from exc
    ignored = entry.get("ignored", False)
    if not isinstance(ignored, bool):
        raise TreeFormatError(f"{location}.ignored must be a boolean")
    return DataNode(key, raw=entry.get("data"), ignored=ignored)


def _as_mapping(item: object, location: str) -> Mapping[str, Any]:
    if not isinstance(item, Mapping):
        raise TreeFormatError(f"{location} must be an object")
    return item
