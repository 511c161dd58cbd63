'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from hiertable.core.log import Log
from hiertable.core.records import Record, is_root_parent, normalize_key

__all__ = [
    "Node",
    "NodeIndex",
    "BuildResult",
    "build_tree",
    "walk_tree",
    "flatten",
]


@dataclass(slots=True, eq=False)
class Node:
    """
    In-memory tree element built from a Record.

    Nodes are mutated in place by edits so index entries and rendered rows
    keep pointing at the same object. `children` is owned by this node only.
    """
    key: str
    name: Any = None
    value: Any = None
    parent_key: Optional[str] = None
    children: List[Node] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def __repr__(self) -> str:
        return f"Node(key={self.key!r}, name={self.name!r}, value={self.value!r}, children={len(self.children)})"


class NodeIndex:
    """Key -> Node mapping, rebuilt wholesale on every load."""

    def __init__(self):
        self._nodes: Dict[str, Node] = {}

    def get(self, key: Any) -> Optional[Node]:
        norm = normalize_key(key)
        if norm is None:
            return None
        return self._nodes.get(norm)

    def add(self, node: Node) -> None:
        self._nodes[node.key] = node

    def keys(self) -> List[str]:
        return list(self._nodes.keys())

    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def __getitem__(self, key: Any) -> Node:
        node = self.get(key)
        if node is None:
            raise KeyError(key)
        return node

    def __contains__(self, key: Any) -> bool:
        return self.get(key) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)


@dataclass
class BuildResult:
    forest: List[Node]
    index: NodeIndex
    duplicates: List[str] = field(default_factory=list)

    def __iter__(self):
        # Allows `forest, index = build_tree(records)`.
        return iter((self.forest, self.index))


def build_tree(records: List[Record]) -> BuildResult:
    """
    Convert flat parent-pointer records into a forest.

    Pass 1 creates one Node per record and indexes it; a duplicated key
    keeps the last record seen. Pass 2 walks the records in input order and
    hangs every node under its parent, or appends it to the forest when the
    parent key is a root marker or not present in the index. Superseded
    duplicates are skipped in pass 2 so each node is placed exactly once.
    """
    index = NodeIndex()
    winners: Dict[str, int] = {}
    duplicates: List[str] = []

    # Pass 1: index every record.
    for position, record in enumerate(records):
        if record.key in winners and record.key not in duplicates:
            duplicates.append(record.key)
        winners[record.key] = position
        parent_key = None if is_root_parent(record.parent_key) else normalize_key(record.parent_key)
        index.add(Node(
            key=record.key,
            name=record.name,
            value=record.value,
            parent_key=parent_key,
            extra=dict(record.extra),
        ))

    for key in duplicates:
        Log.debug(f"Duplicate record key {key!r}; the last occurrence wins.", 0)

    # Pass 2: link children to parents in input order.
    forest: List[Node] = []
    for position, record in enumerate(records):
        if winners[record.key] != position:
            continue
        node = index.get(record.key)
        parent = index.get(node.parent_key) if node.parent_key is not None else None
        if parent is None:
            forest.append(node)
        else:
            parent.children.append(node)

    Log.debug(f"build_tree(): {len(index)} nodes, {len(forest)} roots.", 1)
    return BuildResult(forest=forest, index=index, duplicates=duplicates)


def walk_tree(forest: List[Node]) -> Iterator[Tuple[Node, int]]:
    """Yield (node, level) in pre-order using an explicit stack."""
    seen = set()
    stack = [(node, 0) for node in reversed(forest)]
    while stack:
        node, level = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        yield node, level
        for child in reversed(node.children):
            stack.append((child, level + 1))


def flatten(forest: List[Node]) -> List[str]:
    """Pre-order list of keys; every parent precedes its own subtree."""
    return [node.key for node, _level in walk_tree(forest)]
