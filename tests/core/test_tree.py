"""Tests for build_tree, NodeIndex and pre-order traversal."""

from __future__ import annotations

from typing import Any

import pytest

from hiertable.core.records import Record, records_from_payload
from hiertable.core.tree import Node, NodeIndex, build_tree, flatten, walk_tree

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _build(payload: list[dict[str, Any]]):
    return build_tree(records_from_payload(payload))


def _placements(forest: list[Node], index: NodeIndex) -> dict[str, int]:
    """How many times each node occurs as a root or as somebody's child."""
    counts = {key: 0 for key in index}
    for node in forest:
        counts[node.key] += 1
    for node in index.nodes():
        for child in node.children:
            counts[child.key] += 1
    return counts


# ---------------------------------------------------------------------------
# Basic structure
# ---------------------------------------------------------------------------


class TestBuildTree:
    def test_total_example(self, total_records: list[dict]) -> None:
        forest, index = _build(total_records)
        assert [n.key for n in forest] == ["1"]
        assert [c.key for c in forest[0].children] == ["2", "3"]
        assert len(index) == 3

    def test_empty_input(self) -> None:
        result = build_tree([])
        assert result.forest == []
        assert len(result.index) == 0
        assert result.duplicates == []

    def test_unsorted_keys_and_forward_parents(self, deep_records: list[dict]) -> None:
        forest, index = _build(deep_records)
        assert [n.key for n in forest] == ["1", "7"]
        assert [c.key for c in index["2"].children] == ["4", "5"]
        assert [c.key for c in index["4"].children] == ["6"]

    def test_children_follow_input_order(self) -> None:
        forest, _ = _build([
            {"key": "p", "parent": None},
            {"key": "z", "parent": "p"},
            {"key": "a", "parent": "p"},
            {"key": "m", "parent": "p"},
        ])
        assert [c.key for c in forest[0].children] == ["z", "a", "m"]

    def test_zero_and_string_zero_are_both_roots(self) -> None:
        forest, index = _build([
            {"key": 1, "parent": "0"},
            {"key": 2, "parent": 0},
            {"key": 3, "parent": None},
        ])
        assert [n.key for n in forest] == ["1", "2", "3"]
        assert all(index[k].parent_key is None for k in ("1", "2", "3"))

    def test_unresolvable_parent_becomes_root(self) -> None:
        forest, index = _build([
            {"key": 1, "parent": None},
            {"key": 2, "parent": 99},
        ])
        assert [n.key for n in forest] == ["1", "2"]
        assert index["2"].parent_key == "99"

    def test_numeric_and_string_parent_keys_resolve_to_same_node(self) -> None:
        forest, index = _build([
            {"key": "4", "parent": None},
            {"key": 5, "parent": 4},
            {"key": 6, "parent": "4"},
            {"key": 7, "parent": 4.0},
        ])
        assert [n.key for n in forest] == ["4"]
        assert [c.key for c in index[4].children] == ["5", "6", "7"]

    def test_self_parent_is_attached_to_itself(self) -> None:
        forest, index = _build([{"key": 1, "parent": 1, "value": 5}])
        assert forest == []
        assert index["1"].children == [index["1"]]

    def test_extra_fields_copied_to_node(self) -> None:
        _, index = _build([{"key": 1, "parent": None, "unit": "EUR"}])
        assert index["1"].extra == {"unit": "EUR"}

    def test_build_result_unpacks_to_forest_and_index(self, total_records: list[dict]) -> None:
        result = _build(total_records)
        forest, index = result
        assert forest is result.forest
        assert index is result.index


class TestPlacementInvariant:
    """Every node sits in exactly one place: a root or one parent's child."""

    def test_each_node_placed_once(self, deep_records: list[dict]) -> None:
        forest, index = _build(deep_records)
        assert set(_placements(forest, index).values()) == {1}

    def test_duplicates_placed_once(self) -> None:
        forest, index = _build([
            {"key": 1, "parent": None},
            {"key": 2, "parent": None},
            {"key": 3, "parent": 1, "name": "first"},
            {"key": 3, "parent": 2, "name": "second"},
        ])
        assert set(_placements(forest, index).values()) == {1}


class TestDuplicateKeys:
    def test_last_record_wins(self) -> None:
        result = _build([
            {"key": 1, "parent": None, "name": "first", "value": 1},
            {"key": 2, "parent": None},
            {"key": 1, "parent": 2, "name": "second", "value": 2},
        ])
        node = result.index["1"]
        assert (node.name, node.value) == ("second", 2)
        assert [n.key for n in result.forest] == ["2"]
        assert result.index["2"].children == [node]

    def test_duplicates_reported_once_each(self) -> None:
        result = _build([
            {"key": 1, "parent": None},
            {"key": 1, "parent": None},
            {"key": "1", "parent": None},
            {"key": 2, "parent": None},
        ])
        assert result.duplicates == ["1"]
        assert len(result.index) == 2


# ---------------------------------------------------------------------------
# NodeIndex
# ---------------------------------------------------------------------------


class TestNodeIndex:
    def test_lookup_is_key_type_agnostic(self, total_records: list[dict]) -> None:
        _, index = _build(total_records)
        assert index.get(2) is index.get("2") is index[2.0]

    def test_missing_key(self, total_records: list[dict]) -> None:
        _, index = _build(total_records)
        assert index.get(99) is None
        assert index.get(None) is None
        assert 99 not in index
        with pytest.raises(KeyError):
            index[99]

    def test_iteration_and_keys(self, total_records: list[dict]) -> None:
        _, index = _build(total_records)
        assert list(index) == index.keys() == ["1", "2", "3"]
        assert [n.key for n in index.nodes()] == ["1", "2", "3"]


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


class TestWalkTree:
    def test_preorder_with_levels(self, deep_records: list[dict]) -> None:
        forest, _ = _build(deep_records)
        walked = [(n.key, level) for n, level in walk_tree(forest)]
        assert walked == [
            ("1", 0), ("2", 1), ("4", 2), ("6", 3), ("5", 2), ("3", 1), ("7", 0),
        ]

    def test_flatten_contains_every_key_once(self, deep_records: list[dict]) -> None:
        forest, index = _build(deep_records)
        keys = flatten(forest)
        assert sorted(keys) == sorted(index.keys())
        assert len(keys) == len(set(keys))

    def test_parent_before_children_and_subtree_contiguous(self, deep_records: list[dict]) -> None:
        forest, index = _build(deep_records)
        keys = flatten(forest)
        pos = {k: i for i, k in enumerate(keys)}
        for node in index.nodes():
            for child in node.children:
                assert pos[node.key] < pos[child.key]
        # Node 2's subtree (2, 4, 6, 5) comes before its sibling 3.
        assert keys[pos["2"]:pos["3"]] == ["2", "4", "6", "5"]

    def test_deep_chain_does_not_hit_recursion_limit(self) -> None:
        depth = 5000
        # Keys start at 1: a parent key of "0" would mark a root.
        records = [Record(key="1", parent_key=None)]
        records += [Record(key=str(i), parent_key=str(i - 1)) for i in range(2, depth + 1)]
        forest, _ = build_tree(records)
        walked = list(walk_tree(forest))
        assert len(walked) == depth
        assert walked[-1][1] == depth - 1

    def test_cycle_is_not_revisited(self) -> None:
        a = Node(key="a")
        b = Node(key="b")
        a.children.append(b)
        b.children.append(a)
        assert [n.key for n, _ in walk_tree([a])] == ["a", "b"]
