"""Shared fixtures for the HierTable core tests.

Provides a RecordingView sink that logs every call the engine makes, plus a
few small record payloads used across modules.
"""

from __future__ import annotations

from typing import Any

import pytest

from hiertable.core.engine import HierarchyTable

# ---------------------------------------------------------------------------
# Fake view sink
# ---------------------------------------------------------------------------


class RecordingView:
    """ViewSink that records calls and mirrors the row state it was told about."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.visible: dict[str, bool] = {}
        self.expanded: dict[str, bool] = {}
        self.text: dict[str, tuple[Any, Any]] = {}
        self.selected: str | None = None
        self.renders = 0

    def render(self, forest: list[Any]) -> None:
        self.renders += 1
        self.calls.append(("render", [n.key for n in forest]))
        self.visible, self.expanded, self.text = {}, {}, {}
        self.selected = None
        stack = [(n, 0) for n in reversed(forest)]
        while stack:
            node, level = stack.pop()
            self.visible[node.key] = level == 0
            self.expanded[node.key] = False
            self.text[node.key] = (node.name, node.value)
            stack.extend((c, level + 1) for c in reversed(node.children))

    def set_row_visible(self, key: str, visible: bool) -> None:
        self.calls.append(("set_row_visible", key, visible))
        self.visible[key] = visible

    def set_row_expand_indicator(self, key: str, expanded: bool) -> None:
        self.calls.append(("set_row_expand_indicator", key, expanded))
        self.expanded[key] = expanded

    def update_row_text(self, key: str, name: Any, value: Any) -> None:
        self.calls.append(("update_row_text", key, name, value))
        self.text[key] = (name, value)

    def mark_selected(self, key: str) -> None:
        self.calls.append(("mark_selected", key))
        self.selected = key

    def clear_selection(self) -> None:
        self.calls.append(("clear_selection",))
        self.selected = None


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def total_records() -> list[dict[str, Any]]:
    """Total(30) = A(10) + B(20)."""
    return [
        {"key": 1, "parent": None, "name": "Total", "value": 30},
        {"key": 2, "parent": 1, "name": "A", "value": 10},
        {"key": 3, "parent": 1, "name": "B", "value": 20},
    ]


@pytest.fixture
def deep_records() -> list[dict[str, Any]]:
    """Two roots; root 1 has a three-level branch, keys deliberately unsorted.

    1
    ├── 2
    │   ├── 4
    │   │   └── 6
    │   └── 5
    └── 3
    7
    """
    return [
        {"key": 6, "parent": 4, "name": "F", "value": 1},
        {"key": 1, "parent": 0, "name": "Root", "value": 6},
        {"key": 2, "parent": "1", "name": "B", "value": 3},
        {"key": 4, "parent": 2, "name": "D", "value": 1},
        {"key": 3, "parent": 1, "name": "C", "value": 3},
        {"key": 5, "parent": 2, "name": "E", "value": 2},
        {"key": 7, "parent": "0", "name": "Other", "value": None},
    ]


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def table(view: RecordingView, deep_records: list[dict[str, Any]]) -> HierarchyTable:
    """Engine loaded with deep_records and wired to a RecordingView."""
    engine = HierarchyTable(view=view)
    assert engine.load_payload(deep_records)
    return engine
