"""End-to-end tests for HierarchyTable against a recording view sink."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from hiertable.core.engine import HierarchyTable
from hiertable.core.log import Log
from hiertable.core.records import LoadError
from hiertable.core.source import JsonFileSource

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class FailingSource:
    def load_records(self) -> Any:
        raise LoadError("source unreachable")


class UnreachableSource:
    def load_records(self) -> Any:
        raise ConnectionError("host unreachable")


class InlineSource:
    def __init__(self, payload: Any) -> None:
        self.payload = payload

    def load_records(self) -> Any:
        return self.payload


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class TestLoad:
    def test_initial_render_shows_roots(self, table: HierarchyTable, view: Any) -> None:
        assert view.renders == 1
        assert view.calls[0] == ("render", ["1", "7"])
        assert table.loaded
        assert table.visible_keys() == ["1", "7"]

    def test_empty_engine(self) -> None:
        engine = HierarchyTable()
        assert not engine.loaded
        assert engine.forest == []
        assert engine.visible_keys() == []
        assert engine.invalid_keys() == []

    def test_load_from_file(self, tmp_path: Path, view: Any, total_records: list[dict]) -> None:
        path = tmp_path / "h.json"
        path.write_text(json.dumps({"data": total_records}), encoding="utf-8")
        engine = HierarchyTable(view=view)
        assert engine.load(JsonFileSource(path))
        assert [n.key for n in engine.forest] == ["1"]

    def test_failed_load_keeps_previous_tree(self, table: HierarchyTable, view: Any) -> None:
        table.toggle(1)
        before = table.visible_keys()
        assert table.load(FailingSource()) is False
        assert table.visible_keys() == before
        assert view.renders == 1

    def test_foreign_source_error_keeps_previous_tree(self, table: HierarchyTable, view: Any) -> None:
        table.toggle(1)
        before = table.visibility.snapshot()
        assert table.load(UnreachableSource()) is False
        assert table.visibility.snapshot() == before
        assert len(table.index) == 7
        assert view.renders == 1
        assert any("host unreachable" in text for _, text in Log.get())

    def test_malformed_payload_keeps_previous_tree(self, table: HierarchyTable) -> None:
        assert table.load(InlineSource({"rows": []})) is False
        assert len(table.index) == 7

    def test_reload_resets_state(self, table: HierarchyTable, view: Any, total_records: list[dict]) -> None:
        table.expand_all()
        table.select(2)
        assert table.load(InlineSource(total_records))
        assert view.renders == 2
        assert table.selected_key is None
        assert table.visible_keys() == ["1"]
        assert not table.is_expanded(1)
        assert table.node(7) is None

    def test_on_loaded_success(self, view: Any, total_records: list[dict]) -> None:
        engine = HierarchyTable(view=view)
        engine.on_loaded(total_records, None)
        assert engine.loaded
        assert view.renders == 1

    def test_on_loaded_error_tuple(self, view: Any) -> None:
        engine = HierarchyTable(view=view)
        engine.on_loaded(None, (LoadError("boom"), "Traceback ..."))
        assert not engine.loaded
        assert view.renders == 0

    def test_duplicates_exposed(self, view: Any) -> None:
        engine = HierarchyTable(view=view)
        engine.load_payload([
            {"key": 1, "parent": None},
            {"key": 1, "parent": None},
        ])
        assert engine.duplicates == ["1"]


# ---------------------------------------------------------------------------
# Expand / collapse through the engine
# ---------------------------------------------------------------------------


class TestVisibility:
    def test_toggle_returns_bool(self, table: HierarchyTable) -> None:
        assert table.toggle(1) is True
        assert table.toggle(7) is False
        assert table.toggle("missing") is False

    def test_expand_collapse_all(self, table: HierarchyTable) -> None:
        table.expand_all()
        assert table.visible_keys() == ["1", "2", "4", "6", "5", "3", "7"]
        table.collapse_all()
        assert table.visible_keys() == ["1", "7"]

    def test_lookups_on_unknown_keys(self, table: HierarchyTable) -> None:
        assert table.node("missing") is None
        assert not table.is_visible("missing")
        assert not table.is_expanded("missing")

    def test_set_visible_unknown_key_is_noop(self, table: HierarchyTable, view: Any) -> None:
        view.calls.clear()
        table.set_visible("missing", True)
        assert view.calls == []


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


class TestSelection:
    def test_single_selection(self, table: HierarchyTable, view: Any) -> None:
        view.calls.clear()
        table.select(1)
        table.select("7")
        assert table.selected_key == "7"
        assert view.selected == "7"
        assert view.calls == [
            ("mark_selected", "1"),
            ("clear_selection",),
            ("mark_selected", "7"),
        ]

    def test_reselect_is_noop(self, table: HierarchyTable, view: Any) -> None:
        table.select(1)
        view.calls.clear()
        table.select("1")
        assert view.calls == []

    def test_unknown_key_keeps_selection(self, table: HierarchyTable) -> None:
        table.select(1)
        table.select("missing")
        assert table.selected_key == "1"

    def test_clear_selection(self, table: HierarchyTable, view: Any) -> None:
        table.select(1)
        table.clear_selection()
        assert table.selected_key is None
        assert view.selected is None


# ---------------------------------------------------------------------------
# Editing
# ---------------------------------------------------------------------------


class TestEdit:
    def test_open_edit_prefills(self, table: HierarchyTable) -> None:
        assert table.open_edit(2) == ("B", 3)

    def test_open_edit_none_value_is_blank(self, table: HierarchyTable) -> None:
        assert table.open_edit(7) == ("Other", "")

    def test_open_edit_uses_selection(self, table: HierarchyTable) -> None:
        table.select(4)
        assert table.open_edit() == ("D", 1)

    def test_open_edit_without_selection(self, table: HierarchyTable) -> None:
        assert table.open_edit() is None

    def test_open_edit_unknown_key(self, table: HierarchyTable) -> None:
        assert table.open_edit("missing") is None

    def test_save_edit_updates_node_in_place(self, table: HierarchyTable, view: Any) -> None:
        node = table.node(2)
        view.calls.clear()
        table.save_edit(2, "Renamed", "15")
        assert table.node(2) is node
        assert (node.name, node.value) == ("Renamed", "15")
        assert view.calls == [("update_row_text", "2", "Renamed", "15")]

    def test_save_edit_keeps_structure_and_visibility(self, table: HierarchyTable) -> None:
        table.toggle(1)
        before = table.visibility.snapshot()
        table.save_edit(1, "Root", 100)
        assert table.visibility.snapshot() == before
        assert [c.key for c in table.node(1).children] == ["2", "3"]

    def test_save_edit_unknown_key(self, table: HierarchyTable, view: Any) -> None:
        view.calls.clear()
        table.save_edit("missing", "x", 1)
        assert view.calls == []


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    def test_total_example(self, view: Any, total_records: list[dict]) -> None:
        engine = HierarchyTable(view=view)
        engine.load_payload(total_records)
        assert engine.validate(1)
        engine.save_edit(2, "A", 15)
        assert not engine.validate(1)

    def test_leaves_and_unknown_keys_are_valid(self, table: HierarchyTable) -> None:
        assert table.validate(6)
        assert table.validate(7)
        assert table.validate("missing")

    def test_invalid_keys_in_display_order(self, table: HierarchyTable) -> None:
        assert table.invalid_keys() == []
        table.save_edit(6, "F", 5)
        table.save_edit(3, "C", 0)
        # 4 = 1 != 5, and 1 = 6 != 3 + 0; 2 = 3 == 1 + 2 still holds.
        assert table.invalid_keys() == ["1", "4"]

    def test_huge_edited_value_does_not_raise(self, table: HierarchyTable) -> None:
        table.save_edit(6, "F", 10 ** 400)
        assert not table.validate(4)
        assert table.invalid_keys() == ["4"]

    def test_validation_is_single_level(self, table: HierarchyTable) -> None:
        table.save_edit(6, "F", 5)
        assert not table.validate(4)
        assert table.validate(2)
        assert table.validate(1)
