# ui/tree_table.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

import wx

from hiertable.core.log import Log
from hiertable.core.tree import Node, walk_tree
from hiertable.ui.constants import (
    NAME_COL_W,
    VALUE_COL_W,
    INDENT,
    GLYPH_COLLAPSED,
    GLYPH_EXPANDED,
    GLYPH_LEAF,
    INVALID_BG_COLOR,
)
from hiertable.ui.types import Row

__all__ = ["TreeTableView"]


def display_value(value: Any) -> str:
    return "" if value is None else str(value)


class TreeTableView(wx.ListCtrl):
    """
    Report-mode list that projects the engine's state: one line per visible
    row, name indented by depth behind a ▶/▼ glyph for branches.

    Implements the ViewSink protocol. It never decides what is visible on
    its own; user gestures are forwarded to the callbacks and the engine
    answers with set_row_visible()/set_row_expand_indicator()/... calls.
    """

    def __init__(self, parent: wx.Window, on_toggle=None, on_select=None, on_activate=None):
        super().__init__(parent, style=wx.LC_REPORT | wx.LC_SINGLE_SEL | wx.BORDER_SIMPLE)
        self._on_toggle = on_toggle
        self._on_select = on_select
        self._on_activate = on_activate

        self.InsertColumn(0, "Name", width=NAME_COL_W)
        self.InsertColumn(1, "Value", width=VALUE_COL_W, format=wx.LIST_FORMAT_RIGHT)

        # every row in display order + per-row display state
        self._rows: List[Row] = []
        self._visible: Dict[str, bool] = {}
        self._expanded: Dict[str, bool] = {}
        self._text: Dict[str, Tuple[Any, Any]] = {}
        self._invalid: Set[str] = set()
        self._selected: Optional[str] = None

        # rows currently in the list control, by position
        self._shown: List[Row] = []
        self._sync_pending = False
        self._syncing = False

        self.Bind(wx.EVT_LEFT_DOWN, self._on_left_down)
        self.Bind(wx.EVT_LIST_ITEM_SELECTED, self._on_item_selected)
        self.Bind(wx.EVT_LIST_ITEM_ACTIVATED, self._on_item_activated)

    # ------------------------------------------------------------------ #
    # ViewSink
    # ------------------------------------------------------------------ #

    def render(self, forest: List[Node]) -> None:
        self._rows = []
        self._text = {}
        for node, level in walk_tree(forest):
            self._rows.append(Row(key=node.key, level=level, branch=node.has_children))
            self._text[node.key] = (node.name, node.value)
        self._visible = {row.key: row.level == 0 for row in self._rows}
        self._expanded = {row.key: False for row in self._rows}
        self._invalid = set()
        self._selected = None
        Log.debug(f"render(): {len(self._rows)} rows.", 2)
        self._sync()

    def set_row_visible(self, key: str, visible: bool) -> None:
        self._visible[key] = visible
        self._schedule_sync()

    def set_row_expand_indicator(self, key: str, expanded: bool) -> None:
        self._expanded[key] = expanded
        self._schedule_sync()

    def update_row_text(self, key: str, name: Any, value: Any) -> None:
        self._text[key] = (name, value)
        idx = self._shown_index(key)
        if idx is not None and not self._sync_pending:
            self.SetItem(idx, 0, self._name_cell(self._shown[idx]))
            self.SetItem(idx, 1, display_value(value))

    def mark_selected(self, key: str) -> None:
        self._selected = key
        idx = self._shown_index(key)
        if idx is not None and not self._sync_pending:
            self._syncing = True
            try:
                self.Select(idx)
                self.EnsureVisible(idx)
            finally:
                self._syncing = False

    def clear_selection(self) -> None:
        idx = self._shown_index(self._selected) if self._selected else None
        self._selected = None
        if idx is not None and not self._sync_pending:
            self._syncing = True
            try:
                self.Select(idx, on=0)
            finally:
                self._syncing = False

    # ------------------------------------------------------------------ #
    # extras used by MainFrame
    # ------------------------------------------------------------------ #

    def mark_invalid(self, keys: Iterable[str]) -> None:
        """Highlight rows that failed the sum rule (replaces previous marks)."""
        self._invalid = set(keys)
        self._schedule_sync()

    def shown_keys(self) -> List[str]:
        return [row.key for row in self._shown]

    # ------------------------------------------------------------------ #
    # list maintenance
    # ------------------------------------------------------------------ #

    def _name_cell(self, row: Row) -> str:
        if row.branch:
            glyph = GLYPH_EXPANDED if self._expanded.get(row.key) else GLYPH_COLLAPSED
        else:
            glyph = GLYPH_LEAF
        name = self._text.get(row.key, (None, None))[0]
        return f"{INDENT * row.level}{glyph} {name or ''}"

    def _shown_index(self, key: Optional[str]) -> Optional[int]:
        for i, row in enumerate(self._shown):
            if row.key == key:
                return i
        return None

    def _schedule_sync(self) -> None:
        """Coalesce a burst of state changes (e.g. collapse_all) into one redraw."""
        if self._sync_pending:
            return
        self._sync_pending = True
        wx.CallAfter(self._sync)

    def _sync(self) -> None:
        self._sync_pending = False
        self._syncing = True
        self.Freeze()
        try:
            self.DeleteAllItems()
            self._shown = [row for row in self._rows if self._visible.get(row.key)]
            for i, row in enumerate(self._shown):
                self.InsertItem(i, self._name_cell(row))
                self.SetItem(i, 1, display_value(self._text[row.key][1]))
                if row.key in self._invalid:
                    self.SetItemBackgroundColour(i, INVALID_BG_COLOR)
                if row.key == self._selected:
                    self.Select(i)
        finally:
            self.Thaw()
            self._syncing = False

    # ------------------------------------------------------------------ #
    # user gestures
    # ------------------------------------------------------------------ #

    def _glyph_width(self, row: Row) -> int:
        w, _h = self.GetTextExtent(f"{INDENT * row.level}{GLYPH_COLLAPSED} ")
        return w + 6

    def _on_left_down(self, evt: wx.MouseEvent):
        idx, _flags = self.HitTest(evt.GetPosition())
        if 0 <= idx < len(self._shown):
            row = self._shown[idx]
            if row.branch and evt.GetX() <= self._glyph_width(row):
                if self._on_toggle:
                    self._on_toggle(row.key)
                return
        evt.Skip()

    def _on_item_selected(self, evt: wx.ListEvent):
        if self._syncing:
            return
        idx = evt.GetIndex()
        if 0 <= idx < len(self._shown) and self._on_select:
            self._on_select(self._shown[idx].key)

    def _on_item_activated(self, evt: wx.ListEvent):
        idx = evt.GetIndex()
        if 0 <= idx < len(self._shown) and self._on_activate:
            self._on_activate(self._shown[idx].key, self._shown[idx].branch)
