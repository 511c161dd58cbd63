'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

import wx
from pathlib import Path

from hiertable.core.log import Log
from hiertable.core.io_worker import IOWorker
from hiertable.core.loader import RecordLoader
from hiertable.core.engine import HierarchyTable
from hiertable.core.source import JsonFileSource
from hiertable.ui.constants import APP_NAME, FRAME_SIZE, FRAME_MIN_SIZE, DEFAULT_BG_COLOR
from hiertable.ui.edit_dialog import ask_edit
from hiertable.ui.file_dialogs import choose_records_file
from hiertable.ui.statusbar import StatusBar
from hiertable.ui.toolbar import Toolbar
from hiertable.ui.tree_table import TreeTableView


class MainFrame(wx.Frame):
    """Main application frame: toolbar, tree table and status bar around one engine."""

    def __init__(self, verbosity: int = 0, path: str | None = None):
        super().__init__(None, title=APP_NAME, size=FRAME_SIZE)
        self.SetMinSize(FRAME_MIN_SIZE)
        Log.set_verbosity(verbosity)

        self.loader = RecordLoader(IOWorker(dispatch=wx.CallAfter), self._on_records_ready)

        self._build_menu()
        self.statusbar = StatusBar(self)
        self.SetStatusBar(self.statusbar)
        self.SetStatusText("Ready.")
        self._build_body()

        # The engine talks to the table only through the ViewSink methods.
        self.engine = HierarchyTable(view=self.table)

        self.Bind(wx.EVT_CLOSE, self.on_close)
        if path:
            wx.CallAfter(self.open_path, path)

    # ---------------- UI scaffolding ----------------

    def _build_menu(self):
        mb = wx.MenuBar()

        m_file = wx.Menu()
        m_open = m_file.Append(wx.ID_OPEN, "&Open...\tCtrl-O")
        m_reload = m_file.Append(wx.ID_REFRESH, "&Reload\tCtrl-R")
        m_file.AppendSeparator()
        m_quit = m_file.Append(wx.ID_EXIT, "E&xit")
        self.Bind(wx.EVT_MENU, self.on_action_open, m_open)
        self.Bind(wx.EVT_MENU, self.on_action_reload, m_reload)
        self.Bind(wx.EVT_MENU, lambda evt: self.Close(), m_quit)
        mb.Append(m_file, "&File")

        m_view = wx.Menu()
        m_expand = m_view.Append(wx.ID_ANY, "&Expand All\tCtrl-E")
        m_collapse = m_view.Append(wx.ID_ANY, "&Collapse All\tCtrl-W")
        self.Bind(wx.EVT_MENU, self.on_action_expand_all, m_expand)
        self.Bind(wx.EVT_MENU, self.on_action_collapse_all, m_collapse)
        mb.Append(m_view, "&View")

        m_tools = wx.Menu()
        m_edit = m_tools.Append(wx.ID_EDIT, "&Edit Selected...\tF2")
        m_validate = m_tools.Append(wx.ID_ANY, "&Validate Selected\tF5")
        m_validate_all = m_tools.Append(wx.ID_ANY, "Validate &All\tShift-F5")
        self.Bind(wx.EVT_MENU, self.on_action_edit, m_edit)
        self.Bind(wx.EVT_MENU, self.on_action_validate, m_validate)
        self.Bind(wx.EVT_MENU, self.on_action_validate_all, m_validate_all)
        mb.Append(m_tools, "&Tools")

        self.SetMenuBar(mb)

    def _build_body(self):
        root = wx.Panel(self)
        root.SetBackgroundColour(DEFAULT_BG_COLOR)
        main_sizer = wx.BoxSizer(wx.VERTICAL)

        self._toolbar = Toolbar(root, self)
        main_sizer.Add(self._toolbar, 0, wx.EXPAND)

        self.table = TreeTableView(
            root,
            on_toggle=self._on_row_toggle,
            on_select=self._on_row_select,
            on_activate=self._on_row_activate,
        )
        main_sizer.Add(self.table, 1, wx.EXPAND | wx.ALL, 6)

        root.SetSizer(main_sizer)

    # ---------------- Loading ----------------

    def open_path(self, path: str):
        self._start_load(JsonFileSource(path))

    def _start_load(self, source: JsonFileSource | None = None):
        if source is None and self.loader.source is None:
            self.SetStatusText("No file open.")
            return
        if not self.loader.start(source):
            self.SetStatusText("A load is already in progress.")
            return
        self.SetStatusText(f"Loading {self.loader.source.path}...")

    def _on_records_ready(self, source, result, error):
        if error:
            self.engine.load_failed(error)
            err, _tb = error
            wx.MessageBox(str(err), "Load Failed", wx.ICON_ERROR)
            self.SetStatusText("Load failed.")
            return

        if not self.engine.load_payload(result):
            self.SetStatusText("Load failed: malformed records (see log).")
            return

        self._toolbar.set_selection_enabled(False)
        name = Path(source.path).name
        self.SetTitle(f"{APP_NAME} — {name}")
        msg = f"Loaded {len(self.engine.index)} rows from {name}."
        if self.engine.duplicates:
            msg += f" {len(self.engine.duplicates)} duplicate key(s); last occurrence kept."
        self.SetStatusText(msg)
        self._update_counts()

    def _update_counts(self):
        self.statusbar.set_row_counts(len(self.engine.visible_keys()), len(self.engine.index))

    # ---------------- Row callbacks ----------------

    def _on_row_toggle(self, key: str):
        if self.engine.toggle(key):
            self._update_counts()

    def _on_row_select(self, key: str):
        self.engine.select(key)
        self._toolbar.set_selection_enabled(self.engine.selected_key is not None)

    def _on_row_activate(self, key: str, branch: bool):
        if branch:
            self._on_row_toggle(key)
        else:
            self.engine.select(key)
            self.on_action_edit()

    # ---------------- Actions ----------------

    def on_action_open(self, evt=None):
        default_dir = self.loader.source.path.parent if self.loader.source else None
        path = choose_records_file(self, default_dir=default_dir)
        if path:
            self.open_path(path)

    def on_action_reload(self, evt=None):
        self._start_load()

    def on_action_expand_all(self, evt=None):
        self.engine.expand_all()
        self._update_counts()

    def on_action_collapse_all(self, evt=None):
        self.engine.collapse_all()
        self._update_counts()

    def on_action_edit(self, evt=None):
        key = self.engine.selected_key
        current = self.engine.open_edit(key)
        if current is None:
            self.SetStatusText("Select a row to edit.")
            return
        values = ask_edit(self, *current)
        if values is None:
            return
        self.engine.save_edit(key, *values)
        self.SetStatusText(f"Row {key} updated.")

    def on_action_validate(self, evt=None):
        key = self.engine.selected_key
        if key is None:
            self.SetStatusText("Select a row to validate.")
            return
        if self.engine.validate(key):
            self.SetStatusText(f"Row {key}: value matches the sum of its children.")
        else:
            self.SetStatusText(f"Row {key}: value does NOT match the sum of its children.")

    def on_action_validate_all(self, evt=None):
        bad = self.engine.invalid_keys()
        self.table.mark_invalid(bad)
        if bad:
            Log.debug(f"Sum mismatch in rows: {', '.join(bad)}", 0)
            self.SetStatusText(f"{len(bad)} row(s) do not match their children: {', '.join(bad[:10])}")
        else:
            self.SetStatusText("All rows match the sum of their children.")

    def on_close(self, event):
        Log.debug("MainFrame closing.", 1)
        event.Skip()
