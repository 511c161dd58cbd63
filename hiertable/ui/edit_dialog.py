from __future__ import annotations

from typing import Any, Tuple

import wx

from hiertable.ui.tree_table import display_value

__all__ = ["EditDialog", "ask_edit"]


class EditDialog(wx.Dialog):
    """Modal name/value editor, pre-filled from HierarchyTable.open_edit()."""

    def __init__(self, parent: wx.Window, name: Any, value: Any):
        super().__init__(parent, title="Edit Row", style=wx.DEFAULT_DIALOG_STYLE | wx.RESIZE_BORDER)

        self.name_ctrl = wx.TextCtrl(self, value=str(name), size=(280, -1))
        self.value_ctrl = wx.TextCtrl(self, value=display_value(value), size=(280, -1),
                                      style=wx.TE_PROCESS_ENTER)
        self.value_ctrl.Bind(wx.EVT_TEXT_ENTER, lambda evt: self.EndModal(wx.ID_OK))

        grid = wx.FlexGridSizer(rows=2, cols=2, vgap=6, hgap=8)
        grid.AddGrowableCol(1, 1)
        grid.Add(wx.StaticText(self, label="Name:"), 0, wx.ALIGN_CENTER_VERTICAL)
        grid.Add(self.name_ctrl, 1, wx.EXPAND)
        grid.Add(wx.StaticText(self, label="Value:"), 0, wx.ALIGN_CENTER_VERTICAL)
        grid.Add(self.value_ctrl, 1, wx.EXPAND)

        s = wx.BoxSizer(wx.VERTICAL)
        s.Add(grid, 1, wx.EXPAND | wx.ALL, 10)
        buttons = self.CreateSeparatedButtonSizer(wx.OK | wx.CANCEL)
        if buttons:
            s.Add(buttons, 0, wx.EXPAND | wx.ALL, 8)
        self.SetSizerAndFit(s)
        self.name_ctrl.SetFocus()

    def get_values(self) -> Tuple[str, str]:
        return self.name_ctrl.GetValue(), self.value_ctrl.GetValue()


def ask_edit(parent: wx.Window, name: Any, value: Any):
    """Show the dialog; returns (name, value) on OK or None on cancel."""
    with EditDialog(parent, name, value) as dlg:
        if dlg.ShowModal() != wx.ID_OK:
            return None
        return dlg.get_values()
