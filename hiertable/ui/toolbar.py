from __future__ import annotations

import wx

class Toolbar(wx.Panel):
    """
    Data-driven toolbar with buttons defined in a simple list.
    Uses on_action_* methods on the main frame for event handling.
    """

    def __init__(self, parent: wx.Window, main_frame: wx.Frame):
        super().__init__(parent, style=wx.BORDER_NONE)
        self.main_frame = main_frame

        self._setup_painting()
        self._create_controls()
        self._setup_layout()

        self.SetMinSize((-1, 34))

    def _setup_painting(self):
        """Configure custom painting for gradient background"""
        self.SetDoubleBuffered(True)
        self.SetBackgroundStyle(wx.BG_STYLE_PAINT)
        self.Bind(wx.EVT_ERASE_BACKGROUND, lambda e: None)
        self.Bind(wx.EVT_PAINT, self._on_paint)

    def _create_controls(self):
        # (label, tooltip, method_name, needs_selection) or None for separator
        self.tools = [
            ("Open", "Open a hierarchy JSON file", "on_action_open", False),
            ("Reload", "Reload the current file", "on_action_reload", False),
            None,
            ("Expand All", "Show every row", "on_action_expand_all", False),
            ("Collapse All", "Hide every non-root row", "on_action_collapse_all", False),
            None,
            ("Edit", "Edit the selected row", "on_action_edit", True),
            ("Validate", "Check the selected row against its children", "on_action_validate", True),
            ("Validate All", "Check every branch", "on_action_validate_all", False),
        ]

        self.buttons = {}
        self.separators = []
        for item in self.tools:
            if item is None:
                self.separators.append(wx.StaticLine(self, style=wx.LI_VERTICAL))
                continue
            label, tooltip, method_name, _needs_sel = item
            btn = wx.Button(self, label=label, style=wx.BU_EXACTFIT)
            btn.SetToolTip(wx.ToolTip(tooltip))
            btn.SetCanFocus(False)
            btn.Bind(wx.EVT_BUTTON, getattr(self.main_frame, method_name))
            self.buttons[method_name] = btn

        self.set_selection_enabled(False)

    def _setup_layout(self):
        main_sizer = wx.BoxSizer(wx.HORIZONTAL)
        main_sizer.AddSpacer(2)

        separator_idx = 0
        for item in self.tools:
            if item is None:
                main_sizer.Add(self.separators[separator_idx], 0, wx.LEFT | wx.RIGHT | wx.EXPAND, 4)
                separator_idx += 1
            else:
                main_sizer.Add(self.buttons[item[2]], 0, wx.ALIGN_CENTER_VERTICAL | wx.ALL, 2)

        main_sizer.AddStretchSpacer(1)
        self.SetSizer(main_sizer)

    def set_selection_enabled(self, enabled: bool):
        """Edit/Validate are only usable while a row is selected."""
        for item in self.tools:
            if item is not None and item[3]:
                self.buttons[item[2]].Enable(enabled)

    def _on_paint(self, _evt):
        """Paint the gradient background"""
        dc = wx.AutoBufferedPaintDC(self)
        w, h = self.GetClientSize()

        top = wx.Colour(238, 238, 238)
        bot = wx.Colour(208, 208, 208)
        dc.GradientFillLinear(wx.Rect(0, 0, w, h), top, bot, wx.SOUTH)

        dc.SetPen(wx.Pen(wx.Colour(180, 180, 180)))
        dc.DrawLine(0, h - 1, w, h - 1)
