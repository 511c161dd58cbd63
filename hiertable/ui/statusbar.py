################################################################################################
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.

This file holds the code for the main window's status bar and its log viewer.
'''
################################################################################################

import wx

from hiertable.core.log import Log

################################################################################################
class LogList(wx.VListBox):
    """Virtual list over the Log entries: index, timestamp, message."""
    INDEX_W = 7
    DATE_W  = 20
    ALERT_COLOUR = (255, 96, 96)
    ALERT_WORDS = ("Error", "Duplicate", "mismatch", "failed")

    def __init__(self, parent, log, size):
        super().__init__(parent, style=wx.SIMPLE_BORDER, size=size)
        self.log = log
        self.font = wx.Font(wx.FontInfo(9).Family(wx.FONTFAMILY_TELETYPE))
        dc = wx.MemoryDC()
        dc.SetFont(self.font)
        self.char_w, self.char_h = dc.GetTextExtent("X")
        self.SetBackgroundColour((0, 0, 0))
        self.SetItemCount(self.log.count())
        self.ScrollToRow(max(0, self.log.count() - 1))

    @classmethod
    def _is_alert(cls, text):
        return any(word in text for word in cls.ALERT_WORDS)

    def _lines(self, index):
        return self.log.get(index)[1].replace("\t", "    ").split("\n")

    def OnMeasureItem(self, index):
        return max(1, len(self._lines(index))) * self.char_h

    def OnDrawItem(self, dc, rect, index):
        timestamp, text = self.log.get(index)
        dc.SetFont(self.font)
        x, y = rect[0], rect[1]
        dc.SetTextForeground((255, 255, 0))
        dc.DrawText(f"{index}", x, y)
        dc.SetTextForeground((255, 0, 255))
        dc.DrawText(timestamp, x + self.INDEX_W * self.char_w, y)
        dc.SetTextForeground(self.ALERT_COLOUR if self._is_alert(text) else (128, 192, 128))
        dc.DrawText("\n".join(self._lines(index)), x + (self.INDEX_W + self.DATE_W) * self.char_w, y)

    def OnDrawBackground(self, dc, rect, index):
        colour = (64, 0, 64) if self.IsSelected(index) else (0, 0, 0)
        dc.SetBrush(wx.Brush(colour))
        dc.SetPen(wx.Pen((0, 0, 100)))
        dc.DrawRectangle(rect[0], rect[1], rect[2], rect[3])

################################################################################################
class StatusBarPopup(wx.PopupTransientWindow):
    WIN_HEIGHT = 300

    def __init__(self, parent, log):
        super().__init__(parent, wx.SIMPLE_BORDER)
        box_main = wx.BoxSizer(wx.VERTICAL)
        self.log_list = LogList(self, log, (parent.Size[0], self.WIN_HEIGHT))
        box_main.Add(self.log_list, 1, wx.EXPAND)
        self.SetSizerAndFit(box_main)

    def OnDismiss(self):
        self.Parent.popup = None

################################################################################################
class StatusBar(wx.StatusBar):
    """Message field plus a row-count field; right-click opens the log menu."""
    COUNT_W = 220

    def __init__(self, parent):
        super().__init__(parent)
        self.popup = None
        self.SetFieldsCount(2)
        self.SetStatusWidths([-1, self.COUNT_W])
        self.Bind(wx.EVT_RIGHT_DOWN, self.OnRightDown)
        Log.add("Create StatusBar")

    def set_row_counts(self, shown: int, total: int):
        if total:
            self.SetStatusText(f"{shown} of {total} rows shown", 1)
        else:
            self.SetStatusText("", 1)

    def OnRightDown(self, event):
        """Right-click menu with log options."""
        menu = wx.Menu()
        item_show_log = menu.Append(wx.ID_ANY, "Show Log")
        menu.AppendSeparator()
        item_save = menu.Append(wx.ID_SAVE, "Save Log to File...")
        item_copy = menu.Append(wx.ID_COPY, "Copy Log to Clipboard")
        menu.AppendSeparator()
        item_clear = menu.Append(wx.ID_CLEAR, "Clear Log")

        self.Bind(wx.EVT_MENU, self.OnShowLog, item_show_log)
        self.Bind(wx.EVT_MENU, self.OnSaveLogToFile, item_save)
        self.Bind(wx.EVT_MENU, self.OnCopyLogToClipboard, item_copy)
        self.Bind(wx.EVT_MENU, self.OnClearLog, item_clear)

        self.PopupMenu(menu)
        menu.Destroy()

    def OnShowLog(self, event):
        if self.popup is not None:
            self.popup.Dismiss()
        self.popup = StatusBarPopup(self, Log)
        pos = self.ClientToScreen((0, 0))
        self.popup.Position((pos[0], pos[1] - StatusBarPopup.WIN_HEIGHT), (0, 0))
        self.popup.Popup()

    def OnSaveLogToFile(self, event):
        with wx.FileDialog(
            self,
            "Save Log to file",
            wildcard="Text files (*.txt)|*.txt|Log files (*.log)|*.log|All files (*.*)|*.*",
            style=wx.FD_SAVE | wx.FD_OVERWRITE_PROMPT
        ) as dlg:
            if dlg.ShowModal() == wx.ID_CANCEL:
                return
            path = dlg.GetPath()
            if Log.write_to_file(path):
                self.SetStatusText(f"Log saved to: {path}")
            else:
                self.SetStatusText(f"Error: could not write {path}")

    def OnCopyLogToClipboard(self, event):
        log_entries = Log.get()
        content = "\n".join(f"[{timestamp}] {message}" for timestamp, message in log_entries)
        if wx.TheClipboard.Open():
            wx.TheClipboard.SetData(wx.TextDataObject(content))
            wx.TheClipboard.Close()
            self.SetStatusText(f"Copied {len(log_entries)} log entries to clipboard")
        else:
            self.SetStatusText("Error: Could not access clipboard")

    def OnClearLog(self, event):
        result = wx.MessageBox(
            "Are you sure you want to clear the entire log?",
            "Clear Log",
            wx.YES_NO | wx.ICON_QUESTION
        )
        if result == wx.YES:
            Log.clear()
            self.SetStatusText("Log cleared")

################################################################################################
