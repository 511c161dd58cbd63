'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
import wx

# Shared UI constants
APP_NAME = "HierTable"
FRAME_SIZE = (900, 700)
FRAME_MIN_SIZE = (600, 400)
NAME_COL_W = 420
VALUE_COL_W = 160
INDENT = "    "
GLYPH_COLLAPSED = "▶"
GLYPH_EXPANDED = "▼"
GLYPH_LEAF = " "
INVALID_BG_COLOR = wx.Colour(255, 220, 220)
DEFAULT_BG_COLOR = wx.Colour(240, 240, 255)
JSON_WILDCARD = "JSON files (*.json)|*.json|All files (*.*)|*.*"
