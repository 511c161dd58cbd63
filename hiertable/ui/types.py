# ui/types.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Row:
    """
    A single flattened row in the tree table.

    • key     – key of the node this row represents
    • level   – tree-indent level (root = 0)
    • branch  – True if the node has children (draws an expand glyph)
    """
    key: str
    level: int
    branch: bool
