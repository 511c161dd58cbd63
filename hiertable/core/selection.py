'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Optional

from hiertable.core.decorators import requires_node
from hiertable.core.tree import NodeIndex
from hiertable.core.view_sink import NullView, ViewSink

__all__ = ["SelectionState"]


class SelectionState:
    """At most one selected key; selecting a new key deselects the previous one."""

    def __init__(self, index: NodeIndex, view: Optional[ViewSink] = None):
        self.index = index
        self.view = view if view is not None else NullView()
        self.key: Optional[str] = None

    @requires_node
    def select(self, key: str) -> None:
        key = self.index.get(key).key
        if key == self.key:
            return
        if self.key is not None:
            self.view.clear_selection()
        self.key = key
        self.view.mark_selected(key)

    def clear(self) -> None:
        if self.key is None:
            return
        self.key = None
        self.view.clear_selection()
