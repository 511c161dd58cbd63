'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Any, Optional, Tuple

from hiertable.core.decorators import requires_node
from hiertable.core.log import Log
from hiertable.core.tree import NodeIndex
from hiertable.core.view_sink import NullView, ViewSink

__all__ = ["EditController"]


class EditController:
    """Applies name/value edits to one node and keeps its rendered row in step."""

    def __init__(self, index: NodeIndex, view: Optional[ViewSink] = None):
        self.index = index
        self.view = view if view is not None else NullView()

    @requires_node
    def open_edit(self, key: str) -> Tuple[Any, Any]:
        """Current (name, value) for pre-filling an edit form."""
        node = self.index.get(key)
        name = node.name or ""
        value = node.value if node.value is not None else ""
        return name, value

    @requires_node
    def save_edit(self, key: str, new_name: Any, new_value: Any) -> None:
        """
        Store the new name and value on the existing node (same identity)
        and refresh only that node's row. The value is stored as entered;
        numeric interpretation happens at validation time.
        """
        node = self.index.get(key)
        node.name = new_name
        node.value = new_value
        Log.debug(f"save_edit(key={node.key!r}, name={new_name!r}, value={new_value!r})", 1)
        self.view.update_row_text(node.key, new_name, new_value)
