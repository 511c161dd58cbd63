'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from hiertable.core.decorators import requires_node
from hiertable.core.log import Log
from hiertable.core.tree import Node, NodeIndex, walk_tree
from hiertable.core.view_sink import NullView, ViewSink

__all__ = ["VisibilityState"]


class VisibilityState:
    """
    Per-node "visible" and "expanded" flags, kept apart from the data tree so
    they can be reset without reloading.

    A non-root node may only be visible while its parent is visible and
    expanded. Expanding is shallow (only the immediate children appear);
    collapsing is deep (every descendant is hidden and its own indicator is
    reset to collapsed). Every change is pushed to the view sink.
    """

    def __init__(self, forest: List[Node], index: NodeIndex, view: Optional[ViewSink] = None):
        self.forest = forest
        self.index = index
        self.view = view if view is not None else NullView()
        self._roots = {node.key for node in forest}
        self._visible: Dict[str, bool] = {}
        self._expanded: Dict[str, bool] = {}
        self.reset()

    # ------------------------------------------------------------------ #
    # queries
    # ------------------------------------------------------------------ #

    def is_root(self, key: str) -> bool:
        return key in self._roots

    def is_visible(self, key: str) -> bool:
        return self._visible.get(key, False)

    def is_expanded(self, key: str) -> bool:
        return self._expanded.get(key, False)

    def visible_keys(self) -> List[str]:
        """Keys of the rows currently shown, in display (pre-order) order."""
        return [node.key for node, _level in walk_tree(self.forest) if self.is_visible(node.key)]

    def snapshot(self) -> Tuple[Dict[str, bool], Dict[str, bool]]:
        return dict(self._visible), dict(self._expanded)

    # ------------------------------------------------------------------ #
    # state changes
    # ------------------------------------------------------------------ #

    def reset(self) -> None:
        """Initial state: roots shown, everything else hidden, all collapsed."""
        self._visible = {key: key in self._roots for key in self.index}
        self._expanded = {key: False for key in self.index}

    def _set_visible_flag(self, key: str, visible: bool) -> None:
        if self._visible.get(key) != visible:
            self._visible[key] = visible
            self.view.set_row_visible(key, visible)

    def _set_expanded_flag(self, key: str, expanded: bool) -> None:
        if self._expanded.get(key) != expanded:
            self._expanded[key] = expanded
            self.view.set_row_expand_indicator(key, expanded)

    @requires_node
    def set_visible(self, key: str, should_show: bool) -> None:
        """
        Show or hide the children of `key`.

        Showing reveals only the immediate children, and only when `key`
        itself is visible; the node is marked expanded so its children never
        show under a collapsed indicator. Hiding walks the whole subtree with
        a worklist, hiding every descendant and resetting its expand indicator.
        """
        node = self.index.get(key)
        if should_show:
            if not self.is_visible(node.key):
                Log.debug(f"set_visible({key=}): row is hidden, children stay hidden.", 2)
                return
            if node.has_children:
                self._set_expanded_flag(node.key, True)
            for child in node.children:
                self._set_visible_flag(child.key, True)
            return

        seen = set()
        stack = list(node.children)
        while stack:
            child = stack.pop()
            if child.key in seen:
                continue
            seen.add(child.key)
            self._set_visible_flag(child.key, False)
            self._set_expanded_flag(child.key, False)
            stack.extend(child.children)

    @requires_node
    def toggle(self, key: str) -> bool:
        """
        Flip the expand indicator of `key` and show/hide its children to match.
        Returns True if anything changed; leaves and hidden rows are a no-op.
        """
        node = self.index.get(key)
        if not node.has_children:
            return False
        if not self.is_visible(node.key):
            Log.debug(f"toggle({key=}): row is hidden, ignored.", 2)
            return False

        expanded = not self.is_expanded(node.key)
        self._set_expanded_flag(node.key, expanded)
        self.set_visible(node.key, expanded)
        return True

    def expand_all(self) -> None:
        """Show every row and mark every branch expanded, in one flat pass."""
        for node in self.index.nodes():
            if not self.is_root(node.key):
                self._set_visible_flag(node.key, True)
            if node.has_children:
                self._set_expanded_flag(node.key, True)

    def collapse_all(self) -> None:
        """Hide every non-root row and reset every expand indicator."""
        for node in self.index.nodes():
            if not self.is_root(node.key):
                self._set_visible_flag(node.key, False)
            self._set_expanded_flag(node.key, False)
