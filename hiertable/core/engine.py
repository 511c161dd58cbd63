'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

import traceback
from typing import Any, List, Optional, Tuple

from hiertable.core.edit import EditController
from hiertable.core.log import Log
from hiertable.core.records import LoadError, records_from_payload
from hiertable.core.selection import SelectionState
from hiertable.core.source import RecordSource
from hiertable.core.tree import BuildResult, Node, NodeIndex, build_tree, walk_tree
from hiertable.core.validate import validate_aggregate
from hiertable.core.view_sink import NullView, ViewSink
from hiertable.core.visibility import VisibilityState

__all__ = ["HierarchyTable"]


class HierarchyTable:
    """
    Centralized API for the hierarchy tree: owns the node index, forest,
    visibility and selection state, and pushes every change to one view sink.

    All operations run to completion on the caller's thread. A load replaces
    the whole tree, so Node references from a previous load must not be kept.
    """

    def __init__(self, view: Optional[ViewSink] = None):
        self.view = view if view is not None else NullView()
        self._install(BuildResult(forest=[], index=NodeIndex()))
        self._loaded = False

    # ------------------------------------------------------------------ #
    # properties
    # ------------------------------------------------------------------ #

    @property
    def forest(self) -> List[Node]:
        return self._forest

    @property
    def index(self) -> NodeIndex:
        return self._index

    @property
    def duplicates(self) -> List[str]:
        return list(self._duplicates)

    @property
    def selected_key(self) -> Optional[str]:
        return self._selection.key

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def visibility(self) -> VisibilityState:
        return self._visibility

    # ------------------------------------------------------------------ #
    # loading
    # ------------------------------------------------------------------ #

    def _install(self, result: BuildResult) -> None:
        self._forest = result.forest
        self._index = result.index
        self._duplicates = result.duplicates
        self._visibility = VisibilityState(self._forest, self._index, self.view)
        self._selection = SelectionState(self._index, self.view)
        self._editor = EditController(self._index, self.view)

    def load(self, source: RecordSource) -> bool:
        """Fetch from `source` and rebuild. Returns False (state untouched) on failure."""
        try:
            payload = source.load_records()
        except LoadError as e:
            self.load_failed(e)
            return False
        except Exception as e:
            # Sources other than JsonFileSource raise their own error types.
            self.load_failed((e, traceback.format_exc()))
            return False
        return self.load_payload(payload)

    def load_payload(self, payload: Any) -> bool:
        """Rebuild from a record list or {'data': [...]} wrapper."""
        try:
            records = records_from_payload(payload)
        except LoadError as e:
            self.load_failed(e)
            return False

        self._install(build_tree(records))
        self._loaded = True
        Log.debug(f"Loaded {len(self._index)} records, {len(self._forest)} roots.", 1)
        self.view.render(self._forest)
        return True

    def load_failed(self, error) -> None:
        """Report a failed load; the current tree (if any) stays as it is."""
        if isinstance(error, tuple):
            err, tb = error
            Log.debug(f"Error loading hierarchy: {err}\n{tb}", 0)
        else:
            Log.debug(f"Error loading hierarchy: {error}", 0)

    def on_loaded(self, result, error) -> None:
        """IOWorker callback for a background load_records()."""
        if error:
            self.load_failed(error)
            return
        self.load_payload(result)

    # ------------------------------------------------------------------ #
    # lookup
    # ------------------------------------------------------------------ #

    def node(self, key: Any) -> Optional[Node]:
        return self._index.get(key)

    def visible_keys(self) -> List[str]:
        return self._visibility.visible_keys()

    def is_visible(self, key: Any) -> bool:
        node = self._index.get(key)
        return node is not None and self._visibility.is_visible(node.key)

    def is_expanded(self, key: Any) -> bool:
        node = self._index.get(key)
        return node is not None and self._visibility.is_expanded(node.key)

    # ------------------------------------------------------------------ #
    # expand / collapse
    # ------------------------------------------------------------------ #

    def toggle(self, key: Any) -> bool:
        return bool(self._visibility.toggle(key))

    def set_visible(self, key: Any, should_show: bool) -> None:
        self._visibility.set_visible(key, should_show)

    def expand_all(self) -> None:
        self._visibility.expand_all()

    def collapse_all(self) -> None:
        self._visibility.collapse_all()

    # ------------------------------------------------------------------ #
    # selection / editing
    # ------------------------------------------------------------------ #

    def select(self, key: Any) -> None:
        self._selection.select(key)

    def clear_selection(self) -> None:
        self._selection.clear()

    def open_edit(self, key: Any = None) -> Optional[Tuple[Any, Any]]:
        """(name, value) to pre-fill an edit form; defaults to the selected row."""
        if key is None:
            key = self._selection.key
        return self._editor.open_edit(key)

    def save_edit(self, key: Any, name: Any, value: Any) -> None:
        self._editor.save_edit(key, name, value)

    # ------------------------------------------------------------------ #
    # validation
    # ------------------------------------------------------------------ #

    def validate(self, key: Any) -> bool:
        """Single-level sum rule for `key`; unknown keys are valid."""
        ok = validate_aggregate(self._index.get(key))
        Log.debug(f"validate({key=}) -> {ok}", 1)
        return ok

    def invalid_keys(self) -> List[str]:
        """Every branch whose value differs from its children's sum, in display order."""
        return [
            node.key
            for node, _level in walk_tree(self._forest)
            if node.children and not validate_aggregate(node)
        ]
