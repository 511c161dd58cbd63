'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Protocol, runtime_checkable

if TYPE_CHECKING:
    from hiertable.core.tree import Node

__all__ = ["ViewSink", "NullView"]


@runtime_checkable
class ViewSink(Protocol):
    """
    Everything the engine tells a front end. The view is a projection of
    engine state; it never decides visibility or selection on its own.

    render() draws the whole forest with roots shown, every other row hidden
    and every expand indicator collapsed.
    """

    def render(self, forest: List[Node]) -> None: ...

    def set_row_visible(self, key: str, visible: bool) -> None: ...

    def set_row_expand_indicator(self, key: str, expanded: bool) -> None: ...

    def update_row_text(self, key: str, name: Any, value: Any) -> None: ...

    def mark_selected(self, key: str) -> None: ...

    def clear_selection(self) -> None: ...


class NullView:
    """View sink that draws nothing; used when the engine runs headless."""

    def render(self, forest):
        pass

    def set_row_visible(self, key, visible):
        pass

    def set_row_expand_indicator(self, key, expanded):
        pass

    def update_row_text(self, key, name, value):
        pass

    def mark_selected(self, key):
        pass

    def clear_selection(self):
        pass
