from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import wx

from hiertable.ui.constants import JSON_WILDCARD

Pathish = Union[str, Path]

__all__ = ["choose_records_file"]


def choose_records_file(
    parent: wx.Window | None,
    *,
    default_dir: Pathish | None = None,
) -> Optional[str]:
    """
    Open a file picker for a JSON record file.
    Returns the absolute path on OK, or None on cancel.
    """
    with wx.FileDialog(
        parent,
        message="Open hierarchy…",
        wildcard=JSON_WILDCARD,
        style=wx.FD_OPEN | wx.FD_FILE_MUST_EXIST,
        defaultDir=str(default_dir) if default_dir else "",
    ) as dlg:
        if dlg.ShowModal() != wx.ID_OK:
            return None
        return str(Path(dlg.GetPath()).resolve())
