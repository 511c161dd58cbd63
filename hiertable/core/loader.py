'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Any, Callable, Optional

from hiertable.core.io_worker import IOWorker
from hiertable.core.log import Log
from hiertable.core.source import RecordSource

__all__ = ["RecordLoader"]


class RecordLoader:
    """
    Runs record loads on an IOWorker, one at a time, and remembers the
    source of the last accepted load so it can be reloaded.

    on_ready(source, result, error) receives the source that was actually
    loaded. A request made while a load is running is refused and does not
    replace the current source.
    """

    def __init__(self, io: IOWorker, on_ready: Callable[[RecordSource, Any, Any], None]):
        self.io = io
        self.on_ready = on_ready
        self.source: Optional[RecordSource] = None
        self.loading = False

    def start(self, source: Optional[RecordSource] = None) -> bool:
        """Load `source` (or reload the current one). False if refused."""
        if source is None:
            source = self.source
        if source is None:
            Log.debug("No record source to load.", 1)
            return False
        if self.loading:
            Log.debug(f"Load already in progress; {source!r} ignored.", 1)
            return False
        self.loading = True
        self.source = source
        self.io.submit(source.load_records, callback=lambda result, error: self._done(source, result, error))
        return True

    def _done(self, source: RecordSource, result: Any, error: Any) -> None:
        self.loading = False
        self.on_ready(source, result, error)
