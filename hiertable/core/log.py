################################################################################################

'''

Copyright 2025 Aaron Vose (avose@aaronvose.net)

Licensed under the LGPL v2.1; see the file 'LICENSE' for details.

This file holds the code for the info / debug logger.

'''

################################################################################################

import inspect
import os
from datetime import datetime
from typing import List, Tuple

################################################################################################

TIME_FORMAT = "%m/%d/%Y %H:%M:%S"

class LogManager():
    __log: List[Tuple[str, str]] = None

    def __init__(self, verbosity: int = 0):
        if LogManager.__log is None:
            LogManager.__log = [(self._now(), "Begin HierTable Log")]
        self.verbosity = verbosity

    @staticmethod
    def _now() -> str:
        return datetime.now().strftime(TIME_FORMAT)

    def add(self, text: str):
        LogManager.__log.append((self._now(), text))

    def debug(self, text: str, level: int = 0):
        if self.verbosity >= level:
            # Caller's file name only, not the full path.
            stack = inspect.stack()
            if len(stack) > 1:
                filename = os.path.basename(stack[1].filename)
            else:
                filename = "unknown"
            self.add(f"[{filename}] {text}")

    def get(self, index: int = None):
        if index is not None:
            return LogManager.__log[index]
        return LogManager.__log.copy()

    def count(self) -> int:
        return len(LogManager.__log)

    def set_verbosity(self, verbosity: int = 0):
        self.verbosity = verbosity

    def clear(self):
        """Clear all log entries."""
        LogManager.__log.clear()
        LogManager.__log.append((self._now(), "Log cleared"))

    def write_to_file(self, filepath: str) -> bool:
        """Write all log entries to a file. Returns False if the write failed."""
        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                for timestamp, message in LogManager.__log:
                    f.write(f"[{timestamp}] {message}\n")
        except OSError as e:
            self.add(f"Failed to write log to file '{filepath}': {e}")
            return False
        self.add(f"Log written to file: {filepath}")
        return True

################################################################################################

Log = LogManager()

################################################################################################
