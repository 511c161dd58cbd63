'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol, Union, runtime_checkable

from hiertable.core.records import LoadError

Pathish = Union[str, Path]

__all__ = ["RecordSource", "JsonFileSource", "read_json"]


@runtime_checkable
class RecordSource(Protocol):
    """Anything with a load_records() returning a record list or {'data': [...]}."""

    def load_records(self) -> Any: ...


def read_json(p: Pathish) -> Any:
    path = Path(p).expanduser()
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise LoadError(f"Record file not found: {path}") from e
    except OSError as e:
        raise LoadError(f"Cannot read {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise LoadError(f"Malformed JSON in {path}: {e}") from e


class JsonFileSource:
    """Data source backed by a JSON file on disk."""

    def __init__(self, path: Pathish):
        self.path = Path(path).expanduser().resolve()

    def load_records(self) -> Any:
        return read_json(self.path)

    def __repr__(self) -> str:
        return f"JsonFileSource({str(self.path)!r})"
