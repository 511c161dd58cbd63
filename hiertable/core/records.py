'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

__all__ = [
    "LoadError",
    "Record",
    "normalize_key",
    "is_root_parent",
    "record_from_item",
    "records_from_payload",
]

# Fields that map onto Record attributes; anything else is kept in Record.extra.
KEY_FIELDS = ("key", "DT_RowId")
KNOWN_FIELDS = {"key", "DT_RowId", "parent", "name", "value", "children"}
ROOT_PARENTS = {"0", ""}


class LoadError(ValueError):
    """Raised when a record payload is unreachable or malformed."""


@dataclass(slots=True, frozen=True)
class Record:
    """
    One flat input item.

    • key        – normalized string key, unique across a payload
    • parent_key – raw parent key as read (None, 0 and "0" all mean root)
    • name       – display name, stored verbatim
    • value      – number, string or None, stored verbatim
    • extra      – every other field of the input item
    """
    key: str
    parent_key: Any = None
    name: Any = None
    value: Any = None
    extra: Dict[str, Any] = field(default_factory=dict)


def normalize_key(raw: Any) -> Optional[str]:
    """Map a raw key onto its string form so that 4, 4.0 and "4" agree."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw)


def is_root_parent(raw: Any) -> bool:
    """True for parent keys that denote a root: None, 0, "0" (and empty)."""
    key = normalize_key(raw)
    return key is None or key in ROOT_PARENTS


def _item_key(item: Dict[str, Any]) -> Any:
    for name in KEY_FIELDS:
        if item.get(name) is not None:
            return item[name]
    return None


def record_from_item(item: Any, parent_key: Any = None, position: int = 0) -> Record:
    """Convert one payload item (dict) to a Record."""
    if isinstance(item, Record):
        return item
    if not isinstance(item, dict):
        raise LoadError(f"Record #{position} is not an object: {item!r}")

    raw_key = _item_key(item)
    if raw_key is None:
        raise LoadError(f"Record #{position} has neither 'key' nor 'DT_RowId'")

    if "parent" in item:
        parent_key = item["parent"]

    return Record(
        key=normalize_key(raw_key),
        parent_key=parent_key,
        name=item.get("name"),
        value=item.get("value"),
        extra={k: v for k, v in item.items() if k not in KNOWN_FIELDS},
    )


def _unwrap(payload: Any) -> List[Any]:
    """Accept either a bare list or a wrapper object exposing it under 'data'."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    raise LoadError(
        f"Expected a list of records or an object with a 'data' list, got {type(payload).__name__}"
    )


def _is_flat(items: List[Any]) -> bool:
    return any(isinstance(item, Record) or (isinstance(item, dict) and "parent" in item)
               for item in items)


def _flatten_nested(items: List[Any]) -> List[Record]:
    """
    Flatten an already-nested payload (items carrying 'children') into
    parent-pointer records, depth-first, so both shapes build the same forest.
    """
    records: List[Record] = []
    stack = [(item, None) for item in reversed(items)]
    while stack:
        item, parent_key = stack.pop()
        record = record_from_item(item, parent_key=parent_key, position=len(records))
        records.append(record)
        children = item.get("children") or []
        if not isinstance(children, list):
            raise LoadError(f"Record {record.key!r} has a non-list 'children' field")
        for child in reversed(children):
            stack.append((child, record.key))
    return records


def records_from_payload(payload: Any) -> List[Record]:
    """
    Turn a data-source payload into an ordered list of Records.

    The payload is a list of record objects, or an object exposing that list
    under 'data'. Items carrying 'parent' are read as flat parent-pointer
    records; if none do, the items are treated as a nested tree.
    """
    items = _unwrap(payload)
    if not items:
        return []
    if _is_flat(items):
        return [record_from_item(item, position=i) for i, item in enumerate(items)]
    return _flatten_nested(items)
