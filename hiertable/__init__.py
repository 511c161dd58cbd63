'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.

HierTable: expandable tree table over flat parent-pointer records.
'''
from hiertable.core.engine import HierarchyTable
from hiertable.core.records import LoadError, Record, records_from_payload
from hiertable.core.source import JsonFileSource
from hiertable.core.tree import Node, NodeIndex, build_tree, flatten, walk_tree
from hiertable.core.validate import parse_number, validate_aggregate
from hiertable.core.view_sink import NullView, ViewSink

__version__ = "0.1.0"

__all__ = [
    "HierarchyTable",
    "JsonFileSource",
    "LoadError",
    "Node",
    "NodeIndex",
    "NullView",
    "Record",
    "ViewSink",
    "build_tree",
    "flatten",
    "parse_number",
    "records_from_payload",
    "validate_aggregate",
    "walk_tree",
]
