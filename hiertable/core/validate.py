'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

import math
import re
from typing import Any, Optional

from hiertable.core.tree import Node

__all__ = ["parse_number", "children_sum", "validate_aggregate"]

# Longest numeric prefix of a string, after leading whitespace.
_NUMBER_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.ASCII,
)


def parse_number(value: Any) -> float:
    """
    Lenient float parse used by the sum rule.

    Numbers pass through; strings contribute their leading numeric prefix
    ("12.5 kg" -> 12.5); None, booleans, NaN and anything unparseable
    count as 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            number = math.inf if value > 0 else -math.inf
    else:
        match = _NUMBER_PREFIX.match(str(value).lstrip())
        if not match:
            return 0.0
        number = float(match.group(0))
    if math.isnan(number):
        return 0.0
    return number


def children_sum(node: Node) -> float:
    total = 0.0
    for child in node.children:
        total += parse_number(child.value)
    return total


def validate_aggregate(node: Optional[Node]) -> bool:
    """
    True when the node's value equals the sum of its direct children's
    values. Childless or missing nodes are vacuously valid. Comparison is
    exact float equality and only one level deep.
    """
    if node is None or not node.children:
        return True
    return children_sum(node) == parse_number(node.value)
