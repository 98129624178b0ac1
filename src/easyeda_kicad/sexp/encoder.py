"""Serialize document trees to S-expression text.

Strings that look like bare identifiers are written unquoted; everything
else is double-quoted with backslash escapes. Numbers are rounded to three
fractional digits, and whole values are written without a fraction.
"""

from __future__ import annotations

import math
import re
import sys

from ..constants import NUMBER_PRECISION
from .nodes import FormatHint, Node, flatten_and_filter, is_elided, is_number

_BARE_IDENTIFIER = re.compile(r"[A-Za-z][A-Za-z0-9_]*")
_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}

_SCALE = 10**NUMBER_PRECISION


def encode_string(value: str) -> str:
    """Quote a string unless it is a bare identifier."""
    if _BARE_IDENTIFIER.fullmatch(value):
        return value
    escaped = "".join(_ESCAPES.get(ch, ch) for ch in value)
    return f'"{escaped}"'


def encode_number(value: int | float) -> str:
    """Round half up to three decimals and print without redundant zeros."""
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        raise ValueError(f"Cannot encode non-finite number {value!r}")
    rounded = math.floor(value * _SCALE + sys.float_info.epsilon + 0.5) / _SCALE
    if rounded == 0:
        return "0"
    if rounded.is_integer():
        return str(int(rounded))
    return repr(rounded)


def encode_value(value: Node) -> str:
    if isinstance(value, list):
        return encode(value)
    if isinstance(value, str):
        return encode_string(value)
    if is_number(value):
        return encode_number(value)  # type: ignore[arg-type]
    raise TypeError(f"Cannot encode {type(value).__name__} value {value!r}")


def encode(tree: Node) -> str:
    """Serialize ``tree`` on a single line, dropping nulls and format hints.

    Usage::

        encode(["segment", ["start", 0, 0], ["end", 0, 7.62]])
        # '(segment (start 0 0) (end 0 7.62))'
    """
    if not isinstance(tree, list):
        return encode_value(tree)
    return "(" + " ".join(encode_value(item) for item in tree if not is_elided(item)) + ")"


def encode_pretty(tree: Node) -> str:
    """Serialize ``tree`` turning each format hint into a line break.

    A hint replaces the space in front of the next element; a hint with no
    following element in its list is dropped.
    """
    if not isinstance(tree, list):
        return encode_value(tree)

    parts: list[str] = ["("]
    separator = ""
    pending: FormatHint | None = None
    for item in tree:
        if item is None:
            continue
        if isinstance(item, FormatHint):
            pending = item
            continue
        parts.append(pending.render() if pending is not None else separator)
        parts.append(encode_pretty(item))
        separator = " "
        pending = None
    parts.append(")")
    return "".join(parts)


def round_numbers(tree: Node) -> Node:
    """Replace every float in ``tree`` with the value the encoder would print."""
    if isinstance(tree, list):
        return [round_numbers(item) for item in tree]
    if isinstance(tree, float) and math.isfinite(tree):
        return float(encode_number(tree))
    return tree


def normalize(tree: Node) -> Node:
    """Structural content of ``tree`` with numbers rounded for comparison."""
    return round_numbers(flatten_and_filter(tree))
