"""Node types of the nested-list document model.

A document tree is built from plain Python values:

- ``str``, ``int`` and ``float`` atoms
- ``None``, a null atom that is dropped on output
- ``FormatHint`` markers that only request a line break when pretty printing
- ``list`` nodes holding any of the above

Shape converters build trees bottom-up as nested lists and return
*fragments*: flat lists of nodes (usually a hint followed by one element)
that the document assemblers splice together.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class FormatHint:
    """Line-break marker; ``level`` selects the indentation depth."""

    level: int = 0

    def render(self) -> str:
        return "\n" + "  " * (self.level + 1)

    def __repr__(self) -> str:
        return f"LF{self.level or ''}"


LF = FormatHint(0)
LF1 = FormatHint(1)
LF2 = FormatHint(2)
LF3 = FormatHint(3)
LF4 = FormatHint(4)

Atom = Union[str, int, float, None, FormatHint]
Node = Union[Atom, list]
Fragment = list


def is_elided(item: object) -> bool:
    """True for items that never reach structural output (nulls and hints)."""
    return item is None or isinstance(item, FormatHint)


def flatten_and_filter(tree: Node) -> Node:
    """Recursively drop null atoms and format hints.

    The result is the structural content of ``tree`` and is what ``decode``
    returns for the encoded text of ``tree``.
    """
    if isinstance(tree, list):
        return [flatten_and_filter(item) for item in tree if not is_elided(item)]
    return tree


def splice(fragments: Iterable[Fragment]) -> Fragment:
    """Concatenate converter fragments into one flat list of nodes."""
    result: Fragment = []
    for fragment in fragments:
        result.extend(fragment)
    return result


def is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
