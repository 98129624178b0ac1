"""Document wrapper for converted KiCad S-expression output.

Holds the assembled tree of one output file (.kicad_pcb, .kicad_mod) and
provides serialization plus a small query API for inspecting the result.
"""

from __future__ import annotations

from collections.abc import Iterator

from .encoder import encode, encode_pretty
from .nodes import Node, flatten_and_filter
from .parser import decode


class Document:
    """A converted KiCad document.

    Equality compares structure only: null atoms and format hints never take
    part in it, so a freshly built document equals its decoded text.

    Usage::

        doc = Document(["kicad_pcb", ["version", 20210220], LF, ["net", 0, ""]])
        doc.name                      # "kicad_pcb"
        doc.find("version")           # ["version", 20210220]
        doc.to_string()               # '(kicad_pcb (version 20210220) (net 0 ""))'
        Document.from_string(doc.to_string()) == doc   # True
    """

    __slots__ = ("root",)

    def __init__(self, root: list[Node]) -> None:
        self.root = root

    @classmethod
    def from_string(cls, text: str) -> Document:
        """Decode S-expression text into a Document.

        Raises:
            SexpDecodeError: If the text is malformed.
            ValueError: If the text holds a bare atom instead of a list.
        """
        root = decode(text)
        if not isinstance(root, list):
            raise ValueError(f"Expected a list expression, got atom {root!r}")
        return cls(root)

    @property
    def name(self) -> str | None:
        """Head symbol of the root list, e.g. ``kicad_pcb``."""
        return _head(self.root)

    @property
    def structure(self) -> Node:
        """The root tree without nulls and format hints."""
        return flatten_and_filter(self.root)

    def to_string(self) -> str:
        """Serialize on a single line."""
        return encode(self.root)

    def to_pretty_string(self) -> str:
        """Serialize with a line break at every format hint."""
        return encode_pretty(self.root) + "\n"

    def find(self, name: str) -> list[Node] | None:
        """Find the first direct child list headed by ``name``."""
        for child in self.root:
            if _head(child) == name:
                return child  # type: ignore[return-value]
        return None

    def find_all(self, name: str) -> list[list[Node]]:
        """Find all direct child lists headed by ``name``."""
        return [child for child in self.root if _head(child) == name]  # type: ignore[misc]

    def find_recursive(self, name: str) -> Iterator[list[Node]]:
        """Find all descendant lists (depth first) headed by ``name``."""
        yield from _walk(self.root, name)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Document):
            return self.structure == other.structure
        if isinstance(other, list):
            return self.structure == flatten_and_filter(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Document(root={self.name!r}, children={len(self.structure) - 1})"


def _head(node: Node) -> str | None:
    if isinstance(node, list) and node and isinstance(node[0], str):
        return node[0]
    return None


def _walk(node: list[Node], name: str) -> Iterator[list[Node]]:
    for child in node:
        if isinstance(child, list):
            if _head(child) == name:
                yield child
            yield from _walk(child, name)
