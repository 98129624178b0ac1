"""Net registry: net names to the integer ids of the output file."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..sexp import LF, Fragment


class NetRegistry:
    """Append-only, duplicate-free list of net names.

    Index 0 is the unconnected net ``""`` and is always present. Names are
    numbered in the order they are first seen.

    Usage::

        nets = NetRegistry(["GND"])
        nets.get_net_id("GND")   # 1
        nets.get_net_id("VCC")   # 2 (appended)
        nets.get_net_id("")      # None, registry unchanged
    """

    __slots__ = ("_names", "_index")

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: list[str] = [""]
        self._index: dict[str, int] = {"": 0}
        for name in names:
            if name not in self._index:
                self._append(name)

    def _append(self, name: str) -> int:
        self._index[name] = len(self._names)
        self._names.append(name)
        return self._index[name]

    def get_net_id(self, name: str | None) -> int | None:
        """Id of ``name``, registering it when new; None for an empty name."""
        if not name:
            return None
        index = self._index.get(name)
        if index is not None:
            return index
        return self._append(name)

    def name_of(self, net_id: int) -> str:
        return self._names[net_id]

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def declarations(self) -> Fragment:
        """``(net <id> <name>)`` declarations of every registered net."""
        result: Fragment = []
        for index, name in enumerate(self._names):
            result.extend([["net", index, name], LF])
        return result

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __repr__(self) -> str:
        return f"NetRegistry({self._names!r})"


def is_connected(net_id: int | None) -> bool:
    """True for a real net (neither "no net" nor the unconnected net 0)."""
    return net_id is not None and net_id > 0
