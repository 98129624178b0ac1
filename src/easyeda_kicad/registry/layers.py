"""Layer table: EasyEDA layer ids to KiCad layer names.

Unresolvable ids do not raise. ``resolve`` returns a :class:`LayerResult`
that callers branch on, so a shape on an unknown layer can be dropped with a
diagnostic instead of aborting the whole document.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..constants import INNER_LAYER_FIRST_ID, INNER_LAYER_LAST_ID, UNSUPPORTED_LAYER_RANGE
from ..exceptions import LayerResolutionError
from ..sexp import LF1, Fragment

FIXED_LAYERS: dict[int, str] = {
    1: "F.Cu",
    2: "B.Cu",
    3: "F.SilkS",
    4: "B.SilkS",
    5: "F.Paste",
    6: "B.Paste",
    7: "F.Mask",
    8: "B.Mask",
    10: "Edge.Cuts",
    11: "Edge.Cuts",  # multilayer; used as edge cut in solid regions
    12: "Cmts.User",
    13: "F.Fab",
    14: "B.Fab",
    15: "Dwgs.User",
}

# (ordinal, name, type[, "hide"]) of the technical layers after B.Cu
_TECHNICAL_LAYERS: list[tuple[int, str, str, bool]] = [
    (32, "B.Adhes", "user", False),
    (33, "F.Adhes", "user", False),
    (34, "B.Paste", "user", False),
    (35, "F.Paste", "user", False),
    (36, "B.SilkS", "user", False),
    (37, "F.SilkS", "user", False),
    (38, "B.Mask", "user", False),
    (39, "F.Mask", "user", False),
    (40, "Dwgs.User", "user", False),
    (41, "Cmts.User", "user", False),
    (42, "Eco1.User", "user", False),
    (43, "Eco2.User", "user", False),
    (44, "Edge.Cuts", "user", False),
    (45, "Margin", "user", False),
    (46, "B.CrtYd", "user", False),
    (47, "F.CrtYd", "user", False),
    (48, "B.Fab", "user", True),
    (49, "F.Fab", "user", True),
]


class LayerErrorKind(Enum):
    MISSING = "no layer id"
    UNSUPPORTED = "unsupported layer id"
    UNKNOWN = "unknown layer id"


@dataclass(frozen=True)
class LayerResult:
    """Outcome of a layer lookup: either a layer name or an error."""

    name: str | None = None
    kind: LayerErrorKind | None = None
    layer_id: str = ""

    @classmethod
    def success(cls, name: str, layer_id: str = "") -> LayerResult:
        return cls(name=name, layer_id=layer_id)

    @classmethod
    def failure(cls, kind: LayerErrorKind, layer_id: str = "") -> LayerResult:
        return cls(kind=kind, layer_id=layer_id)

    @property
    def ok(self) -> bool:
        return self.name is not None

    @property
    def error(self) -> str | None:
        """Human-readable reason, e.g. ``"unknown layer id: 999"``."""
        if self.kind is None:
            return None
        if self.kind is LayerErrorKind.MISSING:
            return self.kind.value
        return f"{self.kind.value}: {self.layer_id}"

    def unwrap(self) -> str:
        """Return the layer name or raise :class:`LayerResolutionError`."""
        if self.name is None:
            raise LayerResolutionError(self.error or "unresolved layer", layer_id=self.layer_id)
        return self.name


def is_copper(layer_name: str) -> bool:
    return layer_name.endswith(".Cu")


def _parse_layer_id(layer_id: str | int | None) -> int | None:
    if isinstance(layer_id, int):
        return layer_id
    try:
        return int(str(layer_id).strip())
    except ValueError:
        return None


class LayerTable:
    """Resolves layer ids and remembers the deepest inner copper layer used."""

    __slots__ = ("max_inner",)

    def __init__(self) -> None:
        self.max_inner = 0

    def resolve(self, layer_id: str | int | None) -> LayerResult:
        """Map an EasyEDA layer id to its KiCad name.

        Ids 21..50 map to ``In1.Cu``..``In30.Cu`` and raise ``max_inner``.
        """
        raw = "" if layer_id is None else str(layer_id).strip()
        number = _parse_layer_id(raw)
        if raw == "" or number == 0:
            return LayerResult.failure(LayerErrorKind.MISSING, raw)
        if number is None:
            return LayerResult.failure(LayerErrorKind.UNKNOWN, raw)
        if number in FIXED_LAYERS:
            return LayerResult.success(FIXED_LAYERS[number], raw)
        if INNER_LAYER_FIRST_ID <= number <= INNER_LAYER_LAST_ID:
            inner = number - INNER_LAYER_FIRST_ID + 1
            self.max_inner = max(self.max_inner, inner)
            return LayerResult.success(f"In{inner}.Cu", raw)
        low, high = UNSUPPORTED_LAYER_RANGE
        if low <= number < high:
            return LayerResult.failure(LayerErrorKind.UNSUPPORTED, raw)
        return LayerResult.failure(LayerErrorKind.UNKNOWN, raw)

    def declarations(self) -> Fragment:
        """Body of the board ``(layers ...)`` block.

        Exactly ``max_inner`` inner copper layers sit between F.Cu and B.Cu.
        """
        result: Fragment = [LF1, [0, "F.Cu", "signal"]]
        for inner in range(1, self.max_inner + 1):
            result.extend([LF1, [inner, f"In{inner}.Cu", "signal"]])
        result.extend([LF1, [31, "B.Cu", "signal"]])
        for ordinal, name, layer_type, hidden in _TECHNICAL_LAYERS:
            result.extend([LF1, [ordinal, name, layer_type, "hide" if hidden else None]])
        return result

    def __repr__(self) -> str:
        return f"LayerTable(max_inner={self.max_inner})"
