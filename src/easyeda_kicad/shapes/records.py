"""Typed shape records parsed from EasyEDA ``~``-delimited shape strings.

Each record kind lists its positional fields in source order. Records are
parsed once at the boundary; converters only ever see named fields. Missing
trailing fields read as ``""``; a record shorter than its required leading
fields is malformed input and raises :class:`ShapeRecordError`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, fields
from typing import ClassVar, TypeVar

from ..exceptions import ShapeRecordError, UnsupportedShapeError

FIELD_SEPARATOR = "~"
FOOTPRINT_SHAPE_SEPARATOR = "#@$"
ATTRIBUTE_SEPARATOR = "`"

R = TypeVar("R", bound="ShapeRecord")


@dataclass(frozen=True)
class ShapeRecord:
    """Base for all shape records; every field is the raw source string."""

    KIND: ClassVar[str] = ""
    REQUIRED: ClassVar[int] = 1

    @classmethod
    def from_args(cls: type[R], args: Sequence[str]) -> R:
        names = [f.name for f in fields(cls)]
        if len(args) < cls.REQUIRED:
            raise ShapeRecordError(
                f"{cls.KIND} record needs at least {cls.REQUIRED} fields, got {len(args)}",
                shape_type=cls.KIND,
            )
        values = list(args[: len(names)])
        values.extend([""] * (len(names) - len(values)))
        return cls(*values)

    @property
    def is_locked(self) -> bool:
        return getattr(self, "locked", "") == "1"


@dataclass(frozen=True)
class TrackRecord(ShapeRecord):
    KIND: ClassVar[str] = "TRACK"
    REQUIRED: ClassVar[int] = 4

    width: str
    layer: str
    net: str
    points: str
    id: str
    locked: str


@dataclass(frozen=True)
class ViaRecord(ShapeRecord):
    KIND: ClassVar[str] = "VIA"
    REQUIRED: ClassVar[int] = 5

    x: str
    y: str
    diameter: str
    net: str
    drill: str
    id: str
    locked: str


@dataclass(frozen=True)
class ArcRecord(ShapeRecord):
    KIND: ClassVar[str] = "ARC"
    REQUIRED: ClassVar[int] = 4

    width: str
    layer: str
    net: str
    path: str
    helper_dots: str
    id: str
    locked: str


@dataclass(frozen=True)
class CircleRecord(ShapeRecord):
    KIND: ClassVar[str] = "CIRCLE"
    REQUIRED: ClassVar[int] = 5

    x: str
    y: str
    radius: str
    stroke_width: str
    layer: str
    id: str
    locked: str
    net: str


@dataclass(frozen=True)
class HoleRecord(ShapeRecord):
    KIND: ClassVar[str] = "HOLE"
    REQUIRED: ClassVar[int] = 3

    x: str
    y: str
    radius: str
    id: str
    locked: str


@dataclass(frozen=True)
class RectRecord(ShapeRecord):
    KIND: ClassVar[str] = "RECT"
    REQUIRED: ClassVar[int] = 5

    x: str
    y: str
    width: str
    height: str
    layer: str
    id: str
    locked: str
    stroke_width: str
    fill: str
    unused: str
    net: str


@dataclass(frozen=True)
class SolidRegionRecord(ShapeRecord):
    KIND: ClassVar[str] = "SOLIDREGION"
    REQUIRED: ClassVar[int] = 3

    layer: str
    net: str
    path: str
    type: str
    id: str
    locked: str


@dataclass(frozen=True)
class TextRecord(ShapeRecord):
    KIND: ClassVar[str] = "TEXT"
    REQUIRED: ClassVar[int] = 10

    type: str  # P (prefix/reference), N (name/value), L (label)
    x: str
    y: str
    line_width: str
    angle: str
    mirror: str
    layer: str
    net: str
    font_size: str
    text: str
    path: str
    display: str
    id: str
    font: str
    locked: str


@dataclass(frozen=True)
class PadRecord(ShapeRecord):
    KIND: ClassVar[str] = "PAD"
    REQUIRED: ClassVar[int] = 6

    shape: str  # ELLIPSE, RECT, OVAL or POLYGON
    x: str
    y: str
    width: str
    height: str
    layer: str
    net: str
    number: str
    hole_radius: str
    points: str
    rotation: str
    id: str
    hole_length: str
    hole_points: str
    plated: str
    locked: str
    unused_1: str
    unused_2: str
    hole_xy: str


@dataclass(frozen=True)
class CopperAreaRecord(ShapeRecord):
    KIND: ClassVar[str] = "COPPERAREA"
    REQUIRED: ClassVar[int] = 4

    stroke_width: str
    layer: str
    net: str
    path: str
    clearance_width: str
    fill_style: str  # solid, grid, none
    id: str
    thermal_type: str  # spoke, direct
    keep_island: str
    copper_zone: str
    locked: str
    area_name: str
    unknown: str
    grid_line_width: str
    grid_line_spacing: str
    copper_to_boardoutline: str
    improve_fab: str
    spoke_width: str


@dataclass(frozen=True)
class FootprintRecord(ShapeRecord):
    """A ``LIB`` shape: a placed footprint and its nested shape strings."""

    KIND: ClassVar[str] = "LIB"
    REQUIRED: ClassVar[int] = 2

    x: str
    y: str
    attributes: str
    rotation: str
    import_flag: str
    id: str
    unused_1: str
    unused_2: str
    unused_3: str
    locked: str
    shapes: tuple[str, ...] = field(default=())

    @classmethod
    def from_args(cls, args: Sequence[str]) -> FootprintRecord:  # type: ignore[override]
        """Parse everything after ``LIB~``: the head, then ``#@$``-separated shapes."""
        head, *shapes = FIELD_SEPARATOR.join(args).split(FOOTPRINT_SHAPE_SEPARATOR)
        head_fields = head.split(FIELD_SEPARATOR)
        if len(head_fields) < cls.REQUIRED:
            raise ShapeRecordError(
                f"LIB record needs at least {cls.REQUIRED} fields, got {len(head_fields)}",
                shape_type=cls.KIND,
            )
        values = (head_fields + [""] * 10)[:10]
        return cls(*values, shapes=tuple(shapes))

    @property
    def attribute_map(self) -> dict[str, str]:
        """Backtick-separated key/value pairs of the head attributes."""
        items = self.attributes.split(ATTRIBUTE_SEPARATOR)
        return {items[i]: items[i + 1] for i in range(0, len(items) - 1, 2)}


RECORD_TYPES: dict[str, type[ShapeRecord]] = {
    record.KIND: record
    for record in (
        TrackRecord,
        ViaRecord,
        ArcRecord,
        CircleRecord,
        HoleRecord,
        RectRecord,
        SolidRegionRecord,
        TextRecord,
        PadRecord,
        CopperAreaRecord,
        FootprintRecord,
    )
}


def split_shape(shape: str) -> tuple[str, list[str]]:
    """Split a shape string into its kind and positional arguments."""
    kind, *args = shape.split(FIELD_SEPARATOR)
    return kind, args


def parse_shape(shape: str) -> ShapeRecord:
    """Parse a shape string into its typed record.

    Raises:
        UnsupportedShapeError: If the shape kind has no record type.
        ShapeRecordError: If the record is missing required fields.
    """
    kind, args = split_shape(shape)
    record_type = RECORD_TYPES.get(kind)
    if record_type is None:
        raise UnsupportedShapeError(f"unsupported shape {kind}", shape_type=kind)
    return record_type.from_args(args)
