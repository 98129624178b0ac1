"""Coordinate frames: EasyEDA canvas coordinates to KiCad positions.

A point is first moved by the fixed document origin offset, then expressed
relative to the frame origin, and only then rotated by the frame rotation.
Rotating the relative offset (not the absolute coordinate) is what makes
footprint children land where EasyEDA draws them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..constants import SOURCE_ORIGIN_X, SOURCE_ORIGIN_Y
from ..sexp import Node
from .units import Number, normalize_angle, parse_number, to_output_units


@dataclass(frozen=True)
class Point:
    """2D point in source units relative to the document origin."""

    x: float
    y: float

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)


def rotate(point: Point, degrees: float) -> Point:
    """Rotate ``point`` about the origin."""
    radians = degrees / 180.0 * math.pi
    cos_a = math.cos(radians)
    sin_a = math.sin(radians)
    return Point(
        point.x * cos_a - point.y * sin_a,
        point.x * sin_a + point.y * cos_a,
    )


@dataclass(frozen=True)
class Frame:
    """A parent coordinate frame (origin offset plus rotation).

    ``owner_id`` names the element that owns the frame (a footprint id) so
    diagnostics can say where a broken child shape lives.
    """

    origin_x: float = 0.0
    origin_y: float = 0.0
    rotation: float = 0.0
    owner_id: str | None = None

    @property
    def origin(self) -> Point:
        return Point(self.origin_x, self.origin_y)

    @classmethod
    def placed_at(
        cls,
        x: Number,
        y: Number,
        rotation: Number = None,
        owner_id: str | None = None,
    ) -> Frame:
        """Frame of an element placed at raw source coordinates ``x``, ``y``."""
        origin = to_local_coords(x, y)
        return cls(origin.x, origin.y, normalize_angle(rotation) or 0.0, owner_id)

    def apply(self, point: Point) -> Point:
        """Express ``point`` (document-origin relative) in this frame."""
        return rotate(point - self.origin, self.rotation)

    def then(self, child: Frame) -> Frame:
        """Single frame equivalent to applying ``self`` and then ``child``."""
        origin = self.origin + rotate(child.origin, -self.rotation)
        return Frame(
            origin.x,
            origin.y,
            self.rotation + child.rotation,
            child.owner_id if child.owner_id is not None else self.owner_id,
        )

    def describe(self) -> str:
        """Suffix for diagnostics, e.g. ``" of gge12"``; empty for the root frame."""
        return f" of {self.owner_id}" if self.owner_id else ""


ROOT_FRAME = Frame()


def to_local_coords(x: Number, y: Number, frame: Frame | None = None) -> Point:
    """Source coordinates to frame-local source units (not yet millimetres)."""
    point = Point(parse_number(x) - SOURCE_ORIGIN_X, parse_number(y) - SOURCE_ORIGIN_Y)
    return (frame or ROOT_FRAME).apply(point)


def at(
    x: Number,
    y: Number,
    angle: Number = None,
    frame: Frame | None = None,
) -> list[Node]:
    """Build an ``(at x y [angle])`` node; the angle is left out when absent."""
    coords = to_local_coords(x, y, frame)
    node: list[Node] = ["at", to_output_units(coords.x), to_output_units(coords.y)]
    rotation = normalize_angle(angle)
    if rotation is not None:
        node.append(rotation)
    return node


def start_end(
    start_x: Number,
    start_y: Number,
    end_x: Number,
    end_y: Number,
    round_to_tenth: bool = False,
    frame: Frame | None = None,
) -> list[Node]:
    """Build the ``(start x y)`` and ``(end x y)`` pair of a line."""
    start = to_local_coords(start_x, start_y, frame)
    end = to_local_coords(end_x, end_y, frame)
    return [
        [
            "start",
            to_output_units(start.x, round_to_tenth),
            to_output_units(start.y, round_to_tenth),
        ],
        ["end", to_output_units(end.x, round_to_tenth), to_output_units(end.y, round_to_tenth)],
    ]
