"""Polygon primitives: point lists and simple M/L paths to ``(xy x y)`` nodes."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence

from ..sexp import Node
from .transform import Frame, to_local_coords
from .units import Number, parse_number, to_output_units

_PATH_SEPARATORS = re.compile(r"[ ,LM]")


def path_points(path: str) -> list[str] | None:
    """Numeric tokens of a path made of ``M`` and ``L`` commands.

    Returns None when the path contains an arc command, which a point list
    cannot represent.
    """
    if "A" in path:
        return None
    return [token for token in _PATH_SEPARATORS.split(path) if math.isfinite(parse_number(token))]


def polygon_points(
    points: Sequence[Number],
    frame: Frame | None = None,
    round_to_tenth: bool = False,
) -> list[Node]:
    """``(xy x y)`` nodes for consecutive coordinate pairs; a dangling value is ignored."""
    result: list[Node] = []
    for i in range(0, len(points) - 1, 2):
        coords = to_local_coords(points[i], points[i + 1], frame)
        result.append(
            [
                "xy",
                to_output_units(coords.x, round_to_tenth),
                to_output_units(coords.y, round_to_tenth),
            ]
        )
    return result
