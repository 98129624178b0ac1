"""Scalar unit conversion and angle normalization.

EasyEDA stores numbers as strings in 10 mil canvas units; KiCad wants
millimetres and angles in (-180, 180].
"""

from __future__ import annotations

import math
import re

from ..constants import SOURCE_TO_MM

Number = float | int | str | None

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: Number) -> float:
    """Read a source value as float; NaN when absent or unparseable.

    Strings are read leniently: the longest numeric prefix counts, so
    ``"12.5mm"`` reads as 12.5.
    """
    if value is None:
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_NUMBER.match(value)
    if match is None:
        return math.nan
    return float(match.group(0))


def to_output_units(value: Number, round_to_tenth: bool = False) -> float:
    """Convert a source value to millimetres.

    ``round_to_tenth`` rounds to 0.1 mm. It is used for board outline
    geometry, where float jitter otherwise leaves near-duplicate vertices
    that break KiCad's closed outline detection.
    """
    result = parse_number(value) * SOURCE_TO_MM
    if round_to_tenth and math.isfinite(result):
        return float(f"{result:.1f}")
    return result


def fold_angle(angle: float) -> float:
    """Fold a finite angle in degrees into (-180, 180]."""
    angle = math.fmod(angle, 360.0)
    if angle > 180.0:
        angle -= 360.0
    elif angle <= -180.0:
        angle += 360.0
    return angle


def normalize_angle(value: Number, parent_angle: float | None = 0.0) -> float | None:
    """Add ``parent_angle`` to ``value`` and fold into (-180, 180].

    Returns None when ``value`` is absent, empty or not a number.
    """
    if value is None or value == "":
        return None
    angle = parse_number(value) + (parent_angle or 0.0)
    if not math.isfinite(angle):
        return None
    return fold_angle(angle)
