"""Elliptical arc reparameterization.

SVG-style paths describe an arc by its end points, radii, x-axis rotation and
the large-arc/sweep flags. KiCad wants the center and the angular extent.
The conversion follows the SVG implementation notes (appendix F.6.5), as done
in Apache Batik's ``ExtendedGeneralPath.computeArc``:

1. rotate the half chord by ``-x_axis_rotation``
2. scale the radii up when they cannot span the chord
3. solve for the center; the discriminant is clamped at zero
4. rotate the center back and move it to the chord midpoint
5. derive start angle and signed extent; the extent follows the sweep flag
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from ..config import ArcSnapPolicy
from ..exceptions import ArcPathError, ArcResolutionError
from .units import parse_number

_ARC_PATH = re.compile(r"^M\s*([-\d.\s]+)A\s*([-\d.\s]+)$")


@dataclass(frozen=True)
class EndpointArc:
    """Arc in endpoint form, as found in vector path syntax."""

    start_x: float
    start_y: float
    radius_x: float
    radius_y: float
    x_axis_rotation: float
    large_arc: bool
    sweep: bool
    end_x: float
    end_y: float


@dataclass(frozen=True)
class CenterArc:
    """Arc in center form. Angles are in degrees."""

    center_x: float
    center_y: float
    radius_x: float
    radius_y: float
    start_angle: float
    extent: float

    @property
    def width(self) -> float:
        return self.radius_x * 2.0

    @property
    def height(self) -> float:
        return self.radius_y * 2.0


def parse_arc_path(path: str) -> EndpointArc:
    """Parse ``M sx sy A rx ry rotation large-arc sweep ex ey``.

    Commas and runs of whitespace are treated as one separator.

    Raises:
        ArcPathError: If the path is not a single move followed by one arc.
    """
    normalized = re.sub(r"[,\s]+", " ", path).strip()
    match = _ARC_PATH.match(normalized)
    if match is None:
        raise ArcPathError(f"invalid arc path: {path}", path=path)
    start = match.group(1).split()
    params = match.group(2).split()
    if len(start) < 2 or len(params) < 7:
        raise ArcPathError(f"incomplete arc path: {path}", path=path)
    rx, ry, rotation, large_arc, sweep, end_x, end_y = params[:7]
    return EndpointArc(
        start_x=parse_number(start[0]),
        start_y=parse_number(start[1]),
        radius_x=parse_number(rx),
        radius_y=parse_number(ry),
        x_axis_rotation=parse_number(rotation),
        large_arc=large_arc == "1",
        sweep=sweep == "1",
        end_x=parse_number(end_x),
        end_y=parse_number(end_y),
    )


def _angle_between(ux: float, uy: float, vx: float, vy: float) -> float:
    """Signed angle in degrees from vector u to vector v."""
    norm = math.sqrt((ux * ux + uy * uy) * (vx * vx + vy * vy))
    if norm == 0.0:
        raise ArcResolutionError("degenerate arc: zero-length direction vector")
    cosine = max(-1.0, min(1.0, (ux * vx + uy * vy) / norm))
    sign = -1.0 if ux * vy - uy * vx < 0 else 1.0
    return math.degrees(sign * math.acos(cosine))


def resolve_arc(arc: EndpointArc) -> CenterArc:
    """Convert an endpoint-form arc to center form.

    The returned extent lies in [0, 360) when ``arc.sweep`` is set and in
    (-360, 0] otherwise.

    Raises:
        ArcResolutionError: If the inputs are not finite, the radii are zero
            or the end points coincide.
    """
    values = (
        arc.start_x,
        arc.start_y,
        arc.radius_x,
        arc.radius_y,
        arc.x_axis_rotation,
        arc.end_x,
        arc.end_y,
    )
    if not all(math.isfinite(v) for v in values):
        raise ArcResolutionError(f"non-finite arc parameters: {values}")

    x0, y0, x, y = arc.start_x, arc.start_y, arc.end_x, arc.end_y

    # Step 1: half chord in the rotated frame
    dx2 = (x0 - x) / 2.0
    dy2 = (y0 - y) / 2.0
    angle = math.radians(math.fmod(arc.x_axis_rotation, 360.0))
    cos_angle = math.cos(angle)
    sin_angle = math.sin(angle)
    x1 = cos_angle * dx2 + sin_angle * dy2
    y1 = -sin_angle * dx2 + cos_angle * dy2

    # Step 2: radii correction
    rx = abs(arc.radius_x)
    ry = abs(arc.radius_y)
    if rx == 0.0 or ry == 0.0:
        raise ArcResolutionError("arc radius is zero")
    prx = rx * rx
    pry = ry * ry
    px1 = x1 * x1
    py1 = y1 * y1
    radii_check = px1 / prx + py1 / pry
    if radii_check > 1.0:
        scale = math.sqrt(radii_check)
        rx *= scale
        ry *= scale
        prx = rx * rx
        pry = ry * ry

    # Step 3: center in the rotated frame
    denominator = prx * py1 + pry * px1
    if denominator == 0.0:
        raise ArcResolutionError("arc start and end points coincide")
    sign = 1.0 if arc.large_arc != arc.sweep else -1.0
    sq = (prx * pry - prx * py1 - pry * px1) / denominator
    sq = max(sq, 0.0)
    coef = sign * math.sqrt(sq)
    cx1 = coef * ((rx * y1) / ry)
    cy1 = coef * -((ry * x1) / rx)

    # Step 4: back to the original frame
    sx2 = (x0 + x) / 2.0
    sy2 = (y0 + y) / 2.0
    cx = sx2 + (cos_angle * cx1 - sin_angle * cy1)
    cy = sy2 + (sin_angle * cx1 + cos_angle * cy1)

    # Step 5: start angle and extent
    ux = (x1 - cx1) / rx
    uy = (y1 - cy1) / ry
    vx = (-x1 - cx1) / rx
    vy = (-y1 - cy1) / ry
    start_angle = _angle_between(1.0, 0.0, ux, uy)
    extent = _angle_between(ux, uy, vx, vy)
    if not arc.sweep and extent > 0:
        extent -= 360.0
    elif arc.sweep and extent < 0:
        extent += 360.0
    extent = math.fmod(extent, 360.0)
    start_angle = math.fmod(start_angle, 360.0)

    result = CenterArc(cx, cy, rx, ry, start_angle, extent)
    if not all(math.isfinite(v) for v in (cx, cy, start_angle, extent)):
        raise ArcResolutionError(f"arc resolution produced non-finite values: {result}")
    return result


def outline_extent(extent: float, layer: str, policy: ArcSnapPolicy) -> float:
    """Magnitude of ``extent``, snapped to 45/90 degrees on outline layers."""
    angle = abs(extent)
    if policy.applies_to(layer):
        angle = policy.snap(angle)
    return angle
