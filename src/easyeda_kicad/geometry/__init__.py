"""Geometry core: units, coordinate frames, arcs and polygons."""

from .arc import CenterArc, EndpointArc, outline_extent, parse_arc_path, resolve_arc
from .polygon import path_points, polygon_points
from .transform import ROOT_FRAME, Frame, Point, at, rotate, start_end, to_local_coords
from .units import fold_angle, normalize_angle, parse_number, to_output_units

__all__ = [
    "ROOT_FRAME",
    "CenterArc",
    "EndpointArc",
    "Frame",
    "Point",
    "at",
    "fold_angle",
    "normalize_angle",
    "outline_extent",
    "parse_arc_path",
    "parse_number",
    "path_points",
    "polygon_points",
    "resolve_arc",
    "rotate",
    "start_end",
    "to_local_coords",
    "to_output_units",
]
