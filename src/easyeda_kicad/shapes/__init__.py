"""Shape records, shape converters and the board/footprint document assemblers."""

from .board import convert_board
from .footprint import convert_footprint, sanitize_name
from .records import (
    ArcRecord,
    CircleRecord,
    CopperAreaRecord,
    FootprintRecord,
    HoleRecord,
    PadRecord,
    RectRecord,
    ShapeRecord,
    SolidRegionRecord,
    TextRecord,
    TrackRecord,
    ViaRecord,
    parse_shape,
)

__all__ = [
    "ArcRecord",
    "CircleRecord",
    "CopperAreaRecord",
    "FootprintRecord",
    "HoleRecord",
    "PadRecord",
    "RectRecord",
    "ShapeRecord",
    "SolidRegionRecord",
    "TextRecord",
    "TrackRecord",
    "ViaRecord",
    "convert_board",
    "convert_footprint",
    "parse_shape",
    "sanitize_name",
]
