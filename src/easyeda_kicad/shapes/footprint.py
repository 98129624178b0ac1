"""Footprint conversion: LIB shapes on a board and standalone footprint documents."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any

from ..config import DEFAULT_POLICY, ConversionPolicy
from ..constants import KICAD_FILE_VERSION, KICAD_GENERATOR
from ..context import ConversionContext
from ..exceptions import ShapeRecordError, UnsupportedShapeError
from ..geometry import Frame, at, parse_number
from ..logging_config import conversion_scope, create_logger
from ..sexp import LF, LF1, Document, Fragment, Node, splice
from .primitives import (
    convert_arc,
    convert_circle,
    convert_footprint_hole,
    convert_footprint_polygon,
    convert_footprint_via,
    convert_pad,
    convert_rect,
    convert_text,
    convert_track,
)
from .records import (
    ArcRecord,
    CircleRecord,
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
    split_shape,
)

logger = create_logger(__name__)

_UNSAFE_NAME_CHARS = re.compile(r"[^\w\s.()\-]")
MODEL_PATH_TEMPLATE = "${KICAD6_3DMODEL_DIR}/EasyEDA.3dshapes/{value}.wrl"
"""3D model reference of converted footprints; ``{value}`` is the footprint value."""

FOOTPRINT_FILE_OWNER = "this fp"
"""Owner name used in diagnostics of a standalone footprint document."""


def sanitize_name(name: str) -> str:
    """Replace characters that are not allowed in KiCad library names by ``x``."""
    return _UNSAFE_NAME_CHARS.sub("x", name)


@dataclass
class FootprintBody:
    """Converted children of a footprint, grouped by element kind."""

    texts: Fragment = field(default_factory=list)
    lines: Fragment = field(default_factory=list)
    rects: Fragment = field(default_factory=list)
    circles: Fragment = field(default_factory=list)
    arcs: Fragment = field(default_factory=list)
    polygons: Fragment = field(default_factory=list)
    holes: Fragment = field(default_factory=list)
    pads: Fragment = field(default_factory=list)
    board_vias: Fragment = field(default_factory=list)

    @property
    def attributes(self) -> list[Node] | None:
        """``(attr smd)`` when the footprint has at least one SMD pad."""
        if any(isinstance(pad, list) and pad[2] == "smd" for pad in self.pads):
            return ["attr", "smd"]
        return None

    def graphics(self) -> Fragment:
        """Drawn children, holes and pads; everything but the texts."""
        return splice(
            [self.lines, self.rects, self.circles, self.arcs, self.polygons, self.holes, self.pads]
        )

    def children(self) -> Fragment:
        """Footprint children in KiCad's conventional order."""
        return [*self.texts, *self.graphics()]


def convert_children(
    shapes: list[str] | tuple[str, ...],
    ctx: ConversionContext,
    frame: Frame,
    on_board: bool,
) -> FootprintBody:
    """Convert the nested shapes of a footprint in its own frame."""
    body = FootprintBody()
    for shape in shapes:
        kind, _ = split_shape(shape)
        if kind == "SVGNODE":
            continue
        try:
            record = parse_shape(shape)
        except UnsupportedShapeError:
            where = f" {frame.owner_id} on pcb" if on_board else ""
            ctx.report_error(f"Warning: unsupported shape {kind} found in footprint{where}")
            continue
        except ShapeRecordError as e:
            ctx.report_error(f"Error: {e.message}{frame.describe()}; shape ignored")
            continue
        _convert_child(record, ctx, frame, on_board, body)
    return body


def _convert_child(
    record: ShapeRecord,
    ctx: ConversionContext,
    frame: Frame,
    on_board: bool,
    body: FootprintBody,
) -> None:
    if isinstance(record, TrackRecord):
        body.lines.extend(convert_track(record, ctx, frame, footprint=True))
    elif isinstance(record, TextRecord):
        body.texts.extend(convert_text(record, ctx, frame, footprint=True))
    elif isinstance(record, ArcRecord):
        body.arcs.extend(convert_arc(record, ctx, frame, footprint=True))
    elif isinstance(record, HoleRecord):
        body.holes.extend(convert_footprint_hole(record, ctx, frame))
    elif isinstance(record, PadRecord):
        body.pads.extend(convert_pad(record, ctx, frame))
    elif isinstance(record, CircleRecord):
        body.circles.extend(convert_circle(record, ctx, frame, footprint=True))
    elif isinstance(record, SolidRegionRecord):
        body.polygons.extend(convert_footprint_polygon(record, ctx, frame))
    elif isinstance(record, RectRecord):
        body.rects.extend(convert_rect(record, ctx, frame, footprint=True))
    elif isinstance(record, ViaRecord):
        hole, board_via = convert_footprint_via(record, ctx, frame, on_board)
        body.holes.extend(hole)
        body.board_vias.extend(board_via)
    else:
        where = f" {frame.owner_id} on pcb" if on_board else ""
        ctx.report_error(f"Warning: unsupported shape {record.KIND} found in footprint{where}")


def convert_board_footprint(record: FootprintRecord, ctx: ConversionContext) -> Fragment:
    """A LIB shape placed on a board.

    Vias with a net cannot live in a footprint; they follow the footprint as
    board-level vias.
    """
    for name, raw in (("x", record.x), ("y", record.y)):
        if not math.isfinite(parse_number(raw)):
            return ctx.report_error(
                f"Error: invalid {name} '{raw}' found in LIB ({record.id}); footprint ignored"
            )
    frame = Frame.placed_at(record.x, record.y, record.rotation, owner_id=record.id)
    logger.debug("Converting footprint %s with %d shapes", record.id, len(record.shapes))
    body = convert_children(record.shapes, ctx, frame, on_board=True)
    package = record.attribute_map.get("package")
    name = sanitize_name(package) if package else "unknown"
    id_text: list[Node] = [
        "fp_text",
        "user",
        record.id,
        ["at", 0, 0],
        ["layer", "Cmts.User"],
        ["effects", ["font", ["size", 1, 1], ["thickness", 0.15]]],
    ]
    return [
        LF,
        [
            "footprint",
            f"EasyEDA:{name}",
            "locked" if record.is_locked else None,
            ["layer", "F.Cu"],
            at(record.x, record.y, record.rotation),
            body.attributes,
            *body.texts,
            LF1,
            id_text,
            *body.graphics(),
        ],
        *body.board_vias,
    ]


def _head_properties(c_para: dict[str, Any], ctx: ConversionContext) -> Fragment:
    """Reference, value, tags and description of a footprint document."""
    font: list[Node] = ["effects", ["font", ["size", 1.27, 1.27]]]
    result: Fragment = [
        LF1,
        ["fp_text", "reference", "REF**", ["at", 0, 0], ["layer", "F.SilkS"], font],
    ]
    ctx.footprint_value = "unknown"
    package = c_para.get("package")
    if package is not None:
        ctx.footprint_value = sanitize_name(str(package))
        result.extend(
            [LF1, ["fp_text", "value", str(package), ["at", 0, 0], ["layer", "F.Fab"], font]]
        )
        result.extend([LF1, ["tags", f"{str(package).split('_')[0]}, EasyEDA conversion"]])
    link = c_para.get("link")
    if link is not None:
        result.extend([LF1, ["descr", f"EasyEDA footprint: {link}"]])
    return result


def convert_footprint(
    footprint_json: dict[str, Any], policy: ConversionPolicy = DEFAULT_POLICY
) -> Document:
    """Convert a standalone EasyEDA footprint document to a ``.kicad_mod`` tree.

    Diagnostics are stacked near the footprint origin and kept in the
    document as user texts.

    Usage::

        doc = convert_footprint(json.loads(text))
        path = f"{doc.find('footprint')[1]}.kicad_mod"
    """
    head: dict[str, Any] = footprint_json.get("head", {})
    ctx = ConversionContext.for_footprint(policy)
    with conversion_scope(str(head.get("uuid") or "footprint")):
        frame = Frame.placed_at(
            head.get("x", 0), head.get("y", 0), head.get("rotation"), FOOTPRINT_FILE_OWNER
        )
        properties = _head_properties(head.get("c_para", {}), ctx)
        shapes: list[str] = footprint_json.get("shape", [])
        logger.info("Converting footprint %s with %d shapes", ctx.footprint_value, len(shapes))
        body = convert_children(shapes, ctx, frame, on_board=False)
        if ctx.message_count > 0:
            logger.warning(
                "In total %d messages were created during the conversion; "
                "check messages on footprint layer Cmts.User",
                ctx.message_count,
            )
        value = ctx.footprint_value
        root: list[Node] = [
            "footprint",
            value,
            ["version", KICAD_FILE_VERSION],
            ["generator", KICAD_GENERATOR],
            ["layer", "F.Cu"],
            *properties,
            body.attributes,
            *body.children(),
            *ctx.diagnostics.nodes(),
            LF1,
            [
                "model",
                MODEL_PATH_TEMPLATE.replace("{value}", value),
                ["offset", ["xyz", 0, 0, 0]],
                ["scale", ["xyz", 1, 1, 1]],
                ["rotate", ["xyz", 0, 0, 0]],
            ],
        ]
    return Document(root)
