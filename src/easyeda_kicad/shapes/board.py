"""Board conversion: an EasyEDA PCB document to a ``.kicad_pcb`` tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..config import DEFAULT_POLICY, ConversionPolicy
from ..constants import BOARD_THICKNESS, KICAD_FILE_VERSION, KICAD_GENERATOR
from ..context import ConversionContext
from ..exceptions import ShapeRecordError, UnsupportedShapeError
from ..logging_config import conversion_scope, create_logger
from ..sexp import LF, Document, Fragment, Node, splice
from .footprint import convert_board_footprint
from .primitives import (
    convert_arc,
    convert_board_pad,
    convert_circle,
    convert_copper_area,
    convert_hole,
    convert_rect,
    convert_solid_region,
    convert_text,
    convert_track,
    convert_via,
)
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
    split_shape,
)

logger = create_logger(__name__)

PREAMBLE = (
    "Info: below are the conversion remarks. The conversion may contain errors.\n"
    "Please read the remarks carefully and run the DRC check to solve issues.\n"
    "To find a component mentioned in the remarks go to:\n"
    "Kicad menu Edit > Find and enter the EDA_id (gge....); search for other text items.\n"
    "Only the id of the footprint can be found; the id of the shape is in the input json.\n"
    "You can export the footprints to a library by Kicad menu File > Export > "
    "Export Fps to (new) Library"
)
"""First diagnostic of every board; it reserves eight lines of text."""

PREAMBLE_LINES = 8


@dataclass
class BoardBody:
    """Converted top-level board elements, grouped by element kind."""

    footprints: Fragment = field(default_factory=list)
    tracks: Fragment = field(default_factory=list)
    copper_areas: Fragment = field(default_factory=list)
    solid_regions: Fragment = field(default_factory=list)
    arcs: Fragment = field(default_factory=list)
    rects: Fragment = field(default_factory=list)
    circles: Fragment = field(default_factory=list)
    holes: Fragment = field(default_factory=list)
    vias: Fragment = field(default_factory=list)
    pads: Fragment = field(default_factory=list)
    texts: Fragment = field(default_factory=list)

    def elements(self) -> Fragment:
        return splice(
            [
                self.footprints,
                self.tracks,
                self.copper_areas,
                self.solid_regions,
                self.arcs,
                self.rects,
                self.circles,
                self.holes,
                self.vias,
                self.pads,
                self.texts,
            ]
        )


def _dispatch(record: ShapeRecord, ctx: ConversionContext, body: BoardBody) -> None:
    if isinstance(record, ViaRecord):
        body.vias.extend(convert_via(record, ctx))
    elif isinstance(record, TrackRecord):
        body.tracks.extend(convert_track(record, ctx))
    elif isinstance(record, TextRecord):
        body.texts.extend(convert_text(record, ctx))
    elif isinstance(record, ArcRecord):
        body.arcs.extend(convert_arc(record, ctx))
    elif isinstance(record, SolidRegionRecord):
        body.solid_regions.extend(convert_solid_region(record, ctx))
    elif isinstance(record, CircleRecord):
        body.circles.extend(convert_circle(record, ctx))
    elif isinstance(record, HoleRecord):
        body.holes.extend(convert_hole(record, ctx))
    elif isinstance(record, FootprintRecord):
        body.footprints.extend(convert_board_footprint(record, ctx))
    elif isinstance(record, RectRecord):
        body.rects.extend(convert_rect(record, ctx))
    elif isinstance(record, PadRecord):
        body.pads.extend(convert_board_pad(record, ctx))
    elif isinstance(record, CopperAreaRecord):
        body.copper_areas.extend(convert_copper_area(record, ctx))


def convert_shapes(shapes: list[str], ctx: ConversionContext) -> BoardBody:
    """Convert top-level board shapes; unsupported kinds become diagnostics."""
    body = BoardBody()
    for shape in shapes:
        kind, _ = split_shape(shape)
        if kind == "SVGNODE":
            continue
        try:
            record = parse_shape(shape)
        except UnsupportedShapeError:
            ctx.report_error(f"Warning: unsupported shape {kind} found on pcb board; ignored")
            continue
        except ShapeRecordError as e:
            ctx.report_error(f"Error: {e.message}; shape ignored")
            continue
        logger.debug("Converting %s shape", record.KIND)
        _dispatch(record, ctx, body)
    return body


def _report_zone_counts(ctx: ConversionContext) -> None:
    if ctx.cu_zone_count > 0:
        ctx.report_error(
            f"Info: total of {ctx.cu_zone_count} Cu zones were created. "
            "Run DRC to check for overlap of zones.\n"
            "Adjust zone priority to solve this. Adjust other parameters as needed.\n"
            "Note: merge zones if possible "
            "(right click selected 2 zones > Zones > Merge zones).",
            3,
        )
    if ctx.keepout_zone_count > 0:
        ctx.report_error(
            f"Info: total of {ctx.keepout_zone_count} keep-out zones were created. "
            "Run DRC to check for zone settings.\n"
            "Adjust zone keep-out checkboxes as needed.",
            2,
        )


def convert_board(
    board_json: dict[str, Any], policy: ConversionPolicy = DEFAULT_POLICY
) -> Document:
    """Convert an EasyEDA board document.

    The layer declarations are built after all shapes are converted, since
    only then is the number of used inner copper layers known.

    Usage::

        doc = convert_board(json.loads(text))
        Path("board.kicad_pcb").write_text(doc.to_pretty_string())
    """
    router_rule = board_json.get("routerRule") or {}
    ctx = ConversionContext.for_board(router_rule.get("nets", ()), policy)
    head = board_json.get("head") or {}
    with conversion_scope(str(head.get("uuid") or "board")):
        shapes: list[str] = board_json.get("shape", [])
        logger.info("Converting board with %d shapes and %d nets", len(shapes), len(ctx.nets))
        ctx.report_error(PREAMBLE, PREAMBLE_LINES)
        body = convert_shapes(shapes, ctx)
        _report_zone_counts(ctx)
        if ctx.message_count > 1:
            logger.warning(
                "In total %d messages were created during the conversion; "
                "check messages on pcb layer Cmts.User",
                ctx.message_count,
            )
        root: list[Node] = [
            "kicad_pcb",
            ["version", KICAD_FILE_VERSION],
            ["generator", KICAD_GENERATOR],
            ["general", ["thickness", BOARD_THICKNESS]],
            ["paper", "A4"],
            LF,
            ["layers", *ctx.layers.declarations()],
            LF,
            *ctx.nets.declarations(),
            *body.elements(),
            *ctx.diagnostics.nodes(),
        ]
    return Document(root)
