"""Converters for single EasyEDA shapes.

Every converter takes a typed record, the conversion context and an optional
parent frame, and returns a document fragment: a format hint followed by the
converted element, or ``[]`` when the shape is dropped. Dropping a shape
always goes through ``ctx.report_error`` so the reason ends up in the output
document.

``footprint=True`` selects the footprint-child element names (``fp_line``,
``fp_arc``, ...) and indentation.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping

from ..constants import (
    LOCKED_STATUS,
    MIN_PAD_SIZE,
    MIN_THERMAL_BRIDGE_WIDTH,
    PAD_HOLE_TOLERANCE,
    RECTANGLE_TOLERANCE,
    ZONE_HATCH_PITCH,
)
from ..context import ConversionContext
from ..diagnostics import DocumentKind
from ..exceptions import ArcPathError, ArcResolutionError
from ..geometry import (
    ROOT_FRAME,
    EndpointArc,
    Frame,
    at,
    outline_extent,
    parse_arc_path,
    parse_number,
    path_points,
    polygon_points,
    resolve_arc,
    start_end,
    to_local_coords,
    to_output_units,
)
from ..logging_config import create_logger
from ..registry import LayerErrorKind, LayerResult, is_connected, is_copper
from ..sexp import LF, LF1, Fragment, Node
from .records import (
    ArcRecord,
    CircleRecord,
    CopperAreaRecord,
    HoleRecord,
    PadRecord,
    RectRecord,
    SolidRegionRecord,
    TextRecord,
    TrackRecord,
    ViaRecord,
)

logger = create_logger(__name__)

# Font size multipliers per EasyEDA font; height is stretched for a better fit
_FONT_TABLE: dict[str, tuple[float, float, float]] = {
    "NotoSerifCJKsc-Medium": (0.8, 0.8, 0.3),
    "NotoSansCJKjp-DemiLight": (0.6, 0.6, 0.5),
}
_DEFAULT_FONT = (0.75, 0.9, 0.8)  # width, height, thickness

_PAD_SHAPES = {"ELLIPSE": "circle", "RECT": "rect", "OVAL": "oval", "POLYGON": "custom"}
_PAD_LAYERS: dict[str, list[str]] = {
    "1": ["F.Cu", "F.Paste", "F.Mask"],
    "2": ["B.Cu", "B.Paste", "B.Mask"],
    "11": ["*.Cu", "*.Paste", "*.Mask"],
}
_MULTI_LAYER = "11"
_LEADING_INTEGER = re.compile(r"\s*[+-]?\d+")


def _hint(footprint: bool) -> Node:
    return LF1 if footprint else LF


def _layer_error(
    ctx: ConversionContext, layer: LayerResult, kind: str, shape_id: str, frame: Frame
) -> Fragment:
    return ctx.report_error(
        f"Error: {layer.error} found in {kind} ({shape_id}){frame.describe()}; "
        f"{kind.lower()} ignored"
    )


def _invalid_number(
    ctx: ConversionContext,
    kind: str,
    shape_id: str,
    frame: Frame,
    values: Mapping[str, str],
) -> bool:
    """Report the first of ``values`` that is not a finite number.

    Returns True when the shape has to be dropped.
    """
    for name, raw in values.items():
        if not math.isfinite(parse_number(raw)):
            ctx.report_error(
                f"Error: invalid {name} '{raw}' found in {kind} ({shape_id}){frame.describe()}; "
                f"{kind.lower()} ignored"
            )
            return True
    return False


def _copper_net_warning(
    ctx: ConversionContext, kind: str, shape_id: str, layer: str, net_id: int
) -> Fragment:
    noun = kind.lower()
    return ctx.report_error(
        f"Warning: Found {noun} ({shape_id}) on {layer} with netname {net_id}: "
        f"{noun} is kept; unsupported netname omitted.\n"
        f"Note: manual checks are needed; {noun} not part of ratsnest and this will "
        f"isolate {noun}.",
        2,
    )


def _cu_zone(
    ctx: ConversionContext,
    net_id: int,
    net: str,
    layer: str,
    name: str,
    points: list[Node],
) -> Fragment:
    ctx.cu_zone_count += 1
    return [
        LF,
        [
            "zone",
            ["net", net_id],
            ["net_name", net],
            ["layer", layer],
            ["name", name] if name else None,
            ["hatch", "edge", ZONE_HATCH_PITCH],
            ["priority", 1],
            ["connect_pads", "yes", ["clearance", 0]],
            LF1,
            ["fill", "yes", ["thermal_gap", 0], ["thermal_bridge_width", MIN_THERMAL_BRIDGE_WIDTH]],
            LF1,
            ["polygon", ["pts", *points]],
        ],
    ]


def convert_track(
    record: TrackRecord,
    ctx: ConversionContext,
    frame: Frame = ROOT_FRAME,
    footprint: bool = False,
) -> Fragment:
    """One line element per consecutive point pair of the track."""
    net_id = ctx.get_net_id(record.net)
    layer = ctx.resolve_layer(record.layer)
    if not layer.ok:
        return _layer_error(ctx, layer, "TRACK", record.id, frame)
    name = layer.unwrap()
    round_to_tenth = ctx.policy.edge_rounding.applies_to(name)
    copper = is_copper(name)
    if footprint:
        line_type = "fp_line"
    else:
        line_type = "segment" if copper else "gr_line"

    coords = record.points.split()
    if _invalid_number(ctx, "TRACK", record.id, frame, {"width": record.width}):
        return []
    if _invalid_number(
        ctx, "TRACK", record.id, frame, {f"coordinate {i + 1}": c for i, c in enumerate(coords)}
    ):
        return []
    if len(coords) % 2:
        ctx.report_error(
            f"Warning: odd number of coordinates in TRACK ({record.id}){frame.describe()}; "
            "last value ignored"
        )
    result: Fragment = []
    for i in range(0, len(coords) - 3, 2):
        result.append(_hint(footprint))
        result.append(
            [
                line_type,
                *start_end(
                    coords[i], coords[i + 1], coords[i + 2], coords[i + 3], round_to_tenth, frame
                ),
                ["width", to_output_units(record.width)],
                ["layer", name],
                ["net", net_id] if copper and is_connected(net_id) and not footprint else None,
                ["status", LOCKED_STATUS] if record.is_locked and not footprint else None,
            ]
        )
    return result


def convert_via(record: ViaRecord, ctx: ConversionContext, frame: Frame = ROOT_FRAME) -> Fragment:
    numbers = {"x": record.x, "y": record.y, "diameter": record.diameter, "drill": record.drill}
    if _invalid_number(ctx, "VIA", record.id, frame, numbers):
        return []
    net_id = ctx.get_net_id(record.net)
    connected = is_connected(net_id)
    return [
        LF,
        [
            "via",
            at(record.x, record.y, None, frame),
            ["size", to_output_units(record.diameter)],
            ["drill", to_output_units(record.drill) * 2],
            ["layers", "F.Cu", "B.Cu"],
            None if connected else ["free"],
            ["net", net_id if connected else 0],
        ],
    ]


def convert_arc(
    record: ArcRecord,
    ctx: ConversionContext,
    frame: Frame = ROOT_FRAME,
    footprint: bool = False,
) -> Fragment:
    """Arc path to ``gr_arc``/``fp_arc`` in KiCad's center/end/angle form."""
    layer = ctx.resolve_layer(record.layer)
    if not layer.ok:
        return _layer_error(ctx, layer, "ARC", record.id, frame)
    name = layer.unwrap()
    net_id = ctx.get_net_id(record.net)
    if is_copper(name) and is_connected(net_id):
        return _copper_net_warning(ctx, "ARC", record.id, name, net_id)  # type: ignore[arg-type]
    if _invalid_number(ctx, "ARC", record.id, frame, {"width": record.width}):
        return []

    try:
        path = parse_arc_path(record.path)
    except ArcPathError:
        return ctx.report_error(
            f"Error: invalid arc\npath: {record.path}\n"
            f"found in ARC ({record.id}){frame.describe()} on layer {name}; arc ignored",
            3,
        )

    start = to_local_coords(path.start_x, path.start_y, frame)
    end = to_local_coords(path.end_x, path.end_y, frame)
    try:
        # the frame rotation turns the ellipse axes, not the radii
        arc = resolve_arc(
            EndpointArc(
                start.x,
                start.y,
                path.radius_x,
                path.radius_y,
                path.x_axis_rotation + frame.rotation,
                path.large_arc,
                path.sweep,
                end.x,
                end.y,
            )
        )
    except ArcResolutionError as e:
        logger.debug("Arc %s not resolved: %s", record.id, e.message)
        return ctx.report_error(
            f"Error: arc resolver returned invalid result for ARC ({record.id})"
            f"{frame.describe()} on layer {name}; arc ignored"
        )

    # KiCad arcs run counter-clockwise from their end point
    end_point = start if path.sweep else end
    round_to_tenth = ctx.policy.edge_rounding.applies_to(name)
    angle = outline_extent(arc.extent, name, ctx.policy.arc_snap)
    return [
        _hint(footprint),
        [
            "fp_arc" if footprint else "gr_arc",
            [
                "start",
                to_output_units(arc.center_x, round_to_tenth),
                to_output_units(arc.center_y, round_to_tenth),
            ],
            [
                "end",
                to_output_units(end_point.x, round_to_tenth),
                to_output_units(end_point.y, round_to_tenth),
            ],
            ["angle", angle],
            ["width", to_output_units(record.width)],
            ["layer", name],
        ],
    ]


def convert_circle(
    record: CircleRecord,
    ctx: ConversionContext,
    frame: Frame = ROOT_FRAME,
    footprint: bool = False,
) -> Fragment:
    layer = ctx.resolve_layer(record.layer)
    if not layer.ok:
        return _layer_error(ctx, layer, "CIRCLE", record.id, frame)
    name = layer.unwrap()
    net_id = ctx.get_net_id(record.net)
    if is_copper(name) and is_connected(net_id):
        return _copper_net_warning(ctx, "CIRCLE", record.id, name, net_id)  # type: ignore[arg-type]
    numbers = {
        "x": record.x,
        "y": record.y,
        "radius": record.radius,
        "stroke width": record.stroke_width,
    }
    if _invalid_number(ctx, "CIRCLE", record.id, frame, numbers):
        return []
    center = to_local_coords(record.x, record.y, frame)
    center_x = to_output_units(center.x)
    center_y = to_output_units(center.y)
    return [
        _hint(footprint),
        [
            "fp_circle" if footprint else "gr_circle",
            ["center", center_x, center_y],
            ["end", center_x + to_output_units(record.radius), center_y],
            ["layer", name],
            ["width", to_output_units(record.stroke_width)],
        ],
    ]


def _hole_pad(at_node: list[Node], size: float) -> list[Node]:
    return [
        "pad",
        "",
        "np_thru_hole",
        "circle",
        at_node,
        ["size", size, size],
        ["drill", size],
        ["layers", "*.Cu", "*.Mask"],
    ]


def convert_hole(record: HoleRecord, ctx: ConversionContext) -> Fragment:
    """Board hole: an auto-generated, virtual mounting-hole footprint."""
    numbers = {"x": record.x, "y": record.y, "radius": record.radius}
    if _invalid_number(ctx, "HOLE", record.id, ROOT_FRAME, numbers):
        return []
    size = to_output_units(record.radius) * 2
    return [
        LF,
        [
            "footprint",
            f"AutoGenerated:MountingHole_{size:.2f}mm",
            "locked" if record.is_locked else None,
            ["layer", "F.Cu"],
            at(record.x, record.y),
            ["attr", "virtual"],
            LF1,
            ["fp_text", "reference", "", ["at", 0, 0], ["layer", "F.SilkS"]],
            LF1,
            ["fp_text", "value", "", ["at", 0, 0], ["layer", "F.SilkS"]],
            LF1,
            _hole_pad(["at", 0, 0], size),
        ],
    ]


def convert_footprint_hole(record: HoleRecord, ctx: ConversionContext, frame: Frame) -> Fragment:
    """Hole inside a footprint: a non-plated pad."""
    numbers = {"x": record.x, "y": record.y, "radius": record.radius}
    if _invalid_number(ctx, "HOLE", record.id, frame, numbers):
        return []
    size = to_output_units(record.radius) * 2
    return [LF1, _hole_pad(at(record.x, record.y, None, frame), size)]


def convert_footprint_via(
    record: ViaRecord,
    ctx: ConversionContext,
    frame: Frame,
    on_board: bool,
) -> tuple[Fragment, Fragment]:
    """Via inside a footprint.

    Returns ``(footprint_part, board_part)``. A via without a net becomes a
    non-plated hole of the footprint. A via with a net cannot live in a
    footprint: on a board it is moved out as a board via, in a footprint
    file it is dropped. Both cases are reported.
    """
    if record.net in ("", "0"):
        numbers = {"x": record.x, "y": record.y, "drill": record.drill}
        if _invalid_number(ctx, "VIA", record.id, frame, numbers):
            return [], []
        size = to_output_units(record.drill) * 2
        return [LF1, _hole_pad(at(record.x, record.y, None, frame), size)], []
    if not on_board:
        ctx.report_error(f"Warning: unsupported VIA found ({record.id}); via ignored")
        return [], []
    ctx.report_error(
        f"Warning: unsupported VIA found ({record.id}){frame.describe()} on net "
        f"{record.net}; converted in pcb via"
    )
    return [], convert_via(record, ctx)


def convert_rect(
    record: RectRecord,
    ctx: ConversionContext,
    frame: Frame = ROOT_FRAME,
    footprint: bool = False,
) -> Fragment:
    """Rectangle outline, or a copper zone when it sits on copper with a net."""
    layer = ctx.resolve_layer(record.layer)
    if not layer.ok:
        return _layer_error(ctx, layer, "RECT", record.id, frame)
    name = layer.unwrap()
    numbers = {"x": record.x, "y": record.y, "width": record.width, "height": record.height}
    if _invalid_number(ctx, "RECT", record.id, frame, numbers):
        return []
    start = to_local_coords(record.x, record.y, frame)
    width = parse_number(record.width)
    height = parse_number(record.height)
    net_id = ctx.get_net_id(record.net)

    if is_copper(name) and is_connected(net_id):
        x, y = start.x, start.y
        corners = [x, y, x, y + height, x + width, y + height, x + width, y, x, y]
        points: list[Node] = [
            ["xy", to_output_units(corners[i]), to_output_units(corners[i + 1])]
            for i in range(0, len(corners), 2)
        ]
        return _cu_zone(ctx, net_id, record.net, name, record.id, points)  # type: ignore[arg-type]

    return [
        _hint(footprint),
        [
            "fp_rect" if footprint else "gr_rect",
            ["start", to_output_units(start.x), to_output_units(start.y)],
            ["end", to_output_units(start.x + width), to_output_units(start.y + height)],
            ["layer", name],
            ["width", 0.1],
            ["fill", "solid"],
        ],
    ]


def convert_solid_region(record: SolidRegionRecord, ctx: ConversionContext) -> Fragment:
    """Board solid region: keep-out zone, copper zone, filled polygon or board cutout."""
    layer = ctx.resolve_layer(record.layer)
    if not layer.ok:
        return _layer_error(ctx, layer, "SOLIDREGION", record.id, ROOT_FRAME)
    name = layer.unwrap()
    if record.type == "":
        return ctx.report_error(
            f"Warning: No type supplied of SOLIDREGION ({record.id}) on layer {name}; "
            "solidregion ignored"
        )
    points = path_points(record.path)
    net_id = ctx.get_net_id(record.net)
    if points is None:
        return ctx.report_error(
            f"Warning: Unsupported path with arcs found in SOLIDREGION ({record.id}) on layer "
            f"{name}; solidregion ignored"
        )
    polygon = polygon_points(points)

    if record.type == "cutout":
        # allowed / not_allowed cannot be derived; the user has to check them
        ctx.keepout_zone_count += 1
        return [
            LF,
            [
                "zone",
                ["net", 0],
                ["net_name", ""],
                ["hatch", "edge", ZONE_HATCH_PITCH],
                ["layer", name],
                ["name", record.id] if record.id else None,
                LF1,
                [
                    "keepout",
                    ["tracks", "allowed"],
                    ["vias", "allowed"],
                    ["pads", "allowed"],
                    ["copperpour", "not_allowed"],
                    ["footprints", "allowed"],
                ],
                LF1,
                ["polygon", ["pts", *polygon]],
            ],
        ]
    if record.type == "solid":
        if is_copper(name) and is_connected(net_id):
            return _cu_zone(ctx, net_id, record.net, name, "", polygon)  # type: ignore[arg-type]
        return [
            LF,
            ["gr_poly", ["pts", *polygon], ["layer", name], ["width", 0], ["fill", "solid"]],
        ]
    if record.type == "npth":
        return [LF, ["gr_poly", ["pts", *polygon], ["layer", name], ["width", 0.254]]]
    return ctx.report_error(
        f"Warning: unsupported type {record.type} found in SOLIDREGION {record.id} on layer "
        f"{name}; solidregion ignored"
    )


def convert_footprint_polygon(
    record: SolidRegionRecord, ctx: ConversionContext, frame: Frame
) -> Fragment:
    """Solid region inside a footprint: a filled ``fp_poly``."""
    layer = ctx.resolve_layer(record.layer)
    if not layer.ok:
        return _layer_error(ctx, layer, "SOLIDREGION", record.id, frame)
    name = layer.unwrap()
    if record.type != "solid":
        return ctx.report_error(
            f"Warning: unsupported type {record.type} found in SOLIDREGION {record.id}"
            f"{frame.describe()} on layer {name}; solidregion ignored"
        )
    points = path_points(record.path)
    if not points:
        return ctx.report_error(
            f"Error: No points defined for polygon in SOLIDREGION ({record.id})"
            f"{frame.describe()} on layer {name}; solidregion ignored"
        )
    return [
        LF1,
        ["fp_poly", ["pts", *polygon_points(points, frame)], ["layer", name], ["width", 0]],
    ]


def convert_text(
    record: TextRecord,
    ctx: ConversionContext,
    frame: Frame = ROOT_FRAME,
    footprint: bool = False,
) -> Fragment:
    """Board or footprint text.

    In footprints, ``P`` texts become the reference, ``N`` texts the value
    (moved from silkscreen to fab) and everything else a user text.
    """
    layer = ctx.resolve_layer(record.layer)
    if not layer.ok:
        return _layer_error(ctx, layer, "TEXT", record.id, frame)
    name = layer.unwrap()
    if footprint and record.type == "N":
        name = name.replace(".SilkS", ".Fab")
    numbers = {"x": record.x, "y": record.y, "font size": record.font_size}
    if _invalid_number(ctx, "TEXT", record.id, frame, numbers):
        return []

    width_factor, height_factor, thickness_factor = _FONT_TABLE.get(record.font, _DEFAULT_FONT)
    font_size = to_output_units(record.font_size)
    if footprint:
        text_type: str | None = {"P": "reference", "N": "value"}.get(record.type, "user")
    else:
        text_type = None
    thickness = to_output_units(record.line_width) * thickness_factor
    return [
        _hint(footprint),
        [
            "fp_text" if footprint else "gr_text",
            text_type,
            record.text,
            at(record.x, record.y, record.angle, frame),
            ["layer", name],
            "hide" if record.display == "none" else None,
            [
                "effects",
                [
                    "font",
                    ["size", font_size * height_factor, font_size * width_factor],
                    ["thickness", thickness if math.isfinite(thickness) else 0],
                ],
                ["justify", "left", "mirror" if name.startswith("B") else None],
            ],
        ],
    ]


def _pad_number(number: str) -> int | str:
    """Leading integer of a pad number, or the number text when it has none."""
    match = _LEADING_INTEGER.match(number)
    return int(match.group(0)) if match else number


def _is_rectangle(points: list[float]) -> bool:
    """True for four corners listed in order around an axis-aligned rectangle."""
    if len(points) != 8:
        return False
    x1, y1, x2, y2, x3, y3, x4, y4 = points

    def eq(a: float, b: float) -> bool:
        return abs(a - b) < RECTANGLE_TOLERANCE

    return (eq(x1, x2) and eq(y2, y3) and eq(x3, x4) and eq(y4, y1)) or (
        eq(y1, y2) and eq(x2, x3) and eq(y3, y4) and eq(x4, x1)
    )


def _rectangle_size(points: list[float], rotation: float) -> tuple[float, float]:
    xs, ys = points[0::2], points[1::2]
    width, height = max(xs) - min(xs), max(ys) - min(ys)
    if math.floor(abs(rotation) + 0.5) % 180 == 90:
        return height, width
    return width, height


def _drill(radius: float, length: float, width: float, height: float) -> list[Node] | None:
    """Round or oval drill of a pad; zero or NaN values count as absent.

    EasyEDA orients an oval hole along the longer side of the pad.
    """
    has_radius = math.isfinite(radius) and radius != 0
    has_length = math.isfinite(length) and length != 0
    if has_radius and has_length:
        if length > radius and height > width:
            return ["drill", "oval", radius * 2, length]
        return ["drill", "oval", length, radius * 2]
    if has_radius:
        return ["drill", radius * 2]
    return None


def _hole_misplaced(record: PadRecord) -> bool:
    hole_x, _, hole_y = record.hole_xy.partition(",")
    if hole_x == "" or hole_y == "":
        return False
    return (
        abs(parse_number(record.x) - parse_number(hole_x)) > PAD_HOLE_TOLERANCE
        or abs(parse_number(record.y) - parse_number(hole_y)) > PAD_HOLE_TOLERANCE
    )


def convert_pad(
    record: PadRecord,
    ctx: ConversionContext,
    frame: Frame,
    on_board: bool = False,
) -> Fragment:
    """Footprint pad.

    Pads on layer 11 go through all copper layers and are plated unless
    ``plated`` says otherwise; pads on the top or bottom layer are SMD pads.
    A polygon pad whose points form an axis-aligned rectangle is written as a
    plain ``rect`` pad; any other polygon becomes a ``custom`` pad with the
    outline as a primitive.

    ``on_board`` marks the single pad of a board-level PAD shape, which is
    always numbered 1. Pads carry a net on boards only.
    """
    shape = _PAD_SHAPES.get(record.shape)
    if shape is None:
        return ctx.report_error(
            f"Warning: unsupported shape {record.shape} of PAD ({record.id}){frame.describe()}; "
            "pad ignored"
        )
    if record.layer not in _PAD_LAYERS:
        kind = LayerErrorKind.UNSUPPORTED if record.layer else LayerErrorKind.MISSING
        return _layer_error(ctx, LayerResult.failure(kind, record.layer), "PAD", record.id, frame)

    points = [parse_number(p) for p in record.points.split()]
    rotation = parse_number(record.rotation)
    if not math.isfinite(rotation):
        rotation = 0.0
    width, height = parse_number(record.width), parse_number(record.height)
    numbers = {"x": record.x, "y": record.y}
    if shape == "custom" and _is_rectangle(points):
        shape = "rect"
        width, height = _rectangle_size(points, rotation)
    elif shape == "custom":
        if not points:
            return ctx.report_error(
                f"Error: No points defined for polygon in PAD ({record.id}){frame.describe()}; "
                "pad ignored"
            )
    else:
        numbers.update(width=record.width, height=record.height)
    multi_layer = record.layer == _MULTI_LAYER
    if multi_layer:
        numbers["hole radius"] = record.hole_radius
    if _invalid_number(ctx, "PAD", record.id, frame, numbers):
        return []

    number = 1 if on_board else _pad_number(record.number)
    on_pcb = ctx.kind is DocumentKind.BOARD
    layers = _PAD_LAYERS[record.layer]
    net_id: int | None = None
    radius = record.hole_radius
    if multi_layer:
        if record.plated == "Y":
            pad_type = "thru_hole"
            net_id = ctx.get_net_id(record.net) if on_pcb else None
        else:
            pad_type = "np_thru_hole"
            layers = ["F&B.Cu", "*.Mask"]
            if record.net:
                ctx.report_error(
                    f"Error: netid not supported for PAD {number} ({record.id})"
                    f"{frame.describe()}; netid ignored"
                )
        if _hole_misplaced(record):
            ctx.report_error(
                f"Warning: hole in pad may be misplaced for PAD {number} ({record.id})"
                f"{frame.describe()}"
            )
    else:
        pad_type = "smd"
        net_id = ctx.get_net_id(record.net) if on_pcb else None
        radius = "0"

    primitives: list[Node] | None = None
    if shape == "custom":
        # the anchor of a custom pad stays just larger than its hole
        side = to_output_units(parse_number(radius) * 2 + 0.1)
        size: list[Node] = ["size", side, side]
        outline = Frame.placed_at(record.x, record.y, record.rotation)
        primitives = [
            "primitives",
            ["gr_poly", ["pts", *polygon_points(record.points.split(), outline)], ["width", 0.1]],
        ]
    else:
        size = [
            "size",
            max(to_output_units(width), MIN_PAD_SIZE),
            max(to_output_units(height), MIN_PAD_SIZE),
        ]
    drill = _drill(
        to_output_units(radius),
        to_output_units(record.hole_length),
        to_output_units(width),
        to_output_units(height),
    )
    return [
        LF1,
        [
            "pad",
            number,
            pad_type,
            shape,
            at(record.x, record.y, record.rotation, frame),
            size,
            ["layers", *layers],
            drill,
            ["net", net_id, record.net] if is_connected(net_id) else None,
            primitives,
        ],
    ]


def convert_board_pad(record: PadRecord, ctx: ConversionContext) -> Fragment:
    """Board-level pad: a single-pad footprint that only exists on the board."""
    pad = convert_pad(record, ctx, Frame.placed_at(record.x, record.y), on_board=True)
    if not pad:
        return []
    if record.layer == _MULTI_LAYER:
        plated = record.plated == "Y"
        name = f"{'TH' if plated else 'NPTH'}_pad_{record.id}"
        attr = "through_hole" if plated else None
        value = f"hole_{to_output_units(record.hole_radius) * 2:.2f}_mm"
    else:
        name = f"SMD_pad_{record.id}"
        attr = "smd"
        value = ""
    return [
        LF,
        [
            "footprint",
            f"AutoGenerated:{name}",
            "locked" if record.is_locked else None,
            ["layer", "F.Cu"],
            at(record.x, record.y),
            ["attr", attr, "board_only", "exclude_from_pos_files", "exclude_from_bom"],
            LF1,
            ["fp_text", "reference", record.id, ["at", 0, 0], ["layer", "F.SilkS"], "hide"],
            LF1,
            ["fp_text", "value", value, ["at", 0, 0], ["layer", "F.SilkS"], "hide"],
            *pad,
        ],
    ]


def convert_copper_area(record: CopperAreaRecord, ctx: ConversionContext) -> Fragment:
    """Copper pour: a filled zone; a GND pour yields to the other zones."""
    layer = ctx.resolve_layer(record.layer)
    if not layer.ok:
        return _layer_error(ctx, layer, "COPPERAREA", record.id, ROOT_FRAME)
    name = layer.unwrap()
    if record.fill_style in ("none", ""):
        return ctx.report_error(
            f'Warning: Unsupported type "No Solid" of COPPERAREA ({record.id}) on layer {name}; '
            "copperarea ignored"
        )
    points = path_points(record.path)
    if points is None:
        return ctx.report_error(
            f"Warning: Unsupported path with arcs found in COPPERAREA ({record.id}) on layer "
            f"{name}; copperarea ignored"
        )
    grid = record.fill_style == "grid"
    numbers = {"clearance": record.clearance_width}
    if grid:
        numbers["grid line width"] = record.grid_line_width
        numbers["grid line spacing"] = record.grid_line_spacing
    if _invalid_number(ctx, "COPPERAREA", record.id, ROOT_FRAME, numbers):
        return []

    net_id = ctx.get_net_id(record.net)
    clearance = to_output_units(record.clearance_width)
    spoke = to_output_units(record.spoke_width)
    keep_islands = record.keep_island == "yes"
    ctx.cu_zone_count += 1
    return [
        LF,
        [
            "zone",
            ["net", net_id or 0],
            ["net_name", record.net],
            ["layer", name],
            ["name", record.area_name] if record.area_name else None,
            ["hatch", "edge", ZONE_HATCH_PITCH],
            ["priority", 0 if record.net == "GND" else 1],
            [
                "connect_pads",
                "yes" if record.thermal_type == "direct" else None,
                ["clearance", clearance],
            ],
            LF1,
            [
                "fill",
                "yes",
                ["mode", "hatch"] if grid else None,
                ["thermal_gap", clearance],
                [
                    "thermal_bridge_width",
                    spoke if spoke >= MIN_THERMAL_BRIDGE_WIDTH else MIN_THERMAL_BRIDGE_WIDTH,
                ],
                ["island_removal_mode", 1] if keep_islands else None,
                ["island_area_min", 0] if keep_islands else None,
                ["hatch_thickness", to_output_units(record.grid_line_width)] if grid else None,
                ["hatch_gap", to_output_units(record.grid_line_spacing)] if grid else None,
                ["hatch_orientation", 0] if grid else None,
            ],
            LF1,
            ["polygon", ["pts", *polygon_points(points)]],
        ],
    ]
