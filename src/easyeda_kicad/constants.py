"""Global constants for the EasyEDA to KiCad conversion."""

# Unit conversion
SOURCE_TO_MM = 0.254
"""EasyEDA canvas unit (10 mil) expressed in millimetres."""

# Document origin of the EasyEDA canvas (source units)
SOURCE_ORIGIN_X = 4000.0
"""X offset of the EasyEDA document origin."""

SOURCE_ORIGIN_Y = 3000.0
"""Y offset of the EasyEDA document origin."""

# Output file header
KICAD_FILE_VERSION = 20210220
"""File format version written into board and footprint headers."""

KICAD_GENERATOR = "pcbnew"
"""Generator name written into board and footprint headers."""

BOARD_THICKNESS = 1.6
"""Default board thickness in mm."""

# Encoder
NUMBER_PRECISION = 3
"""Fractional digits kept when numbers are serialized."""

# Layers
INNER_LAYER_FIRST_ID = 21
"""First EasyEDA layer id of the inner copper range (In1.Cu)."""

INNER_LAYER_LAST_ID = 50
"""Last EasyEDA layer id of the inner copper range (In30.Cu)."""

UNSUPPORTED_LAYER_RANGE = (99, 200)
"""Half-open range of EasyEDA layer ids that KiCad has no counterpart for."""

EDGE_CUTS_LAYER = "Edge.Cuts"
"""Board outline layer; geometry on it gets the outline rounding policy."""

COMMENTS_LAYER = "Cmts.User"
"""Layer that diagnostics are written to."""

# Zones
ZONE_HATCH_PITCH = 0.508
"""Hatch pitch of generated zones (mm)."""

MIN_THERMAL_BRIDGE_WIDTH = 0.254
"""Minimum thermal spoke width of generated zones (mm)."""

# Tracks
LOCKED_STATUS = 40000
"""Status flag written for locked tracks."""

# Pads
MIN_PAD_SIZE = 0.01
"""Smallest pad width and height written (mm)."""

PAD_HOLE_TOLERANCE = 0.025
"""Hole to pad center offset (source units) above which the hole counts as misplaced."""

RECTANGLE_TOLERANCE = 0.01
"""Coordinate tolerance (source units) when a polygon pad is checked for being a rectangle."""
