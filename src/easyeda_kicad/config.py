"""Conversion policies.

The board outline workarounds (rounding to 0.1 mm and arc angle snapping)
and the placement of diagnostic text are kept as policy objects so that they
can be tuned per target KiCad version without touching the converters.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import EDGE_CUTS_LAYER


@dataclass(frozen=True)
class ArcSnapPolicy:
    """Snap arc extents that land close to a well-known angle."""

    targets: tuple[float, ...] = (45.0, 90.0)
    tolerance: float = 1.0  # degrees, exclusive window around each target
    layers: frozenset[str] = frozenset({EDGE_CUTS_LAYER})

    def applies_to(self, layer: str) -> bool:
        return layer in self.layers

    def snap(self, angle: float) -> float:
        """Return the snapped angle, or ``angle`` unchanged when no target is near."""
        for target in self.targets:
            if target - self.tolerance < angle < target + self.tolerance:
                return target
        return angle


@dataclass(frozen=True)
class EdgeRoundingPolicy:
    """Round coordinates on outline layers to one decimal place."""

    layers: frozenset[str] = frozenset({EDGE_CUTS_LAYER})
    enabled: bool = True

    def applies_to(self, layer: str) -> bool:
        return self.enabled and layer in self.layers


@dataclass(frozen=True)
class PlacementPolicy:
    """Where and how diagnostic annotations are drawn.

    ``y = cursor + lines * line_pitch + gap`` for a new message; the cursor then
    moves to ``y + (lines - 1) * line_pitch``.
    """

    line_pitch: float
    gap: float
    x: float
    font_size: float
    thickness: float
    justify_left: bool

    def place(self, cursor: float, lines: int) -> tuple[float, float]:
        """Return ``(y, new_cursor)`` for a message spanning ``lines`` lines."""
        y = cursor + lines * self.line_pitch + self.gap
        return y, y + (lines - 1) * self.line_pitch


BOARD_PLACEMENT = PlacementPolicy(
    line_pitch=1.8, gap=1.8, x=-200.0, font_size=2.0, thickness=0.4, justify_left=True
)
"""Board messages: wide spacing, left aligned far outside the design."""

FOOTPRINT_PLACEMENT = PlacementPolicy(
    line_pitch=1.0, gap=1.0, x=0.0, font_size=0.8, thickness=0.2, justify_left=False
)
"""Footprint messages: compact spacing near the footprint origin."""


@dataclass(frozen=True)
class ConversionPolicy:
    """Bundle of all tunable behaviour for one conversion run."""

    arc_snap: ArcSnapPolicy = field(default_factory=ArcSnapPolicy)
    edge_rounding: EdgeRoundingPolicy = field(default_factory=EdgeRoundingPolicy)
    board_placement: PlacementPolicy = BOARD_PLACEMENT
    footprint_placement: PlacementPolicy = FOOTPRINT_PLACEMENT


DEFAULT_POLICY = ConversionPolicy()
