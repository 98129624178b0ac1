"""Conversion diagnostics embedded as text in the output document.

Every problem found while converting is numbered and written as a comment
text on ``Cmts.User``, stacked vertically so that messages never overlap.
Board documents stack them far left of the design; footprint documents stack
them compactly near the footprint origin.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .config import BOARD_PLACEMENT, FOOTPRINT_PLACEMENT, PlacementPolicy
from .constants import COMMENTS_LAYER
from .logging_config import create_logger
from .sexp import LF, LF1, Fragment, Node

logger = create_logger(__name__)


class DocumentKind(Enum):
    BOARD = "board"
    FOOTPRINT = "footprint"


@dataclass(frozen=True)
class Diagnostic:
    """One reported message."""

    number: int
    message: str
    y: float
    lines: int = 1

    @property
    def text(self) -> str:
        return f"#{self.number}: {self.message}"


class DiagnosticAccumulator:
    """Collects diagnostics and their annotation nodes for one document.

    ``report_error`` returns an empty fragment so converters can write
    ``return diagnostics.report_error(...)`` in place of their output.
    """

    def __init__(
        self,
        kind: DocumentKind = DocumentKind.BOARD,
        placement: PlacementPolicy | None = None,
    ) -> None:
        self.kind = kind
        if placement is None:
            placement = FOOTPRINT_PLACEMENT if kind is DocumentKind.FOOTPRINT else BOARD_PLACEMENT
        self.placement = placement
        self.count = 0
        self.cursor = 0.0
        self.diagnostics: list[Diagnostic] = []
        self._pending: Fragment = []

    def report_error(self, message: str, lines: int = 1) -> Fragment:
        """Record ``message`` spanning ``lines`` text lines; returns ``[]``."""
        self.count += 1
        y, self.cursor = self.placement.place(self.cursor, lines)
        diagnostic = Diagnostic(number=self.count, message=message, y=y, lines=lines)
        self.diagnostics.append(diagnostic)
        self._pending.extend(self._annotation(diagnostic))
        logger.warning("%s", diagnostic.text.replace("\n", " | "))
        return []

    def _annotation(self, diagnostic: Diagnostic) -> list[Node]:
        p = self.placement
        font: list[Node] = ["font", ["size", p.font_size, p.font_size], ["thickness", p.thickness]]
        if self.kind is DocumentKind.FOOTPRINT:
            return [
                LF1,
                [
                    "fp_text",
                    "user",
                    diagnostic.text,
                    ["at", p.x, diagnostic.y, 0],
                    ["layer", COMMENTS_LAYER],
                    ["effects", font],
                ],
            ]
        return [
            LF,
            [
                "gr_text",
                diagnostic.text,
                ["at", p.x, diagnostic.y, 0],
                ["layer", COMMENTS_LAYER],
                ["effects", font, ["justify", "left"] if p.justify_left else None],
            ],
        ]

    def nodes(self) -> Fragment:
        """Annotation nodes of all diagnostics reported so far."""
        return list(self._pending)

    def __len__(self) -> int:
        return self.count

    def __repr__(self) -> str:
        return f"DiagnosticAccumulator(kind={self.kind.value}, count={self.count})"
