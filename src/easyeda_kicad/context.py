"""Per-run conversion state.

One :class:`ConversionContext` is created for each top-level conversion and
passed explicitly to every converter. Nothing is shared between runs, so
independent documents can be converted in parallel as long as each owns its
context.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .config import DEFAULT_POLICY, ConversionPolicy
from .diagnostics import DiagnosticAccumulator, DocumentKind
from .registry import LayerResult, LayerTable, NetRegistry
from .sexp import Fragment


@dataclass
class ConversionContext:
    """Registries, diagnostics and counters of one conversion."""

    kind: DocumentKind = DocumentKind.BOARD
    policy: ConversionPolicy = DEFAULT_POLICY
    nets: NetRegistry = field(default_factory=NetRegistry)
    layers: LayerTable = field(default_factory=LayerTable)
    diagnostics: DiagnosticAccumulator = field(init=False)
    cu_zone_count: int = 0
    keepout_zone_count: int = 0
    footprint_value: str = ""

    def __post_init__(self) -> None:
        placement = (
            self.policy.footprint_placement
            if self.kind is DocumentKind.FOOTPRINT
            else self.policy.board_placement
        )
        self.diagnostics = DiagnosticAccumulator(self.kind, placement)

    @classmethod
    def for_board(
        cls, nets: Iterable[str] = (), policy: ConversionPolicy = DEFAULT_POLICY
    ) -> ConversionContext:
        return cls(kind=DocumentKind.BOARD, policy=policy, nets=NetRegistry(nets))

    @classmethod
    def for_footprint(cls, policy: ConversionPolicy = DEFAULT_POLICY) -> ConversionContext:
        return cls(kind=DocumentKind.FOOTPRINT, policy=policy)

    def get_net_id(self, name: str | None) -> int | None:
        return self.nets.get_net_id(name)

    def resolve_layer(self, layer_id: str | int | None) -> LayerResult:
        return self.layers.resolve(layer_id)

    def report_error(self, message: str, lines: int = 1) -> Fragment:
        return self.diagnostics.report_error(message, lines)

    @property
    def message_count(self) -> int:
        return self.diagnostics.count
