"""Stateful registries of one conversion run: nets and layers."""

from .layers import FIXED_LAYERS, LayerErrorKind, LayerResult, LayerTable, is_copper
from .nets import NetRegistry, is_connected

__all__ = [
    "FIXED_LAYERS",
    "LayerErrorKind",
    "LayerResult",
    "LayerTable",
    "NetRegistry",
    "is_connected",
    "is_copper",
]
