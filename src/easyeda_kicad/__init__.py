"""EasyEDA to KiCad conversion core.

Geometry, registries, diagnostics and the S-expression document model shared
by the board and footprint converters.
"""

__version__ = "0.1.0"
