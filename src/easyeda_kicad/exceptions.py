"""Exception hierarchy for the conversion core.

Data-quality problems (bad arc paths, unknown layers, unsupported shapes) are
raised inside the core and caught at the shape-converter boundary, where they
become diagnostics in the output document. Only programming-contract
violations are expected to escape a conversion.
"""

from __future__ import annotations

from typing import Any


class ConversionError(Exception):
    """Base exception for all conversion errors."""

    error_code: str = ""

    def __init__(self, message: str, error_code: str | None = None, **kwargs: Any):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.__dict__.update(kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a serializable dict."""
        result: dict[str, Any] = {
            "error": True,
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
        }
        result.update(
            {k: v for k, v in self.__dict__.items() if k not in ["message", "error_code"]}
        )
        return result


class GeometryError(ConversionError):
    """Raised when shape geometry cannot be resolved."""

    error_code = "GEOMETRY_ERROR"

    def __init__(self, message: str, error_code: str | None = None, **kwargs: Any):
        super().__init__(message, error_code or "GEOMETRY_ERROR", **kwargs)


class ArcPathError(GeometryError):
    """Raised when an arc path does not follow ``M x y A rx ry rot large sweep x y``."""

    error_code = "ARC_PATH_ERROR"

    def __init__(self, message: str, path: str | None = None, **kwargs: Any):
        super().__init__(message, "ARC_PATH_ERROR", path=path, **kwargs)


class ArcResolutionError(GeometryError):
    """Raised when the arc resolver cannot produce a finite center form."""

    error_code = "ARC_RESOLUTION_ERROR"

    def __init__(self, message: str, **kwargs: Any):
        super().__init__(message, "ARC_RESOLUTION_ERROR", **kwargs)


class LayerResolutionError(ConversionError):
    """Raised when an unresolvable layer result is unwrapped."""

    error_code = "LAYER_RESOLUTION_ERROR"

    def __init__(self, message: str, layer_id: str | None = None, **kwargs: Any):
        super().__init__(message, "LAYER_RESOLUTION_ERROR", layer_id=layer_id, **kwargs)


class UnsupportedShapeError(ConversionError):
    """Raised when a shape kind or sub-type has no conversion rule."""

    error_code = "UNSUPPORTED_SHAPE"

    def __init__(self, message: str, shape_type: str | None = None, **kwargs: Any):
        super().__init__(message, "UNSUPPORTED_SHAPE", shape_type=shape_type, **kwargs)


class ShapeRecordError(ConversionError):
    """Raised when a shape record lacks the fields every record of its kind has."""

    error_code = "SHAPE_RECORD_ERROR"

    def __init__(self, message: str, shape_type: str | None = None, **kwargs: Any):
        super().__init__(message, "SHAPE_RECORD_ERROR", shape_type=shape_type, **kwargs)


class SexpDecodeError(ConversionError, ValueError):
    """Raised when S-expression text is malformed."""

    error_code = "SEXP_DECODE_ERROR"

    def __init__(self, message: str, position: int | None = None, **kwargs: Any):
        super().__init__(message, "SEXP_DECODE_ERROR", position=position, **kwargs)


__all__ = [
    "ConversionError",
    "GeometryError",
    "ArcPathError",
    "ArcResolutionError",
    "LayerResolutionError",
    "UnsupportedShapeError",
    "ShapeRecordError",
    "SexpDecodeError",
]
