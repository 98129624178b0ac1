"""Nested-list document model with S-expression encoder and decoder."""

from .document import Document
from .encoder import encode, encode_number, encode_pretty, encode_string, normalize
from .nodes import (
    LF,
    LF1,
    LF2,
    LF3,
    LF4,
    FormatHint,
    Fragment,
    Node,
    flatten_and_filter,
    splice,
)
from .parser import decode, decode_all

__all__ = [
    "Document",
    "FormatHint",
    "Fragment",
    "LF",
    "LF1",
    "LF2",
    "LF3",
    "LF4",
    "Node",
    "decode",
    "decode_all",
    "encode",
    "encode_number",
    "encode_pretty",
    "encode_string",
    "flatten_and_filter",
    "normalize",
    "splice",
]
