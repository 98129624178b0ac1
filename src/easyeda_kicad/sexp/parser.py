"""S-expression decoder, the inverse of :func:`easyeda_kicad.sexp.encoder.encode`.

This parser:
- Handles quoted strings with backslash escapes and doubled-quote escapes
- Turns bare tokens that read as finite decimal numbers into ``int``/``float``
- Returns plain nested lists, comparable with ``flatten_and_filter`` output
"""

from __future__ import annotations

import re

from ..exceptions import SexpDecodeError
from .nodes import Node

_INTEGER = re.compile(r"^[+-]?\d+$")
_DECIMAL = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_UNESCAPES = {"n": "\n", "r": "\r", "t": "\t"}


def coerce_atom(token: str) -> str | int | float:
    """Return the numeric value of ``token`` when it is a number, else ``token``."""
    if _INTEGER.match(token):
        return int(token)
    if _DECIMAL.match(token):
        return float(token)
    return token


class _Tokenizer:
    """Low-level tokenizer for S-expression strings."""

    __slots__ = ("_text", "_pos", "_length")

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._length = len(text)

    @property
    def position(self) -> int:
        return self._pos

    def _skip_whitespace(self) -> None:
        pos = self._pos
        text = self._text
        length = self._length
        while pos < length and text[pos] in " \t\n\r":
            pos += 1
        self._pos = pos

    def peek(self) -> str | None:
        self._skip_whitespace()
        if self._pos >= self._length:
            return None
        return self._text[self._pos]

    def next_token(self) -> tuple[str, str] | None:
        """Return (token_type, token_value) or None at EOF.

        Token types: 'OPEN', 'CLOSE', 'STRING', 'ATOM'
        """
        self._skip_whitespace()
        if self._pos >= self._length:
            return None

        ch = self._text[self._pos]

        if ch == "(":
            self._pos += 1
            return ("OPEN", "(")

        if ch == ")":
            self._pos += 1
            return ("CLOSE", ")")

        if ch == '"':
            return ("STRING", self._read_quoted_string())

        return ("ATOM", self._read_atom())

    def _read_quoted_string(self) -> str:
        """Read a double-quoted string, handling both escape styles."""
        start = self._pos
        self._pos += 1  # skip opening quote
        text = self._text
        result: list[str] = []
        while self._pos < self._length:
            ch = text[self._pos]
            if ch == "\\":
                self._pos += 1
                if self._pos < self._length:
                    escaped = text[self._pos]
                    result.append(_UNESCAPES.get(escaped, escaped))
                    self._pos += 1
                continue
            if ch == '"':
                # "" inside a string stands for one literal quote
                if self._pos + 1 < self._length and text[self._pos + 1] == '"' and result:
                    result.append('"')
                    self._pos += 2
                    continue
                self._pos += 1
                return "".join(result)
            result.append(ch)
            self._pos += 1
        raise SexpDecodeError("Unterminated quoted string", position=start)

    def _read_atom(self) -> str:
        """Read an unquoted atom (terminated by whitespace, parens or a quote)."""
        start = self._pos
        while self._pos < self._length:
            ch = self._text[self._pos]
            if ch in ' \t\n\r()"':
                break
            self._pos += 1
        return self._text[start : self._pos]


def decode(text: str) -> Node:
    """Parse one S-expression into a tree of lists, strings and numbers.

    Args:
        text: The S-expression string to parse.

    Returns:
        The decoded tree.

    Raises:
        SexpDecodeError: If the input is malformed or has trailing content.
    """
    tokenizer = _Tokenizer(text)
    result = _parse_expr(tokenizer)
    if tokenizer.peek() is not None:
        raise SexpDecodeError("Unexpected content after expression", position=tokenizer.position)
    return result


def decode_all(text: str) -> list[Node]:
    """Parse text that may contain multiple top-level S-expressions."""
    tokenizer = _Tokenizer(text)
    results: list[Node] = []
    while tokenizer.peek() is not None:
        results.append(_parse_expr(tokenizer))
    return results


def _parse_expr(tokenizer: _Tokenizer) -> Node:
    """Parse a single S-expression from the tokenizer."""
    token = tokenizer.next_token()
    if token is None:
        raise SexpDecodeError("Unexpected end of input", position=tokenizer.position)

    token_type, token_value = token

    if token_type == "STRING":
        return token_value

    if token_type == "ATOM":
        return coerce_atom(token_value)

    if token_type == "OPEN":
        children: list[Node] = []
        while True:
            pk = tokenizer.peek()
            if pk is None:
                raise SexpDecodeError(
                    "Unexpected end of input, unclosed '('", position=tokenizer.position
                )
            if pk == ")":
                tokenizer.next_token()  # consume ')'
                return children
            children.append(_parse_expr(tokenizer))

    raise SexpDecodeError("Unexpected ')'", position=tokenizer.position)
