"""Conversion of hexadecimal string literals into bytes.

Hex digits in either case are decoded; spaces, tabs, carriage returns and
newlines are ignored, as are line (``//``) and block (``/* ... */``)
comments.
"""

from __future__ import annotations

from collections.abc import Iterator

from .comments import CommentError, iter_excluding_comments

_WHITESPACE = " \r\n\t"


class HexLiteralError(ValueError):
    """Invalid hexadecimal literal."""


def _hex_values(literal: str) -> Iterator[int]:
    for char in iter_excluding_comments(literal):
        if char in _WHITESPACE:
            continue
        if "0" <= char <= "9" or "a" <= char <= "f" or "A" <= char <= "F":
            yield int(char, 16)
        elif char.isascii():
            raise HexLiteralError(f"encountered invalid character: `{char}`")
        else:
            raise HexLiteralError("encountered invalid non-ASCII character")


def _decode_literal(literal: str) -> bytes:
    out = bytearray()
    values = _hex_values(literal)
    try:
        for high in values:
            low = next(values, None)
            if low is None:
                raise HexLiteralError("expected even number of hex characters")
            out.append((high << 4) + low)
    except CommentError as exc:
        raise HexLiteralError(str(exc)) from exc
    return bytes(out)


def hex_literal(*args: str) -> bytes:
    """Decode each hex string in ``args`` and return the concatenation.

    Every string must hold an even number of hex digits of its own.
    """
    parts = []
    for literal in args:
        if not isinstance(literal, str):
            raise HexLiteralError(f"expected string literal, got `{literal!r}`")
        parts.append(_decode_literal(literal))
    return b"".join(parts)