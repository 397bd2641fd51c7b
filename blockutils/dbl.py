"""Doubling and inverse doubling of blocks over GF(2^n).

Blocks of 64, 128 and 256 bits are supported, read in big-endian order.
"""

from __future__ import annotations

_REDUCTION = {
    8: 0b1_1011,
    16: 0b1000_0111,
    32: 0b100_0010_0101,
}


def _prepare(block: bytes) -> tuple[int, int, int]:
    size = len(block)
    if size not in _REDUCTION:
        raise ValueError(f"unsupported block size: {size} bytes (expected 8, 16 or 32)")
    return int.from_bytes(block, "big"), size * 8, _REDUCTION[size]


def dbl(block: bytes) -> bytes:
    """Multiply ``block`` by x.

    Returns ``block << 1``, reduced by the field's polynomial when the most
    significant bit was set.
    """
    value, bits, poly = _prepare(block)
    carry = value >> (bits - 1)
    value = (value << 1) & ((1 << bits) - 1)
    value ^= carry * poly
    return value.to_bytes(bits // 8, "big")


def inv_dbl(block: bytes) -> bytes:
    """Divide ``block`` by x; the inverse of :func:`dbl`."""
    value, bits, poly = _prepare(block)
    carry = value & 1
    value >>= 1
    value ^= carry * ((1 << (bits - 1)) ^ (poly >> 1))
    return value.to_bytes(bits // 8, "big")