"""Helpers for block-oriented cryptographic code: blob storage, hex literals,
GF(2^n) doubling, block buffers, padding, conditional moves, fixed-size
arrays and fallible collections."""

__version__ = "0.1.0"

__all__ = [
    "blobby",
    "convert",
    "comments",
    "hexlit",
    "dbl",
    "block_buffer",
    "read_buffer",
    "padding",
    "cmov",
    "hybrid_array",
    "collectable",
]