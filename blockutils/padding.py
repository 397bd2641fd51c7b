"""Padding and unpadding of messages divided into blocks.

Each scheme is a :class:`Padding` with a ``pad`` method that fills the tail
of a block and an ``unpad`` method that recovers the message from a padded
block. The block size is the length of the block passed in.
"""

from __future__ import annotations

import abc
import enum
from collections.abc import Iterable
from typing import ClassVar

_MAX_COUNTED_BLOCK_SIZE = 255


class PadType(enum.Enum):
    """Kinds of padding."""

    REVERSIBLE = "reversible"
    AMBIGUOUS = "ambiguous"
    NO_PADDING = "no padding"


class UnpadError(ValueError):
    """Malformed padding in a block."""

    def __init__(self, message: str = "Unpad Error") -> None:
        super().__init__(message)


def _check_pos(pos: int, block_size: int, *, allow_full: bool) -> None:
    if pos < 0:
        raise ValueError("`pos` must be non-negative")
    if allow_full:
        if pos > block_size:
            raise ValueError("`pos` is bigger than block size")
    elif pos >= block_size:
        raise ValueError("`pos` is bigger or equal to block size")


def _check_counted_block_size(block_size: int) -> None:
    if block_size > _MAX_COUNTED_BLOCK_SIZE:
        raise ValueError("block size is too big for PKCS#7")
    if block_size == 0:
        raise ValueError("block size must not be zero")


class Padding(abc.ABC):
    """A padding scheme for blocks of any size."""

    pad_type: ClassVar[PadType]

    @abc.abstractmethod
    def pad(self, block: bytes, pos: int) -> bytes:
        """Return ``block`` with everything from ``pos`` on replaced by padding."""

    @abc.abstractmethod
    def unpad(self, block: bytes) -> bytes:
        """Return the message held in the padded ``block``.

        Raises :class:`UnpadError` if the padding is malformed.
        """

    def unpad_blocks(self, blocks: Iterable[bytes]) -> bytes:
        """Return the message held in a sequence of equally sized blocks.

        Only the last block carries padding.
        """
        items = [bytes(block) for block in blocks]
        if not items:
            if self.pad_type is PadType.REVERSIBLE:
                raise UnpadError()
            return b""
        block_size = len(items[0])
        if any(len(block) != block_size for block in items):
            raise ValueError("all blocks must have the same size")
        if self.pad_type is PadType.NO_PADDING:
            return b"".join(items)
        return b"".join(items[:-1]) + self.unpad(items[-1])

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ZeroPadding(Padding):
    """Pad the block with zeros.

    Not reversible for messages that end with zero bytes.
    """

    pad_type = PadType.AMBIGUOUS

    def pad(self, block: bytes, pos: int) -> bytes:
        block = bytes(block)
        _check_pos(pos, len(block), allow_full=True)
        return block[:pos] + bytes(len(block) - pos)

    def unpad(self, block: bytes) -> bytes:
        return bytes(block).rstrip(b"\x00")


def _pkcs7_pad(block: bytes, pos: int) -> bytes:
    block = bytes(block)
    size = len(block)
    _check_counted_block_size(size)
    _check_pos(pos, size, allow_full=False)
    count = size - pos
    return block[:pos] + bytes([count]) * count


def _pkcs7_unpad(block: bytes, *, strict: bool) -> bytes:
    block = bytes(block)
    size = len(block)
    _check_counted_block_size(size)
    count = block[-1]
    if count == 0 or count > size:
        raise UnpadError()
    start = size - count
    if strict and any(value != count for value in block[start:-1]):
        raise UnpadError()
    return block[:start]


class Pkcs7(Padding):
    """Pad with bytes whose value is the number of bytes added (PKCS#7)."""

    pad_type = PadType.REVERSIBLE

    def pad(self, block: bytes, pos: int) -> bytes:
        return _pkcs7_pad(block, pos)

    def unpad(self, block: bytes) -> bytes:
        return _pkcs7_unpad(block, strict=True)


class Iso10126(Padding):
    """Padding ending with the number of bytes added; other padding bytes are not checked.

    Padding is produced as in PKCS#7 rather than with random bytes.
    """

    pad_type = PadType.REVERSIBLE

    def pad(self, block: bytes, pos: int) -> bytes:
        return _pkcs7_pad(block, pos)

    def unpad(self, block: bytes) -> bytes:
        return _pkcs7_unpad(block, strict=False)


class AnsiX923(Padding):
    """Pad with zeros, the last byte holding the number of bytes added."""

    pad_type = PadType.REVERSIBLE

    def pad(self, block: bytes, pos: int) -> bytes:
        block = bytes(block)
        size = len(block)
        _check_counted_block_size(size)
        _check_pos(pos, size, allow_full=False)
        return block[:pos] + bytes(size - pos - 1) + bytes([size - pos])

    def unpad(self, block: bytes) -> bytes:
        block = bytes(block)
        size = len(block)
        _check_counted_block_size(size)
        count = block[-1]
        if count == 0 or count > size:
            raise UnpadError()
        start = size - count
        if any(block[start:-1]):
            raise UnpadError()
        return block[:start]


class Iso7816(Padding):
    """Pad with the byte sequence ``0x80 0x00 ... 0x00``."""

    pad_type = PadType.REVERSIBLE

    def pad(self, block: bytes, pos: int) -> bytes:
        block = bytes(block)
        size = len(block)
        _check_pos(pos, size, allow_full=False)
        return block[:pos] + b"\x80" + bytes(size - pos - 1)

    def unpad(self, block: bytes) -> bytes:
        stripped = bytes(block).rstrip(b"\x00")
        if not stripped or stripped[-1] != 0x80:
            raise UnpadError()
        return stripped[:-1]


class NoPadding(Padding):
    """Leave the block as it is.

    Unpadding returns the whole block, including any bytes past the message.
    """

    pad_type = PadType.NO_PADDING

    def pad(self, block: bytes, pos: int) -> bytes:
        block = bytes(block)
        _check_pos(pos, len(block), allow_full=True)
        return block

    def unpad(self, block: bytes) -> bytes:
        return bytes(block)