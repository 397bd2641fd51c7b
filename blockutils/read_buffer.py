"""Buffer for reading data produced one block at a time."""

from __future__ import annotations

from collections.abc import Callable

_MAX_BLOCK_SIZE = 255


class ReadBufferError(ValueError):
    """Invalid read buffer state or input."""


class ReadBuffer:
    """Holds the unread tail of the last generated block.

    The cursor lies in ``1..size``; a cursor equal to ``size`` means no
    buffered data is left.
    """

    def __init__(self, block_size: int) -> None:
        if not 1 <= block_size <= _MAX_BLOCK_SIZE:
            raise ReadBufferError(
                f"block size must be between 1 and {_MAX_BLOCK_SIZE}, got {block_size}"
            )
        self._size = block_size
        self._block = bytearray(block_size)
        self._pos = block_size

    def __copy__(self) -> ReadBuffer:
        clone = ReadBuffer(self._size)
        clone._block = bytearray(self._block)
        clone._pos = self._pos
        return clone

    def __repr__(self) -> str:
        return f"ReadBuffer(block_size={self._size}, remaining={self.remaining})"

    @property
    def pos(self) -> int:
        """Current cursor position."""
        return self._pos

    @property
    def size(self) -> int:
        """Size of a block in bytes."""
        return self._size

    @property
    def remaining(self) -> int:
        """Number of buffered bytes not yet read."""
        return self._size - self._pos

    def _generate(self, gen_block: Callable[[], bytes]) -> bytes:
        block = bytes(gen_block())
        if len(block) != self._size:
            raise ReadBufferError(
                f"generated block must be {self._size} bytes long, got {len(block)}"
            )
        return block

    def read(self, size: int, gen_block: Callable[[], bytes]) -> bytes:
        """Return ``size`` bytes, drawing new blocks from ``gen_block`` as needed.

        Buffered data is used first; leftover bytes of the last generated
        block are kept for later reads.
        """
        if size < 0:
            raise ReadBufferError("read size must be non-negative")
        pos = self._pos
        rem = self.remaining
        out = bytearray()
        if rem:
            if size < rem:
                self._pos = pos + size
                return bytes(self._block[pos : pos + size])
            out += self._block[pos:]
            size -= rem

        count, leftover = divmod(size, self._size)
        for _ in range(count):
            out += self._generate(gen_block)

        if leftover:
            block = self._generate(gen_block)
            out += block[:leftover]
            self._block = bytearray(block)
            self._pos = leftover
        else:
            self._pos = self._size
        return bytes(out)

    def serialize(self) -> bytes:
        """Return the state as ``size`` bytes: position, zeros, unread data."""
        return bytes([self._pos]) + bytes(self._pos - 1) + bytes(self._block[self._pos :])

    @classmethod
    def deserialize(cls, block_size: int, buffer: bytes) -> ReadBuffer:
        """Rebuild a buffer from the output of :meth:`serialize`."""
        buffer = bytes(buffer)
        result = cls(block_size)
        if len(buffer) != block_size:
            raise ReadBufferError(
                f"serialized buffer must be {block_size} bytes long, got {len(buffer)}"
            )
        pos = buffer[0]
        if pos == 0 or pos > block_size:
            raise ReadBufferError(f"invalid position {pos}")
        if any(buffer[1:pos]):
            raise ReadBufferError("unused bytes are not zeroed")
        result._block = bytearray(buffer)
        result._pos = pos
        return result