"""Fixed-size buffers for processing data in blocks.

Two buffer kinds are provided:

* :class:`EagerBuffer` processes a block as soon as it is full, so its
  position always lies in ``0..block_size - 1``.
* :class:`LazyBuffer` keeps a full block until more data arrives, so its
  position always lies in ``0..block_size``.
"""

from __future__ import annotations

from collections.abc import Callable

_MAX_BLOCK_SIZE = 255

BlocksCallback = Callable[[list[bytes]], None]
BlockCallback = Callable[[bytes], None]


class BlockBufferError(ValueError):
    """Invalid block buffer state or input."""


class BlockBuffer:
    """Buffer for block processing of data.

    Subclasses decide which cursor positions are valid and how input is
    split into whole blocks and a leftover tail.
    """

    def __init__(self, block_size: int, data: bytes = b"") -> None:
        if not 1 <= block_size <= _MAX_BLOCK_SIZE:
            raise BlockBufferError(
                f"block size must be between 1 and {_MAX_BLOCK_SIZE}, got {block_size}"
            )
        data = bytes(data)
        if not self._invariant(len(data), block_size):
            raise BlockBufferError(
                f"{len(data)} bytes of data is not valid for a "
                f"{type(self).__name__} of block size {block_size}"
            )
        self._size = block_size
        self._buffer = bytearray(block_size)
        self._buffer[: len(data)] = data
        self._pos = len(data)

    @staticmethod
    def _invariant(pos: int, block_size: int) -> bool:
        raise NotImplementedError

    @staticmethod
    def _split_blocks(data: bytes, block_size: int) -> tuple[list[bytes], bytes]:
        raise NotImplementedError

    def __copy__(self) -> BlockBuffer:
        return type(self)(self._size, self.data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(block_size={self._size}, data={self.data!r})"

    def digest_blocks(self, data: bytes, compress: BlocksCallback) -> None:
        """Feed ``data`` through the buffer, passing full blocks to ``compress``.

        ``compress`` receives a list of blocks, each ``size`` bytes long.
        """
        data = bytes(data)
        pos = self._pos
        rem = self._size - pos
        if self._invariant(len(data), rem):
            self._buffer[pos : pos + len(data)] = data
            self._pos = pos + len(data)
            return
        if pos != 0:
            left, data = data[:rem], data[rem:]
            self._buffer[pos:] = left
            compress([bytes(self._buffer)])

        blocks, leftover = self._split_blocks(data, self._size)
        if blocks:
            compress(blocks)

        self._buffer[: len(leftover)] = leftover
        self._pos = len(leftover)

    def reset(self) -> None:
        """Move the cursor back to zero."""
        self._pos = 0

    def pad_with_zeros(self) -> bytes:
        """Return the buffered data padded with zeros and reset the cursor."""
        block = self.data + bytes(self._size - self._pos)
        self._pos = 0
        return block

    def set(self, block: bytes, pos: int) -> None:
        """Replace the buffer content with ``block`` and the cursor with ``pos``."""
        block = bytes(block)
        if len(block) != self._size:
            raise BlockBufferError(
                f"block must be {self._size} bytes long, got {len(block)}"
            )
        if not self._invariant(pos, self._size):
            raise BlockBufferError(f"invalid position {pos} for block size {self._size}")
        self._buffer = bytearray(block)
        self._pos = pos

    @property
    def pos(self) -> int:
        """Current cursor position."""
        return self._pos

    @property
    def data(self) -> bytes:
        """Data held in the buffer."""
        return bytes(self._buffer[: self._pos])

    @property
    def size(self) -> int:
        """Size of a block in bytes."""
        return self._size

    @property
    def remaining(self) -> int:
        """Number of free bytes left in the buffer."""
        return self._size - self._pos


class EagerBuffer(BlockBuffer):
    """Block buffer that compresses a block as soon as it is full."""

    @staticmethod
    def _invariant(pos: int, block_size: int) -> bool:
        return pos < block_size

    @staticmethod
    def _split_blocks(data: bytes, block_size: int) -> tuple[list[bytes], bytes]:
        count = len(data) // block_size
        end = count * block_size
        blocks = [data[start : start + block_size] for start in range(0, end, block_size)]
        return blocks, data[end:]

    def digest_pad(self, delim: int, suffix: bytes, compress: BlockCallback) -> None:
        """Pad the buffered data with ``delim``, zeros and ``suffix``.

        ``compress`` is called once per resulting block; twice when the
        remaining space cannot hold the delimiter and the suffix.
        """
        suffix = bytes(suffix)
        if len(suffix) > self._size:
            raise BlockBufferError("suffix is too long")
        pos = self._pos
        self._buffer[pos] = delim
        self._buffer[pos + 1 :] = bytes(self._size - pos - 1)

        start = self._size - len(suffix)
        if self._size - pos - 1 < len(suffix):
            compress(bytes(self._buffer))
            block = bytearray(self._size)
            block[start:] = suffix
            compress(bytes(block))
        else:
            self._buffer[start:] = suffix
            compress(bytes(self._buffer))
        self._pos = 0

    def len64_padding_be(self, data_len: int, compress: BlockCallback) -> None:
        """Pad with 0x80, zeros and the 64-bit big-endian message length."""
        self.digest_pad(0x80, data_len.to_bytes(8, "big"), compress)

    def len64_padding_le(self, data_len: int, compress: BlockCallback) -> None:
        """Pad with 0x80, zeros and the 64-bit little-endian message length."""
        self.digest_pad(0x80, data_len.to_bytes(8, "little"), compress)

    def len128_padding_be(self, data_len: int, compress: BlockCallback) -> None:
        """Pad with 0x80, zeros and the 128-bit big-endian message length."""
        self.digest_pad(0x80, data_len.to_bytes(16, "big"), compress)

    def serialize(self) -> bytes:
        """Return the buffer state as ``size`` bytes; the last byte is the position."""
        return self.data + bytes(self._size - self._pos - 1) + bytes([self._pos])

    @classmethod
    def deserialize(cls, block_size: int, buffer: bytes) -> EagerBuffer:
        """Rebuild a buffer from the output of :meth:`serialize`."""
        buffer = bytes(buffer)
        if len(buffer) != block_size:
            raise BlockBufferError(
                f"serialized buffer must be {block_size} bytes long, got {len(buffer)}"
            )
        pos = buffer[-1]
        if not cls._invariant(pos, block_size):
            raise BlockBufferError(f"invalid position {pos}")
        if any(buffer[pos : block_size - 1]):
            raise BlockBufferError("unused bytes are not zeroed")
        return cls(block_size, buffer[:pos])


class LazyBuffer(BlockBuffer):
    """Block buffer that keeps a full block until more data arrives."""

    @staticmethod
    def _invariant(pos: int, block_size: int) -> bool:
        return pos <= block_size

    @staticmethod
    def _split_blocks(data: bytes, block_size: int) -> tuple[list[bytes], bytes]:
        if not data:
            return [], b""
        count, tail = divmod(len(data), block_size)
        if tail == 0:
            count -= 1
        end = count * block_size
        blocks = [data[start : start + block_size] for start in range(0, end, block_size)]
        return blocks, data[end:]

    def serialize(self) -> bytes:
        """Return the buffer state as ``size + 1`` bytes; the first byte is the position."""
        return bytes([self._pos]) + self.data + bytes(self._size - self._pos)

    @classmethod
    def deserialize(cls, block_size: int, buffer: bytes) -> LazyBuffer:
        """Rebuild a buffer from the output of :meth:`serialize`."""
        buffer = bytes(buffer)
        if len(buffer) != block_size + 1:
            raise BlockBufferError(
                f"serialized buffer must be {block_size + 1} bytes long, got {len(buffer)}"
            )
        pos = buffer[0]
        if not cls._invariant(pos, block_size):
            raise BlockBufferError(f"invalid position {pos}")
        if any(buffer[1 + pos :]):
            raise BlockBufferError("unused bytes are not zeroed")
        return cls(block_size, buffer[1 : 1 + pos])