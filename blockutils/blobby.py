"""Iterators over a simple binary blob storage format.

The storage format is a sequence of binary blobs. Unsigned numbers are
written as git-flavoured variable-length quantities (VLQ) of at most four
bytes.

The data starts with a count ``d`` of de-duplicated blobs, followed by ``d``
entries, each an integer ``m`` and then ``m`` bytes of blob content.

Then comes any number of entries forming the stored sequence. Each starts
with an integer ``n`` whose least significant bit is a flag: when it is 0,
``n >> 1`` bytes of blob content follow; otherwise the entry refers to the
de-duplicated blob number ``n >> 1``.
"""

from __future__ import annotations

import enum
from collections import Counter
from collections.abc import Iterable, Iterator

_NEXT_MASK = 0b1000_0000
_VAL_MASK = 0b0111_1111
_MAX_VLQ_BYTES = 4


class ErrorKind(enum.Enum):
    """Reasons a blob storage can be rejected."""

    INVALID_VLQ = "decoded VLQ number is too big"
    INVALID_INDEX = "invalid de-duplicated blob index"
    UNEXPECTED_END = "unexpected end of data"
    NOT_ENOUGH_ELEMENTS = "not enough elements for a full tuple"


class BlobbyError(ValueError):
    """Malformed blob storage data."""

    def __init__(self, kind: ErrorKind, position: int | None = None) -> None:
        self.kind = kind
        self.position = position
        message = kind.value
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)


def _byte_at(data: bytes, pos: int) -> int:
    if pos >= len(data):
        raise BlobbyError(ErrorKind.UNEXPECTED_END, pos)
    return data[pos]


def read_vlq(data: bytes, pos: int) -> tuple[int, int]:
    """Read a VLQ value from ``data`` at ``pos``.

    Returns the value and the position just after it. Raises
    :class:`BlobbyError` if the data ends early or the value is longer
    than four bytes; the error's ``position`` is where reading stopped.
    """
    byte = _byte_at(data, pos)
    pos += 1
    more = byte & _NEXT_MASK
    value = byte & _VAL_MASK
    for _ in range(_MAX_VLQ_BYTES - 1):
        if not more:
            return value, pos
        byte = _byte_at(data, pos)
        pos += 1
        more = byte & _NEXT_MASK
        value = ((value + 1) << 7) + (byte & _VAL_MASK)
    if more:
        raise BlobbyError(ErrorKind.INVALID_VLQ, pos)
    return value, pos


def encode_vlq(value: int) -> bytes:
    """Encode ``value`` as a VLQ of at most four bytes."""
    if value < 0:
        raise ValueError("VLQ values must be non-negative")
    original = value
    out = [value & _VAL_MASK]
    value >>= 7
    while value:
        if len(out) == _MAX_VLQ_BYTES:
            raise ValueError(f"integer is too big: {original}")
        value -= 1
        out.append(_NEXT_MASK | (value & _VAL_MASK))
        value >>= 7
    return bytes(reversed(out))


def _index_priority(blob: bytes) -> int:
    if blob == b"\x00":
        return 2
    if blob == b"\x01":
        return 1
    return 0


def encode_blobs(blobs: Iterable[bytes]) -> tuple[bytes, int]:
    """Encode ``blobs`` in the storage format.

    Non-empty blobs that occur more than once are stored once in the index
    and referenced from the sequence. Returns the encoded data together with
    the number of blobs placed in the index.
    """
    items = [bytes(blob) for blob in blobs]
    counts = Counter(blob for blob in items if blob)
    index = sorted(
        (blob for blob, count in counts.items() if count > 1),
        key=lambda blob: (_index_priority(blob), counts[blob], blob),
        reverse=True,
    )
    positions = {blob: i for i, blob in enumerate(index)}

    out = bytearray(encode_vlq(len(index)))
    for entry in index:
        out += encode_vlq(len(entry))
        out += entry

    for blob in items:
        dup_pos = positions.get(blob)
        if dup_pos is not None:
            out += encode_vlq((dup_pos << 1) + 1)
        else:
            out += encode_vlq(len(blob) << 1)
            out += blob

    return bytes(out), len(index)


class BlobIterator:
    """Iterator over the blobs stored in encoded data.

    Construction parses the de-duplication index. Iteration yields each
    stored blob as ``bytes``; after an error is raised the iterator is
    exhausted.
    """

    def __init__(self, data: bytes) -> None:
        data = bytes(data)
        count, pos = read_vlq(data, 0)
        dedup: list[bytes] = []
        for _ in range(count):
            size, pos = read_vlq(data, pos)
            end = pos + size
            if end > len(data):
                raise BlobbyError(ErrorKind.UNEXPECTED_END, len(data))
            dedup.append(data[pos:end])
            pos = end
        self._data = data
        self._dedup = tuple(dedup)
        self._pos = pos

    def __iter__(self) -> BlobIterator:
        return self

    def __next__(self) -> bytes:
        if self._pos >= len(self._data):
            raise StopIteration
        try:
            return self._read()
        except BlobbyError:
            self._exhaust()
            raise

    def _read(self) -> bytes:
        value, self._pos = read_vlq(self._data, self._pos)
        is_ref = value & 1
        value >>= 1
        if is_ref:
            if value >= len(self._dedup):
                raise BlobbyError(ErrorKind.INVALID_INDEX, self._pos)
            return self._dedup[value]
        start = self._pos
        end = start + value
        if end > len(self._data):
            raise BlobbyError(ErrorKind.UNEXPECTED_END, len(self._data))
        self._pos = end
        return self._data[start:end]

    def _exhaust(self) -> None:
        self._pos = len(self._data)


class BlobTupleIterator:
    """Iterator over consecutive groups of ``size`` stored blobs."""

    def __init__(self, data: bytes, size: int) -> None:
        if size < 1:
            raise ValueError("tuple size must be at least 1")
        self._inner = BlobIterator(data)
        self._size = size

    def __iter__(self) -> BlobTupleIterator:
        return self

    def __next__(self) -> tuple[bytes, ...]:
        group: list[bytes] = []
        for blob in self._take():
            group.append(blob)
        if not group:
            raise StopIteration
        if len(group) < self._size:
            self._inner._exhaust()
            raise BlobbyError(ErrorKind.NOT_ENOUGH_ELEMENTS)
        return tuple(group)

    def _take(self) -> Iterator[bytes]:
        for _ in range(self._size):
            try:
                yield next(self._inner)
            except StopIteration:
                return