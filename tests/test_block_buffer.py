import copy

import pytest

from blockutils.block_buffer import BlockBufferError, EagerBuffer, LazyBuffer


def _noop(_blocks):
    pass


def test_eager_digest_pad():
    buf = EagerBuffer(4)
    inputs = [b"01234567", b"89", b"abcdefghij", b"klmnopqrs", b"tuv", b"wx"]
    expected = [
        (0, [b"0123", b"4567"]),
        (2, [b"89ab"]),
        (2, [b"cdef", b"ghij"]),
        (3, [b"klmn", b"opqr"]),
        (4, [b"stuv"]),
    ]
    exp_poses = [0, 2, 0, 1, 0, 2]
    calls = []
    for i, data in enumerate(inputs):
        buf.digest_blocks(data, lambda blocks, i=i: calls.append((i, list(blocks))))
        assert buf.pos == exp_poses[i]
    assert calls == expected
    assert buf.pad_with_zeros() == b"wx\0\0"
    assert buf.pos == 0


def test_lazy_digest_pad():
    buf = LazyBuffer(4)
    inputs = [b"01234567", b"89", b"abcdefghij", b"klmnopqrs"]
    expected = [
        (0, [b"0123"]),
        (1, [b"4567"]),
        (2, [b"89ab"]),
        (2, [b"cdef"]),
        (3, [b"ghij"]),
        (3, [b"klmn", b"opqr"]),
    ]
    exp_poses = [4, 2, 4, 1]
    calls = []
    for i, data in enumerate(inputs):
        buf.digest_blocks(data, lambda blocks, i=i: calls.append((i, list(blocks))))
        assert buf.pos == exp_poses[i]
    assert calls == expected
    assert buf.pad_with_zeros() == b"s\0\0\0"
    assert buf.pos == 0


def _collect(buf, method, *args):
    out = bytearray()
    getattr(buf, method)(*args, out.extend)
    return bytes(out)


def test_eager_len64_paddings_block8():
    buf_be = EagerBuffer(8, b"\x42")
    buf_le = copy.copy(buf_be)
    length = 0x0001_0203_0405_0607
    assert _collect(buf_be, "len64_padding_be", length) == bytes.fromhex(
        "42800000000000000001020304050607"
    )
    assert _collect(buf_le, "len64_padding_le", length) == bytes.fromhex(
        "42800000000000000706050403020100"
    )


def test_eager_len64_paddings_block10():
    buf_be = EagerBuffer(10, b"\x42")
    buf_le = copy.copy(buf_be)
    length = 0x0001_0203_0405_0607
    assert _collect(buf_be, "len64_padding_be", length) == bytes.fromhex(
        "42800001020304050607"
    )
    assert _collect(buf_le, "len64_padding_le", length) == bytes.fromhex(
        "42800706050403020100"
    )


def test_eager_len128_padding():
    length = 0x0001_0203_0405_0607_0809_0A0B_0C0D_0E0F
    buf = EagerBuffer(16, b"\x42")
    assert _collect(buf, "len128_padding_be", length) == bytes.fromhex(
        "42800000000000000000000000000000000102030405060708090a0b0c0d0e0f"
    )
    buf = EagerBuffer(24, b"\x42")
    assert _collect(buf, "len128_padding_be", length) == bytes.fromhex(
        "4280000000000000000102030405060708090a0b0c0d0e0f"
    )


def test_eager_digest_pad_custom_suffix():
    buf = EagerBuffer(4, b"\x42")
    assert _collect(buf, "digest_pad", 0xFF, bytes.fromhex("101112")) == bytes.fromhex(
        "42ff000000101112"
    )
    buf = EagerBuffer(4, b"\x42")
    assert _collect(buf, "digest_pad", 0xFF, bytes.fromhex("1011")) == bytes.fromhex(
        "42ff1011"
    )
    assert buf.pos == 0


def test_digest_pad_suffix_too_long():
    buf = EagerBuffer(4)
    with pytest.raises(BlockBufferError):
        buf.digest_pad(0x80, b"12345", _noop)


def test_try_new():
    assert EagerBuffer(4, bytes(3)).pos == 3
    with pytest.raises(BlockBufferError):
        EagerBuffer(4, bytes(4))
    assert LazyBuffer(4, bytes(4)).pos == 4
    with pytest.raises(BlockBufferError):
        LazyBuffer(4, bytes(5))


@pytest.mark.parametrize("size", [0, 256])
def test_invalid_block_size(size):
    with pytest.raises(BlockBufferError):
        EagerBuffer(size)


def test_eager_serialize():
    buf1 = EagerBuffer(4)
    ser0 = buf1.serialize()
    assert ser0 == bytes([0, 0, 0, 0])
    assert EagerBuffer.deserialize(4, ser0).serialize() == ser0

    buf1.digest_blocks(bytes([41, 42]), _noop)
    ser1 = buf1.serialize()
    assert ser1 == bytes([41, 42, 0, 2])

    buf2 = EagerBuffer.deserialize(4, ser1)
    assert buf1.serialize() == ser1

    buf1.digest_blocks(bytes([43]), _noop)
    buf2.digest_blocks(bytes([43]), _noop)
    ser2 = buf1.serialize()
    assert ser2 == bytes([41, 42, 43, 3])

    buf3 = EagerBuffer.deserialize(4, ser2)
    assert buf3.serialize() == ser2

    for buf in (buf1, buf2, buf3):
        buf.digest_blocks(bytes([44]), _noop)
    ser3 = buf1.serialize()
    assert ser3 == bytes([0, 0, 0, 0])
    assert buf2.serialize() == ser3
    assert buf3.serialize() == ser3


@pytest.mark.parametrize(
    "raw",
    [[0, 0, 0, 4], [0, 0, 0, 10], [1, 0, 0, 0], [0, 1, 0, 1], [0, 0, 1, 2]],
)
def test_eager_deserialize_invalid(raw):
    with pytest.raises(BlockBufferError):
        EagerBuffer.deserialize(4, bytes(raw))


def test_lazy_serialize():
    buf1 = LazyBuffer(4)
    ser0 = buf1.serialize()
    assert ser0 == bytes([0, 0, 0, 0, 0])
    assert LazyBuffer.deserialize(4, ser0).serialize() == ser0

    buf1.digest_blocks(bytes([41, 42]), _noop)
    ser1 = buf1.serialize()
    assert ser1 == bytes([2, 41, 42, 0, 0])

    buf2 = LazyBuffer.deserialize(4, ser1)
    assert buf1.serialize() == ser1

    buf1.digest_blocks(bytes([43]), _noop)
    buf2.digest_blocks(bytes([43]), _noop)
    ser2 = buf1.serialize()
    assert ser2 == bytes([3, 41, 42, 43, 0])

    buf3 = LazyBuffer.deserialize(4, ser2)
    assert buf3.serialize() == ser2

    for buf in (buf1, buf2, buf3):
        buf.digest_blocks(bytes([44]), _noop)
    ser3 = buf1.serialize()
    assert ser3 == bytes([4, 41, 42, 43, 44])
    assert buf2.serialize() == ser3
    assert buf3.serialize() == ser3

    for buf in (buf1, buf2, buf3):
        buf.digest_blocks(bytes([45]), _noop)
    ser4 = buf1.serialize()
    assert ser4 == bytes([1, 45, 0, 0, 0])
    assert buf2.serialize() == ser4
    assert buf3.serialize() == ser4


@pytest.mark.parametrize(
    "raw",
    [
        [10, 0, 0, 0, 0],
        [5, 0, 0, 0, 0],
        [0, 1, 0, 0, 0],
        [1, 0, 1, 0, 0],
        [2, 0, 0, 1, 0],
        [3, 0, 0, 0, 1],
    ],
)
def test_lazy_deserialize_invalid(raw):
    with pytest.raises(BlockBufferError):
        LazyBuffer.deserialize(4, bytes(raw))


def test_set_reset_and_remaining():
    buf = EagerBuffer(4)
    buf.set(b"abcd", 2)
    assert buf.data == b"ab"
    assert buf.remaining == 2
    assert buf.size == 4
    buf.reset()
    assert buf.pos == 0
    assert buf.data == b""
    with pytest.raises(BlockBufferError):
        buf.set(b"abcd", 4)
    with pytest.raises(BlockBufferError):
        buf.set(b"abc", 1)


def test_lazy_set_full_block():
    buf = LazyBuffer(4)
    buf.set(b"abcd", 4)
    assert buf.data == b"abcd"
    assert buf.remaining == 0