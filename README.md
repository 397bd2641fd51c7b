# blockutils

Small, dependency-free helpers for code that processes data in fixed-size
blocks, as cryptographic primitives do.

Modules:

- `blockutils.blobby` – a compact storage format for sequences of binary
  blobs, using git-flavoured VLQ integers (at most four bytes) and
  de-duplication of repeated blobs.
- `blockutils.convert` – the `blobby-convert` command, converting between
  hex-per-line text files and blobby files.
- `blockutils.hexlit` – `hex_literal`, turning hex strings (with whitespace
  and `//` or `/* */` comments) into bytes.
- `blockutils.comments` – `exclude_comments` and `iter_excluding_comments`,
  the comment stripper used by `hexlit`.
- `blockutils.dbl` – `dbl` and `inv_dbl`, doubling and inverse doubling of
  8, 16 and 32-byte blocks over GF(2^n), big-endian.
- `blockutils.block_buffer` – `EagerBuffer` and `LazyBuffer` block buffers
  with message padding and serialization.
- `blockutils.read_buffer` – `ReadBuffer`, for reading data produced block
  by block.
- `blockutils.padding` – `ZeroPadding`, `Pkcs7`, `Iso10126`, `AnsiX923`,
  `Iso7816` and `NoPadding` schemes.
- `blockutils.cmov` – `cmovz` and `cmovnz` conditional moves.
- `blockutils.hybrid_array` – `Array`, a list of fixed length chosen from a
  set of supported sizes (0 to 64, and a few larger powers and multiples).
- `blockutils.collectable` – collection protocols with fallible operations,
  the capacity-bound `ListCollection`, and `try_from_iter` / `try_collect`.

## Installation

```
pip install blockutils
```

Python 3.10 or later is required.

## Examples

### Hex literals

```python
from blockutils.hexlit import hex_literal

assert hex_literal("a1 b2 c3 d4") == bytes([0xA1, 0xB2, 0xC3, 0xD4])
assert hex_literal("00010203", "04050607") == bytes(range(8))
assert hex_literal("0a0B /* block comment */ 0c0d") == bytes([10, 11, 12, 13])
```

Each string must hold an even number of hex digits. Stray characters, odd
digit counts, an isolated `/` and unterminated block comments raise
`HexLiteralError`.

### Blob storage

```python
from blockutils.blobby import BlobIterator, BlobTupleIterator, encode_blobs

blobs = [b"hello", b" ", b"", b"world!", b":::", b"world!", b"hello", b""]
data, index_len = encode_blobs(blobs)

assert list(BlobIterator(data)) == blobs
assert list(BlobTupleIterator(data, 2))[0] == (b"hello", b" ")
```

Non-empty blobs that occur more than once go into the index. Malformed input
raises `BlobbyError`, whose `kind` is an `ErrorKind` member; after an error
the iterator is exhausted. `read_vlq` and `encode_vlq` are available on
their own.

### Block buffers and padding

```python
from blockutils.block_buffer import EagerBuffer
from blockutils.padding import Pkcs7

buf = EagerBuffer(4)
blocks = []
buf.digest_blocks(b"0123456789", blocks.extend)
assert blocks == [b"0123", b"4567"] and buf.data == b"89"

out = []
buf.digest_pad(0x80, b"", out.append)
assert out == [b"89\x80\x00"]

assert Pkcs7().pad(b"test\xff\xff\xff\xff", 4) == b"test\x04\x04\x04\x04"
assert Pkcs7().unpad(b"test\x04\x04\x04\x04") == b"test"
```

Malformed padding raises `UnpadError`; invalid buffer input raises
`BlockBufferError`.

### Reading generated blocks

```python
from blockutils.read_buffer import ReadBuffer

blocks = iter([b"\x00" * 4, b"\x01" * 4])
rb = ReadBuffer(4)
assert rb.read(6, lambda: next(blocks)) == b"\x00\x00\x00\x00\x01\x01"
assert rb.remaining == 2
```

### GF(2^n) doubling and conditional moves

```python
from blockutils.dbl import dbl, inv_dbl
from blockutils.cmov import cmovz, cmovnz

block = bytes(range(16))
assert inv_dbl(dbl(block)) == block

assert cmovz(0x11, 0x22, 0) == 0x22
assert cmovnz(0x11, 0x22, 0) == 0x11
```

## Command line

`blobby-convert` turns a text file with one hex-encoded blob per line into a
blobby file, and back:

```
blobby-convert encode blobs.txt blobs.blb
blobby-convert decode blobs.blb blobs.txt
```

Encoding prints the number of index entries; both modes then print the
number of records processed (bytes written when encoding, blobs when
decoding). Errors go to standard error with a non-zero exit status.

## Running the tests

```
pip install blockutils[test]
pytest
```