"""Convert between hex-per-line text files and blob storage files."""

from __future__ import annotations

import binascii
import sys
from collections.abc import Iterable, Sequence
from typing import BinaryIO

from .blobby import BlobbyError, BlobIterator, encode_blobs


def _decode_hex_line(line: str) -> bytes:
    text = line.removesuffix("\n").removesuffix("\r")
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid hex line {text!r}: {exc}") from exc


def encode(reader: Iterable[str], writer: BinaryIO) -> int:
    """Encode hex lines from ``reader`` into ``writer``.

    Prints the number of index entries and returns the number of bytes
    written.
    """
    blobs = [_decode_hex_line(line) for line in reader]
    data, idx_len = encode_blobs(blobs)
    print(f"Index len: {idx_len}")
    writer.write(data)
    return len(data)


def decode(reader: BinaryIO, writer: BinaryIO) -> int:
    """Decode blob storage from ``reader`` into hex lines on ``writer``.

    Returns the number of blobs written.
    """
    data = reader.read()
    count = 0
    try:
        for blob in BlobIterator(data):
            writer.write(blob.hex().encode("ascii"))
            writer.write(b"\n")
            count += 1
    except BlobbyError as exc:
        raise ValueError(f"invalid blobby data: {exc}") from exc
    return count


def main(argv: Sequence[str] | None = None) -> int:
    """Run ``encode`` or ``decode`` between two files given on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 3:
        print("usage: convert (encode|decode) <input> <output>", file=sys.stderr)
        return 2
    mode, in_path, out_path = args[:3]
    if mode not in ("encode", "decode"):
        print("Error: unknown mode", file=sys.stderr)
        return 1
    try:
        if mode == "encode":
            with open(in_path, encoding="utf-8", newline="") as src, open(
                out_path, "wb"
            ) as dst:
                processed = encode(src, dst)
        else:
            with open(in_path, "rb") as src, open(out_path, "wb") as dst:
                processed = decode(src, dst)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Processed {processed} record(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())