"""LZ78 compression with variable-width codes.

Each emitted code is a dictionary index followed by one literal byte.
The index width starts at one bit and grows as the dictionary fills.
Once the width would reach ``BITS_OVERFLOW`` the dictionary is reset.
Codes are packed most significant bit first.

The stream starts with a single header byte. It holds the number of
meaningful bits in the final byte, or 0 when the final byte is fully
used.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Union

BITS_OVERFLOW = 17
TMP_SUFFIX = ".tmp"

PathLike = Union[str, "os.PathLike[str]"]


class _BitWriter:
    """Packs values of arbitrary width into bytes, MSB first."""

    def __init__(self) -> None:
        self._out = bytearray()
        self._acc = 0
        self._nbits = 0

    def write(self, value: int, width: int) -> None:
        self._acc = (self._acc << width) | value
        self._nbits += width
        while self._nbits >= 8:
            self._nbits -= 8
            self._out.append((self._acc >> self._nbits) & 0xFF)
        self._acc &= (1 << self._nbits) - 1

    def finish(self) -> bytes:
        """Return header byte, packed body and padded final byte."""
        tail = self._nbits
        body = bytearray(self._out)
        if tail:
            body.append((self._acc << (8 - tail)) & 0xFF)
        return bytes((tail,)) + bytes(body)


class _BitReader:
    """Reads values of arbitrary width from bytes, MSB first."""

    def __init__(self, body: bytes, total_bits: int) -> None:
        self._bytes: Iterator[int] = iter(body)
        self._acc = 0
        self._nbits = 0
        self.remaining = total_bits

    def read(self, width: int) -> int:
        while self._nbits < width:
            self._acc = (self._acc << 8) | next(self._bytes)
            self._nbits += 8
        self._nbits -= width
        value = self._acc >> self._nbits
        self._acc &= (1 << self._nbits) - 1
        self.remaining -= width
        return value


def _grows(size: int, width: int) -> bool:
    return bool((size + 1) >> width)


def encode_bytes(data: bytes) -> bytes:
    """Compress ``data`` and return the encoded stream."""
    writer = _BitWriter()
    codes: dict[bytes, int] = {b"": 0}
    width = 1
    seq = b""
    for byte in bytes(data):
        candidate = seq + bytes((byte,))
        if candidate in codes:
            seq = candidate
            continue
        writer.write((codes[seq] << 8) | byte, width + 8)
        if _grows(len(codes), width):
            width += 1
        if width < BITS_OVERFLOW:
            codes[candidate] = len(codes)
        else:
            codes = {b"": 0}
            width = 1
        seq = b""
    if seq:
        writer.write((codes[seq[:-1]] << 8) | seq[-1], width + 8)
    return writer.finish()


def decode_bytes(data: bytes) -> bytes:
    """Decompress a stream produced by :func:`encode_bytes`.

    Raises ``ValueError`` when the stream is malformed.
    """
    data = bytes(data)
    if not data:
        raise ValueError("encoded stream is missing its header byte")
    tail = data[0]
    if tail > 7:
        raise ValueError(f"invalid header byte: {tail}")
    body = data[1:]
    total = len(body) * 8
    if tail:
        if not body:
            raise ValueError("header announces bits but the stream is empty")
        total -= 8 - tail

    reader = _BitReader(body, total)
    entries: list[bytes] = [b""]
    width = 1
    out = bytearray()
    while reader.remaining:
        code_width = width + 8
        if reader.remaining < code_width:
            raise ValueError("encoded stream is truncated")
        code = reader.read(code_width)
        parent, byte = code >> 8, code & 0xFF
        if parent >= len(entries):
            raise ValueError(f"invalid dictionary index: {parent}")
        out += entries[parent]
        out.append(byte)
        if _grows(len(entries), width):
            width += 1
        if width < BITS_OVERFLOW:
            entries.append(entries[parent] + bytes((byte,)))
        else:
            entries = [b""]
            width = 1
    return bytes(out)


def _tmp_path(file_name: PathLike) -> Path:
    return Path(os.fspath(file_name) + TMP_SUFFIX)


def encode(file_name: PathLike) -> Path:
    """Compress ``file_name`` into ``file_name + '.tmp'`` and return that path."""
    target = _tmp_path(file_name)
    target.write_bytes(encode_bytes(Path(file_name).read_bytes()))
    return target


def decode(file_name: PathLike) -> Path:
    """Restore ``file_name`` from ``file_name + '.tmp'`` and return its path."""
    source = _tmp_path(file_name)
    target = Path(file_name)
    target.write_bytes(decode_bytes(source.read_bytes()))
    return target