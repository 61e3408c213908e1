"""Gzip and zlib (deflate) compression of byte strings and binary streams."""

from __future__ import annotations

import zlib
from typing import BinaryIO, Union

BytesLike = Union[bytes, bytearray, memoryview]

COMPRESS_NO_COMPRESSION = 0
COMPRESS_BEST_SPEED = 1
COMPRESS_BEST_COMPRESSION = 9
COMPRESS_DEFAULT_COMPRESSION = 6
COMPRESS_HUFFMAN_ONLY = -2

_GZIP_WBITS = 31
_ZLIB_WBITS = 15
_SAMPLE_SIZE = 4096


def normalize_compress_level(level: int) -> int:
    """Map a compression level onto 0..11.

    Levels outside -2..9 are treated as the default level.
    """
    if level < COMPRESS_HUFFMAN_ONLY or level > COMPRESS_BEST_COMPRESSION:
        level = COMPRESS_DEFAULT_COMPRESSION
    return level + 2


def _compressor(level: int, wbits: int):
    if level < COMPRESS_HUFFMAN_ONLY or level > COMPRESS_BEST_COMPRESSION:
        raise ValueError(f"invalid compression level: {level}")
    if level == COMPRESS_HUFFMAN_ONLY:
        return zlib.compressobj(
            zlib.Z_DEFAULT_COMPRESSION, zlib.DEFLATED, wbits, strategy=zlib.Z_HUFFMAN_ONLY
        )
    return zlib.compressobj(level, zlib.DEFLATED, wbits)


def _compress(data: BytesLike, level: int, wbits: int) -> bytes:
    compressor = _compressor(level, wbits)
    return compressor.compress(bytes(data)) + compressor.flush()


def gzip_bytes(data: BytesLike, level: int = COMPRESS_DEFAULT_COMPRESSION) -> bytes:
    """Return data compressed in gzip format at the given level."""
    return _compress(data, level, _GZIP_WBITS)


def deflate_bytes(data: BytesLike, level: int = COMPRESS_DEFAULT_COMPRESSION) -> bytes:
    """Return data compressed in zlib format at the given level."""
    return _compress(data, level, _ZLIB_WBITS)


def gunzip_bytes(data: BytesLike) -> bytes:
    """Decompress gzip data, which may hold several concatenated members."""
    rest = bytes(data)
    if not rest:
        raise ValueError("unexpected end of gzip data")
    chunks = []
    try:
        while rest:
            decompressor = zlib.decompressobj(_GZIP_WBITS)
            chunks.append(decompressor.decompress(rest))
            if not decompressor.eof:
                raise ValueError("unexpected end of gzip data")
            rest = decompressor.unused_data
    except zlib.error as exc:
        raise ValueError(f"invalid gzip data: {exc}") from None
    return b"".join(chunks)


def inflate_bytes(data: BytesLike) -> bytes:
    """Decompress zlib data."""
    raw = bytes(data)
    if not raw:
        raise ValueError("unexpected end of zlib data")
    decompressor = zlib.decompressobj(_ZLIB_WBITS)
    try:
        result = decompressor.decompress(raw)
    except zlib.error as exc:
        raise ValueError(f"invalid zlib data: {exc}") from None
    if not decompressor.eof:
        raise ValueError("unexpected end of zlib data")
    return result


def write_gzip(w: BinaryIO, p: BytesLike, level: int = COMPRESS_DEFAULT_COMPRESSION) -> int:
    """Write p gzipped to w and return the number of input bytes consumed."""
    w.write(gzip_bytes(p, level))
    return len(p)


def write_deflate(w: BinaryIO, p: BytesLike, level: int = COMPRESS_DEFAULT_COMPRESSION) -> int:
    """Write p zlib-compressed to w and return the number of input bytes consumed."""
    w.write(deflate_bytes(p, level))
    return len(p)


def write_gunzip(w: BinaryIO, p: BytesLike) -> int:
    """Write gunzipped p to w and return the number of bytes written."""
    data = gunzip_bytes(p)
    w.write(data)
    return len(data)


def write_inflate(w: BinaryIO, p: BytesLike) -> int:
    """Write inflated p to w and return the number of bytes written."""
    data = inflate_bytes(p)
    w.write(data)
    return len(data)


def is_file_compressible(f: BinaryIO, min_compress_ratio: float) -> bool:
    """Tell whether the first 4 KiB of f gzip below the given size ratio.

    The file is rewound to its start afterwards.
    """
    try:
        sample = f.read(_SAMPLE_SIZE)
    except OSError:
        f.seek(0)
        return False
    f.seek(0)
    compressed = gzip_bytes(sample, COMPRESS_DEFAULT_COMPRESSION)
    return len(compressed) < len(sample) * min_compress_ratio