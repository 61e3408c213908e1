import io
import os
from concurrent.futures import ThreadPoolExecutor

import pytest

from swifthttp.compress import (
    COMPRESS_BEST_COMPRESSION,
    COMPRESS_BEST_SPEED,
    COMPRESS_DEFAULT_COMPRESSION,
    COMPRESS_HUFFMAN_ONLY,
    COMPRESS_NO_COMPRESSION,
    deflate_bytes,
    gunzip_bytes,
    gzip_bytes,
    inflate_bytes,
    is_file_compressible,
    normalize_compress_level,
    write_deflate,
    write_gunzip,
    write_gzip,
    write_inflate,
)


def _fixed_body(size):
    pattern = b"0123456789abcdef"
    return (pattern * (size // len(pattern) + 1))[:size]


CASES = [
    b"",
    b"foobar",
    "выфаодлодл одлфываыв sd2 k34".encode("utf-8"),
    _fixed_body(10000),
]

LEVELS = [
    COMPRESS_NO_COMPRESSION,
    COMPRESS_BEST_SPEED,
    COMPRESS_BEST_COMPRESSION,
    COMPRESS_DEFAULT_COMPRESSION,
    COMPRESS_HUFFMAN_ONLY,
]


@pytest.mark.parametrize("data", CASES)
def test_gzip_round_trip(data):
    assert gunzip_bytes(gzip_bytes(data)) == data


@pytest.mark.parametrize("data", CASES)
def test_deflate_round_trip(data):
    assert inflate_bytes(deflate_bytes(data)) == data


@pytest.mark.parametrize("level", LEVELS)
def test_levels_round_trip(level):
    data = _fixed_body(5000)
    assert gunzip_bytes(gzip_bytes(data, level)) == data
    assert inflate_bytes(deflate_bytes(data, level)) == data


def test_gzip_magic_header():
    assert gzip_bytes(b"foobar")[:2] == b"\x1f\x8b"


def test_deflate_zlib_header():
    assert deflate_bytes(b"foobar")[0] == 0x78


def test_compression_shrinks_repetitive_data():
    data = _fixed_body(10000)
    assert len(gzip_bytes(data)) < len(data) // 10
    assert len(deflate_bytes(data)) < len(data) // 10


@pytest.mark.parametrize("level", [-3, 10, 100])
def test_invalid_level_raises(level):
    with pytest.raises(ValueError):
        gzip_bytes(b"foo", level)
    with pytest.raises(ValueError):
        deflate_bytes(b"foo", level)


@pytest.mark.parametrize(
    "level, expected",
    [(-2, 0), (-1, 1), (0, 2), (1, 3), (6, 8), (9, 11), (-3, 8), (10, 8)],
)
def test_normalize_compress_level(level, expected):
    assert normalize_compress_level(level) == expected


def test_gunzip_multiple_members():
    data = gzip_bytes(b"foo") + gzip_bytes(b"bar")
    assert gunzip_bytes(data) == b"foobar"


@pytest.mark.parametrize("data", [b"", b"not gzip at all", gzip_bytes(b"foobar")[:-3]])
def test_gunzip_invalid_raises(data):
    with pytest.raises(ValueError):
        gunzip_bytes(data)


@pytest.mark.parametrize("data", [b"", b"not zlib at all", deflate_bytes(b"foobar" * 10)[:-3]])
def test_inflate_invalid_raises(data):
    with pytest.raises(ValueError):
        inflate_bytes(data)


@pytest.mark.parametrize("data", CASES)
def test_write_gzip_and_gunzip(data):
    compressed = io.BytesIO(b"prefix")
    compressed.seek(0, io.SEEK_END)
    assert write_gzip(compressed, data) == len(data)
    raw = compressed.getvalue()
    assert raw[:6] == b"prefix"

    out = io.BytesIO()
    assert write_gunzip(out, raw[6:]) == len(data)
    assert out.getvalue() == data


@pytest.mark.parametrize("data", CASES)
def test_write_deflate_and_inflate(data):
    compressed = io.BytesIO()
    assert write_deflate(compressed, data, COMPRESS_BEST_SPEED) == len(data)

    out = io.BytesIO()
    assert write_inflate(out, compressed.getvalue()) == len(data)
    assert out.getvalue() == data


def test_is_file_compressible_repetitive(tmp_path):
    path = tmp_path / "text.txt"
    path.write_bytes(_fixed_body(20000))
    with open(path, "rb") as f:
        f.read(10)
        assert is_file_compressible(f, 0.8) is True
        assert f.tell() == 0


def test_is_file_compressible_random(tmp_path):
    path = tmp_path / "random.bin"
    path.write_bytes(os.urandom(8192))
    with open(path, "rb") as f:
        assert is_file_compressible(f, 0.9) is False
        assert f.tell() == 0


def _round_trips():
    return [(gunzip_bytes(gzip_bytes(data)), inflate_bytes(deflate_bytes(data))) for data in CASES]


def test_concurrent_round_trips():
    expected = [(data, data) for data in CASES]
    with ThreadPoolExecutor(max_workers=10) as pool:
        futures = [pool.submit(_round_trips) for _ in range(10)]
        results = [f.result(timeout=10) for f in futures]
    assert results == [expected] * 10

    big = CASES[-1]
    assert gunzip_bytes(gzip_bytes(big)) == big
    assert inflate_bytes(deflate_bytes(big)) == big