from concurrent.futures import ThreadPoolExecutor

from swifthttp.bytebuffer import ByteBuffer, acquire_byte_buffer, release_byte_buffer
from swifthttp.bytesconv import format_uint


def _acquire_release_round():
    results = []
    for i in range(10):
        buf = acquire_byte_buffer()
        buf.write_string("num ")
        buf.write(format_uint(i).encode())
        results.append(bytes(buf))
        release_byte_buffer(buf)
    return results


def test_acquire_release_serial():
    assert _acquire_release_round() == [f"num {i}".encode() for i in range(10)]


def test_acquire_release_concurrent():
    expected = [f"num {i}".encode() for i in range(10)]
    with ThreadPoolExecutor(max_workers=10) as pool:
        futures = [pool.submit(_acquire_release_round) for _ in range(10)]
        results = [f.result(timeout=5) for f in futures]
    assert results == [expected] * 10

    buf = acquire_byte_buffer()
    assert bytes(buf) == b""
    buf.write_string("after")
    assert bytes(buf) == b"after"
    release_byte_buffer(buf)


def test_released_buffer_comes_back_empty():
    buf = acquire_byte_buffer()
    buf.write(b"leftover")
    release_byte_buffer(buf)
    again = acquire_byte_buffer()
    assert bytes(again) == b""
    release_byte_buffer(again)


def test_write_returns_length():
    buf = ByteBuffer()
    assert buf.write(b"abc") == 3
    assert buf.write_string("ы") == 2
    assert bytes(buf) == "abcы".encode()
    assert len(buf) == 5


def test_set_and_reset():
    buf = ByteBuffer(b"start")
    buf.set(b"xyz")
    assert bytes(buf) == b"xyz"
    buf.set_string("привет")
    assert bytes(buf) == "привет".encode()
    buf.reset()
    assert bytes(buf) == b""
    assert len(buf) == 0