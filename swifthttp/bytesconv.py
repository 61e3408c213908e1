"""Conversions between bytes and numbers, addresses, dates and URL-encoded text."""

from __future__ import annotations

import ipaddress
import math
import re
from datetime import datetime, timezone
from typing import BinaryIO, Union

BytesLike = Union[bytes, bytearray, memoryview, str]

# Limits for 64-bit integers.
_MAX_INT_CHARS = 18
_MAX_HEX_INT_CHARS = 15

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
_MONTH_NUMBERS = {name.lower(): number for number, name in enumerate(_MONTHS, 1)}
_WEEKDAY_NAMES = {name.lower() for name in _WEEKDAYS}

_HTTP_DATE = re.compile(
    r"([A-Za-z]{3}), (\d{2}) ([A-Za-z]{3}) (\d{4}) (\d{1,2}):(\d{2}):(\d{2}) ([A-Za-z]{3,5})"
)

_HTML_ESCAPES = {
    ord("<"): "&lt;",
    ord(">"): "&gt;",
    ord('"'): "&quot;",
    ord("'"): "&#39;",
}

_ALNUM = b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
_ARG_SAFE = frozenset(_ALNUM + b"*-._")
_PATH_SAFE = frozenset(_ALNUM + b"/.,=:&~-_")

_HEX_VALUES = {c: int(chr(c), 16) for c in b"0123456789abcdefABCDEF"}
_ESCAPE = re.compile(rb"%([0-9A-Fa-f]{2})")


class ConversionError(ValueError):
    """Raised when a value cannot be parsed or formatted."""


def _as_bytes(value: BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def html_escape(s):
    """Escape <, >, " and ' for HTML; returns the same type it was given."""
    if isinstance(s, (bytes, bytearray, memoryview)):
        return bytes(s).decode("latin-1").translate(_HTML_ESCAPES).encode("latin-1")
    return s.translate(_HTML_ESCAPES)


def format_ipv4(ip) -> str:
    """Return the dotted-quad form of an IPv4 address (or IPv4-mapped IPv6)."""
    if isinstance(ip, (bytes, bytearray)):
        if len(ip) == 4:
            addr = ipaddress.IPv4Address(bytes(ip))
        elif len(ip) == 16:
            addr = ipaddress.IPv6Address(bytes(ip))
        else:
            raise ConversionError("non-v4 ip passed to format_ipv4")
    elif isinstance(ip, str):
        try:
            addr = ipaddress.ip_address(ip)
        except ValueError as exc:
            raise ConversionError(str(exc)) from None
    else:
        addr = ip
    if isinstance(addr, ipaddress.IPv6Address):
        mapped = addr.ipv4_mapped
        if mapped is None:
            raise ConversionError("non-v4 ip passed to format_ipv4")
        addr = mapped
    return ".".join(format_uint(part) for part in addr.packed)


def _parse_ip_part(part: bytes, ip_str: bytes) -> int:
    try:
        value = parse_uint(part)
    except ConversionError as exc:
        raise ConversionError(f"cannot parse ipStr {ip_str!r}: {exc}") from None
    if value > 255:
        raise ConversionError(
            f"cannot parse ipStr {ip_str!r}: ip part cannot exceed 255: parsed {value}"
        )
    return value


def parse_ipv4(ip_str: BytesLike) -> ipaddress.IPv4Address:
    """Parse a dotted-quad IPv4 address."""
    raw = _as_bytes(ip_str)
    if not raw:
        raise ConversionError("empty ip address string")
    parts = []
    rest = raw
    for _ in range(3):
        head, dot, tail = rest.partition(b".")
        if not dot:
            raise ConversionError(f"cannot find dot in ipStr {raw!r}")
        parts.append(_parse_ip_part(head, raw))
        rest = tail
    parts.append(_parse_ip_part(rest, raw))
    return ipaddress.IPv4Address(bytes(parts))


def format_http_date(date: datetime) -> str:
    """Format a datetime as an RFC 1123 HTTP date in GMT.

    Naive datetimes are taken to be in UTC.
    """
    if date.tzinfo is not None:
        date = date.astimezone(timezone.utc)
    return (
        f"{_WEEKDAYS[date.weekday()]}, {date.day:02d} {_MONTHS[date.month - 1]} "
        f"{date.year:04d} {date.hour:02d}:{date.minute:02d}:{date.second:02d} GMT"
    )


def parse_http_date(date: BytesLike) -> datetime:
    """Parse an RFC 1123 HTTP date into an aware UTC datetime."""
    text = _as_bytes(date).decode("latin-1")
    match = _HTTP_DATE.fullmatch(text)
    if match is None:
        raise ConversionError(f"cannot parse {text!r} as an HTTP date")
    weekday, day, month, year, hour, minute, second, _zone = match.groups()
    if weekday.lower() not in _WEEKDAY_NAMES:
        raise ConversionError(f"cannot parse {text!r}: bad weekday {weekday!r}")
    month_number = _MONTH_NUMBERS.get(month.lower())
    if month_number is None:
        raise ConversionError(f"cannot parse {text!r}: bad month {month!r}")
    try:
        return datetime(
            int(year), month_number, int(day),
            int(hour), int(minute), int(second),
            tzinfo=timezone.utc,
        )
    except ValueError as exc:
        raise ConversionError(f"cannot parse {text!r}: {exc}") from None


def format_uint(n: int) -> str:
    """Return the decimal form of a non-negative integer."""
    if n < 0:
        raise ValueError("int must be positive")
    return str(n)


def parse_uint(buf: BytesLike) -> int:
    """Parse a non-negative decimal integer made only of ASCII digits."""
    data = _as_bytes(buf)
    if not data:
        raise ConversionError("empty integer")
    value = 0
    for i, c in enumerate(data):
        if not 0x30 <= c <= 0x39:
            if i == 0:
                raise ConversionError("unexpected first char found. Expecting 0-9")
            raise ConversionError("unexpected trailing char found. Expecting 0-9")
        if i >= _MAX_INT_CHARS:
            raise ConversionError("too long int")
        value = 10 * value + (c - 0x30)
    return value


def _pow10(n: int) -> float:
    if n < -323:
        return 0.0
    if n > 308:
        return math.inf
    return float(f"1e{n}")


def _to_float(v: int) -> float:
    try:
        return float(v)
    except OverflowError:
        return math.inf


def parse_ufloat(buf: BytesLike) -> float:
    """Parse an unsigned decimal float with an optional exponent."""
    data = _as_bytes(buf)
    if not data:
        raise ConversionError("empty float number")
    value = 0
    offset = 1.0
    point_found = False
    for i, c in enumerate(data):
        if 0x30 <= c <= 0x39:
            value = 10 * value + (c - 0x30)
            if point_found:
                offset /= 10
            continue
        if c == ord("."):
            if point_found:
                raise ConversionError("duplicate point found in float number")
            point_found = True
            continue
        if c in b"eE":
            if i + 1 >= len(data):
                raise ConversionError("unexpected end of float number")
            exponent = data[i + 1:]
            sign = 1
            if exponent[:1] == b"+":
                exponent = exponent[1:]
            elif exponent[:1] == b"-":
                exponent = exponent[1:]
                sign = -1
            try:
                power = parse_uint(exponent)
            except ConversionError:
                raise ConversionError("invalid float number exponent") from None
            return _to_float(value) * offset * _pow10(sign * power)
        raise ConversionError("unexpected char found in float number")
    return _to_float(value) * offset


def _peek_byte(reader: BinaryIO) -> bytes:
    peek = getattr(reader, "peek", None)
    if peek is not None:
        return peek(1)[:1]
    position = reader.tell()
    byte = reader.read(1)
    reader.seek(position)
    return byte


def read_hex_int(reader: BinaryIO) -> int:
    """Read a hexadecimal integer from a binary stream.

    Reading stops at the first non-hex byte, which is left in the stream.
    """
    value = 0
    count = 0
    while True:
        byte = _peek_byte(reader)
        if not byte:
            if count > 0:
                return value
            raise ConversionError("unexpected end of data while reading hex number")
        digit = _HEX_VALUES.get(byte[0])
        if digit is None:
            if count == 0:
                raise ConversionError("empty hex number")
            return value
        if count >= _MAX_HEX_INT_CHARS:
            raise ConversionError("too large hex number")
        reader.read(1)
        value = (value << 4) | digit
        count += 1


def write_hex_int(writer, n: int) -> None:
    """Write a non-negative integer to writer in lowercase hexadecimal."""
    if n < 0:
        raise ValueError("int must be positive")
    writer.write(format(n, "x").encode("ascii"))


def _quote(src: BytesLike, safe: frozenset) -> bytes:
    out = bytearray()
    for c in _as_bytes(src):
        if c in safe:
            out.append(c)
        else:
            out += b"%%%02X" % c
    return bytes(out)


def quote_arg(src: BytesLike) -> bytes:
    """URL-encode a query argument as HTML form submission does."""
    return _quote(src, _ARG_SAFE)


def quote_path(src: BytesLike) -> bytes:
    """URL-encode a path, keeping path punctuation as is."""
    return _quote(src, _PATH_SAFE)


def decode_arg(src: BytesLike, plus_as_space: bool = True) -> bytes:
    """URL-decode src; invalid escapes are kept as they are.

    A '%' among the last two bytes stops decoding: the rest is kept verbatim.
    """
    data = _as_bytes(src)
    tail = b""
    cut = data.find(b"%", max(len(data) - 2, 0))
    if cut >= 0:
        data, tail = data[:cut], data[cut:]
    if plus_as_space:
        data = data.replace(b"+", b" ")
    return _ESCAPE.sub(lambda m: bytes((int(m.group(1), 16),)), data) + tail


def unquote_arg(src: BytesLike) -> bytes:
    """URL-decode a query argument, turning '+' into a space."""
    return decode_arg(src, True)