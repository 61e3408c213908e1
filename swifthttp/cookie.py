"""HTTP cookies: Set-Cookie values and request Cookie headers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import BinaryIO, Iterable, Union

from swifthttp.bytesconv import format_http_date, parse_http_date

BytesLike = Union[bytes, bytearray, memoryview, str]

# Setting this expiration time deletes the cookie on the client.
COOKIE_EXPIRE_DELETE = datetime(2009, 11, 10, 23, 0, 0, tzinfo=timezone.utc)

# A cookie with no expiration time lives as long as the browser session.
COOKIE_EXPIRE_UNLIMITED = None


class NoCookiesError(ValueError):
    """Raised when a Set-Cookie value holds no cookie at all."""

    def __init__(self) -> None:
        super().__init__("no cookies found")


def _to_bytes(value: BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _decode_cookie_arg(src: bytes, skip_quotes: bool) -> bytes:
    src = src.strip(b" ")
    if skip_quotes and len(src) > 1 and src[:1] == b'"' and src[-1:] == b'"':
        src = src[1:-1]
    return src


def _scan_cookie_parts(data: bytes) -> list[tuple[bytes, bytes]]:
    """Split a cookie string on ';' into (key, value) pairs, empty ones included."""
    if not data:
        return []
    parts = data.split(b";")
    if data.endswith(b";"):
        parts.pop()
    pairs = []
    for part in parts:
        key, eq, value = part.partition(b"=")
        if eq:
            pairs.append(
                (_decode_cookie_arg(key, False), _decode_cookie_arg(value, True))
            )
        else:
            pairs.append((b"", _decode_cookie_arg(part, True)))
    return pairs


class Cookie:
    """A response cookie as carried by a Set-Cookie header."""

    __slots__ = ("_key", "_value", "expire", "_domain", "_path", "http_only", "secure")

    def __init__(self) -> None:
        self._key = b""
        self._value = b""
        self.expire: datetime | None = COOKIE_EXPIRE_UNLIMITED
        self._domain = b""
        self._path = b""
        self.http_only = False
        self.secure = False

    @property
    def key(self) -> bytes:
        """Cookie name."""
        return self._key

    @key.setter
    def key(self, key: BytesLike) -> None:
        self._key = _to_bytes(key)

    @property
    def value(self) -> bytes:
        """Cookie value."""
        return self._value

    @value.setter
    def value(self, value: BytesLike) -> None:
        self._value = _to_bytes(value)

    @property
    def domain(self) -> bytes:
        """Cookie domain."""
        return self._domain

    @domain.setter
    def domain(self, domain: BytesLike) -> None:
        self._domain = _to_bytes(domain)

    @property
    def path(self) -> bytes:
        """Cookie path."""
        return self._path

    @path.setter
    def path(self, path: BytesLike) -> None:
        self._path = _to_bytes(path)

    def copy_from(self, src: Cookie) -> None:
        """Make this cookie a copy of src."""
        self._key = src._key
        self._value = src._value
        self.expire = src.expire
        self._domain = src._domain
        self._path = src._path
        self.http_only = src.http_only
        self.secure = src.secure

    def reset(self) -> None:
        """Clear every field."""
        self.__init__()

    def to_bytes(self) -> bytes:
        """Return the Set-Cookie representation of the cookie."""
        out = bytearray()
        if self._key:
            out += self._key + b"="
        out += self._value
        if self.expire is not None:
            out += b"; expires=" + format_http_date(self.expire).encode("ascii")
        if self._domain:
            out += b"; domain=" + self._domain
        if self._path:
            out += b"; path=" + self._path
        if self.http_only:
            out += b"; HttpOnly"
        if self.secure:
            out += b"; secure"
        return bytes(out)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __str__(self) -> str:
        return self.to_bytes().decode("utf-8", errors="surrogateescape")

    def __repr__(self) -> str:
        return f"Cookie({str(self)!r})"

    def write_to(self, w: BinaryIO) -> int:
        """Write the cookie to w and return the number of bytes written."""
        data = self.to_bytes()
        written = w.write(data)
        return len(data) if written is None else written

    def parse(self, src: BytesLike) -> None:
        """Replace the cookie with one parsed from a Set-Cookie value."""
        self.reset()
        pairs = _scan_cookie_parts(_to_bytes(src))
        if not pairs:
            raise NoCookiesError()
        self._key, self._value = pairs[0]
        for key, value in pairs[1:]:
            if not key and not value:
                continue
            if key == b"expires":
                self.expire = parse_http_date(value)
            elif key == b"domain":
                self._domain = value
            elif key == b"path":
                self._path = value
            elif key == b"":
                if value == b"HttpOnly":
                    self.http_only = True
                elif value == b"secure":
                    self.secure = True


def parse_request_cookies(src: BytesLike) -> list[tuple[bytes, bytes]]:
    """Parse a request Cookie header into (name, value) pairs."""
    return [
        (key, value)
        for key, value in _scan_cookie_parts(_to_bytes(src))
        if key or value
    ]


def format_request_cookies(cookies: Iterable[tuple[BytesLike, BytesLike]]) -> bytes:
    """Format (name, value) pairs as a request Cookie header value."""
    parts = []
    for key, value in cookies:
        k = _to_bytes(key)
        v = _to_bytes(value)
        parts.append(k + b"=" + v if k else v)
    return b"; ".join(parts)