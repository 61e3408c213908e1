"""Query arguments: parsing, editing and serialising URL-encoded key/value pairs."""

from __future__ import annotations

from typing import BinaryIO, Iterator, Union

from swifthttp.bytesconv import (
    ConversionError,
    decode_arg,
    format_uint,
    parse_ufloat,
    parse_uint,
    quote_arg,
)

BytesLike = Union[bytes, bytearray, memoryview, str]


class NoArgValueError(LookupError):
    """Raised when an argument with the given key has no value."""

    def __init__(self, key: bytes) -> None:
        super().__init__(f"no Args value for the given key {key!r}")
        self.key = key


def _to_bytes(value: BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _split_arg(part: bytes) -> tuple[bytes, bytes]:
    key, eq, value = part.partition(b"=")
    if not eq:
        return decode_arg(part), b""
    return decode_arg(key), decode_arg(value)


class Args:
    """An ordered multi-map of query arguments.

    Keys and values are stored as bytes; str arguments are encoded as UTF-8.
    """

    __slots__ = ("_args",)

    def __init__(self, query: BytesLike | None = None) -> None:
        self._args: list[tuple[bytes, bytes]] = []
        if query is not None:
            self.parse(query)

    def __len__(self) -> int:
        return len(self._args)

    def __iter__(self) -> Iterator[tuple[bytes, bytes]]:
        return iter(list(self._args))

    def __str__(self) -> str:
        return self.query_string().decode("ascii")

    def __repr__(self) -> str:
        return f"Args({str(self)!r})"

    def reset(self) -> None:
        """Remove all arguments."""
        self._args.clear()

    def copy(self) -> Args:
        """Return an independent copy of these arguments."""
        other = Args()
        other._args = list(self._args)
        return other

    def parse(self, s: BytesLike) -> None:
        """Replace the arguments with those parsed from a query string."""
        self.reset()
        data = _to_bytes(s)
        if not data:
            return
        for part in data.split(b"&"):
            key, value = _split_arg(part)
            if key or value:
                self._args.append((key, value))

    def query_string(self) -> bytes:
        """Return the URL-encoded query string."""
        parts = []
        for key, value in self._args:
            encoded = quote_arg(key)
            if value:
                encoded += b"=" + quote_arg(value)
            parts.append(encoded)
        return b"&".join(parts)

    def write_to(self, w: BinaryIO) -> int:
        """Write the query string to w and return the number of bytes written."""
        data = self.query_string()
        written = w.write(data)
        return len(data) if written is None else written

    def delete(self, key: BytesLike) -> None:
        """Remove every argument with the given key."""
        k = _to_bytes(key)
        self._args = [kv for kv in self._args if kv[0] != k]

    def add(self, key: BytesLike, value: BytesLike) -> None:
        """Append an argument; several values may share one key."""
        self._args.append((_to_bytes(key), _to_bytes(value)))

    def set(self, key: BytesLike, value: BytesLike) -> None:
        """Set the value of the first argument with key, or append it."""
        k = _to_bytes(key)
        v = _to_bytes(value)
        for i, (existing, _) in enumerate(self._args):
            if existing == k:
                self._args[i] = (k, v)
                return
        self._args.append((k, v))

    def peek(self, key: BytesLike) -> bytes | None:
        """Return the first value for key, or None if the key is absent."""
        k = _to_bytes(key)
        return next((v for existing, v in self._args if existing == k), None)

    def peek_multi(self, key: BytesLike) -> list[bytes]:
        """Return all values for key, in order."""
        k = _to_bytes(key)
        return [v for existing, v in self._args if existing == k]

    def has(self, key: BytesLike) -> bool:
        """Return True if an argument with key exists."""
        k = _to_bytes(key)
        return any(existing == k for existing, _ in self._args)

    def get_uint(self, key: BytesLike) -> int:
        """Return the value for key as a non-negative integer."""
        value = self.peek(key)
        if not value:
            raise NoArgValueError(_to_bytes(key))
        return parse_uint(value)

    def set_uint(self, key: BytesLike, value: int) -> None:
        """Set key to the decimal form of a non-negative integer."""
        self.set(key, format_uint(value))

    def get_uint_or_zero(self, key: BytesLike) -> int:
        """Return the value for key as an integer, or 0 on any error."""
        try:
            return self.get_uint(key)
        except (NoArgValueError, ConversionError):
            return 0

    def get_ufloat(self, key: BytesLike) -> float:
        """Return the value for key as a non-negative float."""
        value = self.peek(key)
        if not value:
            raise NoArgValueError(_to_bytes(key))
        return parse_ufloat(value)

    def get_ufloat_or_zero(self, key: BytesLike) -> float:
        """Return the value for key as a float, or 0.0 on any error."""
        try:
            return self.get_ufloat(key)
        except (NoArgValueError, ConversionError):
            return 0.0

    def get_bool(self, key: BytesLike) -> bool:
        """Return True if the value for key is '1', 'y' or 'yes'."""
        return self.peek(key) in (b"1", b"y", b"yes")