# swifthttp

This package has small building blocks for working with HTTP data in Python. It needs nothing outside the standard library.

- **`swifthttp.args`** provides `Args`, an ordered multi-map of query arguments. It parses and produces `application/x-www-form-urlencoded` strings.
- **`swifthttp.cookie`** provides `Cookie` for `Set-Cookie` values. It also has `parse_request_cookies` and `format_request_cookies` for the `Cookie` request header.
- **`swifthttp.bytesconv`** has strict parsers and formatters for these values:
  - unsigned integers
  - unsigned floats
  - hexadecimal numbers
  - IPv4 addresses
  - RFC 1123 HTTP dates

  It also does HTML escaping and URL quoting and unquoting.
- **`swifthttp.compress`** has gzip and zlib (deflate) helpers. They work on bytes or on writable binary streams.
- **`swifthttp.bytebuffer`** provides `ByteBuffer`, a growable byte buffer, with a small pool for reusing buffers.

## What it does not do

There is no HTTP client or server here, and no request, response or header types. Nothing opens a network connection. The package only handles the data formats listed above.

## Installation

```
pip install swifthttp
```

## Query arguments

Keys and values are stored as bytes. When you pass a `str`, it is encoded as UTF-8.

```python
from swifthttp.args import Args

args = Args()
args.parse("foo=bar&foo=baz&n=42")
args.peek("foo")             # b"bar"
args.peek_multi("foo")       # [b"bar", b"baz"]
args.get_uint("n")           # 42
args.set("q", "hello world")
args.query_string()          # b"foo=bar&foo=baz&n=42&q=hello%20world"
```

Some cases do not return a value in the normal way:

- `peek` returns `None` for a key that is absent.
- A missing or empty value raises `NoArgValueError` from `get_uint` and `get_ufloat`.
- A malformed number raises `ConversionError` from those two methods.
- `get_uint_or_zero` and `get_ufloat_or_zero` return `0` in all of these cases instead of raising.
- `get_bool` is true only for `1`, `y` and `yes`.

## Cookies

```python
from swifthttp.cookie import Cookie, parse_request_cookies, format_request_cookies

cookie = Cookie()
cookie.parse("session=token; path=/; HttpOnly; secure")
cookie.to_bytes()   # b"session=token; path=/; HttpOnly; secure"

pairs = parse_request_cookies(b"a=1; b=2")   # [(b"a", b"1"), (b"b", b"2")]
format_request_cookies(pairs)                # b"a=1; b=2"
```

`Cookie` has the properties `key`, `value`, `domain` and `path`, which hold bytes, and the attributes `expire`, `http_only` and `secure`.

- `expire` is an aware `datetime`, or `None` for a session cookie.
- If you set `expire` to `COOKIE_EXPIRE_DELETE`, the client deletes the cookie.
- Parsing an empty string raises `NoCookiesError`.

## Conversions

```python
from swifthttp import bytesconv

bytesconv.parse_uint(b"123")           # 123
bytesconv.parse_ufloat(b"1e3")         # 1000.0
bytesconv.parse_ipv4(b"127.0.0.1")     # IPv4Address('127.0.0.1')
bytesconv.html_escape("<b>")           # "&lt;b&gt;"
bytesconv.quote_arg(b"a b")            # b"a%20b"
bytesconv.unquote_arg(b"a+b%21")       # b"a b!"
```

Invalid input raises `ConversionError`, which is a subclass of `ValueError`.

## Compression

```python
from swifthttp.compress import gzip_bytes, gunzip_bytes, deflate_bytes, inflate_bytes

packed = gzip_bytes(b"payload", 6)
gunzip_bytes(packed)                   # b"payload"
inflate_bytes(deflate_bytes(b"data"))  # b"data"
```

Compression levels run from `-2` (Huffman only) to `9` (best compression), and the default is `6`.

- A level outside that range raises `ValueError`.
- `normalize_compress_level` maps such a level to the default.
- Corrupt or truncated input to `gunzip_bytes` or `inflate_bytes` raises `ValueError`.

`is_file_compressible(f, ratio)` tells whether the first 4 KiB of a binary file would gzip to less than `ratio` times their size. It rewinds the file afterwards.

## Running the tests

```
pip install -e ".[test]"
pytest
```