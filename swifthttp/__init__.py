"""HTTP building blocks: query arguments, cookies, byte conversions, buffers and compression."""

__version__ = "0.1.0"

__all__ = ["args", "bytebuffer", "bytesconv", "compress", "cookie"]