"""Gzip helpers for storage backends."""

import gzip
from enum import Enum
from io import BytesIO


class CompressionType(Enum):
    """Supported compression types."""

    NONE = "none"
    GZIP = "gzip"


def compress_bytes(data: bytes, compression: CompressionType = CompressionType.GZIP) -> bytes:
    """Compress binary data."""
    if compression == CompressionType.NONE:
        return data
    if compression == CompressionType.GZIP:
        buffer = BytesIO()
        with gzip.GzipFile(fileobj=buffer, mode="wb", compresslevel=6) as gz:
            gz.write(data)
        return buffer.getvalue()
    raise ValueError(f"Unsupported compression type: {compression}")


def decompress_bytes(data: bytes, compression: CompressionType = CompressionType.GZIP) -> bytes:
    """Decompress binary data."""
    if compression == CompressionType.NONE:
        return data
    if compression == CompressionType.GZIP:
        return gzip.decompress(data)
    raise ValueError(f"Unsupported compression type: {compression}")
