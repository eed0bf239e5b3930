"""
Storage backends for wordtally.

Async key/blob storage with optional gzip compression and a pluggable
backend interface (local filesystem by default).
"""

from .base import (
    StorageBackend,
    StorageError,
    StorageKeyError,
    StorageMetadata,
    StoragePermissionError,
)
from .compression import CompressionType, compress_bytes, decompress_bytes
from .local import LocalStorage

__all__ = [
    "CompressionType",
    "LocalStorage",
    "StorageBackend",
    "StorageError",
    "StorageKeyError",
    "StorageMetadata",
    "StoragePermissionError",
    "compress_bytes",
    "decompress_bytes",
]
