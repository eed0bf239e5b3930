"""
Abstract base class for storage backends.

The tracker only needs a blob store: ``load(key) -> bytes`` and
``save(key, data)``. Backends perform no schema validation of their own.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass
class StorageMetadata:
    """Metadata for stored objects."""

    key: str
    size: int
    modified_at: datetime
    compression: str | None = None


class StorageBackend(ABC):
    """Abstract base class for storage backends."""

    def __init__(self, **config):
        self.config = config

    @abstractmethod
    async def save(self, key: str, data: bytes, compress: bool = False) -> StorageMetadata:
        """Save data to storage, replacing any existing object under ``key``."""

    @abstractmethod
    async def load(self, key: str) -> bytes:
        """Load data from storage. Raises StorageKeyError if not found."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if a key exists in storage."""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete an object. Returns True if deleted, False if didn't exist."""


class StorageError(Exception):
    """Base exception for storage errors."""


class StorageKeyError(StorageError, KeyError):
    """Raised when a storage key doesn't exist."""


class StoragePermissionError(StorageError):
    """Raised when storage operation is not permitted."""
