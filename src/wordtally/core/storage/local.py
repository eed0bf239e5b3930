"""
Local filesystem storage backend.

Async file operations with optional gzip compression. Writes go to a temporary
sibling file first and are moved into place, so a crash mid-write never leaves
a truncated object behind.
"""

from datetime import datetime
from pathlib import Path

import aiofiles
import aiofiles.os

from .base import StorageBackend, StorageKeyError, StorageMetadata, StoragePermissionError
from .compression import CompressionType, compress_bytes, decompress_bytes


class LocalStorage(StorageBackend):
    """Local filesystem storage backend."""

    def __init__(self, base_path: str = "~/.wordtally-data/storage", **config):
        super().__init__(**config)
        self.base_path = Path(base_path).expanduser().resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Resolve a storage key to an absolute path under ``base_path``.

        Rejects unsafe keys (absolute paths, traversal, empty keys, and
        backslash-delimited paths) to prevent writes outside ``base_path``.
        """
        raw_key = key.strip()
        if not raw_key:
            raise StoragePermissionError("Storage key cannot be empty.")
        if "\x00" in raw_key:
            raise StoragePermissionError("Storage key cannot contain null bytes.")
        if "\\" in raw_key:
            raise StoragePermissionError("Storage key cannot contain backslashes. Use '/' separators.")

        key_path = Path(raw_key)
        if key_path.is_absolute() or raw_key.startswith("~"):
            raise StoragePermissionError(f"Unsafe storage key '{key}': absolute paths are not allowed.")

        full_path = (self.base_path / key_path).resolve()
        try:
            full_path.relative_to(self.base_path)
        except ValueError as e:
            raise StoragePermissionError(f"Unsafe storage key '{key}': path traversal is not allowed.") from e
        return full_path

    @staticmethod
    def _gz(path: Path) -> Path:
        return path.with_suffix(path.suffix + ".gz")

    async def save(self, key: str, data: bytes, compress: bool = False) -> StorageMetadata:
        path = self._get_full_path(key)
        stale = self._gz(path)
        if compress:
            data = compress_bytes(data, CompressionType.GZIP)
            path, stale = stale, path

        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(path.name + ".tmp")

        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(data)
            await aiofiles.os.replace(tmp_path, path)
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot write to {path}: {e}") from e

        # Only one representation of a key may exist at a time
        if stale.exists():
            await aiofiles.os.remove(stale)

        stat = await aiofiles.os.stat(path)
        return StorageMetadata(
            key=key,
            size=stat.st_size,
            modified_at=datetime.fromtimestamp(stat.st_mtime),
            compression=CompressionType.GZIP.value if compress else None,
        )

    async def load(self, key: str) -> bytes:
        path = self._get_full_path(key)

        compressed = not path.exists() and self._gz(path).exists()
        if compressed:
            path = self._gz(path)

        if not path.exists():
            raise StorageKeyError(f"Key not found: {key}")

        try:
            async with aiofiles.open(path, "rb") as f:
                data = await f.read()
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot read {path}: {e}") from e

        if compressed:
            data = decompress_bytes(data, CompressionType.GZIP)
        return data

    async def exists(self, key: str) -> bool:
        path = self._get_full_path(key)
        return path.exists() or self._gz(path).exists()

    async def delete(self, key: str) -> bool:
        path = self._get_full_path(key)
        deleted = False
        for p in (path, self._gz(path)):
            if p.exists():
                await aiofiles.os.remove(p)
                deleted = True
        return deleted
