"""Loading and saving TrackerState through a storage backend."""

from __future__ import annotations

import json

from loguru import logger

from wordtally.core.exceptions import StateError
from wordtally.core.storage import StorageBackend, StorageKeyError

from .history import DayHistory
from .models import TrackerState

DEFAULT_STATE_KEY = "state.json"


class StateStore:
    """Durable ``load()`` / ``save()`` for tracker state.

    Args:
        storage: Backend holding the state blob.
        key: Storage key of the blob.
        compress: Gzip the blob on save.
    """

    def __init__(self, storage: StorageBackend, key: str = DEFAULT_STATE_KEY, compress: bool = False):
        self.storage = storage
        self.key = key
        self.compress = compress

    async def load(self) -> TrackerState:
        """Load stored state merged over defaults.

        A missing blob yields empty state. A blob that isn't valid JSON raises
        StateError rather than being treated as empty, so it can't be
        overwritten by the next save.
        """
        try:
            raw = await self.storage.load(self.key)
        except StorageKeyError:
            logger.info(f"No saved state under {self.key!r}, starting fresh")
            return TrackerState()

        try:
            data = json.loads(raw.decode("utf-8")) if raw.strip() else {}
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StateError(f"Saved state {self.key!r} is not valid JSON: {e}") from e
        if data is not None and not isinstance(data, dict):
            raise StateError(f"Saved state {self.key!r} must be a JSON object")

        state = TrackerState.from_dict(data)
        logger.debug(f"Loaded state: {len(state.day_counts)} day(s), {len(state.day_to_word_count)} ledger slice(s)")
        return state

    async def save(self, state: TrackerState) -> bool:
        """Write ``state``. Returns False without writing when no day has a total yet."""
        if DayHistory(state.day_counts).is_empty():
            logger.debug("Day history is empty, skipping save")
            return False
        payload = json.dumps(state.to_dict(), ensure_ascii=False, sort_keys=True).encode("utf-8")
        await self.storage.save(self.key, payload, compress=self.compress)
        return True
