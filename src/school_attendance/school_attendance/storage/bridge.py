from __future__ import annotations

import logging
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Synchronous string store keyed by name."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class PersistenceBridge(Protocol):
    def load(self) -> Optional[str]:
        raise NotImplementedError

    def save(self, text: str) -> None:
        raise NotImplementedError


class KeyValuePersistence:
    """Persist the whole school tree as one blob under a single key."""

    def __init__(self, store: KeyValueStore, key: str):
        self._store = store
        self._key = key

    def load(self) -> Optional[str]:
        try:
            return self._store.get(self._key)
        except OSError:
            logger.warning("Could not read key %r from storage, starting empty", self._key, exc_info=True)
            return None

    def save(self, text: str) -> None:
        try:
            self._store.set(self._key, text)
        except OSError:
            # Keep the in-memory state; the next mutation retries the write.
            logger.error("Could not write key %r to storage", self._key, exc_info=True)
