"""core/contracts/settings.py
=========================

Persistence contract used by features to store their configuration.

The store is a flat, synchronous string key-value map. Features own the
encoding of their values (typically JSON text) and the choice of keys.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class IKeyValueStore(ABC):
    """Synchronous string key-value store."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored text for ``key`` or None when absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Persist ``value`` under ``key``, replacing any previous value.

        Write failures are raised to the caller.
        """
