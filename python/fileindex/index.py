"""
Concurrent Index - Thread-safe key to file-list storage.

Entries are immutable tuples. Writers serialize per key through a striped
lock table, so the "key already has files -> resolve" step is atomic for
a given key while inserts for other keys proceed in parallel. Readers
take no lock: a dict lookup always returns a complete tuple.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, Hashable, Iterator, List, Optional, Tuple

from .models import CollisionStrategy
from .resolver import resolver_for


logger = logging.getLogger(__name__)


class ConcurrentIndex:
    """Map from key to the files indexed under it."""

    def __init__(
        self,
        collision_strategy: CollisionStrategy | str = CollisionStrategy.NO_DUPLICATES,
        lock_stripes: int = 64,
    ):
        if lock_stripes < 1:
            raise ValueError(f"lock_stripes must be at least 1, got {lock_stripes}")
        self.collision_strategy = CollisionStrategy.parse(collision_strategy)
        self._resolve = resolver_for(self.collision_strategy)
        self._entries: Dict[Hashable, Tuple[Path, ...]] = {}
        self._locks = [threading.Lock() for _ in range(lock_stripes)]

    def _lock_for(self, key: Hashable) -> threading.Lock:
        return self._locks[hash(key) % len(self._locks)]

    def insert(self, key: Hashable, file: Path) -> None:
        """
        Insert ``file`` under ``key``.

        If the key already holds files the collision resolver decides the
        outcome; under NO_DUPLICATES this raises DuplicateKeyError and the
        index is left unchanged.
        """
        with self._lock_for(key):
            existing = self._entries.get(key)
            if existing:
                updated = self._resolve(key, file, existing)
                logger.debug(f"Collision on {key!r}: {file} ({self.collision_strategy.value})")
            else:
                updated = (file,)
            self._entries[key] = updated

    def get(self, key: Hashable) -> Optional[Path]:
        """First file for ``key``, or None."""
        files = self._entries.get(key)
        return files[0] if files else None

    def get_all(self, key: Hashable) -> List[Path]:
        """Copy of the files for ``key`` ([] if absent)."""
        return list(self._entries.get(key, ()))

    def keys(self) -> List[Any]:
        return list(self._entries.keys())

    def items(self) -> List[Tuple[Any, List[Path]]]:
        """Snapshot of every key with a copy of its files."""
        return [(key, list(files)) for key, files in list(self._entries.items())]

    @property
    def file_count(self) -> int:
        return sum(len(files) for files in list(self._entries.values()))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.keys())
