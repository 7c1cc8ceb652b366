"""
Indexer Configuration - Centralized settings for the file indexer.

Uses environment variables with sensible defaults. Worker counts default
to the number of available CPUs.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from .models import CollisionStrategy


def _default_workers() -> int:
    return os.cpu_count() or 1


@dataclass
class IndexerConfig:
    """
    Configuration for a FileIndexer.

    The collision strategy is fixed per indexer instance; the remaining
    fields tune the worker pool and the directory walker.
    """

    # --- Collisions ---
    collision_strategy: CollisionStrategy = CollisionStrategy.NO_DUPLICATES

    # --- Concurrency Limits ---
    workers: int = field(default_factory=_default_workers)
    queue_size: Optional[int] = None   # Pending files between walker and workers
    lock_stripes: int = 64             # Per-key lock table size

    # --- Walker ---
    follow_symlinks: bool = True       # Descend into symlinked directories

    def __post_init__(self):
        """Normalise strategy names and validate limits."""
        self.collision_strategy = CollisionStrategy.parse(self.collision_strategy)

        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.lock_stripes < 1:
            raise ValueError(f"lock_stripes must be at least 1, got {self.lock_stripes}")

        if self.queue_size is not None and self.queue_size < 1:
            raise ValueError(f"queue_size must be at least 1, got {self.queue_size}")

    def queue_size_for(self, workers: int) -> int:
        """Queue size for a pool of `workers` (4 per worker unless set explicitly)."""
        return self.queue_size if self.queue_size is not None else workers * 4

    @classmethod
    def from_env(cls) -> "IndexerConfig":
        """
        Create config from environment variables.

        Supported env vars:
            FILEINDEX_COLLISION_STRATEGY: no_duplicates, replace or allow_duplicates
            FILEINDEX_WORKERS: Number of worker threads
            FILEINDEX_QUEUE_SIZE: Files buffered between walker and workers
            FILEINDEX_LOCK_STRIPES: Size of the per-key lock table
            FILEINDEX_FOLLOW_SYMLINKS: "0"/"false" to skip symlinked directories
        """
        kwargs = {}

        if strategy := os.environ.get("FILEINDEX_COLLISION_STRATEGY"):
            kwargs["collision_strategy"] = strategy

        if workers := os.environ.get("FILEINDEX_WORKERS"):
            kwargs["workers"] = int(workers)

        if queue_size := os.environ.get("FILEINDEX_QUEUE_SIZE"):
            kwargs["queue_size"] = int(queue_size)

        if stripes := os.environ.get("FILEINDEX_LOCK_STRIPES"):
            kwargs["lock_stripes"] = int(stripes)

        if follow := os.environ.get("FILEINDEX_FOLLOW_SYMLINKS"):
            kwargs["follow_symlinks"] = follow.strip().lower() not in {"0", "false", "no", "off"}

        return cls(**kwargs)


# Singleton default config
_default_config: IndexerConfig | None = None


def get_config() -> IndexerConfig:
    """Get the default configuration (singleton)."""
    global _default_config
    if _default_config is None:
        _default_config = IndexerConfig.from_env()
    return _default_config


def set_config(config: IndexerConfig | None) -> None:
    """Override the default configuration (for testing)."""
    global _default_config
    _default_config = config
