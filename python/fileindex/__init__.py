"""
fileindex - Concurrent in-memory file indexing.

Modules:
    - config: Centralized configuration
    - walker: Lazy recursive directory traversal
    - filters: Ready-made inclusion predicates
    - keys: Ready-made key extractors (name, extension, xxHash content hash)
    - pool: Bounded worker pool with a completion barrier
    - resolver: Collision strategies
    - index: Thread-safe key -> files store
    - indexer: Main entry point

Flow:
    Walk → Filter → Key → Insert (collision-aware)

Usage:
    from fileindex import FileIndexer
    from fileindex.keys import by_name

    with FileIndexer("/data") as indexer:
        indexer.index(by_name)
        indexer.get("report.pdf")
"""

from .errors import (
    CallerFunctionError,
    DuplicateKeyError,
    IndexingCancelled,
    IndexingError,
    TraversalError,
)
from .indexer import FileIndexer, index_directory
from .models import CollisionStrategy, IndexingStats

__all__ = [
    "FileIndexer",
    "index_directory",
    "CollisionStrategy",
    "IndexingStats",
    "IndexingError",
    "DuplicateKeyError",
    "CallerFunctionError",
    "TraversalError",
    "IndexingCancelled",
]
