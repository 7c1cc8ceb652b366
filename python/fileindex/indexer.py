"""
File Indexer - Main entry point for building an in-memory file index.

Walks a root directory, runs the caller's inclusion predicate and key
function for every file on a worker pool, and inserts the results into
a thread-safe index under a fixed collision strategy:

    Walk → should_index → extract_key → insert (collision-aware)

Usage:
    from fileindex import FileIndexer, CollisionStrategy
    from fileindex.keys import by_name

    with FileIndexer(root, CollisionStrategy.ALLOW_DUPLICATES) as indexer:
        stats = indexer.index(by_name)
        print(indexer.get_all("README.md"))
"""

import argparse
import asyncio
import logging
import sys
import threading
import time
from pathlib import Path
from typing import Any, Callable, Hashable, List, Optional

from .config import get_config, IndexerConfig
from .errors import CallerFunctionError, IndexingCancelled, IndexingError, handle_error
from .filters import include_all, has_extension
from .index import ConcurrentIndex
from .keys import by_content_hash, by_extension, by_name, by_relative_path, by_stem
from .models import CollisionStrategy, IndexingStats
from .pool import WorkerPool
from .walker import Walker


logger = logging.getLogger(__name__)


class FileIndexer:
    """
    Concurrent file indexer for one root directory.

    The index starts empty and accumulates across repeated ``index()``
    calls. The worker pool is created on first use and reused until
    ``close()``; queries keep working after the indexer is closed.
    """

    def __init__(
        self,
        root: Path | str,
        collision_strategy: CollisionStrategy | str | None = None,
        workers: Optional[int] = None,
        config: Optional[IndexerConfig] = None,
    ):
        self.config = config or get_config()
        self.root = Path(root)

        if collision_strategy is None:
            collision_strategy = self.config.collision_strategy
        self.collision_strategy = CollisionStrategy.parse(collision_strategy)

        self._index = ConcurrentIndex(self.collision_strategy, self.config.lock_stripes)
        workers = workers if workers is not None else self.config.workers
        self._pool = WorkerPool(workers, self.config.queue_size_for(workers))
        self._cancel = threading.Event()
        self.last_stats: Optional[IndexingStats] = None

    @property
    def workers(self) -> int:
        return self._pool.workers

    @property
    def queue_size(self) -> int:
        return self._pool.queue_size

    def index(
        self,
        extract_key: Callable[[Path], Hashable],
        should_index: Optional[Callable[[Path], bool]] = None,
    ) -> IndexingStats:
        """
        Index every file under the root and block until all work is done.

        Must not be called from a running event loop; use ``index_async``
        there instead.
        """
        return asyncio.run(self.index_async(extract_key, should_index))

    async def index_async(
        self,
        extract_key: Callable[[Path], Hashable],
        should_index: Optional[Callable[[Path], bool]] = None,
    ) -> IndexingStats:
        """
        Index every file under the root.

        Files rejected by ``should_index`` are neither keyed nor counted
        as indexed. A failing file (duplicate key, or an exception from
        either caller function) does not stop the others; once every
        file has finished, the first failure is raised. All failures are
        logged and kept in ``last_stats.failures``.

        Args:
            extract_key: Maps an included file to its (hashable) key
            should_index: Inclusion predicate (default: include everything)

        Returns:
            Statistics about the run

        Raises:
            DuplicateKeyError: A key collided under NO_DUPLICATES
            CallerFunctionError: ``should_index`` or ``extract_key`` raised
            IndexingCancelled: ``cancel()`` was called during the run
        """
        should_index = should_index or include_all
        self._cancel.clear()
        start_time = time.monotonic()
        walker = Walker(self.root, self.config)

        logger.info(
            f"Indexing {self.root} with {self.workers} workers "
            f"(collision strategy: {self.collision_strategy.value})"
        )

        def process(path: Path) -> bool:
            try:
                include = should_index(path)
            except Exception as e:
                raise CallerFunctionError(path, "should_index", e) from e
            if not include:
                logger.debug(f"Skipped {path}")
                return False

            try:
                key = extract_key(path)
                hash(key)
            except Exception as e:
                raise CallerFunctionError(path, "extract_key", e) from e

            self._index.insert(key, path)
            return True

        batch = await self._pool.run(walker, process, self._cancel)

        stats = IndexingStats(
            files_seen=batch.dispatched,
            files_indexed=batch.outcomes[True],
            files_skipped=batch.outcomes[False],
            directories_skipped=walker.directories_skipped,
            duration_seconds=time.monotonic() - start_time,
            cancelled=batch.cancelled,
            failures=batch.failures,
        )
        self.last_stats = stats

        for failure in stats.failures:
            handle_error(failure.error, failure.path, "index")

        if stats.cancelled:
            cancelled = IndexingCancelled(
                f"Cancelled after {stats.files_seen} files ({stats.files_indexed} indexed)"
            )
            logger.warning(f"Indexing cancelled: {cancelled}")
            first_error = stats.failures[0].error if stats.failures else None
            raise cancelled from first_error

        if stats.failures:
            logger.error(f"Indexing failed with {stats.errors} errors: {stats}")
            raise stats.failures[0].error

        logger.info(str(stats))
        return stats

    def cancel(self):
        """Stop dispatching files in the current run; queued files still finish."""
        self._cancel.set()

    # --- Index access ---

    def add(self, key: Hashable, file: Path | str) -> None:
        """Insert a single file directly, applying the collision strategy."""
        self._index.insert(key, Path(file))

    def get(self, key: Hashable) -> Optional[Path]:
        return self._index.get(key)

    def get_all(self, key: Hashable) -> List[Path]:
        return self._index.get_all(key)

    def keys(self) -> List[Any]:
        return self._index.keys()

    @property
    def file_count(self) -> int:
        return self._index.file_count

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __len__(self) -> int:
        return len(self._index)

    # --- Lifecycle ---

    def close(self):
        """Clean up resources."""
        self._pool.close()

    def __enter__(self) -> "FileIndexer":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def index_directory(
    root: Path | str,
    extract_key: Callable[[Path], Hashable],
    should_index: Optional[Callable[[Path], bool]] = None,
    collision_strategy: CollisionStrategy | str | None = None,
    workers: Optional[int] = None,
    config: Optional[IndexerConfig] = None,
) -> FileIndexer:
    """
    Convenience function to build and fill an index in one call.

    Usage:
        indexer = index_directory(Path.home() / "Documents", by_name)
        print(indexer.get("notes.md"))
    """
    indexer = FileIndexer(root, collision_strategy, workers, config)
    try:
        indexer.index(extract_key, should_index)
    finally:
        indexer.close()
    return indexer


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


KEY_FUNCTIONS = {
    "name": lambda root: by_name,
    "stem": lambda root: by_stem,
    "extension": lambda root: by_extension,
    "path": by_relative_path,
    "hash": lambda root: by_content_hash,
}


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Concurrent in-memory file indexer")
    parser.add_argument("root", help="Directory to index")
    parser.add_argument("--key", choices=sorted(KEY_FUNCTIONS), default="name",
                        help="How files are keyed (default: name)")
    parser.add_argument("--strategy", choices=[s.value for s in CollisionStrategy],
                        default=None, help="Collision strategy")
    parser.add_argument("--workers", type=_positive_int, default=None, help="Worker threads")
    parser.add_argument("--ext", nargs="+", default=None, help="Only index these extensions")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s"
    )

    root = Path(args.root).expanduser().resolve()
    extract_key = KEY_FUNCTIONS[args.key](root)
    should_index = has_extension(*args.ext) if args.ext else None

    with FileIndexer(root, args.strategy, args.workers) as indexer:
        try:
            stats = indexer.index(extract_key, should_index)
        except IndexingError as e:
            print(f"Indexing failed: {e}", file=sys.stderr)
            if indexer.last_stats is not None:
                print(indexer.last_stats)
            return 1

    print(stats)
    return 0
