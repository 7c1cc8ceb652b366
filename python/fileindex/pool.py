"""
Worker Pool - Bounded producer/consumer execution of per-file work.

The walker feeds a bounded asyncio queue; a fixed number of consumer
coroutines each hand one item at a time to a shared thread pool. The run
returns only after every dispatched item has finished, so awaiting
``run()`` is the completion barrier.
"""

import asyncio
import logging
import threading
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional

from .models import UnitFailure


logger = logging.getLogger(__name__)

_DONE = object()


@dataclass
class BatchResult:
    """Outcome of one pool run."""
    dispatched: int = 0
    completed: int = 0
    cancelled: bool = False
    outcomes: Counter = field(default_factory=Counter)   # Return value -> count
    failures: List[UnitFailure] = field(default_factory=list)


class WorkerPool:
    """
    Fixed-size worker pool, reusable across runs.

    The thread pool is created on first use and kept until ``close()``.
    """

    def __init__(self, workers: int, queue_size: int | None = None):
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.workers = workers
        self.queue_size = queue_size or workers * 4
        self._executor: ThreadPoolExecutor | None = None

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.workers,
                thread_name_prefix="fileindex"
            )
        return self._executor

    async def run(
        self,
        items: Iterable[Any],
        fn: Callable[[Any], Any],
        cancel_event: Optional[threading.Event] = None,
    ) -> BatchResult:
        """
        Apply ``fn`` to every item on the worker threads.

        Each item is dispatched exactly once. An exception raised by ``fn``
        ends that item only; it is recorded in ``failures`` (completion
        order) and the run carries on. Setting ``cancel_event`` stops
        dispatching; items already queued still run.

        Args:
            items: Work items, consumed lazily
            fn: Called once per item on a worker thread
            cancel_event: Optional stop signal checked before each dispatch

        Returns:
            BatchResult with counts, per-outcome tallies and failures
        """
        loop = asyncio.get_running_loop()
        executor = self._get_executor()
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        result = BatchResult()

        async def consume():
            while True:
                item = await queue.get()
                if item is _DONE:
                    return
                try:
                    outcome = await loop.run_in_executor(executor, fn, item)
                except Exception as e:
                    result.failures.append(UnitFailure(path=item, error=e))
                else:
                    result.outcomes[outcome] += 1
                result.completed += 1

        consumers = [asyncio.create_task(consume()) for _ in range(self.workers)]
        try:
            for item in items:
                if cancel_event is not None and cancel_event.is_set():
                    result.cancelled = True
                    logger.info(f"Cancelled after dispatching {result.dispatched} items")
                    break
                await queue.put(item)
                result.dispatched += 1
        finally:
            for _ in consumers:
                await queue.put(_DONE)
            await asyncio.gather(*consumers)

        return result

    def close(self):
        """Shutdown the thread pool."""
        if self._executor:
            self._executor.shutdown(wait=True)
            self._executor = None
