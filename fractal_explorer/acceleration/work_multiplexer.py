"""
Thread pool for splitting a job into concurrently running shards.

Each shard receives its index, the total shard count, a stop notifier it
polls between units of work, and a name for logging. Shards fail
independently: a failing shard is logged and reported when the handles are
waited on, without disturbing the others.
"""

from typing import Callable, Dict, List, Optional
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
import threading
import logging
import time
import os

logger = logging.getLogger(__name__)

DEFAULT_BASE_NAME = "worker thread"


class WorkerError(RuntimeError):
    """Raised when one or more shards terminated abnormally."""

    def __init__(self, message: str, failures: Dict[str, BaseException]):
        super().__init__(message)
        self.failures = failures


class StopNotifier:
    """Cooperative cancellation flag shared by all shards of one job."""

    def __init__(self):
        self._event = threading.Event()

    def stop(self) -> None:
        self._event.set()

    def should_stop(self) -> bool:
        return self._event.is_set()


ShardJob = Callable[[int, int, StopNotifier, str], None]


def get_optimal_thread_count() -> int:
    """Number of threads to use by default."""
    return os.cpu_count() or 1


class WorkHandles:
    """Handles for the shards of one running job."""

    def __init__(self, executor: ThreadPoolExecutor, futures: Dict[Future, str],
                 notifier: StopNotifier):
        self._executor = executor
        self._futures = futures
        self.notifier = notifier
        self._waited = False

    @property
    def done(self) -> bool:
        return all(future.done() for future in self._futures)

    def wait(self) -> None:
        """
        Block until every shard has finished.

        Raises:
            WorkerError: if any shard raised; raised after all shards finish
        """
        failures: Dict[str, BaseException] = {}
        for future in as_completed(self._futures):
            name = self._futures[future]
            try:
                future.result()
            except Exception as e:
                logger.error(f"{name} failed: {e}")
                failures[name] = e

        if not self._waited:
            self._executor.shutdown(wait=True)
            self._waited = True

        if failures:
            names = ', '.join(sorted(failures))
            raise WorkerError(f"{len(failures)} of {len(self._futures)} shards failed: {names}",
                              failures)

    def stop(self) -> None:
        """Ask every shard to stop at its next check and wait for them."""
        self.notifier.stop()
        self.wait()


class WorkMultiplexer:
    """Runs a shard function once per thread of a fixed-size pool."""

    def __init__(self, thread_count: Optional[int] = None, base_name: str = DEFAULT_BASE_NAME):
        """
        Initialize multiplexer.

        Args:
            thread_count: Number of shards (None for the CPU count)
            base_name: Prefix for shard names; shards are named '<base_name>.<index>'
        """
        if thread_count is None:
            thread_count = get_optimal_thread_count()
        if isinstance(thread_count, bool) or not isinstance(thread_count, int) or thread_count < 1:
            raise ValueError(f"thread_count must be a positive integer, got {thread_count!r}")

        self.thread_count = thread_count
        self.base_name = base_name

    def split_work(self, job: ShardJob) -> WorkHandles:
        """
        Start ``job`` on every shard.

        Args:
            job: Callable taking (shard_index, shard_count, notifier, shard_name)

        Returns:
            Handles used to wait for or stop the shards
        """
        notifier = StopNotifier()
        executor = ThreadPoolExecutor(max_workers=self.thread_count,
                                      thread_name_prefix=self.base_name)
        futures: Dict[Future, str] = {}

        for index in range(self.thread_count):
            name = f"{self.base_name}.{index}"
            future = executor.submit(self._run_shard, job, index, notifier, name)
            futures[future] = name

        logger.debug(f"Started {self.thread_count} shards of {self.base_name}")
        return WorkHandles(executor, futures, notifier)

    def _run_shard(self, job: ShardJob, index: int, notifier: StopNotifier, name: str) -> None:
        start_time = time.time()
        job(index, self.thread_count, notifier, name)
        logger.debug(f"{name} finished in {time.time() - start_time:.3f} seconds")


def shard_columns(width: int, shard_index: int, shard_count: int) -> List[int]:
    """Columns assigned to a shard: every column whose index mod shard_count equals shard_index."""
    return list(range(shard_index, width, shard_count))
