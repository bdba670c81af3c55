"""
Threaded streaming of chaos-game points.

A chaos game never finishes on its own, so it runs on a dedicated producer
thread that hands points to the consumer through a small bounded queue. While
the queue is full the producer waits in short timed puts rather than one
blocking put: ``queue.Queue`` has no way to wake a blocked ``put`` when the
consumer goes away, so the producer re-checks the sink's closed flag every
``POLL_INTERVAL`` seconds. Closing the consumer side therefore makes the
producer's pending or next send fail within one interval, and it returns.
"""

from typing import Iterator, Optional
import queue
import threading
import logging
import time

from ..core.chaos_game import ChaosGame, PointSink
from ..core.geometry import Point

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 10
POLL_INTERVAL = 0.05


class ChaosGameError(RuntimeError):
    """Raised when a chaos-game producer terminates abnormally."""


class BoundedSink(PointSink):
    """
    Bounded handoff queue between one producer and one consumer.

    ``send`` waits while the queue is full, polling the closed flag every
    ``POLL_INTERVAL`` seconds, and returns False once the consumer has closed
    the sink.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._queue: "queue.Queue[Point]" = queue.Queue(maxsize=capacity)
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, point: Point) -> bool:
        while not self._closed.is_set():
            try:
                self._queue.put(point, timeout=POLL_INTERVAL)
                return True
            except queue.Full:
                continue
        return False

    def receive(self, timeout: Optional[float] = None) -> Point:
        """
        Take the next point.

        Raises:
            queue.Empty: if no point arrives within ``timeout``
        """
        return self._queue.get(timeout=timeout)

    def close(self) -> None:
        """Disconnect the consumer and release a producer blocked on a full queue."""
        self._closed.set()
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break


class ChaosGameStream:
    """
    Owned producer thread feeding chaos-game points to a consumer.

    The stream must be stopped with ``stop()`` (or used as a context manager)
    before it is discarded; otherwise the producer thread keeps blocking on its
    full queue.

    Example:
        >>> with ChaosGameStream(SierpinskiTriangle()) as stream:
        ...     points = [next(stream) for _ in range(100)]
    """

    def __init__(self, game: ChaosGame, capacity: int = DEFAULT_CAPACITY,
                 name: str = "chaos_game"):
        """
        Initialize stream.

        Args:
            game: Chaos game to run on the producer thread
            capacity: Size of the bounded handoff queue
            name: Producer thread name
        """
        self.game = game
        self.capacity = capacity
        self.name = name
        self._sink: Optional[BoundedSink] = None
        self._thread: Optional[threading.Thread] = None
        self._error: Optional[BaseException] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> 'ChaosGameStream':
        if self._thread is not None:
            raise RuntimeError(f"Stream {self.name} already started")

        self._sink = BoundedSink(self.capacity)
        self._error = None
        self._thread = threading.Thread(target=self._produce, name=self.name, daemon=True)
        self._thread.start()
        logger.debug(f"Started {self.name} producer for {self.game.name}")
        return self

    def _produce(self) -> None:
        start_time = time.time()
        try:
            self.game.generate(self._sink)
        except Exception as e:
            # Reported to the owner from stop()
            self._error = e
            logger.error(f"{self.name} producer failed: {e}")
        logger.debug(f"{self.name} finished in {time.time() - start_time:.3f} seconds")

    def __iter__(self) -> Iterator[Point]:
        return self

    def __next__(self) -> Point:
        """
        Block until the producer delivers the next point.

        Raises StopIteration once the producer has exited and the queue is
        drained, or if the stream was never started or already stopped.
        """
        if self._sink is None or self._sink.closed:
            raise StopIteration
        while True:
            try:
                return self._sink.receive(timeout=POLL_INTERVAL)
            except queue.Empty:
                if not self.running:
                    raise StopIteration

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Disconnect from the producer and wait for it to exit.

        Args:
            timeout: Maximum seconds to wait for the producer (None waits forever)

        Raises:
            ChaosGameError: if the producer failed, or did not exit within ``timeout``
        """
        if self._thread is None:
            return

        self._sink.close()
        self._thread.join(timeout)
        if self._thread.is_alive():
            raise ChaosGameError(f"{self.name} producer did not stop within {timeout} seconds")

        self._thread = None
        logger.debug(f"Stopped {self.name} producer")

        if self._error is not None:
            error, self._error = self._error, None
            raise ChaosGameError(f"{self.name} producer failed: {error}") from error

    join = stop

    def __enter__(self) -> 'ChaosGameStream':
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
