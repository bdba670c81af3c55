import itertools
import threading
import time

import pytest

from fractal_explorer.acceleration.streaming import BoundedSink, ChaosGameError, ChaosGameStream
from fractal_explorer.core.chaos_game import ChaosGame, SierpinskiTriangle
from fractal_explorer.core.geometry import Point


class CountingGame(ChaosGame):
    name = "Counting"

    def __init__(self):
        super().__init__(seed=0)
        self.moves = 0

    def next_point(self) -> Point:
        self.moves += 1
        return Point(float(self.moves), 0.0)

    def reset(self) -> None:
        self.moves = 0


class FailingGame(CountingGame):
    name = "Failing"

    def next_point(self) -> Point:
        if self.moves == 3:
            raise RuntimeError("boom")
        return super().next_point()


class TestBoundedSink:
    def test_send_and_receive_in_order(self) -> None:
        sink = BoundedSink(2)
        assert sink.send(Point(1.0, 0.0))
        assert sink.send(Point(2.0, 0.0))
        assert sink.receive(timeout=1) == Point(1.0, 0.0)
        assert sink.receive(timeout=1) == Point(2.0, 0.0)

    def test_send_fails_after_close(self) -> None:
        sink = BoundedSink(2)
        sink.send(Point())
        sink.close()
        assert sink.closed
        assert sink.send(Point()) is False

    def test_invalid_capacity(self) -> None:
        with pytest.raises(ValueError):
            BoundedSink(0)


class TestChaosGameStream:
    def test_points_arrive_in_order(self) -> None:
        with ChaosGameStream(CountingGame()) as stream:
            points = list(itertools.islice(stream, 50))
        assert [point.x for point in points] == [float(i) for i in range(1, 51)]

    def test_stop_joins_producer(self) -> None:
        stream = ChaosGameStream(SierpinskiTriangle(seed=1)).start()
        next(stream)
        assert stream.running
        stream.stop(timeout=5)
        assert not stream.running

    def test_producer_is_bounded(self) -> None:
        game = CountingGame()
        stream = ChaosGameStream(game, capacity=10).start()
        time.sleep(0.3)
        # Ten queued points plus the one blocked in send
        assert game.moves <= 11
        stream.stop(timeout=5)

    def test_iteration_ends_after_stop(self) -> None:
        stream = ChaosGameStream(CountingGame()).start()
        stream.stop(timeout=5)
        with pytest.raises(StopIteration):
            next(stream)

    def test_unstarted_stream_is_empty(self) -> None:
        assert list(ChaosGameStream(CountingGame())) == []

    def test_producer_failure_is_reported(self) -> None:
        stream = ChaosGameStream(FailingGame()).start()
        points = list(stream)
        assert len(points) == 3

        with pytest.raises(ChaosGameError) as exc_info:
            stream.stop(timeout=5)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_restart_after_stop(self) -> None:
        stream = ChaosGameStream(SierpinskiTriangle(seed=6))
        stream.start()
        stream.stop(timeout=5)
        stream.start()
        assert isinstance(next(stream), Point)
        stream.join(timeout=5)

    def test_double_start(self) -> None:
        with ChaosGameStream(CountingGame()) as stream:
            with pytest.raises(RuntimeError):
                stream.start()


class TestBoundedSinkRelease:
    def test_close_releases_producer_waiting_on_full_queue(self) -> None:
        sink = BoundedSink(1)
        sink.send(Point())
        results = []
        producer = threading.Thread(target=lambda: results.append(sink.send(Point(1.0, 1.0))))
        producer.start()
        time.sleep(0.1)
        assert producer.is_alive()

        sink.close()
        producer.join(timeout=1)
        assert not producer.is_alive()
        assert results == [False]
