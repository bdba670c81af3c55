import math
from typing import List, Tuple

import pytest

from fractal_explorer.core.geometry import Point
from fractal_explorer.core.turtle import (
    Forward, PenDown, PenUp, SetPos, SetRad, TrackingTurtle, TurnRad, TurtleState,
    group_until_next_forward,
)


class RecordingTurtle(TrackingTurtle):
    def __init__(self):
        super().__init__()
        self.segments: List[Tuple[Point, Point]] = []

    def on_segment(self, start: Point, end: Point) -> None:
        self.segments.append((start, end))


class TestGroupUntilNextForward:
    def test_chunks_end_with_forward(self) -> None:
        steps = [Forward(1.0), TurnRad(9.0), Forward(2.0)]
        assert list(group_until_next_forward(steps)) == [
            [Forward(1.0)],
            [TurnRad(9.0), Forward(2.0)],
        ]

    def test_empty(self) -> None:
        assert list(group_until_next_forward([])) == []

    def test_trailing_steps_form_partial_chunk(self) -> None:
        steps = [Forward(1.0), TurnRad(-1.0)]
        assert list(group_until_next_forward(steps)) == [[Forward(1.0)], [TurnRad(-1.0)]]

    def test_no_forward_at_all(self) -> None:
        steps = [PenUp(), TurnRad(1.0), PenDown()]
        assert list(group_until_next_forward(steps)) == [steps]

    def test_lazy_over_infinite_input(self) -> None:
        def forever():
            while True:
                yield TurnRad(0.5)
                yield Forward(1.0)

        chunks = group_until_next_forward(forever())
        assert next(chunks) == [TurnRad(0.5), Forward(1.0)]
        assert next(chunks) == [TurnRad(0.5), Forward(1.0)]


class TestTrackingTurtle:
    def test_initial_state(self) -> None:
        state = TrackingTurtle().state
        assert state == TurtleState(Point(0.0, 0.0), 0.0, True)

    def test_forward_moves_along_heading(self) -> None:
        turtle = RecordingTurtle()
        turtle.forward(1.0)
        turtle.set_heading_degrees(90.0)
        turtle.forward(2.0)

        assert turtle.state.position.x == pytest.approx(1.0)
        assert turtle.state.position.y == pytest.approx(2.0)
        assert len(turtle.segments) == 2
        assert turtle.segments[0] == (Point(0.0, 0.0), Point(1.0, 0.0))

    def test_pen_up_draws_nothing(self) -> None:
        turtle = RecordingTurtle()
        turtle.pen_up()
        turtle.forward(5.0)
        assert turtle.segments == []
        assert turtle.state.position == Point(5.0, 0.0)

        turtle.pen_down()
        turtle.forward(1.0)
        assert turtle.segments == [(Point(5.0, 0.0), Point(6.0, 0.0))]

    def test_turn_wraps_into_full_circle(self) -> None:
        turtle = TrackingTurtle()
        turtle.turn_radians(3.0 * math.pi)
        assert turtle.state.angle == pytest.approx(math.pi)

        turtle.turn_radians(-2.0 * math.pi - 0.5)
        assert 0.0 <= turtle.state.angle < 2.0 * math.pi
        assert turtle.state.angle == pytest.approx(math.pi - 0.5)

    def test_turn_degrees(self) -> None:
        turtle = TrackingTurtle()
        turtle.turn_degrees(-90.0)
        assert turtle.state.angle == pytest.approx(1.5 * math.pi)


class TestPerform:
    def test_dispatches_every_step(self) -> None:
        turtle = RecordingTurtle()
        for step in [SetPos(Point(1.0, 1.0)), SetRad(math.pi / 2.0), PenUp(),
                     Forward(1.0), PenDown(), TurnRad(-math.pi / 2.0), Forward(1.0)]:
            turtle.perform(step)

        assert turtle.state.position.x == pytest.approx(2.0)
        assert turtle.state.position.y == pytest.approx(2.0)
        assert turtle.state.down is True
        assert len(turtle.segments) == 1

    def test_unknown_step(self) -> None:
        with pytest.raises(ValueError):
            TrackingTurtle().perform("forward")
