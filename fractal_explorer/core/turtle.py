"""
Turtle graphics abstraction.

A turtle is a drawing head with a position, a heading and a pen. Curve
generators describe their output as a stream of ``TurtleStep`` commands which
any turtle implementation can perform; drawing the resulting line segments is
left to the concrete turtle.
"""

import math
from typing import Iterable, Iterator, List, Optional, Union
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from .geometry import Point, Vector, deg2rad


TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class Forward:
    """Move forward along the current heading."""
    distance: float


@dataclass(frozen=True)
class SetPos:
    """Jump to an absolute position."""
    position: Point


@dataclass(frozen=True)
class SetRad:
    """Set an absolute heading in radians."""
    angle: float


@dataclass(frozen=True)
class TurnRad:
    """Turn by a relative angle in radians (positive is counterclockwise)."""
    delta: float


@dataclass(frozen=True)
class PenDown:
    """Start drawing on subsequent moves."""


@dataclass(frozen=True)
class PenUp:
    """Stop drawing on subsequent moves."""


TurtleStep = Union[Forward, SetPos, SetRad, TurnRad, PenDown, PenUp]


@dataclass
class TurtleState:
    """Mutable drawing head state."""
    position: Point = field(default_factory=Point)
    angle: float = 0.0
    down: bool = True


class Turtle(ABC):
    """Abstract base class for anything that can perform turtle commands."""

    @abstractmethod
    def forward(self, distance: float) -> None:
        pass

    @abstractmethod
    def set_position(self, point: Point) -> None:
        pass

    @abstractmethod
    def set_heading_radians(self, angle: float) -> None:
        pass

    @abstractmethod
    def turn_radians(self, delta: float) -> None:
        pass

    @abstractmethod
    def pen_down(self) -> None:
        pass

    @abstractmethod
    def pen_up(self) -> None:
        pass

    def set_heading_degrees(self, degrees: float) -> None:
        self.set_heading_radians(deg2rad(degrees))

    def turn_degrees(self, degrees: float) -> None:
        self.turn_radians(deg2rad(degrees))

    def perform(self, step: TurtleStep) -> None:
        """
        Dispatch a single step to the matching primitive.

        Args:
            step: Turtle command to perform
        """
        if isinstance(step, Forward):
            self.forward(step.distance)
        elif isinstance(step, SetPos):
            self.set_position(step.position)
        elif isinstance(step, SetRad):
            self.set_heading_radians(step.angle)
        elif isinstance(step, TurnRad):
            self.turn_radians(step.delta)
        elif isinstance(step, PenDown):
            self.pen_down()
        elif isinstance(step, PenUp):
            self.pen_up()
        else:
            raise ValueError(f"Unknown turtle step: {step!r}")


class TrackingTurtle(Turtle):
    """
    Turtle that tracks its state and reports the segments it traces.

    Subclasses override ``on_segment`` to draw; the base implementation only
    keeps the state up to date.
    """

    def __init__(self, state: Optional[TurtleState] = None):
        self.state = state if state is not None else TurtleState()

    def forward(self, distance: float) -> None:
        start = self.state.position
        end = start.point_at(Vector(self.state.angle, distance))
        self.state.position = end
        if self.state.down:
            self.on_segment(start, end)

    def set_position(self, point: Point) -> None:
        self.state.position = point

    def set_heading_radians(self, angle: float) -> None:
        self.state.angle = angle

    def turn_radians(self, delta: float) -> None:
        self.state.angle = (self.state.angle + delta) % TWO_PI

    def pen_down(self) -> None:
        self.state.down = True

    def pen_up(self) -> None:
        self.state.down = False

    def on_segment(self, start: Point, end: Point) -> None:
        """Called for every forward move made with the pen down."""
        pass


def group_until_next_forward(steps: Iterable[TurtleStep]) -> Iterator[List[TurtleStep]]:
    """
    Split a step sequence into chunks that each end with a ``Forward``.

    Trailing steps after the last ``Forward`` form a final partial chunk. An
    empty sequence yields nothing.

    Args:
        steps: Turtle steps

    Yields:
        Lists of steps, each producing at most one visible segment
    """
    chunk = []
    for step in steps:
        chunk.append(step)
        if isinstance(step, Forward):
            yield chunk
            chunk = []
    if chunk:
        yield chunk


class TurtleProgram(ABC):
    """A restartable description of a turtle drawing."""

    @abstractmethod
    def init_steps(self) -> List[TurtleStep]:
        """Steps that position and orient the turtle before drawing."""
        pass

    @abstractmethod
    def steps(self) -> Iterator[TurtleStep]:
        """
        Fresh lazy iterator over the body of the drawing.

        Every call starts from the beginning.
        """
        pass

    def group_until_next_forward(self) -> Iterator[List[TurtleStep]]:
        """Body steps grouped into one chunk per visible segment."""
        return group_until_next_forward(self.steps())
