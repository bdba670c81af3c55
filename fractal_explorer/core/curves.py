"""
Turtle curve definitions.

Each curve is a restartable ``TurtleProgram`` for a fixed iteration count.
The dragon curve computes its turns arithmetically; the remaining curves are
Lindenmayer systems whose symbols are interpreted one at a time into turtle
steps. Forward distances shrink with the iteration count so that every curve
spans roughly the same unit baseline.
"""

import math
from typing import Dict, Iterator, List, Tuple, Type
from abc import abstractmethod
from enum import Enum
import logging

from .geometry import Point, deg2rad
from .lindenmayer import LindenmayerSystem
from .turtle import (
    Forward, PenDown, SetPos, SetRad, TurnRad, TurtleProgram, TurtleStep,
)

logger = logging.getLogger(__name__)


def _validate_iterations(iterations: int) -> int:
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        raise ValueError(f"iteration must be an integer, got {iterations!r}")
    if iterations < 0:
        raise ValueError(f"iteration must be non-negative, got {iterations}")
    return iterations


class Turn(Enum):
    """Direction of a dragon curve fold."""
    LEFT = 'left'
    RIGHT = 'right'


class DragonCurve(TurtleProgram):
    """
    Heighway dragon curve.

    Iteration N folds a unit segment in half N times, giving 2^N segments that
    start at the origin and end near (1, 0).
    """

    name = "Dragon"

    def __init__(self, iterations: int):
        self.iterations = _validate_iterations(iterations)

    def number_of_steps(self) -> int:
        """Number of line segments drawn."""
        if self.iterations == 0:
            return 1
        return 2 ** self.iterations

    @staticmethod
    def turn_after_step(step: int) -> Turn:
        """
        Direction to turn after the given 1-based forward step.

        Args:
            step: Step index

        Returns:
            LEFT when the step index with all factors of two removed is 1 mod 4
        """
        step_without_twos = step
        while step_without_twos != 0 and step_without_twos % 2 == 0:
            step_without_twos //= 2
        if step_without_twos % 4 == 1:
            return Turn.LEFT
        return Turn.RIGHT

    def lines_between_endpoints(self) -> float:
        """Ratio between the endpoint distance and one segment's length."""
        if self.iterations == 0:
            return 1.0
        return math.sqrt(2.0) ** self.iterations

    def init_steps(self) -> List[TurtleStep]:
        return [
            SetPos(Point(0.0, 0.0)),
            SetRad(math.pi / 4.0 * -self.iterations),
            PenDown(),
        ]

    def steps(self) -> Iterator[TurtleStep]:
        segment = 1.0 / self.lines_between_endpoints()
        for step in range(1, self.number_of_steps() + 1):
            yield Forward(segment)
            if self.turn_after_step(step) is Turn.LEFT:
                yield TurnRad(math.pi / 2.0)
            else:
                yield TurnRad(-math.pi / 2.0)


class LindenmayerCurve(LindenmayerSystem[str], TurtleProgram):
    """
    Turtle program whose body is an interpreted Lindenmayer generation.

    Subclasses describe themselves with data: ``AXIOM`` and ``RULES`` define
    the rewriting system, ``TURNS`` maps turn symbols to angles in degrees
    and ``forward_length`` gives the length of an ``F`` step. Symbols without
    a rule rewrite to themselves.
    """

    name = "Lindenmayer curve"
    AXIOM: Tuple[str, ...] = ()
    RULES: Dict[str, Tuple[str, ...]] = {}
    TURNS: Dict[str, float] = {}

    def __init__(self, iterations: int):
        self.iterations = _validate_iterations(iterations)
        self._symbols = None
        self._interpretation = None

    def initial(self) -> List[str]:
        return list(self.AXIOM)

    def apply_rule(self, symbol: str) -> List[str]:
        return list(self.RULES.get(symbol, (symbol,)))

    @abstractmethod
    def forward_length(self) -> float:
        """Length of one forward step at this iteration."""
        pass

    def initial_position(self) -> Point:
        return Point(0.0, 0.0)

    def initial_heading(self) -> float:
        return 0.0

    def symbol_steps(self) -> Dict[str, TurtleStep]:
        """Mapping from every drawable symbol to its turtle step."""
        steps = {symbol: TurnRad(deg2rad(angle)) for symbol, angle in self.TURNS.items()}
        steps['F'] = Forward(self.forward_length())
        return steps

    def interpret_symbol(self, symbol: str) -> TurtleStep:
        """
        Translate one symbol into a turtle step.

        Args:
            symbol: Symbol from the curve's alphabet

        Returns:
            The corresponding turtle step
        """
        if self._interpretation is None:
            self._interpretation = self.symbol_steps()
        try:
            return self._interpretation[symbol]
        except KeyError:
            raise ValueError(f"{self.name} has no interpretation for symbol '{symbol}'") from None

    def symbols(self) -> List[str]:
        """Generation for this curve's iteration count, computed once."""
        if self._symbols is None:
            self._symbols = self.generate(self.iterations)
        return self._symbols

    def init_steps(self) -> List[TurtleStep]:
        return [
            SetPos(self.initial_position()),
            SetRad(self.initial_heading()),
            PenDown(),
        ]

    def steps(self) -> Iterator[TurtleStep]:
        return (self.interpret_symbol(symbol) for symbol in self.symbols())


class KochCurve(LindenmayerCurve):
    """Koch snowflake built from three Koch curves."""

    name = "Koch Curve"
    AXIOM = ('F', 'L', 'L', 'F', 'L', 'L', 'F')
    RULES = {'F': ('F', 'R', 'F', 'L', 'L', 'F', 'R', 'F')}
    TURNS = {'L': 60.0, 'R': -60.0}

    def forward_length(self) -> float:
        return 1.0 / 2.0 / 3.0 ** self.iterations


class LevyCCurve(LindenmayerCurve):
    """Lévy C curve."""

    name = "Lévy C Curve"
    AXIOM = ('F',)
    RULES = {'F': ('L', 'F', 'R', 'R', 'F', 'L')}
    TURNS = {'L': 45.0, 'R': -45.0}

    def lines_between_endpoints(self) -> float:
        if self.iterations == 0:
            return 1.0
        return math.sqrt(2.0) ** self.iterations

    def forward_length(self) -> float:
        return 1.0 / self.lines_between_endpoints() / 2.0


class CesaroCurve(LindenmayerCurve):
    """Square Cesàro fractal: four Cesàro curves around a square."""

    name = "Cesàro"
    AXIOM = ('F', 'Q', 'F', 'Q', 'F', 'Q', 'F', 'Q')
    RULES = {'F': ('F', 'L', 'F', 'R', 'R', 'F', 'L', 'F')}
    TURNS = {'Q': 90.0, 'L': 85.0, 'R': -85.0}

    def forward_length(self) -> float:
        return 1.0 / 2.2 ** self.iterations

    def initial_position(self) -> Point:
        return Point(0.0, -0.5)


class CesaroTriangleCurve(LindenmayerCurve):
    """
    Triangular Cesàro fractal.

    The outline is an isosceles triangle whose sides are each replaced by a
    Cesàro curve. ``F1`` runs along the hypotenuse and ``F2``/``F3`` along the
    two equal sides, so they carry different segment lengths.
    """

    name = "Cesàro Triangle"
    BASE_ANGLE = 85.0
    AXIOM = ('F1', 'Q1', 'F2', 'Q2', 'F3', 'Q3')
    RULES = {
        'F1': ('F1', 'L', 'F1', 'R', 'R', 'F1', 'L', 'F1'),
        'F2': ('F2', 'L', 'F2', 'R', 'R', 'F2', 'L', 'F2'),
        'F3': ('F3', 'L', 'F3', 'R', 'R', 'F3', 'L', 'F3'),
    }

    def hypotenuse_unit(self) -> float:
        base_angle_rads = math.radians(self.BASE_ANGLE)
        return 1.0 / (2.0 * (1.0 + math.sin(math.pi - 2.0 * base_angle_rads))) ** self.iterations

    def side_unit(self) -> float:
        base_angle_rads = math.radians(self.BASE_ANGLE)
        return self.hypotenuse_unit() / 2.0 / math.cos(base_angle_rads / 2.0)

    def forward_length(self) -> float:
        return self.hypotenuse_unit()

    def symbol_steps(self) -> Dict[str, TurtleStep]:
        side_angle = self.BASE_ANGLE / 2.0
        top_angle = 180.0 - 2.0 * side_angle
        side_unit = self.side_unit()
        return {
            'F1': Forward(self.hypotenuse_unit()),
            'F2': Forward(side_unit),
            'F3': Forward(side_unit),
            'Q1': TurnRad(deg2rad(180.0 - side_angle)),
            'Q2': TurnRad(deg2rad(180.0 - top_angle)),
            'Q3': TurnRad(deg2rad(180.0 - side_angle)),
            'L': TurnRad(deg2rad(self.BASE_ANGLE)),
            'R': TurnRad(deg2rad(-self.BASE_ANGLE)),
        }


class TerdragonCurve(LindenmayerCurve):
    """Terdragon: each segment is replaced by three segments at 120 degrees."""

    name = "Terdragon"
    AXIOM = ('F',)
    RULES = {'F': ('F', 'L', 'F', 'R', 'F')}
    TURNS = {'L': 120.0, 'R': -120.0}

    def number_of_steps(self) -> int:
        return 3 ** self.iterations

    def lines_between_endpoints(self) -> float:
        if self.iterations == 0:
            return 1.0
        return math.sqrt(3.0) ** self.iterations

    def forward_length(self) -> float:
        return 1.0 / self.lines_between_endpoints()

    def initial_heading(self) -> float:
        return math.pi / 6.0 * -self.iterations


TURTLE_CURVES: Dict[str, Type[TurtleProgram]] = {
    'cesaro': CesaroCurve,
    'cesarotri': CesaroTriangleCurve,
    'dragon': DragonCurve,
    'kochcurve': KochCurve,
    'levyccurve': LevyCCurve,
    'terdragon': TerdragonCurve,
}


def lookup_turtle_program(name: str, iterations: int) -> TurtleProgram:
    """
    Construct a turtle curve by identifier.

    Args:
        name: Curve identifier, e.g. 'dragon'
        iterations: Iteration count (>= 0)

    Returns:
        Configured turtle program
    """
    curve_class = TURTLE_CURVES.get(name.lower())
    if curve_class is None:
        available = ', '.join(TURTLE_CURVES.keys())
        raise ValueError(f"Unknown turtle curve '{name}'. Available: {available}")

    program = curve_class(iterations)
    logger.debug(f"Created turtle program {name} at iteration {iterations}")
    return program
