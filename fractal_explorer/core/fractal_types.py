"""
Fractal selection and construction.

This module defines the closed set of fractals the explorer can draw. Each
selection carries a display name, a description and the category that decides
which configuration it takes and which engine builds it.
"""

from typing import Dict, Optional, Union
from dataclasses import dataclass
from enum import Enum

from .chaos_game import ChaosGame, lookup_chaos_game
from .curves import lookup_turtle_program
from .escape_time import EscapeTimeFractal, lookup_escape_time_fractal
from .turtle import TurtleProgram


class FractalCategory(Enum):
    """Generative technique behind a fractal."""
    CHAOS_GAME = 'chaos_game'
    ESCAPE_TIME = 'escape_time'
    TURTLE_CURVE = 'turtle_curve'


@dataclass(frozen=True)
class FractalInfo:
    """Human-readable metadata for a selectable fractal."""
    display_name: str
    description: str
    category: FractalCategory


class SelectedFractal(Enum):
    """Identifiers of every drawable fractal."""
    BARNSLEY_FERN = 'barnsleyfern'
    BURNING_MANDEL = 'burningmandel'
    BURNING_SHIP = 'burningship'
    CESARO = 'cesaro'
    CESARO_TRIANGLE = 'cesarotri'
    DRAGON = 'dragon'
    KOCH_CURVE = 'kochcurve'
    LEVY_C_CURVE = 'levyccurve'
    MANDELBROT = 'mandelbrot'
    ROAD_RUNNER = 'roadrunner'
    SIERPINSKI = 'sierpinski'
    TERDRAGON = 'terdragon'

    @property
    def info(self) -> FractalInfo:
        return FRACTAL_INFO[self]

    @property
    def display_name(self) -> str:
        return self.info.display_name

    @property
    def description(self) -> str:
        return self.info.description

    @property
    def category(self) -> FractalCategory:
        return self.info.category

    @classmethod
    def parse(cls, identifier: Union[str, 'SelectedFractal']) -> 'SelectedFractal':
        """
        Look up a selection by identifier.

        Args:
            identifier: Identifier such as 'dragon' (case-insensitive)

        Returns:
            Matching selection
        """
        if isinstance(identifier, cls):
            return identifier
        try:
            return cls(identifier.lower())
        except (ValueError, AttributeError):
            available = ', '.join(selected.value for selected in cls)
            raise ValueError(f"Unknown fractal type '{identifier}'. Available: {available}") from None


FRACTAL_INFO: Dict[SelectedFractal, FractalInfo] = {
    SelectedFractal.BARNSLEY_FERN: FractalInfo(
        "Barnsley Fern",
        "Draws the Barnsley Fern fractal using a chaos game with affine transforms.",
        FractalCategory.CHAOS_GAME,
    ),
    SelectedFractal.BURNING_MANDEL: FractalInfo(
        "Burning Mandel",
        "Draws a variation of the burning ship fractal",
        FractalCategory.ESCAPE_TIME,
    ),
    SelectedFractal.BURNING_SHIP: FractalInfo(
        "Burning Ship",
        "Draws the burning ship fractal",
        FractalCategory.ESCAPE_TIME,
    ),
    SelectedFractal.CESARO: FractalInfo(
        "Cesàro",
        "Draws a square Cesàro fractal",
        FractalCategory.TURTLE_CURVE,
    ),
    SelectedFractal.CESARO_TRIANGLE: FractalInfo(
        "Cesàro Triangle",
        "Draws a triangle Cesàro fractal",
        FractalCategory.TURTLE_CURVE,
    ),
    SelectedFractal.DRAGON: FractalInfo(
        "Dragon",
        "Draws a dragon curve fractal",
        FractalCategory.TURTLE_CURVE,
    ),
    SelectedFractal.KOCH_CURVE: FractalInfo(
        "Koch Curve",
        "Draws a Koch snowflake curve",
        FractalCategory.TURTLE_CURVE,
    ),
    SelectedFractal.LEVY_C_CURVE: FractalInfo(
        "Lévy C Curve",
        "Draws a Lévy C Curve",
        FractalCategory.TURTLE_CURVE,
    ),
    SelectedFractal.MANDELBROT: FractalInfo(
        "Mandelbrot",
        "Draws the mandelbrot fractal",
        FractalCategory.ESCAPE_TIME,
    ),
    SelectedFractal.ROAD_RUNNER: FractalInfo(
        "Roadrunner",
        "Draws a variation of the burning ship fractal",
        FractalCategory.ESCAPE_TIME,
    ),
    SelectedFractal.SIERPINSKI: FractalInfo(
        "Sierpiński Triangle",
        "Draws a Sierpiński triangle using a chaos game and 3 randomly chosen points on the screen",
        FractalCategory.CHAOS_GAME,
    ),
    SelectedFractal.TERDRAGON: FractalInfo(
        "Terdragon",
        "Draws a terdragon curve",
        FractalCategory.TURTLE_CURVE,
    ),
}


def _require_category(selected: SelectedFractal, category: FractalCategory) -> None:
    if selected.category is not category:
        raise ValueError(
            f"{selected.display_name} is a {selected.category.value.replace('_', ' ')} fractal, "
            f"not a {category.value.replace('_', ' ')} fractal"
        )


def create_chaos_game(selected: Union[str, SelectedFractal],
                      seed: Optional[int] = None) -> ChaosGame:
    """
    Build a chaos game.

    Args:
        selected: Chaos-game selection
        seed: Seed for the random generator

    Returns:
        Chaos game instance
    """
    selected = SelectedFractal.parse(selected)
    _require_category(selected, FractalCategory.CHAOS_GAME)
    return lookup_chaos_game(selected.value, seed=seed)


def create_escape_time_fractal(selected: Union[str, SelectedFractal],
                               max_iterations: int, power: int = 2) -> EscapeTimeFractal:
    """
    Build an escape-time fractal.

    Args:
        selected: Escape-time selection
        max_iterations: Iteration limit (>= 1)
        power: Exponent (>= 1)

    Returns:
        Escape-time fractal instance
    """
    selected = SelectedFractal.parse(selected)
    _require_category(selected, FractalCategory.ESCAPE_TIME)
    return lookup_escape_time_fractal(selected.value, max_iterations, power)


def create_turtle_program(selected: Union[str, SelectedFractal], iteration: int) -> TurtleProgram:
    """
    Build a turtle curve program.

    Args:
        selected: Turtle-curve selection
        iteration: Iteration count (>= 0)

    Returns:
        Turtle program instance
    """
    selected = SelectedFractal.parse(selected)
    _require_category(selected, FractalCategory.TURTLE_CURVE)
    return lookup_turtle_program(selected.value, iteration)


class FractalRegistry:
    """Read-only view over the available fractals."""

    @classmethod
    def get(cls, name: str) -> SelectedFractal:
        return SelectedFractal.parse(name)

    @classmethod
    def list_fractals(cls, category: Optional[FractalCategory] = None) -> Dict[str, FractalInfo]:
        """
        Get available fractals keyed by identifier, sorted by identifier.

        Args:
            category: Only list fractals of this category

        Returns:
            Mapping of identifier to metadata
        """
        return {
            selected.value: selected.info
            for selected in sorted(SelectedFractal, key=lambda s: s.value)
            if category is None or selected.category is category
        }
