"""
Escape-time fractals.

An escape-time fractal iterates a complex function starting from z = 0 for
each point c under test. Points whose orbit leaves the circle of radius 2 are
outside the set; the iteration at which they leave drives the coloring.
"""

from typing import Dict, Tuple, Type, Union
from abc import ABC, abstractmethod
import logging

from .geometry import Point, cpow

logger = logging.getLogger(__name__)

ESCAPE_RADIUS = 2.0


def _validate_positive(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


class EscapeTimeFractal(ABC):
    """Abstract base class for escape-time fractals."""

    name = "Escape-time fractal"

    def __init__(self, max_iterations: int = 100, power: int = 2):
        """
        Initialize escape-time fractal.

        Args:
            max_iterations: Iterations before a point is considered bounded (>= 1)
            power: Exponent applied to z on every iteration (>= 1)
        """
        self.max_iterations = _validate_positive("max_iterations", max_iterations)
        self.power = _validate_positive("power", power)

    @abstractmethod
    def default_view_area(self) -> Tuple[Point, Point]:
        """Suggested initial Cartesian viewing rectangle as two corners."""
        pass

    @abstractmethod
    def iterate(self, c: complex, z: complex) -> complex:
        """One step of the update rule."""
        pass

    def classify(self, point: Union[Point, complex]) -> Tuple[bool, int]:
        """
        Test whether a point escapes.

        Args:
            point: Point in the complex plane

        Returns:
            (escaped, iterations): escaped points report the iteration at which
            |z| first reached 2; bounded points report max_iterations
        """
        c = point.to_complex() if isinstance(point, Point) else complex(point)
        z = complex(0.0, 0.0)
        for i in range(self.max_iterations):
            z = self.iterate(c, z)
            if abs(z) >= ESCAPE_RADIUS:
                return True, i
        return False, self.max_iterations

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(max_iterations={self.max_iterations}, "
                f"power={self.power})")


class Mandelbrot(EscapeTimeFractal):
    """Mandelbrot set: z' = z^p + c."""

    name = "Mandelbrot"

    def default_view_area(self) -> Tuple[Point, Point]:
        return Point(-2.5, 1.0), Point(1.0, -1.0)

    def iterate(self, c: complex, z: complex) -> complex:
        return cpow(z, self.power) + c


class BurningShip(EscapeTimeFractal):
    """Burning Ship: z' = (|Re z| - |Im z| i)^p + c."""

    name = "Burning Ship"

    def default_view_area(self) -> Tuple[Point, Point]:
        return Point(-2.5, 2.0), Point(1.5, -1.0)

    def iterate(self, c: complex, z: complex) -> complex:
        return cpow(complex(abs(z.real), -abs(z.imag)), self.power) + c


class BurningMandel(EscapeTimeFractal):
    """Burning Ship variation with only the real part folded: z' = (|Re z| - Im z i)^p + c."""

    name = "Burning Mandel"

    def default_view_area(self) -> Tuple[Point, Point]:
        return Point(-2.5, 1.0), Point(1.5, -1.0)

    def iterate(self, c: complex, z: complex) -> complex:
        return cpow(complex(abs(z.real), -z.imag), self.power) + c


class RoadRunner(EscapeTimeFractal):
    """Burning Ship variation with only the imaginary part folded: z' = (Re z - |Im z| i)^p + c."""

    name = "Roadrunner"

    def default_view_area(self) -> Tuple[Point, Point]:
        return Point(-2.5, 1.5), Point(1.5, -1.5)

    def iterate(self, c: complex, z: complex) -> complex:
        return cpow(complex(z.real, -abs(z.imag)), self.power) + c


ESCAPE_TIME_FRACTALS: Dict[str, Type[EscapeTimeFractal]] = {
    'burningmandel': BurningMandel,
    'burningship': BurningShip,
    'mandelbrot': Mandelbrot,
    'roadrunner': RoadRunner,
}


def lookup_escape_time_fractal(name: str, max_iterations: int, power: int = 2) -> EscapeTimeFractal:
    """
    Construct an escape-time fractal by identifier.

    Args:
        name: Fractal identifier, e.g. 'mandelbrot'
        max_iterations: Iteration limit (>= 1)
        power: Exponent (>= 1)

    Returns:
        Configured escape-time fractal
    """
    fractal_class = ESCAPE_TIME_FRACTALS.get(name.lower())
    if fractal_class is None:
        available = ', '.join(ESCAPE_TIME_FRACTALS.keys())
        raise ValueError(f"Unknown escape-time fractal '{name}'. Available: {available}")

    fractal = fractal_class(max_iterations=max_iterations, power=power)
    logger.debug(f"Created {fractal!r}")
    return fractal
