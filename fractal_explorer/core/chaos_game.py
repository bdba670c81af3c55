"""
Chaos games: randomized iterated function systems.

A chaos game repeatedly picks a random rule, applies it to its current point
and emits the result. The emitted points converge onto the game's attractor,
so drawing enough of them reveals the fractal.
"""

from typing import List, Optional, Tuple
from abc import ABC, abstractmethod
import logging

import numpy as np

from .geometry import AffineTransform, Point

logger = logging.getLogger(__name__)


class PointSink(ABC):
    """Destination for generated points."""

    @abstractmethod
    def send(self, point: Point) -> bool:
        """
        Deliver a point.

        Returns:
            False once the receiving side has gone away
        """
        pass


class ChaosGame(ABC):
    """Abstract base class for chaos games."""

    name = "Chaos game"

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize chaos game.

        Args:
            seed: Seed for the random generator (None for fresh entropy)
        """
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    @abstractmethod
    def next_point(self) -> Point:
        """Advance the game by one move and return the point to draw."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Reinitialize the game's internal random state."""
        pass

    def generate(self, sink: PointSink) -> None:
        """
        Produce points into ``sink`` until it reports the receiver is gone.

        Args:
            sink: Point destination
        """
        moves = 0
        while sink.send(self.next_point()):
            moves += 1
        logger.debug(f"{self.name} stopped after {moves} delivered points")

    def take(self, count: int) -> List[Point]:
        """Synchronously generate ``count`` points."""
        return [self.next_point() for _ in range(count)]


# Barnsley's reference fern: stem, successively smaller leaflets, largest
# left leaflet, largest right leaflet.
BARNSLEY_TRANSFORMS: Tuple[AffineTransform, ...] = (
    AffineTransform(((0.0, 0.0, 0.0), (0.0, 0.16, 0.0))),
    AffineTransform(((0.85, 0.04, 0.0), (-0.04, 0.85, 1.6))),
    AffineTransform(((0.2, -0.26, 0.0), (0.23, 0.22, 1.6))),
    AffineTransform(((-0.15, 0.28, 0.0), (0.26, 0.24, 0.44))),
)
BARNSLEY_WEIGHTS: Tuple[int, ...] = (1, 85, 7, 7)

# The fern spans roughly 10 units vertically
BARNSLEY_DISPLAY_SCALE = 10.0


class BarnsleyFern(ChaosGame):
    """
    Barnsley fern.

    Each move applies one of a fixed set of affine transforms, chosen with
    probability proportional to its weight.
    """

    name = "Barnsley Fern"

    def __init__(self, transforms: Tuple[AffineTransform, ...] = BARNSLEY_TRANSFORMS,
                 weights: Tuple[int, ...] = BARNSLEY_WEIGHTS, seed: Optional[int] = None):
        """
        Initialize Barnsley fern.

        Args:
            transforms: Affine transforms to choose between
            weights: Relative probability of each transform (positive)
            seed: Seed for the random generator
        """
        super().__init__(seed)
        if len(transforms) != len(weights):
            raise ValueError(f"Got {len(transforms)} transforms but {len(weights)} weights")
        if not transforms:
            raise ValueError("At least one transform is required")
        if any(weight <= 0 for weight in weights):
            raise ValueError(f"Weights must be positive: {weights}")

        self.transforms = tuple(transforms)
        self.weights = tuple(weights)
        total = float(sum(weights))
        self._probabilities = np.array([weight / total for weight in weights])
        self.current = Point(0.0, 0.0)

    def reset(self) -> None:
        self.current = Point(0.0, 0.0)

    def choose_transform(self) -> AffineTransform:
        index = self.rng.choice(len(self.transforms), p=self._probabilities)
        return self.transforms[index]

    def next_point(self) -> Point:
        self.current = self.choose_transform().apply(self.current)
        return Point(self.current.x / BARNSLEY_DISPLAY_SCALE,
                     self.current.y / BARNSLEY_DISPLAY_SCALE)


class SierpinskiTriangle(ChaosGame):
    """
    Sierpiński triangle from three random vertices.

    Each move jumps halfway from the current point towards a uniformly chosen
    vertex.
    """

    name = "Sierpiński Triangle"

    def __init__(self, seed: Optional[int] = None):
        super().__init__(seed)
        self.vertices: Tuple[Point, Point, Point] = (Point(), Point(), Point())
        self.current = Point()
        self.reset()

    def reset(self) -> None:
        """Pick three new vertices in [-1, 1) x [-1, 1) and restart from their centroid."""
        self.vertices = tuple(
            Point(float(self.rng.uniform(-1.0, 1.0)), float(self.rng.uniform(-1.0, 1.0)))
            for _ in range(3)
        )
        self.current = Point(
            sum(vertex.x for vertex in self.vertices) / 3.0,
            sum(vertex.y for vertex in self.vertices) / 3.0,
        )
        self.current = self._halfway_to_random_vertex()
        logger.debug(f"Sierpinski vertices: {self.vertices}")

    def _halfway_to_random_vertex(self) -> Point:
        vertex = self.vertices[int(self.rng.integers(len(self.vertices)))]
        return Point((self.current.x + vertex.x) / 2.0, (self.current.y + vertex.y) / 2.0)

    def next_point(self) -> Point:
        self.current = self._halfway_to_random_vertex()
        return self.current


CHAOS_GAMES = {
    'barnsleyfern': BarnsleyFern,
    'sierpinski': SierpinskiTriangle,
}


def lookup_chaos_game(name: str, seed: Optional[int] = None) -> ChaosGame:
    """
    Construct a chaos game by identifier.

    Args:
        name: Game identifier, e.g. 'sierpinski'
        seed: Seed for the random generator

    Returns:
        Chaos game instance
    """
    game_class = CHAOS_GAMES.get(name.lower())
    if game_class is None:
        available = ', '.join(CHAOS_GAMES.keys())
        raise ValueError(f"Unknown chaos game '{name}'. Available: {available}")
    return game_class(seed=seed)
