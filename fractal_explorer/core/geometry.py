"""
Geometric primitives and coordinate transforms.

This module provides the Cartesian point and polar vector value types, 2-D
affine transforms, exact complex exponentiation, and the transformer that maps
between a pixel viewport and a visible Cartesian rectangle.
"""

import math
from typing import Tuple
from dataclasses import dataclass


Pixel = Tuple[float, float]


def deg2rad(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees / 360.0 * 2.0 * math.pi


@dataclass(frozen=True)
class Vector:
    """Displacement in polar form: a direction in radians and a magnitude."""
    direction: float
    magnitude: float

    @property
    def delta_x(self) -> float:
        return math.cos(self.direction) * self.magnitude

    @property
    def delta_y(self) -> float:
        return math.sin(self.direction) * self.magnitude


@dataclass(frozen=True)
class Point:
    """A location in the abstract Cartesian plane (not pixels)."""
    x: float = 0.0
    y: float = 0.0

    def distance_to(self, other: 'Point') -> float:
        """Euclidean distance between this point and another."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def point_at(self, vector: Vector) -> 'Point':
        """Translate this point by a polar vector."""
        return Point(self.x + vector.delta_x, self.y + vector.delta_y)

    def to_complex(self) -> complex:
        """Interpret the point as ``x + yi``."""
        return complex(self.x, self.y)

    @classmethod
    def from_complex(cls, value: complex) -> 'Point':
        """Create a point from a complex number."""
        return cls(value.real, value.imag)


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return p1.distance_to(p2)


def point_at(point: Point, vector: Vector) -> Point:
    """Translate ``point`` by ``vector``."""
    return point.point_at(vector)


@dataclass(frozen=True)
class AffineTransform:
    """
    2-D affine transform stored as a 2x3 row-major matrix.

    ``[[a, b, e], [c, d, f]]`` maps (x, y) to (a*x + b*y + e, c*x + d*y + f).
    The matrix is not validated.
    """
    matrix: Tuple[Tuple[float, float, float], Tuple[float, float, float]]

    def apply(self, point: Point) -> Point:
        """Apply the transform to a point."""
        (a, b, e), (c, d, f) = self.matrix
        return Point(
            a * point.x + b * point.y + e,
            c * point.x + d * point.y + f,
        )


def cpow(c: complex, n: int) -> complex:
    """
    Raise a complex number to a non-negative integer power.

    Powers are computed by repeated multiplication so that results match
    naive multiplication exactly (``cpow(c, 3) == c * c * c``).

    Args:
        c: Base
        n: Exponent (>= 0)

    Returns:
        ``c`` raised to ``n``
    """
    if n < 0:
        raise ValueError(f"Exponent must be non-negative, got {n}")
    if n == 0:
        return complex(1.0, 0.0)
    if n == 1:
        return c
    if n == 2:
        return c * c

    result = c
    for _ in range(1, n):
        result = result * c
    return result


class ViewAreaTransformer:
    """
    Maps between pixel coordinates and a visible Cartesian rectangle.

    The rectangle is scaled uniformly to fit inside the viewport without
    distortion; the dimension with the larger ratio governs the scale and the
    other dimension is centered. The Y axis is flipped: pixel rows grow down
    while Cartesian Y grows up.
    """

    def __init__(self, viewport_size: Tuple[float, float], corner_a: Point, corner_b: Point):
        """
        Initialize transformer.

        Args:
            viewport_size: (width, height) of the viewport in pixels
            corner_a: One corner of the visible rectangle
            corner_b: The diagonally opposite corner, in either order
        """
        window_width, window_height = viewport_size
        if window_width <= 0 or window_height <= 0:
            raise ValueError(f"Viewport size must be positive, got {viewport_size}")

        self.viewport_size = (window_width, window_height)
        self.top_left = Point(min(corner_a.x, corner_b.x), max(corner_a.y, corner_b.y))
        self.bottom_right = Point(max(corner_a.x, corner_b.x), min(corner_a.y, corner_b.y))

        cart_width = self.bottom_right.x - self.top_left.x
        cart_height = self.top_left.y - self.bottom_right.y
        if cart_width == 0 or cart_height == 0:
            raise ValueError(
                f"View area must have a non-zero width and height: {corner_a}, {corner_b}"
            )

        if cart_height / cart_width > window_height / window_width:
            # Height governs; center horizontally
            self.scale = cart_height / window_height
            self.offset_x = (window_width * self.scale - cart_width) / 2.0
            self.offset_y = 0.0
        else:
            # Width governs; center vertically
            self.scale = cart_width / window_width
            self.offset_x = 0.0
            self.offset_y = (window_height * self.scale - cart_height) / 2.0

    def map_pixel_to_point(self, pixel: Pixel) -> Point:
        """Map a pixel coordinate to a Cartesian point."""
        px, py = pixel
        return Point(
            px * self.scale + self.top_left.x - self.offset_x,
            -(py * self.scale) + self.top_left.y + self.offset_y,
        )

    def map_point_to_pixel(self, point: Point) -> Pixel:
        """Map a Cartesian point to a (possibly fractional) pixel coordinate."""
        return (
            (point.x - self.top_left.x + self.offset_x) / self.scale,
            -(point.y - self.top_left.y - self.offset_y) / self.scale,
        )

    def __repr__(self) -> str:
        return (f"ViewAreaTransformer(viewport={self.viewport_size}, top_left={self.top_left}, "
                f"bottom_right={self.bottom_right}, scale={self.scale})")
