"""
Color types and the linear color ramp.

Colors come in two flavors: byte colors for raster output and normalized
float colors for vector drawing. Escape-time rendering maps iteration counts
onto a precomputed linear ramp between two byte colors.
"""

from typing import List, Tuple
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ColorU8:
    """RGBA color with 8-bit channels."""
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self):
        """Validate channel values."""
        for component in (self.r, self.g, self.b, self.a):
            if not 0 <= component <= 255:
                raise ValueError(f"RGBA components must be between 0 and 255, got {self.to_tuple()}")

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def to_f32(self) -> 'ColorF32':
        """Convert to a normalized float color."""
        return ColorF32(self.r / 255.0, self.g / 255.0, self.b / 255.0, self.a / 255.0)


@dataclass(frozen=True)
class ColorF32:
    """RGBA color with channels normalized to 0-1."""
    r: float
    g: float
    b: float
    a: float = 1.0

    def __post_init__(self):
        """Validate channel values."""
        for component in (self.r, self.g, self.b, self.a):
            if not 0.0 <= component <= 1.0:
                raise ValueError(f"RGBA components must be between 0 and 1, got {self.to_tuple()}")

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def to_u8(self) -> ColorU8:
        """Convert to a byte color, truncating each channel."""
        return ColorU8(int(self.r * 255), int(self.g * 255), int(self.b * 255), int(self.a * 255))


BLACK_U8 = ColorU8(0, 0, 0, 255)
WHITE_U8 = ColorU8(255, 255, 255, 255)
# Highlight for points inside an escape-time set
AEBLUE_U8 = ColorU8(0, 0, 48, 255)

BLACK_F32 = ColorF32(0.0, 0.0, 0.0, 1.0)
GREY_F32 = ColorF32(0.5, 0.5, 0.5, 1.0)
WHITE_F32 = ColorF32(1.0, 1.0, 1.0, 1.0)


def linear_ramp(first: ColorU8, last: ColorU8, count: int) -> List[ColorU8]:
    """
    Interpolate ``count`` colors from ``first`` to ``last`` inclusive.

    Each channel is interpolated linearly and truncated to a byte:
    ``channel(i) = first + i * (last - first) / (count - 1)``.

    Args:
        first: Color at index 0
        last: Color at index count - 1
        count: Number of colors (>= 2)

    Returns:
        List of colors

    Example:
        >>> linear_ramp(BLACK_U8, WHITE_U8, 256)[10]
        ColorU8(r=10, g=10, b=10, a=255)
        >>> linear_ramp(BLACK_U8, WHITE_U8, 128)[10]
        ColorU8(r=20, g=20, b=20, a=255)
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 2:
        raise ValueError(f"Count must be 2 or more: {count}")

    start = first.to_tuple()
    span = [end - begin for begin, end in zip(start, last.to_tuple())]
    steps = count - 1

    return [
        ColorU8(*(int(begin + (i * delta) / steps) for begin, delta in zip(start, span)))
        for i in range(count)
    ]


def ramp_to_array(colors: List[ColorU8]) -> np.ndarray:
    """Pack colors into a (count, 4) uint8 lookup table."""
    return np.array([color.to_tuple() for color in colors], dtype=np.uint8)
