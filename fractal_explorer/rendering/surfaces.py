"""
Drawing surfaces.

``Raster`` is a thread-safe RGBA pixel buffer that escape-time workers fill
column by column while a renderer reads it. ``DrawingCanvas`` wraps a Pillow
image for drawing the line segments and dots produced by turtle curves and
chaos games.
"""

from typing import Tuple, Union
import threading

import numpy as np
from PIL import Image, ImageDraw

from .coloring import ColorU8, WHITE_U8, BLACK_U8


ColorLike = Union[ColorU8, Tuple[int, int, int, int]]


def _rgba(color: ColorLike) -> Tuple[int, int, int, int]:
    return color.to_tuple() if isinstance(color, ColorU8) else tuple(color)


def _validate_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Surface size must be positive, got {width}x{height}")


class Raster:
    """
    RGBA pixel buffer guarded by a single lock.

    Every write takes the lock once, so a whole column written through
    ``write_column`` becomes visible to readers atomically.
    """

    def __init__(self, width: int, height: int, background: ColorLike = WHITE_U8):
        """
        Initialize raster.

        Args:
            width: Width in pixels
            height: Height in pixels
            background: Initial fill color
        """
        _validate_size(width, height)
        self.width = width
        self.height = height
        self._pixels = np.empty((height, width, 4), dtype=np.uint8)
        self._pixels[:, :] = _rgba(background)
        self._lock = threading.Lock()

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def put_pixel(self, x: int, y: int, color: ColorLike) -> None:
        with self._lock:
            self._pixels[y, x] = _rgba(color)

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        with self._lock:
            return tuple(int(channel) for channel in self._pixels[y, x])

    def write_column(self, x: int, colors: np.ndarray) -> None:
        """
        Replace one column of pixels.

        Args:
            x: Column index
            colors: Array of shape (height, 4) with uint8 RGBA values
        """
        if colors.shape != (self.height, 4):
            raise ValueError(f"Column must have shape ({self.height}, 4), got {colors.shape}")
        with self._lock:
            self._pixels[:, x] = colors

    def fill(self, color: ColorLike) -> None:
        with self._lock:
            self._pixels[:, :] = _rgba(color)

    def snapshot(self) -> np.ndarray:
        """Copy of the pixel buffer, shape (height, width, 4)."""
        with self._lock:
            return self._pixels.copy()

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.snapshot())


class DrawingCanvas:
    """Pillow image that accepts line segments and dots in pixel coordinates."""

    def __init__(self, width: int, height: int, background: ColorLike = WHITE_U8):
        _validate_size(width, height)
        self.background = _rgba(background)
        self.image = Image.new('RGBA', (width, height), self.background)
        self._draw = ImageDraw.Draw(self.image)
        self.segments_drawn = 0
        self.dots_drawn = 0

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    def clear(self) -> None:
        self._draw.rectangle([(0, 0), self.image.size], fill=self.background)
        self.segments_drawn = 0
        self.dots_drawn = 0

    def resize(self, width: int, height: int) -> None:
        """Replace the image with a blank one of the new size."""
        _validate_size(width, height)
        self.image = Image.new('RGBA', (width, height), self.background)
        self._draw = ImageDraw.Draw(self.image)
        self.segments_drawn = 0
        self.dots_drawn = 0

    def draw_line(self, start: Tuple[float, float], end: Tuple[float, float],
                  color: ColorLike = BLACK_U8, width: int = 1) -> None:
        self._draw.line([tuple(start), tuple(end)], fill=_rgba(color), width=width)
        self.segments_drawn += 1

    def draw_dot(self, center: Tuple[float, float], color: ColorLike = BLACK_U8,
                 radius: float = 0.5) -> None:
        x, y = center
        if radius <= 0.5:
            self._draw.point((int(x), int(y)), fill=_rgba(color))
        else:
            self._draw.ellipse([(x - radius, y - radius), (x + radius, y + radius)], fill=_rgba(color))
        self.dots_drawn += 1

    def to_array(self) -> np.ndarray:
        return np.asarray(self.image).copy()
