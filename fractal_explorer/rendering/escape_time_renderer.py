"""
Parallel raster rendering of escape-time fractals.

The renderer owns the current view and raster. Every redraw stops the fill in
progress, allocates a fresh raster and starts a new column-sharded fill on a
worker pool. Workers check for cancellation between columns and publish each
finished column with a single locked write.
"""

from typing import Optional, Tuple
import logging
import time

import numpy as np

from ..acceleration.work_multiplexer import (
    StopNotifier, WorkHandles, WorkMultiplexer, WorkerError, shard_columns,
)
from ..core.escape_time import EscapeTimeFractal
from ..core.geometry import Pixel, Point, ViewAreaTransformer
from .coloring import AEBLUE_U8, BLACK_U8, WHITE_U8, linear_ramp, ramp_to_array
from .surfaces import Raster

logger = logging.getLogger(__name__)

MAX_RAMP_SIZE = 50
RENDER_BASE_NAME = "escapetime_render"


def build_ramp(fractal: EscapeTimeFractal) -> np.ndarray:
    """Color lookup table for escaped points, one entry per iteration count."""
    # A single-iteration fractal still needs a two-entry ramp
    count = max(2, min(fractal.max_iterations, MAX_RAMP_SIZE))
    return ramp_to_array(linear_ramp(BLACK_U8, WHITE_U8, count))


def render_column(fractal: EscapeTimeFractal, transformer: ViewAreaTransformer, x: int,
                  height: int, ramp: np.ndarray) -> np.ndarray:
    """
    Classify every pixel of one column.

    Args:
        fractal: Escape-time fractal
        transformer: Pixel to point mapping for the current view
        x: Column index
        height: Column height in pixels
        ramp: Color lookup table from ``build_ramp``

    Returns:
        (height, 4) uint8 array of colors
    """
    column = np.empty((height, 4), dtype=np.uint8)
    inside = AEBLUE_U8.to_tuple()
    last = len(ramp) - 1
    for y in range(height):
        escaped, iterations = fractal.classify(transformer.map_pixel_to_point((x, y)))
        if escaped:
            column[y] = ramp[min(iterations, last)]
        else:
            column[y] = inside
    return column


class EscapeTimeRenderer:
    """
    Coordinates parallel fills of an escape-time fractal into a raster.

    Example:
        >>> renderer = EscapeTimeRenderer(Mandelbrot(100), (320, 240), workers=4)
        >>> renderer.redraw()
        >>> raster = renderer.wait()
    """

    def __init__(self, fractal: EscapeTimeFractal, viewport_size: Tuple[int, int] = (800, 600),
                 workers: Optional[int] = None):
        """
        Initialize renderer.

        Args:
            fractal: Fractal to draw
            viewport_size: (width, height) in pixels
            workers: Number of worker threads (None for the CPU count)
        """
        self.fractal = fractal
        self.viewport_size = self._check_viewport(viewport_size)
        self.view_area: Tuple[Point, Point] = fractal.default_view_area()
        self.multiplexer = WorkMultiplexer(workers, RENDER_BASE_NAME)
        self.ramp = build_ramp(fractal)
        self.raster: Optional[Raster] = None
        self.transformer: Optional[ViewAreaTransformer] = None
        self._handles: Optional[WorkHandles] = None
        self._started_at = 0.0

    @staticmethod
    def _check_viewport(viewport_size: Tuple[int, int]) -> Tuple[int, int]:
        width, height = viewport_size
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport size must be positive, got {viewport_size}")
        return (int(width), int(height))

    @property
    def rendering(self) -> bool:
        return self._handles is not None and not self._handles.done

    def redraw(self) -> Raster:
        """
        Cancel any fill in progress and start a new one on a fresh raster.

        Returns:
            The raster being filled
        """
        self.stop()

        transformer = ViewAreaTransformer(self.viewport_size, *self.view_area)
        width, height = self.viewport_size
        logger.debug(f"View {transformer!r}: pixel (0, 0) -> "
                     f"{transformer.map_pixel_to_point((0, 0))}, pixel {self.viewport_size} -> "
                     f"{transformer.map_pixel_to_point(self.viewport_size)}")

        raster = Raster(width, height)
        fractal, ramp = self.fractal, self.ramp

        def fill_columns(shard_index: int, shard_count: int, notifier: StopNotifier,
                         name: str) -> None:
            for x in shard_columns(width, shard_index, shard_count):
                if notifier.should_stop():
                    logger.debug(f"{name} cancelled before column {x}")
                    return
                raster.write_column(x, render_column(fractal, transformer, x, height, ramp))

        self.transformer = transformer
        self.raster = raster
        self._started_at = time.time()
        self._handles = self.multiplexer.split_work(fill_columns)
        return raster

    def wait(self) -> Raster:
        """
        Block until the current fill completes.

        Returns:
            The filled raster

        Raises:
            WorkerError: if any column shard failed; the failed fill is then
                discarded and the next redraw starts from a clean state
        """
        if self._handles is None:
            raise RuntimeError("Nothing is being rendered; call redraw() first")
        try:
            self._handles.wait()
        except WorkerError:
            self._handles = None
            raise
        logger.info(f"Rendered {self.fractal.name} {self.viewport_size[0]}x{self.viewport_size[1]} "
                    f"in {time.time() - self._started_at:.2f}s")
        return self.raster

    def stop(self) -> None:
        """
        Cancel the fill in progress, if any, and wait for its workers to exit.

        Shard failures of the cancelled fill were already logged by its
        handles; they are not raised here so that a view change always
        starts a new fill.
        """
        handles, self._handles = self._handles, None
        if handles is not None:
            try:
                handles.stop()
            except WorkerError as e:
                logger.warning(f"Discarded failed fill: {e}")

    def resize(self, viewport_size: Tuple[int, int]) -> Raster:
        self.viewport_size = self._check_viewport(viewport_size)
        return self.redraw()

    def set_view_area(self, corner_a: Point, corner_b: Point) -> Raster:
        # Reject degenerate rectangles before cancelling the current fill
        ViewAreaTransformer(self.viewport_size, corner_a, corner_b)
        self.view_area = (corner_a, corner_b)
        return self.redraw()

    def zoom(self, pixel_a: Pixel, pixel_b: Pixel) -> Raster:
        """
        Zoom into the rectangle spanned by two pixels of the current view.

        Args:
            pixel_a: One corner in pixels
            pixel_b: Opposite corner in pixels

        Returns:
            The raster being filled for the new view
        """
        transformer = self.transformer or ViewAreaTransformer(self.viewport_size, *self.view_area)
        corner_a = transformer.map_pixel_to_point(pixel_a)
        corner_b = transformer.map_pixel_to_point(pixel_b)
        logger.info(f"Zooming to {corner_a}, {corner_b}")
        return self.set_view_area(corner_a, corner_b)

    def reset_view(self) -> Raster:
        return self.set_view_area(*self.fractal.default_view_area())

    def __enter__(self) -> 'EscapeTimeRenderer':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
