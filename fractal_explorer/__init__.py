"""
Fractal generation and rendering library.

This library draws three families of fractals: chaos games (randomized
iterated function systems), escape-time fractals (complex-plane iteration
tests) and turtle curves (Lindenmayer-system driven paths).

Key Features:
- Exact, invertible mapping between pixel viewports and Cartesian view areas
- Lazy, restartable turtle programs for dragon, terdragon, Koch, Lévy C and Cesàro curves
- Threaded chaos-game streaming with a bounded queue and explicit shutdown
- Column-sharded parallel escape-time rendering with cooperative cancellation
- PNG/TIFF/JPEG export with embedded render metadata

Example usage:
    >>> from fractal_explorer import FractalRenderer, RenderConfig, EscapeTimeConfig
    >>> renderer = FractalRenderer(RenderConfig(width=640, height=480))
    >>> image = renderer.render('mandelbrot', EscapeTimeConfig(max_iterations=100))
"""

__version__ = "1.0.0"
__author__ = "Fractal Explorer Team"

from fractal_explorer.core.fractal_types import (
    FractalCategory, FractalRegistry, SelectedFractal, create_chaos_game,
    create_escape_time_fractal, create_turtle_program,
)
from fractal_explorer.core.geometry import Point, ViewAreaTransformer
from fractal_explorer.rendering.coloring import linear_ramp
from fractal_explorer.rendering.escape_time_renderer import EscapeTimeRenderer
from fractal_explorer.rendering.image_output import ImageExporter
from fractal_explorer.acceleration.streaming import ChaosGameStream
from fractal_explorer.config import (
    ChaosGameConfig, EscapeTimeConfig, RenderConfig, TurtleCurveConfig,
)

# Main API classes
from fractal_explorer.api import FractalRenderer

__all__ = [
    "FractalRenderer",
    "RenderConfig",
    "ChaosGameConfig",
    "EscapeTimeConfig",
    "TurtleCurveConfig",
    "FractalCategory",
    "FractalRegistry",
    "SelectedFractal",
    "create_chaos_game",
    "create_escape_time_fractal",
    "create_turtle_program",
    "Point",
    "ViewAreaTransformer",
    "linear_ramp",
    "EscapeTimeRenderer",
    "ChaosGameStream",
    "ImageExporter",
]
