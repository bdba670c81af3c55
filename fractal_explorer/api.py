"""
Main API for off-screen fractal rendering.

This module ties the engines and the rendering coordination together: it
builds the selected fractal from its category's configuration, drives the
matching renderer to completion and optionally saves the result.
"""

from typing import Optional, Union
from pathlib import Path
import logging
import time

from PIL import Image

from .config import (
    ChaosGameConfig, EscapeTimeConfig, FractalConfig, RenderConfig, TurtleCurveConfig,
)
from .core.fractal_types import (
    FractalCategory, SelectedFractal, create_chaos_game, create_escape_time_fractal,
    create_turtle_program,
)
from .rendering.animation import ChaosGameAnimation, TurtleAnimation
from .rendering.escape_time_renderer import EscapeTimeRenderer
from .rendering.image_output import ImageExporter, RenderMetadata
from .rendering.surfaces import DrawingCanvas

logger = logging.getLogger(__name__)

_CONFIG_TYPES = {
    FractalCategory.CHAOS_GAME: ChaosGameConfig,
    FractalCategory.ESCAPE_TIME: EscapeTimeConfig,
    FractalCategory.TURTLE_CURVE: TurtleCurveConfig,
}


def default_config(selected: Union[str, SelectedFractal]) -> FractalConfig:
    """Default configuration for the category of ``selected``."""
    return _CONFIG_TYPES[SelectedFractal.parse(selected).category]()


class FractalRenderer:
    """Renders any selectable fractal to an image."""

    def __init__(self, config: Optional[RenderConfig] = None):
        """
        Initialize fractal renderer.

        Args:
            config: Rendering configuration (uses defaults if None)
        """
        self.config = config or RenderConfig()
        self.config.validate()
        self.image_exporter = ImageExporter()

        logger.info(f"FractalRenderer initialized: {self.config.width}x{self.config.height}")

    @property
    def viewport_size(self):
        return (self.config.width, self.config.height)

    def render(self, selected: Union[str, SelectedFractal],
               fractal_config: Optional[FractalConfig] = None,
               output_path: Optional[Union[str, Path]] = None) -> Image.Image:
        """
        Render a fractal.

        Args:
            selected: Fractal to render
            fractal_config: Configuration matching the fractal's category
                (category defaults if None)
            output_path: Optional output file path

        Returns:
            Rendered RGBA image
        """
        selected = SelectedFractal.parse(selected)
        if fractal_config is None:
            fractal_config = default_config(selected)

        expected = _CONFIG_TYPES[selected.category]
        if not isinstance(fractal_config, expected):
            raise ValueError(f"{selected.display_name} takes a {expected.__name__}, "
                             f"got {type(fractal_config).__name__}")
        fractal_config.validate()

        start_time = time.time()
        logger.info(f"Starting render: {selected.display_name}")

        if selected.category is FractalCategory.CHAOS_GAME:
            image = self._render_chaos_game(selected, fractal_config)
        elif selected.category is FractalCategory.ESCAPE_TIME:
            image = self._render_escape_time(selected, fractal_config)
        else:
            image = self._render_turtle_curve(selected, fractal_config)

        render_time = time.time() - start_time
        logger.info(f"Render complete: {render_time:.2f}s")

        if output_path:
            self._save_image(image, Path(output_path), selected, fractal_config, render_time)

        return image

    def _render_chaos_game(self, selected: SelectedFractal, config: ChaosGameConfig) -> Image.Image:
        canvas = DrawingCanvas(*self.viewport_size)
        game = create_chaos_game(selected, seed=config.seed)

        with ChaosGameAnimation(game, canvas, config.draw_rate) as animation:
            drawn = 0
            while drawn < config.points:
                frame = animation.draw_one_frame()
                if frame == 0:
                    break
                drawn += frame

        logger.debug(f"Plotted {drawn} points")
        return canvas.image

    def _render_escape_time(self, selected: SelectedFractal, config: EscapeTimeConfig) -> Image.Image:
        fractal = create_escape_time_fractal(selected, config.max_iterations, config.power)

        with EscapeTimeRenderer(fractal, self.viewport_size, workers=config.workers) as renderer:
            renderer.redraw()
            raster = renderer.wait()
        return raster.to_image()

    def _render_turtle_curve(self, selected: SelectedFractal, config: TurtleCurveConfig) -> Image.Image:
        canvas = DrawingCanvas(*self.viewport_size)
        program = create_turtle_program(selected, config.iteration)

        animation = TurtleAnimation(program, canvas, config.draw_rate)
        frames = animation.run_to_completion()
        logger.debug(f"Drew {canvas.segments_drawn} segments over {frames} frames")
        return canvas.image

    def _save_image(self, image: Image.Image, output_path: Path, selected: SelectedFractal,
                    fractal_config: FractalConfig, render_time: float) -> None:
        if not output_path.suffix:
            output_path = output_path.with_suffix(f".{self.config.output_format}")

        metadata = None
        if self.config.save_metadata:
            metadata = RenderMetadata(
                fractal_type=selected.value,
                category=selected.category.value,
                resolution=self.viewport_size,
                render_time_seconds=render_time,
                parameters=fractal_config.to_dict(),
            )

        self.image_exporter.save_image(image, output_path, metadata, self.config.jpeg_quality)
