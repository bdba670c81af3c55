"""
Frame-by-frame drawing of turtle curves and chaos games.

Each animation owns the state needed to continue drawing where the previous
frame stopped: turtle curves advance a fixed number of visible segments per
frame, chaos games plot a fixed number of streamed points per frame.
"""

from typing import Callable, Iterator, List, Optional, Tuple
import logging

from ..acceleration.streaming import ChaosGameStream
from ..core.chaos_game import ChaosGame
from ..core.geometry import Pixel, Point, ViewAreaTransformer
from ..core.turtle import TrackingTurtle, TurtleProgram, TurtleState, TurtleStep
from .coloring import BLACK_U8, ColorU8
from .surfaces import DrawingCanvas

logger = logging.getLogger(__name__)

TURTLE_VIEW_AREA = (Point(-0.5, -0.75), Point(1.5, 0.75))
CHAOS_GAME_VIEW_AREA = (Point(-1.0, -1.0), Point(1.0, 1.0))

LineSink = Callable[[Pixel, Pixel], None]


def _check_draw_rate(draw_rate: int) -> int:
    if isinstance(draw_rate, bool) or not isinstance(draw_rate, int) or draw_rate < 1:
        raise ValueError(f"draw_rate must be a positive integer, got {draw_rate!r}")
    return draw_rate


class DrawingTurtle(TrackingTurtle):
    """Turtle that sends every pen-down segment, in pixels, to a line sink."""

    def __init__(self, transformer: ViewAreaTransformer, line_sink: LineSink,
                 state: Optional[TurtleState] = None):
        super().__init__(state)
        self.transformer = transformer
        self.line_sink = line_sink

    def on_segment(self, start: Point, end: Point) -> None:
        self.line_sink(self.transformer.map_point_to_pixel(start),
                       self.transformer.map_point_to_pixel(end))


class TurtleAnimation:
    """Draws a turtle program onto a canvas a few segments at a time."""

    def __init__(self, program: TurtleProgram, canvas: DrawingCanvas, draw_rate: int = 1,
                 color: ColorU8 = BLACK_U8):
        """
        Initialize animation.

        Args:
            program: Turtle program to draw
            canvas: Surface to draw on
            draw_rate: Visible segments drawn per frame
            color: Line color
        """
        self.program = program
        self.canvas = canvas
        self.draw_rate = _check_draw_rate(draw_rate)
        self.color = color
        self.turtle: Optional[DrawingTurtle] = None
        self._chunks: Optional[Iterator[List[TurtleStep]]] = None
        self.finished = False
        self.reset()

    def _draw_line(self, start: Pixel, end: Pixel) -> None:
        self.canvas.draw_line(start, end, self.color)

    def reset(self, viewport_size: Optional[Tuple[int, int]] = None) -> None:
        """
        Start drawing again from the beginning on a blank canvas.

        Args:
            viewport_size: New canvas size, if it changed
        """
        if viewport_size is not None:
            self.canvas.resize(*viewport_size)
        else:
            self.canvas.clear()

        transformer = ViewAreaTransformer(self.canvas.size, *TURTLE_VIEW_AREA)
        self.turtle = DrawingTurtle(transformer, self._draw_line)
        for step in self.program.init_steps():
            self.turtle.perform(step)
        self._chunks = self.program.group_until_next_forward()
        self.finished = False

    def draw_one_frame(self) -> bool:
        """
        Draw the next ``draw_rate`` segments.

        Returns:
            False once the program is exhausted
        """
        if self.finished:
            return False

        for _ in range(self.draw_rate):
            chunk = next(self._chunks, None)
            if chunk is None:
                self.turtle.pen_up()
                self.finished = True
                logger.debug(f"Finished drawing {type(self.program).__name__}: "
                             f"{self.canvas.segments_drawn} segments")
                return False
            for step in chunk:
                self.turtle.perform(step)
        return True

    def run_to_completion(self) -> int:
        """Draw every remaining frame; returns the number of frames drawn."""
        frames = 0
        while self.draw_one_frame():
            frames += 1
        return frames


class ChaosGameAnimation:
    """
    Plots points streamed from a chaos game, ``draw_rate`` points per frame.

    The animation owns a producer thread while running; call ``close()`` or use
    it as a context manager.
    """

    def __init__(self, game: ChaosGame, canvas: DrawingCanvas, draw_rate: int = 1,
                 color: ColorU8 = BLACK_U8):
        self.game = game
        self.canvas = canvas
        self.draw_rate = _check_draw_rate(draw_rate)
        self.color = color
        self.transformer = ViewAreaTransformer(canvas.size, *CHAOS_GAME_VIEW_AREA)
        self.stream: Optional[ChaosGameStream] = None

    def start(self) -> 'ChaosGameAnimation':
        if self.stream is None:
            self.stream = ChaosGameStream(self.game).start()
        return self

    def draw_one_frame(self) -> int:
        """
        Plot up to ``draw_rate`` new points.

        Returns:
            Number of points drawn
        """
        self.start()
        drawn = 0
        for _ in range(self.draw_rate):
            point = next(self.stream, None)
            if point is None:
                break
            self.canvas.draw_dot(self.transformer.map_point_to_pixel(point), self.color)
            drawn += 1
        return drawn

    def reset(self, viewport_size: Optional[Tuple[int, int]] = None) -> None:
        """
        Stop the producer, reinitialize the game and start over on a blank canvas.

        Args:
            viewport_size: New canvas size, if it changed
        """
        self.close()
        if viewport_size is not None:
            self.canvas.resize(*viewport_size)
            self.transformer = ViewAreaTransformer(self.canvas.size, *CHAOS_GAME_VIEW_AREA)
        else:
            self.canvas.clear()
        self.game.reset()
        self.start()

    def close(self) -> None:
        """Stop and join the producer thread."""
        stream, self.stream = self.stream, None
        if stream is not None:
            stream.stop()

    def __enter__(self) -> 'ChaosGameAnimation':
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
