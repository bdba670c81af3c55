"""
Configuration for fractal rendering.

Each fractal category takes its own configuration shape. All configurations
validate eagerly and raise ``ValueError`` with a descriptive message instead
of clamping bad values.
"""

from typing import Any, Dict, Optional, Union
from dataclasses import dataclass, fields


def _check_int(name: str, value: Any, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        qualifier = "positive" if minimum == 1 else f">= {minimum}"
        raise ValueError(f"{name} must be {qualifier}, got {value}")


@dataclass
class _Config:
    """Shared dictionary conversion for configuration dataclasses."""

    def validate(self) -> None:
        pass

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown {cls.__name__} options: {', '.join(sorted(unknown))}")
        config = cls(**data)
        config.validate()
        return config


@dataclass
class ChaosGameConfig(_Config):
    """Configuration for chaos games."""

    draw_rate: int = 1  # points plotted per frame
    points: int = 100_000  # total points for an off-screen render
    seed: Optional[int] = None

    def validate(self) -> None:
        _check_int("draw_rate", self.draw_rate, 1)
        _check_int("points", self.points, 1)
        if self.seed is not None:
            _check_int("seed", self.seed, 0)


@dataclass
class EscapeTimeConfig(_Config):
    """Configuration for escape-time fractals."""

    max_iterations: int = 100
    power: int = 2
    workers: Optional[int] = None  # None uses the CPU count

    def validate(self) -> None:
        _check_int("max_iterations", self.max_iterations, 1)
        _check_int("power", self.power, 1)
        if self.workers is not None:
            _check_int("workers", self.workers, 1)


@dataclass
class TurtleCurveConfig(_Config):
    """Configuration for turtle curves."""

    iteration: int = 0
    draw_rate: int = 1  # segments drawn per frame

    def validate(self) -> None:
        _check_int("iteration", self.iteration, 0)
        _check_int("draw_rate", self.draw_rate, 1)


@dataclass
class RenderConfig(_Config):
    """Configuration for off-screen rendering."""

    width: int = 800
    height: int = 600
    output_format: str = 'png'
    save_metadata: bool = True
    jpeg_quality: int = 95

    def validate(self) -> None:
        _check_int("width", self.width, 1)
        _check_int("height", self.height, 1)
        if self.output_format.lower() not in ('png', 'tiff', 'tif', 'jpg', 'jpeg'):
            raise ValueError(f"Unsupported output_format '{self.output_format}'")
        _check_int("jpeg_quality", self.jpeg_quality, 1)
        if self.jpeg_quality > 100:
            raise ValueError(f"jpeg_quality must be at most 100, got {self.jpeg_quality}")


FractalConfig = Union[ChaosGameConfig, EscapeTimeConfig, TurtleCurveConfig]
