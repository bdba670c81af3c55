"""
Command-line interface for fractal rendering.

Every selectable fractal gets its own subcommand, generated from the
selection table. The options a subcommand takes depend on the fractal's
category: chaos games take a draw rate and point count, escape-time fractals
take an iteration limit and power, and turtle curves take an iteration count.
"""

import click
import sys
from typing import Callable
import logging
import time

from .. import __version__
from ..api import FractalRenderer
from ..config import (
    ChaosGameConfig, EscapeTimeConfig, FractalConfig, RenderConfig, TurtleCurveConfig,
)
from ..core.fractal_types import FractalCategory, FractalRegistry, SelectedFractal

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version information')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress most output')
@click.pass_context
def main(ctx, version, verbose, quiet):
    """
    Fractal Explorer - draw chaos games, escape-time fractals and turtle curves.

    Run a fractal's subcommand to render it to an image file.
    """
    # Setup logging
    if quiet:
        logging.basicConfig(level=logging.ERROR)
    elif verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    else:
        logging.basicConfig(level=logging.INFO,
                            format='%(levelname)s: %(message)s')

    if version:
        click.echo(f"Fractal Explorer v{__version__}")
        click.echo(f"Python: {sys.version}")
        if ctx.invoked_subcommand is None:
            sys.exit(0)
    elif ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())

    # Store global options in context
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose


def _output_options(command: Callable) -> Callable:
    """Options shared by every render subcommand."""
    command = click.option('--height', '-h', type=int, default=600, show_default=True,
                           help='Image height')(command)
    command = click.option('--width', '-w', type=int, default=800, show_default=True,
                           help='Image width')(command)
    command = click.option('--output', '-o', type=click.Path(dir_okay=False),
                           help='Output image path [default: <fractal>.png]')(command)
    return command


def _render(ctx, selected: SelectedFractal, fractal_config: FractalConfig,
            output, width, height) -> None:
    """Validate, render and save one fractal, exiting with status 1 on failure."""
    try:
        fractal_config.validate()
        render_config = RenderConfig(width=width, height=height)
        renderer = FractalRenderer(render_config)

        output = output or f"{selected.value}.{render_config.output_format}"

        click.echo(f"Rendering {selected.display_name}...")
        start_time = time.time()

        renderer.render(selected, fractal_config, output)

        render_time = time.time() - start_time
        click.echo(f"Render complete: {render_time:.2f}s")
        click.echo(f"Saved: {output}")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        if ctx.obj.get('verbose'):
            import traceback
            traceback.print_exc()
        sys.exit(1)


def _chaos_game_command(selected: SelectedFractal) -> click.Command:
    @click.command(name=selected.value, help=selected.description)
    @click.option('--drawrate', type=int, default=1, show_default=True,
                  help='Points plotted per frame')
    @click.option('--points', type=int, default=100_000, show_default=True,
                  help='Total points to plot')
    @click.option('--seed', type=int, help='Random seed for reproducible output')
    @_output_options
    @click.pass_context
    def command(ctx, drawrate, points, seed, output, width, height):
        config = ChaosGameConfig(draw_rate=drawrate, points=points, seed=seed)
        _render(ctx, selected, config, output, width, height)

    return command


def _escape_time_command(selected: SelectedFractal) -> click.Command:
    @click.command(name=selected.value, help=selected.description)
    @click.argument('max_iterations', type=int)
    @click.argument('power', type=int)
    @click.option('--workers', type=int, help='Worker threads [default: CPU count]')
    @_output_options
    @click.pass_context
    def command(ctx, max_iterations, power, workers, output, width, height):
        config = EscapeTimeConfig(max_iterations=max_iterations, power=power, workers=workers)
        _render(ctx, selected, config, output, width, height)

    return command


def _turtle_curve_command(selected: SelectedFractal) -> click.Command:
    @click.command(name=selected.value, help=selected.description)
    @click.argument('iteration', type=int)
    @click.option('--drawrate', type=int, default=1, show_default=True,
                  help='Line segments drawn per frame')
    @_output_options
    @click.pass_context
    def command(ctx, iteration, drawrate, output, width, height):
        config = TurtleCurveConfig(iteration=iteration, draw_rate=drawrate)
        _render(ctx, selected, config, output, width, height)

    return command


_COMMAND_BUILDERS = {
    FractalCategory.CHAOS_GAME: _chaos_game_command,
    FractalCategory.ESCAPE_TIME: _escape_time_command,
    FractalCategory.TURTLE_CURVE: _turtle_curve_command,
}

for _selected in SelectedFractal:
    main.add_command(_COMMAND_BUILDERS[_selected.category](_selected))


@main.command()
@click.option('--category', type=click.Choice([category.value for category in FractalCategory]),
              help='Only list fractals of this category')
@click.pass_context
def list_fractals(ctx, category):
    """List available fractal types."""
    try:
        selected_category = FractalCategory(category) if category else None
        fractals = FractalRegistry.list_fractals(selected_category)

        click.echo("Available fractal types:")
        for name, info in fractals.items():
            click.echo(f"  {name:<14} {info.display_name}")
            if ctx.obj.get('verbose'):
                click.echo(f"    Category: {info.category.value}")
                click.echo(f"    {info.description}")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
