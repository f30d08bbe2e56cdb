"""Command-line interface for huekit."""

import functools
import json
import sys
from collections.abc import Callable
from typing import Any

import click
from loguru import logger

from . import __version__
from .analysis import AnalysisOptions, analyze_image
from .color_utils import format_color_output, parse_color
from .contrast import evaluate_contrast, suggest_alternatives
from .exporters import (
    export_analysis_css,
    export_analysis_json,
    export_collection_css,
    export_collection_json,
    export_collection_scss,
)
from .gradients import GradientOptions, generate_gradient_collection
from .image_generation import create_swatch_grid, create_swatch_sheet
from .imaging import validate_image_path
from .palettes import generate_palettes


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(
        lambda message: click.echo(message, err=True, nl=False),
        level="DEBUG" if verbose else "WARNING",
        format="{time:HH:mm:ss} | {level: <7} | {message}",
    )
    logger.enable("huekit")


def _handle_errors(command: Callable[..., None]) -> Callable[..., None]:
    @functools.wraps(command)
    def wrapper(*args: Any, **kwargs: Any) -> None:
        try:
            command(*args, **kwargs)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        except Exception as e:
            click.echo(f"Unexpected error: {e}", err=True)
            sys.exit(1)

    return wrapper


def _echo_grid(items: list[str], columns: int) -> None:
    for i in range(0, len(items), columns):
        row = items[i : i + columns]
        click.echo("  " + "  ".join(f"{item:16}" for item in row))


@click.group()
@click.version_option(version=__version__, prog_name="huekit")
@click.option("-v", "--verbose", is_flag=True, help="Log debug information to stderr")
def main(verbose: bool) -> None:
    """Color analysis and generation toolkit.

    Examples:

        huekit convert "#3b82f6" -f all

        huekit contrast "#777777" "#FFFFFF"

        huekit palette "rgb(255, 0, 0)" -F json

        huekit analyze photo.png --max-colors 5 -F css

        huekit gradients "#FF0000" "#00FF00" "#0000FF" -F scss
    """
    _configure_logging(verbose)


@main.command()
@click.argument("color")
@click.option(
    "-f",
    "--format",
    "format_type",
    type=click.Choice(["hex", "rgb", "hsl", "all"], case_sensitive=False),
    default="all",
    help="Representation to print (default: all)",
)
@_handle_errors
def convert(color: str, format_type: str) -> None:
    """Convert COLOR (#RRGGBB, #RGB or rgb(R,G,B)) between formats."""
    parsed = parse_color(color).named()
    format_type = format_type.lower()

    if format_type == "all":
        hex_value, rgb_value, hsl_value = (
            format_color_output([parsed], f)[0] for f in ("hex", "rgb", "hsl")
        )
        click.echo(f"HEX:  {hex_value}")
        click.echo(f"RGB:  {rgb_value}")
        click.echo(f"HSL:  {hsl_value}")
        click.echo(f"Name: {parsed.name}")
    else:
        click.echo(format_color_output([parsed], format_type)[0])


@main.command()
@click.argument("foreground")
@click.argument("background")
@click.option(
    "--target",
    type=click.FloatRange(1.0, 21.0),
    default=4.5,
    help=(
        "Contrast ratio suggestions must reach (default: 4.5). "
        "Common values: 3.0 (AA large text), 4.5 (AA normal text), "
        "7.0 (AAA normal text)"
    ),
)
@click.option(
    "-F",
    "--output-format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text)",
)
@_handle_errors
def contrast(foreground: str, background: str, target: float, output_format: str) -> None:
    """Check the WCAG contrast between FOREGROUND and BACKGROUND."""
    result = evaluate_contrast(parse_color(foreground), parse_color(background))
    suggestions = suggest_alternatives(parse_color(background), target)

    if output_format.lower() == "json":
        data = result.to_dict()
        data["suggestions"] = [
            {"color": s.color.hex, "ratio": s.ratio} for s in suggestions
        ]
        click.echo(json.dumps(data, indent=2))
        return

    def mark(ok: bool) -> str:
        return "pass" if ok else "fail"

    click.echo(f"Contrast ratio: {result.ratio:.2f}:1 ({result.level})")
    click.echo(result.description)
    click.echo(f"  Normal text:   {mark(result.normal_text)}")
    click.echo(f"  Large text:    {mark(result.large_text)}")
    click.echo(f"  UI components: {mark(result.ui_components)}")
    if suggestions:
        click.echo()
        click.echo(f"Suggested colors on {background} (>= {target:g}:1):")
        for s in suggestions:
            click.echo(f"  {s.color.hex}  {s.ratio:.2f}:1")


@main.command()
@click.argument("color")
@click.option(
    "-F",
    "--output-format",
    type=click.Choice(["grid", "json", "png"], case_sensitive=False),
    default="grid",
    help="Output format (default: grid)",
)
@click.option("-o", "--output", type=str, help="Output file path (required for PNG format)")
@click.option(
    "-c",
    "--columns",
    type=click.IntRange(1, 32),
    default=5,
    help="Swatches per PNG line before wrapping (default: 5)",
)
@_handle_errors
def palette(color: str, output_format: str, output: str | None, columns: int) -> None:
    """Derive color-theory palettes from COLOR."""
    palettes = generate_palettes([parse_color(color)])
    output_format = output_format.lower()

    if output_format == "json":
        click.echo(json.dumps([p.to_dict() for p in palettes], indent=2))
    elif output_format == "png":
        if not output:
            click.echo("Error: PNG output requires -o/--output filename", err=True)
            sys.exit(1)
        create_swatch_sheet([(p.name, p.colors) for p in palettes], output, columns)
        click.echo(f"PNG saved to: {output}")
    else:
        for p in palettes:
            click.echo(f"{p.name}:")
            _echo_grid([f"{c.hex} {c.name}" for c in p.colors], 5)
            click.echo()


@main.command()
@click.argument("image", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-n",
    "--max-colors",
    type=click.IntRange(1, 50),
    default=10,
    help="Maximum number of dominant colors (default: 10)",
)
@click.option(
    "--min-percentage",
    type=click.FloatRange(0.0, 100.0),
    default=1.0,
    help="Drop colors covering less of the image than this (default: 1.0)",
)
@click.option(
    "-t",
    "--threshold",
    type=click.FloatRange(0.0, 49.0),
    default=25.0,
    help="RGB distance under which colors are merged (default: 25)",
)
@click.option(
    "--max-size",
    type=click.IntRange(16, 2048),
    default=300,
    help="Longest side the image is scaled down to before analysis (default: 300)",
)
@click.option(
    "-F",
    "--output-format",
    type=click.Choice(["grid", "json", "css", "png"], case_sensitive=False),
    default="grid",
    help="Output format (default: grid)",
)
@click.option("-o", "--output", type=str, help="Output file path (required for PNG format)")
@_handle_errors
def analyze(
    image: str,
    max_colors: int,
    min_percentage: float,
    threshold: float,
    max_size: int,
    output_format: str,
    output: str | None,
) -> None:
    """Extract the dominant colors of IMAGE."""
    validation = validate_image_path(image)
    if not validation.is_valid:
        click.echo(f"Error: {validation.error}", err=True)
        sys.exit(1)

    options = AnalysisOptions(
        max_colors=max_colors,
        min_percentage=min_percentage,
        grouping_threshold=threshold,
        max_image_size=max_size,
    )
    result = analyze_image(image, options)
    output_format = output_format.lower()

    if output_format == "json":
        click.echo(export_analysis_json(result))
    elif output_format == "css":
        click.echo(export_analysis_css(result), nl=False)
    elif output_format == "png":
        if not output:
            click.echo("Error: PNG output requires -o/--output filename", err=True)
            sys.exit(1)
        create_swatch_grid([c.color for c in result.dominant_colors], 5, output)
        click.echo(f"PNG saved to: {output}")
    else:
        if not result.has_data:
            click.echo(f"No opaque pixels found in {image}")
            return
        click.echo(
            f"Found {len(result.dominant_colors)} dominant colors "
            f"in {result.metadata.width}x{result.metadata.height} {image}:"
        )
        click.echo()
        for c in result.dominant_colors:
            click.echo(f"  {c.hex}  {c.percentage:6.2f}%  {c.name}")
        click.echo()
        click.echo(f"Average color: {result.average_color.hex} ({result.average_color.name})")
        click.echo("Balanced palette: " + " ".join(c.hex for c in result.balanced_palette))


@main.command()
@click.argument("colors", nargs=-1, required=True)
@click.option(
    "--variations/--no-variations",
    default=True,
    help="Include directional variations (default: on)",
)
@click.option(
    "-m",
    "--max",
    "max_gradients",
    type=click.IntRange(1, 100),
    default=20,
    help="Maximum number of gradients (default: 20)",
)
@click.option("--name", default="Generated Collection", help="Collection name")
@click.option(
    "-F",
    "--output-format",
    type=click.Choice(["css", "scss", "json", "grid"], case_sensitive=False),
    default="css",
    help="Output format (default: css)",
)
@_handle_errors
def gradients(
    colors: tuple[str, ...],
    variations: bool,
    max_gradients: int,
    name: str,
    output_format: str,
) -> None:
    """Generate a gradient collection from two or more COLORS."""
    options = GradientOptions(
        include_variations=variations, max_gradients=max_gradients, name=name
    )
    collection = generate_gradient_collection(list(colors), options)
    output_format = output_format.lower()

    if output_format == "json":
        click.echo(export_collection_json(collection))
    elif output_format == "scss":
        click.echo(export_collection_scss(collection), nl=False)
    elif output_format == "grid":
        click.echo(f"{collection.name}: {collection.gradient_count} gradients")
        for g in collection.gradients:
            click.echo(f"  {g.id:32} {g.css}")
    else:
        click.echo(export_collection_css(collection), nl=False)


def run() -> None:
    main(auto_envvar_prefix="HUEKIT")


if __name__ == "__main__":
    run()
