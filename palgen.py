import logging
from pathlib import Path
from typing import Optional

import numpy as np
import rich.traceback
import typer
from PIL import UnidentifiedImageError
from rich.console import Console
from rich.logging import RichHandler

from pal import extract, image_io, legend
from pal.color import to_hex
from pal.extract import Algorithm, UnknownAlgorithmError
from pal.kmeans import DEFAULT_MAX_ITERATIONS
from pal.sampling import DEFAULT_SAMPLING_RATE


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def validate_swatch_output(swatch_output: Path, overwrite: bool = False) -> None:
    if swatch_output.exists() and not overwrite:
        typer.secho(f"Error: File already exists: {swatch_output}", fg=typer.colors.RED)
        typer.secho("Use --yes (-y) to overwrite.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)


def pal_cli(
    input_path: Path = typer.Argument(
        ...,
        help="Input image file (e.g., photo.jpg).",
        metavar="INPUT_FILE",
        file_okay=True, dir_okay=False, resolve_path=True,
    ),
    num_colors: int = typer.Option(
        extract.DEFAULT_NUM_COLORS, "--num-colors", "-k", min=1,
        help=f"Number of palette colors (K). Default: {extract.DEFAULT_NUM_COLORS}."
    ),
    algorithm: str = typer.Option(
        Algorithm.KMEANS.value, "--algorithm", "-a",
        help="Quantization algorithm: kmeans or mediancut. Default: kmeans."
    ),
    sampling_rate: int = typer.Option(
        DEFAULT_SAMPLING_RATE, "--sampling-rate", min=1,
        help=f"Read every n-th pixel of the image. Default: {DEFAULT_SAMPLING_RATE}."
    ),
    max_iterations: int = typer.Option(
        DEFAULT_MAX_ITERATIONS, "--max-iterations", min=0,
        help=f"K-Means iteration cap. Default: {DEFAULT_MAX_ITERATIONS}."
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Seed for K-Means initialisation (repeatable palettes)."
    ),
    swatch_output: Optional[Path] = typer.Option(
        None, "--swatch-output",
        help="Write a PNG with one labelled swatch per palette color.",
        file_okay=True, dir_okay=False, resolve_path=True,
    ),
    swatch_size: int = typer.Option(80, "--swatch-size", min=10, help="Swatch size in pixels. Default: 80px."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Overwrite an existing swatch file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
):
    """
    Extracts a color palette from an image.
    """
    configure_logging(verbose)

    try:
        selected = extract.resolve_algorithm(algorithm)
    except UnknownAlgorithmError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    if swatch_output is not None:
        validate_swatch_output(swatch_output, overwrite=yes)

    try:
        pixel_buffer = image_io.load_rgba_buffer(input_path)
    except FileNotFoundError:
        typer.secho(f"Error: Input file not found at {input_path}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except UnidentifiedImageError as e:
        typer.secho(f"Error opening image {input_path}: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.echo(f"Image loaded ({pixel_buffer.width}x{pixel_buffer.height}).")
    typer.echo(f"Processing with {selected.value.upper()} (K={num_colors})...")

    rng = np.random.default_rng(seed)
    result = extract.extract_palette(
        pixel_buffer.data,
        num_colors,
        algorithm=selected,
        sampling_rate=sampling_rate,
        max_iterations=max_iterations,
        rng=rng,
    )

    if not result.colors:
        typer.secho("No colors found.", fg=typer.colors.YELLOW)
    for idx, color in enumerate(result.colors):
        typer.echo(f"{idx:>3}  {to_hex(color)}  ({color.r}, {color.g}, {color.b})")
    if result.rejected:
        typer.secho(f"{len(result.rejected)} invalid color(s) were dropped.", fg=typer.colors.YELLOW)

    typer.secho(
        f"Extracted {len(result.colors)} colors with {selected.value.upper()} in {result.elapsed:.2f}s.",
        fg=typer.colors.GREEN,
    )

    if swatch_output is not None and result.colors:
        swatch_image = legend.create_palette_image(result.colors, swatch_size=swatch_size)
        try:
            swatch_output.parent.mkdir(parents=True, exist_ok=True)
            swatch_image.save(swatch_output)
        except OSError as e:
            typer.secho(f"Error saving swatch image {swatch_output}: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        typer.echo(f"Swatches saved to {swatch_output}")


def main():
    rich.traceback.install(show_locals=False, suppress=[typer])
    typer.run(pal_cli)


if __name__ == "__main__":
    main()
