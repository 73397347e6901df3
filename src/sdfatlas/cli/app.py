"""CLI application entry point for sdfatlas.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from sdfatlas import __version__
from sdfatlas.cli.output import (
    console,
    create_progress,
    print_asset_info,
    print_coverage,
    print_error,
    print_font_info,
    print_header,
    print_processing_info,
    print_step,
    print_success,
)
from sdfatlas.config import (
    AtlasConfig,
    LoggingConfig,
    ProcessingConfig,
    SdfAtlasSettings,
)
from sdfatlas.core import AtlasBuilder, FontAsset
from sdfatlas.core.builder import LAYOUT_CHARS
from sdfatlas.domain import FontDescription
from sdfatlas.exceptions import AssetError, AssetSaveError, FontLoadError, SdfAtlasError
from sdfatlas.io import FontReader, PillowRasterizer, read_asset_file
from sdfatlas.utils import configure_logging

# Printable ASCII
DEFAULT_CHARSET = "".join(chr(code) for code in range(32, 127))

# Create the Typer app
app = typer.Typer(
    name="sdfatlas",
    help="Build signed distance field glyph atlases and inspect font assets.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]sdfatlas[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Build signed distance field glyph atlases and inspect font assets."""


@app.command()
def build(
    input_font: Annotated[
        Path,
        typer.Argument(
            help="Path to input TTF/OTF font file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Output asset path",
            show_default=False,
        ),
    ],
    size: Annotated[
        float,
        typer.Option(
            "--size",
            "-s",
            help="Font size glyphs are rasterized at",
            min=1.0,
        ),
    ] = 64.0,
    charset: Annotated[
        str | None,
        typer.Option(
            "--charset",
            "-c",
            help="Characters to include (default: printable ASCII)",
        ),
    ] = None,
    fallback: Annotated[
        str,
        typer.Option(
            "--fallback",
            help="Character drawn for unmapped characters",
        ),
    ] = "?",
    sdf_size: Annotated[
        int,
        typer.Option(
            "--sdf-size",
            help="Glyph field size in pixels before padding",
            min=1,
        ),
    ] = 64,
    upscale: Annotated[
        int,
        typer.Option(
            "--upscale",
            help="Search grid resolution; half of it is the encoded distance range",
            min=2,
        ),
    ] = 64,
    padding: Annotated[
        int,
        typer.Option(
            "--padding",
            help="Border pixels around each glyph field",
            min=0,
        ),
    ] = 32,
    row_width: Annotated[
        int,
        typer.Option(
            "--row-width",
            help="Maximum atlas row width in pixels",
            min=1,
        ),
    ] = 256,
    max_atlas_size: Annotated[
        int | None,
        typer.Option(
            "--max-atlas-size",
            help="Fail if the atlas exceeds this width or height",
            min=1,
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    preview: Annotated[
        Path | None,
        typer.Option(
            "--preview",
            help="Also write the atlas image as PNG",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Build an SDF font asset from a TTF/OTF font.

    Every character of the charset that the font maps is rasterized,
    converted into a signed distance field and packed into one atlas.

    Example:
        sdfatlas build Roboto-Regular.ttf -o roboto.sdfa --preview roboto.png
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_font.exists():
        print_error(
            f"Input file not found: {input_font}",
            details=f"The file '{input_font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_font.is_file():
        print_error(
            f"Input path is not a file: {input_font}",
            details="Please provide a path to a TTF or OTF font file.",
        )
        raise typer.Exit(code=1)

    if len(fallback) != 1:
        print_error(f"Invalid fallback: {fallback!r}", details="The fallback must be a single character.")
        raise typer.Exit(code=1)

    settings = SdfAtlasSettings(
        atlas=AtlasConfig(
            fallback_char=fallback,
            max_row_width=row_width,
            upscale_resolution=upscale,
            sdf_size=sdf_size,
            padding=padding,
            max_atlas_size=max_atlas_size,
        ),
        processing=ProcessingConfig(
            max_workers=workers,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level,
        ),
    )

    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)

    try:
        if not quiet:
            print_step("Loading font")

        requested = sorted(set(charset if charset is not None else DEFAULT_CHARSET) - LAYOUT_CHARS)
        try:
            with FontReader(input_font) as reader:
                covered = reader.covered_characters(requested)
                family = reader.family_name
                font_type = reader.format
                glyph_count = reader.glyph_count
                upm = reader.units_per_em
        except Exception as e:
            raise FontLoadError(str(input_font), str(e)) from e

        missing = [char for char in requested if char not in covered]

        if not quiet:
            print_font_info(
                font_path=str(input_font),
                family=family,
                font_type=font_type,
                glyph_count=glyph_count,
                upm=upm,
            )
            print_coverage(len(requested), missing, verbose)

        if not quiet:
            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Generating distance fields")
            print_processing_info(actual_workers, is_auto=(workers is None))

        builder = AtlasBuilder(settings)
        font = FontDescription(path=input_font, size=size)
        rasterizer = PillowRasterizer()

        if not quiet:
            with create_progress() as progress:
                task_id = progress.add_task(
                    f"Processing {len(covered)} glyphs",
                    total=len(covered),
                )

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                asset = builder.build(covered, font, rasterizer, progress_callback=update_progress)
        else:
            asset = builder.build(covered, font, rasterizer)

        asset.save_file(output)

        if preview is not None:
            try:
                asset.atlas_image().save(preview, format="PNG")
            except OSError as e:
                raise AssetSaveError(str(preview), str(e)) from e

        stats = builder.last_stats
        if not quiet and stats is not None:
            print_success(
                output_path=str(output),
                file_size=_format_file_size(output),
                total_time_s=stats.duration_seconds,
                glyphs=len(asset.glyph_map),
                skipped=stats.skipped_count,
                atlas_width=asset.atlas_width,
                atlas_height=asset.atlas_height,
                avg_time_ms=stats.avg_glyph_time_ms,
                min_time_ms=stats.min_glyph_time_ms,
                max_time_ms=stats.max_glyph_time_ms,
            )

    except KeyboardInterrupt:
        if not quiet:
            console.print("\n[bold]Cancelled[/bold] - no output file created")
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except AssetSaveError as e:
        print_error(f"Could not save asset: {e.reason}")
        raise typer.Exit(code=1)
    except SdfAtlasError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def info(
    asset_path: Annotated[
        Path,
        typer.Argument(
            help="Path to a font asset",
            show_default=False,
        ),
    ],
) -> None:
    """Show the contents of a font asset."""
    asset = _load_asset(asset_path)

    print_asset_info(
        path=str(asset_path),
        glyph_count=len(asset.glyph_map),
        atlas_width=asset.atlas_width,
        atlas_height=asset.atlas_height,
        fallback=asset.fallback_char,
        raster_font_size=asset.raster_font_size,
        vertical_spacing=asset.vertical_spacing,
        horizontal_spacing=asset.horizontal_spacing,
        space_advance=asset.space_advance_factor,
    )


@app.command()
def measure(
    asset_path: Annotated[
        Path,
        typer.Argument(
            help="Path to a font asset",
            show_default=False,
        ),
    ],
    text: Annotated[
        str,
        typer.Argument(
            help="Text to measure",
            show_default=False,
        ),
    ],
    size: Annotated[
        float,
        typer.Option(
            "--size",
            "-s",
            help="Text size",
            min=0.0,
        ),
    ] = 1.0,
) -> None:
    """Measure the bounding box of a string rendered with a font asset."""
    asset = _load_asset(asset_path)
    width, height = asset.measure(text, size)
    console.print(f"{width:.4f} {height:.4f}")


def _load_asset(path: Path) -> FontAsset:
    """Load an asset, exiting with an error message on failure.

    Args:
        path: Asset file path

    Returns:
        Loaded FontAsset
    """
    try:
        return read_asset_file(path)
    except FileNotFoundError:
        print_error(f"Asset file not found: {path}")
        raise typer.Exit(code=1)
    except AssetError as e:
        print_error(f"Could not read asset: {e}")
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Could not read asset: {e}")
        raise typer.Exit(code=1)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"

    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
