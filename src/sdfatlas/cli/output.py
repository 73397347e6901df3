"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for glyph processing.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]sdfatlas[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, family: str, font_type: str, glyph_count: int, upm: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        family: Font family name
        font_type: Font format type (e.g., "TrueType", "OpenType")
        glyph_count: Total number of glyphs in font
        upm: Units per em value
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({family}, {font_type})")
    console.print(line1)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM")


def print_coverage(requested: int, missing: list[str], verbose: bool) -> None:
    """Print how much of the charset the font covers.

    Args:
        requested: Number of requested drawable characters
        missing: Characters the font does not map
        verbose: Whether to list the missing characters
    """
    covered = requested - len(missing)
    console.print(f"  [green]{covered}[/green] of {requested} characters covered")
    if verbose and missing:
        shown = " ".join(missing[:40])
        if len(missing) > 40:
            shown += f" {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(missing) - 40} more)"
        console.print(Text(f"  missing: {shown}"))


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_processing_info(workers: int, is_auto: bool = False) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {workers} workers{auto_suffix}")


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    glyphs: int,
    skipped: int,
    atlas_width: int,
    atlas_height: int,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total build time in seconds
        glyphs: Number of glyphs in the atlas
        skipped: Number of characters that produced no glyph
        atlas_width: Atlas width in pixels
        atlas_height: Atlas height in pixels
        avg_time_ms: Average field generation time per glyph in milliseconds
        min_time_ms: Minimum field generation time per glyph in milliseconds
        max_time_ms: Maximum field generation time per glyph in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    skipped_style = "yellow" if skipped > 0 else "green"
    console.print(
        f"  {glyphs} glyphs {SYM_DOT} {atlas_width}x{atlas_height} atlas {SYM_DOT} "
        f"[{skipped_style}]{skipped} skipped[/{skipped_style}]"
    )

    if avg_time_ms is not None:
        timing_str = f"{avg_time_ms:.1f}ms avg"
        if min_time_ms is not None and max_time_ms is not None:
            timing_str += f" ({min_time_ms:.1f}-{max_time_ms:.1f}ms range)"
        console.print(f"  {timing_str}")


def print_asset_info(
    path: str,
    glyph_count: int,
    atlas_width: int,
    atlas_height: int,
    fallback: str,
    raster_font_size: float,
    vertical_spacing: float,
    horizontal_spacing: float,
    space_advance: float,
) -> None:
    """Print a summary table of a font asset.

    Args:
        path: Asset file path
        glyph_count: Number of glyphs in the map
        atlas_width: Atlas width in pixels
        atlas_height: Atlas height in pixels
        fallback: Fallback character
        raster_font_size: Font size the glyphs were rasterized at
        vertical_spacing: Line spacing factor
        horizontal_spacing: Glyph spacing factor
        space_advance: Space advance factor
    """
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()
    table.add_row("Glyphs", str(glyph_count))
    table.add_row("Atlas", f"{atlas_width}x{atlas_height}")
    table.add_row("Fallback", repr(fallback))
    table.add_row("Raster size", f"{raster_font_size:g}")
    table.add_row("Spacing", f"{vertical_spacing:g} vertical {SYM_DOT} {horizontal_spacing:g} horizontal")
    table.add_row("Space advance", f"{space_advance:g}")

    console.print()
    console.print(Text(path, style="bold"))
    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
