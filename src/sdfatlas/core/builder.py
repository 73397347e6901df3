"""Parallel atlas building.

This module coordinates the full build: per-glyph rasterization and
distance field generation in a worker pool, then single-threaded
packing, composition and metadata extraction.

Key components:
- generate_glyph_field: Top-level picklable function for parallel execution
- AtlasBuilder: Main orchestrator class
- build_atlas: One-call convenience wrapper
"""

import os
import time
import traceback
from collections.abc import Callable, Iterable
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from typing import Any, Protocol

import structlog
from PIL import Image

from sdfatlas.config import (
    AtlasConfig,
    ExecutorKind,
    ProcessingConfig,
    SdfAtlasSettings,
    get_default_settings,
)
from sdfatlas.core.asset import FontAsset
from sdfatlas.core.distance_field import DistanceFieldGenerator
from sdfatlas.core.packer import PackedRect, ShelfPacker
from sdfatlas.domain import BitMask, DistanceFieldImage, FontDescription, GlyphProperties, UvRect
from sdfatlas.exceptions import (
    AtlasOverflowError,
    EmptyCharsetError,
    GlyphProcessingError,
    InvalidParametersError,
    MissingFallbackError,
)
from sdfatlas.utils import LOGGER_NAME, BuildLogger, BuildStats

# Characters handled by layout, never rasterized
LAYOUT_CHARS = frozenset(" \n\r")


class GlyphRasterizer(Protocol):
    """Draws a character of a font into a binary mask."""

    def rasterize(self, char: str, font: FontDescription) -> BitMask | None: ...


def generate_glyph_field(
    char: str,
    rasterizer: GlyphRasterizer,
    font: FontDescription,
    upscale_resolution: int,
    sdf_size: int,
    padding: int,
    flip_vertical: bool,
) -> dict[str, Any]:
    """Rasterize one character and generate its distance field.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        char: Character to process
        rasterizer: Rasterizer producing the glyph mask
        font: Font handed to the rasterizer
        upscale_resolution: Search grid resolution
        sdf_size: Field size before padding
        padding: Border pixels on each side
        flip_vertical: Mirror the mask before generating the field

    Returns:
        Dictionary containing one of:
        - Success: {"char": str, "field": DistanceFieldImage, "duration_ms": float}
        - Skipped: {"char": str, "skipped": str, "duration_ms": float}
        - Error: {"char": str, "error": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        mask = rasterizer.rasterize(char, font)
        if mask is None:
            return {
                "char": char,
                "skipped": "rasterizer produced no glyph",
                "duration_ms": (time.time() - start_time) * 1000,
            }

        if flip_vertical:
            mask = mask.flipped()

        generator = DistanceFieldGenerator(upscale_resolution, sdf_size, padding)
        field = generator.generate(mask)

        return {
            "char": char,
            "field": field,
            "duration_ms": (time.time() - start_time) * 1000,
        }

    except Exception as e:
        return {
            "char": char,
            "error": str(e),
            "traceback": traceback.format_exc(),
            "duration_ms": (time.time() - start_time) * 1000,
        }


class AtlasBuilder:
    """Builds SDF font assets from a character set.

    Manages the complete workflow:
    1. Generate one distance field per character in parallel worker processes
    2. Pack the fields with a shelf packer
    3. Compose the atlas image
    4. Derive per-glyph texture coordinates and padding
    5. Wrap everything into a FontAsset

    Example:
        builder = AtlasBuilder(SdfAtlasSettings())
        asset = builder.build(
            charset="ABC?",
            font=FontDescription(Path("font.ttf"), size=64),
            rasterizer=PillowRasterizer(),
        )
    """

    def __init__(self, settings: SdfAtlasSettings | None = None) -> None:
        """Initialize the builder with configuration.

        Args:
            settings: Application settings (defaults if None)

        Raises:
            InvalidParametersError: If the distance field parameters are invalid
        """
        self.settings = settings if settings is not None else get_default_settings()
        self.logger = structlog.get_logger(LOGGER_NAME)
        self.last_stats: BuildStats | None = None

        atlas = self.settings.atlas
        self.generator = DistanceFieldGenerator(atlas.upscale_resolution, atlas.sdf_size, atlas.padding)

    def build(
        self,
        charset: Iterable[str],
        font: FontDescription,
        rasterizer: GlyphRasterizer,
        progress_callback: Callable[[int, int, str], None] | None = None,
    ) -> FontAsset:
        """Build a font asset.

        Args:
            charset: Characters to include; spaces and line breaks are ignored
            font: Font handed to the rasterizer
            rasterizer: Produces glyph masks; must be picklable for the process pool
            progress_callback: Optional callback(completed, total, char)

        Returns:
            FontAsset with the composed atlas

        Raises:
            InvalidParametersError: If the charset contains multi-character strings
            EmptyCharsetError: If no drawable character remains
            GlyphProcessingError: If any glyph fails to rasterize or generate
            MissingFallbackError: If the fallback character produced no glyph
            AtlasOverflowError: If the atlas exceeds the configured maximum size
        """
        atlas_config = self.settings.atlas
        stats = BuildStats()
        stats.start_time = time.time()
        build_logger = BuildLogger(self.logger, stats)
        self.last_stats = stats

        chars = sorted(set(charset) - LAYOUT_CHARS)
        for char in chars:
            if len(char) != 1:
                raise InvalidParametersError("charset", f"{char!r} is not a single character")
        if not chars:
            raise EmptyCharsetError()

        self.logger.info(
            "Starting atlas build",
            glyphs=len(chars),
            font=str(font.path) if font.path else "default",
            font_size=font.size,
            sdf_size=atlas_config.sdf_size,
            padding=atlas_config.padding,
        )

        fields = self._generate_fields(
            chars=chars,
            font=font,
            rasterizer=rasterizer,
            build_logger=build_logger,
            progress_callback=progress_callback,
        )

        if atlas_config.fallback_char not in fields:
            raise MissingFallbackError(atlas_config.fallback_char)

        rects = [
            PackedRect(payload=(char, fields[char]), width=fields[char].width, height=fields[char].height)
            for char in sorted(fields)
        ]
        width, height = ShelfPacker(atlas_config.max_row_width).pack(rects)
        build_logger.log_atlas_packed(width, height, len(rects))

        limit = atlas_config.max_atlas_size
        if limit is not None and (width > limit or height > limit):
            raise AtlasOverflowError(width, height, limit)

        image = compose_atlas(rects, width, height)
        glyph_map = extract_glyph_map(rects, width, height, atlas_config.padding)

        layout = self.settings.layout
        asset = FontAsset.from_image(
            image,
            glyph_map,
            raster_font_size=font.size,
            fallback_char=atlas_config.fallback_char,
            options=self.settings.render.to_options(),
            vertical_spacing=layout.vertical_spacing,
            horizontal_spacing=layout.horizontal_spacing,
            space_advance_factor=layout.space_advance_factor,
        )

        stats.end_time = time.time()
        self.logger.info(
            "Atlas build complete",
            glyphs=len(glyph_map),
            skipped=stats.skipped_count,
            width=width,
            height=height,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return asset

    def _create_executor(self, config: ProcessingConfig, max_workers: int) -> Executor:
        if config.executor == ExecutorKind.THREAD:
            return ThreadPoolExecutor(max_workers=max_workers)
        return ProcessPoolExecutor(max_workers=max_workers)

    def _generate_fields(
        self,
        chars: list[str],
        font: FontDescription,
        rasterizer: GlyphRasterizer,
        build_logger: BuildLogger,
        progress_callback: Callable[[int, int, str], None] | None = None,
    ) -> dict[str, DistanceFieldImage]:
        """Generate all glyph fields, in parallel when more than one worker is allowed.

        Results are keyed by character, so completion order does not
        affect the output. Errors are collected until every task has
        finished and then raised for the first failing character.

        Args:
            chars: Sorted characters to process
            font: Font handed to the rasterizer
            rasterizer: Glyph rasterizer
            build_logger: Logger updating build statistics
            progress_callback: Optional callback(completed, total, char)

        Returns:
            Dictionary mapping characters to their fields
        """
        atlas_config: AtlasConfig = self.settings.atlas
        processing = self.settings.processing
        max_workers = processing.max_workers or os.cpu_count() or 1

        generator = self.generator
        task_args = (
            rasterizer,
            font,
            generator.upscale_resolution,
            generator.target_size,
            generator.padding,
            atlas_config.flip_vertical,
        )

        fields: dict[str, DistanceFieldImage] = {}
        errors: dict[str, str] = {}
        total = len(chars)
        completed = 0

        def collect(char: str, result: dict[str, Any]) -> None:
            nonlocal completed
            if "error" in result:
                build_logger.log_glyph_error(char, result["error"], result.get("traceback"))
                errors[char] = result["error"]
            elif "skipped" in result:
                build_logger.log_glyph_skipped(char, result["skipped"])
            else:
                field = result["field"]
                fields[char] = field
                build_logger.log_glyph_complete(char, field.width, field.height, result["duration_ms"])

            completed += 1
            if progress_callback is not None:
                progress_callback(completed, total, char)

        self.logger.info(
            "Generating glyph fields",
            glyph_count=total,
            max_workers=max_workers,
            executor=processing.executor.value,
        )

        if max_workers == 1 or total == 1:
            for char in chars:
                collect(char, generate_glyph_field(char, *task_args))
        else:
            with self._create_executor(processing, max_workers) as executor:
                pending = {
                    executor.submit(generate_glyph_field, char, *task_args): char
                    for char in chars
                }

                for future in as_completed(pending):
                    char = pending[future]
                    try:
                        result = future.result()
                    except Exception as e:
                        # Executor-level failure, e.g. an unpicklable rasterizer
                        result = {
                            "char": char,
                            "error": f"{type(e).__name__}: {e}",
                            "traceback": traceback.format_exc(),
                        }
                    collect(char, result)

        if errors:
            char = min(errors)
            raise GlyphProcessingError(char, errors[char])

        return fields


def compose_atlas(
    rects: list[PackedRect[tuple[str, DistanceFieldImage]]],
    width: int,
    height: int,
) -> Image.Image:
    """Blit packed glyph fields into one RGBA atlas.

    Uncovered regions stay black. The field value is replicated into the
    RGB channels; alpha is opaque.

    Args:
        rects: Packed rectangles carrying (char, field) payloads
        width: Atlas width
        height: Atlas height

    Returns:
        RGBA atlas image
    """
    gray = Image.new("L", (width, height), 0)
    for rect in rects:
        _, field = rect.payload
        gray.paste(field.to_image(), (rect.x, rect.y))

    alpha = Image.new("L", (width, height), 255)
    return Image.merge("RGBA", (gray, gray, gray, alpha))


def extract_glyph_map(
    rects: list[PackedRect[tuple[str, DistanceFieldImage]]],
    width: int,
    height: int,
    padding: int,
) -> dict[str, GlyphProperties]:
    """Derive glyph metadata from packed rectangles.

    Args:
        rects: Packed rectangles carrying (char, field) payloads
        width: Atlas width
        height: Atlas height
        padding: Field padding in pixels

    Returns:
        Dictionary mapping characters to their properties
    """
    glyph_map: dict[str, GlyphProperties] = {}

    for rect in rects:
        char, _ = rect.payload
        glyph_map[char] = GlyphProperties(
            padding_fraction=(padding / rect.width, padding / rect.height),
            uv_rect=UvRect.from_rect(
                rect.x / width,
                rect.y / height,
                rect.width / width,
                rect.height / height,
            ),
            source_size=(float(rect.width), float(rect.height)),
        )

    return glyph_map


def build_atlas(
    charset: Iterable[str],
    font: FontDescription,
    rasterizer: GlyphRasterizer,
    fallback: str = "?",
    max_row_width: int = 256,
    upscale: int = 64,
    sdf_size: int = 64,
    padding: int = 32,
    parallelism: int | None = None,
) -> FontAsset:
    """Build a font asset with default layout and render settings.

    Args:
        charset: Characters to include
        font: Font handed to the rasterizer
        rasterizer: Glyph rasterizer
        fallback: Character drawn for unmapped characters
        max_row_width: Maximum packing row width
        upscale: Search grid resolution
        sdf_size: Field size before padding
        padding: Border pixels on each side
        parallelism: Worker count (None = CPU count)

    Returns:
        FontAsset instance
    """
    settings = SdfAtlasSettings(
        atlas=AtlasConfig(
            fallback_char=fallback,
            max_row_width=max_row_width,
            upscale_resolution=upscale,
            sdf_size=sdf_size,
            padding=padding,
        ),
        processing=ProcessingConfig(max_workers=parallelism),
    )
    return AtlasBuilder(settings).build(charset, font, rasterizer)
