"""Font asset: a built atlas with its glyph metadata.

A FontAsset is created by the atlas builder or loaded from disk. It owns
the RGBA atlas pixels and the per-character metadata, and lays out,
measures and renders text with them.
"""

from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, BinaryIO

from PIL import Image

from sdfatlas.core.layout import (
    GlyphPlacement,
    glyph_extent,
    iter_placements,
    line_height,
    measure_placements,
)
from sdfatlas.core.render import QuadSink, QuadTransform, TextureUploader
from sdfatlas.domain import Color, GlyphProperties, SdfOptions4, Vec2
from sdfatlas.exceptions import InvalidParametersError, MissingFallbackError

DEFAULT_VERTICAL_SPACING = 0.01
DEFAULT_HORIZONTAL_SPACING = 0.05
DEFAULT_SPACE_ADVANCE = 0.5


class FontAsset:
    """An SDF font: atlas pixels, glyph map and layout parameters.

    The atlas, glyph map, fallback and raster size are fixed at
    construction. Spacing and render options may be changed at any time
    and affect subsequent layout calls.

    Attributes:
        vertical_spacing: Extra line spacing relative to text size
        horizontal_spacing: Extra glyph spacing relative to text size
        space_advance_factor: Advance of a space relative to text size
        options: Default per-corner render options
        texture: Handle returned by the last upload(), if any

    Example:
        asset = FontAsset.load_file(Path("roboto.sdfa"))
        width, height = asset.measure("Hello", size=24)
        asset.render(batch, (10, 400), "Hello", size=24)
    """

    def __init__(
        self,
        atlas_pixels: bytes,
        atlas_width: int,
        atlas_height: int,
        glyph_map: Mapping[str, GlyphProperties],
        raster_font_size: float,
        fallback_char: str = "?",
        options: SdfOptions4 | None = None,
        vertical_spacing: float = DEFAULT_VERTICAL_SPACING,
        horizontal_spacing: float = DEFAULT_HORIZONTAL_SPACING,
        space_advance_factor: float = DEFAULT_SPACE_ADVANCE,
    ) -> None:
        """Initialize the asset.

        Args:
            atlas_pixels: RGBA bytes, row-major
            atlas_width: Atlas width in pixels
            atlas_height: Atlas height in pixels
            glyph_map: Metadata per character
            raster_font_size: Font size the glyphs were rasterized at
            fallback_char: Character drawn for unmapped characters
            options: Default render options (uniform defaults if None)
            vertical_spacing: Extra line spacing relative to text size
            horizontal_spacing: Extra glyph spacing relative to text size
            space_advance_factor: Advance of a space relative to text size

        Raises:
            MissingFallbackError: If fallback_char is not in glyph_map
            InvalidParametersError: If the pixel buffer does not match the size,
                or a glyph map key is not a single character
        """
        for char in glyph_map:
            if len(char) != 1:
                raise InvalidParametersError("glyph_map", f"key {char!r} is not a single character")

        if fallback_char not in glyph_map:
            raise MissingFallbackError(fallback_char)

        expected = atlas_width * atlas_height * 4
        if len(atlas_pixels) != expected:
            raise InvalidParametersError(
                "atlas_pixels",
                f"expected {expected} RGBA bytes for {atlas_width}x{atlas_height}, "
                f"got {len(atlas_pixels)}",
            )

        self._atlas_pixels = bytes(atlas_pixels)
        self._atlas_width = atlas_width
        self._atlas_height = atlas_height
        self._glyph_map = dict(glyph_map)
        self._fallback_char = fallback_char
        self._raster_font_size = raster_font_size

        self.options = options if options is not None else SdfOptions4.uniform()
        self.vertical_spacing = vertical_spacing
        self.horizontal_spacing = horizontal_spacing
        self.space_advance_factor = space_advance_factor
        self.texture: Any = None

    @classmethod
    def from_image(
        cls,
        image: Image.Image,
        glyph_map: Mapping[str, GlyphProperties],
        raster_font_size: float,
        fallback_char: str = "?",
        **kwargs: Any,
    ) -> "FontAsset":
        """Create an asset from a Pillow atlas image.

        Args:
            image: Atlas image, converted to RGBA
            glyph_map: Metadata per character
            raster_font_size: Font size the glyphs were rasterized at
            fallback_char: Character drawn for unmapped characters
            **kwargs: Spacing and options, as accepted by the constructor

        Returns:
            FontAsset instance
        """
        rgba = image.convert("RGBA")
        return cls(
            rgba.tobytes(),
            rgba.width,
            rgba.height,
            glyph_map,
            raster_font_size,
            fallback_char,
            **kwargs,
        )

    @property
    def atlas_pixels(self) -> bytes:
        return self._atlas_pixels

    @property
    def atlas_width(self) -> int:
        return self._atlas_width

    @property
    def atlas_height(self) -> int:
        return self._atlas_height

    @property
    def glyph_map(self) -> Mapping[str, GlyphProperties]:
        return MappingProxyType(self._glyph_map)

    @property
    def fallback_char(self) -> str:
        return self._fallback_char

    @property
    def raster_font_size(self) -> float:
        return self._raster_font_size

    def atlas_image(self) -> Image.Image:
        """Get the atlas as a Pillow RGBA image."""
        return Image.frombytes("RGBA", (self._atlas_width, self._atlas_height), self._atlas_pixels)

    def upload(self, uploader: TextureUploader) -> Any:
        """Create a texture from the atlas pixels.

        Args:
            uploader: Backend creating the texture

        Returns:
            The backend's texture handle, also stored on ``texture``
        """
        self.texture = uploader.upload(self._atlas_pixels, self._atlas_width, self._atlas_height)
        return self.texture

    def get_properties(self, char: str) -> GlyphProperties:
        """Get glyph metadata, using the fallback for unmapped characters."""
        properties = self._glyph_map.get(char)
        if properties is None:
            properties = self._glyph_map[self._fallback_char]
        return properties

    def glyph_extent(self, char: str, size: float = 1.0) -> Vec2:
        """Get the padding-free drawn size of a character."""
        return glyph_extent(self.get_properties(char), size)

    def line_height(self, size: float = 1.0) -> float:
        """Get the vertical advance of a line break."""
        return line_height(self._glyph_map, size, self.vertical_spacing)

    def iter_placements(self, text: str, size: float = 1.0) -> Iterator[GlyphPlacement]:
        """Lay out text with the current spacing.

        Args:
            text: String to lay out
            size: Text size

        Yields:
            GlyphPlacement per character
        """
        return iter_placements(
            text,
            size,
            lookup=self.get_properties,
            line_advance=self.line_height(size),
            horizontal_spacing=self.horizontal_spacing,
            space_advance_factor=self.space_advance_factor,
        )

    def measure(self, text: str, size: float = 1.0) -> Vec2:
        """Measure the bounding box of the visible glyphs of a string.

        Args:
            text: String to measure
            size: Text size

        Returns:
            Tuple of (width, height); (0, 0) if nothing is visible
        """
        return measure_placements(self.iter_placements(text, size))

    def render(
        self,
        sink: QuadSink,
        position: Vec2,
        text: str,
        color: Color | None = None,
        size: float = 1.0,
    ) -> int:
        """Emit one quad per visible glyph.

        Text rows grow downward while screen space grows upward, so layout
        y is subtracted from the position.

        Args:
            sink: Receiver of the quads
            position: Screen-space origin of the first line
            text: String to render
            color: Tint applied to all four corners instead of the default
            size: Text size

        Returns:
            Number of quads emitted
        """
        options = self.options if color is None else self.options.with_color(color)
        origin_x, origin_y = position
        count = 0

        for placement in self.iter_placements(text, size):
            if placement.is_empty:
                continue

            center_x, center_y = placement.center
            transform = QuadTransform(size, (origin_x + center_x, origin_y - center_y))
            sink.add_sdf_quad(transform, self.get_properties(placement.char).uv_rect, options)
            count += 1

        return count

    def save(self, stream: BinaryIO) -> None:
        """Write the asset in the binary asset format."""
        from sdfatlas.io.asset_format import write_asset

        write_asset(self, stream)

    @classmethod
    def load(cls, stream: BinaryIO) -> "FontAsset":
        """Read an asset written by save()."""
        from sdfatlas.io.asset_format import read_asset

        return read_asset(stream)

    def save_file(self, path: Path) -> None:
        """Write the asset to a file."""
        from sdfatlas.io.asset_format import write_asset_file

        write_asset_file(self, path)

    @classmethod
    def load_file(cls, path: Path) -> "FontAsset":
        """Read an asset from a file."""
        from sdfatlas.io.asset_format import read_asset_file

        return read_asset_file(path)
