"""Glyph metadata stored in the atlas.

This module defines the per-character record the atlas builder derives
from a packed rectangle, and the texture coordinate quad it contains.
"""

from dataclasses import dataclass
from pathlib import Path

Vec2 = tuple[float, float]


@dataclass(frozen=True, slots=True)
class UvRect:
    """Texture coordinates of a glyph's four corners, each in [0, 1].

    Attributes:
        bottom_right: (u, v) of the corner at the packed rect's max x, max y
        top_right: (u, v) of the corner at max x, min y
        top_left: (u, v) of the corner at min x, min y
        bottom_left: (u, v) of the corner at min x, max y
    """

    bottom_right: Vec2
    top_right: Vec2
    top_left: Vec2
    bottom_left: Vec2

    @classmethod
    def from_rect(cls, x: float, y: float, width: float, height: float) -> "UvRect":
        """Build the corners of an axis-aligned rectangle in UV space."""
        return cls(
            bottom_right=(x + width, y + height),
            top_right=(x + width, y),
            top_left=(x, y),
            bottom_left=(x, y + height),
        )

    @classmethod
    def full(cls) -> "UvRect":
        """UV rectangle covering the whole texture."""
        return cls.from_rect(0.0, 0.0, 1.0, 1.0)

    @property
    def corners(self) -> tuple[Vec2, Vec2, Vec2, Vec2]:
        return (self.bottom_right, self.top_right, self.top_left, self.bottom_left)

    @property
    def width(self) -> float:
        return self.bottom_right[0] - self.top_left[0]

    @property
    def height(self) -> float:
        return self.bottom_right[1] - self.top_left[1]


@dataclass(frozen=True, slots=True)
class GlyphProperties:
    """Atlas metadata for one character.

    Attributes:
        padding_fraction: Padding as a fraction of the packed width/height
        uv_rect: Location of the glyph field in the atlas
        source_size: Packed field size in pixels, padding included
    """

    padding_fraction: Vec2
    uv_rect: UvRect
    source_size: Vec2

    def padding_free_size(self) -> Vec2:
        """Source size with the padding on both sides removed."""
        width, height = self.source_size
        pad_x, pad_y = self.padding_fraction
        return (width - 2 * pad_x * width, height - 2 * pad_y * height)


@dataclass(frozen=True)
class FontDescription:
    """The font a rasterizer draws characters with.

    Attributes:
        path: Path to a TTF/OTF file, or None for the rasterizer's default font
        size: Raster font size in pixels
        index: Face index inside a font collection
    """

    path: Path | None
    size: float
    index: int = 0
