"""Domain models for sdfatlas.

This module contains the value types that flow through atlas generation
and text layout. All models are designed to be:

- Immutable (frozen dataclasses)
- Picklable for inter-process communication (parallel processing)
- Independent of any rendering backend

Key classes:
- BitMask: A binary glyph raster
- DistanceFieldImage: A grayscale signed distance field
- UvRect: Texture coordinates of a glyph quad
- GlyphProperties: Per-character atlas metadata
- FontDescription: The font handed to a rasterizer
- SdfOptions / SdfOptions4: Per-corner render options
"""

from sdfatlas.domain.field import EDGE_VALUE, DistanceFieldImage
from sdfatlas.domain.glyph import FontDescription, GlyphProperties, UvRect, Vec2
from sdfatlas.domain.mask import BitMask
from sdfatlas.domain.options import Color, SdfOptions, SdfOptions4

__all__: list[str] = [
    "EDGE_VALUE",
    # Type aliases
    "Color",
    "Vec2",
    # Core types
    "BitMask",
    "DistanceFieldImage",
    "FontDescription",
    "GlyphProperties",
    "SdfOptions",
    "SdfOptions4",
    "UvRect",
]
