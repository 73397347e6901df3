"""Core algorithms for sdfatlas.

This module contains the core algorithms for:

- Distance field generation (spiral nearest-unlike-pixel search)
- Shelf packing of glyph fields into an atlas
- Text layout and measurement
- Quad emission for SDF text rendering

Key classes:
- DistanceFieldGenerator: Converts binary masks into distance fields
- ShelfPacker: Packs rectangles into height-sorted shelves
- AtlasBuilder: Builds font assets in parallel
- FontAsset: Atlas plus glyph metadata with layout and rendering
- QuadBuffer: Collects emitted SDF quads
"""

from sdfatlas.core.asset import FontAsset
from sdfatlas.core.builder import (
    AtlasBuilder,
    GlyphRasterizer,
    build_atlas,
    compose_atlas,
    extract_glyph_map,
    generate_glyph_field,
)
from sdfatlas.core.distance_field import DistanceFieldGenerator, generate_distance_field
from sdfatlas.core.layout import GlyphPlacement, iter_placements, measure_placements
from sdfatlas.core.packer import PackedRect, ShelfPacker, packing_bound
from sdfatlas.core.render import (
    QuadBuffer,
    QuadSink,
    QuadTransform,
    SdfQuad,
    SdfVertex,
    TextureUploader,
)
from sdfatlas.core.spiral import SpiralWalk

__all__ = [
    # Builder
    "AtlasBuilder",
    # Distance fields
    "DistanceFieldGenerator",
    # Asset
    "FontAsset",
    "GlyphPlacement",
    "GlyphRasterizer",
    # Packing
    "PackedRect",
    # Rendering
    "QuadBuffer",
    "QuadSink",
    "QuadTransform",
    "SdfQuad",
    "SdfVertex",
    "ShelfPacker",
    "SpiralWalk",
    "TextureUploader",
    "build_atlas",
    "compose_atlas",
    "extract_glyph_map",
    "generate_distance_field",
    "generate_glyph_field",
    "iter_placements",
    "measure_placements",
    "packing_bound",
]
