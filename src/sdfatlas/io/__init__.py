"""Font and asset I/O layer for sdfatlas.

This module handles everything that touches files or external font
libraries. It keeps fontTools and Pillow details out of the core
algorithms.

Key responsibilities:
- Inspect TTF/OTF fonts (character coverage, names)
- Rasterize characters into binary masks
- Read and write the binary font asset format

Key classes:
- FontReader: Load fonts and report coverage
- PillowRasterizer: Rasterize characters with Pillow/FreeType
- PrerenderedRasterizer: Serve pre-built masks
"""

from sdfatlas.io.asset_format import (
    decode_asset,
    encode_asset,
    read_asset,
    read_asset_file,
    write_asset,
    write_asset_file,
)
from sdfatlas.io.rasterizer import PillowRasterizer, PrerenderedRasterizer
from sdfatlas.io.reader import FontReader

__all__ = [
    "FontReader",
    "PillowRasterizer",
    "PrerenderedRasterizer",
    "decode_asset",
    "encode_asset",
    "read_asset",
    "read_asset_file",
    "write_asset",
    "write_asset_file",
]
