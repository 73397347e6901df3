"""Binary font asset format.

Layout (little-endian), in order:

    magic            4s   b"SDFA"
    version          u16
    image            u32 length + PNG bytes (RGBA)
    glyph count      u32
      code point     u32
      padding        2 x f64
      uv rect        8 x f64  (bottom-right, top-right, top-left, bottom-left)
      source size    2 x f64
    fallback         u32 code point
    options          4 x (weight, smoothing, alpha, r, g, b) f64
    spacing          4 x f64  (vertical, horizontal, raster font size, space advance)

Glyph entries are written in character order so equal assets encode to
equal bytes. Floats are stored as f64 so values round-trip exactly.
"""

import io
import struct
from pathlib import Path
from typing import BinaryIO

from PIL import Image, UnidentifiedImageError

from sdfatlas.core.asset import FontAsset
from sdfatlas.domain import GlyphProperties, SdfOptions, SdfOptions4, UvRect
from sdfatlas.exceptions import AssetSaveError, CorruptAssetError, SdfAtlasError

MAGIC = b"SDFA"
SCHEMA_VERSION = 1

_HEADER = struct.Struct("<4sH")
_LENGTH = struct.Struct("<I")
_GLYPH = struct.Struct("<I12d")
_CORNER_OPTIONS = struct.Struct("<6d")
_SCALARS = struct.Struct("<4d")


def encode_asset(asset: FontAsset) -> bytes:
    """Serialize an asset into the binary format.

    Args:
        asset: Asset to encode

    Returns:
        Encoded bytes
    """
    png = io.BytesIO()
    asset.atlas_image().save(png, format="PNG")
    image_bytes = png.getvalue()

    parts = [
        _HEADER.pack(MAGIC, SCHEMA_VERSION),
        _LENGTH.pack(len(image_bytes)),
        image_bytes,
        _LENGTH.pack(len(asset.glyph_map)),
    ]

    for char in sorted(asset.glyph_map):
        props = asset.glyph_map[char]
        uv_values = [value for corner in props.uv_rect.corners for value in corner]
        parts.append(
            _GLYPH.pack(ord(char), *props.padding_fraction, *uv_values, *props.source_size)
        )

    parts.append(_LENGTH.pack(ord(asset.fallback_char)))

    for corner in asset.options.corners:
        parts.append(
            _CORNER_OPTIONS.pack(corner.weight, corner.smoothing, corner.alpha, *corner.color)
        )

    parts.append(
        _SCALARS.pack(
            asset.vertical_spacing,
            asset.horizontal_spacing,
            asset.raster_font_size,
            asset.space_advance_factor,
        )
    )

    return b"".join(parts)


class _Cursor:
    """Sequential reader over an in-memory buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    def take(self, size: int, what: str) -> bytes:
        end = self._offset + size
        if end > len(self._data):
            raise CorruptAssetError(f"stream truncated while reading {what}")
        chunk = self._data[self._offset : end]
        self._offset = end
        return chunk

    def unpack(self, layout: struct.Struct, what: str) -> tuple:
        return layout.unpack(self.take(layout.size, what))

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset


def _to_char(code_point: int) -> str:
    try:
        return chr(code_point)
    except (ValueError, OverflowError) as e:
        raise CorruptAssetError(f"invalid code point {code_point}") from e


def _decode_image(data: bytes) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (OSError, UnidentifiedImageError, ValueError, Image.DecompressionBombError) as e:
        raise CorruptAssetError(f"atlas image cannot be decoded: {e}") from e
    return image.convert("RGBA")


def decode_asset(data: bytes) -> FontAsset:
    """Deserialize an asset from the binary format.

    Args:
        data: Encoded bytes

    Returns:
        FontAsset instance

    Raises:
        CorruptAssetError: If the data does not match the schema
    """
    cursor = _Cursor(data)

    magic, version = cursor.unpack(_HEADER, "header")
    if magic != MAGIC:
        raise CorruptAssetError(f"bad magic {magic!r}")
    if version != SCHEMA_VERSION:
        raise CorruptAssetError(f"unsupported schema version {version}")

    (image_length,) = cursor.unpack(_LENGTH, "image length")
    image = _decode_image(cursor.take(image_length, "atlas image"))

    (glyph_count,) = cursor.unpack(_LENGTH, "glyph count")
    glyph_map: dict[str, GlyphProperties] = {}
    for _ in range(glyph_count):
        code_point, *values = cursor.unpack(_GLYPH, "glyph entry")
        glyph_map[_to_char(code_point)] = GlyphProperties(
            padding_fraction=(values[0], values[1]),
            uv_rect=UvRect(
                bottom_right=(values[2], values[3]),
                top_right=(values[4], values[5]),
                top_left=(values[6], values[7]),
                bottom_left=(values[8], values[9]),
            ),
            source_size=(values[10], values[11]),
        )

    (fallback_code,) = cursor.unpack(_LENGTH, "fallback")
    fallback = _to_char(fallback_code)

    corners = []
    for _ in range(4):
        weight, smoothing, alpha, r, g, b = cursor.unpack(_CORNER_OPTIONS, "render options")
        corners.append(SdfOptions(weight=weight, smoothing=smoothing, alpha=alpha, color=(r, g, b)))

    vertical, horizontal, raster_size, space_advance = cursor.unpack(_SCALARS, "spacing")

    if cursor.remaining:
        raise CorruptAssetError(f"{cursor.remaining} unexpected trailing bytes")

    try:
        return FontAsset.from_image(
            image,
            glyph_map,
            raster_size,
            fallback,
            options=SdfOptions4(*corners),
            vertical_spacing=vertical,
            horizontal_spacing=horizontal,
            space_advance_factor=space_advance,
        )
    except SdfAtlasError as e:
        raise CorruptAssetError(str(e)) from e


def write_asset(asset: FontAsset, stream: BinaryIO) -> None:
    """Encode an asset and write it to a stream in one call."""
    stream.write(encode_asset(asset))
    stream.flush()


def read_asset(stream: BinaryIO) -> FontAsset:
    """Read and decode an asset from a stream."""
    return decode_asset(stream.read())


def write_asset_file(asset: FontAsset, path: Path) -> None:
    """Write an asset to a file.

    Raises:
        AssetSaveError: If the file cannot be written
    """
    data = encode_asset(asset)
    try:
        path.write_bytes(data)
    except OSError as e:
        raise AssetSaveError(str(path), str(e)) from e


def read_asset_file(path: Path) -> FontAsset:
    """Read an asset from a file.

    Raises:
        FileNotFoundError: If the file does not exist
        CorruptAssetError: If the file is not a valid asset
    """
    if not path.exists():
        raise FileNotFoundError(f"Asset file not found: {path}")
    return decode_asset(path.read_bytes())
