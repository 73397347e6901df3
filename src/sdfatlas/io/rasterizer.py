"""Glyph rasterizers producing binary masks.

Rasterizers are handed to worker processes, so they must be picklable:
they carry only plain configuration and load fonts lazily inside the
worker.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from PIL import Image, ImageDraw, ImageFont

from sdfatlas.domain import BitMask, FontDescription
from sdfatlas.domain.mask import DEFAULT_THRESHOLD

_FontKey = tuple[str | None, float, int]

# Loaded fonts, per worker process
_font_cache: dict[_FontKey, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}


def _load_font(font: FontDescription) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    key = (str(font.path) if font.path is not None else None, font.size, font.index)
    cached = _font_cache.get(key)
    if cached is None:
        if font.path is None:
            cached = ImageFont.load_default(size=font.size)
        else:
            cached = ImageFont.truetype(str(font.path), size=font.size, index=font.index)
        _font_cache[key] = cached
    return cached


@dataclass(frozen=True)
class PillowRasterizer:
    """Draws characters with Pillow's FreeType renderer.

    The raster is cropped to the character's ink bounding box. Characters
    that render no lit pixels yield None.

    Attributes:
        threshold: A pixel is lit when R + G + B exceeds this value
    """

    threshold: int = DEFAULT_THRESHOLD

    def rasterize(self, char: str, font: FontDescription) -> BitMask | None:
        """Rasterize one character.

        Args:
            char: Character to draw
            font: Font to draw it with; a None path selects Pillow's default font

        Returns:
            BitMask cropped to the glyph, or None if nothing was drawn
        """
        pil_font = _load_font(font)
        left, top, right, bottom = pil_font.getbbox(char)
        width = int(right - left)
        height = int(bottom - top)
        if width <= 0 or height <= 0:
            return None

        image = Image.new("L", (width, height), 0)
        ImageDraw.Draw(image).text((-left, -top), char, font=pil_font, fill=255)

        mask = BitMask.from_image(image, self.threshold)
        if mask.is_blank():
            return None
        return mask


@dataclass(frozen=True)
class PrerenderedRasterizer:
    """Serves masks that were rasterized ahead of time, e.g. from a bitmap font.

    Attributes:
        masks: Mask per character; characters without an entry yield None
    """

    masks: Mapping[str, BitMask] = field(default_factory=dict)

    def rasterize(self, char: str, font: FontDescription) -> BitMask | None:  # noqa: ARG002
        return self.masks.get(char)
