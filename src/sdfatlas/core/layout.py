"""Grid layout of text using atlas glyph metrics.

Layout walks a string with a cursor that starts at the origin. Spaces
and line breaks move the cursor without producing a glyph; every other
character is placed at the cursor and advances it by its width plus the
horizontal spacing. Layout space grows to the right and downward.

Glyph sizes come from the atlas metadata: the packed field size with the
padding removed, normalized to unit length and scaled by the text size.
All positions therefore scale linearly with the requested size.
"""

import math
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass

from sdfatlas.domain import GlyphProperties, Vec2

NEWLINE_CHARS = frozenset("\n\r")
SPACE_CHAR = " "


@dataclass(frozen=True, slots=True)
class GlyphPlacement:
    """One step of a layout pass.

    Attributes:
        char: Character being placed
        center: Center of the glyph in layout space (y grows downward)
        extent: Padding-free glyph size at the layout size
        is_empty: True for spaces and line breaks, which draw nothing
    """

    char: str
    center: Vec2
    extent: Vec2
    is_empty: bool


def glyph_extent(properties: GlyphProperties, size: float) -> Vec2:
    """Calculate the drawn size of a glyph.

    Args:
        properties: Atlas metadata of the glyph
        size: Text size

    Returns:
        Padding-free size normalized to length ``size``; (0, 0) for a
        degenerate glyph
    """
    width, height = properties.padding_free_size()
    length = math.hypot(width, height)
    if length == 0:
        return (0.0, 0.0)
    return (width / length * size, height / length * size)


def line_height(glyph_map: Mapping[str, GlyphProperties], size: float, vertical_spacing: float) -> float:
    """Calculate the distance between two baselines.

    Args:
        glyph_map: All glyphs of the atlas
        size: Text size
        vertical_spacing: Extra line spacing relative to size

    Returns:
        Tallest padding-free glyph height plus the vertical spacing
    """
    tallest = max((glyph_extent(props, size)[1] for props in glyph_map.values()), default=0.0)
    return tallest + vertical_spacing * size


def iter_placements(
    text: str,
    size: float,
    lookup: Callable[[str], GlyphProperties],
    line_advance: float,
    horizontal_spacing: float,
    space_advance_factor: float,
) -> Iterator[GlyphPlacement]:
    """Lay out a string one character at a time.

    "\\r\\n" counts as a single line break, and a lone "\\r" also breaks
    the line.

    Args:
        text: String to lay out
        size: Text size
        lookup: Returns the glyph metadata of a character
        line_advance: Vertical advance of a line break
        horizontal_spacing: Extra glyph spacing relative to size
        space_advance_factor: Advance of a space relative to size

    Yields:
        GlyphPlacement for every character except the "\\n" of a "\\r\\n" pair
    """
    x = 0.0
    y = 0.0
    previous = ""

    for char in text:
        if char == "\n" and previous == "\r":
            previous = char
            continue
        previous = char

        if char == SPACE_CHAR:
            yield GlyphPlacement(char, (x, y + size / 2), (0.0, 0.0), True)
            x += space_advance_factor * size
            continue

        if char in NEWLINE_CHARS:
            yield GlyphPlacement("\n", (x, y + size / 2), (0.0, 0.0), True)
            y += line_advance
            x = 0.0
            continue

        extent = glyph_extent(lookup(char), size)
        yield GlyphPlacement(char, (x + extent[0] / 2, y + size / 2), extent, False)
        x += extent[0] + horizontal_spacing * size


def measure_placements(placements: Iterable[GlyphPlacement]) -> Vec2:
    """Measure the bounding box of the visible glyphs of a layout.

    Args:
        placements: Output of iter_placements

    Returns:
        Tuple of (width, height); (0, 0) when no glyph is visible
    """
    min_x = min_y = math.inf
    max_x = max_y = -math.inf

    for placement in placements:
        if placement.is_empty:
            continue
        cx, cy = placement.center
        half_w = placement.extent[0] / 2
        half_h = placement.extent[1] / 2
        min_x = min(min_x, cx - half_w)
        max_x = max(max_x, cx + half_w)
        min_y = min(min_y, cy - half_h)
        max_y = max(max_y, cy + half_h)

    if min_x == math.inf:
        return (0.0, 0.0)
    return (max_x - min_x, max_y - min_y)
