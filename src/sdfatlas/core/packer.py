"""Greedy shelf packing of rectangles into an atlas.

Rectangles are sorted by height and placed left to right in rows
("shelves"). When the next rectangle would overflow the row width, the
cursor moves down by the tallest rectangle of the current row.

The sort is ascending by height. Descending order usually wastes less
vertical space, but ascending order is what existing atlases were packed
with, so it is kept for output compatibility.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from sdfatlas.exceptions import InvalidParametersError

T = TypeVar("T")


@dataclass(eq=False)
class PackedRect(Generic[T]):
    """A rectangle to be placed in the atlas.

    Attributes:
        payload: Opaque value carried alongside the rectangle
        width: Width in pixels
        height: Height in pixels
        x: Horizontal position, valid once packed
        y: Vertical position, valid once packed
        packed: True after the packer has placed the rectangle
    """

    payload: T
    width: int
    height: int
    x: int = 0
    y: int = 0
    packed: bool = False

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def overlaps(self, other: "PackedRect[object]") -> bool:
        """Check if the interiors of two rectangles intersect."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )


def packing_bound(rects: Iterable[PackedRect[T]]) -> tuple[int, int]:
    """Calculate the size of the box enclosing all rectangles.

    Args:
        rects: Packed rectangles

    Returns:
        Tuple of (max right edge, max bottom edge); (0, 0) if empty
    """
    width = 0
    height = 0
    for rect in rects:
        width = max(width, rect.right)
        height = max(height, rect.bottom)
    return width, height


class ShelfPacker:
    """Packs rectangles into rows of bounded width.

    Rectangles wider than the row are still placed, alone at the start of
    a row; the resulting bound then exceeds the row width.

    Example:
        packer = ShelfPacker(max_row_width=256)
        width, height = packer.pack(rects)
    """

    def __init__(self, max_row_width: int) -> None:
        if max_row_width < 1:
            raise InvalidParametersError("max_row_width", "must be at least 1")
        self.max_row_width = max_row_width

    def pack(self, rects: Iterable[PackedRect[T]]) -> tuple[int, int]:
        """Assign positions to all rectangles.

        Args:
            rects: Rectangles to place; they are updated in place

        Returns:
            Atlas bound as (width, height)
        """
        ordered = sorted(rects, key=lambda rect: rect.height)

        x = 0
        y = 0
        row_height = 0

        for rect in ordered:
            if x + rect.width > self.max_row_width:
                y += row_height
                x = 0
                row_height = 0

            rect.x = x
            rect.y = y
            rect.packed = True

            x += rect.width
            row_height = max(row_height, rect.height)

        return packing_bound(ordered)
