"""Binary glyph masks.

A BitMask is the query surface the distance field generator searches:
one byte per pixel, 1 for lit and 0 for unlit, stored row-major.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sdfatlas.exceptions import InvalidParametersError

if TYPE_CHECKING:
    from PIL import Image

# A pixel is lit when its summed RGB channels exceed this value
DEFAULT_THRESHOLD = 100


@dataclass(frozen=True)
class BitMask:
    """An immutable regular grid of bits.

    Attributes:
        data: Row-major pixel values, each 0 or 1
        width: Grid width in pixels
        height: Grid height in pixels
    """

    data: bytes
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise InvalidParametersError(
                "mask", f"negative size {self.width}x{self.height}"
            )
        if len(self.data) != self.width * self.height:
            raise InvalidParametersError(
                "mask",
                f"expected {self.width * self.height} bytes, got {len(self.data)}",
            )

    def sample(self, x: int, y: int) -> tuple[int, bool]:
        """Get the bit at the specified position.

        Args:
            x: Horizontal position in the grid
            y: Vertical position in the grid

        Returns:
            Tuple of (value, out_of_bounds). The value is 0 when the
            position is outside the grid.
        """
        if -1 < x < self.width and -1 < y < self.height:
            return self.data[x + y * self.width], False
        return 0, True

    def lit_pixels(self) -> list[tuple[int, int]]:
        """List the coordinates of all lit pixels in row-major order."""
        width = self.width
        return [(i % width, i // width) for i, value in enumerate(self.data) if value]

    def is_blank(self) -> bool:
        """Check if no pixel is lit."""
        return not any(self.data)

    def flipped(self) -> "BitMask":
        """Return the mask mirrored vertically."""
        rows = [
            self.data[y * self.width : (y + 1) * self.width]
            for y in range(self.height)
        ]
        return BitMask(b"".join(reversed(rows)), self.width, self.height)

    @classmethod
    def from_rows(cls, rows: list[str], lit: str = "#") -> "BitMask":
        """Build a mask from text rows, e.g. ``[".#.", "###"]``.

        Args:
            rows: Equal-length strings, one per row
            lit: Character marking a lit pixel

        Returns:
            BitMask instance
        """
        height = len(rows)
        width = len(rows[0]) if rows else 0
        data = bytes(1 if ch == lit else 0 for row in rows for ch in row)
        return cls(data, width, height)

    @classmethod
    def from_image(cls, image: "Image.Image", threshold: int = DEFAULT_THRESHOLD) -> "BitMask":
        """Threshold a Pillow image into a mask.

        Args:
            image: Source image in any mode convertible to RGB
            threshold: A pixel is lit when R + G + B exceeds this value

        Returns:
            BitMask with the image's dimensions
        """
        rgb = image.convert("RGB")
        raw = rgb.tobytes()
        data = bytes(
            1 if raw[i] + raw[i + 1] + raw[i + 2] > threshold else 0
            for i in range(0, len(raw), 3)
        )
        return cls(data, rgb.width, rgb.height)
