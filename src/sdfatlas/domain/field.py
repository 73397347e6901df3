"""Grayscale distance field images."""

from dataclasses import dataclass

from PIL import Image

from sdfatlas.exceptions import InvalidParametersError

# Field value approximating the glyph outline
EDGE_VALUE = 127.5


@dataclass(frozen=True)
class DistanceFieldImage:
    """A single-channel distance field, one byte per pixel.

    Values above EDGE_VALUE lie inside the glyph, values below outside.

    Attributes:
        pixels: Row-major grayscale values
        width: Image width in pixels
        height: Image height in pixels
    """

    pixels: bytes
    width: int
    height: int

    def __post_init__(self) -> None:
        if len(self.pixels) != self.width * self.height:
            raise InvalidParametersError(
                "field",
                f"expected {self.width * self.height} bytes, got {len(self.pixels)}",
            )

    def value_at(self, x: int, y: int) -> int:
        """Get the field value at a pixel."""
        return self.pixels[x + y * self.width]

    def to_image(self) -> Image.Image:
        """Convert to a Pillow grayscale image."""
        return Image.frombytes("L", (self.width, self.height), self.pixels)
