"""Signed distance field generation from binary glyph masks.

Every output pixel is mapped back onto the source mask and searched for
the nearest pixel of the opposite state. The distance is normalized by
the search spread and encoded into one byte: 127.5 marks the outline,
values toward 255 lie inside the glyph, values toward 0 outside.

In-bounds pixels are searched with an outward spiral, which finishes
quickly when the outline is close. Pixels in the padding border map
outside the mask and have no local neighborhood; they fall back to a
brute-force scan over all lit pixels.
"""

import math

from sdfatlas.core.spiral import SpiralWalk
from sdfatlas.domain import BitMask, DistanceFieldImage
from sdfatlas.exceptions import InvalidParametersError


class DistanceFieldGenerator:
    """Converts glyph masks into distance field images.

    Args:
        upscale_resolution: Resolution of the search grid relative to the
            glyph raster. Half of it is the search spread, the largest
            distance the field can encode.
        target_size: Output size in pixels (before padding) for a mask of
            upscale_resolution x upscale_resolution pixels
        padding: Border pixels added on each side of the output

    Raises:
        InvalidParametersError: If the spread is too small to normalize,
            or the target size or padding is out of range

    Example:
        generator = DistanceFieldGenerator(upscale_resolution=64, target_size=32, padding=8)
        field = generator.generate(mask)
    """

    def __init__(self, upscale_resolution: int, target_size: int, padding: int = 12) -> None:
        spread = upscale_resolution // 2
        if spread <= 0.5:
            raise InvalidParametersError(
                "upscale_resolution",
                f"spread {spread} must be greater than 0.5 (resolution >= 2)",
            )
        if target_size < 1:
            raise InvalidParametersError("target_size", "must be at least 1")
        if padding < 0:
            raise InvalidParametersError("padding", "must not be negative")

        self.upscale_resolution = upscale_resolution
        self.target_size = target_size
        self.padding = padding
        self.spread = spread

    def core_size(self, mask_width: int, mask_height: int) -> tuple[int, int]:
        """Output size without padding for a mask of the given size."""
        return (
            int(self.target_size * mask_width / self.upscale_resolution),
            int(self.target_size * mask_height / self.upscale_resolution),
        )

    def generate(self, mask: BitMask) -> DistanceFieldImage:
        """Generate the distance field for one glyph mask.

        Args:
            mask: Binary glyph raster

        Returns:
            DistanceFieldImage of (core width + 2 * padding) x (core height + 2 * padding)

        Raises:
            InvalidParametersError: If the mask scales down to zero pixels
        """
        core_width, core_height = self.core_size(mask.width, mask.height)
        if core_width < 1 or core_height < 1:
            raise InvalidParametersError(
                "mask",
                f"{mask.width}x{mask.height} glyph scales to an empty "
                f"{core_width}x{core_height} field",
            )

        padding = self.padding
        width = core_width + 2 * padding
        height = core_height + 2 * padding

        # The padded grid [-p, core + p] maps linearly onto [-p * s, (core + p) * s]
        scale_x = mask.width / core_width
        scale_y = mask.height / core_height

        lit_pixels = mask.lit_pixels()
        pixels = bytearray(width * height)

        for out_y in range(height):
            source_y = int((out_y - padding) * scale_y)
            row = out_y * width

            for out_x in range(width):
                source_x = int((out_x - padding) * scale_x)
                state, min_sq = self._nearest_unlike(mask, source_x, source_y, lit_pixels)
                pixels[row + out_x] = self._encode(state, min_sq)

        return DistanceFieldImage(bytes(pixels), width, height)

    def _nearest_unlike(
        self,
        mask: BitMask,
        px: int,
        py: int,
        lit_pixels: list[tuple[int, int]],
    ) -> tuple[int, float]:
        """Find the squared distance to the closest cell of a different state.

        Args:
            mask: Mask being searched
            px: Horizontal source position
            py: Vertical source position
            lit_pixels: All lit pixels of the mask

        Returns:
            Tuple of (state at the position, squared distance capped at spread^2)
        """
        spread = self.spread
        state, out_of_bounds = mask.sample(px, py)
        min_sq = float(spread * spread)

        if out_of_bounds:
            for x, y in lit_pixels:
                dx = px - x
                dy = py - y
                d_sq = dx * dx + dy * dy
                if d_sq < min_sq:
                    min_sq = d_sq
            return state, min_sq

        walk = SpiralWalk()
        found_ring = -1

        for _ in range(spread * spread * 4):
            # A hit early in a ring may not be the ring's closest cell
            if found_ring != -1 and walk.ring > found_ring:
                break

            value, _ = mask.sample(px + walk.x, py + walk.y)
            if value != state:
                d_sq = walk.x * walk.x + walk.y * walk.y
                found_ring = walk.ring
                if d_sq < min_sq:
                    min_sq = d_sq

            walk.advance()

        return state, min_sq

    def _encode(self, state: int, min_sq: float) -> int:
        """Normalize a distance into a field byte."""
        distance = math.sqrt(min_sq)
        t = (distance - 0.5) / (self.spread - 0.5)
        if state == 0:
            t = -t
        value = round((t + 1) * 0.5 * 255)
        return max(0, min(255, value))


def generate_distance_field(
    mask: BitMask,
    upscale_resolution: int,
    target_size: int,
    padding: int = 12,
) -> DistanceFieldImage:
    """Generate a distance field with a one-off generator.

    Args:
        mask: Binary glyph raster
        upscale_resolution: Search grid resolution
        target_size: Output size before padding
        padding: Border pixels on each side

    Returns:
        DistanceFieldImage for the mask
    """
    return DistanceFieldGenerator(upscale_resolution, target_size, padding).generate(mask)
