"""Per-corner SDF render options.

Options are immutable values; changing a field yields a new record.
"""

from dataclasses import dataclass, replace

Color = tuple[float, float, float]


@dataclass(frozen=True, slots=True)
class SdfOptions:
    """Render options for one quad corner.

    Attributes:
        weight: Field threshold treated as the glyph edge (0-1)
        smoothing: Width of the anti-aliased edge band
        alpha: Opacity multiplier
        color: RGB tint, each channel 0-1
    """

    weight: float = 0.5
    smoothing: float = 0.1
    alpha: float = 1.0
    color: Color = (1.0, 1.0, 1.0)

    def with_color(self, color: Color) -> "SdfOptions":
        """Return a copy with a different tint."""
        return replace(self, color=color)


@dataclass(frozen=True, slots=True)
class SdfOptions4:
    """Render options for the four corners of a quad.

    Corners follow the quad vertex order: bottom-right, top-right,
    top-left, bottom-left.
    """

    s0: SdfOptions
    s1: SdfOptions
    s2: SdfOptions
    s3: SdfOptions

    @classmethod
    def uniform(
        cls,
        weight: float = 0.5,
        smoothing: float = 0.1,
        alpha: float = 1.0,
        color: Color = (1.0, 1.0, 1.0),
    ) -> "SdfOptions4":
        """Create options with the same values on every corner."""
        options = SdfOptions(weight=weight, smoothing=smoothing, alpha=alpha, color=color)
        return cls(options, options, options, options)

    @property
    def corners(self) -> tuple[SdfOptions, SdfOptions, SdfOptions, SdfOptions]:
        return (self.s0, self.s1, self.s2, self.s3)

    @property
    def average_weight(self) -> float:
        return sum(s.weight for s in self.corners) / 4

    @property
    def average_smoothing(self) -> float:
        return sum(s.smoothing for s in self.corners) / 4

    def with_colors(self, c0: Color, c1: Color, c2: Color, c3: Color) -> "SdfOptions4":
        """Return a copy with one tint per corner."""
        return SdfOptions4(
            self.s0.with_color(c0),
            self.s1.with_color(c1),
            self.s2.with_color(c2),
            self.s3.with_color(c3),
        )

    def with_color(self, color: Color) -> "SdfOptions4":
        """Return a copy with the same tint on every corner."""
        return self.with_colors(color, color, color, color)

    def with_weight(self, weight: float) -> "SdfOptions4":
        """Return a copy with the same weight on every corner."""
        return SdfOptions4(*(replace(s, weight=weight) for s in self.corners))

    def with_smoothing(self, smoothing: float) -> "SdfOptions4":
        """Return a copy with the same smoothing on every corner."""
        return SdfOptions4(*(replace(s, smoothing=smoothing) for s in self.corners))
