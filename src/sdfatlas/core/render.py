"""Quad records emitted when rendering text.

The renderer itself is external. Text rendering hands it one record per
visible glyph through a QuadSink: a transform placing a unit quad on
screen, the glyph's texture coordinates and the per-corner options.
QuadBuffer is a sink that expands the records into vertices, the way a
batch renderer would before upload.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol

from sdfatlas.domain import SdfOptions, SdfOptions4, UvRect, Vec2

Matrix4 = tuple[
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
]

# Unit quad corners matching the UvRect corner order
UNIT_QUAD: tuple[Vec2, Vec2, Vec2, Vec2] = (
    (0.5, 0.5),
    (0.5, -0.5),
    (-0.5, -0.5),
    (-0.5, 0.5),
)


@dataclass(frozen=True, slots=True)
class QuadTransform:
    """Uniform scale followed by a translation in the XY plane.

    Attributes:
        scale: Scale applied to the unit quad
        translation: Screen-space position of the quad center
    """

    scale: float
    translation: Vec2

    @property
    def matrix(self) -> Matrix4:
        """Row-vector 4x4 matrix: Scale(s, s, 0) * Translation(tx, ty, 0)."""
        s = self.scale
        tx, ty = self.translation
        return (
            (s, 0.0, 0.0, 0.0),
            (0.0, s, 0.0, 0.0),
            (0.0, 0.0, 0.0, 0.0),
            (tx, ty, 0.0, 1.0),
        )

    def apply(self, point: Vec2) -> tuple[float, float, float]:
        """Transform a point of the unit quad."""
        return (
            point[0] * self.scale + self.translation[0],
            point[1] * self.scale + self.translation[1],
            0.0,
        )


@dataclass(frozen=True, slots=True)
class SdfVertex:
    """A vertex of an SDF quad."""

    position: tuple[float, float, float]
    uv: Vec2
    options: SdfOptions


@dataclass(frozen=True, slots=True)
class SdfQuad:
    """Four vertices in bottom-right, top-right, top-left, bottom-left order."""

    v0: SdfVertex
    v1: SdfVertex
    v2: SdfVertex
    v3: SdfVertex

    @classmethod
    def create(cls, transform: QuadTransform, uv_rect: UvRect, options: SdfOptions4) -> "SdfQuad":
        """Transform the unit quad and pair its corners with UVs and options."""
        vertices = [
            SdfVertex(transform.apply(corner), uv, corner_options)
            for corner, uv, corner_options in zip(UNIT_QUAD, uv_rect.corners, options.corners)
        ]
        return cls(*vertices)

    @property
    def vertices(self) -> tuple[SdfVertex, SdfVertex, SdfVertex, SdfVertex]:
        return (self.v0, self.v1, self.v2, self.v3)


class QuadSink(Protocol):
    """Receives glyph quads from text rendering."""

    def add_sdf_quad(self, transform: QuadTransform, uv_rect: UvRect, options: SdfOptions4) -> None: ...


class TextureUploader(Protocol):
    """Creates a GPU texture from RGBA atlas pixels."""

    def upload(self, pixels: bytes, width: int, height: int) -> Any: ...


@dataclass
class QuadBuffer:
    """A QuadSink collecting quads in submission order."""

    quads: list[SdfQuad] = field(default_factory=list)

    def add_sdf_quad(self, transform: QuadTransform, uv_rect: UvRect, options: SdfOptions4) -> None:
        self.quads.append(SdfQuad.create(transform, uv_rect, options))

    def clear(self) -> None:
        self.quads.clear()

    def __len__(self) -> int:
        return len(self.quads)
