"""Tests for domain models to verify they work correctly."""

from dataclasses import FrozenInstanceError

import pytest
from PIL import Image

from sdfatlas.domain import (
    EDGE_VALUE,
    BitMask,
    DistanceFieldImage,
    FontDescription,
    GlyphProperties,
    SdfOptions,
    SdfOptions4,
    UvRect,
)
from sdfatlas.exceptions import InvalidParametersError


class TestBitMask:
    """Tests for BitMask class."""

    def test_from_rows(self) -> None:
        """Test building a mask from text rows."""
        mask = BitMask.from_rows([".#.", "###"])
        assert mask.width == 3
        assert mask.height == 2
        assert mask.data == bytes([0, 1, 0, 1, 1, 1])

    def test_sample_in_bounds(self) -> None:
        """Test sampling inside the grid."""
        mask = BitMask.from_rows([".#", "#."])
        assert mask.sample(1, 0) == (1, False)
        assert mask.sample(1, 1) == (0, False)

    def test_sample_out_of_bounds(self) -> None:
        """Test sampling outside the grid reports unlit and out of bounds."""
        mask = BitMask.from_rows(["##", "##"])
        assert mask.sample(-1, 0) == (0, True)
        assert mask.sample(0, -1) == (0, True)
        assert mask.sample(2, 0) == (0, True)
        assert mask.sample(0, 2) == (0, True)

    def test_lit_pixels_row_major(self) -> None:
        """Test lit pixel coordinates are listed row by row."""
        mask = BitMask.from_rows(["#..", "..#", ".#."])
        assert mask.lit_pixels() == [(0, 0), (2, 1), (1, 2)]

    def test_is_blank(self) -> None:
        """Test blank detection."""
        assert BitMask.from_rows(["...", "..."]).is_blank()
        assert not BitMask.from_rows(["...", ".#."]).is_blank()

    def test_flipped(self) -> None:
        """Test vertical mirroring."""
        mask = BitMask.from_rows(["#..", "...", "..#"])
        flipped = mask.flipped()
        assert flipped == BitMask.from_rows(["..#", "...", "#.."])
        assert flipped.flipped() == mask

    def test_size_mismatch_rejected(self) -> None:
        """Test data length must match dimensions."""
        with pytest.raises(InvalidParametersError):
            BitMask(bytes(5), 2, 2)

    def test_negative_size_rejected(self) -> None:
        """Test negative dimensions are rejected."""
        with pytest.raises(InvalidParametersError):
            BitMask(b"", -1, 0)

    def test_from_image_threshold(self) -> None:
        """Test a pixel is lit when its channel sum exceeds the threshold."""
        image = Image.new("RGB", (3, 1))
        image.putpixel((0, 0), (0, 0, 0))
        image.putpixel((1, 0), (40, 30, 30))  # sum 100, not above threshold
        image.putpixel((2, 0), (40, 30, 31))  # sum 101
        mask = BitMask.from_image(image)
        assert mask.data == bytes([0, 0, 1])

    def test_from_grayscale_image(self) -> None:
        """Test grayscale images are expanded to RGB before thresholding."""
        image = Image.new("L", (2, 1))
        image.putpixel((0, 0), 34)  # 3 * 34 = 102
        image.putpixel((1, 0), 33)  # 3 * 33 = 99
        mask = BitMask.from_image(image)
        assert mask.data == bytes([1, 0])

    def test_mask_immutable(self) -> None:
        """Test that masks are immutable."""
        mask = BitMask.from_rows(["#"])
        with pytest.raises(FrozenInstanceError):
            mask.width = 2  # type: ignore


class TestDistanceFieldImage:
    """Tests for DistanceFieldImage class."""

    def test_value_at(self) -> None:
        """Test pixel lookup is row-major."""
        field = DistanceFieldImage(bytes([1, 2, 3, 4, 5, 6]), 3, 2)
        assert field.value_at(0, 0) == 1
        assert field.value_at(2, 0) == 3
        assert field.value_at(1, 1) == 5

    def test_size_mismatch_rejected(self) -> None:
        """Test pixel buffer must match dimensions."""
        with pytest.raises(InvalidParametersError):
            DistanceFieldImage(bytes(3), 2, 2)

    def test_to_image(self) -> None:
        """Test conversion to a Pillow grayscale image."""
        field = DistanceFieldImage(bytes([0, 128, 255, 7]), 2, 2)
        image = field.to_image()
        assert image.mode == "L"
        assert image.size == (2, 2)
        assert image.getpixel((1, 0)) == 128
        assert image.getpixel((1, 1)) == 7

    def test_edge_value(self) -> None:
        """Test the outline value sits in the middle of the byte range."""
        assert EDGE_VALUE == 127.5


class TestUvRect:
    """Tests for UvRect class."""

    def test_from_rect_corner_order(self) -> None:
        """Test corners are bottom-right, top-right, top-left, bottom-left."""
        uv = UvRect.from_rect(0.25, 0.5, 0.25, 0.125)
        assert uv.corners == (
            (0.5, 0.625),
            (0.5, 0.5),
            (0.25, 0.5),
            (0.25, 0.625),
        )

    def test_width_and_height(self) -> None:
        """Test size derived from the corners."""
        uv = UvRect.from_rect(0.25, 0.5, 0.25, 0.125)
        assert uv.width == pytest.approx(0.25)
        assert uv.height == pytest.approx(0.125)

    def test_full(self) -> None:
        """Test the full-texture rectangle."""
        uv = UvRect.full()
        assert uv.top_left == (0.0, 0.0)
        assert uv.bottom_right == (1.0, 1.0)


class TestGlyphProperties:
    """Tests for GlyphProperties class."""

    def test_padding_free_size(self) -> None:
        """Test padding is removed on both sides."""
        props = GlyphProperties(
            padding_fraction=(2 / 28, 2 / 28),
            uv_rect=UvRect.full(),
            source_size=(28.0, 28.0),
        )
        width, height = props.padding_free_size()
        assert width == pytest.approx(24.0)
        assert height == pytest.approx(24.0)

    def test_padding_free_size_non_square(self) -> None:
        """Test horizontal and vertical padding are applied separately."""
        props = GlyphProperties(
            padding_fraction=(4 / 20, 4 / 40),
            uv_rect=UvRect.full(),
            source_size=(20.0, 40.0),
        )
        width, height = props.padding_free_size()
        assert width == pytest.approx(12.0)
        assert height == pytest.approx(32.0)


class TestSdfOptions:
    """Tests for SdfOptions and SdfOptions4."""

    def test_defaults(self) -> None:
        """Test default render options."""
        options = SdfOptions()
        assert options.weight == 0.5
        assert options.smoothing == 0.1
        assert options.alpha == 1.0
        assert options.color == (1.0, 1.0, 1.0)

    def test_uniform(self) -> None:
        """Test uniform options repeat the same corner."""
        options = SdfOptions4.uniform(weight=0.4, color=(1.0, 0.0, 0.0))
        assert all(corner.weight == 0.4 for corner in options.corners)
        assert all(corner.color == (1.0, 0.0, 0.0) for corner in options.corners)

    def test_with_color_keeps_other_fields(self) -> None:
        """Test recoloring preserves weight and smoothing."""
        options = SdfOptions4.uniform(weight=0.3, smoothing=0.2)
        recolored = options.with_color((0.0, 1.0, 0.0))
        assert all(corner.color == (0.0, 1.0, 0.0) for corner in recolored.corners)
        assert recolored.average_weight == pytest.approx(0.3)
        assert recolored.average_smoothing == pytest.approx(0.2)
        assert options.s0.color == (1.0, 1.0, 1.0)

    def test_with_colors_per_corner(self) -> None:
        """Test one color per corner."""
        colors = [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0), (0.5, 0.5, 0.5)]
        options = SdfOptions4.uniform().with_colors(*colors)
        assert [corner.color for corner in options.corners] == colors

    def test_averages(self) -> None:
        """Test averaged weight and smoothing over differing corners."""
        options = SdfOptions4(
            SdfOptions(weight=0.2, smoothing=0.1),
            SdfOptions(weight=0.4, smoothing=0.1),
            SdfOptions(weight=0.6, smoothing=0.3),
            SdfOptions(weight=0.8, smoothing=0.3),
        )
        assert options.average_weight == pytest.approx(0.5)
        assert options.average_smoothing == pytest.approx(0.2)

    def test_with_weight_and_smoothing(self) -> None:
        """Test setting weight and smoothing on every corner."""
        options = SdfOptions4.uniform().with_weight(0.7).with_smoothing(0.05)
        assert all(corner.weight == 0.7 for corner in options.corners)
        assert all(corner.smoothing == 0.05 for corner in options.corners)


class TestFontDescription:
    """Tests for FontDescription class."""

    def test_defaults(self) -> None:
        """Test default face index."""
        font = FontDescription(path=None, size=32)
        assert font.index == 0

    def test_hashable(self) -> None:
        """Test descriptions can key a cache."""
        assert hash(FontDescription(None, 32)) == hash(FontDescription(None, 32))
