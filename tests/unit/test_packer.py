"""Unit tests for shelf packing."""

import pytest

from sdfatlas.core.packer import PackedRect, ShelfPacker, packing_bound
from sdfatlas.exceptions import InvalidParametersError


def make_rects(*sizes: tuple[int, int]) -> list[PackedRect[int]]:
    """Create rectangles whose payload is their input index."""
    return [PackedRect(payload=i, width=w, height=h) for i, (w, h) in enumerate(sizes)]


class TestShelfPacker:
    """Tests for ShelfPacker."""

    def test_single_row_ascending_height(self) -> None:
        """Test rectangles are placed left to right by ascending height."""
        rects = make_rects((4, 8), (10, 5), (6, 6))
        bound = ShelfPacker(max_row_width=20).pack(rects)

        by_payload = {rect.payload: rect for rect in rects}
        assert (by_payload[1].x, by_payload[1].y) == (0, 0)
        assert (by_payload[2].x, by_payload[2].y) == (10, 0)
        assert (by_payload[0].x, by_payload[0].y) == (16, 0)
        assert bound == (20, 8)

    def test_wraps_to_next_shelf(self) -> None:
        """Test the cursor moves down by the tallest rectangle of the row."""
        rects = make_rects((8, 2), (8, 3), (8, 4))
        bound = ShelfPacker(max_row_width=16).pack(rects)

        assert [(rect.x, rect.y) for rect in rects] == [(0, 0), (8, 0), (0, 3)]
        assert bound == (16, 7)

    def test_stable_for_equal_heights(self) -> None:
        """Test equal heights keep their input order."""
        rects = make_rects((3, 5), (4, 5), (2, 5))
        ShelfPacker(max_row_width=100).pack(rects)
        assert [rect.x for rect in rects] == [0, 3, 7]

    def test_all_marked_packed(self) -> None:
        """Test every rectangle is marked as packed."""
        rects = make_rects((5, 5), (7, 3), (2, 9))
        ShelfPacker(max_row_width=8).pack(rects)
        assert all(rect.packed for rect in rects)

    def test_no_overlap(self) -> None:
        """Test no two packed rectangles overlap."""
        sizes = [((i * 7) % 13 + 1, (i * 5) % 11 + 1) for i in range(60)]
        rects = make_rects(*sizes)
        ShelfPacker(max_row_width=40).pack(rects)

        for i, a in enumerate(rects):
            for b in rects[i + 1 :]:
                assert not a.overlaps(b)

    def test_rows_respect_width(self) -> None:
        """Test rectangles narrower than the row never cross its width."""
        sizes = [((i * 7) % 13 + 1, (i * 5) % 11 + 1) for i in range(60)]
        rects = make_rects(*sizes)
        width, _ = ShelfPacker(max_row_width=40).pack(rects)
        assert width <= 40
        assert all(rect.right <= 40 for rect in rects)

    def test_oversized_rect_placed_alone(self) -> None:
        """Test a rectangle wider than the row starts its own row."""
        rects = make_rects((30, 4), (5, 6))
        bound = ShelfPacker(max_row_width=20).pack(rects)
        assert (rects[0].x, rects[0].y) == (0, 0)
        assert (rects[1].x, rects[1].y) == (0, 4)
        assert bound == (30, 10)

    def test_empty_input(self) -> None:
        """Test packing nothing yields an empty bound."""
        assert ShelfPacker(max_row_width=10).pack([]) == (0, 0)

    def test_invalid_row_width(self) -> None:
        """Test a row width below 1 is rejected."""
        with pytest.raises(InvalidParametersError):
            ShelfPacker(max_row_width=0)


class TestPackingBound:
    """Tests for packing_bound and PackedRect helpers."""

    def test_bound_is_max_edges(self) -> None:
        """Test the bound encloses every rectangle."""
        rects = [
            PackedRect("a", 4, 4, x=0, y=0),
            PackedRect("b", 3, 9, x=10, y=1),
            PackedRect("c", 2, 2, x=5, y=20),
        ]
        assert packing_bound(rects) == (13, 22)

    def test_overlaps(self) -> None:
        """Test interior intersection detection."""
        a = PackedRect("a", 4, 4, x=0, y=0)
        touching = PackedRect("b", 4, 4, x=4, y=0)
        crossing = PackedRect("c", 4, 4, x=3, y=3)
        assert not a.overlaps(touching)
        assert a.overlaps(crossing)
        assert crossing.overlaps(a)
