"""End-to-end tests for the build command on a generated TrueType font."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from PIL import Image
from typer.testing import CliRunner

from sdfatlas.cli.app import app
from sdfatlas.core import FontAsset

UNITS_PER_EM = 1000


def draw_box(pen: TTGlyphPen, x0: int, y0: int, x1: int, y1: int) -> None:
    """Draw a clockwise rectangle contour."""
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()


@pytest.fixture(scope="module")
def font_path(tmp_path_factory) -> Path:
    """TrueType font mapping space, "A" and "?" but not "B"."""
    glyph_order = [".notdef", "space", "A", "question"]
    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({0x20: "space", 0x41: "A", 0x3F: "question"})

    glyphs = {}
    pen = TTGlyphPen(None)
    draw_box(pen, 50, 0, 450, 700)
    glyphs[".notdef"] = pen.glyph()

    glyphs["space"] = TTGlyphPen(None).glyph()

    # "A" as a frame with a counter
    pen = TTGlyphPen(None)
    draw_box(pen, 100, 0, 500, 700)
    pen.moveTo((200, 150))
    pen.lineTo((400, 150))
    pen.lineTo((400, 550))
    pen.lineTo((200, 550))
    pen.closePath()
    glyphs["A"] = pen.glyph()

    # "?" as a bar over a dot
    pen = TTGlyphPen(None)
    draw_box(pen, 150, 250, 350, 700)
    draw_box(pen, 150, 0, 350, 150)
    glyphs["question"] = pen.glyph()

    fb.setupGlyf(glyphs)
    glyph_table = fb.font["glyf"]
    advances = {".notdef": 500, "space": 250, "A": 600, "question": 500}
    fb.setupHorizontalMetrics(
        {name: (advances[name], getattr(glyph_table[name], "xMin", 0)) for name in glyph_order}
    )
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Boxes", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()

    path = tmp_path_factory.mktemp("fonts") / "Boxes-Regular.ttf"
    fb.save(str(path))
    return path


def run_build(font_path: Path, output: Path, *extra: str):
    """Invoke the build command with small, fast field settings."""
    args = [
        "build",
        str(font_path),
        "-o",
        str(output),
        "--size",
        "32",
        "--charset",
        "A? B",
        "--upscale",
        "16",
        "--sdf-size",
        "16",
        "--padding",
        "2",
        "-j",
        "1",
        *extra,
    ]
    return CliRunner().invoke(app, args)


class TestBuildCommand:
    """Tests for a successful build run."""

    def test_build_with_preview(self, font_path, tmp_path) -> None:
        """Test build writes the asset and preview for the covered characters."""
        output = tmp_path / "boxes.sdfa"
        preview = tmp_path / "boxes.png"

        result = run_build(font_path, output, "--preview", str(preview))

        assert result.exit_code == 0, result.output
        assert output.exists()
        assert preview.exists()

        asset = FontAsset.load_file(output)
        assert set(asset.glyph_map) == {"A", "?"}
        assert asset.fallback_char == "?"
        assert asset.raster_font_size == 32.0

        with Image.open(preview) as image:
            assert image.size == (asset.atlas_width, asset.atlas_height)

    def test_build_reports_coverage(self, font_path, tmp_path) -> None:
        """Test the summary names the glyph count and missing characters."""
        result = run_build(font_path, tmp_path / "boxes.sdfa", "-v")

        assert result.exit_code == 0, result.output
        assert "Boxes" in result.output
        assert "2 of 3 characters covered" in result.output
        assert "missing: B" in result.output

    def test_build_quiet(self, font_path, tmp_path) -> None:
        """Test quiet mode still writes the asset."""
        output = tmp_path / "boxes.sdfa"
        result = run_build(font_path, output, "-q")

        assert result.exit_code == 0, result.output
        assert set(FontAsset.load_file(output).glyph_map) == {"A", "?"}

    def test_build_fallback_not_covered(self, font_path, tmp_path) -> None:
        """Test a fallback the font cannot draw fails the build."""
        output = tmp_path / "boxes.sdfa"
        result = run_build(font_path, output, "--fallback", "B", "-q")

        assert result.exit_code == 1
        assert not output.exists()

    def test_build_atlas_too_large(self, font_path, tmp_path) -> None:
        """Test the atlas size limit fails the build."""
        output = tmp_path / "boxes.sdfa"
        result = run_build(font_path, output, "--max-atlas-size", "4", "-q")

        assert result.exit_code == 1
        assert not output.exists()
