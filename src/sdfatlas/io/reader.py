"""Font reader for inspecting TTF/OTF fonts.

This module provides the FontReader class, used before a build to find
out which characters of a charset a font can actually draw.
"""

from collections.abc import Iterable
from pathlib import Path

from fontTools.ttLib import TTFont

NAME_ID_FAMILY = 1


class FontReader:
    """Loads TTF/OTF fonts and reports their character coverage.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            drawable = reader.covered_characters(charset)
    """

    def __init__(self, font_path: Path, font_index: int = 0) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
            font_index: Face index inside a font collection
        """
        self._font_path = font_path
        self._font_index = font_index
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            Exception: If font file is invalid or cannot be loaded
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        self._font = TTFont(str(self._font_path), fontNumber=self._font_index, lazy=True)

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for OTF fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em."""
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font."""
        return self._require_font()["maxp"].numGlyphs

    @property
    def family_name(self) -> str:
        """Return the font's family name, or the file stem if it has none."""
        name = self._require_font()["name"].getDebugName(NAME_ID_FAMILY)
        return name if name else self._font_path.stem

    def covered_characters(self, charset: Iterable[str]) -> set[str]:
        """Filter a charset down to the characters the font maps to glyphs.

        Args:
            charset: Candidate characters

        Returns:
            Characters present in the font's best cmap
        """
        cmap = self._require_font().getBestCmap() or {}
        return {char for char in charset if ord(char) in cmap}

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
