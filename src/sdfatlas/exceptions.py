"""Exception hierarchy for sdfatlas."""


class SdfAtlasError(Exception):
    """Base exception for all sdfatlas errors."""

    pass


class InvalidParametersError(SdfAtlasError):
    """A generation or layout parameter is out of its valid range."""

    def __init__(self, parameter: str, reason: str) -> None:
        self.parameter = parameter
        self.reason = reason
        super().__init__(f"Invalid parameter '{parameter}': {reason}")


class FontLoadError(SdfAtlasError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class BuildError(SdfAtlasError):
    """Errors raised while building an atlas."""

    pass


class EmptyCharsetError(BuildError):
    """The character set to build contains no drawable characters."""

    def __init__(self) -> None:
        super().__init__("Cannot build an atlas from an empty character set")


class MissingFallbackError(BuildError):
    """The fallback character is not part of the glyph map."""

    def __init__(self, fallback: str) -> None:
        self.fallback = fallback
        super().__init__(f"Glyph map does not contain fallback character {fallback!r}")


class GlyphProcessingError(BuildError):
    """Error rasterizing or generating the field for one glyph."""

    def __init__(self, char: str, reason: str) -> None:
        self.char = char
        self.reason = reason
        super().__init__(f"Error processing glyph {char!r}: {reason}")


class AtlasOverflowError(BuildError):
    """The packed atlas exceeds the configured maximum dimension."""

    def __init__(self, width: int, height: int, limit: int) -> None:
        self.width = width
        self.height = height
        self.limit = limit
        super().__init__(
            f"Packed atlas is {width}x{height}, exceeding the maximum of {limit}"
        )


class AssetError(SdfAtlasError):
    """Errors related to reading or writing font assets."""

    pass


class CorruptAssetError(AssetError):
    """The asset stream is truncated or does not match the schema."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Corrupt font asset: {reason}")


class AssetSaveError(AssetError):
    """Error saving a font asset."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save asset '{path}': {reason}")
