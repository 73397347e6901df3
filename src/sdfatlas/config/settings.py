"""Configuration settings for sdfatlas."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from sdfatlas.domain.options import SdfOptions4


class ExecutorKind(str, Enum):
    """Worker pool used for per-glyph distance field generation."""

    PROCESS = "process"
    THREAD = "thread"


class AtlasConfig(BaseModel):
    """Configuration for atlas generation.

    The upscale resolution is the size of the raster grid a glyph is
    searched on; half of it is the maximum distance the field can encode.
    """

    fallback_char: str = Field(
        default="?",
        min_length=1,
        max_length=1,
        description="Character substituted for unmapped characters",
    )
    max_row_width: int = Field(
        default=256,
        ge=1,
        description="Maximum width of a packing shelf in atlas pixels",
    )
    upscale_resolution: int = Field(
        default=64,
        ge=2,
        description="Resolution of the search grid relative to the glyph raster",
    )
    sdf_size: int = Field(
        default=64,
        ge=1,
        description="Glyph field size in pixels before padding",
    )
    padding: int = Field(
        default=32,
        ge=0,
        description="Border pixels added around every glyph field",
    )
    flip_vertical: bool = Field(
        default=True,
        description="Mirror glyph rasters so rows grow upward in texture space",
    )
    max_atlas_size: int | None = Field(
        default=None,
        ge=1,
        description="Maximum atlas width or height (None = unbounded)",
    )


class ProcessingConfig(BaseModel):
    """Configuration for parallel glyph processing."""

    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Max workers (None = auto)",
    )
    executor: ExecutorKind = Field(
        default=ExecutorKind.PROCESS,
        description="Pool kind; threads allow rasterizers that cannot be pickled",
    )


class LayoutConfig(BaseModel):
    """Spacing used when laying out text, relative to the text size."""

    vertical_spacing: float = Field(default=0.01, description="Extra space between lines")
    horizontal_spacing: float = Field(default=0.05, description="Extra space between glyphs")
    space_advance_factor: float = Field(
        default=0.5,
        ge=0.0,
        description="Advance of a space character",
    )


class RenderConfig(BaseModel):
    """Default per-corner SDF render options."""

    weight: float = Field(default=0.5, ge=0.0, le=1.0, description="Edge threshold")
    smoothing: float = Field(default=0.1, ge=0.0, description="Edge smoothing width")
    alpha: float = Field(default=1.0, ge=0.0, le=1.0, description="Opacity")
    color: tuple[float, float, float] = Field(
        default=(1.0, 1.0, 1.0),
        description="Tint color (RGB, 0-1)",
    )

    def to_options(self) -> SdfOptions4:
        """Build uniform corner options from this configuration."""
        return SdfOptions4.uniform(
            weight=self.weight,
            smoothing=self.smoothing,
            alpha=self.alpha,
            color=self.color,
        )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class SdfAtlasSettings(BaseModel):
    """Main application settings."""

    atlas: AtlasConfig = Field(default_factory=AtlasConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> SdfAtlasSettings:
    """Get default application settings."""
    return SdfAtlasSettings()
