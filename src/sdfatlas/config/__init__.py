"""Configuration management for sdfatlas.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- AtlasConfig: Distance field and packing settings
- ProcessingConfig: Worker pool settings
- LayoutConfig: Text spacing settings
- RenderConfig: Default SDF render options
- LoggingConfig: Logging settings
- SdfAtlasSettings: Main application settings
"""

from sdfatlas.config.settings import (
    AtlasConfig,
    ExecutorKind,
    LayoutConfig,
    LoggingConfig,
    ProcessingConfig,
    RenderConfig,
    SdfAtlasSettings,
    get_default_settings,
)

__all__ = [
    "AtlasConfig",
    "ExecutorKind",
    "LayoutConfig",
    "LoggingConfig",
    "ProcessingConfig",
    "RenderConfig",
    "SdfAtlasSettings",
    "get_default_settings",
]
