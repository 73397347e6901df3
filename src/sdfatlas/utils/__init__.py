"""Utility functions for sdfatlas.

This module provides utility functions including:

- Logging setup and configuration
- Build statistics tracking
"""

from sdfatlas.utils.logging import (
    LOGGER_NAME,
    BuildLogger,
    BuildStats,
    configure_logging,
)

__all__ = [
    "LOGGER_NAME",
    "BuildLogger",
    "BuildStats",
    "configure_logging",
]
