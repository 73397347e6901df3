"""Command-line interface for sdfatlas.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for glyph field generation
- Verbose/quiet output modes
- Atlas PNG preview export
- Asset inspection and text measurement
"""

from sdfatlas.cli.app import cli, main

__all__ = ["cli", "main"]
