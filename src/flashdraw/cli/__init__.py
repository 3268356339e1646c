"""Command-line interface for flashdraw.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for batch rendering
- Order summary tables
- Verbose/quiet output modes
- Detailed error reporting
"""

from flashdraw.cli.app import cli, main

__all__ = ["cli", "main"]
