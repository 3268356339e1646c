"""Utility functions for flashdraw.

This module provides utility functions including:

- Logging setup and configuration
- Batch render statistics
"""

from flashdraw.utils.logging import (
    RenderLogger,
    RenderStats,
    configure_logging,
)

__all__ = [
    "RenderLogger",
    "RenderStats",
    "configure_logging",
]
