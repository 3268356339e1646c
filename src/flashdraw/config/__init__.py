"""Configuration management for flashdraw.

This module provides configuration management using Pydantic models.
All models are frozen so one settings value can be shared by concurrent
renders without cross-talk.

Key classes:
- DrawingConfig: Every drawing constant the engine reads
- DiagramPolicy: Named presentation policies (angle skipping, fold labels, Q x L)
- ProcessingConfig: Batch rendering settings
- LoggingConfig: Logging settings
- FlashdrawSettings: Main application settings
"""

from flashdraw.config.settings import (
    AngleSkipPolicy,
    BorderConfig,
    DiagramPolicy,
    DrawingConfig,
    FlashdrawSettings,
    FoldConfig,
    FoldLabelPolicy,
    GridConfig,
    LabelConfig,
    LoggingConfig,
    ProcessingConfig,
    QuantityLengthFormat,
    StyleConfig,
    ViewportConfig,
    get_default_settings,
)

__all__ = [
    "AngleSkipPolicy",
    "BorderConfig",
    "DiagramPolicy",
    "DrawingConfig",
    "FlashdrawSettings",
    "FoldConfig",
    "FoldLabelPolicy",
    "GridConfig",
    "LabelConfig",
    "LoggingConfig",
    "ProcessingConfig",
    "QuantityLengthFormat",
    "StyleConfig",
    "ViewportConfig",
    "get_default_settings",
]
