"""Core rendering engine for flashdraw.

This module contains the diagram geometry and layout engine:

- Vector geometry (directions, normals, rotation)
- Bounds calculation over points, callouts, folds and border
- Viewport mapping and grid generation
- Callout placement with directional tails
- Fold glyphs per fold variant
- Offset border and direction chevron
- Summary metrics (folds, girth, quantity by length)
- Scene assembly and parallel batch rendering

All services are designed to be:
- Configured by one immutable DrawingConfig
- Pure (identical inputs give identical scenes)
- Safe for use in worker processes

Key functions:
- is_valid_path: Check that a path can be drawn
- calculate_bounds: Padded model-space bounds of a path
- render_diagram: Render one path into a Scene
- total_folds / girth / format_quantity_length: Property table values

Key classes:
- BoundsCalculator: Bounds of everything a diagram draws
- Viewport: Model-to-canvas mapping
- LabelPlacer: Callout boxes with tails
- FoldRenderer: End-fold glyphs and callouts
- OffsetBorderGenerator: Offset border and chevron
- SceneAssembler: Full diagram composition
- DiagramProcessor: Parallel rendering of a diagram set
"""

from flashdraw.core.border import Chevron, OffsetBorderGenerator, OffsetSegment, border_normal
from flashdraw.core.bounds import BoundsCalculator, calculate_bounds
from flashdraw.core.folds import FoldGeometry, FoldRenderer, FoldStroke
from flashdraw.core.labels import (
    EstimatedTextMeasurer,
    LabelBox,
    LabelPlacer,
    TailSide,
    TextMeasurer,
)
from flashdraw.core.metrics import (
    DiagramSummary,
    OrderSummary,
    format_quantity_length,
    girth,
    group_quantities,
    summarize_order,
    summarize_path,
    total_folds,
    total_quantity,
)
from flashdraw.core.processor import (
    BatchResult,
    DiagramProcessor,
    DiagramResult,
    render_path_task,
)
from flashdraw.core.scene import SceneAssembler, placeholder_scene, render_diagram
from flashdraw.core.validation import is_valid_path, is_valid_point
from flashdraw.core.viewport import GridLines, Viewport, grid_positions, grid_spacing

__all__ = [
    # Border
    "Chevron",
    "OffsetBorderGenerator",
    "OffsetSegment",
    "border_normal",
    # Bounds
    "BoundsCalculator",
    "calculate_bounds",
    # Folds
    "FoldGeometry",
    "FoldRenderer",
    "FoldStroke",
    # Labels
    "EstimatedTextMeasurer",
    "LabelBox",
    "LabelPlacer",
    "TailSide",
    "TextMeasurer",
    # Metrics
    "DiagramSummary",
    "OrderSummary",
    "format_quantity_length",
    "girth",
    "group_quantities",
    "summarize_order",
    "summarize_path",
    "total_folds",
    "total_quantity",
    # Processor
    "BatchResult",
    "DiagramProcessor",
    "DiagramResult",
    "render_path_task",
    # Scene
    "SceneAssembler",
    "placeholder_scene",
    "render_diagram",
    # Validation
    "is_valid_path",
    "is_valid_point",
    # Viewport
    "GridLines",
    "Viewport",
    "grid_positions",
    "grid_spacing",
]
