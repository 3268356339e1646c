"""Domain models for flashdraw.

This module contains the models representing flashing profiles, their
callouts and folds, and the scene graph the engine renders them into.
All models are designed to be:

- Immutable (frozen dataclasses), so a render never mutates caller data
- Serializable for inter-process communication (parallel rendering)
- Parsed once at ingestion: no decorated strings flow downstream

Key classes:
- Point / Bounds: Geometric value types
- FoldType / FoldSpec: End-fold variant and parameters
- Segment / Angle / Path: The flashing profile
- QuantityLength: One order line
- RenderOptions: Per-diagram-set render flags
- DiagramSet: All paths of an order with their shared flags
- Scene and its primitives: The rendered output
"""

from flashdraw.domain.geometry import Bounds, Point
from flashdraw.domain.order import DiagramSet
from flashdraw.domain.path import (
    Angle,
    BorderDirection,
    FoldSpec,
    FoldType,
    Path,
    QuantityLength,
    RenderOptions,
    Segment,
    fold_label_key,
)
from flashdraw.domain.scene import (
    SHADOW_FILTER,
    Circle,
    Element,
    Group,
    PathCommand,
    PathShape,
    Polyline,
    Primitive,
    Rect,
    Scene,
    Text,
    Triangle,
)

__all__: list[str] = [
    # Enums
    "BorderDirection",
    "FoldType",
    # Geometry
    "Bounds",
    "Point",
    # Profile
    "Angle",
    "DiagramSet",
    "FoldSpec",
    "Path",
    "QuantityLength",
    "RenderOptions",
    "Segment",
    "fold_label_key",
    # Scene
    "SHADOW_FILTER",
    "Circle",
    "Element",
    "Group",
    "PathCommand",
    "PathShape",
    "Polyline",
    "Primitive",
    "Rect",
    "Scene",
    "Text",
    "Triangle",
]
