"""Flashing profile model.

This module defines the path model consumed by the rendering engine:
- FoldType: Closed set of end-fold variants
- FoldSpec: Fold variant plus its numeric parameters
- Segment: Edge between two consecutive points, with its callout and fold
- Angle: Joint-angle callout
- Path: A complete flashing profile
- QuantityLength: One "quantity x length" order line
- BorderDirection / RenderOptions: Per-diagram-set render flags

Every decorated order value ("1.20 m", "45°", "14") is parsed into typed
fields by the ``from_dict`` constructors. Nothing downstream re-parses
strings.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from flashdraw.domain._parsing import parse_angle, parse_int, parse_length, parse_number
from flashdraw.domain.geometry import Point


class FoldType(Enum):
    """End-fold variant.

    The value is the display name used in fold callouts.
    """

    NONE = "None"
    OPEN = "Open"
    BREAK = "Break"
    CRUSH = "Crush"
    CRUSH_HOOK = "Crush Hook"

    @classmethod
    def parse(cls, name: Any) -> "FoldType":
        """Resolve a fold type name from order data.

        Matching ignores case, spaces, dashes and underscores, so
        ``"Crush Hook"``, ``"CrushHook"`` and ``"crush_hook"`` are equal.
        Unknown or missing names resolve to NONE.
        """
        if not isinstance(name, str):
            return cls.NONE
        key = "".join(ch for ch in name.lower() if ch.isalnum())
        return _FOLD_TYPE_KEYS.get(key, cls.NONE)

    @property
    def fold_count(self) -> int:
        """How many physical folds this variant adds to a piece."""
        match self:
            case FoldType.NONE:
                return 0
            case FoldType.CRUSH:
                return 2
            case FoldType.OPEN | FoldType.BREAK | FoldType.CRUSH_HOOK:
                return 1


_FOLD_TYPE_KEYS: dict[str, FoldType] = {
    "".join(ch for ch in fold_type.value.lower() if ch.isalnum()): fold_type
    for fold_type in FoldType
}


@dataclass(frozen=True, slots=True)
class FoldSpec:
    """Fold variant and parameters for one segment.

    Numeric fields are None when the order value was missing or malformed;
    the renderer substitutes its configured defaults.

    Attributes:
        fold_type: Fold variant
        length: Fold length in model units
        angle: Rotation of the fold direction in degrees
        tail_length: Straight tail after a crush curl
        flipped: Mirror the fold across the segment
    """

    fold_type: FoldType = FoldType.NONE
    length: float | None = None
    angle: float | None = None
    tail_length: float | None = None
    flipped: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "type": self.fold_type.value,
            "length": self.length,
            "angle": self.angle,
            "tailLength": self.tail_length,
            "flipped": self.flipped,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "FoldSpec | None":
        """Parse a fold from order data.

        Accepts the object form and the bare type-name shorthand
        (``"fold": "Crush"``).

        Args:
            data: Raw fold value

        Returns:
            FoldSpec instance, or None when no fold is given
        """
        if data is None:
            return None
        if isinstance(data, str):
            return cls(fold_type=FoldType.parse(data))
        if not isinstance(data, dict):
            return None

        flipped = data.get("flipped", False)
        if isinstance(flipped, str):
            flipped = flipped.strip().lower() == "true"

        return cls(
            fold_type=FoldType.parse(data.get("type")),
            length=_positive(parse_number(data.get("length"))),
            angle=parse_number(data.get("angle")),
            tail_length=parse_number(data.get("tailLength")),
            flipped=bool(flipped),
        )


def _positive(value: float | None) -> float | None:
    if value is None or value <= 0:
        return None
    return value


@dataclass(frozen=True, slots=True)
class Segment:
    """Edge between ``points[i]`` and ``points[i + 1]``.

    Attributes:
        length: Display length, e.g. "1.20 m"
        length_value: Numeric part of ``length``
        label_position: Anchor of the length callout (model space)
        fold: Fold attached to this segment
    """

    length: str = ""
    length_value: float = 0.0
    label_position: Point | None = None
    fold: FoldSpec | None = None

    @property
    def fold_type(self) -> FoldType:
        """Fold variant, NONE when no fold is attached."""
        return self.fold.fold_type if self.fold is not None else FoldType.NONE

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "length": self.length,
            "labelPosition": self.label_position.to_dict() if self.label_position else None,
            "fold": self.fold.to_dict() if self.fold else None,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Segment":
        """Parse a segment from order data."""
        if not isinstance(data, dict):
            return cls()
        length = data.get("length")
        length_text = "" if length is None else str(length)
        return cls(
            length=length_text,
            length_value=parse_length(length_text),
            label_position=Point.from_dict(data.get("labelPosition")),
            fold=FoldSpec.from_dict(data.get("fold")),
        )


@dataclass(frozen=True, slots=True)
class Angle:
    """Joint-angle callout.

    Attributes:
        text: Display text as given, e.g. "135°"
        value: Parsed angle in degrees (None when not numeric)
        vertex_index: Index of the point the angle sits on
        label_position: Anchor of the callout (model space)
    """

    text: str = ""
    value: float | None = None
    vertex_index: int | None = None
    label_position: Point | None = None

    @property
    def rounded(self) -> int | None:
        """Angle rounded to whole degrees, halves rounding up."""
        if self.value is None:
            return None
        return math.floor(self.value + 0.5)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "angle": self.text,
            "vertexIndex": self.vertex_index,
            "labelPosition": self.label_position.to_dict() if self.label_position else None,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Angle":
        """Parse an angle callout from order data."""
        if not isinstance(data, dict):
            return cls()
        text = data.get("angle")
        text = "" if text is None else str(text)
        return cls(
            text=text,
            value=parse_angle(text),
            vertex_index=parse_int(data.get("vertexIndex")),
            label_position=Point.from_dict(data.get("labelPosition")),
        )


@dataclass(frozen=True)
class Path:
    """A flashing profile: ordered points with per-segment metadata.

    Segments are normalized on ingestion so that
    ``len(segments) == max(len(points) - 1, 0)``.

    Attributes:
        points: Profile points in model space
        segments: One entry per consecutive point pair
        angles: Joint-angle callouts
        path_index: Position of the diagram in its order
        color: Colour / material name
        code: Product code
        name: Display name
        invalid_point_count: Number of points that failed numeric validation
    """

    points: tuple[Point, ...] = ()
    segments: tuple[Segment, ...] = ()
    angles: tuple[Angle, ...] = ()
    path_index: int = 0
    color: str = ""
    code: str = ""
    name: str = ""
    invalid_point_count: int = 0

    @property
    def is_valid(self) -> bool:
        """True when the path has points and every point parsed."""
        return bool(self.points) and self.invalid_point_count == 0

    @property
    def last_segment_index(self) -> int:
        """Index of the final segment (-1 when there are no segments)."""
        return len(self.points) - 2

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Invalid points cannot be represented once parsed, so an invalid
        path serializes with an explicit ``invalidPointCount``.
        """
        return {
            "points": [p.to_dict() for p in self.points],
            "segments": [s.to_dict() for s in self.segments],
            "angles": [a.to_dict() for a in self.angles],
            "pathIndex": self.path_index,
            "color": self.color,
            "code": self.code,
            "name": self.name,
            "invalidPointCount": self.invalid_point_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Path":
        """Parse a path from order data.

        Never raises for bad point data: points that fail to parse are
        counted in ``invalid_point_count`` so the engine can reject the
        path without crashing.

        Args:
            data: Raw path mapping

        Returns:
            Path instance
        """
        raw_points = data.get("points")
        if not isinstance(raw_points, list):
            raw_points = []

        points: list[Point] = []
        invalid = int(data.get("invalidPointCount") or 0)
        for raw in raw_points:
            point = Point.from_dict(raw)
            if point is None:
                invalid += 1
            else:
                points.append(point)

        raw_segments = data.get("segments")
        if not isinstance(raw_segments, list):
            raw_segments = []
        segment_count = max(len(points) - 1, 0)
        segments = [Segment.from_dict(raw) for raw in raw_segments[:segment_count]]
        segments.extend(Segment() for _ in range(segment_count - len(segments)))

        raw_angles = data.get("angles")
        if not isinstance(raw_angles, list):
            raw_angles = []

        return cls(
            points=tuple(points),
            segments=tuple(segments),
            angles=tuple(Angle.from_dict(raw) for raw in raw_angles),
            path_index=parse_int(data.get("pathIndex")) or 0,
            color=str(data.get("color") or ""),
            code=str(data.get("code") or ""),
            name=str(data.get("name") or ""),
            invalid_point_count=invalid,
        )


@dataclass(frozen=True, slots=True)
class QuantityLength:
    """One order line: ``quantity`` pieces of ``length`` millimetres."""

    quantity: int = 0
    length: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"quantity": self.quantity, "length": self.length}

    @classmethod
    def from_dict(cls, data: Any) -> "QuantityLength":
        """Parse an order line, treating malformed numbers as zero."""
        if not isinstance(data, dict):
            return cls()
        return cls(
            quantity=parse_int(data.get("quantity")) or 0,
            length=parse_number(data.get("length")) or 0.0,
        )


class BorderDirection(str, Enum):
    """Side of the profile the offset border is drawn on."""

    INSIDE = "inside"
    OUTSIDE = "outside"

    @classmethod
    def parse(cls, value: Any) -> "BorderDirection":
        """Resolve a direction name, defaulting to INSIDE."""
        if isinstance(value, str) and value.strip().lower() == "outside":
            return cls.OUTSIDE
        return cls.INSIDE


def fold_label_key(path_index: int, segment_index: int) -> str:
    """Key of a fold-label position override."""
    return f"fold-{path_index}-{segment_index}"


@dataclass(frozen=True)
class RenderOptions:
    """Render flags shared by every diagram of a set.

    Attributes:
        scale: Drawing scale; label margins in the bounds are divided by it
        show_border: Draw the offset border and direction chevron
        border_direction: Side the border is offset to
        label_overrides: Fold-label anchors keyed by ``fold_label_key``
    """

    scale: float = 1.0
    show_border: bool = False
    border_direction: BorderDirection = BorderDirection.INSIDE
    label_overrides: dict[str, Point] = field(default_factory=dict)

    def fold_label_override(self, path_index: int, segment_index: int) -> Point | None:
        """Look up the externally placed fold label for a segment."""
        return self.label_overrides.get(fold_label_key(path_index, segment_index))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "scale": self.scale,
            "showBorder": self.show_border,
            "borderOffsetDirection": self.border_direction.value,
            "labelPositionOverrides": {
                key: point.to_dict() for key, point in self.label_overrides.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RenderOptions":
        """Parse render flags from order data."""
        scale = parse_number(data.get("scale"))
        if scale is None or scale <= 0:
            scale = 1.0

        overrides: dict[str, Point] = {}
        raw_overrides = data.get("labelPositionOverrides")
        if isinstance(raw_overrides, dict):
            for key, raw in raw_overrides.items():
                point = Point.from_dict(raw)
                if point is not None:
                    overrides[str(key)] = point

        return cls(
            scale=scale,
            show_border=bool(data.get("showBorder", False)),
            border_direction=BorderDirection.parse(data.get("borderOffsetDirection")),
            label_overrides=overrides,
        )
