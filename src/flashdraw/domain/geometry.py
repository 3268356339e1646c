"""Core geometric value types.

This module defines the two value types shared by every stage of the
rendering pipeline:
- Point: A 2D point in model or canvas space
- Bounds: An axis-aligned bounding box in model space
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from flashdraw.domain._parsing import parse_number


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable, so points can be shared between paths and
    derived structures without copying.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Any) -> "Point | None":
        """Parse a point from order data.

        Accepts mappings with numeric-like ``x``/``y`` values, existing
        points and 2-item sequences.

        Args:
            data: Raw point value

        Returns:
            Point instance, or None if either coordinate is missing or
            does not parse to a finite number
        """
        if isinstance(data, Point):
            return data
        if isinstance(data, dict):
            x, y = parse_number(data.get("x")), parse_number(data.get("y"))
        elif isinstance(data, (list, tuple)) and len(data) == 2:
            x, y = parse_number(data[0]), parse_number(data[1])
        else:
            return None
        if x is None or y is None:
            return None
        return cls(x, y)


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned bounding box.

    Attributes:
        min_x: Left edge
        min_y: Top edge
        max_x: Right edge
        max_y: Bottom edge
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        """Horizontal extent."""
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        """Vertical extent."""
        return self.max_y - self.min_y

    def contains(self, point: Point) -> bool:
        """Check whether a point lies inside or on the box edge."""
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y

    def padded(self, padding: float) -> "Bounds":
        """Return a copy grown by ``padding`` on every side."""
        return Bounds(
            self.min_x - padding,
            self.min_y - padding,
            self.max_x + padding,
            self.max_y + padding,
        )

    def to_dict(self) -> dict[str, float]:
        """Serialize to dictionary for IPC."""
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
        }

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "Bounds":
        """Build the tight box around a non-empty set of points.

        Raises:
            ValueError: If ``points`` is empty
        """
        xs: list[float] = []
        ys: list[float] = []
        for point in points:
            xs.append(point.x)
            ys.append(point.y)
        if not xs:
            raise ValueError("Cannot compute bounds of zero points")
        return cls(min(xs), min(ys), max(xs), max(ys))
