"""Vector helpers for fold, border and label geometry.

This module provides the small set of 2D operations the engine needs:
- Unit direction of a segment (None for zero-length segments)
- Rotation by an angle in degrees
- Left/right normals
- Offsetting and midpoints
- Extent of a cubic Bezier curve

All functions are pure and stateless. Directions are plain (dx, dy) tuples.
"""

import math

from flashdraw.core._bezier import cubic_extrema as _cubic_extrema
from flashdraw.domain import Point

Vector = tuple[float, float]

EPSILON = 1e-10


def unit_direction(p1: Point, p2: Point) -> Vector | None:
    """Calculate the unit direction vector from p1 to p2.

    Args:
        p1: Start point
        p2: End point

    Returns:
        Tuple (dx, dy) of unit length, or None when the points coincide

    Examples:
        >>> unit_direction(Point(0.0, 0.0), Point(10.0, 0.0))
        (1.0, 0.0)
        >>> unit_direction(Point(5.0, 5.0), Point(5.0, 5.0)) is None
        True
    """
    dx = p2.x - p1.x
    dy = p2.y - p1.y
    length = math.hypot(dx, dy)
    if length < EPSILON:
        return None
    return (dx / length, dy / length)


def rotate(vector: Vector, degrees: float) -> Vector:
    """Rotate a vector by ``degrees`` (positive turns x toward y).

    Examples:
        >>> x, y = rotate((1.0, 0.0), 90)
        >>> round(x, 9), round(y, 9)
        (0.0, 1.0)
    """
    if degrees % 360 == 0:
        return vector
    radians = math.radians(degrees)
    cos_a = math.cos(radians)
    sin_a = math.sin(radians)
    x, y = vector
    return (x * cos_a - y * sin_a, x * sin_a + y * cos_a)


def left_normal(vector: Vector) -> Vector:
    """Rotate 90 degrees: (x, y) -> (-y, x)."""
    return (-vector[1], vector[0])


def right_normal(vector: Vector) -> Vector:
    """Rotate -90 degrees: (x, y) -> (y, -x)."""
    return (vector[1], -vector[0])


def scale_vector(vector: Vector, factor: float) -> Vector:
    """Multiply both components by ``factor``."""
    return (vector[0] * factor, vector[1] * factor)


def offset(point: Point, vector: Vector, distance: float = 1.0) -> Point:
    """Move a point ``distance`` units along ``vector``."""
    return Point(point.x + vector[0] * distance, point.y + vector[1] * distance)


def midpoint(p1: Point, p2: Point) -> Point:
    """Point halfway between p1 and p2."""
    return Point((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)


def cubic_extent(points: list[Point]) -> list[Point]:
    """Points on a cubic Bezier curve that span its bounding box.

    The end points plus the curve points at each axis extremum, so the
    box of the returned points is the exact box of the curve. The work
    done is constant whatever the size of the curve.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]

    Returns:
        Points along the curve, including both end points

    Examples:
        >>> cubic_extent([Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0)])[1]
        Point(x=5.0, y=7.5)
    """
    if len(points) != 4:
        raise ValueError(f"Cubic curve needs 4 control points, got {len(points)}")
    return _cubic_extrema(points)
