"""Path validation."""

from collections.abc import Iterable
from typing import Any

from flashdraw.domain import Point


def is_valid_point(point: Any) -> bool:
    """Check that a point has x and y parsing to finite numbers."""
    return Point.from_dict(point) is not None


def is_valid_path(points: Iterable[Any]) -> bool:
    """Check that a point list is non-empty and every point is numeric.

    Accepts raw order data (mappings with ``x``/``y``) as well as parsed
    points, so it can gate both ingestion and rendering.

    Args:
        points: Raw or parsed points

    Returns:
        True if the path can be rendered
    """
    if points is None:
        return False
    count = 0
    for point in points:
        if not is_valid_point(point):
            return False
        count += 1
    return count > 0
