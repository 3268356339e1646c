"""Internal cubic Bezier helpers.

This is an internal module used to measure the extent of curved fold
glyphs. Not intended for public use.
"""

import math

from flashdraw.domain import Point

# Below this magnitude the derivative's leading coefficient is treated as zero
_DEGENERATE = 1e-12


def cubic_point(points: list[Point], t: float) -> Point:
    """Evaluate a cubic Bezier curve at parameter t.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]
        t: Curve parameter in [0, 1]

    Returns:
        Point on the curve
    """
    p0, p1, p2, p3 = points
    mt = 1.0 - t
    a = mt * mt * mt
    b = 3 * mt * mt * t
    c = 3 * mt * t * t
    d = t * t * t
    return Point(
        a * p0.x + b * p1.x + c * p2.x + d * p3.x,
        a * p0.y + b * p1.y + c * p2.y + d * p3.y,
    )


def _axis_roots(v0: float, v1: float, v2: float, v3: float) -> list[float]:
    """Parameters in (0, 1) where one coordinate of the curve is stationary.

    The derivative of a cubic is a quadratic ``a*t^2 + b*t + c`` (scaled
    by 3), so there are at most two roots per axis.
    """
    a = -v0 + 3 * v1 - 3 * v2 + v3
    b = 2 * (v0 - 2 * v1 + v2)
    c = v1 - v0

    if abs(a) < _DEGENERATE:
        if abs(b) < _DEGENERATE:
            return []
        roots = [-c / b]
    else:
        disc = b * b - 4 * a * c
        if disc < 0:
            return []
        sq = math.sqrt(disc)
        roots = [(-b + sq) / (2 * a), (-b - sq) / (2 * a)]

    return [t for t in roots if 0.0 < t < 1.0]


def cubic_extrema(points: list[Point]) -> list[Point]:
    """Points that span the bounding box of a cubic Bezier curve.

    Returns the two end points plus the curve points at every axis
    extremum in between, ordered by curve parameter. The result holds at
    most six points regardless of the curve's size.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]

    Returns:
        Points on the curve, starting with p0 and ending with p3
    """
    p0, p1, p2, p3 = points
    params = sorted(
        set(_axis_roots(p0.x, p1.x, p2.x, p3.x) + _axis_roots(p0.y, p1.y, p2.y, p3.y))
    )
    return [p0, *(cubic_point(points, t) for t in params), p3]
