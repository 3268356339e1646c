"""Offset border and direction chevron.

The border is a dashed outline running parallel to every segment of the
profile at a fixed distance, on the side chosen by the border direction.
A solid chevron on the first segment points back toward the profile from
the border side.
"""

from dataclasses import dataclass

from flashdraw.config import BorderConfig
from flashdraw.core.geometry import (
    Vector,
    left_normal,
    midpoint,
    offset,
    right_normal,
    scale_vector,
    unit_direction,
)
from flashdraw.core.viewport import Viewport
from flashdraw.domain import BorderDirection, Point, Polyline, Triangle


@dataclass(frozen=True, slots=True)
class OffsetSegment:
    """One border segment in model space."""

    segment_index: int
    start: Point
    end: Point


@dataclass(frozen=True, slots=True)
class Chevron:
    """Direction indicator in model space.

    Attributes:
        center: Midpoint of the first non-degenerate segment
        tip: Apex, on the side opposite the border
        base_a: First base corner
        base_b: Second base corner
    """

    center: Point
    tip: Point
    base_a: Point
    base_b: Point

    @property
    def points(self) -> tuple[Point, Point, Point]:
        return (self.base_a, self.tip, self.base_b)


def border_normal(direction: Vector, border: BorderDirection) -> Vector:
    """Unit normal pointing to the border side of a segment.

    INSIDE rotates the segment direction by +90 degrees, OUTSIDE by -90.
    """
    if border is BorderDirection.INSIDE:
        return left_normal(direction)
    return right_normal(direction)


class OffsetBorderGenerator:
    """Computes the offset border of a profile."""

    def __init__(self, config: BorderConfig) -> None:
        self.config = config

    def offset_segments(
        self,
        points: tuple[Point, ...],
        border: BorderDirection,
    ) -> list[OffsetSegment]:
        """Offset every segment along its border normal.

        Zero-length segments are skipped.

        Args:
            points: Profile points
            border: Side to offset to

        Returns:
            One offset segment per non-degenerate original segment
        """
        distance = self.config.offset_distance
        segments: list[OffsetSegment] = []
        for i in range(len(points) - 1):
            direction = unit_direction(points[i], points[i + 1])
            if direction is None:
                continue
            normal = border_normal(direction, border)
            segments.append(
                OffsetSegment(
                    segment_index=i,
                    start=offset(points[i], normal, distance),
                    end=offset(points[i + 1], normal, distance),
                )
            )
        return segments

    def chevron(self, points: tuple[Point, ...], border: BorderDirection) -> Chevron | None:
        """Place the chevron on the first non-degenerate segment.

        Its size is fixed in model units, independent of segment length.

        Returns:
            Chevron, or None when every segment has zero length
        """
        half = self.config.chevron_size / 2
        for i in range(len(points) - 1):
            direction = unit_direction(points[i], points[i + 1])
            if direction is None:
                continue
            pointing = scale_vector(border_normal(direction, border), -1.0)
            center = midpoint(points[i], points[i + 1])
            back = offset(center, pointing, -half)
            return Chevron(
                center=center,
                tip=offset(center, pointing, half),
                base_a=offset(back, direction, half),
                base_b=offset(back, direction, -half),
            )
        return None

    def render(
        self,
        points: tuple[Point, ...],
        border: BorderDirection,
        viewport: Viewport,
    ) -> tuple[list[Polyline], Triangle | None]:
        """Emit dashed border polylines and the chevron in canvas space."""
        dash_a, dash_b = self.config.dash
        dash = (viewport.scale(dash_a), viewport.scale(dash_b))
        stroke_width = viewport.scale(self.config.stroke_width)

        lines = [
            Polyline(
                points=(
                    viewport.transform_xy(seg.start.x, seg.start.y),
                    viewport.transform_xy(seg.end.x, seg.end.y),
                ),
                stroke=self.config.color,
                stroke_width=stroke_width,
                dash=dash,
            )
            for seg in self.offset_segments(points, border)
        ]

        chevron = self.chevron(points, border)
        triangle = None
        if chevron is not None:
            a, b, c = (viewport.transform_xy(p.x, p.y) for p in chevron.points)
            triangle = Triangle(points=(a, b, c), fill=self.config.chevron_color)
        return lines, triangle
