"""Model-to-canvas mapping and background grid generation.

The viewport maps a padded model-space bounding box onto a fixed square
canvas, preserving aspect ratio and centering the drawing. Sizes defined
in model units (stroke widths, glyph sizes) go through ``scale()`` so line
weights look the same whatever the diagram's real-world size.
"""

import math
from dataclasses import dataclass

from flashdraw.config import GridConfig, ViewportConfig
from flashdraw.domain import Bounds, Point, Polyline

Coord = tuple[float, float]


class Viewport:
    """Affine map from a model-space box onto a ``size`` x ``size`` canvas.

    Attributes:
        bounds: Padded model-space bounding box
        size: Side of the square canvas
        scale_factor: Canvas units per model unit
        offset_x: Horizontal centering offset
        offset_y: Vertical centering offset
    """

    def __init__(self, bounds: Bounds, config: ViewportConfig) -> None:
        self.bounds = bounds
        self.size = config.size
        self.scale_factor = config.fill_ratio * config.size / max(bounds.width, bounds.height, 1.0)
        self.offset_x = (self.size - bounds.width * self.scale_factor) / 2
        self.offset_y = (self.size - bounds.height * self.scale_factor) / 2

    def transform_xy(self, x: float, y: float) -> Coord:
        """Map model coordinates to canvas coordinates."""
        return (
            (x - self.bounds.min_x) * self.scale_factor + self.offset_x,
            (y - self.bounds.min_y) * self.scale_factor + self.offset_y,
        )

    def transform(self, point: Point) -> Point:
        """Map a model-space point to canvas space."""
        x, y = self.transform_xy(point.x, point.y)
        return Point(x, y)

    def scale(self, length: float) -> float:
        """Convert a model-unit size to canvas units."""
        return length * self.scale_factor

    def grid(self, config: GridConfig) -> "GridLines":
        """Generate minor and major grid lines spanning the bounds.

        Lines sit on multiples of the grid spacing (minor lines on the odd
        half-cells in between) and only where they fall inside the
        bounds, so the line count is bounded by ``config.max_lines`` per
        axis and tier.

        Args:
            config: Grid settings

        Returns:
            GridLines with the minor and major tiers
        """
        spacing = grid_spacing(self.bounds, config)
        minor_width = self.scale(config.minor_stroke_width)
        major_width = self.scale(config.major_stroke_width)

        minor = [
            Polyline(line, config.minor_color, minor_width)
            for line in self._lines(spacing / 2, odd_only=True)
        ]
        major = [
            Polyline(line, config.major_color, major_width)
            for line in self._lines(spacing, odd_only=False)
        ]
        return GridLines(minor=tuple(minor), major=tuple(major))

    def _lines(self, step: float, odd_only: bool) -> list[tuple[Coord, Coord]]:
        b = self.bounds
        lines: list[tuple[Coord, Coord]] = []
        for x in grid_positions(b.min_x, b.max_x, step, odd_only):
            lines.append((self.transform_xy(x, b.min_y), self.transform_xy(x, b.max_y)))
        for y in grid_positions(b.min_y, b.max_y, step, odd_only):
            lines.append((self.transform_xy(b.min_x, y), self.transform_xy(b.max_x, y)))
        return lines


@dataclass(frozen=True, slots=True)
class GridLines:
    """Grid lines of both tiers in canvas coordinates."""

    minor: tuple[Polyline, ...]
    major: tuple[Polyline, ...]


def grid_spacing(bounds: Bounds, config: GridConfig) -> float:
    """Major grid spacing for a box.

    Starts at ``config.size`` and doubles until the minor tier fits within
    ``config.max_lines`` lines per axis.
    """
    spacing = config.size
    extent = max(bounds.width, bounds.height)
    while extent / (spacing / 2) > config.max_lines:
        spacing *= 2
    return spacing


def grid_positions(low: float, high: float, step: float, odd_only: bool = False) -> list[float]:
    """Multiples of ``step`` within ``[low, high]``.

    Args:
        low: Lower limit
        high: Upper limit
        step: Line spacing
        odd_only: Keep only odd multiples (the minor tier between majors)

    Returns:
        Ascending positions
    """
    first = math.ceil(low / step)
    last = math.floor(high / step)
    return [k * step for k in range(first, last + 1) if not odd_only or k % 2 != 0]
