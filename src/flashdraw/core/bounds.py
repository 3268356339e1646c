"""Bounding box of everything a diagram will draw.

The box starts from the profile points and grows to cover every
prospective callout, fold glyph and border element, then gets padded.
Label margins are fixed sizes in source units, divided by the order's
drawing scale.
"""

from flashdraw.config import DrawingConfig
from flashdraw.core.border import OffsetBorderGenerator
from flashdraw.core.folds import FoldGeometry, FoldRenderer
from flashdraw.domain import Bounds, Path, Point, RenderOptions


class _Extent:
    """Running min/max accumulator."""

    def __init__(self) -> None:
        self.min_x = float("inf")
        self.min_y = float("inf")
        self.max_x = float("-inf")
        self.max_y = float("-inf")

    def add(self, x: float, y: float) -> None:
        self.min_x = min(self.min_x, x)
        self.min_y = min(self.min_y, y)
        self.max_x = max(self.max_x, x)
        self.max_y = max(self.max_y, y)

    def add_point(self, point: Point) -> None:
        self.add(point.x, point.y)

    def to_bounds(self) -> Bounds:
        return Bounds(self.min_x, self.min_y, self.max_x, self.max_y)


class BoundsCalculator:
    """Computes padded model-space bounds for a path.

    Example:
        >>> calculator = BoundsCalculator(DrawingConfig())
        >>> path = Path.from_dict({"points": [{"x": 0, "y": 0}, {"x": 100, "y": 0}]})
        >>> calculator.calculate(path, RenderOptions()).min_x
        -40.0
    """

    def __init__(self, config: DrawingConfig) -> None:
        self.config = config
        self.folds = FoldRenderer(config.fold, config.policy.fold_label)
        self.border = OffsetBorderGenerator(config.border)

    def calculate(
        self,
        path: Path,
        options: RenderOptions,
        folds: list[FoldGeometry] | None = None,
    ) -> Bounds:
        """Compute the padded bounds.

        Args:
            path: Profile
            options: Render flags (scale, border, fold-label overrides)
            folds: Fold geometry already computed for this path and these
                options; computed here when omitted

        Returns:
            Bounds with strictly positive width and height. Invalid paths
            get a fixed ``fallback_size`` square at the origin.
        """
        viewport = self.config.viewport
        if not path.is_valid:
            return Bounds(0.0, 0.0, viewport.fallback_size, viewport.fallback_size)

        extent = _Extent()
        for point in path.points:
            extent.add_point(point)
        raw = extent.to_bounds()

        for segment in path.segments:
            if segment.label_position is not None:
                self._add_label(extent, segment.label_position, options.scale)

        for i in range(len(path.segments)):
            override = options.fold_label_override(path.path_index, i)
            if override is not None:
                self._add_label(extent, override, options.scale)

        if folds is None:
            folds = self.folds.all_geometry(path, options)
        for fold in folds:
            for point in fold.extent:
                extent.add_point(point)
            self._add_label(extent, fold.label_anchor, options.scale)

        skipped = self.config.policy.angle_skip.skipped_angles
        for angle in path.angles:
            if angle.label_position is None or angle.rounded in skipped:
                continue
            self._add_label(extent, angle.label_position, options.scale)

        if options.show_border and len(path.points) >= 2:
            for seg in self.border.offset_segments(path.points, options.border_direction):
                extent.add_point(seg.start)
                extent.add_point(seg.end)
            chevron = self.border.chevron(path.points, options.border_direction)
            if chevron is not None:
                for point in chevron.points:
                    extent.add_point(point)

        bounds = extent.to_bounds()
        if max(raw.width, raw.height) > viewport.large_threshold:
            padding = max(
                viewport.large_padding_min,
                viewport.large_padding_ratio * max(bounds.width, bounds.height),
            )
        else:
            padding = viewport.padding
        bounds = bounds.padded(padding)

        # Zero padding on a single point would leave an empty box
        if bounds.width <= 0 or bounds.height <= 0:
            half = viewport.fallback_size / 2
            bounds = Bounds(
                min(bounds.min_x, (bounds.min_x + bounds.max_x) / 2 - half),
                min(bounds.min_y, (bounds.min_y + bounds.max_y) / 2 - half),
                max(bounds.max_x, (bounds.min_x + bounds.max_x) / 2 + half),
                max(bounds.max_y, (bounds.min_y + bounds.max_y) / 2 + half),
            )
        return bounds

    def _add_label(self, extent: _Extent, anchor: Point, scale: float) -> None:
        label = self.config.label
        extent.add(anchor.x - label.bounds_margin_x / scale, anchor.y - label.bounds_margin_top / scale)
        extent.add(
            anchor.x + label.bounds_margin_x / scale,
            anchor.y + (label.arrow_size + label.bounds_margin_bottom) / scale,
        )


def calculate_bounds(
    path: Path,
    options: RenderOptions | None = None,
    config: DrawingConfig | None = None,
) -> Bounds:
    """Convenience wrapper around BoundsCalculator."""
    return BoundsCalculator(config or DrawingConfig()).calculate(path, options or RenderOptions())
