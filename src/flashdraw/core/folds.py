"""End-fold glyphs.

Folds are drawn only on the first and last segment of a profile. The fold
base is the path's end point on that segment and the outward normal
depends on which end it is; ``flipped`` mirrors the glyph across the
segment.

Glyph shapes per variant:
- Open: straight line of the fold length
- Break: two-segment kink, offset sideways halfway out
- Crush Hook: straight line finished with a short arc
- Crush: U-shaped curl toward the rotated normal, then a straight tail
  lying back along the segment

Geometry is computed in model space so the bounds calculator and the
scene assembler share one description of every glyph.
"""

import math
from dataclasses import dataclass

from flashdraw.config import FoldConfig, FoldLabelPolicy
from flashdraw.core.geometry import (
    Vector,
    cubic_extent,
    left_normal,
    offset,
    right_normal,
    rotate,
    scale_vector,
    unit_direction,
)
from flashdraw.core.viewport import Viewport
from flashdraw.domain import FoldSpec, FoldType, Path, PathCommand, PathShape, Point, RenderOptions


@dataclass(frozen=True, slots=True)
class FoldStroke:
    """One model-space drawing command of a fold glyph.

    Attributes:
        op: "M", "L", "C" or "A"
        points: Target point, preceded by the control points for "C"
        radius: Arc radius for "A"
        sweep: Arc sweep flag for "A"
    """

    op: str
    points: tuple[Point, ...]
    radius: float = 0.0
    sweep: int = 0


@dataclass(frozen=True, slots=True)
class FoldGeometry:
    """Resolved fold glyph and callout for one segment.

    Attributes:
        segment_index: Segment the fold belongs to
        fold_type: Fold variant (never NONE)
        base: Fold base point
        strokes: Glyph drawing commands
        extent: Points covering the glyph, for bounds accumulation
        label_anchor: Callout anchor (override or computed)
        label_text: Callout text
    """

    segment_index: int
    fold_type: FoldType
    base: Point
    strokes: tuple[FoldStroke, ...]
    extent: tuple[Point, ...]
    label_anchor: Point
    label_text: str


class FoldRenderer:
    """Builds fold geometry and turns it into scene primitives."""

    def __init__(
        self,
        config: FoldConfig,
        label_policy: FoldLabelPolicy = FoldLabelPolicy.FIXED_DISTANCE,
        color: str | None = None,
    ) -> None:
        self.config = config
        self.label_policy = label_policy
        self.color = color or config.color

    def geometry(
        self,
        path: Path,
        segment_index: int,
        options: RenderOptions | None = None,
    ) -> FoldGeometry | None:
        """Compute the fold glyph of one segment.

        Args:
            path: Profile
            segment_index: Segment to inspect
            options: Render flags (fold-label overrides)

        Returns:
            FoldGeometry, or None when the segment has no drawable fold:
            interior segments, NONE folds and zero-length segments
        """
        if not 0 <= segment_index < len(path.segments):
            return None
        is_first = segment_index == 0
        if not is_first and segment_index != path.last_segment_index:
            return None

        spec = path.segments[segment_index].fold
        if spec is None or spec.fold_type is FoldType.NONE:
            return None

        p1 = path.points[segment_index]
        p2 = path.points[segment_index + 1]
        direction = unit_direction(p1, p2)
        if direction is None:
            return None

        base = p1 if is_first else p2
        normal = right_normal(direction) if is_first else left_normal(direction)
        # Points back along the segment, into the piece
        inward = direction if is_first else scale_vector(direction, -1.0)

        length, angle, tail_length = self._resolve(spec)

        match spec.fold_type:
            case FoldType.CRUSH:
                strokes, extent, label_dir, reach = self._crush(
                    base, normal, inward, length, angle, tail_length, spec.flipped
                )
                label_text = f"{spec.fold_type.value} {tail_length:g}"
            case FoldType.OPEN | FoldType.BREAK | FoldType.CRUSH_HOOK:
                if spec.flipped:
                    normal = scale_vector(normal, -1.0)
                    angle = 360 - angle
                outward = rotate(normal, angle)
                end = offset(base, outward, length)
                if spec.fold_type is FoldType.OPEN:
                    strokes = (FoldStroke("M", (base,)), FoldStroke("L", (end,)))
                    extent = (base, end)
                elif spec.fold_type is FoldType.BREAK:
                    strokes, extent = self._break(base, end, outward, direction, length)
                else:
                    strokes, extent = self._hook(base, end, outward, direction)
                label_dir = outward
                reach = length
                label_text = spec.fold_type.value
            case FoldType.NONE:
                return None

        label_anchor = None
        if options is not None:
            label_anchor = options.fold_label_override(path.path_index, segment_index)
        if label_anchor is None:
            label_anchor = offset(base, label_dir, self._label_distance(reach))

        return FoldGeometry(
            segment_index=segment_index,
            fold_type=spec.fold_type,
            base=base,
            strokes=strokes,
            extent=extent,
            label_anchor=label_anchor,
            label_text=label_text,
        )

    def all_geometry(self, path: Path, options: RenderOptions | None = None) -> list[FoldGeometry]:
        """Compute every drawable fold of a path (at most two)."""
        candidates = sorted({0, path.last_segment_index})
        folds = [self.geometry(path, i, options) for i in candidates]
        return [fold for fold in folds if fold is not None]

    def render(self, fold: FoldGeometry, viewport: Viewport) -> PathShape:
        """Convert fold geometry to a canvas-space path primitive."""
        commands: list[PathCommand] = []
        for stroke in fold.strokes:
            coords: list[float] = []
            for point in stroke.points:
                coords.extend(viewport.transform_xy(point.x, point.y))
            if stroke.op == "A":
                r = viewport.scale(stroke.radius)
                commands.append(PathCommand("A", (r, r, 0.0, 0.0, float(stroke.sweep), *coords)))
            else:
                commands.append(PathCommand(stroke.op, tuple(coords)))
        return PathShape(
            commands=tuple(commands),
            stroke=self.color,
            stroke_width=viewport.scale(self.config.stroke_width),
        )

    def _resolve(self, spec: FoldSpec) -> tuple[float, float, float]:
        length = spec.length if spec.length is not None else self.config.default_length
        angle = spec.angle if spec.angle is not None else self.config.default_angle
        tail = spec.tail_length if spec.tail_length is not None else self.config.default_tail_length
        return length, angle, tail

    def _label_distance(self, reach: float) -> float:
        match self.label_policy:
            case FoldLabelPolicy.FIXED_DISTANCE:
                return self.config.label_distance
            case FoldLabelPolicy.PROPORTIONAL:
                return reach + self.config.proportional_label_gap

    def _break(
        self,
        base: Point,
        end: Point,
        outward: Vector,
        along: Vector,
        length: float,
    ) -> tuple[tuple[FoldStroke, ...], tuple[Point, ...]]:
        kink = offset(offset(base, outward, length / 2), along, length * self.config.break_offset_ratio)
        strokes = (
            FoldStroke("M", (base,)),
            FoldStroke("L", (kink,)),
            FoldStroke("L", (end,)),
        )
        return strokes, (base, kink, end)

    def _hook(
        self,
        base: Point,
        end: Point,
        outward: Vector,
        along: Vector,
    ) -> tuple[tuple[FoldStroke, ...], tuple[Point, ...]]:
        radius = self.config.hook_radius
        hook_end = offset(end, along, radius)

        # A minor arc bulges to the right of its chord when swept positively
        bulge_right = right_normal(along)
        positive = bulge_right[0] * outward[0] + bulge_right[1] * outward[1] >= 0
        bulge = bulge_right if positive else left_normal(along)
        sagitta = radius - math.sqrt(radius * radius - (radius / 2) ** 2)
        crest = offset(offset(end, along, radius / 2), bulge, sagitta)

        strokes = (
            FoldStroke("M", (base,)),
            FoldStroke("L", (end,)),
            FoldStroke("A", (hook_end,), radius=radius, sweep=1 if positive else 0),
        )
        return strokes, (base, end, crest, hook_end)

    def _crush(
        self,
        base: Point,
        normal: Vector,
        inward: Vector,
        length: float,
        angle: float,
        tail_length: float,
        flipped: bool,
    ) -> tuple[tuple[FoldStroke, ...], tuple[Point, ...], Vector, float]:
        side = rotate(normal, angle)
        if flipped:
            side = scale_vector(side, -1.0)
        width = length * self.config.crush_width_ratio
        height = length * self.config.crush_height_ratio

        c1 = offset(base, inward, -width)
        c2 = offset(c1, side, height)
        curl_end = offset(base, side, height)
        tail_end = offset(curl_end, inward, tail_length)

        strokes = (
            FoldStroke("M", (base,)),
            FoldStroke("C", (c1, c2, curl_end)),
            FoldStroke("L", (tail_end,)),
        )
        extent = (*cubic_extent([base, c1, c2, curl_end]), tail_end)
        return strokes, extent, side, height
