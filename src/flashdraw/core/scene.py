"""Scene assembly.

Composes every drawing element of one diagram into a Scene, in draw
order:

1. Grid, minor tier then major tier
2. Profile polyline and point markers
3. Offset border and chevron, if requested
4. Per-segment groups: length callout, fold callout, fold glyph
5. Angle callouts, skipping the default angles

Rendering is pure: the same path, options and config always produce an
equal scene.
"""

import structlog

from flashdraw.config import DrawingConfig
from flashdraw.core.border import OffsetBorderGenerator
from flashdraw.core.bounds import BoundsCalculator
from flashdraw.core.folds import FoldGeometry, FoldRenderer
from flashdraw.core.geometry import midpoint
from flashdraw.core.labels import LabelPlacer, TextMeasurer
from flashdraw.core.viewport import Viewport
from flashdraw.domain import Circle, Element, Group, Path, Point, Polyline, RenderOptions, Scene, Text
from flashdraw.io.fonts import load_font_metrics

logger = structlog.get_logger(__name__)

INVALID_PATH_TEXT = "Invalid path data"


def placeholder_scene(config: DrawingConfig) -> Scene:
    """Fixed-size stand-in scene for a path that cannot be drawn."""
    size = config.viewport.fallback_size
    return Scene(
        view_box_size=size,
        elements=(
            Text(
                x=size / 2,
                y=size / 2,
                text=INVALID_PATH_TEXT,
                font_size=14.0,
                fill=config.style.label_text,
            ),
        ),
        placeholder=True,
    )


class SceneAssembler:
    """Renders paths into scenes under one drawing configuration.

    An assembler holds no per-render state and can render any number of
    paths.

    Example:
        assembler = SceneAssembler(DrawingConfig())
        scene = assembler.assemble(path, RenderOptions(show_border=True))
    """

    def __init__(self, config: DrawingConfig, measurer: TextMeasurer | None = None) -> None:
        """Initialize the assembler.

        Args:
            config: Drawing configuration
            measurer: Text width source for label boxes; defaults to the
                font at ``config.label.font_path`` when set, otherwise a
                per-character estimate
        """
        self.config = config
        if measurer is None and config.label.font_path is not None:
            measurer = load_font_metrics(config.label.font_path)
        self.bounds = BoundsCalculator(config)
        self.folds = FoldRenderer(config.fold, config.policy.fold_label)
        self.border = OffsetBorderGenerator(config.border)
        self.labels = LabelPlacer(config.label, config.style, measurer)

    def assemble(self, path: Path, options: RenderOptions | None = None) -> Scene:
        """Render one path.

        Args:
            path: Profile to draw
            options: Render flags, defaults to no border and scale 1

        Returns:
            Scene in canvas coordinates, or a placeholder scene for an
            invalid path
        """
        if options is None:
            options = RenderOptions()

        if not path.is_valid:
            logger.warning(
                "Invalid path, rendering placeholder",
                path_index=path.path_index,
                point_count=len(path.points),
                invalid_points=path.invalid_point_count,
            )
            return placeholder_scene(self.config)

        fold_list = self.folds.all_geometry(path, options)
        viewport = Viewport(
            self.bounds.calculate(path, options, fold_list), self.config.viewport
        )
        grid = viewport.grid(self.config.grid)

        elements: list[Element] = [
            Group(kind="grid-minor", children=grid.minor),
            Group(kind="grid-major", children=grid.major),
            self._profile(path, viewport),
        ]

        if options.show_border and len(path.points) >= 2:
            lines, chevron = self.border.render(path.points, options.border_direction, viewport)
            children: list[Element] = list(lines)
            if chevron is not None:
                children.append(chevron)
            elements.append(Group(kind="border", children=tuple(children)))

        folds = {fold.segment_index: fold for fold in fold_list}
        for i in range(len(path.segments)):
            elements.append(self._segment(path, i, folds.get(i), viewport))

        elements.extend(self._angles(path, viewport))

        return Scene(view_box_size=viewport.size, elements=tuple(elements))

    def _profile(self, path: Path, viewport: Viewport) -> Group:
        style = self.config.style
        children: list[Element] = []
        if len(path.points) >= 2:
            children.append(
                Polyline(
                    points=tuple(viewport.transform_xy(p.x, p.y) for p in path.points),
                    stroke=style.path_color,
                    stroke_width=viewport.scale(style.path_stroke_width),
                )
            )
        radius = viewport.scale(style.point_radius)
        for point in path.points:
            cx, cy = viewport.transform_xy(point.x, point.y)
            children.append(Circle(cx=cx, cy=cy, r=radius, fill=style.point_color))
        return Group(kind="path", children=tuple(children))

    def _segment(
        self,
        path: Path,
        index: int,
        fold: FoldGeometry | None,
        viewport: Viewport,
    ) -> Group:
        segment = path.segments[index]
        children: list[Element] = []

        if segment.label_position is not None:
            target = midpoint(path.points[index], path.points[index + 1])
            children.append(
                self.labels.place(
                    segment.length,
                    viewport.transform(segment.label_position),
                    viewport.transform(target),
                    kind="segment-label",
                    index=index,
                )
            )

        if fold is not None:
            fold_label = self.labels.place(
                fold.label_text,
                viewport.transform(fold.label_anchor),
                viewport.transform(fold.base),
                kind="fold-label",
                index=index,
            )
            glyph = self.folds.render(fold, viewport)
            children.append(Group(kind="fold", children=(fold_label, glyph), index=index))

        return Group(kind="segment", children=tuple(children), index=index)

    def _angles(self, path: Path, viewport: Viewport) -> list[Group]:
        skipped = self.config.policy.angle_skip.skipped_angles
        groups: list[Group] = []
        for k, angle in enumerate(path.angles):
            if angle.label_position is None or angle.rounded in skipped:
                continue
            target: Point = angle.label_position
            vertex = angle.vertex_index
            if vertex is not None and 0 <= vertex < len(path.points):
                target = path.points[vertex]
            text = f"{angle.rounded}°" if angle.rounded is not None else angle.text
            groups.append(
                self.labels.place(
                    text,
                    viewport.transform(angle.label_position),
                    viewport.transform(target),
                    kind="angle-label",
                    index=k,
                    text_color=self.config.style.angle_text,
                )
            )
        return groups


def render_diagram(
    path: Path,
    options: RenderOptions | None = None,
    config: DrawingConfig | None = None,
) -> Scene:
    """Render one path with a throwaway assembler."""
    return SceneAssembler(config or DrawingConfig()).assemble(path, options)
