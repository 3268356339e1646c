"""Tests for end-fold glyph geometry."""

import pytest

from flashdraw.config import FoldConfig, FoldLabelPolicy, ViewportConfig
from flashdraw.core.folds import FoldRenderer
from flashdraw.core.viewport import Viewport
from flashdraw.domain import Bounds, FoldType, Path, Point, RenderOptions


def make_path(coords: list[tuple[float, float]], folds: dict[int, object], **extra: object) -> Path:
    """Build a path with folds on the given segment indices."""
    segments = [{"length": "1", "fold": folds.get(i)} for i in range(len(coords) - 1)]
    return Path.from_dict(
        {"points": [{"x": x, "y": y} for x, y in coords], "segments": segments, **extra}
    )


def assert_point(actual: Point, expected: tuple[float, float]) -> None:
    """Compare a point against coordinates with float tolerance."""
    assert (actual.x, actual.y) == pytest.approx(expected, abs=1e-9)


STRAIGHT = [(0, 0), (100, 0), (200, 0)]


@pytest.fixture
def renderer() -> FoldRenderer:
    """Create a renderer with default configuration."""
    return FoldRenderer(FoldConfig())


class TestFoldSelection:
    """Test which segments get a fold glyph."""

    @pytest.mark.parametrize("fold_type", ["Open", "Break", "Crush", "Crush Hook"])
    def test_interior_segments_ignored(self, renderer: FoldRenderer, fold_type: str) -> None:
        """Test that folds on interior segments are never drawn."""
        coords = [(0, 0), (100, 0), (100, 100), (200, 100), (200, 200)]
        path = make_path(coords, {i: fold_type for i in range(4)})
        assert renderer.geometry(path, 1) is None
        assert renderer.geometry(path, 2) is None
        assert [f.segment_index for f in renderer.all_geometry(path)] == [0, 3]

    def test_none_fold(self, renderer: FoldRenderer) -> None:
        """Test that NONE folds produce nothing."""
        path = make_path(STRAIGHT, {0: "None", 1: {"type": "bogus"}})
        assert renderer.all_geometry(path) == []

    def test_out_of_range(self, renderer: FoldRenderer) -> None:
        """Test indices outside the segment list."""
        path = make_path(STRAIGHT, {0: "Open"})
        assert renderer.geometry(path, -1) is None
        assert renderer.geometry(path, 5) is None

    def test_zero_length_segment(self, renderer: FoldRenderer) -> None:
        """Test that a degenerate end segment has no fold."""
        path = make_path([(0, 0), (0, 0), (100, 0)], {0: "Open"})
        assert renderer.geometry(path, 0) is None

    def test_single_segment_uses_first_end(self, renderer: FoldRenderer) -> None:
        """Test that a one-segment path folds at its first point."""
        path = make_path([(0, 0), (100, 0)], {0: "Open"})
        fold = renderer.geometry(path, 0)
        assert fold is not None
        assert fold.base == Point(0, 0)


class TestOpenFold:
    """Test straight open folds."""

    def test_first_segment(self, renderer: FoldRenderer) -> None:
        """Test base, direction, callout and text on the first segment."""
        fold = renderer.geometry(make_path(STRAIGHT, {0: "Open"}), 0)
        assert fold is not None
        assert fold.fold_type is FoldType.OPEN
        assert fold.base == Point(0, 0)
        assert [s.op for s in fold.strokes] == ["M", "L"]
        assert_point(fold.strokes[-1].points[0], (0, -14))
        assert_point(fold.label_anchor, (0, -20))
        assert fold.label_text == "Open"

    def test_last_segment_opposite_normal(self, renderer: FoldRenderer) -> None:
        """Test that the last segment folds to the other side."""
        fold = renderer.geometry(make_path(STRAIGHT, {1: "Open"}), 1)
        assert fold is not None
        assert fold.base == Point(200, 0)
        assert_point(fold.strokes[-1].points[0], (200, 14))

    def test_custom_length(self, renderer: FoldRenderer) -> None:
        """Test an explicit fold length."""
        fold = renderer.geometry(make_path(STRAIGHT, {0: {"type": "Open", "length": "30"}}), 0)
        assert_point(fold.strokes[-1].points[0], (0, -30))

    def test_malformed_values_use_defaults(self, renderer: FoldRenderer) -> None:
        """Test that malformed length and angle fall back to defaults."""
        path = make_path(STRAIGHT, {0: {"type": "Open", "length": "abc", "angle": "?"}})
        fold = renderer.geometry(path, 0)
        assert_point(fold.strokes[-1].points[0], (0, -14))

    def test_flipped_mirrors_across_segment(self, renderer: FoldRenderer) -> None:
        """Test that flipping mirrors an angled fold across the segment."""
        plain = renderer.geometry(make_path(STRAIGHT, {0: {"type": "Open", "angle": 30}}), 0)
        flipped = renderer.geometry(
            make_path(STRAIGHT, {0: {"type": "Open", "angle": 30, "flipped": True}}), 0
        )
        end = plain.strokes[-1].points[0]
        mirrored = flipped.strokes[-1].points[0]
        assert end.x == pytest.approx(7.0)
        assert end.y == pytest.approx(-12.124, abs=1e-3)
        assert mirrored.x == pytest.approx(end.x)
        assert mirrored.y == pytest.approx(-end.y)


class TestBreakFold:
    """Test kinked break folds."""

    def test_kink(self, renderer: FoldRenderer) -> None:
        """Test the kink halfway out, offset along the segment."""
        fold = renderer.geometry(make_path(STRAIGHT, {0: "Break"}), 0)
        assert [s.op for s in fold.strokes] == ["M", "L", "L"]
        assert_point(fold.strokes[1].points[0], (4.9, -7))
        assert_point(fold.strokes[2].points[0], (0, -14))
        assert fold.label_text == "Break"


class TestCrushHookFold:
    """Test crush hook folds."""

    def test_first_segment(self, renderer: FoldRenderer) -> None:
        """Test the straight part and the hook arc."""
        fold = renderer.geometry(make_path(STRAIGHT, {0: "Crush Hook"}), 0)
        assert [s.op for s in fold.strokes] == ["M", "L", "A"]
        arc = fold.strokes[2]
        assert_point(arc.points[0], (8, -14))
        assert arc.radius == 8.0
        assert arc.sweep == 1
        assert fold.label_text == "Crush Hook"

    def test_last_segment_sweeps_other_way(self, renderer: FoldRenderer) -> None:
        """Test that the arc bulge follows the fold side."""
        fold = renderer.geometry(make_path(STRAIGHT, {1: "CrushHook"}), 1)
        arc = fold.strokes[2]
        assert_point(arc.points[0], (208, 14))
        assert arc.sweep == 0

    def test_extent_covers_arc_crest(self, renderer: FoldRenderer) -> None:
        """Test that the bounds extent reaches past the arc chord."""
        fold = renderer.geometry(make_path(STRAIGHT, {0: "Crush Hook"}), 0)
        assert min(p.y for p in fold.extent) < -14


class TestCrushFold:
    """Test crush curl folds."""

    def test_geometry(self, renderer: FoldRenderer) -> None:
        """Test the curl control points and tail."""
        fold = renderer.geometry(make_path(STRAIGHT, {0: "Crush"}), 0)
        assert [s.op for s in fold.strokes] == ["M", "C", "L"]
        c1, c2, curl_end = fold.strokes[1].points
        assert_point(c1, (-11.2, 0))
        assert_point(c2, (-11.2, -8.4))
        assert_point(curl_end, (0, -8.4))
        assert_point(fold.strokes[2].points[0], (20, -8.4))
        assert_point(fold.label_anchor, (0, -20))

    def test_label_includes_tail_length(self, renderer: FoldRenderer) -> None:
        """Test crush callout text."""
        default = renderer.geometry(make_path(STRAIGHT, {0: "Crush"}), 0)
        custom = renderer.geometry(
            make_path(STRAIGHT, {0: {"type": "Crush", "tailLength": 35}}), 0
        )
        assert default.label_text == "Crush 20"
        assert custom.label_text == "Crush 35"
        assert_point(custom.strokes[2].points[0], (35, -8.4))

    def test_flipped(self, renderer: FoldRenderer) -> None:
        """Test that flipping curls to the other side."""
        fold = renderer.geometry(make_path(STRAIGHT, {0: {"type": "Crush", "flipped": True}}), 0)
        assert_point(fold.strokes[1].points[2], (0, 8.4))

    def test_extent_covers_curl(self, renderer: FoldRenderer) -> None:
        """Test that the extent reaches behind the base point."""
        fold = renderer.geometry(make_path(STRAIGHT, {0: "Crush"}), 0)
        assert min(p.x for p in fold.extent) < -8

    def test_huge_curl_extent_stays_small(self, renderer: FoldRenderer) -> None:
        """Test that a very long crush fold costs no more than a short one."""
        length = 1e7
        fold = renderer.geometry(
            make_path(STRAIGHT, {0: {"type": "Crush", "length": length}}), 0
        )
        assert len(fold.extent) <= 7
        # Curl reaches back 0.75 of its width and out to its full height
        assert min(p.x for p in fold.extent) == pytest.approx(-0.75 * 0.8 * length)
        assert min(p.y for p in fold.extent) == pytest.approx(-0.6 * length)


class TestFoldLabels:
    """Test fold callout placement."""

    def test_override(self, renderer: FoldRenderer) -> None:
        """Test that an override anchor replaces the computed one."""
        path = make_path(STRAIGHT, {0: "Open"}, pathIndex=2)
        options = RenderOptions(label_overrides={"fold-2-0": Point(5, 5)})
        assert renderer.geometry(path, 0, options).label_anchor == Point(5, 5)

    def test_proportional_policy(self) -> None:
        """Test callouts placed past the fold end."""
        renderer = FoldRenderer(FoldConfig(), FoldLabelPolicy.PROPORTIONAL)
        fold = renderer.geometry(make_path(STRAIGHT, {0: "Open"}), 0)
        assert_point(fold.label_anchor, (0, -39))

    def test_fixed_distance_ignores_length(self, renderer: FoldRenderer) -> None:
        """Test that the fixed policy does not depend on fold length."""
        fold = renderer.geometry(make_path(STRAIGHT, {0: {"type": "Open", "length": 80}}), 0)
        assert_point(fold.label_anchor, (0, -20))


class TestFoldRendering:
    """Test conversion to canvas primitives."""

    def test_render_scales(self, renderer: FoldRenderer) -> None:
        """Test canvas coordinates and scaled stroke width."""
        viewport = Viewport(Bounds(-50, -50, 250, 250), ViewportConfig())
        fold = renderer.geometry(make_path(STRAIGHT, {0: "Crush Hook"}), 0)
        shape = renderer.render(fold, viewport)
        assert [c.op for c in shape.commands] == ["M", "L", "A"]
        assert shape.commands[0].values == pytest.approx(viewport.transform_xy(0, 0))
        arc = shape.commands[2].values
        assert len(arc) == 7
        assert arc[0] == pytest.approx(viewport.scale(8.0))
        assert arc[4] == 1.0
        assert shape.stroke_width == pytest.approx(viewport.scale(2.0))
        assert shape.fill is None
