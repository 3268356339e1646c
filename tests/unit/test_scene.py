"""Tests for scene assembly."""

from unittest.mock import patch

import pytest

from flashdraw.config import AngleSkipPolicy, DiagramPolicy, DrawingConfig
from flashdraw.core.bounds import calculate_bounds
from flashdraw.core.folds import FoldRenderer
from flashdraw.core.scene import INVALID_PATH_TEXT, SceneAssembler, render_diagram
from flashdraw.core.viewport import Viewport
from flashdraw.domain import (
    Circle,
    Group,
    Path,
    PathShape,
    Polyline,
    RenderOptions,
    Scene,
    Text,
    Triangle,
)


@pytest.fixture
def assembler() -> SceneAssembler:
    """Create an assembler with default configuration."""
    return SceneAssembler(DrawingConfig())


@pytest.fixture
def crush_path() -> Path:
    """Three-point profile with labelled segments and a crush fold on the last segment."""
    return Path.from_dict(
        {
            "points": [{"x": 0, "y": 0}, {"x": 100, "y": 0}, {"x": 100, "y": 100}],
            "segments": [
                {"length": "1.00 m", "labelPosition": {"x": 50, "y": -20}, "fold": None},
                {
                    "length": "1.00 m",
                    "labelPosition": {"x": 120, "y": 50},
                    "fold": {"type": "Crush", "length": 14, "angle": 0, "tailLength": 20},
                },
            ],
        }
    )


def angle_path(text: str, vertex_index: object = 1) -> Path:
    """Two-segment profile with one angle callout."""
    return Path.from_dict(
        {
            "points": [{"x": 0, "y": 0}, {"x": 100, "y": 0}, {"x": 150, "y": 80}],
            "angles": [
                {"angle": text, "vertexIndex": vertex_index, "labelPosition": {"x": 130, "y": 0}}
            ],
        }
    )


def label_text(group: Group) -> str:
    """Text of a callout group."""
    texts = [p for p in group.iter_primitives() if isinstance(p, Text)]
    return texts[0].text


class TestDrawOrder:
    """Test the element order of a scene."""

    def test_top_level_order(self, assembler: SceneAssembler, crush_path: Path) -> None:
        """Test grid, profile, segments, then angles."""
        scene = assembler.assemble(crush_path, RenderOptions())
        kinds = [e.kind for e in scene.elements if isinstance(e, Group)]
        assert kinds == ["grid-minor", "grid-major", "path", "segment", "segment"]

    def test_fold_geometry_computed_once(
        self, assembler: SceneAssembler, crush_path: Path
    ) -> None:
        """Test that bounds and glyphs share one fold computation."""
        with patch.object(
            FoldRenderer, "all_geometry", autospec=True, side_effect=FoldRenderer.all_geometry
        ) as all_geometry:
            assembler.assemble(crush_path, RenderOptions())
        assert all_geometry.call_count == 1

    def test_border_after_profile(self, assembler: SceneAssembler, crush_path: Path) -> None:
        """Test that the border sits between profile and callouts."""
        scene = assembler.assemble(crush_path, RenderOptions(show_border=True))
        kinds = [e.kind for e in scene.elements if isinstance(e, Group)]
        assert kinds[:4] == ["grid-minor", "grid-major", "path", "border"]

    def test_fold_label_before_glyph(self, assembler: SceneAssembler, crush_path: Path) -> None:
        """Test the fold group holds its callout then its glyph."""
        scene = assembler.assemble(crush_path, RenderOptions())
        (fold,) = scene.find_groups("fold")
        callout, glyph = fold.children
        assert isinstance(callout, Group) and callout.kind == "fold-label"
        assert isinstance(glyph, PathShape)


class TestCrushScenario:
    """Test the three-point crush profile."""

    def test_segment_labels(self, assembler: SceneAssembler, crush_path: Path) -> None:
        """Test exactly two segment length callouts."""
        scene = assembler.assemble(crush_path, RenderOptions())
        labels = scene.find_groups("segment-label")
        assert [g.index for g in labels] == [0, 1]
        assert [label_text(g) for g in labels] == ["1.00 m", "1.00 m"]

    def test_single_fold_on_last_segment(
        self, assembler: SceneAssembler, crush_path: Path
    ) -> None:
        """Test one fold glyph on segment 1 and none on segment 0."""
        scene = assembler.assemble(crush_path, RenderOptions())
        folds = scene.find_groups("fold")
        assert [f.index for f in folds] == [1]
        assert label_text(folds[0].children[0]) == "Crush 20"
        segments = scene.find_groups("segment")
        assert not any(
            isinstance(c, Group) and c.kind == "fold" for c in segments[0].children
        )

    def test_profile(self, assembler: SceneAssembler, crush_path: Path) -> None:
        """Test the profile polyline and point markers."""
        scene = assembler.assemble(crush_path, RenderOptions())
        (profile,) = scene.find_groups("path")
        assert isinstance(profile.children[0], Polyline)
        assert len(profile.children[0].points) == 3
        assert sum(isinstance(c, Circle) for c in profile.children) == 3

    def test_stroke_scaled(self, assembler: SceneAssembler, crush_path: Path) -> None:
        """Test that the profile stroke follows the scale factor."""
        scene = assembler.assemble(crush_path, RenderOptions())
        viewport = Viewport(calculate_bounds(crush_path), DrawingConfig().viewport)
        (profile,) = scene.find_groups("path")
        assert profile.children[0].stroke_width == pytest.approx(2.5 * viewport.scale_factor)

    def test_points_on_canvas(self, assembler: SceneAssembler, crush_path: Path) -> None:
        """Test that point markers land inside the view box."""
        scene = assembler.assemble(crush_path, RenderOptions())
        for primitive in scene.iter_primitives():
            if isinstance(primitive, Circle):
                assert 0 <= primitive.cx <= scene.view_box_size
                assert 0 <= primitive.cy <= scene.view_box_size


class TestBorder:
    """Test the border group."""

    def test_border_group(self, assembler: SceneAssembler) -> None:
        """Test one dashed segment and one chevron for a two-point path."""
        path = Path.from_dict({"points": [{"x": 0, "y": 0}, {"x": 100, "y": 0}]})
        scene = assembler.assemble(path, RenderOptions(show_border=True))
        (border,) = scene.find_groups("border")
        lines = [c for c in border.children if isinstance(c, Polyline)]
        chevrons = [c for c in border.children if isinstance(c, Triangle)]
        assert len(lines) == 1
        assert lines[0].dash is not None
        assert len(chevrons) == 1

    def test_no_border_by_default(self, assembler: SceneAssembler, crush_path: Path) -> None:
        """Test that the border is opt-in."""
        assert assembler.assemble(crush_path).find_groups("border") == []


class TestAngles:
    """Test angle callouts."""

    @pytest.mark.parametrize("text", ["90°", "270°", "45°", "315°"])
    def test_default_angles_omitted(self, assembler: SceneAssembler, text: str) -> None:
        """Test that default angles get no callout."""
        scene = assembler.assemble(angle_path(text))
        assert scene.find_groups("angle-label") == []

    def test_angle_label(self, assembler: SceneAssembler) -> None:
        """Test rounded text of a labelled angle."""
        scene = assembler.assemble(angle_path("119.6°"))
        (label,) = scene.find_groups("angle-label")
        assert label.index == 0
        assert label_text(label) == "120°"

    def test_legacy_policy_labels_45(self) -> None:
        """Test the narrower legacy skip set."""
        config = DrawingConfig(policy=DiagramPolicy(angle_skip=AngleSkipPolicy.LEGACY))
        scene = SceneAssembler(config).assemble(angle_path("45°"))
        assert len(scene.find_groups("angle-label")) == 1

    def test_non_numeric_angle_keeps_text(self, assembler: SceneAssembler) -> None:
        """Test that unparsed angle text is shown as given."""
        scene = assembler.assemble(angle_path("see note"))
        (label,) = scene.find_groups("angle-label")
        assert label_text(label) == "see note"

    def test_vertex_zero_is_a_target(self, assembler: SceneAssembler) -> None:
        """Test that vertex index 0 points the tail at the first point."""
        path = angle_path("120°", vertex_index=0)
        scene = assembler.assemble(path)
        (label,) = scene.find_groups("angle-label")
        tail = next(p for p in label.iter_primitives() if isinstance(p, Triangle))
        rect_center_x = next(p for p in label.iter_primitives() if isinstance(p, Text)).x
        # Anchor at (130, 0), vertex at (0, 0): the tail is on the left edge
        assert tail.points[2][0] < rect_center_x
        assert tail.points[2][1] == pytest.approx(tail.points[0][1] + 3)

    def test_missing_vertex_uses_anchor(self, assembler: SceneAssembler) -> None:
        """Test that an out-of-range vertex falls back to the anchor."""
        scene = assembler.assemble(angle_path("120°", vertex_index=9))
        (label,) = scene.find_groups("angle-label")
        tail = next(p for p in label.iter_primitives() if isinstance(p, Triangle))
        text = next(p for p in label.iter_primitives() if isinstance(p, Text))
        # Target on the anchor resolves to the bottom edge
        assert tail.points[2][1] > text.y


class TestMissingData:
    """Test recovery from incomplete or invalid paths."""

    def test_missing_label_position(self, assembler: SceneAssembler) -> None:
        """Test that a fold still renders without its segment callout."""
        path = Path.from_dict(
            {
                "points": [{"x": 0, "y": 0}, {"x": 100, "y": 0}],
                "segments": [{"length": "1 m", "fold": "Open"}],
            }
        )
        scene = assembler.assemble(path)
        assert scene.find_groups("segment-label") == []
        assert len(scene.find_groups("fold")) == 1

    def test_invalid_path_placeholder(self, assembler: SceneAssembler) -> None:
        """Test the placeholder for unparseable points."""
        path = Path.from_dict({"points": [{"x": 0, "y": 0}, {"x": "NaN?", "y": 1}]})
        scene = assembler.assemble(path)
        assert scene.placeholder
        assert scene.view_box_size == 100
        (text,) = scene.elements
        assert isinstance(text, Text)
        assert text.text == INVALID_PATH_TEXT
        assert (text.x, text.y) == (50, 50)

    def test_single_point(self, assembler: SceneAssembler) -> None:
        """Test that a one-point path draws a marker and no polyline."""
        scene = assembler.assemble(Path.from_dict({"points": [{"x": 3, "y": 3}]}))
        (profile,) = scene.find_groups("path")
        assert [type(c) for c in profile.children] == [Circle]
        assert not scene.placeholder


class TestDeterminism:
    """Test that rendering is pure."""

    def test_identical_scenes(self, crush_path: Path) -> None:
        """Test that two renders of the same input are equal."""
        options = RenderOptions(show_border=True)
        first = render_diagram(crush_path, options)
        second = render_diagram(crush_path, options)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_serialization_round_trip(self, crush_path: Path) -> None:
        """Test that a rendered scene survives serialization."""
        scene = render_diagram(crush_path, RenderOptions(show_border=True))
        assert Scene.from_dict(scene.to_dict()) == scene
