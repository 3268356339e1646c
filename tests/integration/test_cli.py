"""Integration tests for the command-line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from flashdraw import __version__
from flashdraw.cli.app import app

runner = CliRunner()

ORDER = {
    "showBorder": True,
    "borderOffsetDirection": "inside",
    "QuantitiesAndLengths": [
        {"quantity": 2, "length": 1500},
        {"quantity": 1, "length": 350},
    ],
    "paths": [
        {
            "name": "Gutter",
            "color": "Surfmist",
            "code": "G1",
            "points": [{"x": 0, "y": 0}, {"x": 100, "y": 0}, {"x": 100, "y": 100}],
            "segments": [
                {"length": "100", "labelPosition": {"x": 50, "y": -20}, "fold": "Break"},
                {"length": "100", "labelPosition": {"x": 120, "y": 50}, "fold": "Crush"},
            ],
            "angles": [{"angle": "120°", "vertexIndex": 1, "labelPosition": {"x": 80, "y": 20}}],
        },
        {"points": [{"x": "oops", "y": 0}]},
    ],
}


@pytest.fixture
def order_file(tmp_path: Path) -> Path:
    """Write a two-diagram order to disk."""
    path = tmp_path / "order.json"
    path.write_text(json.dumps(ORDER), encoding="utf-8")
    return path


class TestRenderCommand:
    """Test the render command."""

    def test_render_writes_svgs(self, order_file: Path, tmp_path: Path) -> None:
        """Test that every diagram becomes an SVG file."""
        out = tmp_path / "svg"
        result = runner.invoke(
            app,
            [
                "render",
                str(order_file),
                "-o",
                str(out),
                "-j",
                "1",
                "--log-file",
                str(tmp_path / "run.log"),
            ],
        )

        assert result.exit_code == 0, result.output
        assert (out / "diagram-0.svg").exists()
        assert (out / "diagram-1.svg").exists()
        assert "Invalid path data" in (out / "diagram-1.svg").read_text(encoding="utf-8")
        assert "Complete" in result.output

    def test_default_output_dir(self, order_file: Path, tmp_path: Path) -> None:
        """Test the output directory next to the order."""
        result = runner.invoke(
            app,
            ["render", str(order_file), "-q", "-j", "1", "--log-file", str(tmp_path / "run.log")],
        )

        assert result.exit_code == 0, result.output
        assert (tmp_path / "order-diagrams" / "diagram-0.svg").exists()

    def test_verbose_prints_summary(self, order_file: Path, tmp_path: Path) -> None:
        """Test that verbose mode adds the order summary."""
        result = runner.invoke(
            app,
            [
                "render",
                str(order_file),
                "-v",
                "-j",
                "1",
                "--log-file",
                str(tmp_path / "run.log"),
            ],
        )
        assert result.exit_code == 0, result.output
        assert "Order Summary" in result.output

    def test_missing_order(self, tmp_path: Path) -> None:
        """Test that a missing order exits with an error."""
        result = runner.invoke(app, ["render", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_bad_policy(self, order_file: Path) -> None:
        """Test that an unknown policy value is rejected."""
        result = runner.invoke(app, ["render", str(order_file), "--angle-policy", "sideways"])
        assert result.exit_code == 1
        assert "standard" in result.output

    def test_malformed_order(self, tmp_path: Path) -> None:
        """Test that a non-order JSON file exits with an error."""
        path = tmp_path / "order.json"
        path.write_text('{"items": []}', encoding="utf-8")
        result = runner.invoke(app, ["render", str(path), "--log-file", str(tmp_path / "x.log")])
        assert result.exit_code == 1
        assert "Could not load order" in result.output

    def test_missing_font(self, order_file: Path, tmp_path: Path) -> None:
        """Test that a missing font exits before rendering."""
        result = runner.invoke(
            app, ["render", str(order_file), "--font", str(tmp_path / "nofont.ttf")]
        )
        assert result.exit_code == 1

    def test_verbose_and_quiet(self, order_file: Path) -> None:
        """Test that the two output modes are exclusive."""
        result = runner.invoke(app, ["render", str(order_file), "-v", "-q"])
        assert result.exit_code == 1


class TestSummaryCommand:
    """Test the summary command."""

    def test_summary(self, order_file: Path) -> None:
        """Test the order summary table."""
        result = runner.invoke(app, ["summary", str(order_file)])
        assert result.exit_code == 0, result.output
        assert "Order Summary" in result.output

    def test_summary_verbose(self, order_file: Path) -> None:
        """Test per-diagram property tables."""
        result = runner.invoke(app, ["summary", str(order_file), "-v"])
        assert result.exit_code == 0, result.output
        assert "Diagram 0" in result.output
        assert "Girth" in result.output

    def test_summary_bad_format(self, order_file: Path) -> None:
        """Test that an unknown Q x L format is rejected."""
        result = runner.invoke(app, ["summary", str(order_file), "--qxl-format", "csv"])
        assert result.exit_code == 1


class TestVersion:
    """Test the version flag."""

    def test_version(self) -> None:
        """Test that --version prints the version and exits cleanly."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
