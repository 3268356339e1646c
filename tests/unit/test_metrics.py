"""Tests for summary metrics."""

import pytest

from flashdraw.config import QuantityLengthFormat
from flashdraw.core.metrics import (
    format_quantity_length,
    girth,
    group_quantities,
    summarize_order,
    summarize_path,
    total_folds,
    total_quantity,
)
from flashdraw.domain import Path, QuantityLength


def make_path(
    lengths: list[str],
    folds: dict[int, str] | None = None,
    angles: int = 0,
    **extra: object,
) -> Path:
    """Build a straight path with the given segment lengths."""
    folds = folds or {}
    points = [{"x": 10 * i, "y": 0} for i in range(len(lengths) + 1)]
    segments = [{"length": text, "fold": folds.get(i)} for i, text in enumerate(lengths)]
    return Path.from_dict(
        {
            "points": points,
            "segments": segments,
            "angles": [{"angle": "135°"} for _ in range(angles)],
            **extra,
        }
    )


class TestTotalFolds:
    """Test fold counting."""

    def test_counts_angles_and_folds(self) -> None:
        """Test angles plus per-variant fold counts."""
        path = make_path(["1", "1", "1"], folds={0: "Crush", 2: "Open"}, angles=2)
        assert total_folds(path) == 2 + 2 + 1

    def test_interior_folds_counted(self) -> None:
        """Test that folds that are never drawn still count."""
        path = make_path(["1", "1", "1"], folds={1: "Break"})
        assert total_folds(path) == 1

    def test_empty_path(self) -> None:
        """Test a path with nothing to count."""
        assert total_folds(Path()) == 0

    def test_additive(self) -> None:
        """Test that fold counts add over concatenated segments and angles."""
        a = make_path(["1", "1"], folds={0: "Crush Hook"}, angles=1)
        b = make_path(["1", "1"], folds={1: "Crush"}, angles=2)
        joined = Path(segments=a.segments + b.segments, angles=a.angles + b.angles)
        assert total_folds(joined) == total_folds(a) + total_folds(b)


class TestGirth:
    """Test girth formatting."""

    def test_sum_of_lengths(self) -> None:
        """Test decorated lengths are summed."""
        assert girth(make_path(["1.20 m", "1,200 mm", "15"])) == "1216.20"

    def test_empty(self) -> None:
        """Test girth without segments."""
        assert girth(Path()) == "0.00"


class TestQuantityLength:
    """Test Q x L formatting."""

    @pytest.fixture
    def items(self) -> list[QuantityLength]:
        """Create two order lines, shortest first."""
        return [QuantityLength(1, 350), QuantityLength(2, 1500)]

    def test_spaced(self, items: list[QuantityLength]) -> None:
        """Test the spaced format keeps input order and groups thousands."""
        assert format_quantity_length(items) == "1 x 350   2 x 1,500"

    def test_sorted_comma(self, items: list[QuantityLength]) -> None:
        """Test the compact format sorted by length, longest first."""
        result = format_quantity_length(items, QuantityLengthFormat.SORTED_COMMA)
        assert result == "2x1500, 1x350"

    def test_rounds_half_up(self) -> None:
        """Test length rounding."""
        assert format_quantity_length([QuantityLength(1, 1499.5)]) == "1 x 1,500"
        assert format_quantity_length([QuantityLength(1, 2.5)]) == "1 x 3"

    def test_empty(self) -> None:
        """Test no order lines."""
        assert format_quantity_length([]) == ""

    def test_total_quantity(self, items: list[QuantityLength]) -> None:
        """Test piece count."""
        assert total_quantity(items) == 3


class TestGroupQuantities:
    """Test sharing order lines between diagrams."""

    def test_even_split(self) -> None:
        """Test consecutive chunks of equal size."""
        items = [QuantityLength(i, 100) for i in range(4)]
        groups = group_quantities(items, 2)
        assert [[i.quantity for i in g] for g in groups] == [[0, 1], [2, 3]]

    def test_uneven_split(self) -> None:
        """Test that trailing diagrams get fewer lines."""
        items = [QuantityLength(i, 100) for i in range(5)]
        assert [len(g) for g in group_quantities(items, 2)] == [3, 2]
        assert [len(g) for g in group_quantities(items[:1], 3)] == [1, 0, 0]

    def test_no_items(self) -> None:
        """Test empty groups for every diagram."""
        assert group_quantities([], 2) == [[], []]

    def test_no_paths(self) -> None:
        """Test zero diagrams."""
        assert group_quantities([QuantityLength(1, 1)], 0) == []


class TestSummaries:
    """Test property-table and order-summary values."""

    def test_summarize_path(self) -> None:
        """Test all property values of one diagram."""
        path = make_path(
            ["100", "200"],
            folds={0: "Crush"},
            angles=1,
            name="Gutter",
            color="Monument",
            code="G1",
            pathIndex=4,
        )
        summary = summarize_path(path, [QuantityLength(2, 1500), QuantityLength(1, 350)])
        assert summary.path_index == 4
        assert summary.folds_per_piece == 3
        assert summary.quantity == 3
        assert summary.total_folds == 9
        assert summary.girth == "300.00"
        assert summary.quantity_length == "2 x 1,500   1 x 350"

    def test_property_rows_defaults(self) -> None:
        """Test placeholder values for missing metadata."""
        rows = dict(summarize_path(make_path(["1"]), []).property_rows())
        assert rows["Name"] == "Unnamed"
        assert rows["Colour"] == "N/A"
        assert rows["Code"] == "N/A"
        assert rows["Q x L"] == "N/A"
        assert rows["Girth"] == "1.00 mm"
        assert rows["Total Folds (T)"] == "0"

    def test_summarize_order_skips_invalid(self) -> None:
        """Test that invalid paths are left out and lines split over valid ones."""
        valid_a = make_path(["1"], folds={0: "Open"}, pathIndex=0)
        invalid = Path.from_dict({"points": [{"x": "?", "y": 0}], "pathIndex": 1})
        valid_b = make_path(["1"], folds={0: "Crush"}, pathIndex=2)
        items = [QuantityLength(2, 100), QuantityLength(3, 200)]

        order = summarize_order([valid_a, invalid, valid_b], items)

        assert [d.path_index for d in order.diagrams] == [0, 2]
        assert [d.quantity for d in order.diagrams] == [2, 3]
        assert order.total_quantity == 5
        assert order.total_folds == 1 * 2 + 2 * 3

    def test_to_dict(self) -> None:
        """Test serialization keys."""
        data = summarize_path(make_path(["1"]), []).to_dict()
        assert data["girth"] == "1.00"
        assert data["quantity"] == 0
