"""Summary metrics: fold counts, girth and quantity-by-length.

These run off the path model alone, independently of rendering, and feed
the per-diagram property table and the order summary table.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from flashdraw.config import QuantityLengthFormat
from flashdraw.domain import Path, QuantityLength

NOT_AVAILABLE = "N/A"
UNNAMED = "Unnamed"


def total_folds(path: Path) -> int:
    """Folds per piece: one per angle callout plus each segment's fold count.

    Counts every segment's fold, including interior ones that are never
    drawn.
    """
    return len(path.angles) + sum(segment.fold_type.fold_count for segment in path.segments)


def girth(path: Path) -> str:
    """Sum of segment lengths, formatted to two decimals."""
    return f"{sum(segment.length_value for segment in path.segments):.2f}"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_quantity_length(
    items: Sequence[QuantityLength],
    fmt: QuantityLengthFormat = QuantityLengthFormat.SPACED,
) -> str:
    """Render order lines as a compact Q x L string.

    Args:
        items: Order lines
        fmt: SPACED gives ``"2 x 1,500   1 x 350"`` in input order;
            SORTED_COMMA gives ``"2x1500, 1x350"`` sorted by length,
            longest first

    Returns:
        Formatted string, empty for no items

    Examples:
        >>> items = [QuantityLength(2, 1500), QuantityLength(1, 350)]
        >>> format_quantity_length(items)
        '2 x 1,500   1 x 350'
        >>> format_quantity_length(items[::-1], QuantityLengthFormat.SORTED_COMMA)
        '2x1500, 1x350'
    """
    match fmt:
        case QuantityLengthFormat.SPACED:
            return "   ".join(f"{i.quantity} x {_round_half_up(i.length):,}" for i in items)
        case QuantityLengthFormat.SORTED_COMMA:
            ordered = sorted(items, key=lambda i: i.length, reverse=True)
            return ", ".join(f"{i.quantity}x{_round_half_up(i.length)}" for i in ordered)


def total_quantity(items: Sequence[QuantityLength]) -> int:
    """Total number of pieces across order lines."""
    return sum(item.quantity for item in items)


def group_quantities(
    items: Sequence[QuantityLength],
    path_count: int,
) -> list[list[QuantityLength]]:
    """Split order-level lines into consecutive per-diagram chunks.

    Each diagram gets ``ceil(len(items) / path_count)`` lines; trailing
    diagrams may get fewer or none.

    Args:
        items: Order lines for the whole order
        path_count: Number of diagrams sharing them

    Returns:
        Exactly ``path_count`` lists
    """
    if path_count <= 0:
        return []
    per_path = math.ceil(len(items) / path_count)
    if per_path == 0:
        return [[] for _ in range(path_count)]
    return [list(items[i * per_path : (i + 1) * per_path]) for i in range(path_count)]


@dataclass(frozen=True)
class DiagramSummary:
    """Property-table values of one diagram.

    Attributes:
        path_index: Diagram position in the order
        name: Display name
        color: Colour / material
        code: Product code
        quantity_length: Formatted Q x L
        quantity: Total pieces
        folds_per_piece: F
        girth: Girth in mm, two decimals
        total_folds: T = F x quantity
    """

    path_index: int
    name: str
    color: str
    code: str
    quantity_length: str
    quantity: int
    folds_per_piece: int
    girth: str
    total_folds: int

    def property_rows(self) -> list[tuple[str, str]]:
        """(label, value) rows for a per-diagram property table."""
        return [
            ("Name", self.name or UNNAMED),
            ("Colour", self.color or NOT_AVAILABLE),
            ("Code", self.code or NOT_AVAILABLE),
            ("Q x L", self.quantity_length or NOT_AVAILABLE),
            ("Quantity", str(self.quantity)),
            ("Folds (F)", str(self.folds_per_piece)),
            ("Girth", f"{self.girth} mm"),
            ("Total Folds (T)", str(self.total_folds)),
        ]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "path_index": self.path_index,
            "name": self.name,
            "color": self.color,
            "code": self.code,
            "quantity_length": self.quantity_length,
            "quantity": self.quantity,
            "folds_per_piece": self.folds_per_piece,
            "girth": self.girth,
            "total_folds": self.total_folds,
        }


@dataclass(frozen=True)
class OrderSummary:
    """Order summary table: one row per valid diagram plus totals."""

    diagrams: tuple[DiagramSummary, ...] = field(default_factory=tuple)

    @property
    def total_quantity(self) -> int:
        return sum(d.quantity for d in self.diagrams)

    @property
    def total_folds(self) -> int:
        return sum(d.total_folds for d in self.diagrams)


def summarize_path(
    path: Path,
    items: Sequence[QuantityLength],
    fmt: QuantityLengthFormat = QuantityLengthFormat.SPACED,
) -> DiagramSummary:
    """Compute the property-table values of one diagram."""
    folds = total_folds(path)
    quantity = total_quantity(items)
    return DiagramSummary(
        path_index=path.path_index,
        name=path.name,
        color=path.color,
        code=path.code,
        quantity_length=format_quantity_length(items, fmt),
        quantity=quantity,
        folds_per_piece=folds,
        girth=girth(path),
        total_folds=folds * quantity,
    )


def summarize_order(
    paths: Sequence[Path],
    items: Sequence[QuantityLength],
    fmt: QuantityLengthFormat = QuantityLengthFormat.SPACED,
) -> OrderSummary:
    """Summarize every valid diagram of an order.

    Invalid paths are left out, and the order lines are shared among the
    valid ones only.
    """
    valid = [path for path in paths if path.is_valid]
    groups = group_quantities(items, len(valid))
    return OrderSummary(
        diagrams=tuple(summarize_path(path, group, fmt) for path, group in zip(valid, groups))
    )
