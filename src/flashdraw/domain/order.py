"""Diagram set: every path of an order plus its shared render flags."""

from dataclasses import dataclass, field
from typing import Any

from flashdraw.domain.path import Path, QuantityLength, RenderOptions


@dataclass(frozen=True)
class DiagramSet:
    """All diagrams of one order.

    Attributes:
        paths: Profiles in order
        options: Render flags shared by every path
        quantities: Order lines for the whole order
    """

    paths: tuple[Path, ...] = ()
    options: RenderOptions = field(default_factory=RenderOptions)
    quantities: tuple[QuantityLength, ...] = ()

    @property
    def valid_paths(self) -> list[Path]:
        """Paths the engine can draw."""
        return [path for path in self.paths if path.is_valid]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DiagramSet":
        """Parse order data.

        Paths without an explicit ``pathIndex`` are numbered by position.

        Args:
            data: Order mapping with a ``paths`` list

        Returns:
            DiagramSet instance
        """
        paths = []
        for position, raw in enumerate(data.get("paths") or []):
            if not isinstance(raw, dict):
                raw = {}
            if raw.get("pathIndex") is None:
                raw = {**raw, "pathIndex": position}
            paths.append(Path.from_dict(raw))

        raw_quantities = data.get("QuantitiesAndLengths")
        if not isinstance(raw_quantities, list):
            raw_quantities = []

        return cls(
            paths=tuple(paths),
            options=RenderOptions.from_dict(data),
            quantities=tuple(QuantityLength.from_dict(q) for q in raw_quantities),
        )
