"""Order reader for loading diagram sets from JSON files.

This module provides the OrderReader class for loading order files and
parsing them into domain models.
"""

import json
from pathlib import Path
from typing import Any

from flashdraw.domain import DiagramSet
from flashdraw.exceptions import OrderFormatError, OrderLoadError


class OrderReader:
    """Loads order JSON files into diagram sets.

    An order file holds a ``paths`` array plus the render flags shared by
    every diagram (``scale``, ``showBorder``, ``borderOffsetDirection``,
    ``labelPositionOverrides``) and the order lines
    (``QuantitiesAndLengths``).

    Example:
        reader = OrderReader(Path("order.json"))
        diagram_set = reader.load()
        for path in diagram_set.paths:
            print(path.name)
    """

    def __init__(self, order_path: Path) -> None:
        """Initialize the order reader.

        Args:
            order_path: Path to the order JSON file
        """
        self._order_path = order_path
        self._data: dict[str, Any] | None = None

    @property
    def path(self) -> Path:
        """Order file location."""
        return self._order_path

    def load(self) -> DiagramSet:
        """Load and parse the order file.

        Returns:
            DiagramSet with every path of the order

        Raises:
            FileNotFoundError: If the order file does not exist
            OrderLoadError: If the file cannot be read
            OrderFormatError: If the file is not JSON or has no paths array
        """
        if not self._order_path.exists():
            raise FileNotFoundError(f"Order file not found: {self._order_path}")

        try:
            text = self._order_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise OrderLoadError(str(self._order_path), str(e)) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise OrderFormatError(str(self._order_path), f"invalid JSON: {e}") from e

        self._data = self._validate(data)
        return DiagramSet.from_dict(self._data)

    @property
    def raw(self) -> dict[str, Any]:
        """Parsed JSON of the last load.

        Raises:
            RuntimeError: If the order has not been loaded yet
        """
        if self._data is None:
            raise RuntimeError("Order not loaded. Call load() first.")
        return self._data

    def _validate(self, data: Any) -> dict[str, Any]:
        if not isinstance(data, dict):
            raise OrderFormatError(str(self._order_path), "top level must be an object")
        if not isinstance(data.get("paths"), list):
            raise OrderFormatError(str(self._order_path), "missing 'paths' array")
        return data
