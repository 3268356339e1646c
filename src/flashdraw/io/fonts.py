"""Font metrics for label text measurement.

This module provides the FontMetrics class, which measures text width from
a TTF/OTF font's horizontal metrics so label boxes fit their text.
"""

from functools import lru_cache
from pathlib import Path

from fontTools.ttLib import TTFont, TTLibError

from flashdraw.exceptions import FontMetricsError

NOTDEF = ".notdef"


class FontMetrics:
    """Advance-width table of one font.

    Only the ``hmtx`` advances and the best cmap are kept; the font file
    is closed after loading, so instances are cheap to share read-only
    between renders.

    Example:
        metrics = FontMetrics.load(Path("Inter-Regular.ttf"))
        width = metrics.measure("1.20 m", font_size=16)
    """

    def __init__(
        self,
        advances: dict[str, int],
        cmap: dict[int, str],
        units_per_em: int,
        source: Path | None = None,
    ) -> None:
        """Initialize from already extracted tables.

        Args:
            advances: Advance width per glyph name, in font units
            cmap: Code point to glyph name
            units_per_em: Font design units per em
            source: File the tables came from
        """
        self._advances = advances
        self._cmap = cmap
        self._units_per_em = units_per_em
        self._source = source

    @classmethod
    def load(cls, font_path: Path) -> "FontMetrics":
        """Read advance widths from a font file.

        Args:
            font_path: Path to the TTF or OTF font file

        Returns:
            FontMetrics instance

        Raises:
            FileNotFoundError: If font file does not exist
            FontMetricsError: If the file is not a usable font
        """
        if not font_path.exists():
            raise FileNotFoundError(f"Font file not found: {font_path}")

        try:
            with TTFont(str(font_path), lazy=True) as font:
                units_per_em = font["head"].unitsPerEm
                advances = {name: advance for name, (advance, _lsb) in font["hmtx"].metrics.items()}
                cmap = dict(font.getBestCmap() or {})
        except (TTLibError, KeyError, OSError) as e:
            raise FontMetricsError(str(font_path), str(e)) from e

        if not units_per_em:
            raise FontMetricsError(str(font_path), "unitsPerEm is zero")
        return cls(advances, cmap, units_per_em, font_path)

    @property
    def units_per_em(self) -> int:
        """Return font's units per em."""
        return self._units_per_em

    @property
    def source(self) -> Path | None:
        """Font file the metrics were loaded from."""
        return self._source

    def advance(self, char: str) -> int:
        """Advance width of one character in font units.

        Characters missing from the cmap use the ``.notdef`` advance.
        """
        glyph_name = self._cmap.get(ord(char), NOTDEF)
        return self._advances.get(glyph_name, self._advances.get(NOTDEF, 0))

    def measure(self, text: str, font_size: float) -> float:
        """Rendered width of ``text`` at ``font_size``.

        Args:
            text: Single line of text
            font_size: Size in canvas units

        Returns:
            Width in canvas units
        """
        units = sum(self.advance(char) for char in text)
        return units * font_size / self._units_per_em


@lru_cache(maxsize=8)
def load_font_metrics(font_path: Path) -> FontMetrics:
    """Load font metrics once per process.

    Args:
        font_path: Path to the TTF or OTF font file

    Returns:
        Shared FontMetrics instance
    """
    return FontMetrics.load(Path(font_path))
