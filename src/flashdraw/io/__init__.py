"""I/O layer for flashdraw.

This module handles everything that touches files: order JSON in, SVG
out, and font metrics for text measurement. The rendering core stays
free of file access.

Key responsibilities:
- Load order files into diagram sets
- Serialize scenes to SVG with svgwrite
- Measure label text with fontTools advance widths

Key classes:
- OrderReader: Load order JSON files
- SvgWriter: Write rendered scenes
- FontMetrics: Text widths from a TTF/OTF font
"""

from flashdraw.io.fonts import FontMetrics, load_font_metrics
from flashdraw.io.reader import OrderReader
from flashdraw.io.writer import SvgWriter

__all__ = [
    "FontMetrics",
    "OrderReader",
    "SvgWriter",
    "load_font_metrics",
]
