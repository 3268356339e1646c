"""Flashdraw - Fabrication diagrams for folded sheet-metal flashings.

Flashdraw turns an abstract flashing profile (ordered points, per-segment
lengths and folds, joint angles) into a declarative vector scene: a tight
view window, a background grid, the folded polyline, fold glyphs, segment
and angle callouts, and an optional offset border with a direction chevron.

Example:
    $ flashdraw render order.json -o diagrams/

This will write one SVG file per flashing in the order.
"""

__version__ = "0.1.0"
__author__ = "Flashdraw Developers"

__all__ = ["__author__", "__version__"]
