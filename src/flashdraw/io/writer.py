"""SVG writer for rendered scenes.

This module provides the SvgWriter class, which folds a Scene into an SVG
document with svgwrite.
"""

from pathlib import Path

import svgwrite
from svgwrite.base import BaseElement
from svgwrite.container import Group as SvgGroup

from flashdraw.domain import (
    SHADOW_FILTER,
    Circle,
    Element,
    Group,
    PathShape,
    Polyline,
    Rect,
    Scene,
    Text,
    Triangle,
)
from flashdraw.exceptions import SceneWriteError

FONT_FAMILY = "Helvetica, Arial, sans-serif"


def _num(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


class SvgWriter:
    """Serializes a scene to SVG.

    Groups keep their kind as the ``class`` attribute (and their index as
    ``data-index``), so a consumer can still find a callout and its
    pointer together.

    Example:
        writer = SvgWriter(scene)
        writer.save(Path("out/diagram-0.svg"))
    """

    def __init__(self, scene: Scene) -> None:
        """Initialize the writer.

        Args:
            scene: Scene to serialize
        """
        self._scene = scene

    def build(self) -> svgwrite.Drawing:
        """Build the svgwrite drawing for the scene."""
        size = self._scene.view_box_size
        dwg = svgwrite.Drawing(size=("100%", "100%"), debug=False)
        dwg["viewBox"] = f"0 0 {_num(size)} {_num(size)}"

        if any(getattr(p, "filter", None) == SHADOW_FILTER for p in self._scene.iter_primitives()):
            self._add_shadow_filter(dwg)

        for element in self._scene.elements:
            dwg.add(self._element(dwg, element))
        return dwg

    def to_string(self) -> str:
        """Serialize the scene to SVG text."""
        return self.build().tostring()

    def save(self, output_path: Path) -> Path:
        """Write the scene to an SVG file.

        Args:
            output_path: Destination file; parent directories are created

        Returns:
            The written path

        Raises:
            SceneWriteError: If the file cannot be written
        """
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            self.build().saveas(str(output_path), pretty=True)
        except OSError as e:
            raise SceneWriteError(str(output_path), str(e)) from e
        return output_path

    @staticmethod
    def get_output_path(output_dir: Path, path_index: int) -> Path:
        """File name of a diagram: ``diagram-{path_index}.svg``."""
        return output_dir / f"diagram-{path_index}.svg"

    @staticmethod
    def _add_shadow_filter(dwg: svgwrite.Drawing) -> None:
        shadow = dwg.filter(id=SHADOW_FILTER, x="-20%", y="-20%", width="140%", height="140%")
        shadow.feGaussianBlur(in_="SourceAlpha", stdDeviation=2, result="blur")
        shadow.feOffset(in_="blur", dx=1, dy=2, result="offsetBlur")
        shadow.feComponentTransfer(in_="offsetBlur", result="shadow").feFuncA(
            "linear", slope=0.3
        )
        shadow.feMerge(["shadow", "SourceGraphic"])
        dwg.defs.add(shadow)

    def _element(self, dwg: svgwrite.Drawing, element: Element) -> BaseElement:
        match element:
            case Group():
                group: SvgGroup = dwg.g(class_=element.kind)
                if element.index is not None:
                    group["data-index"] = str(element.index)
                for child in element.children:
                    group.add(self._element(dwg, child))
                return group
            case Circle():
                return dwg.circle(
                    center=(_num(element.cx), _num(element.cy)),
                    r=_num(element.r),
                    fill=element.fill,
                )
            case Polyline():
                line = dwg.polyline(
                    points=[(_num(x), _num(y)) for x, y in element.points],
                    fill="none",
                    stroke=element.stroke,
                    stroke_width=_num(element.stroke_width),
                )
                if element.dash is not None:
                    line["stroke-dasharray"] = ",".join(_num(d) for d in element.dash)
                return line
            case Triangle():
                return dwg.polygon(
                    points=[(_num(x), _num(y)) for x, y in element.points],
                    fill=element.fill,
                )
            case Rect():
                rect = dwg.rect(
                    insert=(_num(element.x), _num(element.y)),
                    size=(_num(element.width), _num(element.height)),
                    rx=_num(element.rx),
                    fill=element.fill,
                    stroke=element.stroke,
                    stroke_width=_num(element.stroke_width),
                )
                if element.filter is not None:
                    rect["filter"] = f"url(#{element.filter})"
                return rect
            case Text():
                return dwg.text(
                    element.text,
                    insert=(_num(element.x), _num(element.y)),
                    font_size=_num(element.font_size),
                    font_family=FONT_FAMILY,
                    fill=element.fill,
                    text_anchor="middle",
                    dominant_baseline="middle",
                )
            case PathShape():
                return dwg.path(
                    d=element.to_svg_d(),
                    fill=element.fill or "none",
                    stroke=element.stroke,
                    stroke_width=_num(element.stroke_width),
                )
        raise TypeError(f"Unsupported scene element: {type(element).__name__}")
