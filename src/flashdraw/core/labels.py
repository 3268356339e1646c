"""Callout boxes with directional pointers.

Every label in a diagram (segment lengths, fold names, joint angles) is
the same primitive: a rounded box centered on an anchor, with a small
triangular tail on the edge facing the point the label describes.

Box dimensions are canvas units and do not scale with the diagram.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from flashdraw.config import LabelConfig, StyleConfig
from flashdraw.domain import SHADOW_FILTER, Group, Point, Rect, Text, Triangle

Coord = tuple[float, float]


class TextMeasurer(Protocol):
    """Anything that can report the rendered width of a string."""

    def measure(self, text: str, font_size: float) -> float: ...


class EstimatedTextMeasurer:
    """Width estimate from a fixed per-character advance.

    ``char_width_factor`` is the advance at ``reference_size``; other font
    sizes scale linearly.
    """

    def __init__(self, char_width_factor: float, reference_size: float) -> None:
        self.char_width_factor = char_width_factor
        self.reference_size = reference_size

    def measure(self, text: str, font_size: float) -> float:
        return len(text) * self.char_width_factor * font_size / self.reference_size


class TailSide(Enum):
    """Box edge the pointer is attached to."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True, slots=True)
class LabelBox:
    """Callout box in canvas space.

    Attributes:
        anchor: Box center
        pointer_target: Point the tail faces
        width: Box width
        height: Box height
    """

    anchor: Point
    pointer_target: Point
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.anchor.x - self.width / 2

    @property
    def right(self) -> float:
        return self.anchor.x + self.width / 2

    @property
    def top(self) -> float:
        return self.anchor.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.anchor.y + self.height / 2

    @property
    def tail_side(self) -> TailSide:
        """Edge facing the target.

        Horizontal wins only when it strictly dominates; canvas y grows
        downward, so a target above the anchor selects TOP.
        """
        dx = self.pointer_target.x - self.anchor.x
        dy = self.pointer_target.y - self.anchor.y
        if abs(dx) > abs(dy):
            return TailSide.LEFT if dx < 0 else TailSide.RIGHT
        return TailSide.TOP if dy < 0 else TailSide.BOTTOM


class LabelPlacer:
    """Lays out callouts and emits their primitives.

    Example:
        >>> placer = LabelPlacer(LabelConfig(), StyleConfig())
        >>> group = placer.place("1.20 m", Point(100, 100), Point(100, 200))
        >>> [p.kind for p in group.iter_primitives()]
        ['rect', 'triangle', 'text']
    """

    def __init__(
        self,
        config: LabelConfig,
        style: StyleConfig,
        measurer: TextMeasurer | None = None,
    ) -> None:
        self.config = config
        self.style = style
        self.measurer = measurer or EstimatedTextMeasurer(config.char_width_factor, config.font_size)

    def box(self, text: str, anchor: Point, target: Point) -> LabelBox:
        """Size the box for ``text`` centered on ``anchor``."""
        text_width = self.measurer.measure(text, self.config.font_size)
        width = max(self.config.min_width, text_width + self.config.text_padding)
        return LabelBox(anchor=anchor, pointer_target=target, width=width, height=self.config.height)

    def tail(self, box: LabelBox) -> tuple[Coord, Coord, Coord]:
        """Triangle straddling the attach point, tip pushed outward.

        Returns:
            (base_a, base_b, tip) in canvas coordinates
        """
        half = self.config.attach_size / 2
        reach = self.config.tail_length
        x, y = box.anchor.x, box.anchor.y

        match box.tail_side:
            case TailSide.LEFT:
                return ((box.left, y - half), (box.left, y + half), (box.left - reach, y))
            case TailSide.RIGHT:
                return ((box.right, y - half), (box.right, y + half), (box.right + reach, y))
            case TailSide.TOP:
                return ((x - half, box.top), (x + half, box.top), (x, box.top - reach))
            case TailSide.BOTTOM:
                return ((x - half, box.bottom), (x + half, box.bottom), (x, box.bottom + reach))

    def place(
        self,
        text: str,
        anchor: Point,
        target: Point,
        kind: str = "label",
        index: int | None = None,
        text_color: str | None = None,
    ) -> Group:
        """Build a callout group: box, tail, then centered text.

        Args:
            text: Label text
            anchor: Box center (canvas space)
            target: Point the tail faces (canvas space)
            kind: Group kind
            index: Segment or angle index for the group
            text_color: Text fill, defaults to the label text color

        Returns:
            Group holding the three primitives in draw order
        """
        box = self.box(text, anchor, target)
        rect = Rect(
            x=box.left,
            y=box.top,
            width=box.width,
            height=box.height,
            rx=self.config.corner_radius,
            fill=self.style.label_background,
            stroke=self.style.label_border,
            stroke_width=self.config.border_width,
            filter=SHADOW_FILTER if self.config.shadow else None,
        )
        tail = Triangle(points=self.tail(box), fill=self.style.tail_color)
        label = Text(
            x=anchor.x,
            y=anchor.y,
            text=text,
            font_size=self.config.font_size,
            fill=text_color or self.style.label_text,
        )
        return Group(kind=kind, children=(rect, tail, label), index=index)
