"""Renderable scene graph.

A scene is the engine's only output: a square view box plus an ordered
tuple of primitives and group nodes, all in absolute canvas coordinates.
It carries no behaviour beyond traversal and serialization; rasterizers
and document writers fold over it.

Primitives:
- Circle, Polyline, Triangle, Rect, Text
- PathShape: a path made of move/line/cubic/arc commands
- Group: named container that keeps a callout and its pointer together
"""

from collections.abc import Iterator
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Union

Coord = tuple[float, float]

SHADOW_FILTER = "shadow"


@dataclass(frozen=True, slots=True)
class Circle:
    """Filled circle."""

    kind: ClassVar[str] = "circle"

    cx: float
    cy: float
    r: float
    fill: str


@dataclass(frozen=True, slots=True)
class Polyline:
    """Open stroked polyline (grid lines, profile, border segments)."""

    kind: ClassVar[str] = "polyline"

    points: tuple[Coord, ...]
    stroke: str
    stroke_width: float
    dash: tuple[float, float] | None = None


@dataclass(frozen=True, slots=True)
class Triangle:
    """Filled triangle (callout tails, direction chevron)."""

    kind: ClassVar[str] = "triangle"

    points: tuple[Coord, Coord, Coord]
    fill: str


@dataclass(frozen=True, slots=True)
class Rect:
    """Rounded rectangle, optionally tagged with a filter."""

    kind: ClassVar[str] = "rect"

    x: float
    y: float
    width: float
    height: float
    rx: float
    fill: str
    stroke: str
    stroke_width: float
    filter: str | None = None


@dataclass(frozen=True, slots=True)
class Text:
    """Single line of text centered on (x, y)."""

    kind: ClassVar[str] = "text"

    x: float
    y: float
    text: str
    font_size: float
    fill: str


@dataclass(frozen=True, slots=True)
class PathCommand:
    """One path command.

    ``op`` is one of ``M``/``L`` (x, y), ``C`` (x1, y1, x2, y2, x, y) or
    ``A`` (rx, ry, rotation, large_arc, sweep, x, y), mirroring SVG.
    """

    op: str
    values: tuple[float, ...]


@dataclass(frozen=True, slots=True)
class PathShape:
    """Stroked path built from commands (fold glyphs)."""

    kind: ClassVar[str] = "path"

    commands: tuple[PathCommand, ...]
    stroke: str
    stroke_width: float
    fill: str | None = None

    def to_svg_d(self) -> str:
        """Format commands as an SVG path ``d`` attribute."""
        parts = []
        for command in self.commands:
            values = " ".join(_format_number(v) for v in command.values)
            parts.append(f"{command.op}{values}")
        return " ".join(parts)


Primitive = Union[Circle, Polyline, Triangle, Rect, Text, PathShape]


@dataclass(frozen=True, slots=True)
class Group:
    """Container node.

    Attributes:
        kind: Role of the group ("grid-minor", "segment", "fold", ...)
        children: Primitives and nested groups in draw order
        index: Segment or angle index the group belongs to, if any
    """

    kind: str
    children: tuple["Element", ...]
    index: int | None = None

    def iter_primitives(self) -> Iterator[Primitive]:
        """Yield every primitive below this group in draw order."""
        for child in self.children:
            if isinstance(child, Group):
                yield from child.iter_primitives()
            else:
                yield child


Element = Union[Primitive, Group]


@dataclass(frozen=True, slots=True)
class Scene:
    """Complete rendered diagram.

    Attributes:
        view_box_size: Side of the square canvas
        elements: Top-level elements in draw order
        placeholder: True when the scene stands in for an invalid path
    """

    view_box_size: float
    elements: tuple[Element, ...]
    placeholder: bool = False

    def iter_primitives(self) -> Iterator[Primitive]:
        """Yield every primitive in draw order, flattening groups."""
        for element in self.elements:
            if isinstance(element, Group):
                yield from element.iter_primitives()
            else:
                yield element

    def find_groups(self, kind: str) -> list[Group]:
        """Return every group of the given kind, searching depth-first."""
        found: list[Group] = []

        def _walk(elements: tuple[Element, ...]) -> None:
            for element in elements:
                if isinstance(element, Group):
                    if element.kind == kind:
                        found.append(element)
                    _walk(element.children)

        _walk(self.elements)
        return found

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "view_box_size": self.view_box_size,
            "elements": [_element_to_dict(e) for e in self.elements],
            "placeholder": self.placeholder,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Scene":
        """Deserialize from dictionary."""
        return cls(
            view_box_size=data["view_box_size"],
            elements=tuple(_element_from_dict(e) for e in data["elements"]),
            placeholder=data.get("placeholder", False),
        )


_PRIMITIVE_TYPES: dict[str, type] = {
    cls.kind: cls for cls in (Circle, Polyline, Triangle, Rect, Text, PathShape)
}


def _format_number(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


def _freeze(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


def _element_to_dict(element: Element) -> dict[str, Any]:
    if isinstance(element, Group):
        return {
            "type": "group",
            "kind": element.kind,
            "index": element.index,
            "children": [_element_to_dict(c) for c in element.children],
        }
    data: dict[str, Any] = {"type": element.kind}
    for f in fields(element):
        value = getattr(element, f.name)
        if f.name == "commands":
            value = [{"op": c.op, "values": list(c.values)} for c in value]
        data[f.name] = value
    return data


def _element_from_dict(data: dict[str, Any]) -> Element:
    if data["type"] == "group":
        return Group(
            kind=data["kind"],
            children=tuple(_element_from_dict(c) for c in data["children"]),
            index=data.get("index"),
        )
    primitive_cls = _PRIMITIVE_TYPES[data["type"]]
    kwargs: dict[str, Any] = {}
    for f in fields(primitive_cls):
        value = data[f.name]
        if f.name == "commands":
            value = tuple(PathCommand(c["op"], tuple(c["values"])) for c in value)
        else:
            value = _freeze(value)
        kwargs[f.name] = value
    return primitive_cls(**kwargs)
