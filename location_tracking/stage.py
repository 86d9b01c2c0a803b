"""Retained scene graph the renderer draws into.

The stage is a flat, ordered list of nodes. A node is either a
:class:`Graphics` (vector primitives sharing one stroke / fill style and one
opacity) or a :class:`Label` (styled text anchored at a point). Nodes hold no
reference to any window or image; :mod:`location_tracking.renderer.raster`
turns a stage into pixels.

Children are drawn in insertion order, so later nodes paint over earlier
ones.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from location_tracking.config import LineStyle, TextStyle
from location_tracking.types import AlphaDirection, Color, GraphicsKind, Point


@dataclass(frozen=True)
class Segment:
    start: Point
    end: Point


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float


@dataclass
class Graphics:
    """Vector drawing node.

    Drawing calls follow the usual pen model: ``move_to`` sets the pen,
    ``line_to`` records a segment from the pen and moves it. Circles use the
    fill set by ``begin_fill``.

    Attributes:
        kind: Category used to find the node again (grid, lines, markers).
        alpha: Node opacity, applied on top of stroke / fill alpha.
        alpha_direction: Oscillation direction, only meaningful for incident markers.
    """

    kind: GraphicsKind
    line_style: Optional[LineStyle] = None
    fill: Optional[Tuple[Color, float]] = None
    segments: List[Segment] = field(default_factory=list)
    circles: List[Circle] = field(default_factory=list)
    alpha: float = 1.0
    alpha_direction: AlphaDirection = AlphaDirection.RISING
    _pen: Optional[Point] = field(default=None, init=False, repr=False, compare=False)

    def set_line_style(self, style: LineStyle) -> "Graphics":
        self.line_style = style
        return self

    def begin_fill(self, color: Color, alpha: float = 1.0) -> "Graphics":
        self.fill = (color, alpha)
        return self

    def move_to(self, x: float, y: float) -> "Graphics":
        self._pen = (x, y)
        return self

    def line_to(self, x: float, y: float) -> "Graphics":
        if self._pen is None:
            raise ValueError("line_to called before move_to")
        self.segments.append(Segment(start=self._pen, end=(x, y)))
        self._pen = (x, y)
        return self

    def draw_circle(self, x: float, y: float, radius: float) -> "Graphics":
        if self.fill is None:
            raise ValueError("draw_circle called before begin_fill")
        self.circles.append(Circle(center=(x, y), radius=radius))
        return self


@dataclass
class Label:
    """Text anchored at ``(x, y)`` according to ``style.anchor_x/anchor_y``."""

    text: str
    style: TextStyle
    x: float
    y: float


Node = Union[Graphics, Label]


class Stage:
    """Ordered container of drawable nodes."""

    def __init__(self) -> None:
        self._children: List[Node] = []

    @property
    def children(self) -> Tuple[Node, ...]:
        return tuple(self._children)

    def add_child(self, *nodes: Node) -> None:
        self._children.extend(nodes)

    def remove_child(self, node: Node) -> bool:
        """Remove ``node`` (by identity). Returns False if it was not a child."""
        for idx, child in enumerate(self._children):
            if child is node:
                del self._children[idx]
                return True
        return False

    def remove_children(self) -> List[Node]:
        """Detach every child and return them in drawing order."""
        removed, self._children = self._children, []
        return removed

    def find(self, kind: GraphicsKind) -> List[Graphics]:
        return [
            child
            for child in self._children
            if isinstance(child, Graphics) and child.kind == kind
        ]

    def labels(self) -> List[Label]:
        return [child for child in self._children if isinstance(child, Label)]

    def __len__(self) -> int:
        return len(self._children)
