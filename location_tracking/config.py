"""Rendering, animation and polling configuration.

All configuration objects are frozen dataclasses whose defaults reproduce the
map's original look: a 1200x800 black canvas, a 60x60 grid, green officers,
orange incidents and white labels. Values are validated at construction and
invalid ones raise ``ValueError``.

Cells are square. ``GridConfig.cell_size`` is derived from the canvas width
and the column count and is used for both axes, so the default grid has
20x20 pixel cells; horizontal grid lines past the canvas height are clipped
when rasterized.
"""

from dataclasses import dataclass, field

from PIL import ImageColor

from location_tracking.types import RGB, Color


def to_rgb(color: Color) -> RGB:
    """Resolve a ``0xRRGGBB`` integer or a color name to an RGB triple."""
    if isinstance(color, bool):
        raise ValueError(f"Invalid color: {color!r}")
    if isinstance(color, int):
        if not 0 <= color <= 0xFFFFFF:
            raise ValueError(f"Color out of range: {color:#x}")
        return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF
    if isinstance(color, str):
        r, g, b = ImageColor.getrgb(color)[:3]
        return r, g, b
    raise ValueError(f"Invalid color: {color!r}")


def _check_alpha(value: float, name: str) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value}")


@dataclass(frozen=True)
class GridConfig:
    """Canvas size and grid line counts.

    Attributes:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        lines_x: Number of vertical grid lines (columns).
        lines_y: Number of horizontal grid lines (rows).
    """

    width: int = 1200
    height: int = 800
    lines_x: int = 60
    lines_y: int = 60

    def __post_init__(self) -> None:
        for name in ("width", "height", "lines_x", "lines_y"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

    @property
    def cell_size(self) -> float:
        return self.width / self.lines_x

    @property
    def cell_width(self) -> float:
        return self.cell_size

    @property
    def cell_height(self) -> float:
        return self.cell_size

    def to_pixels(self, x: float, y: float) -> tuple[float, float]:
        """Scale grid coordinates to canvas pixels."""
        return x * self.cell_width, y * self.cell_height


@dataclass(frozen=True)
class TextStyle:
    """Label style.

    Attributes:
        fill: Text color.
        font_size: Font size in pixels.
        anchor_x: Horizontal anchor as a fraction of the text width (0 left, 1 right).
        anchor_y: Vertical anchor as a fraction of the text height (0 top, 1 bottom).
    """

    fill: Color = "white"
    font_size: int = 16
    anchor_x: float = 0.5
    anchor_y: float = 1.0

    def __post_init__(self) -> None:
        to_rgb(self.fill)
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got {self.font_size}")
        _check_alpha(self.anchor_x, "anchor_x")
        _check_alpha(self.anchor_y, "anchor_y")


@dataclass(frozen=True)
class LineStyle:
    width: int = 1
    color: Color = 0x424242
    alpha: float = 1.0

    def __post_init__(self) -> None:
        to_rgb(self.color)
        if self.width <= 0:
            raise ValueError(f"width must be positive, got {self.width}")
        _check_alpha(self.alpha, "alpha")


@dataclass(frozen=True)
class MarkerStyle:
    """Filled circle style. ``radius_cells`` is in cell widths."""

    color: Color
    radius_cells: float
    alpha: float = 1.0

    def __post_init__(self) -> None:
        to_rgb(self.color)
        if self.radius_cells <= 0:
            raise ValueError(f"radius_cells must be positive, got {self.radius_cells}")
        _check_alpha(self.alpha, "alpha")


@dataclass(frozen=True)
class AnimationConfig:
    """Bounds and step of the incident opacity oscillator."""

    upper: float = 1.0
    lower: float = 0.6
    step: float = 0.005

    def __post_init__(self) -> None:
        if self.step <= 0:
            raise ValueError(f"step must be positive, got {self.step}")
        if self.lower >= self.upper:
            raise ValueError(
                f"lower bound {self.lower} must be below upper bound {self.upper}"
            )


@dataclass(frozen=True)
class PollConfig:
    """Poll and frame timing, in seconds / frames per second."""

    interval: float = 5.0
    fps: float = 60.0

    def __post_init__(self) -> None:
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval}")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")


@dataclass(frozen=True)
class SceneConfig:
    """Everything the scene renderer and the raster need.

    Attributes:
        scale_officer_endpoint: When False (default) assignment lines end at the
            officer's raw grid coordinates, as the map has always drawn them.
            When True the officer endpoint is scaled to pixels like the
            incident endpoint.
    """

    grid: GridConfig = field(default_factory=GridConfig)
    background: Color = 0x000000
    grid_line: LineStyle = field(
        default_factory=lambda: LineStyle(width=1, color=0x424242, alpha=0.8)
    )
    assign_line: LineStyle = field(
        default_factory=lambda: LineStyle(width=2, color=0x37B218, alpha=1.0)
    )
    officer_marker: MarkerStyle = field(
        default_factory=lambda: MarkerStyle(color=0x37B218, radius_cells=0.5)
    )
    incident_marker: MarkerStyle = field(
        default_factory=lambda: MarkerStyle(color=0xBF360C, radius_cells=1.0)
    )
    tooltip: TextStyle = field(default_factory=TextStyle)
    scale_officer_endpoint: bool = False

    def __post_init__(self) -> None:
        to_rgb(self.background)


DEFAULT_SCENE_CONFIG = SceneConfig()
DEFAULT_ANIMATION_CONFIG = AnimationConfig()
DEFAULT_POLL_CONFIG = PollConfig()
