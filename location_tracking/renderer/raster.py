from functools import lru_cache
from typing import Tuple

import numpy as np
import numpy.typing as npt
from PIL import Image, ImageDraw, ImageFont

from location_tracking.config import DEFAULT_SCENE_CONFIG, SceneConfig, to_rgb
from location_tracking.stage import Graphics, Label, Node, Stage
from location_tracking.types import Color

RGBA = Tuple[int, int, int, int]
UInt8Array = npt.NDArray[np.uint8]


def to_rgba(color: Color, alpha: float = 1.0) -> RGBA:
    r, g, b = to_rgb(color)
    return r, g, b, int(round(max(0.0, min(1.0, alpha)) * 255))


@lru_cache(maxsize=32)
def load_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    return ImageFont.load_default(size=size)


def apply_node_alpha(layer: Image.Image, alpha: float) -> Image.Image:
    """
    Multiply the layer's alpha channel by ``alpha`` (clamped to [0, 1]).
    """
    alpha = max(0.0, min(1.0, alpha))
    if alpha >= 1.0:
        return layer
    arr: UInt8Array = np.array(layer, dtype=np.uint8)
    arr[..., 3] = (arr[..., 3].astype(np.float32) * alpha).astype(np.uint8)
    return Image.fromarray(arr, mode="RGBA")


def draw_graphics(draw: ImageDraw.ImageDraw, graphics: Graphics) -> None:
    if graphics.line_style is not None:
        style = graphics.line_style
        stroke = to_rgba(style.color, style.alpha)
        for segment in graphics.segments:
            draw.line([segment.start, segment.end], fill=stroke, width=style.width)

    if graphics.fill is not None:
        color, fill_alpha = graphics.fill
        fill = to_rgba(color, fill_alpha)
        for circle in graphics.circles:
            cx, cy = circle.center
            r = circle.radius
            draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=fill)


def draw_label(draw: ImageDraw.ImageDraw, label: Label) -> None:
    style = label.style
    font = load_font(style.font_size)
    left, top, right, bottom = draw.textbbox((0, 0), label.text, font=font)
    width, height = right - left, bottom - top
    x = label.x - style.anchor_x * width - left
    y = label.y - style.anchor_y * height - top
    draw.text((x, y), label.text, font=font, fill=to_rgba(style.fill))


def render_node(node: Node, size: Tuple[int, int]) -> Image.Image:
    layer = Image.new("RGBA", size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    if isinstance(node, Graphics):
        draw_graphics(draw, node)
        return apply_node_alpha(layer, node.alpha)
    draw_label(draw, node)
    return layer


def render(stage: Stage, config: SceneConfig = DEFAULT_SCENE_CONFIG) -> Image.Image:
    """
    Rasterizes the stage into an RGBA image of the configured canvas size.
    Each node is drawn on its own layer so its opacity applies to the node as
    a whole, then composited in stage order.
    """
    size = (config.grid.width, config.grid.height)
    img = Image.new("RGBA", size, to_rgba(config.background))
    for node in stage.children:
        img.alpha_composite(render_node(node, size))
    return img


class RasterRenderer:
    config: SceneConfig

    def __init__(self, config: SceneConfig = DEFAULT_SCENE_CONFIG):
        self.config = config

    def render(self, stage: Stage) -> Image.Image:
        return render(stage, config=self.config)
