import pytest

from location_tracking.config import (
    AnimationConfig,
    GridConfig,
    LineStyle,
    MarkerStyle,
    PollConfig,
    SceneConfig,
    TextStyle,
    to_rgb,
)


def test_default_grid_cells_are_20_pixels() -> None:
    grid = GridConfig()
    assert (grid.width, grid.height, grid.lines_x, grid.lines_y) == (1200, 800, 60, 60)
    assert grid.cell_width == 20
    assert grid.cell_height == 20


def test_to_pixels_scales_both_axes_by_cell() -> None:
    assert GridConfig().to_pixels(5, 10) == (100, 200)


@pytest.mark.parametrize(
    "color, expected",
    [
        (0x000000, (0, 0, 0)),
        (0x37B218, (0x37, 0xB2, 0x18)),
        (0xBF360C, (0xBF, 0x36, 0x0C)),
        ("white", (255, 255, 255)),
        ("#424242", (0x42, 0x42, 0x42)),
    ],
)
def test_to_rgb(color: int | str, expected: tuple[int, int, int]) -> None:
    assert to_rgb(color) == expected


@pytest.mark.parametrize("color", [-1, 0x1000000, True, "not-a-color", 1.5])
def test_to_rgb_rejects_invalid(color: object) -> None:
    with pytest.raises(ValueError):
        to_rgb(color)  # type: ignore[arg-type]


def test_text_style_defaults_anchor_bottom_center() -> None:
    style = TextStyle()
    assert style.fill == "white"
    assert style.font_size == 16
    assert (style.anchor_x, style.anchor_y) == (0.5, 1.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"font_size": 0},
        {"anchor_x": -0.1},
        {"anchor_y": 1.5},
        {"fill": "nope"},
    ],
)
def test_text_style_validation(kwargs: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        TextStyle(**kwargs)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "factory",
    [
        lambda: GridConfig(width=0),
        lambda: GridConfig(lines_y=-3),
        lambda: LineStyle(width=0),
        lambda: LineStyle(alpha=1.2),
        lambda: MarkerStyle(color=0xFFFFFF, radius_cells=0),
        lambda: AnimationConfig(step=0),
        lambda: AnimationConfig(lower=1.0, upper=0.6),
        lambda: PollConfig(interval=0),
        lambda: PollConfig(fps=-1),
        lambda: SceneConfig(background="nope"),
    ],
)
def test_invalid_config_raises(factory) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(ValueError):
        factory()


def test_scene_config_defaults() -> None:
    config = SceneConfig()
    assert config.grid_line == LineStyle(width=1, color=0x424242, alpha=0.8)
    assert config.assign_line == LineStyle(width=2, color=0x37B218, alpha=1.0)
    assert config.officer_marker.radius_cells == 0.5
    assert config.incident_marker.radius_cells == 1.0
    assert config.scale_officer_endpoint is False
    assert PollConfig().interval == 5.0
