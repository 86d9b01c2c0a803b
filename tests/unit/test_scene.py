import random

import pytest

from location_tracking.config import SceneConfig
from location_tracking.errors import MissingOfficerError
from location_tracking.models import Snapshot
from location_tracking.renderer.scene import SceneRenderer, resolve_assignments
from location_tracking.sources.sample import SAMPLE_INCIDENTS, SAMPLE_OFFICERS
from location_tracking.stage import Circle, Graphics, Label, Segment, Stage
from location_tracking.types import AlphaDirection, GraphicsKind
from tests.test_utils import count_by_kind, make_incident, make_officer, make_snapshot


def sample_snapshot() -> Snapshot:
    return Snapshot.of(SAMPLE_INCIDENTS, SAMPLE_OFFICERS)


def make_renderer(config: SceneConfig | None = None) -> SceneRenderer:
    return SceneRenderer(Stage(), config=config or SceneConfig(), rng=random.Random(0))


def test_sample_scene_counts_by_category() -> None:
    renderer = make_renderer()
    incident_graphics = renderer.render(sample_snapshot())
    stage = renderer.stage

    (grid,) = stage.find(GraphicsKind.GRID)
    assert len(grid.segments) == 60 + 60

    (lines,) = stage.find(GraphicsKind.ASSIGN_LINES)
    assert len(lines.segments) == 3

    counts = count_by_kind(stage)
    assert counts[GraphicsKind.OFFICER] == 3
    assert counts[GraphicsKind.INCIDENT] == 3
    assert len(stage.labels()) == 6
    assert len(incident_graphics) == 3
    assert incident_graphics == stage.find(GraphicsKind.INCIDENT)


def test_grid_lines_at_every_cell_boundary() -> None:
    renderer = make_renderer()
    grid = renderer.draw_map()
    vertical = grid.segments[:60]
    horizontal = grid.segments[60:]
    assert vertical[0] == Segment((20, 0), (20, 800))
    assert vertical[-1] == Segment((1200, 0), (1200, 800))
    assert horizontal[0] == Segment((0, 20), (1200, 20))
    assert horizontal[-1] == Segment((0, 1200), (1200, 1200))
    assert grid.line_style == SceneConfig().grid_line


def test_incident_markers_scaled_radius_one_cell() -> None:
    renderer = make_renderer()
    markers = renderer.render(sample_snapshot())
    for incident, marker in zip(SAMPLE_INCIDENTS, markers):
        assert marker.circles == [
            Circle(center=(incident.loc.x * 20, incident.loc.y * 20), radius=20)
        ]
        assert 0.0 <= marker.alpha < 1.0
        assert marker.alpha_direction == AlphaDirection.RISING
        assert marker.fill == (0xBF360C, 1.0)


def test_officer_markers_scaled_radius_half_cell() -> None:
    renderer = make_renderer()
    renderer.render(sample_snapshot())
    markers = renderer.stage.find(GraphicsKind.OFFICER)
    for officer, marker in zip(SAMPLE_OFFICERS, markers):
        assert marker.circles == [
            Circle(center=(officer.loc.x * 20, officer.loc.y * 20), radius=10)
        ]
        assert marker.alpha == 1.0
        assert marker.fill == (0x37B218, 1.0)


def test_labels_anchor_at_marker_center() -> None:
    renderer = make_renderer()
    renderer.render(sample_snapshot())
    labels = {label.text: label for label in renderer.stage.labels()}
    assert set(labels) == {"IC1", "IC2", "IC3", "OF1", "OF2", "OF3"}
    assert (labels["IC1"].x, labels["IC1"].y) == (100, 200)
    assert (labels["OF2"].x, labels["OF2"].y) == (380, 400)
    assert labels["OF2"].style == SceneConfig().tooltip


def test_assign_line_officer_endpoint_unscaled_by_default() -> None:
    renderer = make_renderer()
    renderer.render(sample_snapshot())
    (lines,) = renderer.stage.find(GraphicsKind.ASSIGN_LINES)
    # IC1 (5, 10) -> OF1 (8, 12); IC2 (15, 20) -> OF3 (10, 20); IC3 (25, 20) -> OF2 (19, 20)
    assert lines.segments == [
        Segment((100, 200), (8, 12)),
        Segment((300, 400), (10, 20)),
        Segment((500, 400), (19, 20)),
    ]


def test_assign_line_officer_endpoint_scaled_when_enabled() -> None:
    renderer = make_renderer(SceneConfig(scale_officer_endpoint=True))
    renderer.render(sample_snapshot())
    (lines,) = renderer.stage.find(GraphicsKind.ASSIGN_LINES)
    assert lines.segments == [
        Segment((100, 200), (160, 240)),
        Segment((300, 400), (200, 400)),
        Segment((500, 400), (380, 400)),
    ]


def test_draw_order_back_to_front() -> None:
    renderer = make_renderer()
    renderer.render(sample_snapshot())
    children = renderer.stage.children
    assert isinstance(children[0], Graphics) and children[0].kind == GraphicsKind.GRID
    assert (
        isinstance(children[1], Graphics)
        and children[1].kind == GraphicsKind.ASSIGN_LINES
    )
    # Each marker is immediately followed by its label
    for idx in range(2, len(children), 2):
        assert isinstance(children[idx], Graphics)
        assert isinstance(children[idx + 1], Label)
    kinds = [c.kind for c in children[2::2] if isinstance(c, Graphics)]
    assert kinds == [GraphicsKind.OFFICER] * 3 + [GraphicsKind.INCIDENT] * 3


def test_render_replaces_previous_scene() -> None:
    renderer = make_renderer()
    first = renderer.render(sample_snapshot())
    second = renderer.render(sample_snapshot())
    stage = renderer.stage
    assert len(stage.find(GraphicsKind.GRID)) == 1
    assert len(stage.find(GraphicsKind.ASSIGN_LINES)) == 1
    assert len(stage.find(GraphicsKind.INCIDENT)) == 3
    assert len(stage.labels()) == 6
    assert all(not any(m is c for c in stage.children) for m in first)
    assert all(any(m is c for c in stage.children) for m in second)


def test_unassigned_incident_has_no_line() -> None:
    renderer = make_renderer()
    snapshot = make_snapshot(
        incidents=[make_incident(1, (1, 1), officer_id=1), make_incident(2, (3, 3))],
        officers=[make_officer(1, (2, 2))],
    )
    markers = renderer.render(snapshot)
    (lines,) = renderer.stage.find(GraphicsKind.ASSIGN_LINES)
    assert len(lines.segments) == 1
    assert len(markers) == 2


def test_missing_officer_leaves_stage_untouched() -> None:
    renderer = make_renderer()
    renderer.render(sample_snapshot())
    before = renderer.stage.children

    broken = make_snapshot(
        incidents=[make_incident(1, (1, 1), officer_id=42)],
        officers=[make_officer(1, (2, 2))],
    )
    with pytest.raises(MissingOfficerError) as excinfo:
        renderer.render(broken)
    assert excinfo.value.officer_id == 42
    assert renderer.stage.children == before
    assert all(a is b for a, b in zip(renderer.stage.children, before))


def test_resolve_assignments_pairs_by_id() -> None:
    assignments = resolve_assignments(make_snapshot(SAMPLE_INCIDENTS, SAMPLE_OFFICERS))
    assert [(a.incident.id, a.officer.id if a.officer else None) for a in assignments] == [
        (1, 1),
        (2, 3),
        (3, 2),
    ]


def test_resolve_assignments_uses_snapshot_officers() -> None:
    snapshot = make_snapshot(
        incidents=[make_incident(1, (1, 1)), make_incident(2, (2, 2), officer_id=7)],
        officers=[make_officer(7, (3, 3))],
    )
    unassigned, assigned = resolve_assignments(snapshot)
    assert unassigned.officer is None
    assert assigned.officer is snapshot.officer_by_id(7)
    with pytest.raises(MissingOfficerError):
        resolve_assignments(make_snapshot(incidents=[make_incident(3, (0, 0), officer_id=8)]))


def test_empty_snapshot_draws_grid_only() -> None:
    renderer = make_renderer()
    assert renderer.render(make_snapshot()) == []
    counts = count_by_kind(renderer.stage)
    assert counts[GraphicsKind.GRID] == 1
    assert counts[GraphicsKind.ASSIGN_LINES] == 1
    assert counts[GraphicsKind.OFFICER] == 0
    assert len(renderer.stage.labels()) == 0
