import pytest

from location_tracking.dispatch.events import OfficerGoesOnline
from location_tracking.dispatch.simulator import EventSimulator
from location_tracking.models import Location
from location_tracking.sources import (
    DispatchDataSource,
    SampleDataSource,
    data_source_names,
    make_data_source,
)
from location_tracking.types import GraphicsKind
from tests.test_utils import make_viewer, run


def test_published_events_apply_on_load() -> None:
    source = DispatchDataSource()
    assert source.publish({"type": "OfficerGoesOnline", "officerId": 1, "badgeName": "OF1"})
    assert source.publish(
        {"type": "OfficerLocationUpdated", "officerId": 1, "loc": {"x": 4, "y": 4}}
    )
    assert source.publish(
        {"type": "IncidentOccurred", "incidentId": 1, "codeName": "IC1", "loc": {"x": 6, "y": 4}}
    )
    assert source.pending() == 3

    response = run(source.load())
    assert source.pending() == 0
    assert response.error is None and response.data is not None
    (incident,) = response.data.incidents
    (officer,) = response.data.officers
    assert incident.officer_id == 1
    assert officer.loc == Location(4, 4)


def test_bad_events_are_dropped() -> None:
    source = DispatchDataSource()
    assert source.publish({"type": "IncidentOccurred", "incidentId": 1}) is False
    assert source.publish({"type": "SomethingElse"}) is False
    assert source.publish(OfficerGoesOnline(officer_id=1, badge_name="OF1")) is True
    assert source.pending() == 1


def test_viewer_over_dispatch_source() -> None:
    source = DispatchDataSource()
    source.publish({"type": "IncidentOccurred", "incidentId": 1, "codeName": "IC1", "loc": {"x": 2, "y": 2}})
    viewer = make_viewer(source)
    assert run(viewer.poll()) is True
    (lines,) = viewer.stage.find(GraphicsKind.ASSIGN_LINES)
    assert lines.segments == []
    assert len(viewer.markers) == 1

    source.publish({"type": "OfficerGoesOnline", "officerId": 7, "badgeName": "OF7"})
    assert run(viewer.poll()) is True
    (lines,) = viewer.stage.find(GraphicsKind.ASSIGN_LINES)
    assert len(lines.segments) == 1
    assert len(viewer.stage.find(GraphicsKind.OFFICER)) == 1


def test_simulated_source_keeps_rendering() -> None:
    viewer = make_viewer(DispatchDataSource(simulator=EventSimulator(seed=11)))
    for _ in range(25):
        assert run(viewer.poll()) is True
        viewer.tick()
    assert len(viewer.stage.find(GraphicsKind.OFFICER)) == 3


def test_registry() -> None:
    assert {"Sample", "Dispatch simulation"} <= set(data_source_names())
    assert isinstance(make_data_source("Sample"), SampleDataSource)
    assert isinstance(make_data_source("Dispatch simulation"), DispatchDataSource)
    with pytest.raises(ValueError):
        make_data_source("Carrier pigeon")


def test_source_choices_are_sorted_and_constructible() -> None:
    names = data_source_names()
    assert names == sorted(names, key=str.lower)
    assert "Sample" in names
    for name in names:
        assert hasattr(make_data_source(name), "load")
