"""Immutable dispatch state.

:class:`DispatchState` is the book of open incidents and on-duty officers
that a dispatch center maintains from its event stream. Like every value in
this package it is never mutated: reducers in
:mod:`location_tracking.dispatch.step` return a new state per event.

Assignment is stored on the incident (``Incident.officer_id``). An officer is
*available* when no incident names it. Both sequences keep arrival order,
which decides ties (first available incident, first nearest officer).
"""

from dataclasses import dataclass, field, replace
import math
from typing import Optional

from pyrsistent import pvector
from pyrsistent.typing import PVector

from location_tracking.models import Incident, Location, Officer, Snapshot
from location_tracking.types import EntityID


@dataclass(frozen=True)
class DispatchState:
    """Open incidents and on-duty officers.

    Attributes:
        incidents: Open incidents in arrival order.
        officers: Online officers in arrival order.
    """

    incidents: PVector[Incident] = field(default_factory=pvector)
    officers: PVector[Officer] = field(default_factory=pvector)

    def snapshot(self) -> Snapshot:
        return Snapshot(incidents=self.incidents, officers=self.officers)

    def find_incident(self, incident_id: EntityID) -> Optional[Incident]:
        return next((i for i in self.incidents if i.id == incident_id), None)

    def find_officer(self, officer_id: EntityID) -> Optional[Officer]:
        return next((o for o in self.officers if o.id == officer_id), None)

    def incident_of(self, officer_id: EntityID) -> Optional[Incident]:
        return next((i for i in self.incidents if i.officer_id == officer_id), None)

    def is_available(self, officer_id: EntityID) -> bool:
        return self.incident_of(officer_id) is None


def distance(a: Location, b: Location) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def nearest_available_officer(state: DispatchState, loc: Location) -> Optional[Officer]:
    """Closest officer without an incident; the earliest arrival wins ties."""
    best: Optional[Officer] = None
    for officer in state.officers:
        if not state.is_available(officer.id):
            continue
        if best is None or distance(loc, officer.loc) < distance(loc, best.loc):
            best = officer
    return best


def first_unassigned_incident(state: DispatchState) -> Optional[Incident]:
    return next((i for i in state.incidents if i.officer_id is None), None)


def replace_incident(state: DispatchState, incident: Incident) -> DispatchState:
    incidents = pvector(
        incident if i.id == incident.id else i for i in state.incidents
    )
    return replace(state, incidents=incidents)


def replace_officer(state: DispatchState, officer: Officer) -> DispatchState:
    officers = pvector(officer if o.id == officer.id else o for o in state.officers)
    return replace(state, officers=officers)
