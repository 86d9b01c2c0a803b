"""Seeded random dispatch event stream.

Produces a plausible sequence of events for demos: officers come online at
random spots, incidents appear at random cells, assigned officers walk one
cell per cycle toward their incident and resolve it on arrival, free officers
wander.
"""

import random
from typing import List, Optional

from location_tracking.dispatch.events import (
    Event,
    IncidentOccurred,
    IncidentResolved,
    OfficerGoesOnline,
    OfficerLocationUpdated,
)
from location_tracking.dispatch.state import DispatchState
from location_tracking.models import Location, Officer


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class EventSimulator:
    """Generates the events of one poll cycle from the current state.

    Arguments:
        seed: RNG seed; the same seed and the same states give the same events.
        width: Columns incidents and officers may occupy.
        height: Rows incidents and officers may occupy.
        num_officers: Officers brought online on the first cycle.
        max_incidents: Open incident cap.
        incident_probability: Chance per cycle of a new incident below the cap.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        width: int = 60,
        height: int = 40,
        num_officers: int = 3,
        max_incidents: int = 4,
        incident_probability: float = 0.5,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid simulation area {width}x{height}")
        self.rng = random.Random(seed)
        self.width = width
        self.height = height
        self.num_officers = num_officers
        self.max_incidents = max_incidents
        self.incident_probability = incident_probability
        self._next_officer_id = 1
        self._next_incident_id = 1

    def random_location(self) -> Location:
        return Location(self.rng.randrange(self.width), self.rng.randrange(self.height))

    def _clamp(self, loc: Location) -> Location:
        return Location(
            min(max(loc.x, 0), self.width - 1), min(max(loc.y, 0), self.height - 1)
        )

    def _move(self, state: DispatchState, officer: Officer) -> Optional[Event]:
        incident = state.incident_of(officer.id)
        if incident is None:
            dx, dy = self.rng.choice([(0, 1), (0, -1), (1, 0), (-1, 0), (0, 0)])
        else:
            dx = _sign(incident.loc.x - officer.loc.x)
            dy = _sign(incident.loc.y - officer.loc.y)
        if (dx, dy) == (0, 0):
            return None
        loc = self._clamp(Location(officer.loc.x + dx, officer.loc.y + dy))
        return OfficerLocationUpdated(officer_id=officer.id, loc=loc)

    def next_events(self, state: DispatchState) -> List[Event]:
        events: List[Event] = []

        for _ in range(self.num_officers - len(state.officers)):
            officer_id = self._next_officer_id
            self._next_officer_id += 1
            events.append(
                OfficerGoesOnline(officer_id=officer_id, badge_name=f"OF{officer_id}")
            )
            events.append(
                OfficerLocationUpdated(officer_id=officer_id, loc=self.random_location())
            )

        for incident in state.incidents:
            officer = (
                state.find_officer(incident.officer_id)
                if incident.officer_id is not None
                else None
            )
            if officer is not None and officer.loc == incident.loc:
                events.append(IncidentResolved(incident_id=incident.id))

        for officer in state.officers:
            event = self._move(state, officer)
            if event is not None:
                events.append(event)

        if (
            len(state.incidents) < self.max_incidents
            and self.rng.random() < self.incident_probability
        ):
            incident_id = self._next_incident_id
            self._next_incident_id += 1
            events.append(
                IncidentOccurred(
                    incident_id=incident_id,
                    code_name=f"IC{incident_id}",
                    loc=self.random_location(),
                )
            )
        return events
