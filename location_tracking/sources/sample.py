from typing import Sequence

from location_tracking.models import ApiResponse, Incident, Location, Officer, Snapshot
from location_tracking.sources.base import register_data_source

SAMPLE_INCIDENTS: Sequence[Incident] = (
    Incident(id=1, code_name="IC1", loc=Location(5, 10), officer_id=1),
    Incident(id=2, code_name="IC2", loc=Location(15, 20), officer_id=3),
    Incident(id=3, code_name="IC3", loc=Location(25, 20), officer_id=2),
)

SAMPLE_OFFICERS: Sequence[Officer] = (
    Officer(id=1, badge_name="OF1", loc=Location(8, 12)),
    Officer(id=2, badge_name="OF2", loc=Location(19, 20)),
    Officer(id=3, badge_name="OF3", loc=Location(10, 20)),
)


class SampleDataSource:
    """Fixed three-incident / three-officer snapshot. Never fails."""

    def __init__(
        self,
        incidents: Sequence[Incident] = SAMPLE_INCIDENTS,
        officers: Sequence[Officer] = SAMPLE_OFFICERS,
    ):
        self.snapshot = Snapshot.of(incidents, officers)

    async def load(self) -> ApiResponse:
        return ApiResponse.ok(self.snapshot)


register_data_source("Sample", SampleDataSource)
