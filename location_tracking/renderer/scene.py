from dataclasses import dataclass
import logging
import random
from typing import List, Optional, Sequence, Tuple

from location_tracking.config import DEFAULT_SCENE_CONFIG, SceneConfig
from location_tracking.errors import MissingOfficerError
from location_tracking.models import Incident, Officer, Snapshot
from location_tracking.stage import Graphics, Label, Stage
from location_tracking.types import AlphaDirection, GraphicsKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Assignment:
    incident: Incident
    officer: Optional[Officer]


def resolve_assignments(snapshot: Snapshot) -> List[Assignment]:
    """Pair every incident with its assigned officer.

    Unassigned incidents (``officer_id is None``) pair with ``None``.

    Raises:
        MissingOfficerError: An incident names an officer missing from ``snapshot``.
    """
    assignments: List[Assignment] = []
    for incident in snapshot.incidents:
        if incident.officer_id is None:
            assignments.append(Assignment(incident=incident, officer=None))
            continue
        officer = snapshot.officer_by_id(incident.officer_id)
        if officer is None:
            raise MissingOfficerError(incident.id, incident.officer_id)
        assignments.append(Assignment(incident=incident, officer=officer))
    return assignments


class SceneRenderer:
    """Rebuilds the stage from a snapshot.

    Every call to :meth:`render` discards all nodes on the stage and draws,
    back to front: the grid, the assignment lines, the officers and the
    incidents. Incident markers start at a random opacity, rising.
    """

    stage: Stage
    config: SceneConfig

    def __init__(
        self,
        stage: Stage,
        config: SceneConfig = DEFAULT_SCENE_CONFIG,
        rng: Optional[random.Random] = None,
    ):
        self.stage = stage
        self.config = config
        self.rng = rng or random.Random()

    def render(self, snapshot: Snapshot) -> List[Graphics]:
        """Redraw the stage and return the incident marker nodes."""
        # Resolve first so a bad snapshot leaves the current scene in place.
        assignments = resolve_assignments(snapshot)

        self.stage.remove_children()
        self.draw_map()
        self.draw_assign_lines(assignments)
        self.draw_officers(snapshot.officers)
        incident_graphics = self.draw_incidents(snapshot.incidents)
        logger.debug(
            "Rendered %d incidents and %d officers",
            len(snapshot.incidents),
            len(snapshot.officers),
        )
        return incident_graphics

    def draw_map(self) -> Graphics:
        grid = self.config.grid
        graphics = Graphics(kind=GraphicsKind.GRID).set_line_style(
            self.config.grid_line
        )

        for i in range(grid.lines_x):
            x = (i + 1) * grid.cell_width
            graphics.move_to(x, 0).line_to(x, grid.height)

        for i in range(grid.lines_y):
            y = (i + 1) * grid.cell_height
            graphics.move_to(0, y).line_to(grid.width, y)

        self.stage.add_child(graphics)
        return graphics

    def draw_tooltip(self, text: str, x: int, y: int) -> Label:
        px, py = self.config.grid.to_pixels(x, y)
        label = Label(text=text, style=self.config.tooltip, x=px, y=py)
        self.stage.add_child(label)
        return label

    def officer_endpoint(self, officer: Officer) -> Tuple[float, float]:
        if self.config.scale_officer_endpoint:
            return self.config.grid.to_pixels(officer.loc.x, officer.loc.y)
        return float(officer.loc.x), float(officer.loc.y)

    def draw_assign_lines(self, assignments: Sequence[Assignment]) -> Graphics:
        graphics = Graphics(kind=GraphicsKind.ASSIGN_LINES).set_line_style(
            self.config.assign_line
        )
        for assignment in assignments:
            if assignment.officer is None:
                continue
            incident = assignment.incident
            graphics.move_to(
                *self.config.grid.to_pixels(incident.loc.x, incident.loc.y)
            )
            graphics.line_to(*self.officer_endpoint(assignment.officer))

        self.stage.add_child(graphics)
        return graphics

    def draw_officers(self, officers: Sequence[Officer]) -> List[Graphics]:
        style = self.config.officer_marker
        radius = style.radius_cells * self.config.grid.cell_width
        drawn: List[Graphics] = []
        for officer in officers:
            graphics = Graphics(kind=GraphicsKind.OFFICER).begin_fill(
                style.color, style.alpha
            )
            graphics.draw_circle(
                *self.config.grid.to_pixels(officer.loc.x, officer.loc.y), radius
            )
            self.stage.add_child(graphics)
            self.draw_tooltip(officer.badge_name, officer.loc.x, officer.loc.y)
            drawn.append(graphics)
        return drawn

    def draw_incidents(self, incidents: Sequence[Incident]) -> List[Graphics]:
        style = self.config.incident_marker
        radius = style.radius_cells * self.config.grid.cell_width
        drawn: List[Graphics] = []
        for incident in incidents:
            graphics = Graphics(kind=GraphicsKind.INCIDENT).begin_fill(
                style.color, style.alpha
            )
            graphics.draw_circle(
                *self.config.grid.to_pixels(incident.loc.x, incident.loc.y), radius
            )
            graphics.alpha = self.rng.random()
            graphics.alpha_direction = AlphaDirection.RISING
            self.stage.add_child(graphics)
            self.draw_tooltip(incident.code_name, incident.loc.x, incident.loc.y)
            drawn.append(graphics)
        return drawn
