"""Mini README: Converts planned waypoints into quantised drone moves.

Structure:
    * Move - immutable log record of one executed step.
    * FlightExecutor - heading selection and waypoint following.

The drone can only travel ``STEP_DISTANCE`` along headings that are
multiples of 10 degrees. For each step the executor prefers the heading
that points straight at the target; when that move would leave walkable
space or clip an obstacle it searches a 180 degree cone around it and
takes the first heading whose landing cell is walkable, reachable in a
straight line, and still in sight of the target.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..errors import BudgetExhausted, InvariantViolation, NoValidHeading
from ..geometry.coordinates import HOVER, Coordinate, is_valid_heading
from ..geometry.no_fly_zones import NoFlyZoneIndex
from ..logging_utils import get_logger
from ..route_planning.grid import Grid

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Move:
    """One step of the flight log."""

    order_id: str
    origin: Coordinate
    destination: Coordinate
    heading: int

    def __post_init__(self) -> None:
        if not is_valid_heading(self.heading):
            raise InvariantViolation(f"Move recorded with invalid heading {self.heading}")

    @property
    def is_hover(self) -> bool:
        return self.heading == HOVER

    def as_record(self) -> Dict[str, object]:
        """Export the move with serialisable values."""

        return {
            "order_no": self.order_id,
            "from_longitude": self.origin.longitude,
            "from_latitude": self.origin.latitude,
            "angle": self.heading,
            "to_longitude": self.destination.longitude,
            "to_latitude": self.destination.latitude,
        }


class FlightExecutor:
    """Follow waypoint lists using fixed-length, quantised-heading moves."""

    def __init__(self, grid: Grid, zones: NoFlyZoneIndex) -> None:
        self.grid = grid
        self.zones = zones

    def can_move_towards(self, position: Coordinate, heading: int) -> bool:
        """True when one step along ``heading`` lands on walkable, visible ground."""

        landing = position.next_position(heading)
        return self.grid.is_walkable_at(landing) and self.zones.line_of_sight(position, landing)

    def choose_heading(self, position: Coordinate, target: Coordinate) -> int:
        """Pick the heading for the next step towards ``target``."""

        ideal = position.heading_to(target)
        if self.can_move_towards(position, ideal):
            return ideal

        for heading in position.candidate_headings(target)[1:]:
            if not self.can_move_towards(position, heading):
                continue
            if self.zones.line_of_sight(position.next_position(heading), target):
                LOGGER.debug(
                    "Heading %s blocked at %s; detouring along %s", ideal, position, heading
                )
                return heading

        raise NoValidHeading(
            f"No safe heading from {position} towards {target} (ideal heading {ideal})"
        )

    def step(self, order_id: str, position: Coordinate, target: Coordinate) -> Move:
        heading = self.choose_heading(position, target)
        return Move(order_id, position, position.next_position(heading), heading)

    def hover(self, order_id: str, position: Coordinate) -> Move:
        """Zero-displacement move used for pickups and drop-offs."""

        return Move(order_id, position, position.next_position(HOVER), HOVER)

    def fly_path(
        self,
        order_id: str,
        position: Coordinate,
        waypoints: Sequence[Coordinate],
        *,
        budget: Optional[int] = None,
    ) -> List[Move]:
        """Moves that carry the drone from ``position`` through every waypoint.

        Raises ``BudgetExhausted`` as soon as more than ``budget`` moves would
        be needed, which also bounds the loop when a detour stalls.
        """

        if not waypoints:
            return []
        if not position.close_to(waypoints[0]):
            raise InvariantViolation(
                f"Path starts at {waypoints[0]} but the drone is at {position}"
            )

        moves: List[Move] = []

        def advance(target: Coordinate) -> None:
            nonlocal position
            if budget is not None and len(moves) >= budget:
                raise BudgetExhausted(
                    f"Order {order_id}: more than {budget} moves needed to reach {target}"
                )
            move = self.step(order_id, position, target)
            moves.append(move)
            position = move.destination

        for waypoint in waypoints:
            while not position.close_to(waypoint):
                advance(waypoint)
        return moves

    def count_moves(
        self, position: Coordinate, waypoints: Sequence[Coordinate], *, budget: Optional[int] = None
    ) -> int:
        """Number of moves ``fly_path`` would need, without keeping the log."""

        return len(self.fly_path("simulation", position, waypoints, budget=budget))
