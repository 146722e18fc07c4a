"""Mini README: Any-angle route planning over the walkability grid.

Structure:
    * FlightPath - ordered waypoints returned by the planner.
    * ThetaStarPlanner - Theta* search producing taut, obstacle-free paths.

Theta* is A* with one change during relaxation: when the expanded cell's
parent can see the neighbour directly, the neighbour inherits that parent
instead of the expanded cell. Paths therefore cut across the lattice at
any angle instead of following it in a staircase.

The planner writes into the grid's shared scratch buffers and is not
reentrant. A failed search raises ``Unreachable``; it never returns a
partial or single-node path.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Dict, List

from ..errors import InvariantViolation, Unreachable
from ..geometry.coordinates import Coordinate
from ..geometry.no_fly_zones import NoFlyZoneIndex
from ..logging_utils import get_logger
from .grid import NO_PARENT, CellIndex, Grid

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class FlightPath:
    """Ordered collection of waypoints forming one leg."""

    waypoints: List[Coordinate] = field(default_factory=list)
    description: str = ""

    @property
    def length(self) -> float:
        """Total Euclidean length of the polyline."""

        return sum(
            first.distance_to(second) for first, second in zip(self.waypoints, self.waypoints[1:])
        )

    def as_commands(self) -> List[Dict[str, float]]:
        """Convert waypoints to command dictionaries for API responses."""

        commands: List[Dict[str, float]] = []
        for waypoint in self.waypoints:
            commands.append(
                {
                    "action": "navigate_to",
                    "longitude": waypoint.longitude,
                    "latitude": waypoint.latitude,
                }
            )
        return commands

    def __len__(self) -> int:
        return len(self.waypoints)


class ThetaStarPlanner:
    """Theta* search between two coordinates on a shared grid."""

    def __init__(self, grid: Grid, zones: NoFlyZoneIndex) -> None:
        self.grid = grid
        self.zones = zones
        LOGGER.debug("Initialised ThetaStarPlanner on %sx%s grid", grid.rows, grid.cols)

    def find_path(self, start: Coordinate, goal: Coordinate) -> FlightPath:
        """Plan an obstacle-free path from ``start`` to ``goal``.

        The first and last waypoints are the exact query coordinates; the
        intermediate ones are cell centres.
        """

        grid = self.grid
        start_cell = grid.cell_at(start)
        goal_cell = grid.cell_at(goal)
        if not grid.in_bounds(*start_cell):
            raise Unreachable(f"Start {start} lies outside the grid")
        if not grid.in_bounds(*goal_cell):
            raise Unreachable(f"Goal {goal} lies outside the grid")
        if not grid.is_walkable(*start_cell):
            raise Unreachable(f"Start {start} lies in a non-walkable cell {start_cell}")
        if not grid.is_walkable(*goal_cell):
            raise Unreachable(f"Goal {goal} lies in a non-walkable cell {goal_cell}")

        grid.reset_search_state()
        cells = self._search(start_cell, goal_cell)
        waypoints = self._attach_endpoints(start, goal, cells)
        LOGGER.debug("Planned path %s -> %s with %s waypoints", start, goal, len(waypoints))
        return FlightPath(waypoints=waypoints, description=f"Theta* path {start} -> {goal}")

    def _attach_endpoints(
        self, start: Coordinate, goal: Coordinate, cells: List[CellIndex]
    ) -> List[Coordinate]:
        """Swap the end cell centres for the exact query coordinates.

        The search only proves sight between cell centres. Where the exact
        start or goal cannot see its neighbouring waypoint, the end cell's
        centre is kept as an extra waypoint.
        """

        centres = [self.grid.center_of(*cell) for cell in cells]
        inner = centres[1:-1]
        waypoints = [start]

        if not self.zones.line_of_sight(start, inner[0] if inner else goal):
            if not self.zones.line_of_sight(start, centres[0]):
                raise Unreachable(f"Start {start} cannot see the centre of its own cell")
            waypoints.append(centres[0])
        waypoints.extend(inner)

        if not self.zones.line_of_sight(waypoints[-1], goal):
            if not self.zones.line_of_sight(centres[-1], goal):
                raise Unreachable(f"Goal {goal} cannot see the centre of its own cell")
            if centres[-1] != waypoints[-1]:
                waypoints.append(centres[-1])
        waypoints.append(goal)
        return waypoints

    def _heuristic(self, cell: CellIndex, goal_center: Coordinate) -> float:
        return self.grid.center_of(*cell).distance_to(goal_center)

    def _search(self, start: CellIndex, goal: CellIndex) -> List[CellIndex]:
        grid = self.grid
        goal_center = grid.center_of(*goal)
        counter = itertools.count()

        start_id = grid.cell_id(*start)
        grid.g_score[start_id] = 0.0
        grid.f_score[start_id] = self._heuristic(start, goal_center)
        open_heap = [(grid.f_score[start_id], next(counter), start)]
        closed = set()

        while open_heap:
            f_score, _, current = heapq.heappop(open_heap)
            current_id = grid.cell_id(*current)
            if current in closed or f_score > grid.f_score[current_id]:
                continue  # stale heap entry
            if current == goal:
                return self._reconstruct(goal)
            closed.add(current)

            parent = grid.parent_of(*current)
            for neighbour in grid.neighbours(*current):
                neighbour_center = grid.center_of(*neighbour)
                if parent is not None and self.zones.line_of_sight(
                    grid.center_of(*parent), neighbour_center
                ):
                    candidate_parent = parent
                elif self.zones.line_of_sight(grid.center_of(*current), neighbour_center):
                    candidate_parent = current
                else:
                    # A zone vertex pokes between two walkable cells.
                    continue
                parent_id = grid.cell_id(*candidate_parent)
                tentative = grid.g_score[parent_id] + grid.center_of(*candidate_parent).distance_to(
                    neighbour_center
                )

                neighbour_id = grid.cell_id(*neighbour)
                if tentative >= grid.g_score[neighbour_id]:
                    continue
                grid.parent[neighbour_id] = parent_id
                grid.g_score[neighbour_id] = tentative
                grid.f_score[neighbour_id] = tentative + neighbour_center.distance_to(goal_center)
                closed.discard(neighbour)
                heapq.heappush(open_heap, (grid.f_score[neighbour_id], next(counter), neighbour))

        raise Unreachable(f"No path from cell {start} to cell {goal}: search space exhausted")

    def _reconstruct(self, goal: CellIndex) -> List[CellIndex]:
        """Follow parent links back from ``goal`` and return start-first order."""

        grid = self.grid
        path: List[CellIndex] = []
        visited = set()
        current_id = grid.cell_id(*goal)
        while current_id != NO_PARENT:
            if current_id in visited or len(path) > grid.size:
                raise InvariantViolation(
                    f"Parent chain revisits cell {grid.index_of(current_id)} during reconstruction"
                )
            visited.add(current_id)
            path.append(grid.index_of(current_id))
            current_id = int(grid.parent[current_id])
        path.reverse()
        return path
