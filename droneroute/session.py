"""Mini README: Wires the planning pipeline for one session.

``create_session`` builds the chain no-fly-zone index -> grid -> planner ->
executor once, so every consumer (CLI, API, tests) shares the same
precomputed walkability. A session owns one grid and is meant for a single
thread at a time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .drone_control import FlightExecutor, MissionController
from .geometry import DEFAULT_OPERATING_AREA, Coordinate, NoFlyZone, NoFlyZoneIndex, OperatingArea
from .route_planning import DEFAULT_RESOLUTION, Grid, ThetaStarPlanner


@dataclass(slots=True)
class NavigationSession:
    area: OperatingArea
    zones: NoFlyZoneIndex
    grid: Grid
    planner: ThetaStarPlanner
    executor: FlightExecutor

    def mission_controller(
        self, *, base: Coordinate, moves_remaining: int
    ) -> MissionController:
        return MissionController(
            self.planner, self.executor, base=base, moves_remaining=moves_remaining
        )


def create_session(
    zones: Iterable[NoFlyZone],
    *,
    area: Optional[OperatingArea] = None,
    resolution: Optional[float] = None,
) -> NavigationSession:
    area = area or DEFAULT_OPERATING_AREA
    index = NoFlyZoneIndex(zones)
    grid = Grid(area, index, resolution=resolution or DEFAULT_RESOLUTION)
    return NavigationSession(
        area=area,
        zones=index,
        grid=grid,
        planner=ThetaStarPlanner(grid, index),
        executor=FlightExecutor(grid, index),
    )
