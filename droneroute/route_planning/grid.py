"""Mini README: Fixed-resolution lattice over the operating area.

Structure:
    * GridCell - immutable view of one cell (index, centre, walkability).
    * Grid - walkability precomputed once, plus per-search scratch buffers.

A cell is walkable when its centre lies strictly inside the operating area
and none of its four corners lies inside a no-fly zone. The scratch buffers
(``parent``, ``g_score``, ``f_score``) are shared mutable storage reused by
every planner invocation; callers must run ``reset_search_state`` before a
new search. The grid is therefore not safe to share between concurrent
searches.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..errors import ConfigurationError
from ..geometry.coordinates import CLOSE_DISTANCE, Coordinate, OperatingArea
from ..geometry.no_fly_zones import NoFlyZoneIndex
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

DEFAULT_RESOLUTION = CLOSE_DISTANCE / 4
NO_PARENT = -1

CellIndex = Tuple[int, int]

# 8-connected neighbourhood, orthogonal moves first.
_DISPLACEMENTS: Tuple[CellIndex, ...] = (
    (-1, 0),
    (0, -1),
    (1, 0),
    (0, 1),
    (1, -1),
    (-1, 1),
    (1, 1),
    (-1, -1),
)


@dataclass(frozen=True, slots=True)
class GridCell:
    """A single lattice cell."""

    row: int
    col: int
    center: Coordinate
    walkable: bool

    @property
    def index(self) -> CellIndex:
        return (self.row, self.col)


class Grid:
    """Discretised operating area with precomputed walkability."""

    def __init__(
        self,
        area: OperatingArea,
        zones: NoFlyZoneIndex,
        *,
        resolution: float = DEFAULT_RESOLUTION,
    ) -> None:
        area.validate()
        if not resolution > 0:
            raise ConfigurationError(f"Grid resolution must be positive, got {resolution}")
        self.area = area
        self.zones = zones
        self.resolution = resolution
        self.rows = int(round(area.height / resolution))
        self.cols = int(round(area.width / resolution))
        if self.rows <= 0 or self.cols <= 0:
            raise ConfigurationError(
                f"Operating area {area} is smaller than one grid cell of size {resolution}"
            )

        self._walkable = self._compute_walkability()
        self._walkable.setflags(write=False)
        self.parent = np.full(self.rows * self.cols, NO_PARENT, dtype=np.int64)
        self.g_score = np.full(self.rows * self.cols, np.inf)
        self.f_score = np.full(self.rows * self.cols, np.inf)
        LOGGER.info(
            "Built %sx%s grid (resolution=%s) with %s walkable cells",
            self.rows,
            self.cols,
            resolution,
            self.walkable_count,
        )

    def _compute_walkability(self) -> np.ndarray:
        half = self.resolution / 2
        cols = np.arange(self.cols)
        rows = np.arange(self.rows)
        centre_x = self.area.min_longitude + cols * self.resolution + half
        centre_y = self.area.min_latitude + rows * self.resolution + half
        xs, ys = np.meshgrid(centre_x, centre_y)

        inside_area = (
            (xs > self.area.min_longitude)
            & (xs < self.area.max_longitude)
            & (ys > self.area.min_latitude)
            & (ys < self.area.max_latitude)
        )
        blocked = np.zeros_like(inside_area)
        if len(self.zones):
            for dx, dy in ((half, half), (half, -half), (-half, half), (-half, -half)):
                blocked |= self.zones.contains_points(xs + dx, ys + dy)
        return inside_area & ~blocked

    @property
    def walkable_count(self) -> int:
        return int(self._walkable.sum())

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def center_of(self, row: int, col: int) -> Coordinate:
        half = self.resolution / 2
        return Coordinate(
            self.area.min_longitude + col * self.resolution + half,
            self.area.min_latitude + row * self.resolution + half,
        )

    def cell_at(self, coordinate: Coordinate) -> CellIndex:
        """Index of the cell whose centre is nearest ``coordinate``.

        The result may lie outside the grid; check with ``in_bounds``.
        """

        half = self.resolution / 2
        row = math.floor((coordinate.latitude - self.area.min_latitude - half) / self.resolution + 0.5)
        col = math.floor((coordinate.longitude - self.area.min_longitude - half) / self.resolution + 0.5)
        return (int(row), int(col))

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_walkable(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and bool(self._walkable[row, col])

    def is_walkable_at(self, coordinate: Coordinate) -> bool:
        return self.is_walkable(*self.cell_at(coordinate))

    def cell(self, row: int, col: int) -> GridCell:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) outside {self.rows}x{self.cols} grid")
        return GridCell(
            row=row,
            col=col,
            center=self.center_of(row, col),
            walkable=bool(self._walkable[row, col]),
        )

    def neighbours(self, row: int, col: int) -> List[CellIndex]:
        """Walkable in-range cells adjacent to ``(row, col)``."""

        result: List[CellIndex] = []
        for d_row, d_col in _DISPLACEMENTS:
            candidate_row, candidate_col = row + d_row, col + d_col
            if self.is_walkable(candidate_row, candidate_col):
                result.append((candidate_row, candidate_col))
        return result

    # Search scratch, addressed by flat cell id.

    def cell_id(self, row: int, col: int) -> int:
        return row * self.cols + col

    def index_of(self, cell_id: int) -> CellIndex:
        return divmod(cell_id, self.cols)

    def parent_of(self, row: int, col: int) -> Optional[CellIndex]:
        parent_id = int(self.parent[self.cell_id(row, col)])
        if parent_id == NO_PARENT:
            return None
        return self.index_of(parent_id)

    def reset_search_state(self) -> None:
        """Clear parent links and scores left by a previous search."""

        self.parent.fill(NO_PARENT)
        self.g_score.fill(np.inf)
        self.f_score.fill(np.inf)
