"""Mini README: No-fly-zone storage and geometric queries.

Structure:
    * NoFlyZone - closed polygon ring of at least three vertices.
    * NoFlyZoneIndex - answers point containment and segment intersection.

The index keeps every ring edge in a single numpy array so segment tests
run over all obstacles at once. It is built once per planning session and
never mutated, so the grid, planner and executor share one instance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from ..errors import ConfigurationError
from ..logging_utils import get_logger
from .coordinates import Coordinate

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class NoFlyZone:
    """Closed ring; the last vertex implicitly connects to the first."""

    vertices: Tuple[Coordinate, ...]
    name: str = ""

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]], name: str = "") -> "NoFlyZone":
        """Build a zone from ``(longitude, latitude)`` pairs.

        A repeated closing vertex, as used by GeoJSON rings, is dropped.
        """

        vertices = [Coordinate(float(point[0]), float(point[1])) for point in points]
        if len(vertices) > 1 and vertices[0] == vertices[-1]:
            vertices.pop()
        if len(set(vertices)) < 3:
            raise ConfigurationError(
                f"No-fly zone '{name}' needs at least three distinct vertices, got {len(vertices)}"
            )
        return cls(vertices=tuple(vertices), name=name)

    def edges(self) -> List[Tuple[Coordinate, Coordinate]]:
        count = len(self.vertices)
        return [(self.vertices[i], self.vertices[(i + 1) % count]) for i in range(count)]


def _orientation(ax, ay, bx, by, cx, cy):
    """Sign of the cross product (b - a) x (c - a)."""

    return np.sign((bx - ax) * (cy - ay) - (by - ay) * (cx - ax))


def _within_box(ax, ay, bx, by, px, py):
    """True where p lies in the bounding box of segment a-b."""

    return (
        (np.minimum(ax, bx) <= px)
        & (px <= np.maximum(ax, bx))
        & (np.minimum(ay, by) <= py)
        & (py <= np.maximum(ay, by))
    )


class NoFlyZoneIndex:
    """Containment and line-of-sight queries against a fixed obstacle set."""

    def __init__(self, zones: Iterable[NoFlyZone]) -> None:
        self._zones: Tuple[NoFlyZone, ...] = tuple(zones)
        self._rings: List[np.ndarray] = [
            np.array([vertex.as_tuple() for vertex in zone.vertices], dtype=float)
            for zone in self._zones
        ]
        edge_rows = [
            (start.longitude, start.latitude, end.longitude, end.latitude)
            for zone in self._zones
            for start, end in zone.edges()
        ]
        self._edges = np.array(edge_rows, dtype=float).reshape(-1, 4)
        self._edges.setflags(write=False)
        LOGGER.debug(
            "Indexed %s no-fly zones with %s edges", len(self._zones), self._edges.shape[0]
        )

    @property
    def zones(self) -> Tuple[NoFlyZone, ...]:
        return self._zones

    @property
    def edges(self) -> np.ndarray:
        """Read-only ``(N, 4)`` array of ``x1, y1, x2, y2`` edge rows."""

        return self._edges

    def __len__(self) -> int:
        return len(self._zones)

    def contains_points(self, longitudes: np.ndarray, latitudes: np.ndarray) -> np.ndarray:
        """Vectorised crossing test; True where a point lies inside any ring."""

        xs = np.asarray(longitudes, dtype=float)
        ys = np.asarray(latitudes, dtype=float)
        blocked = np.zeros(np.broadcast(xs, ys).shape, dtype=bool)
        with np.errstate(divide="ignore", invalid="ignore"):
            for ring in self._rings:
                inside = np.zeros_like(blocked)
                previous = ring[-1]
                for current in ring:
                    xi, yi = current
                    xj, yj = previous
                    straddles = (yi > ys) != (yj > ys)
                    crossing_x = (xj - xi) * (ys - yi) / (yj - yi) + xi
                    inside ^= straddles & (xs < crossing_x)
                    previous = current
                blocked |= inside
        return blocked

    def contains(self, point: Coordinate) -> bool:
        """True when ``point`` lies inside any no-fly zone."""

        if not self._rings:
            return False
        return bool(self.contains_points(np.array([point.longitude]), np.array([point.latitude]))[0])

    def blocks_segment(self, start: Coordinate, end: Coordinate) -> bool:
        """True if the closed segment ``start-end`` touches any zone edge."""

        if self._edges.shape[0] == 0:
            return False
        cx, cy, dx, dy = self._edges.T
        ax, ay = start.longitude, start.latitude
        bx, by = end.longitude, end.latitude

        o1 = _orientation(ax, ay, bx, by, cx, cy)
        o2 = _orientation(ax, ay, bx, by, dx, dy)
        o3 = _orientation(cx, cy, dx, dy, ax, ay)
        o4 = _orientation(cx, cy, dx, dy, bx, by)

        crossing = (o1 * o2 < 0) & (o3 * o4 < 0)
        touching = (
            ((o1 == 0) & _within_box(ax, ay, bx, by, cx, cy))
            | ((o2 == 0) & _within_box(ax, ay, bx, by, dx, dy))
            | ((o3 == 0) & _within_box(cx, cy, dx, dy, ax, ay))
            | ((o4 == 0) & _within_box(cx, cy, dx, dy, bx, by))
        )
        return bool(np.any(crossing | touching))

    def line_of_sight(self, start: Coordinate, end: Coordinate) -> bool:
        """True when the straight segment between the points crosses no edge."""

        return not self.blocks_segment(start, end)
