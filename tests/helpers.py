"""Mini README: Shared geometry used across the droneroute test-suite.

Structure:
    * square_zone - build an axis-aligned rectangular no-fly zone.
    * WEST_POINT / EAST_POINT - two points in the default operating area
      separated by the square obstacle centred on ``OBSTACLE_CENTRE``.
"""

from __future__ import annotations

from droneroute.geometry import Coordinate, NoFlyZone

WEST_POINT = Coordinate(-3.1905, 55.9444)
EAST_POINT = Coordinate(-3.1863, 55.9444)
OBSTACLE_CENTRE = Coordinate(-3.1884, 55.9444)
OBSTACLE_HALF_SIZE = 0.0006


def square_zone(
    min_longitude: float,
    min_latitude: float,
    max_longitude: float,
    max_latitude: float,
    name: str = "block",
) -> NoFlyZone:
    return NoFlyZone.from_points(
        [
            (min_longitude, min_latitude),
            (max_longitude, min_latitude),
            (max_longitude, max_latitude),
            (min_longitude, max_latitude),
            (min_longitude, min_latitude),
        ],
        name=name,
    )
