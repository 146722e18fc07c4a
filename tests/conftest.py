"""Mini README: Shared fixtures for the droneroute test-suite.

Structure:
    * obstacle - square zone between ``WEST_POINT`` and ``EAST_POINT``.
    * open_session - default operating area without obstacles.
    * blocked_session - default area with the obstacle.
    * small_area - an 80x80 cell area anchored at the origin, convenient
      when a test needs cell-aligned positions.

Plain constants and ``square_zone`` live in ``helpers.py``.
"""

from __future__ import annotations

import pytest

from droneroute.geometry import NoFlyZone, OperatingArea
from droneroute.session import create_session

from helpers import OBSTACLE_CENTRE, OBSTACLE_HALF_SIZE, square_zone


@pytest.fixture()
def obstacle() -> NoFlyZone:
    return square_zone(
        OBSTACLE_CENTRE.longitude - OBSTACLE_HALF_SIZE,
        OBSTACLE_CENTRE.latitude - OBSTACLE_HALF_SIZE,
        OBSTACLE_CENTRE.longitude + OBSTACLE_HALF_SIZE,
        OBSTACLE_CENTRE.latitude + OBSTACLE_HALF_SIZE,
    )


@pytest.fixture()
def open_session():
    return create_session([])


@pytest.fixture()
def blocked_session(obstacle):
    return create_session([obstacle])


@pytest.fixture()
def small_area() -> OperatingArea:
    return OperatingArea(0.0, 0.003, 0.0, 0.003)
