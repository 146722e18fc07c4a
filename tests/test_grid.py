"""Mini README: Tests for the walkability grid.

Structure:
    * Dimension and cell lookup checks.
    * Walkability against a per-cell recomputation.
    * Neighbour enumeration and scratch reset.
"""

from __future__ import annotations

import numpy as np
import pytest

from droneroute.errors import ConfigurationError
from droneroute.geometry import Coordinate, NoFlyZoneIndex, OperatingArea
from droneroute.route_planning import DEFAULT_RESOLUTION, NO_PARENT, Grid

from helpers import square_zone


def test_dimensions_follow_resolution(small_area: OperatingArea) -> None:
    grid = Grid(small_area, NoFlyZoneIndex([]))
    assert (grid.rows, grid.cols) == (80, 80)
    assert grid.size == 6400
    assert grid.walkable_count == 6400


def test_cell_lookup_inverts_centre(small_area: OperatingArea) -> None:
    grid = Grid(small_area, NoFlyZoneIndex([]))
    for row, col in [(0, 0), (12, 57), (79, 79)]:
        assert grid.cell_at(grid.center_of(row, col)) == (row, col)
    assert not grid.in_bounds(*grid.cell_at(Coordinate(-0.001, 0.0015)))


def test_area_smaller_than_a_cell_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        Grid(OperatingArea(0.0, DEFAULT_RESOLUTION / 4, 0.0, 1.0), NoFlyZoneIndex([]))
    with pytest.raises(ConfigurationError):
        Grid(OperatingArea(0.0, 0.0, 0.0, 1.0), NoFlyZoneIndex([]))


def test_walkability_matches_corner_rule(small_area: OperatingArea) -> None:
    zone = square_zone(0.001, 0.001, 0.0017, 0.0021)
    index = NoFlyZoneIndex([zone])
    grid = Grid(small_area, index)
    half = grid.resolution / 2

    rng = np.random.default_rng(7)
    samples = rng.integers(0, 80, size=(300, 2))
    for row, col in samples:
        centre = grid.center_of(int(row), int(col))
        corners = [
            Coordinate(centre.longitude + dx, centre.latitude + dy)
            for dx in (-half, half)
            for dy in (-half, half)
        ]
        expected = small_area.contains(centre) and not any(index.contains(c) for c in corners)
        assert grid.is_walkable(int(row), int(col)) == expected

    assert not grid.is_walkable_at(Coordinate(0.0013, 0.0015))
    assert grid.is_walkable_at(Coordinate(0.0005, 0.0005))
    # Cells straddling the zone boundary are blocked by their corners.
    assert not grid.is_walkable(*grid.cell_at(Coordinate(0.00099, 0.0015)))


def test_neighbours_skip_edges_and_blocked_cells(small_area: OperatingArea) -> None:
    grid = Grid(small_area, NoFlyZoneIndex([]))
    assert sorted(grid.neighbours(0, 0)) == [(0, 1), (1, 0), (1, 1)]
    assert len(grid.neighbours(40, 40)) == 8
    assert grid.neighbours(40, 40)[:4] == [(39, 40), (40, 39), (41, 40), (40, 41)]

    blocked = Grid(small_area, NoFlyZoneIndex([square_zone(0.0015, 0.0, 0.0016, 0.003)]))
    west_of_wall = blocked.cell_at(Coordinate(0.00148, 0.0015))
    for neighbour in blocked.neighbours(*west_of_wall):
        assert blocked.is_walkable(*neighbour)
        assert blocked.center_of(*neighbour).longitude < 0.0015


def test_cell_view_and_reset(small_area: OperatingArea) -> None:
    grid = Grid(small_area, NoFlyZoneIndex([]))
    cell = grid.cell(3, 4)
    assert cell.index == (3, 4) and cell.walkable
    with pytest.raises(IndexError):
        grid.cell(80, 0)

    grid.parent[grid.cell_id(3, 4)] = grid.cell_id(3, 3)
    grid.g_score[grid.cell_id(3, 4)] = 1.0
    assert grid.parent_of(3, 4) == (3, 3)
    grid.reset_search_state()
    assert grid.parent_of(3, 4) is None
    assert np.all(grid.parent == NO_PARENT)
    assert np.all(np.isinf(grid.g_score))
