"""Mini README: Tests for coordinate arithmetic and the no-fly-zone index.

Structure:
    * Coordinate distance, proximity, stepping and heading rounding.
    * OperatingArea exclusivity and validation.
    * NoFlyZoneIndex containment and segment intersection.
"""

from __future__ import annotations

import numpy as np
import pytest

from droneroute.errors import ConfigurationError, InvalidHeading
from droneroute.geometry import (
    CLOSE_DISTANCE,
    DEFAULT_OPERATING_AREA,
    HOVER,
    STEP_DISTANCE,
    Coordinate,
    NoFlyZone,
    NoFlyZoneIndex,
    OperatingArea,
    is_valid_heading,
)

from helpers import square_zone

APPLETON = Coordinate(-3.186874, 55.944494)
BUSINESS_SCHOOL = Coordinate(-3.1873, 55.9430)


def test_distance_matches_reference_value() -> None:
    assert APPLETON.distance_to(BUSINESS_SCHOOL) == pytest.approx(0.0015535481968716011, abs=1e-12)


def test_close_to_is_symmetric_and_uses_threshold() -> None:
    first = Coordinate(-3.191078, 55.943982)
    second = Coordinate(-3.190959, 55.944001)
    assert first.close_to(second) and second.close_to(first)
    assert APPLETON.close_to(Coordinate(-3.186767933982822, 55.94460006601717))

    edge = APPLETON.next_position(0)
    assert APPLETON.close_to(edge) and edge.close_to(APPLETON)
    far = Coordinate(APPLETON.longitude + CLOSE_DISTANCE * 1.01, APPLETON.latitude)
    assert not APPLETON.close_to(far) and not far.close_to(APPLETON)


@pytest.mark.parametrize("heading", range(0, 360, 10))
def test_every_heading_moves_exactly_one_step(heading: int) -> None:
    moved = APPLETON.next_position(heading)
    assert APPLETON.distance_to(moved) == pytest.approx(STEP_DISTANCE, rel=1e-9)


def test_hover_keeps_position_and_bad_heading_is_rejected() -> None:
    assert APPLETON.next_position(HOVER) == APPLETON
    with pytest.raises(InvalidHeading):
        APPLETON.next_position(45)


def test_heading_rounds_to_nearest_ten_degrees() -> None:
    origin = Coordinate(0.0, 0.0)

    def towards(degrees: float) -> Coordinate:
        radians = np.radians(degrees)
        return Coordinate(float(np.cos(radians)), float(np.sin(radians)))

    assert origin.heading_to(towards(47)) == 50
    assert origin.heading_to(towards(183)) == 180
    assert origin.heading_to(towards(-97)) == 260
    assert origin.heading_to(towards(356)) == 0
    assert origin.heading_to(Coordinate(-1.0, 0.0)) == 180


def test_candidate_headings_form_ordered_cone() -> None:
    origin = Coordinate(0.0, 0.0)
    headings = origin.candidate_headings(Coordinate(-1.0, 0.0))
    assert headings[:5] == [180, 190, 170, 200, 160]
    assert len(headings) == len(set(headings)) == 19
    assert set(headings) == set(range(90, 271, 10))

    wrapped = origin.candidate_headings(Coordinate(1.0, 0.0))
    assert wrapped[:3] == [0, 10, 350]
    assert all(is_valid_heading(heading) for heading in wrapped)


def test_operating_area_bounds_are_exclusive() -> None:
    area = DEFAULT_OPERATING_AREA
    assert area.contains(APPLETON)
    assert not area.contains(Coordinate(area.min_longitude, APPLETON.latitude))
    assert not area.contains(Coordinate(-3.1928, 55.9469))


def test_degenerate_area_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        OperatingArea(0.0, 0.0, 0.0, 1.0).validate()
    with pytest.raises(ConfigurationError):
        OperatingArea(0.0, 1.0, 1.0, 0.5).validate()


def test_zone_requires_three_distinct_vertices() -> None:
    zone = NoFlyZone.from_points([(0, 0), (1, 0), (1, 1), (0, 0)])
    assert len(zone.vertices) == 3
    with pytest.raises(ConfigurationError):
        NoFlyZone.from_points([(0, 0), (1, 0), (0, 0)])


def test_index_containment_uses_every_ring() -> None:
    index = NoFlyZoneIndex([square_zone(0, 0, 1, 1), square_zone(2, 2, 3, 3)])
    assert index.contains(Coordinate(0.5, 0.5))
    assert index.contains(Coordinate(2.5, 2.9))
    assert not index.contains(Coordinate(1.5, 1.5))
    assert not index.contains(Coordinate(-0.1, 0.5))

    mask = index.contains_points(np.array([0.5, 1.5, 2.5]), np.array([0.5, 1.5, 2.5]))
    assert mask.tolist() == [True, False, True]


def test_concave_zone_containment() -> None:
    # U shape opening upwards.
    zone = NoFlyZone.from_points([(0, 0), (3, 0), (3, 3), (2, 3), (2, 1), (1, 1), (1, 3), (0, 3)])
    index = NoFlyZoneIndex([zone])
    assert index.contains(Coordinate(0.5, 2.0))
    assert not index.contains(Coordinate(1.5, 2.0))


def test_segment_blocking() -> None:
    index = NoFlyZoneIndex([square_zone(0, 0, 1, 1)])
    assert index.blocks_segment(Coordinate(-1, 0.5), Coordinate(2, 0.5))
    assert index.blocks_segment(Coordinate(-1, -1), Coordinate(2, 2))
    assert not index.blocks_segment(Coordinate(-1, 1.5), Coordinate(2, 1.5))
    assert not index.blocks_segment(Coordinate(-1, 0.5), Coordinate(-0.5, 0.5))
    # Touching a vertex counts as blocked.
    assert index.blocks_segment(Coordinate(1, 1), Coordinate(2, 2))
    assert index.line_of_sight(Coordinate(1.1, 1.1), Coordinate(2, 2))


def test_empty_index_never_blocks() -> None:
    index = NoFlyZoneIndex([])
    assert len(index) == 0
    assert not index.contains(APPLETON)
    assert index.line_of_sight(APPLETON, BUSINESS_SCHOOL)
