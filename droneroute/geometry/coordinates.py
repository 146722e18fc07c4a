"""Mini README: Planar coordinate primitives and heading arithmetic.

Structure:
    * Coordinate - immutable longitude/latitude pair with distance,
      proximity and heading helpers.
    * OperatingArea - exclusive axis-aligned rectangle the drone must stay in.
    * Module constants - step length, proximity threshold and the hover
      sentinel shared by the grid, executor and mission controller.

Coordinates are treated as a flat plane: distances are Euclidean in
degrees, which is accurate enough over the small operating area. Headings
are integer degrees measured counter-clockwise from east.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from ..errors import ConfigurationError, InvalidHeading

STEP_DISTANCE = 0.00015
CLOSE_DISTANCE = 0.00015
DISTANCE_TOLERANCE = 1e-12
HEADING_MULTIPLE = 10
HOVER = -999
CONE_HALF_WIDTH = 90


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def is_valid_heading(heading: int) -> bool:
    """Return True for the hover sentinel or a multiple of 10 in [0, 360)."""

    if heading == HOVER:
        return True
    return 0 <= heading < 360 and heading % HEADING_MULTIPLE == 0


def normalise_heading(heading: int) -> int:
    return heading % 360


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A point in the operating plane."""

    longitude: float
    latitude: float

    def distance_to(self, other: "Coordinate") -> float:
        """Euclidean distance between two coordinates."""

        return math.hypot(self.longitude - other.longitude, self.latitude - other.latitude)

    def close_to(self, other: "Coordinate") -> bool:
        """True when the two points are within ``CLOSE_DISTANCE`` of each other."""

        return self.distance_to(other) - DISTANCE_TOLERANCE <= CLOSE_DISTANCE

    def next_position(self, heading: int) -> "Coordinate":
        """Position after one fixed-length step along ``heading``.

        The hover sentinel yields an equal coordinate. Any other heading must
        be a multiple of ``HEADING_MULTIPLE``.
        """

        if heading == HOVER:
            return Coordinate(self.longitude, self.latitude)
        if heading % HEADING_MULTIPLE != 0:
            raise InvalidHeading(
                f"Heading must be a multiple of {HEADING_MULTIPLE}, got {heading}"
            )
        radians = math.radians(heading)
        return Coordinate(
            self.longitude + STEP_DISTANCE * math.cos(radians),
            self.latitude + STEP_DISTANCE * math.sin(radians),
        )

    def heading_to(self, other: "Coordinate") -> int:
        """Direction towards ``other`` rounded to the nearest allowed heading."""

        degrees = math.degrees(
            math.atan2(other.latitude - self.latitude, other.longitude - self.longitude)
        )
        rounded = _round_half_up(degrees / HEADING_MULTIPLE) * HEADING_MULTIPLE
        return normalise_heading(rounded)

    def candidate_headings(self, other: "Coordinate") -> List[int]:
        """Headings forming a 180 degree cone around the ideal heading.

        Ordered outwards from the ideal heading, positive offset first:
        ``ideal, ideal+10, ideal-10, ideal+20, ...`` up to +-90 degrees.
        """

        ideal = self.heading_to(other)
        headings = [ideal]
        for offset in range(HEADING_MULTIPLE, CONE_HALF_WIDTH + 1, HEADING_MULTIPLE):
            headings.append(normalise_heading(ideal + offset))
            headings.append(normalise_heading(ideal - offset))
        return headings

    def as_tuple(self) -> Tuple[float, float]:
        return (self.longitude, self.latitude)

    def __str__(self) -> str:
        return f"({self.longitude:.6f}, {self.latitude:.6f})"


@dataclass(frozen=True, slots=True)
class OperatingArea:
    """Axis-aligned rectangle with exclusive bounds."""

    min_longitude: float
    max_longitude: float
    min_latitude: float
    max_latitude: float

    @property
    def width(self) -> float:
        return self.max_longitude - self.min_longitude

    @property
    def height(self) -> float:
        return self.max_latitude - self.min_latitude

    def validate(self) -> "OperatingArea":
        """Raise ``ConfigurationError`` for an empty or degenerate rectangle."""

        values = (self.min_longitude, self.max_longitude, self.min_latitude, self.max_latitude)
        if not all(math.isfinite(value) for value in values):
            raise ConfigurationError(f"Operating area has non-finite bounds: {values}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"Operating area is degenerate: {values}")
        return self

    def contains(self, point: Coordinate) -> bool:
        """True when ``point`` lies strictly inside the rectangle."""

        return (
            self.min_longitude < point.longitude < self.max_longitude
            and self.min_latitude < point.latitude < self.max_latitude
        )


DEFAULT_OPERATING_AREA = OperatingArea(
    min_longitude=-3.192473,
    max_longitude=-3.184319,
    min_latitude=55.942617,
    max_latitude=55.946233,
)
APPLETON_TOWER = Coordinate(-3.186874, 55.944494)
