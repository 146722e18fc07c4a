"""Mini README: Geometry primitives for the delivery planner.

Exports the planar ``Coordinate`` value type, the exclusive
``OperatingArea`` rectangle, and the ``NoFlyZoneIndex`` used for
containment and line-of-sight queries. Everything here is pure and free
of search state, so it can be shared by reference by every later stage.
"""

from .coordinates import (
    APPLETON_TOWER,
    CLOSE_DISTANCE,
    DEFAULT_OPERATING_AREA,
    HEADING_MULTIPLE,
    HOVER,
    STEP_DISTANCE,
    Coordinate,
    OperatingArea,
    is_valid_heading,
)
from .no_fly_zones import NoFlyZone, NoFlyZoneIndex

__all__ = [
    "APPLETON_TOWER",
    "CLOSE_DISTANCE",
    "DEFAULT_OPERATING_AREA",
    "HEADING_MULTIPLE",
    "HOVER",
    "STEP_DISTANCE",
    "Coordinate",
    "NoFlyZone",
    "NoFlyZoneIndex",
    "OperatingArea",
    "is_valid_heading",
]
