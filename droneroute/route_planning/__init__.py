"""Mini README: Route planning subsystem for delivery legs.

Exports the walkability ``Grid`` and the Theta* ``ThetaStarPlanner``
that turns a start/goal pair into an any-angle ``FlightPath``. Both share
one grid instance per session; see ``droneroute.session`` for wiring.
"""

from .grid import DEFAULT_RESOLUTION, NO_PARENT, Grid, GridCell
from .planner import FlightPath, ThetaStarPlanner

__all__ = ["DEFAULT_RESOLUTION", "NO_PARENT", "FlightPath", "Grid", "GridCell", "ThetaStarPlanner"]
