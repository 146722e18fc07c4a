"""Mini README: Drone control subsystem package initialiser.

Re-exports the flight executor, which turns planned waypoints into
quantised moves, and the mission controller, which sequences the stops of
one order under the move budget and rolls back infeasible attempts.
"""

from .executor import FlightExecutor, Move
from .mission import (
    MissionCheckpoint,
    MissionController,
    MissionOutcome,
    MissionPhase,
    MissionState,
    Stop,
    StopAction,
    plan_stops,
)

__all__ = [
    "FlightExecutor",
    "MissionCheckpoint",
    "MissionController",
    "MissionOutcome",
    "MissionPhase",
    "MissionState",
    "Move",
    "Stop",
    "StopAction",
    "plan_stops",
]
