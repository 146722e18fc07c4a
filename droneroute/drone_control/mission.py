"""Mini README: Per-order mission sequencing with budget checks and rollback.

Structure:
    * StopAction / Stop - a coordinate to visit and what happens there.
    * plan_stops - orders up to two pickups ahead of the drop-off.
    * MissionState / MissionCheckpoint - drone position, remaining moves and
      committed log, restorable verbatim.
    * MissionPhase - lifecycle of one order attempt.
    * MissionOutcome - delivered/not-delivered result for the scheduler.
    * MissionController - plans and flies each leg, verifies the drone can
      still get home, then commits or rolls back.

Lifecycle of one order::

    IDLE -> PLANNING_LEG -> EXECUTING_LEG -> LEG_COMPLETE -> (next stop)
                                          -> LEG_FAILED -> ROLLED_BACK
    ALL_STOPS_COMPLETE -> COMMITTED

Moves produced during an attempt are held aside and only appended to the
flight log on commit, so a rollback never leaves partial moves behind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..errors import BudgetExhausted, InvariantViolation, TooManyPickupStops, Unreachable
from ..geometry.coordinates import Coordinate
from ..logging_utils import get_logger
from ..route_planning.planner import ThetaStarPlanner
from .executor import FlightExecutor, Move

LOGGER = get_logger(__name__)

MAX_PICKUP_STOPS = 2


class StopAction(str, Enum):
    """What the drone does on arrival at a stop."""

    PICKUP = "pickup"
    DELIVER = "deliver"
    TRANSIT = "transit"

    @property
    def hovers(self) -> bool:
        return self is not StopAction.TRANSIT


@dataclass(frozen=True, slots=True)
class Stop:
    """A location the drone must visit for one order."""

    location: Coordinate
    action: StopAction
    label: str = ""


def plan_stops(
    position: Coordinate,
    pickups: Sequence[Coordinate],
    drop_off: Coordinate,
    *,
    labels: Optional[Sequence[str]] = None,
) -> List[Stop]:
    """Build the stop list: pickups first, then the drop-off.

    With two pickups the order minimising
    ``d(position, first) + d(second, drop_off)`` is chosen.
    """

    if len(pickups) > MAX_PICKUP_STOPS:
        raise TooManyPickupStops(
            f"At most {MAX_PICKUP_STOPS} pickup stops are supported, got {len(pickups)}"
        )
    labels = list(labels) if labels is not None else [""] * len(pickups)
    ordered = list(zip(pickups, labels))
    if len(ordered) == 2:
        (first, _), (second, _) = ordered
        as_given = position.distance_to(first) + second.distance_to(drop_off)
        swapped = position.distance_to(second) + first.distance_to(drop_off)
        if swapped < as_given:
            ordered.reverse()
    stops = [Stop(location, StopAction.PICKUP, label) for location, label in ordered]
    stops.append(Stop(drop_off, StopAction.DELIVER, "drop-off"))
    return stops


@dataclass(frozen=True, slots=True)
class MissionCheckpoint:
    position: Coordinate
    moves_remaining: int
    log_length: int


@dataclass(slots=True)
class MissionState:
    """Drone state owned by the mission controller."""

    position: Coordinate
    moves_remaining: int
    flight_log: List[Move] = field(default_factory=list)

    def checkpoint(self) -> MissionCheckpoint:
        return MissionCheckpoint(self.position, self.moves_remaining, len(self.flight_log))

    def restore(self, checkpoint: MissionCheckpoint) -> None:
        """Return to ``checkpoint`` exactly, discarding any later log entries."""

        self.position = checkpoint.position
        self.moves_remaining = checkpoint.moves_remaining
        del self.flight_log[checkpoint.log_length:]


class MissionPhase(str, Enum):
    IDLE = "idle"
    PLANNING_LEG = "planning_leg"
    EXECUTING_LEG = "executing_leg"
    LEG_COMPLETE = "leg_complete"
    LEG_FAILED = "leg_failed"
    ALL_STOPS_COMPLETE = "all_stops_complete"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass(frozen=True, slots=True)
class MissionOutcome:
    """Result of one order attempt."""

    order_id: str
    delivered: bool
    moves_used: int
    reason: str = ""


class MissionController:
    """Fly one order at a time under a finite move budget."""

    def __init__(
        self,
        planner: ThetaStarPlanner,
        executor: FlightExecutor,
        *,
        base: Coordinate,
        moves_remaining: int,
        position: Optional[Coordinate] = None,
    ) -> None:
        if moves_remaining < 0:
            raise ValueError("moves_remaining cannot be negative")
        self.planner = planner
        self.executor = executor
        self.base = base
        self.state = MissionState(position=position or base, moves_remaining=moves_remaining)
        self.phase = MissionPhase.IDLE

    @property
    def flight_log(self) -> Tuple[Move, ...]:
        """Committed moves, in the order they were flown."""

        return tuple(self.state.flight_log)

    @property
    def at_base(self) -> bool:
        return self.state.position.close_to(self.base)

    def _transition(self, order_id: str, phase: MissionPhase) -> None:
        LOGGER.debug("Order %s: %s -> %s", order_id, self.phase.value, phase.value)
        self.phase = phase

    def _roll_back(self, order_id: str, checkpoint: MissionCheckpoint) -> None:
        self._transition(order_id, MissionPhase.LEG_FAILED)
        self.state.restore(checkpoint)
        self._transition(order_id, MissionPhase.ROLLED_BACK)

    def _fly_leg(
        self, order_id: str, position: Coordinate, target: Coordinate, budget: int
    ) -> List[Move]:
        self._transition(order_id, MissionPhase.PLANNING_LEG)
        path = self.planner.find_path(position, target)
        self._transition(order_id, MissionPhase.EXECUTING_LEG)
        return self.executor.fly_path(order_id, position, path.waypoints, budget=budget)

    def moves_to_base(self, position: Coordinate, *, budget: Optional[int] = None) -> int:
        """Simulate the flight home from ``position`` without touching state."""

        if position.close_to(self.base):
            return 0
        path = self.planner.find_path(position, self.base)
        return self.executor.count_moves(position, path.waypoints, budget=budget)

    def execute_order(
        self, order_id: str, stops: Sequence[Stop], *, return_to_base: bool = False
    ) -> MissionOutcome:
        """Visit every stop for ``order_id``, then commit or roll back.

        The order is committed only if every stop is reached and the drone
        can still fly home afterwards without the budget going negative.
        With ``return_to_base`` the flight home is flown and logged as part
        of this order. An ``InvariantViolation`` also rolls the order back
        but is re-raised for the caller to report.
        """

        self.phase = MissionPhase.IDLE
        checkpoint = self.state.checkpoint()
        position = self.state.position
        remaining = self.state.moves_remaining
        pending: List[Move] = []
        LOGGER.info(
            "Order %s: %s stops, %s moves remaining", order_id, len(stops), remaining
        )

        try:
            for stop in stops:
                moves = self._fly_leg(order_id, position, stop.location, remaining)
                pending.extend(moves)
                remaining -= len(moves)
                if moves:
                    position = moves[-1].destination
                if stop.action.hovers:
                    if remaining < 1:
                        raise BudgetExhausted(
                            f"Order {order_id}: no move left to {stop.action.value} at {stop.label}"
                        )
                    pending.append(self.executor.hover(order_id, position))
                    remaining -= 1
                self._transition(order_id, MissionPhase.LEG_COMPLETE)

            self._transition(order_id, MissionPhase.ALL_STOPS_COMPLETE)
            home_cost = self.moves_to_base(position, budget=remaining)
            LOGGER.debug(
                "Order %s: return home needs %s of %s remaining moves",
                order_id,
                home_cost,
                remaining,
            )
            if return_to_base and not position.close_to(self.base):
                moves = self._fly_leg(order_id, position, self.base, remaining)
                pending.extend(moves)
                remaining -= len(moves)
                position = moves[-1].destination if moves else position
        except (Unreachable, BudgetExhausted) as error:
            self._roll_back(order_id, checkpoint)
            LOGGER.warning("Order %s rolled back: %s", order_id, error)
            return MissionOutcome(order_id, delivered=False, moves_used=0, reason=str(error))
        except InvariantViolation:
            self._roll_back(order_id, checkpoint)
            raise

        self.state.position = position
        self.state.moves_remaining = remaining
        self.state.flight_log.extend(pending)
        self._transition(order_id, MissionPhase.COMMITTED)
        LOGGER.info(
            "Order %s committed with %s moves; %s remaining", order_id, len(pending), remaining
        )
        return MissionOutcome(order_id, delivered=True, moves_used=len(pending))

    def return_to_base(self, order_id: str) -> List[Move]:
        """Fly home from the current position and log the leg under ``order_id``."""

        if self.at_base:
            return []
        moves = self._fly_leg(
            order_id, self.state.position, self.base, self.state.moves_remaining
        )
        if moves:
            self.state.position = moves[-1].destination
        self.state.moves_remaining -= len(moves)
        self.state.flight_log.extend(moves)
        self._transition(order_id, MissionPhase.COMMITTED)
        LOGGER.info("Returned to base with %s moves; %s remaining", len(moves), self.state.moves_remaining)
        return moves
