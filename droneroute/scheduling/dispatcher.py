"""Mini README: Runs a day's orders through the mission controller.

Structure:
    * Order - a customer order as read from the order source.
    * Delivery - record of a delivered order and its value.
    * RunReport - per-run outcomes, flight log and monetary totals.
    * DeliveryScheduler - resolves locations, builds stops, and drives the
      mission controller order by order.

Each order is attempted in turn. A rolled-back or rejected order never
affects the next one: the controller restores its own state, and the
scheduler simply records the order as undelivered. With ``max_passes``
above one, undelivered orders are retried after the rest of the day's
orders have been flown. An invariant violation abandons only the order
it occurred in; it is logged with its traceback and the run continues.
The drone ends the run back at base.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..catalog import ItemCatalog
from ..drone_control import MissionController, MissionOutcome, Move, plan_stops
from ..errors import BudgetExhausted, InvariantViolation, OrderRejected, Unreachable
from ..geometry.coordinates import Coordinate
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

Locator = Callable[[str], Coordinate]


@dataclass(slots=True)
class Order:
    """A customer order awaiting delivery."""

    order_no: str
    delivery_date: date
    customer: str
    deliver_to: str
    items: List[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Delivery:
    """A completed delivery."""

    order_no: str
    delivered_to: str
    cost_in_pence: int

    def as_dict(self) -> Dict[str, object]:
        return {
            "order_no": self.order_no,
            "delivered_to": self.delivered_to,
            "cost_in_pence": self.cost_in_pence,
        }


@dataclass(slots=True)
class RunReport:
    """Everything a run produces for the persistence and export layers."""

    deliveries: List[Delivery]
    outcomes: List[MissionOutcome]
    flight_log: Tuple[Move, ...]
    total_value: int
    delivered_value: int
    moves_remaining: int

    @property
    def attempted(self) -> int:
        return len(self.outcomes)

    @property
    def delivered_count(self) -> int:
        return len(self.deliveries)

    @property
    def monetary_percentage(self) -> float:
        """Share of the day's order value that was delivered."""

        if self.total_value == 0:
            return 0.0
        return 100.0 * self.delivered_value / self.total_value


class DeliveryScheduler:
    """Sequence orders through a ``MissionController``."""

    def __init__(
        self,
        controller: MissionController,
        catalog: ItemCatalog,
        locate: Locator,
        *,
        max_passes: int = 1,
    ) -> None:
        if max_passes < 1:
            raise ValueError("max_passes must be at least 1")
        self.controller = controller
        self.catalog = catalog
        self.locate = locate
        self.max_passes = max_passes

    def _attempt(self, order: Order, *, return_to_base: bool) -> MissionOutcome:
        position = self.controller.state.position
        drop_off = self.locate(order.deliver_to)
        shops = self.catalog.shops_for(order.items)
        pickups = [self.locate(shop.location) for shop in shops]
        stops = plan_stops(position, pickups, drop_off, labels=[shop.name for shop in shops])
        return self.controller.execute_order(order.order_no, stops, return_to_base=return_to_base)

    def run(self, orders: Iterable[Order]) -> RunReport:
        """Attempt every order and return the run's report."""

        orders = list(orders)
        outcomes: Dict[str, MissionOutcome] = {}
        values: Dict[str, int] = {}
        deliveries: List[Delivery] = []
        pending: List[Order] = []

        for order in orders:
            try:
                values[order.order_no] = self.catalog.delivery_cost(order.items)
            except OrderRejected as error:
                LOGGER.warning("Order %s rejected: %s", order.order_no, error)
                outcomes[order.order_no] = MissionOutcome(order.order_no, False, 0, str(error))
                continue
            pending.append(order)

        for pass_number in range(1, self.max_passes + 1):
            if not pending:
                break
            final_pass = pass_number == self.max_passes
            LOGGER.info("Scheduling pass %s with %s orders", pass_number, len(pending))
            undelivered: List[Order] = []
            delivered_before = len(deliveries)
            for index, order in enumerate(pending):
                last_order = final_pass and index == len(pending) - 1
                try:
                    outcome = self._attempt(order, return_to_base=last_order)
                except OrderRejected as error:
                    LOGGER.warning("Order %s rejected: %s", order.order_no, error)
                    outcomes[order.order_no] = MissionOutcome(order.order_no, False, 0, str(error))
                    continue
                except InvariantViolation as error:
                    LOGGER.exception("Order %s abandoned after invariant violation", order.order_no)
                    outcomes[order.order_no] = MissionOutcome(order.order_no, False, 0, str(error))
                    continue
                outcomes[order.order_no] = outcome
                if outcome.delivered:
                    deliveries.append(
                        Delivery(order.order_no, order.deliver_to, values[order.order_no])
                    )
                else:
                    undelivered.append(order)
            if len(deliveries) == delivered_before:
                break
            pending = undelivered

        if not self.controller.at_base:
            last_id = deliveries[-1].order_no if deliveries else "base"
            try:
                self.controller.return_to_base(last_id)
            except (Unreachable, BudgetExhausted, InvariantViolation):
                LOGGER.exception(
                    "Final return to base failed; drone left at %s", self.controller.state.position
                )

        delivered_value = sum(delivery.cost_in_pence for delivery in deliveries)
        report = RunReport(
            deliveries=deliveries,
            outcomes=[outcomes[order.order_no] for order in orders if order.order_no in outcomes],
            flight_log=self.controller.flight_log,
            total_value=sum(values.values()),
            delivered_value=delivered_value,
            moves_remaining=self.controller.state.moves_remaining,
        )
        LOGGER.info(
            "Delivered %s of %s orders (%.3f%% of value), %s moves remaining",
            report.delivered_count,
            report.attempted,
            report.monetary_percentage,
            report.moves_remaining,
        )
        return report


def orders_for_date(orders: Iterable[Order], delivery_date: Optional[date]) -> List[Order]:
    """Filter ``orders`` to one delivery date; ``None`` keeps them all."""

    if delivery_date is None:
        return list(orders)
    return [order for order in orders if order.delivery_date == delivery_date]
