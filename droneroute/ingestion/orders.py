"""Mini README: Loads the day's orders from a JSON order file.

The order file stands in for the orders / order-details tables: a list of
objects with ``order_no``, ``delivery_date``, ``customer``, ``deliver_to``
and ``items``. Records are validated with pydantic before being turned
into scheduler ``Order`` objects.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ..errors import ConfigurationError
from ..logging_utils import get_logger
from ..scheduling import Order, orders_for_date

LOGGER = get_logger(__name__)


class OrderRecord(BaseModel):
    order_no: str = Field(min_length=1)
    delivery_date: date
    customer: str = ""
    deliver_to: str
    items: List[str] = Field(default_factory=list)

    def to_order(self) -> Order:
        return Order(
            order_no=self.order_no,
            delivery_date=self.delivery_date,
            customer=self.customer,
            deliver_to=self.deliver_to,
            items=list(self.items),
        )


_RECORDS_ADAPTER = TypeAdapter(List[OrderRecord])


def load_orders(path: Path, delivery_date: Optional[date] = None) -> List[Order]:
    """Read ``path`` and return the orders for ``delivery_date`` (all if None)."""

    try:
        records = _RECORDS_ADAPTER.validate_json(path.read_bytes())
    except FileNotFoundError as error:
        raise ConfigurationError(f"Order file {path} does not exist") from error
    except ValidationError as error:
        raise ConfigurationError(f"Order file {path} is malformed: {error}") from error
    orders = orders_for_date((record.to_order() for record in records), delivery_date)
    if not orders:
        LOGGER.warning("No orders found in %s for %s", path, delivery_date)
    else:
        LOGGER.info("Loaded %s orders from %s", len(orders), path)
    return orders
