"""Mini README: Run-level scheduling of delivery orders.

Exports the ``DeliveryScheduler`` that feeds a day's orders to the
mission controller, along with the ``Order``, ``Delivery`` and
``RunReport`` records it consumes and produces.
"""

from .dispatcher import Delivery, DeliveryScheduler, Order, RunReport, orders_for_date

__all__ = ["Delivery", "DeliveryScheduler", "Order", "RunReport", "orders_for_date"]
