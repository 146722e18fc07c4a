"""Mini README: Shop and menu catalog used to price and route orders.

The catalog resolves an order's items to the shops the drone must pick
up from and computes the order's value including the delivery charge.
"""

from .menus import DELIVERY_CHARGE_PENCE, ItemCatalog, MenuItem, Shop

__all__ = ["DELIVERY_CHARGE_PENCE", "ItemCatalog", "MenuItem", "Shop"]
