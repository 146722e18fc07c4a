"""Mini README: In-memory shop and menu catalog.

Structure:
    * MenuItem - item name and price in pence.
    * Shop - pickup location token and its menu.
    * ItemCatalog - maps items to shops and prices.

The catalog is loaded once from the web server's menu listing. It answers
two questions for the scheduler: which shops the drone must visit for an
order, and what the order is worth including the flat delivery charge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from ..errors import ConfigurationError, UnknownItem
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

DELIVERY_CHARGE_PENCE = 50


@dataclass(frozen=True, slots=True)
class MenuItem:
    """A purchasable item."""

    item: str
    pence: int


@dataclass(slots=True)
class Shop:
    """A participating shop; ``location`` is an address token."""

    name: str
    location: str
    menu: List[MenuItem] = field(default_factory=list)

    def as_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "location": self.location,
            "menu": [{"item": entry.item, "pence": entry.pence} for entry in self.menu],
        }


class ItemCatalog:
    """Lookup of shops and prices by item name."""

    def __init__(self, shops: Iterable[Shop]) -> None:
        self._shops: List[Shop] = list(shops)
        if not self._shops:
            raise ConfigurationError("Menu data is empty; no shops to pick up from")
        self._prices: Dict[str, int] = {}
        self._shop_by_item: Dict[str, Shop] = {}
        for shop in self._shops:
            for entry in shop.menu:
                if entry.item in self._shop_by_item:
                    LOGGER.warning(
                        "Item '%s' listed by both %s and %s; using %s",
                        entry.item,
                        self._shop_by_item[entry.item].name,
                        shop.name,
                        shop.name,
                    )
                self._prices[entry.item] = entry.pence
                self._shop_by_item[entry.item] = shop
        LOGGER.debug(
            "Catalog initialised with %s shops and %s items", len(self._shops), len(self._prices)
        )

    @property
    def shops(self) -> List[Shop]:
        return list(self._shops)

    def price_of(self, item: str) -> int:
        if item not in self._prices:
            raise UnknownItem(f"Item '{item}' is not on any menu")
        return self._prices[item]

    def shops_for(self, items: Iterable[str]) -> List[Shop]:
        """Distinct shops supplying ``items``, in first-seen order."""

        shops: List[Shop] = []
        for item in items:
            if item not in self._shop_by_item:
                raise UnknownItem(f"Item '{item}' is not on any menu")
            shop = self._shop_by_item[item]
            if all(existing is not shop for existing in shops):
                shops.append(shop)
        return shops

    def delivery_cost(self, items: Iterable[str]) -> int:
        """Total price in pence plus the delivery charge; 0 for an empty order."""

        subtotal = sum(self.price_of(item) for item in items)
        if subtotal > 0:
            return subtotal + DELIVERY_CHARGE_PENCE
        return 0
