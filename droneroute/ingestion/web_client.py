"""Mini README: HTTP client for the delivery web server.

Structure:
    * ShopPayload / MenuItemPayload / AddressPayload - pydantic schemas for
      the server's JSON documents.
    * WebServerClient - fetches menus, no-fly zones and address lookups.

All fetching happens before planning starts. Any transport failure,
non-200 response or malformed payload is a ``ConfigurationError``: without
this data the run cannot proceed.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import httpx
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ..catalog import MenuItem, Shop
from ..errors import ConfigurationError
from ..geometry.coordinates import Coordinate
from ..geometry.no_fly_zones import NoFlyZone
from ..logging_utils import get_logger
from ..utils.geojson import no_fly_zones_from_geojson

LOGGER = get_logger(__name__)

MENUS_PATH = "menus/menus.json"
NO_FLY_ZONES_PATH = "buildings/no-fly-zones.geojson"


class MenuItemPayload(BaseModel):
    item: str
    pence: int = Field(ge=0)


class ShopPayload(BaseModel):
    name: str
    location: str
    menu: List[MenuItemPayload] = Field(default_factory=list)

    def to_shop(self) -> Shop:
        return Shop(
            name=self.name,
            location=self.location,
            menu=[MenuItem(item=entry.item, pence=entry.pence) for entry in self.menu],
        )


class LngLatPayload(BaseModel):
    lng: float
    lat: float


class AddressPayload(BaseModel):
    words: str
    coordinates: LngLatPayload


_SHOPS_ADAPTER = TypeAdapter(List[ShopPayload])


def words_path(words: str) -> str:
    """``first.second.third`` -> ``words/first/second/third/details.json``."""

    parts = [part for part in words.strip().split(".") if part]
    if len(parts) != 3:
        raise ConfigurationError(f"Address token '{words}' must have three dot-separated words")
    return "words/" + "/".join(parts) + "/details.json"


class WebServerClient:
    """Synchronous client for the static delivery web server."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)
        self._locations: Dict[str, Coordinate] = {}
        LOGGER.debug("WebServerClient targeting %s", self.base_url)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "WebServerClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch(self, path: str) -> str:
        """Return the body at ``path`` or raise ``ConfigurationError``."""

        url = self.base_url + path
        try:
            response = self._client.get(url)
        except httpx.HTTPError as error:
            raise ConfigurationError(f"Request to {url} failed: {error}") from error
        if response.status_code != httpx.codes.OK:
            raise ConfigurationError(f"{url} answered with status {response.status_code}")
        LOGGER.debug("Fetched %s (%s bytes)", url, len(response.content))
        return response.text

    def fetch_shops(self) -> List[Shop]:
        try:
            payload = _SHOPS_ADAPTER.validate_json(self.fetch(MENUS_PATH))
        except ValidationError as error:
            raise ConfigurationError(f"Menu data is malformed: {error}") from error
        if not payload:
            raise ConfigurationError("Menu data is empty")
        LOGGER.info("Loaded %s shops from %s", len(payload), MENUS_PATH)
        return [shop.to_shop() for shop in payload]

    def fetch_no_fly_zones(self) -> List[NoFlyZone]:
        zones = no_fly_zones_from_geojson(self.fetch(NO_FLY_ZONES_PATH))
        LOGGER.info("Loaded %s no-fly zones from %s", len(zones), NO_FLY_ZONES_PATH)
        return zones

    def locate(self, words: str) -> Coordinate:
        """Resolve a three-word address token to a coordinate (cached)."""

        if words not in self._locations:
            try:
                address = AddressPayload.model_validate_json(self.fetch(words_path(words)))
            except ValidationError as error:
                raise ConfigurationError(f"Address data for '{words}' is malformed: {error}") from error
            self._locations[words] = Coordinate(address.coordinates.lng, address.coordinates.lat)
        return self._locations[words]
