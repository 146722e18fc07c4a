"""Mini README: Tests for the web server client and the order loader.

HTTP traffic is served by ``httpx.MockTransport`` so no server is needed.
"""

from __future__ import annotations

import json
from datetime import date

import httpx
import pytest

from droneroute.errors import ConfigurationError
from droneroute.geometry import Coordinate
from droneroute.ingestion import WebServerClient, load_orders
from droneroute.ingestion.web_client import words_path

MENUS = [
    {
        "name": "Civerinos Slice",
        "location": "maps.soon.sofa",
        "menu": [{"item": "Margherita", "pence": 1000}],
    }
]
ZONES = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "properties": {"name": "Dugald Stewart Building"},
            "geometry": {
                "type": "Polygon",
                "coordinates": [
                    [
                        [-3.1876, 55.9440],
                        [-3.1872, 55.9440],
                        [-3.1872, 55.9443],
                        [-3.1876, 55.9443],
                        [-3.1876, 55.9440],
                    ]
                ],
            },
        }
    ],
}
ADDRESS = {
    "country": "GB",
    "words": "maps.soon.sofa",
    "coordinates": {"lng": -3.191065, "lat": 55.945626},
}


def _client(requests: list, status: int = 200) -> WebServerClient:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request.url.path)
        if status != 200:
            return httpx.Response(status)
        if request.url.path.endswith("menus.json"):
            return httpx.Response(200, json=MENUS)
        if request.url.path.endswith("no-fly-zones.geojson"):
            return httpx.Response(200, json=ZONES)
        if request.url.path.endswith("details.json"):
            return httpx.Response(200, json=ADDRESS)
        return httpx.Response(404)

    transport = httpx.MockTransport(handler)
    return WebServerClient("http://server:9898", client=httpx.Client(transport=transport))


def test_fetches_shops_and_zones() -> None:
    requests: list = []
    with _client(requests) as client:
        shops = client.fetch_shops()
        zones = client.fetch_no_fly_zones()
    assert shops[0].name == "Civerinos Slice"
    assert shops[0].menu[0].pence == 1000
    assert zones[0].name == "Dugald Stewart Building"
    assert requests == ["/menus/menus.json", "/buildings/no-fly-zones.geojson"]


def test_locate_is_cached() -> None:
    requests: list = []
    client = _client(requests)
    first = client.locate("maps.soon.sofa")
    second = client.locate("maps.soon.sofa")
    assert first == second == Coordinate(-3.191065, 55.945626)
    assert requests == ["/words/maps/soon/sofa/details.json"]


def test_error_status_is_a_configuration_error() -> None:
    client = _client([], status=500)
    with pytest.raises(ConfigurationError):
        client.fetch_shops()


def test_words_path_requires_three_words() -> None:
    assert words_path("a.b.c") == "words/a/b/c/details.json"
    with pytest.raises(ConfigurationError):
        words_path("only.two")


def test_load_orders_filters_by_date(tmp_path) -> None:
    orders_file = tmp_path / "orders.json"
    orders_file.write_text(
        json.dumps(
            [
                {
                    "order_no": "1ad5f1ff",
                    "delivery_date": "2022-01-01",
                    "customer": "s2314256",
                    "deliver_to": "pest.round.peanut",
                    "items": ["Margherita"],
                },
                {
                    "order_no": "2b3c4d5e",
                    "delivery_date": "2022-01-02",
                    "deliver_to": "pest.round.peanut",
                    "items": [],
                },
            ]
        )
    )
    orders = load_orders(orders_file, date(2022, 1, 1))
    assert [order.order_no for order in orders] == ["1ad5f1ff"]
    assert orders[0].items == ["Margherita"]
    assert len(load_orders(orders_file)) == 2


def test_load_orders_rejects_missing_or_malformed_files(tmp_path) -> None:
    with pytest.raises(ConfigurationError):
        load_orders(tmp_path / "absent.json")
    broken = tmp_path / "broken.json"
    broken.write_text(json.dumps([{"order_no": "x"}]))
    with pytest.raises(ConfigurationError):
        load_orders(broken)
