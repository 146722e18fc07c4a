"""Mini README: GeoJSON helper utilities for droneroute.

This module parses no-fly-zone polygons published by the web server and
formats a finished flight log as a GeoJSON LineString. Keeping the logic
isolated avoids importing HTTP or web framework dependencies when running
unit tests or reusing the helpers from the CLI.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence, Union

from ..drone_control.executor import Move
from ..errors import ConfigurationError
from ..geometry.no_fly_zones import NoFlyZone


def _load(payload: Union[str, bytes, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(payload, dict):
        return payload
    try:
        return json.loads(payload)
    except json.JSONDecodeError as error:
        raise ConfigurationError("GeoJSON payload is invalid JSON") from error


def no_fly_zones_from_geojson(payload: Union[str, bytes, Dict[str, Any]]) -> List[NoFlyZone]:
    """Return the outer ring of every Polygon in a FeatureCollection or Feature.

    Non-polygon geometries are skipped; a payload without any polygons is a
    configuration error.
    """

    geojson = _load(payload)
    if geojson.get("type") == "FeatureCollection":
        features = geojson.get("features") or []
    elif geojson.get("type") == "Feature":
        features = [geojson]
    else:
        features = [{"type": "Feature", "geometry": geojson, "properties": {}}]

    zones: List[NoFlyZone] = []
    for index, feature in enumerate(features):
        geometry = feature.get("geometry") or {}
        if geometry.get("type") != "Polygon":
            continue
        coordinates = geometry.get("coordinates")
        if not coordinates:
            raise ConfigurationError(f"Polygon feature {index} has no coordinates")
        name = str((feature.get("properties") or {}).get("name", f"zone-{index}"))
        zones.append(NoFlyZone.from_points(coordinates[0], name=name))

    if not zones:
        raise ConfigurationError("GeoJSON payload contains no polygon no-fly zones")
    return zones


def flight_log_to_geojson(moves: Sequence[Move]) -> Dict[str, Any]:
    """Build a FeatureCollection holding one LineString through the flight log.

    The line visits every move's origin followed by the last destination.
    An empty log yields an empty collection.
    """

    if not moves:
        return {"type": "FeatureCollection", "features": []}
    points = [[move.origin.longitude, move.origin.latitude] for move in moves]
    points.append([moves[-1].destination.longitude, moves[-1].destination.latitude])
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": points},
                "properties": {},
            }
        ],
    }


def zones_to_geojson(zones: Sequence[NoFlyZone]) -> Dict[str, Any]:
    """Inverse of ``no_fly_zones_from_geojson`` for API responses."""

    features = []
    for zone in zones:
        ring = [list(vertex.as_tuple()) for vertex in zone.vertices]
        ring.append(ring[0])
        features.append(
            {
                "type": "Feature",
                "geometry": {"type": "Polygon", "coordinates": [ring]},
                "properties": {"name": zone.name},
            }
        )
    return {"type": "FeatureCollection", "features": features}
