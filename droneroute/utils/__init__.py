"""Mini README: Utility helper functions for droneroute.

Currently exports the GeoJSON helpers used to read no-fly zones from the
web server and to format flight logs for map viewers.
"""

from .geojson import flight_log_to_geojson, no_fly_zones_from_geojson, zones_to_geojson

__all__ = ["flight_log_to_geojson", "no_fly_zones_from_geojson", "zones_to_geojson"]
