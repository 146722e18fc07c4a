"""Mini README: Data ingestion helpers for droneroute runs.

Convenience exports for fetching menus, no-fly zones and address lookups
from the web server, and for loading the day's orders from disk.
"""

from .orders import OrderRecord, load_orders
from .web_client import WebServerClient

__all__ = ["OrderRecord", "WebServerClient", "load_orders"]
