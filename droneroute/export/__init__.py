"""Mini README: Export utilities for droneroute run artefacts.

Exposes the exporter that writes a run's flight path as GeoJSON and its
deliveries and moves as JSON records for the persistence layer.
"""

from .flight_log_exporter import FlightLogExporter, flight_path_filename

__all__ = ["FlightLogExporter", "flight_path_filename"]
