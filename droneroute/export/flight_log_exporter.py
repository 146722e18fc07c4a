"""Mini README: Persist a finished run to disk.

Structure:
    * FlightLogExporter - writes the GeoJSON flight path and the JSON
      delivery / flight-path records.

The exporter only reads the flight log; it never reorders or edits moves.
File names follow the ``drone-DD-MM-YYYY.geojson`` convention used by the
map viewer.
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Dict, List, Sequence

from ..drone_control.executor import Move
from ..logging_utils import get_logger
from ..scheduling import Delivery
from ..utils.geojson import flight_log_to_geojson

LOGGER = get_logger(__name__)


def flight_path_filename(run_date: date) -> str:
    return f"drone-{run_date:%d-%m-%Y}.geojson"


class FlightLogExporter:
    """Serialise flight logs and delivery records."""

    def export_geojson(self, moves: Sequence[Move], destination: Path) -> Path:
        """Write the flight log as a GeoJSON LineString."""

        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(json.dumps(flight_log_to_geojson(moves)), encoding="utf-8")
        LOGGER.info("Exported flight path with %s moves to %s", len(moves), destination)
        return destination

    def export_records(
        self,
        deliveries: Sequence[Delivery],
        moves: Sequence[Move],
        *,
        output_directory: Path,
    ) -> List[Path]:
        """Write ``deliveries.json`` and ``flightpath.json``, replacing old copies."""

        output_directory.mkdir(parents=True, exist_ok=True)
        tables: Dict[str, List[Dict[str, object]]] = {
            "deliveries.json": [delivery.as_dict() for delivery in deliveries],
            "flightpath.json": [move.as_record() for move in moves],
        }
        written: List[Path] = []
        for name, rows in tables.items():
            path = output_directory / name
            path.write_text(json.dumps(rows, indent=2), encoding="utf-8")
            LOGGER.debug("Wrote %s rows to %s", len(rows), path)
            written.append(path)
        return written
