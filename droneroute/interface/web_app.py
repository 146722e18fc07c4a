"""Mini README: FastAPI-powered route preview service for droneroute.

Structure:
    * create_application - application factory wiring the routes.
    * Request models - pydantic bodies for route queries.

The service exposes the planner and executor over HTTP so map front-ends
can preview a leg before a run: ``/plan-route`` returns Theta* waypoints
and ``/fly-route`` the quantised moves with a GeoJSON overlay. Requests
are served one at a time against a single shared grid.
"""

from __future__ import annotations

import threading
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..configuration import DronerouteSettings, get_settings
from ..errors import BudgetExhausted, InvariantViolation, Unreachable
from ..geometry import Coordinate
from ..ingestion import WebServerClient
from ..logging_utils import get_logger
from ..session import NavigationSession, create_session
from ..utils.geojson import flight_log_to_geojson, zones_to_geojson

LOGGER = get_logger(__name__)


class CoordinatePayload(BaseModel):
    longitude: float
    latitude: float

    def to_coordinate(self) -> Coordinate:
        return Coordinate(self.longitude, self.latitude)


class RouteRequest(BaseModel):
    start: CoordinatePayload
    goal: CoordinatePayload
    order_id: str = "preview"
    budget: Optional[int] = None


def _session_from_settings(settings: DronerouteSettings) -> NavigationSession:
    with WebServerClient(settings.server_url, timeout=settings.request_timeout) as client:
        zones = client.fetch_no_fly_zones()
    return create_session(zones, area=settings.operating_area)


def create_application(
    session: Optional[NavigationSession] = None, *, move_budget: Optional[int] = None
) -> FastAPI:
    """Create the FastAPI application around a navigation session.

    Missing arguments are filled from the settings. ``move_budget`` bounds
    every ``/fly-route`` request that does not name its own budget.
    """

    app = FastAPI(title="droneroute Route Preview", version="0.1.0")
    if session is None or move_budget is None:
        settings = get_settings()
        if session is None:
            session = _session_from_settings(settings)
        move_budget = settings.move_budget if move_budget is None else move_budget
    # The grid's search buffers are shared; serialise planner access.
    grid_lock = threading.Lock()

    @app.get("/health")
    async def health() -> JSONResponse:
        """Report grid dimensions and obstacle count."""

        return JSONResponse(
            {
                "status": "ok",
                "rows": session.grid.rows,
                "cols": session.grid.cols,
                "walkable_cells": session.grid.walkable_count,
                "no_fly_zones": len(session.zones),
            }
        )

    @app.get("/no-fly-zones")
    async def no_fly_zones() -> JSONResponse:
        return JSONResponse(zones_to_geojson(session.zones.zones))

    @app.post("/plan-route")
    def plan_route(request: RouteRequest) -> JSONResponse:
        """Return the Theta* waypoints between two coordinates."""

        try:
            with grid_lock:
                path = session.planner.find_path(
                    request.start.to_coordinate(), request.goal.to_coordinate()
                )
        except Unreachable as error:
            raise HTTPException(status_code=409, detail=str(error)) from error
        LOGGER.info("Planned preview route with %s waypoints", len(path))
        return JSONResponse({"commands": path.as_commands(), "length": path.length})

    @app.post("/fly-route")
    def fly_route(request: RouteRequest) -> JSONResponse:
        """Return the quantised moves that follow the planned route."""

        start = request.start.to_coordinate()
        budget = move_budget if request.budget is None else request.budget
        try:
            with grid_lock:
                path = session.planner.find_path(start, request.goal.to_coordinate())
                moves = session.executor.fly_path(
                    request.order_id, start, path.waypoints, budget=budget
                )
        except (Unreachable, BudgetExhausted) as error:
            raise HTTPException(status_code=409, detail=str(error)) from error
        except InvariantViolation as error:
            LOGGER.error("Executor rejected planned route: %s", error)
            raise HTTPException(status_code=500, detail=str(error)) from error
        return JSONResponse(
            {
                "moves": [move.as_record() for move in moves],
                "move_count": len(moves),
                "geojson": flight_log_to_geojson(moves),
            }
        )

    return app
