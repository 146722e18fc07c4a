"""Mini README: Entry point CLI for running droneroute delivery days.

This script exposes a Typer CLI with two commands:
    * deliver - fetch menus and no-fly zones, fly the day's orders, and
      write the GeoJSON flight path plus delivery records.
    * serve - launch the FastAPI route preview service with uvicorn.

Settings are drawn from ``DRONEROUTE_*`` environment variables when the
options are omitted.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from droneroute.catalog import ItemCatalog
from droneroute.configuration import get_settings
from droneroute.errors import ConfigurationError
from droneroute.export import FlightLogExporter, flight_path_filename
from droneroute.ingestion import WebServerClient, load_orders
from droneroute.logging_utils import configure_root_logger, get_logger
from droneroute.scheduling import DeliveryScheduler
from droneroute.session import create_session

cli = typer.Typer(help="Plan and fly droneroute delivery days.")
LOGGER = get_logger("droneroute.cli")


@cli.command()
def deliver(
    day: int = typer.Argument(..., help="Day of the delivery date."),
    month: int = typer.Argument(..., help="Month of the delivery date."),
    year: int = typer.Argument(..., help="Year of the delivery date."),
    server_url: Optional[str] = typer.Option(None, help="Web server base URL."),
    orders_file: Optional[Path] = typer.Option(None, help="JSON order file."),
    output_directory: Optional[Path] = typer.Option(None, help="Where outputs are written."),
) -> None:
    """Fly every order for the given date and write the run artefacts."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    run_date = date(year, month, day)
    output_directory = output_directory or settings.data_directory

    try:
        with WebServerClient(
            server_url or settings.server_url, timeout=settings.request_timeout
        ) as client:
            session = create_session(client.fetch_no_fly_zones(), area=settings.operating_area)
            catalog = ItemCatalog(client.fetch_shops())
            orders = load_orders(orders_file or settings.resolved_orders_file, run_date)
            controller = session.mission_controller(
                base=settings.base, moves_remaining=settings.move_budget
            )
            scheduler = DeliveryScheduler(
                controller, catalog, client.locate, max_passes=settings.max_passes
            )
            report = scheduler.run(orders)
    except ConfigurationError as error:
        LOGGER.error("Run aborted: %s", error)
        typer.echo(f"Run aborted: {error}", err=True)
        raise typer.Exit(code=1) from error

    exporter = FlightLogExporter()
    exporter.export_records(report.deliveries, report.flight_log, output_directory=output_directory)
    geojson_path = exporter.export_geojson(
        report.flight_log, output_directory / flight_path_filename(run_date)
    )
    typer.echo(
        f"Delivered {report.delivered_count} of {report.attempted} orders; "
        f"percentage monetary value: {report.monetary_percentage:.3f}%\n"
        f"Moves remaining: {report.moves_remaining}. Flight path written to {geojson_path}"
    )


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the route preview API using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting droneroute on {effective_host}:{effective_port}.\n"
        f"Route preview available at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "droneroute.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


if __name__ == "__main__":
    cli()
