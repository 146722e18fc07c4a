"""Mini README: Interactive interfaces for droneroute.

Exports the FastAPI application factory behind the route preview
service. The batch CLI lives in ``main_dispatch.py`` at the repository
root.
"""

from .web_app import create_application

__all__ = ["create_application"]
