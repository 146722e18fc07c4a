"""Mini README: Core package initialiser for droneroute.

droneroute plans any-angle routes around no-fly zones (Theta*), flies them
with fixed-length, quantised-heading moves, and sequences delivery orders
under a move budget with per-order rollback. This module only re-exports
the logging helper so the package stays cheap to import.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
