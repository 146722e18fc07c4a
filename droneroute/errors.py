"""Mini README: Error taxonomy shared by the planning and delivery layers.

Structure:
    * DronerouteError - common base class.
    * ConfigurationError - fatal at startup; the run cannot proceed.
    * Unreachable / BudgetExhausted - recoverable leg failures that trigger
      a rollback of the current order.
    * InvariantViolation (NoValidHeading, InvalidHeading) - planner and
      executor disagree; surfaced loudly, never degraded.
    * OrderRejected (TooManyPickupStops, UnknownItem) - an order violates a
      precondition and is reported undelivered without flying.
"""

from __future__ import annotations


class DronerouteError(Exception):
    """Base class for all droneroute errors."""


class ConfigurationError(DronerouteError):
    """Startup data or settings are unusable."""


class Unreachable(DronerouteError):
    """The planner exhausted its search space without reaching the goal."""


class BudgetExhausted(DronerouteError):
    """A leg, or the return home after it, does not fit the remaining moves."""


class InvariantViolation(DronerouteError):
    """Two components disagree about what is safe to fly."""


class NoValidHeading(InvariantViolation):
    """No heading in the search cone yields a safe move towards the target."""


class InvalidHeading(InvariantViolation):
    """A heading outside the allowed discrete set was requested."""


class OrderRejected(DronerouteError):
    """An order cannot be attempted at all."""


class TooManyPickupStops(OrderRejected):
    """The order's items are spread over more than two shops."""


class UnknownItem(OrderRejected):
    """The order references an item missing from every menu."""
