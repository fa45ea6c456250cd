"""Exception types raised by the dashboard."""

from __future__ import annotations


class DashError(Exception):
    """Base class for dashboard errors."""


class TerminalIOError(DashError):
    """The terminal back-end failed to draw or to read an input event.

    Always fatal: the frame driver restores the terminal and re-raises.
    """


class InvalidConstraintConfiguration(DashError, ValueError):
    """A layout constraint was built from malformed values."""


class DataProviderError(DashError):
    """A data provider could not load its records."""
