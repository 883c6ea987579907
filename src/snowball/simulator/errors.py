"""Simulator error types."""

from __future__ import annotations


class SimulatorError(ValueError):
    """Base class for errors raised before or during a run."""


class InsufficientDataError(SimulatorError):
    """Fewer than two usable historical points remain after windowing."""


class InvalidParameterError(SimulatorError):
    """A run parameter is out of range or inconsistent."""
