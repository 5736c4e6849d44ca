"""Runtime services shared by every selection_engine package."""

from . import telemetry

__all__ = ["telemetry"]
