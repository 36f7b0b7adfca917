"""Runtime services shared by every layer of the editor."""

from . import telemetry

__all__ = ["telemetry"]
