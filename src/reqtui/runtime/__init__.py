"""Runtime services shared by every layer (telemetry, settings)."""

from . import telemetry
from .settings import Settings, load_settings

__all__ = ["telemetry", "Settings", "load_settings"]
