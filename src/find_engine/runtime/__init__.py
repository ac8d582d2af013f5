"""Telemetry and configuration shared across the engine."""

from . import telemetry
from .settings import FindSettings, load_settings

__all__ = ["FindSettings", "load_settings", "telemetry"]
