"""Telemetry module for OpenTelemetry instrumentation."""
from taskmanager.telemetry.instrumentation import TelemetryManager

__all__ = [
    "TelemetryManager",
]
