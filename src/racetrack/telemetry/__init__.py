"""
Telemetry module - Turn recording and export.

This module contains:
- TurnRecorder: Records every executed turn
- TelemetryExporter: Export turns to CSV, JSON and NumPy files
"""

from racetrack.telemetry.recorder import TurnRecorder, TurnRecord
from racetrack.telemetry.exporter import TelemetryExporter

__all__ = [
    "TurnRecorder",
    "TurnRecord",
    "TelemetryExporter",
]
