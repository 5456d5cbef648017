"""
Car module - Racer state.

This module contains:
- Car: Position, velocity and status of a racer
- CarStatus: Active, penalized or crashed
"""

from racetrack.car.car import Car, CarStatus

__all__ = [
    "Car",
    "CarStatus",
]
