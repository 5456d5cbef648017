"""
Racetrack - Turn based vector racing on a grid.

This package provides a grid race simulation with:
- Grid tracks with walls and directional finish lines
- Cars moving by integer velocity vectors, one turn at a time
- Collision, finish line and elimination rules
- Move strategies including a path finding autopilot
- Turn recording and export
"""

__version__ = "0.1.0"

from racetrack.simulation.simulator import Simulator
from racetrack.car.car import Car
from racetrack.track.track import Track
from racetrack.vector import PositionVector, Direction

__all__ = ["Simulator", "Car", "Track", "PositionVector", "Direction", "__version__"]
