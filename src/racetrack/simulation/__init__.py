"""
Simulation module - Turn engine and rules.

This module contains:
- Simulator: Executes turns and runs the race
- World: Race state (current car, winner, turn count)
- Physics: Line rasterization and finish line rules
"""

from racetrack.simulation.simulator import (
    Simulator,
    SimulatorConfig,
    TurnOutcome,
    TurnResult,
    TrackInvariantError,
)
from racetrack.simulation.world import World, NO_WINNER
from racetrack.simulation.physics import (
    calculate_path,
    is_finish_line_crossed_correctly,
    is_finish_line_crossing_penalised,
)

__all__ = [
    "Simulator",
    "SimulatorConfig",
    "TurnOutcome",
    "TurnResult",
    "TrackInvariantError",
    "World",
    "NO_WINNER",
    "calculate_path",
    "is_finish_line_crossed_correctly",
    "is_finish_line_crossing_penalised",
]
