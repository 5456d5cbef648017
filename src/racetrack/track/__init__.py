"""
Track module - Grid and space types.

This module contains:
- PositionVector: Integer grid vector
- Direction: The 9 acceleration directions
- SpaceType: Classification of a grid cell
- Track: Grid of spaces with the cars racing on it
"""

from racetrack.vector import PositionVector, Direction
from racetrack.track.space import SpaceType
from racetrack.track.track import Track, TrackConfig, InvalidTrackFormatError

__all__ = [
    "PositionVector",
    "Direction",
    "SpaceType",
    "Track",
    "TrackConfig",
    "InvalidTrackFormatError",
]
