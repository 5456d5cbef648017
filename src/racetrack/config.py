"""
Race Configuration

Where track, move and waypoint files live, and how a race run logs
and exports its data.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class RaceConfig:
    """Configuration for a race run."""

    # Data directories
    track_directory: Path = field(default_factory=lambda: Path("tracks"))
    move_directory: Path = field(default_factory=lambda: Path("moves"))
    follower_directory: Path = field(default_factory=lambda: Path("follower"))

    # Race
    max_turns: int = 1000

    # Output
    export_directory: Optional[Path] = None

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def __post_init__(self):
        """Validate and normalize configuration."""
        if isinstance(self.track_directory, str):
            self.track_directory = Path(self.track_directory)
        if isinstance(self.move_directory, str):
            self.move_directory = Path(self.move_directory)
        if isinstance(self.follower_directory, str):
            self.follower_directory = Path(self.follower_directory)
        if self.export_directory and isinstance(self.export_directory, str):
            self.export_directory = Path(self.export_directory)
        if self.log_file and isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)

        self.log_level = self.log_level.upper()
        if self.max_turns < 1:
            raise ValueError(f"max_turns must be positive, got {self.max_turns}")

    @staticmethod
    def _resolve(path: str | Path, directory: Path) -> Path:
        path = Path(path)
        if path.is_absolute() or path.exists():
            return path
        return directory / path

    def resolve_track(self, path: str | Path) -> Path:
        """Resolve a track file, falling back to the track directory."""
        return self._resolve(path, self.track_directory)

    def resolve_moves(self, path: str | Path) -> Path:
        """Resolve a move list file, falling back to the move directory."""
        return self._resolve(path, self.move_directory)

    def resolve_waypoints(self, path: str | Path) -> Path:
        """Resolve a waypoint file, falling back to the follower directory."""
        return self._resolve(path, self.follower_directory)
