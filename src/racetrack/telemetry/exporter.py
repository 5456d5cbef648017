"""
Telemetry exporter - Export recorded turns to files.

Provides:
- CSV export of all turns
- JSON export with race summary
- NumPy export of car trajectories
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Any
import csv
import json
import logging
import numpy as np

from racetrack.telemetry.recorder import TurnRecorder, TurnRecord

logger = logging.getLogger(__name__)


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""

    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


@dataclass
class ExporterConfig:
    """Exporter configuration."""
    output_dir: str = "./race_data"
    include_summary: bool = True


class TelemetryExporter:
    """Export recorded race turns for analysis in external tools."""

    def __init__(self, config: ExporterConfig | None = None):
        """Initialize exporter.

        Args:
            config: Exporter configuration
        """
        self.config = config or ExporterConfig()

        self._output_path = Path(self.config.output_dir)
        self._output_path.mkdir(parents=True, exist_ok=True)

    @property
    def output_path(self) -> Path:
        return self._output_path

    def export_csv(
        self,
        recorder: TurnRecorder,
        filename: str = "turns.csv",
    ) -> Path:
        """Export all turns to a CSV file, one row per turn.

        Args:
            recorder: Recorder with data
            filename: Output filename

        Returns:
            Path to exported file
        """
        output_file = self._output_path / filename
        columns = [field.name for field in fields(TurnRecord)]

        with open(output_file, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=columns)
            writer.writeheader()
            for record in recorder.records:
                writer.writerow(record.to_dict())

        logger.info("Exported %d turns to %s", recorder.count, output_file)
        return output_file

    def export_json(
        self,
        recorder: TurnRecorder,
        filename: str = "race.json",
        race_state: Dict[str, Any] | None = None,
    ) -> Path:
        """Export turns and summary to a JSON file.

        Args:
            recorder: Recorder with data
            filename: Output filename
            race_state: Optional simulator state to include

        Returns:
            Path to exported file
        """
        output_file = self._output_path / filename

        data: Dict[str, Any] = {
            "summary": recorder.get_summary() if self.config.include_summary else {},
            "turns": [record.to_dict() for record in recorder.records],
        }
        if race_state is not None:
            data["race"] = race_state

        with open(output_file, "w") as f:
            json.dump(data, f, indent=2, cls=NumpyEncoder)

        logger.info("Exported race data to %s", output_file)
        return output_file

    def export_numpy(
        self,
        recorder: TurnRecorder,
        car_count: int,
        filename: str = "trajectories.npz",
    ) -> Path:
        """Export every car's trajectory to a NumPy compressed file.

        Args:
            recorder: Recorder with data
            car_count: Number of cars in the race
            filename: Output filename

        Returns:
            Path to exported file
        """
        output_file = self._output_path / filename

        arrays = {
            f"car_{index}": recorder.get_positions(index)
            for index in range(car_count)
        }
        np.savez_compressed(output_file, **arrays)

        return output_file
