"""Tests for turn recording and export."""

import csv
import json

import numpy as np

from racetrack.simulation.simulator import Simulator, TurnOutcome, TurnResult
from racetrack.telemetry.exporter import TelemetryExporter, ExporterConfig
from racetrack.telemetry.recorder import TurnRecorder
from racetrack.track.track import Track
from racetrack.vector import PositionVector, Direction


DUEL_TRACK = """\
#########
#a      #
#      b#
#########"""


def _race(*directions: Direction) -> Simulator:
    sim = Simulator(Track.from_text(DUEL_TRACK))
    for direction in directions:
        sim.do_car_turn(direction)
        sim.switch_to_next_active_car()
    return sim


class TestTurnRecorder:
    """Test turn recording."""

    def test_records_turns(self):
        """Test every executed turn is recorded."""
        sim = _race(Direction.RIGHT, Direction.LEFT, Direction.RIGHT)
        recorder = sim.recorder

        assert recorder.count == 3
        first = recorder.records[0]
        assert first.turn == 1
        assert first.car_id == "a"
        assert first.acceleration == "RIGHT"
        assert (first.end_x, first.end_y) == (2, 1)
        assert first.outcome == "moved"

    def test_skipped_turns_not_recorded(self):
        """Test turns that change nothing are left out."""
        sim = _race(Direction.UP)
        assert sim.get_winner() == 1

        sim.do_car_turn(Direction.LEFT)

        assert sim.recorder.count == 1
        assert sim.recorder.records[0].outcome == "crashed"

    def test_record_rejects_skipped_result(self):
        """Test a skipped turn result is not stored."""
        sim = _race(Direction.RIGHT)
        result = TurnResult(
            turn=1,
            car_index=1,
            car_id="b",
            acceleration=Direction.NONE,
            start=PositionVector(7, 2),
            end=PositionVector(7, 2),
            velocity=PositionVector(0, 0),
            outcome=TurnOutcome.SKIPPED,
        )

        assert not sim.recorder.record(result)
        assert sim.recorder.count == 1

    def test_positions(self):
        """Test a car's trajectory."""
        sim = _race(Direction.RIGHT, Direction.NONE, Direction.RIGHT)

        positions = sim.recorder.get_positions(0)

        assert positions.shape == (3, 2)
        assert np.array_equal(positions, [[1, 1], [2, 1], [4, 1]])
        assert sim.recorder.get_distance_travelled(0) == 3.0

    def test_empty_positions(self):
        """Test a car without turns has no trajectory."""
        recorder = TurnRecorder()

        assert recorder.get_positions(0).shape == (0, 2)
        assert recorder.get_distance_travelled(0) == 0.0

    def test_summary(self):
        """Test race statistics."""
        sim = _race(Direction.RIGHT, Direction.NONE, Direction.RIGHT)

        summary = sim.recorder.get_summary()

        assert summary["total_turns"] == 3
        assert summary["turns_per_car"] == {"a": 2, "b": 1}
        assert summary["outcomes"] == {"moved": 3}
        assert summary["max_speed"] == 2.0

    def test_clear(self):
        """Test clearing recorded turns."""
        sim = _race(Direction.RIGHT)
        sim.recorder.clear()

        assert sim.recorder.count == 0


class TestTelemetryExporter:
    """Test exporting recorded turns."""

    def test_export_csv(self, tmp_path):
        """Test CSV export has one row per turn."""
        sim = _race(Direction.RIGHT, Direction.LEFT)
        exporter = TelemetryExporter(ExporterConfig(output_dir=str(tmp_path / "out")))

        output_file = exporter.export_csv(sim.recorder)

        assert exporter.output_path == tmp_path / "out"
        assert exporter.output_path.is_dir()
        assert output_file.parent == exporter.output_path
        with open(output_file, newline="") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 2
        assert rows[1]["car_id"] == "b"
        assert rows[1]["acceleration"] == "LEFT"

    def test_export_json(self, tmp_path):
        """Test JSON export with summary and race state."""
        sim = _race(Direction.RIGHT)
        exporter = TelemetryExporter(ExporterConfig(output_dir=str(tmp_path)))

        output_file = exporter.export_json(sim.recorder, race_state=sim.get_state())

        data = json.loads(output_file.read_text())
        assert data["summary"]["total_turns"] == 1
        assert len(data["turns"]) == 1
        assert data["race"]["winner_index"] == -1

    def test_export_numpy(self, tmp_path):
        """Test trajectory export for every car."""
        sim = _race(Direction.RIGHT, Direction.LEFT)
        exporter = TelemetryExporter(ExporterConfig(output_dir=str(tmp_path)))

        output_file = exporter.export_numpy(sim.recorder, sim.car_count)

        with np.load(output_file) as data:
            assert np.array_equal(data["car_0"], [[1, 1], [2, 1]])
            assert np.array_equal(data["car_1"], [[7, 2], [6, 2]])
