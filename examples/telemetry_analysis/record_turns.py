#!/usr/bin/env python3
"""
Turn Telemetry Example

This example demonstrates how to:
1. Record every turn of a race
2. Analyze car trajectories with numpy
3. Export turn data to CSV, JSON and NumPy files

Run with: python record_turns.py
"""

from pathlib import Path

import numpy as np

from racetrack import Simulator, Track
from racetrack.strategy import PathFinderStrategy
from racetrack.telemetry import TelemetryExporter
from racetrack.telemetry.exporter import ExporterConfig

TRACK_FILE = Path(__file__).resolve().parents[2] / "tracks" / "oval.txt"


def main():
    print("=" * 60)
    print("Racetrack Turn Telemetry Example")
    print("=" * 60)

    output_dir = Path(__file__).parent / "output"

    # Step 1: Every car plans its own route
    print("\n1. Setting up race...")
    track = Track.from_file(TRACK_FILE)
    sim = Simulator(track)
    for index, car in enumerate(track.cars):
        sim.set_car_move_strategy(index, PathFinderStrategy(track, car))

    # Step 2: Race
    print("\n2. Racing...")
    winner = sim.run(max_turns=500)
    print(f"   Winner index: {winner}")

    # Step 3: Analyze
    print("\n3. Trajectories:")
    recorder = sim.recorder
    for index in range(sim.car_count):
        positions = recorder.get_positions(index)
        if len(positions) == 0:
            continue
        speeds = np.linalg.norm(np.diff(positions, axis=0), axis=1)
        print(f"   Car {sim.get_car_id(index)}: {len(positions) - 1} turns, "
              f"distance {recorder.get_distance_travelled(index):.1f}, "
              f"top speed {speeds.max():.2f}")

    summary = recorder.get_summary()
    print(f"\n   Outcomes: {summary['outcomes']}")

    # Step 4: Export
    print("\n4. Exporting...")
    exporter = TelemetryExporter(ExporterConfig(output_dir=str(output_dir)))
    print(f"   CSV:   {exporter.export_csv(recorder)}")
    print(f"   JSON:  {exporter.export_json(recorder, race_state=sim.get_state())}")
    print(f"   NumPy: {exporter.export_numpy(recorder, sim.car_count)}")


if __name__ == "__main__":
    main()
