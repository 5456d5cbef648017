#!/usr/bin/env python3
"""
Basic Race Example

This example demonstrates how to:
1. Load a track from a text file
2. Give every car a move strategy
3. Drive single turns by hand
4. Let the strategies race to the finish

Run with: python run_race.py
"""

from pathlib import Path

from racetrack import Simulator, Track, Direction
from racetrack.strategy import DoNotMoveStrategy, PathFinderStrategy
from racetrack.simulation import NO_WINNER

TRACK_FILE = Path(__file__).resolve().parents[2] / "tracks" / "oval.txt"


def main():
    print("=" * 60)
    print("Racetrack Basic Race Example")
    print("=" * 60)

    # Step 1: Load the track
    print("\n1. Loading track...")
    track = Track.from_file(TRACK_FILE)

    print(f"   Size: {track.width} x {track.height}")
    print(f"   Cars: {', '.join(car.id for car in track.cars)}")
    print(f"   Finish cells: {len(track.finish_positions())}")
    print(track)

    # Step 2: Plan a route for car 'a', car 'b' stays put
    print("\n2. Planning routes...")
    sim = Simulator(track)
    planner = PathFinderStrategy(track, track.get_car(0))
    sim.set_car_move_strategy(0, planner)
    sim.set_car_move_strategy(1, DoNotMoveStrategy())

    print(f"   Car a route: {' -> '.join(str(p) for p in planner.path)}")

    # Step 3: A few manual turns with car 'b'
    print("\n3. Driving car b by hand...")
    sim.switch_to_next_active_car()
    for direction in (Direction.RIGHT, Direction.LEFT, Direction.NONE):
        result = sim.do_car_turn(direction)
        print(f"   {direction.name:>5}: {result.start} -> {result.end} ({result.outcome.value})")
    sim.switch_to_next_active_car()

    # Step 4: Race
    print("\n4. Racing...")
    winner = sim.run(max_turns=500)

    print(track)
    if winner == NO_WINNER:
        print("\n   No winner.")
    else:
        print(f"\n   Car {sim.get_car_id(winner)} wins after {sim.world.turn} turns")
        print(f"   {sim.get_car_move_strategy(winner).statistics()}")


if __name__ == "__main__":
    main()
