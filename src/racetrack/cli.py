"""
Racetrack command line runner.

Loads a track, gives every car a move strategy and races until a
car wins.

Usage:
    racetrack oval.txt                                # all cars use the path finder
    racetrack oval.txt --strategy a=move_list:a.txt   # car 'a' replays a move file
    racetrack oval.txt --strategy b=path_follower:b.txt --default-strategy do_not_move
    racetrack oval.txt --export-dir race_data --log-level DEBUG
"""

from typing import Dict, List, Optional, Tuple
from pathlib import Path
import argparse
import logging
import sys

from racetrack.config import RaceConfig
from racetrack.simulation.simulator import Simulator, SimulatorConfig
from racetrack.simulation.world import NO_WINNER
from racetrack.strategy.base import StrategyType
from racetrack.strategy.factory import create_strategy
from racetrack.telemetry.exporter import TelemetryExporter, ExporterConfig
from racetrack.track.track import Track

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Configure logging."""
    log_format = "%(asctime)s [%(levelname)s] %(message)s"
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=log_format,
        handlers=handlers,
        force=True,
    )


def parse_strategy(value: str) -> Tuple[str, StrategyType, Optional[str]]:
    """Parse a "ID=TYPE[:FILE]" strategy assignment."""
    car_id, separator, rest = value.partition("=")
    if not separator or len(car_id) != 1:
        raise argparse.ArgumentTypeError(f"Expected ID=TYPE[:FILE], got {value!r}")

    type_name, _, source = rest.partition(":")
    try:
        strategy_type = StrategyType(type_name)
    except ValueError:
        choices = ", ".join(t.value for t in StrategyType)
        raise argparse.ArgumentTypeError(
            f"Unknown strategy {type_name!r} (choose from {choices})"
        ) from None
    return car_id, strategy_type, source or None


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Turn based vector racing on a grid track",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("track", help="Track file (looked up in --track-dir if not found)")
    parser.add_argument(
        "--strategy",
        action="append",
        type=parse_strategy,
        default=[],
        metavar="ID=TYPE[:FILE]",
        help="Strategy for one car, e.g. a=move_list:moves.txt (repeatable)",
    )
    parser.add_argument(
        "--default-strategy",
        type=StrategyType,
        default=StrategyType.PATH_FINDER,
        choices=[StrategyType.DO_NOT_MOVE, StrategyType.PATH_FINDER],
        metavar="TYPE",
        help="Strategy for cars without --strategy (do_not_move or path_finder, default: path_finder)",
    )
    parser.add_argument("--track-dir", type=Path, default=Path("tracks"), help="Track directory")
    parser.add_argument("--move-dir", type=Path, default=Path("moves"), help="Move file directory")
    parser.add_argument(
        "--follower-dir", type=Path, default=Path("follower"), help="Waypoint file directory"
    )
    parser.add_argument(
        "--max-turns", type=int, default=1000, help="Maximum turns before stopping (default: 1000)"
    )
    parser.add_argument("--export-dir", type=Path, help="Export turn data to this directory")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--log-file", type=Path, help="Also log to this file")
    return parser.parse_args(argv)


def build_simulator(
    config: RaceConfig,
    track_file: str | Path,
    assignments: Dict[str, Tuple[StrategyType, Optional[str]]],
    default_strategy: StrategyType = StrategyType.PATH_FINDER,
) -> Simulator:
    """Load the track and set up every car's strategy.

    Args:
        config: Race configuration
        track_file: Track file name or path
        assignments: Car id -> (strategy type, source file)
        default_strategy: Strategy for cars without assignment

    Returns:
        Simulator ready to run
    """
    track = Track.from_file(config.resolve_track(track_file))
    simulator = Simulator(track, SimulatorConfig(max_turns=config.max_turns))

    known_ids = {car.id for car in track.cars}
    for car_id in assignments:
        if car_id not in known_ids:
            raise ValueError(f"Track has no car {car_id!r}")

    for index, car in enumerate(track.cars):
        strategy_type, source = assignments.get(car.id, (default_strategy, None))
        if source is not None:
            if strategy_type is StrategyType.MOVE_LIST:
                source = config.resolve_moves(source)
            elif strategy_type is StrategyType.PATH_FOLLOWER:
                source = config.resolve_waypoints(source)
        strategy = create_strategy(strategy_type, track, index, source)
        simulator.set_car_move_strategy(index, strategy)
        logger.info("Car %s uses strategy %s", car.id, strategy_type.value)

    return simulator


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    config = RaceConfig(
        track_directory=args.track_dir,
        move_directory=args.move_dir,
        follower_directory=args.follower_dir,
        max_turns=args.max_turns,
        export_directory=args.export_dir,
        log_level=args.log_level,
        log_file=args.log_file,
    )
    setup_logging(config.log_level, config.log_file)

    assignments = {car_id: (strategy_type, source) for car_id, strategy_type, source in args.strategy}
    try:
        simulator = build_simulator(config, args.track, assignments, args.default_strategy)
    except (OSError, ValueError) as e:
        logger.error("Could not set up race: %s", e)
        return 1

    print(simulator.track)
    winner = simulator.run()
    print()
    print(simulator.track)

    if winner == NO_WINNER:
        print("No winner.")
    else:
        print(f"Car {simulator.get_car_id(winner)} wins!")

    if config.export_directory:
        exporter = TelemetryExporter(ExporterConfig(output_dir=str(config.export_directory)))
        exporter.export_csv(simulator.recorder)
        exporter.export_json(simulator.recorder, race_state=simulator.get_state())
        exporter.export_numpy(simulator.recorder, simulator.car_count)

    return 0


if __name__ == "__main__":
    sys.exit(main())
