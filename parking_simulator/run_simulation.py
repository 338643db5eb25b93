# parking_simulator/run_simulation.py
"""Run the parking lot simulation from the command line."""

import argparse
import logging
import signal
import sys

from pydantic import ValidationError

from parking_simulator.core.errors import ParkingConfigError
from parking_simulator.simulation.config import SimulationSettings
from parking_simulator.simulation.engine import Simulation

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Concurrent parking lot simulator")
    parser.add_argument("--capacity", type=int, help="number of parking spots")
    arrivals = parser.add_mutually_exclusive_group()
    arrivals.add_argument("--total-cars", type=int, help="number of arriving vehicles")
    arrivals.add_argument(
        "--unbounded", action="store_true",
        help="keep vehicles arriving until cancelled (Ctrl+C or --duration)",
    )
    parser.add_argument("--arrival-rate", type=float, help="arrivals per second")
    parser.add_argument("--dwell-min", type=float, help="minimum parking time (s)")
    parser.add_argument("--dwell-max", type=float, help="maximum parking time (s)")
    parser.add_argument("--duration", type=float, help="stop arrivals after this many seconds")
    parser.add_argument("--seed", type=int, help="random seed")
    parser.add_argument("--quiet", action="store_true", help="no periodic status lines")
    return parser.parse_args(argv)


def load_settings(args) -> SimulationSettings:
    """Environment settings with command-line overrides on top."""
    overrides = {
        "capacity": args.capacity,
        "total_cars": args.total_cars,
        "arrival_rate": args.arrival_rate,
        "dwell_min": args.dwell_min,
        "dwell_max": args.dwell_max,
        "seed": args.seed,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if args.unbounded:
        overrides["total_cars"] = None
    return SimulationSettings(**overrides)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        settings = load_settings(args)
    except (ValidationError, ParkingConfigError) as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"Invalid configuration: {e}")
        return 1

    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        simulation = Simulation(settings, report=not args.quiet)
    except ParkingConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    def signal_handler(sig, frame):
        """Handle Ctrl+C gracefully."""
        logger.info("🛑 Shutting down simulation...")
        simulation.request_stop()

    previous_int = signal.signal(signal.SIGINT, signal_handler)
    previous_term = signal.signal(signal.SIGTERM, signal_handler)

    logger.info("=" * 80)
    logger.info("🚗 PARKING LOT SIMULATOR")
    logger.info("=" * 80)
    logger.info("Press Ctrl+C to stop arrivals")
    logger.info("")

    try:
        summary = simulation.run(duration=args.duration)
    finally:
        signal.signal(signal.SIGINT, previous_int)
        signal.signal(signal.SIGTERM, previous_term)

    logger.info(summary.model_dump_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())
