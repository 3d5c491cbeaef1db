"""FlightLoop - Interactive flight dynamics simulator.

Main entry point for the application. Initializes Pygame, creates the game
window, builds the simulation from the settings file, and runs the main
loop.

Typical usage:
    uv run flightloop
    uv run python -m flightloop.main --config config/simulation.yaml
    uv run flightloop --headless-seconds 10 --telemetry flight.db
"""

import argparse
import sys
from dataclasses import asdict
from pathlib import Path

import pygame

from flightloop.core.clock import FixedStepClock
from flightloop.core.input import KeyboardState
from flightloop.core.logging_system import get_logger, initialize_logging
from flightloop.settings.simulation_settings import SimulationSettings
from flightloop.simulation.publisher import StateSnapshot
from flightloop.simulation.simulation import SimulationContext
from flightloop.telemetry import TelemetryLogger
from flightloop.ui.cockpit_display import CockpitDisplay
from flightloop.version import get_version

logger = get_logger(__name__)

DEFAULT_CONFIG = Path("config/simulation.yaml")
DEFAULT_LOG_CONFIG = Path("config/logging.yaml")
HEADLESS_STEP = 1.0 / 60.0


class FlightLoop:
    """Main application class.

    Owns the window, the keyboard state and the simulation context, and
    runs the frame loop until the window closes or Escape is pressed.
    """

    def __init__(self, settings: SimulationSettings, args: argparse.Namespace) -> None:
        """Initialize the application.

        Args:
            settings: Loaded simulation settings.
            args: Command line arguments.
        """
        self.fps = args.fps

        pygame.init()
        pygame.display.set_caption("FlightLoop - Flight Simulator")

        self.screen = pygame.display.set_mode((800, 600), pygame.RESIZABLE)
        self.frame_clock = pygame.time.Clock()
        self.running = True

        self.keyboard = KeyboardState(settings.input_config)
        self.simulation = settings.create_simulation()

        self.display = CockpitDisplay(self.screen, show_debug=args.debug)
        self.simulation.publisher.add_sink(self.display)

        self.telemetry = create_telemetry(args, settings)
        if self.telemetry:
            self.simulation.publisher.add_sink(self.telemetry)

        logger.info("FlightLoop initialized successfully")

    def run(self) -> None:
        """Run the main game loop."""
        logger.info("Starting main game loop")

        # Establish the clock baseline before the first real frame
        self.simulation.clock.tick()

        try:
            while self.running:
                self.frame_clock.tick(self.fps)
                self._process_events()
                self.simulation.tick(self.keyboard.get_key_state())
                self.display.render(self.frame_clock.get_fps())
                pygame.display.flip()
        finally:
            self._shutdown()

    def _process_events(self) -> None:
        """Process pygame events."""
        events = pygame.event.get()
        for event in events:
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.display.resize(self.screen)
            elif event.type == pygame.WINDOWFOCUSLOST:
                self.keyboard.release_all()

        self.keyboard.process_events(events)
        if self.keyboard.quit_requested:
            self.running = False

    def _shutdown(self) -> None:
        """Clean shutdown of all systems."""
        logger.info("FlightLoop shutting down...")
        if self.telemetry:
            self.telemetry.close()
        pygame.quit()
        logger.info("Shutdown complete")


def create_telemetry(
    args: argparse.Namespace, settings: SimulationSettings
) -> TelemetryLogger | None:
    """Create the flight recorder if requested on the command line."""
    if args.telemetry is None:
        return None

    telemetry = TelemetryLogger(args.telemetry or None)
    for name, value in asdict(settings.constants).items():
        telemetry.set_metadata(name, value)
    return telemetry


def run_headless(
    settings: SimulationSettings, args: argparse.Namespace
) -> StateSnapshot | None:
    """Run the simulation without a window for a fixed simulated time.

    Args:
        settings: Loaded simulation settings.
        args: Command line arguments (``headless_seconds``, ``telemetry``).

    Returns:
        The final snapshot.
    """
    simulation: SimulationContext = settings.create_simulation(clock=FixedStepClock(HEADLESS_STEP))
    simulation.controls.throttle = args.throttle
    simulation.controls.clamp_all()

    telemetry = create_telemetry(args, settings)
    if telemetry:
        simulation.publisher.add_sink(telemetry)

    try:
        snapshot = simulation.run_for(args.headless_seconds, HEADLESS_STEP)
    finally:
        if telemetry:
            telemetry.close()

    if snapshot is not None:
        fields = snapshot.display_fields()
        print(" ".join(f"{name}={value}" for name, value in fields.items()))
    return snapshot


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments to parse (defaults to ``sys.argv[1:]``).

    Returns:
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(description="FlightLoop - Interactive flight simulator")

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {get_version()}",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help="Simulation settings YAML file (default: %(default)s)",
    )

    parser.add_argument(
        "--log-config",
        type=Path,
        default=DEFAULT_LOG_CONFIG,
        help="Logging configuration YAML file (default: %(default)s)",
    )

    parser.add_argument(
        "--fps",
        type=int,
        default=60,
        help="Frame rate cap for the window (default: %(default)s)",
    )

    parser.add_argument(
        "--max-delta",
        type=float,
        help="Override the largest physics step in seconds",
    )

    parser.add_argument(
        "--telemetry",
        nargs="?",
        const="",
        default=None,
        help="Record snapshots to a SQLite database (optional path)",
    )

    parser.add_argument(
        "--headless-seconds",
        type=float,
        help="Run without a window for this many simulated seconds",
    )

    parser.add_argument(
        "--throttle",
        type=float,
        default=0.0,
        help="Initial throttle for headless runs (default: %(default)s)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show frame diagnostics on screen",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success).
    """
    args = parse_args(argv)

    initialize_logging(str(args.log_config), use_platform_dir=True)
    logger.info(f"FlightLoop {get_version()} starting up...")

    try:
        settings = SimulationSettings.load(args.config)
        if args.max_delta is not None:
            if args.max_delta <= 0.0:
                raise ValueError(f"--max-delta must be positive, got {args.max_delta}")
            settings.max_delta = args.max_delta

        if args.headless_seconds is not None and args.headless_seconds <= 0.0:
            raise ValueError(
                f"--headless-seconds must be positive, got {args.headless_seconds}"
            )

        if args.headless_seconds is not None:
            run_headless(settings, args)
        else:
            FlightLoop(settings, args).run()
        return 0
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.exception(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
