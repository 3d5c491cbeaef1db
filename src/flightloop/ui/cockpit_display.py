"""Cockpit readout display.

Draws the latest published snapshot as text instruments: throttle,
attitude, airspeed and altitude. The display only ever sees snapshots; it
has no access to the live simulation state.
"""

import pygame

from flightloop.core.logging_system import get_logger
from flightloop.simulation.publisher import ISnapshotSink, StateSnapshot

logger = get_logger(__name__)

BACKGROUND = (0, 0, 0)
TITLE_COLOR = (255, 255, 255)
INSTRUMENT_COLOR = (0, 255, 0)
CONTROL_COLOR = (200, 200, 0)
HELP_COLOR = (150, 150, 150)

INSTRUCTIONS = (
    "Controls:",
    "W/S: Pitch down/up",
    "A/D: Roll left/right",
    "Q/E: Yaw left/right",
    "Up/Down: Throttle",
    "Esc: Quit",
)


class CockpitDisplay(ISnapshotSink):
    """Renders snapshots onto a pygame surface."""

    def __init__(self, screen: pygame.Surface, show_debug: bool = False) -> None:
        """Initialize the display.

        Args:
            screen: Surface to draw on (usually the display surface).
            show_debug: Whether to show position and frame diagnostics.
        """
        self.screen = screen
        self.show_debug = show_debug
        self.font = pygame.font.SysFont("monospace", 14)
        self.large_font = pygame.font.SysFont("monospace", 28, bold=True)
        self.snapshot: StateSnapshot | None = None

    def present(self, snapshot: StateSnapshot) -> None:
        self.snapshot = snapshot

    def resize(self, screen: pygame.Surface) -> None:
        """Switch to a new surface after the window was resized."""
        self.screen = screen
        logger.debug(f"Cockpit display resized to {screen.get_width()}x{screen.get_height()}")

    def render(self, fps: float | None = None) -> None:
        """Draw the current frame."""
        self.screen.fill(BACKGROUND)

        title = self.large_font.render("FlightLoop", True, TITLE_COLOR)
        self.screen.blit(title, title.get_rect(center=(self.screen.get_width() // 2, 40)))

        if self.snapshot is not None:
            self._render_instruments(self.snapshot)
            if self.show_debug:
                self._render_debug_info(self.snapshot, fps)

        self._render_instructions()

    def _render_instruments(self, snapshot: StateSnapshot) -> None:
        """Primary readouts in the center of the screen."""
        fields = snapshot.display_fields()
        center_x = self.screen.get_width() // 2
        y_offset = self.screen.get_height() // 2 - 80

        instruments = [
            f"AIRSPEED: {fields['airspeed']:>8} m/s",
            f"ALTITUDE: {fields['altitude']:>8} m",
        ]
        for line in instruments:
            text = self.large_font.render(line, True, INSTRUMENT_COLOR)
            self.screen.blit(text, text.get_rect(center=(center_x, y_offset)))
            y_offset += 40

        controls = [
            f"Throttle: {fields['throttle']:>6}",
            f"Pitch: {fields['pitch']:>6}°  Roll: {fields['roll']:>6}°  Yaw: {fields['yaw']:>7}°",
        ]
        y_offset += 10
        for line in controls:
            text = self.font.render(line, True, CONTROL_COLOR)
            self.screen.blit(text, text.get_rect(center=(center_x, y_offset)))
            y_offset += 20

    def _render_debug_info(self, snapshot: StateSnapshot, fps: float | None) -> None:
        px, py, pz = snapshot.position
        lines = [
            f"FPS: {fps:.1f}" if fps is not None else "FPS: -",
            f"Frame: {snapshot.frame}",
            f"Time: {snapshot.elapsed:.1f}s",
            f"Pos: ({px:.1f}, {py:.1f}, {pz:.1f})",
        ]
        y_offset = 10
        for line in lines:
            text = self.font.render(line, True, INSTRUMENT_COLOR)
            self.screen.blit(text, (10, y_offset))
            y_offset += 16

    def _render_instructions(self) -> None:
        y_offset = self.screen.get_height() - len(INSTRUCTIONS) * 16 - 10
        x_offset = self.screen.get_width() - 200
        for line in INSTRUCTIONS:
            text = self.font.render(line, True, HELP_COLOR)
            self.screen.blit(text, (x_offset, y_offset))
            y_offset += 16
