"""State snapshots for the presentation layer.

Each tick the publisher copies the control and kinematic state into an
immutable snapshot and hands it to every registered sink (cockpit display,
flight recorder). Sinks never see the live state objects.

Typical usage example:
    from flightloop.simulation.publisher import StateSnapshotPublisher

    publisher = StateSnapshotPublisher()
    publisher.add_sink(display)
    snapshot = publisher.publish(controls, state)
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from flightloop.core.input import ControlState
from flightloop.core.logging_system import get_logger
from flightloop.physics.flight_model.base import KinematicState
from flightloop.physics.vectors import Vector3

logger = get_logger(__name__)


@dataclass(frozen=True)
class StateSnapshot:
    """Point-in-time view of the aircraft for display.

    Attributes:
        throttle: Throttle level (0 to max throttle).
        pitch_deg: Pitch angle in degrees.
        roll_deg: Roll angle in degrees.
        yaw_deg: Yaw angle in degrees.
        airspeed: Speed through the air (m/s).
        altitude: Vertical position (world Y).
        frame: Tick counter at publication.
        elapsed: Simulated seconds since start.
        dt: Time step of the tick that produced this snapshot.
        position: Position components.
        velocity: Velocity components.
        acceleration: Acceleration components for the tick.
    """

    throttle: float
    pitch_deg: float
    roll_deg: float
    yaw_deg: float
    airspeed: float
    altitude: float
    frame: int = 0
    elapsed: float = 0.0
    dt: float = 0.0
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    velocity: tuple[float, float, float] = (0.0, 0.0, 0.0)
    acceleration: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def display_fields(self) -> dict[str, str]:
        """Readouts formatted with one decimal place."""
        return {
            "throttle": f"{self.throttle:.1f}",
            "pitch": f"{self.pitch_deg:.1f}",
            "roll": f"{self.roll_deg:.1f}",
            "yaw": f"{self.yaw_deg:.1f}",
            "airspeed": f"{self.airspeed:.1f}",
            "altitude": f"{self.altitude:.1f}",
        }


class ISnapshotSink(ABC):
    """Consumer of published snapshots."""

    @abstractmethod
    def present(self, snapshot: StateSnapshot) -> None:
        """Receive the snapshot for the current tick."""


class StateSnapshotPublisher:
    """Builds snapshots and fans them out to sinks."""

    def __init__(self) -> None:
        self._sinks: list[ISnapshotSink] = []
        self.last_snapshot: StateSnapshot | None = None

    def add_sink(self, sink: ISnapshotSink) -> None:
        """Register a sink; it receives every later snapshot."""
        self._sinks.append(sink)
        logger.debug(f"Registered snapshot sink {type(sink).__name__}")

    def remove_sink(self, sink: ISnapshotSink) -> None:
        """Unregister a sink (no-op if not registered)."""
        if sink in self._sinks:
            self._sinks.remove(sink)

    @property
    def sinks(self) -> list[ISnapshotSink]:
        return list(self._sinks)

    def build(
        self,
        controls: ControlState,
        state: KinematicState,
        frame: int = 0,
        elapsed: float = 0.0,
        dt: float = 0.0,
        acceleration: Vector3 | None = None,
    ) -> StateSnapshot:
        """Create a snapshot without notifying sinks.

        Args:
            controls: Current control inputs.
            state: Current kinematic state.
            frame: Tick counter.
            elapsed: Simulated time in seconds.
            dt: Step of the current tick.
            acceleration: Acceleration of the current tick.

        Returns:
            New immutable snapshot.
        """
        return StateSnapshot(
            throttle=controls.throttle,
            pitch_deg=math.degrees(controls.pitch),
            roll_deg=math.degrees(controls.roll),
            yaw_deg=math.degrees(controls.yaw),
            airspeed=state.get_airspeed(),
            altitude=state.get_altitude(),
            frame=frame,
            elapsed=elapsed,
            dt=dt,
            position=state.position.to_tuple(),
            velocity=state.velocity.to_tuple(),
            acceleration=acceleration.to_tuple() if acceleration is not None else (0.0, 0.0, 0.0),
        )

    def publish(
        self,
        controls: ControlState,
        state: KinematicState,
        frame: int = 0,
        elapsed: float = 0.0,
        dt: float = 0.0,
        acceleration: Vector3 | None = None,
    ) -> StateSnapshot:
        """Create a snapshot and deliver it to every sink.

        A sink that raises is logged and skipped; the remaining sinks still
        receive the snapshot.

        Returns:
            The published snapshot.
        """
        snapshot = self.build(controls, state, frame, elapsed, dt, acceleration)
        self.last_snapshot = snapshot

        for sink in self._sinks:
            try:
                sink.present(snapshot)
            except Exception:  # pylint: disable=broad-exception-caught
                logger.exception(f"Snapshot sink {type(sink).__name__} failed")

        return snapshot
