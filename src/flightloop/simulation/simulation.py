"""Per-tick orchestration of the flight simulation.

The simulation context owns every piece of mutable simulation state and
runs one pass per frame:

    key state -> ControlState -> flight model -> integrator -> publisher

Typical usage example:
    from flightloop.simulation.simulation import SimulationContext

    sim = SimulationContext()
    while running:
        keyboard.process_events(pygame.event.get())
        snapshot = sim.tick(keyboard.get_key_state())
"""

from collections.abc import Mapping
from dataclasses import replace

from flightloop.core.clock import IClock, SimulationClock
from flightloop.core.input import ControlState, InputConfig
from flightloop.core.logging_system import get_logger
from flightloop.physics.flight_model.base import (
    IFlightModel,
    KinematicState,
    PhysicalConstants,
)
from flightloop.physics.flight_model.point_mass import PointMassFlightModel
from flightloop.physics.integrator import SemiImplicitEulerIntegrator
from flightloop.physics.vectors import Vector3
from flightloop.simulation.publisher import StateSnapshot, StateSnapshotPublisher

logger = get_logger(__name__)


class SimulationContext:  # pylint: disable=too-many-instance-attributes
    """Owns the simulation state and advances it one tick at a time.

    Examples:
        >>> from flightloop.core.clock import FixedStepClock
        >>> sim = SimulationContext(clock=FixedStepClock(1.0))
        >>> sim.controls.throttle = 100.0
        >>> snapshot = sim.tick({})
        >>> snapshot.frame
        1
    """

    def __init__(
        self,
        constants: PhysicalConstants | None = None,
        input_config: InputConfig | None = None,
        initial_state: KinematicState | None = None,
        flight_model: IFlightModel | None = None,
        clock: IClock | None = None,
        publisher: StateSnapshotPublisher | None = None,
    ) -> None:
        """Initialize the simulation.

        Args:
            constants: Aircraft constants (defaults if None).
            input_config: Key bindings and rates. Its throttle ceiling is
                aligned with ``constants.max_throttle``.
            initial_state: Starting kinematic state (at rest at the origin
                if None).
            flight_model: Force model (point-mass model if None).
            clock: Time step source (wall clock if None).
            publisher: Snapshot publisher (new one if None).
        """
        self.constants = constants if constants is not None else PhysicalConstants()

        config = input_config if input_config is not None else InputConfig()
        config = replace(config, max_throttle=self.constants.max_throttle)
        self.controls = ControlState(config=config)

        self.state = initial_state if initial_state is not None else KinematicState()
        self.flight_model = (
            flight_model if flight_model is not None else PointMassFlightModel(self.constants)
        )
        self.integrator = SemiImplicitEulerIntegrator()
        self.clock = clock if clock is not None else SimulationClock()
        self.publisher = publisher if publisher is not None else StateSnapshotPublisher()

        self.frame = 0
        self.elapsed = 0.0
        self.last_acceleration = Vector3.zero()

        # Orientation mirrors the controls from the start
        self.integrator.apply_attitude(self.state, self.controls)

        logger.info(
            "Simulation initialized: mass=%.0fkg wing_area=%.1fm² max_thrust=%.0fN",
            self.constants.mass,
            self.constants.wing_area,
            self.constants.max_thrust,
        )

    def tick(self, key_state: Mapping[int, bool]) -> StateSnapshot:
        """Run one frame using the clock's time step.

        Args:
            key_state: Held keys at the start of the frame.

        Returns:
            Snapshot published for this frame.
        """
        return self.step(self.clock.tick(), key_state)

    def step(self, dt: float, key_state: Mapping[int, bool] | None = None) -> StateSnapshot:
        """Run one frame with an explicit time step.

        Args:
            dt: Time step in seconds.
            key_state: Held keys (none held if None).

        Returns:
            Snapshot published for this frame.
        """
        # Negative steps are treated as zero
        dt = max(0.0, dt)
        self.controls.apply_input(key_state or {}, dt)

        acceleration = self.flight_model.compute_acceleration(self.controls, self.state)
        self.integrator.advance(self.state, acceleration, dt)
        self.integrator.apply_attitude(self.state, self.controls)

        self.frame += 1
        self.elapsed += dt
        self.last_acceleration = acceleration

        return self.publisher.publish(
            self.controls,
            self.state,
            frame=self.frame,
            elapsed=self.elapsed,
            dt=dt,
            acceleration=acceleration,
        )

    def run_for(
        self, duration: float, dt: float, key_state: Mapping[int, bool] | None = None
    ) -> StateSnapshot | None:
        """Step repeatedly with a fixed time step.

        Args:
            duration: Simulated seconds to run.
            dt: Time step in seconds (must be positive).
            key_state: Keys held for the whole run.

        Returns:
            Last snapshot, or None if no step was taken.

        Raises:
            ValueError: If dt is not positive.
        """
        if dt <= 0.0:
            raise ValueError(f"dt must be positive, got {dt}")

        snapshot = None
        steps = int(round(duration / dt))
        for _ in range(steps):
            snapshot = self.step(dt, key_state)
        return snapshot
