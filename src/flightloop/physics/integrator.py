"""Semi-implicit Euler integration of the kinematic state.

Velocity is updated first and the updated velocity is then used to move
the position. Orientation is not integrated: it is copied from the
controls every tick.
"""

from flightloop.core.input import ControlState
from flightloop.core.logging_system import get_logger
from flightloop.physics.flight_model.base import KinematicState
from flightloop.physics.vectors import Vector3

logger = get_logger(__name__)


class SemiImplicitEulerIntegrator:
    """Advances position and velocity from an acceleration.

    Examples:
        >>> state = KinematicState(position=Vector3(0.0, 100.0, 0.0))
        >>> SemiImplicitEulerIntegrator().advance(state, Vector3(0.0, -10.0, 0.0), 1.0)
        >>> state.position.y
        90.0
    """

    def advance(self, state: KinematicState, acceleration: Vector3, dt: float) -> None:
        """Advance the state by one time step.

        Args:
            state: State to update in place.
            acceleration: Net acceleration (m/s²).
            dt: Time step in seconds. Zero is a no-op; negative values are
                treated as zero.
        """
        if dt < 0.0:
            logger.debug("Ignoring negative time step %.4fs", dt)
            return
        if dt == 0.0:
            return

        # Order matters: position uses the updated velocity
        state.velocity = state.velocity + acceleration * dt
        state.position = state.position + state.velocity * dt

    def apply_attitude(self, state: KinematicState, controls: ControlState) -> None:
        """Copy the clamped control angles into the orientation.

        Args:
            state: State to update in place.
            controls: Current control inputs.
        """
        state.pitch = controls.pitch
        state.roll = controls.roll
        state.yaw = controls.yaw
