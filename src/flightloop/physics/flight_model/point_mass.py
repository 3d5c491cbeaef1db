"""Point-mass flight model with coefficient-based aerodynamics.

The aircraft is treated as a single mass acted on by thrust, lift, drag
and weight. Attitude comes straight from the controls; there are no
moments, inertia or angular rates.

Physics model:
- Lift = 0.5 * ρ * v² * S * CL, with CL = CLα * AOA, along world up
- Drag = 0.5 * ρ * v² * S * CD, opposite the velocity
- Thrust = (throttle / max_throttle) * max_thrust, along the nose
- Weight = mass * gravity, along world down

Two simplifications are intentional and kept as-is: the angle of attack
equals the pitch angle (climb angle is ignored), and lift acts along
world up rather than the body up axis. The linear lift curve has no stall.

Typical usage example:
    from flightloop.physics.flight_model.point_mass import PointMassFlightModel

    model = PointMassFlightModel(PhysicalConstants(mass=1000.0))
    acceleration = model.compute_acceleration(controls, state)
"""

import math

from flightloop.core.input import ControlState
from flightloop.core.logging_system import get_logger
from flightloop.physics.flight_model.base import (
    FlightForces,
    IFlightModel,
    KinematicState,
)
from flightloop.physics.vectors import Vector3

logger = get_logger(__name__)

RADIANS_TO_DEGREES = 180.0 / math.pi


class PointMassFlightModel(IFlightModel):
    """Translational flight model driven by pitch, yaw and throttle.

    Examples:
        >>> model = PointMassFlightModel()
        >>> controls = ControlState(throttle=100.0)
        >>> accel = model.compute_acceleration(controls, KinematicState())
        >>> round(accel.z, 2)
        -15.0
    """

    def forward_vector(self, state: KinematicState) -> Vector3:
        """Unit vector along the aircraft nose.

        Args:
            state: State holding the current Euler angles.

        Returns:
            (0, 0, -1) rotated by pitch, yaw and roll.
        """
        return Vector3.forward().rotated_by_euler(state.pitch, state.yaw, state.roll)

    def angle_of_attack(self, controls: ControlState) -> float:
        """Angle of attack in radians, approximated by the commanded pitch."""
        return controls.pitch

    def lift_coefficient(self, angle_of_attack: float) -> float:
        """Linear lift coefficient for the given angle of attack."""
        return self.constants.lift_coefficient_slope * angle_of_attack

    def dynamic_pressure(self, airspeed: float) -> float:
        """q = 0.5 * ρ * v²."""
        return 0.5 * self.constants.air_density * airspeed * airspeed

    def compute_forces(self, controls: ControlState, state: KinematicState) -> FlightForces:
        """Compute thrust, lift, drag and weight for the current tick.

        Thrust points along the state's orientation, which the integrator
        copies from the controls at the end of each tick; lift uses the
        commanded pitch directly. Neither argument is modified.

        Args:
            controls: Current clamped control inputs.
            state: Current kinematic state.

        Returns:
            Force breakdown with ``total`` filled in.
        """
        c = self.constants
        forces = FlightForces()

        airspeed = state.get_airspeed()
        q = self.dynamic_pressure(airspeed)

        # --- Lift ---
        aoa = self.angle_of_attack(controls)
        cl = self.lift_coefficient(aoa)
        forces.lift = Vector3(0.0, q * c.wing_area * cl, 0.0)

        # --- Drag ---
        # No direction to oppose when stationary
        if airspeed > 0.0:
            drag_magnitude = q * c.wing_area * c.drag_coefficient
            forces.drag = state.velocity.normalized() * (-drag_magnitude)

        # --- Thrust ---
        thrust_magnitude = (controls.throttle / c.max_throttle) * c.max_thrust
        forces.thrust = self.forward_vector(state) * thrust_magnitude

        # --- Weight ---
        forces.weight = Vector3(0.0, -c.mass * c.gravity, 0.0)

        forces.calculate_total()

        logger.debug(
            "Forces: v=%.1fm/s AOA=%.1f° CL=%.3f lift=%s drag=%s thrust=%s total=%s",
            airspeed,
            aoa * RADIANS_TO_DEGREES,
            cl,
            forces.lift,
            forces.drag,
            forces.thrust,
            forces.total,
        )
        return forces
