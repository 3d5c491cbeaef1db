"""Abstract flight model interface and the data it works on.

This module defines the constants, state and force containers shared by
the flight model, the integrator and the snapshot publisher, plus the
interface every flight model implements.

Typical usage example:
    from flightloop.physics.flight_model.base import IFlightModel

    class MyFlightModel(IFlightModel):
        def compute_acceleration(self, controls, state) -> Vector3:
            # Sum the forces and divide by mass
            pass
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from flightloop.physics.vectors import Vector3

if TYPE_CHECKING:
    from flightloop.core.input import ControlState


@dataclass(frozen=True)
class PhysicalConstants:
    """Immutable aircraft and environment constants.

    Defaults describe a light single-engine aircraft at sea level.

    Attributes:
        mass: Aircraft mass (kg).
        wing_area: Reference wing area (m²).
        air_density: Air density (kg/m³).
        drag_coefficient: Drag coefficient (dimensionless).
        lift_coefficient_slope: Lift curve slope (per radian).
        gravity: Gravitational acceleration (m/s²).
        max_thrust: Thrust at full throttle (N).
        max_throttle: Throttle ceiling (dimensionless).

    Raises:
        ValueError: If a constant is outside its physical range.
    """

    mass: float = 1000.0
    wing_area: float = 16.2
    air_density: float = 1.225
    drag_coefficient: float = 0.03
    lift_coefficient_slope: float = 5.7
    gravity: float = 9.81
    max_thrust: float = 15000.0
    max_throttle: float = 100.0

    def __post_init__(self) -> None:
        """Validate ranges."""
        for name in ("mass", "wing_area", "max_thrust", "max_throttle"):
            if getattr(self, name) <= 0.0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ("air_density", "drag_coefficient", "gravity"):
            if getattr(self, name) < 0.0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    @classmethod
    def from_dict(cls, data: dict) -> "PhysicalConstants":
        """Create constants from a configuration mapping.

        Args:
            data: Mapping of field name to value. Missing keys use defaults.

        Raises:
            ValueError: If an unknown key is present or a value is invalid.
        """
        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown physics keys: {', '.join(sorted(unknown))}")
        return cls(**{key: float(value) for key, value in data.items()})


@dataclass
class KinematicState:
    """Translational state plus the attitude copied from the controls.

    Attributes:
        position: Position in world space (world units).
        velocity: Velocity (world units/s).
        pitch: Pitch angle (radians).
        roll: Roll angle (radians).
        yaw: Yaw angle (radians).
    """

    position: Vector3 = field(default_factory=Vector3.zero)
    velocity: Vector3 = field(default_factory=Vector3.zero)
    pitch: float = 0.0
    roll: float = 0.0
    yaw: float = 0.0

    def get_airspeed(self) -> float:
        """Magnitude of the velocity (m/s)."""
        return self.velocity.magnitude()

    def get_altitude(self) -> float:
        """Vertical component of the position."""
        return self.position.y


@dataclass
class FlightForces:
    """Forces acting on the aircraft for one tick.

    Attributes:
        lift: Lift force vector (N).
        drag: Drag force vector (N).
        thrust: Thrust force vector (N).
        weight: Weight force vector (N).
        total: Sum of all forces (N).
    """

    lift: Vector3 = field(default_factory=Vector3.zero)
    drag: Vector3 = field(default_factory=Vector3.zero)
    thrust: Vector3 = field(default_factory=Vector3.zero)
    weight: Vector3 = field(default_factory=Vector3.zero)
    total: Vector3 = field(default_factory=Vector3.zero)

    def calculate_total(self) -> None:
        """Recompute ``total`` from the components."""
        self.total = self.lift + self.drag + self.thrust + self.weight


class IFlightModel(ABC):
    """Abstract interface for flight models.

    A flight model turns control inputs and the current kinematic state
    into an acceleration. It must not mutate either argument; state
    advancement belongs to the integrator.
    """

    def __init__(self, constants: PhysicalConstants | None = None) -> None:
        self.constants = constants if constants is not None else PhysicalConstants()

    @abstractmethod
    def compute_forces(self, controls: "ControlState", state: KinematicState) -> FlightForces:
        """Compute the individual forces for the current tick.

        Args:
            controls: Current clamped control inputs.
            state: Current kinematic state.

        Returns:
            Force breakdown with ``total`` filled in.
        """

    def compute_acceleration(self, controls: "ControlState", state: KinematicState) -> Vector3:
        """Net acceleration for the current tick (a = F / m).

        Args:
            controls: Current clamped control inputs.
            state: Current kinematic state.

        Returns:
            Acceleration vector (m/s²).
        """
        return self.compute_forces(controls, state).total / self.constants.mass
