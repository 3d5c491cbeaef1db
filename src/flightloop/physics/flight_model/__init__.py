"""Flight models.

The point-mass model is the default:
- base.py: constants, state containers and the IFlightModel interface
- point_mass.py: thrust, lift, drag and weight on a single mass
"""

from flightloop.physics.flight_model.base import (
    FlightForces,
    IFlightModel,
    KinematicState,
    PhysicalConstants,
)
from flightloop.physics.flight_model.point_mass import PointMassFlightModel

__all__ = [
    "FlightForces",
    "IFlightModel",
    "KinematicState",
    "PhysicalConstants",
    "PointMassFlightModel",
]
