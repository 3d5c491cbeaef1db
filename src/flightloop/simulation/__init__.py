"""Simulation loop and snapshot publishing."""

from flightloop.simulation.publisher import ISnapshotSink, StateSnapshot, StateSnapshotPublisher
from flightloop.simulation.simulation import SimulationContext

__all__ = ["ISnapshotSink", "SimulationContext", "StateSnapshot", "StateSnapshotPublisher"]
