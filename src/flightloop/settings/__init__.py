"""Settings management for FlightLoop.

Simulation settings are read from YAML at startup; see
``config/simulation.yaml`` for the full set of keys.
"""

from flightloop.settings.simulation_settings import DEFAULT_MAX_DELTA, SimulationSettings

__all__ = ["DEFAULT_MAX_DELTA", "SimulationSettings"]
