"""Simulation settings loaded from YAML.

Settings cover the aircraft constants, control rates and key bindings,
the clock step limit and the initial kinematic state. Every key is
optional; anything left out keeps its default.

Typical usage:
    from flightloop.settings.simulation_settings import SimulationSettings

    settings = SimulationSettings.load("config/simulation.yaml")
    sim = settings.create_simulation()
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from flightloop.core.clock import IClock, SimulationClock
from flightloop.core.input import InputConfig
from flightloop.core.logging_system import get_logger
from flightloop.physics.flight_model.base import KinematicState, PhysicalConstants
from flightloop.physics.vectors import Vector3
from flightloop.simulation.simulation import SimulationContext

logger = get_logger(__name__)

DEFAULT_MAX_DELTA = 0.1


def _vector_from(value: Any, name: str) -> Vector3:
    """Parse a three-element list into a vector."""
    if value is None:
        return Vector3.zero()
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError(f"{name} must be a list of three numbers, got {value!r}")
    return Vector3(*(float(v) for v in value))


@dataclass
class SimulationSettings:
    """Complete simulation configuration.

    Attributes:
        constants: Aircraft and environment constants.
        input_config: Key bindings and control rates.
        max_delta: Clock step limit in seconds (None disables clamping).
        initial_position: Starting position.
        initial_velocity: Starting velocity.
    """

    constants: PhysicalConstants = field(default_factory=PhysicalConstants)
    input_config: InputConfig = field(default_factory=InputConfig)
    max_delta: float | None = DEFAULT_MAX_DELTA
    initial_position: Vector3 = field(default_factory=Vector3.zero)
    initial_velocity: Vector3 = field(default_factory=Vector3.zero)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SimulationSettings":
        """Create settings from a parsed configuration document.

        Args:
            data: Mapping with optional ``physics``, ``controls``, ``clock``
                and ``initial_state`` sections.

        Raises:
            ValueError: If a section contains invalid values.
        """
        constants = PhysicalConstants.from_dict(data.get("physics") or {})

        controls = data.get("controls") or {}
        rates = {}
        if "attitude_rate" in controls:
            rates["attitude_rate"] = float(controls["attitude_rate"])
        if "throttle_rate" in controls:
            rates["throttle_rate"] = float(controls["throttle_rate"])
        input_config = InputConfig.from_names(
            controls.get("bindings") or {},
            max_throttle=constants.max_throttle,
            **rates,
        )

        clock = data.get("clock") or {}
        max_delta = clock.get("max_delta", DEFAULT_MAX_DELTA)
        if max_delta is not None:
            max_delta = float(max_delta)
            if max_delta <= 0.0:
                raise ValueError(f"clock.max_delta must be positive, got {max_delta}")

        initial = data.get("initial_state") or {}

        return cls(
            constants=constants,
            input_config=input_config,
            max_delta=max_delta,
            initial_position=_vector_from(initial.get("position"), "initial_state.position"),
            initial_velocity=_vector_from(initial.get("velocity"), "initial_state.velocity"),
        )

    @classmethod
    def load(cls, path: str | Path | None) -> "SimulationSettings":
        """Load settings from a YAML file.

        Args:
            path: File to read. None or a missing file gives defaults.

        Returns:
            Loaded settings.

        Raises:
            ValueError: If the file contents are invalid.
        """
        if path is None:
            return cls()

        path = Path(path)
        if not path.exists():
            logger.warning(f"Settings file not found: {path}, using defaults")
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {path} must contain a mapping")

        settings = cls.from_dict(data)
        logger.info(f"Loaded simulation settings from {path}")
        return settings

    def create_clock(self) -> IClock:
        """Wall clock honoring the configured step limit."""
        return SimulationClock(max_delta=self.max_delta)

    def create_initial_state(self) -> KinematicState:
        """Fresh kinematic state at the configured start point."""
        return KinematicState(
            position=self.initial_position.copy(),
            velocity=self.initial_velocity.copy(),
        )

    def create_simulation(self, clock: IClock | None = None) -> SimulationContext:
        """Build a simulation context from these settings.

        Args:
            clock: Clock override (wall clock with ``max_delta`` if None).
        """
        return SimulationContext(
            constants=self.constants,
            input_config=self.input_config,
            initial_state=self.create_initial_state(),
            clock=clock if clock is not None else self.create_clock(),
        )
