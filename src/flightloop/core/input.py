"""Keyboard input and operator control state.

Key events are tracked as persistent pressed/released flags between
frames. Once per tick the flags are turned into rate-based control
changes: holding a key keeps moving the matching angle or the throttle
until the key is released or the value hits its limit.

Typical usage example:
    from flightloop.core.input import ControlState, InputConfig, KeyboardState

    config = InputConfig()
    keyboard = KeyboardState()
    controls = ControlState(config=config)

    # In game loop
    keyboard.process_events(pygame_events)
    controls.apply_input(keyboard.get_key_state(), dt)
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

import pygame  # pylint: disable=no-member

from flightloop.core.logging_system import get_logger

logger = get_logger(__name__)

# Pitch and roll limit (radians)
MAX_BANK_PITCH = math.pi / 4


class InputAction(Enum):
    """Input actions that can be bound to keys.

    Flight actions come in opposing pairs that add and subtract the same
    rate constant.
    """

    PITCH_UP = "pitch_up"
    PITCH_DOWN = "pitch_down"
    ROLL_LEFT = "roll_left"
    ROLL_RIGHT = "roll_right"
    YAW_LEFT = "yaw_left"
    YAW_RIGHT = "yaw_right"
    THROTTLE_INCREASE = "throttle_increase"
    THROTTLE_DECREASE = "throttle_decrease"

    # Application
    QUIT = "quit"


def key_code_from_name(name: str) -> int:
    """Resolve a key name such as ``"w"`` or ``"up"`` to a pygame key code.

    Args:
        name: Key name; letters are case-insensitive, special keys use the
            pygame constant suffix (``up``, ``escape``, ``space``...).

    Returns:
        Pygame key constant.

    Raises:
        ValueError: If the name does not match a pygame key.
    """
    for candidate in (f"K_{name}", f"K_{name.lower()}", f"K_{name.upper()}"):
        code = getattr(pygame, candidate, None)
        if isinstance(code, int):
            return code
    raise ValueError(f"Unknown key name: {name!r}")


@dataclass
class InputConfig:
    """Configuration for the control mapping.

    Attributes:
        keyboard_bindings: Map of pygame key constants to InputAction.
        attitude_rate: Pitch/roll/yaw change while a key is held (rad/s).
        throttle_rate: Throttle change while a key is held (units/s).
        max_throttle: Throttle ceiling.
    """

    keyboard_bindings: dict[int, InputAction] = field(default_factory=dict)
    attitude_rate: float = 0.5
    throttle_rate: float = 30.0
    max_throttle: float = 100.0

    def __post_init__(self) -> None:
        """Initialize default key bindings if not provided."""
        if not self.keyboard_bindings:
            self.keyboard_bindings = self._get_default_bindings()

    def _get_default_bindings(self) -> dict[int, InputAction]:
        """Get default keyboard bindings.

        Returns:
            Dictionary mapping pygame keys to input actions.
        """
        return {
            pygame.K_w: InputAction.PITCH_DOWN,
            pygame.K_s: InputAction.PITCH_UP,
            pygame.K_a: InputAction.ROLL_LEFT,
            pygame.K_d: InputAction.ROLL_RIGHT,
            pygame.K_q: InputAction.YAW_LEFT,
            pygame.K_e: InputAction.YAW_RIGHT,
            pygame.K_UP: InputAction.THROTTLE_INCREASE,
            pygame.K_DOWN: InputAction.THROTTLE_DECREASE,
            pygame.K_ESCAPE: InputAction.QUIT,
        }

    @classmethod
    def from_names(
        cls, bindings: Mapping[str, Iterable[str]], **kwargs: float
    ) -> "InputConfig":
        """Build a configuration from action names and key names.

        Args:
            bindings: Map of action value (e.g. ``"pitch_up"``) to key names.
            **kwargs: Rate overrides passed to the constructor.

        Returns:
            Input configuration. Actions that are not listed keep their
            default keys.

        Raises:
            ValueError: If an action or key name is unknown.
        """
        config = cls(**kwargs)
        overridden: dict[int, InputAction] = {}
        for action_name, key_names in bindings.items():
            try:
                action = InputAction(action_name)
            except ValueError:
                raise ValueError(f"Unknown input action: {action_name!r}") from None
            for key_name in key_names:
                overridden[key_code_from_name(str(key_name))] = action

        rebound = set(overridden.values())
        merged = {k: a for k, a in config.keyboard_bindings.items() if a not in rebound}
        merged.update(overridden)
        config.keyboard_bindings = merged
        return config

    def keys_for(self, action: InputAction) -> list[int]:
        """Keys currently bound to an action."""
        return [key for key, bound in self.keyboard_bindings.items() if bound == action]


@dataclass
class ControlState:
    """Current operator control inputs.

    Angles are in radians. Pitch and roll stay within ±π/4; yaw is a free
    heading and is never clamped or wrapped.

    Attributes:
        pitch: Pitch command angle (radians).
        roll: Roll command angle (radians).
        yaw: Yaw command angle (radians).
        throttle: Throttle level (0 to ``config.max_throttle``).
        config: Key bindings and rates.
    """

    pitch: float = 0.0
    roll: float = 0.0
    yaw: float = 0.0
    throttle: float = 0.0
    config: InputConfig = field(default_factory=InputConfig, repr=False)

    def __post_init__(self) -> None:
        self.clamp_all()

    def clamp_all(self) -> None:
        """Clamp pitch, roll and throttle to their valid ranges."""
        self.pitch = max(-MAX_BANK_PITCH, min(MAX_BANK_PITCH, self.pitch))
        self.roll = max(-MAX_BANK_PITCH, min(MAX_BANK_PITCH, self.roll))
        self.throttle = max(0.0, min(self.config.max_throttle, self.throttle))

    def active_actions(self, key_state: Mapping[int, bool]) -> set[InputAction]:
        """Actions whose bound key is currently pressed.

        Unbound keys are ignored.
        """
        bindings = self.config.keyboard_bindings
        return {bindings[key] for key, pressed in key_state.items() if pressed and key in bindings}

    def apply_input(self, key_state: Mapping[int, bool], dt: float) -> None:
        """Apply held keys for one tick.

        Args:
            key_state: Map of pygame key code to pressed flag.
            dt: Time since the previous tick in seconds.
        """
        actions = self.active_actions(key_state)
        attitude_step = self.config.attitude_rate * dt
        throttle_step = self.config.throttle_rate * dt

        if InputAction.PITCH_DOWN in actions:
            self.pitch -= attitude_step
        if InputAction.PITCH_UP in actions:
            self.pitch += attitude_step
        if InputAction.ROLL_LEFT in actions:
            self.roll += attitude_step
        if InputAction.ROLL_RIGHT in actions:
            self.roll -= attitude_step
        if InputAction.YAW_LEFT in actions:
            self.yaw += attitude_step
        if InputAction.YAW_RIGHT in actions:
            self.yaw -= attitude_step
        # Throttle saturates after each key, increase before decrease
        if InputAction.THROTTLE_INCREASE in actions:
            self.throttle = min(self.config.max_throttle, self.throttle + throttle_step)
        if InputAction.THROTTLE_DECREASE in actions:
            self.throttle = max(0.0, self.throttle - throttle_step)

        self.clamp_all()


class KeyboardState:
    """Tracks which keys are held between ticks.

    Each KEYDOWN/KEYUP overwrites the flag for its key; several presses of
    the same key between two ticks collapse into the last one.

    Examples:
        >>> keyboard = KeyboardState()
        >>> keyboard.set_key(pygame.K_w, True)
        >>> keyboard.is_pressed(pygame.K_w)
        True
    """

    def __init__(self, config: InputConfig | None = None) -> None:
        """Initialize keyboard state.

        Args:
            config: Input configuration used to resolve application actions.
        """
        self.config = config if config is not None else InputConfig()
        self._keys: dict[int, bool] = {}
        self.quit_requested = False

    def process_events(self, events: Iterable[pygame.event.Event]) -> None:
        """Process pygame events.

        Args:
            events: Events from the pygame event queue.
        """
        for event in events:
            if event.type == pygame.KEYDOWN:
                self._handle_key_down(event.key)
            elif event.type == pygame.KEYUP:
                self.set_key(event.key, False)

    def _handle_key_down(self, key: int) -> None:
        action = self.config.keyboard_bindings.get(key)
        if action == InputAction.QUIT:
            logger.info("Quit requested from keyboard")
            self.quit_requested = True
            return
        if action is None:
            logger.debug(f"Key {key} not bound")
        self.set_key(key, True)

    def set_key(self, key: int, pressed: bool) -> None:
        """Set the held flag for a key (last writer wins)."""
        self._keys[key] = pressed

    def is_pressed(self, key: int) -> bool:
        """Whether a key is currently held."""
        return self._keys.get(key, False)

    def get_key_state(self) -> dict[int, bool]:
        """Snapshot of the held flags."""
        return dict(self._keys)

    def release_all(self) -> None:
        """Clear every held key (e.g. when the window loses focus)."""
        self._keys.clear()
