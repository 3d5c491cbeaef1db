"""Tests for the semi-implicit Euler integrator."""

import pytest

from flightloop.core.input import ControlState
from flightloop.physics.flight_model.base import KinematicState
from flightloop.physics.integrator import SemiImplicitEulerIntegrator
from flightloop.physics.vectors import Vector3


@pytest.fixture
def integrator() -> SemiImplicitEulerIntegrator:
    """Create an integrator."""
    return SemiImplicitEulerIntegrator()


class TestAdvance:
    """Test position and velocity integration."""

    def test_velocity_updated_before_position(
        self, integrator: SemiImplicitEulerIntegrator
    ) -> None:
        """Test position uses the updated velocity (90, not 100)."""
        state = KinematicState(position=Vector3(0.0, 100.0, 0.0))

        integrator.advance(state, Vector3(0.0, -10.0, 0.0), 1.0)

        assert state.velocity.to_tuple() == pytest.approx((0.0, -10.0, 0.0))
        assert state.position.to_tuple() == pytest.approx((0.0, 90.0, 0.0))

    def test_zero_dt_is_noop(self, integrator: SemiImplicitEulerIntegrator) -> None:
        """Test a zero time step leaves position and velocity unchanged."""
        state = KinematicState(position=Vector3(1.0, 2.0, 3.0), velocity=Vector3(4.0, 5.0, 6.0))

        integrator.advance(state, Vector3(100.0, -100.0, 50.0), 0.0)

        assert state.position == Vector3(1.0, 2.0, 3.0)
        assert state.velocity == Vector3(4.0, 5.0, 6.0)

    def test_negative_dt_is_ignored(self, integrator: SemiImplicitEulerIntegrator) -> None:
        """Test a negative time step does not run time backwards."""
        state = KinematicState(velocity=Vector3(0.0, 0.0, -10.0))

        integrator.advance(state, Vector3(0.0, -9.81, 0.0), -0.5)

        assert state.position == Vector3.zero()
        assert state.velocity == Vector3(0.0, 0.0, -10.0)

    def test_constant_velocity_without_acceleration(
        self, integrator: SemiImplicitEulerIntegrator
    ) -> None:
        """Test zero acceleration moves the state at constant velocity."""
        state = KinematicState(velocity=Vector3(10.0, 0.0, -20.0))

        for _ in range(4):
            integrator.advance(state, Vector3.zero(), 0.25)

        assert state.velocity.to_tuple() == pytest.approx((10.0, 0.0, -20.0))
        assert state.position.to_tuple() == pytest.approx((10.0, 0.0, -20.0))

    def test_multiple_steps_accumulate(self, integrator: SemiImplicitEulerIntegrator) -> None:
        """Test two unit steps under constant acceleration."""
        state = KinematicState()
        accel = Vector3(0.0, -10.0, 0.0)

        integrator.advance(state, accel, 1.0)
        integrator.advance(state, accel, 1.0)

        # v: -10, -20; p: -10, -30
        assert state.velocity.y == pytest.approx(-20.0)
        assert state.position.y == pytest.approx(-30.0)

    def test_orientation_not_touched(self, integrator: SemiImplicitEulerIntegrator) -> None:
        """Test advancing does not change the attitude."""
        state = KinematicState(pitch=0.2, roll=-0.3, yaw=1.5)

        integrator.advance(state, Vector3(1.0, 1.0, 1.0), 0.5)

        assert (state.pitch, state.roll, state.yaw) == (0.2, -0.3, 1.5)


class TestApplyAttitude:
    """Test orientation copy from controls."""

    def test_copies_control_angles(self, integrator: SemiImplicitEulerIntegrator) -> None:
        """Test orientation mirrors the control angles exactly."""
        state = KinematicState()
        controls = ControlState(pitch=0.3, roll=-0.4, yaw=7.0)

        integrator.apply_attitude(state, controls)

        assert state.pitch == controls.pitch
        assert state.roll == controls.roll
        assert state.yaw == 7.0

    def test_copies_clamped_values(self, integrator: SemiImplicitEulerIntegrator) -> None:
        """Test the copied pitch is the clamped control value."""
        state = KinematicState()
        controls = ControlState(pitch=2.0)

        integrator.apply_attitude(state, controls)

        assert state.pitch == pytest.approx(0.7853981633974483)
