"""Tests for PointMassFlightModel."""

import math

import pytest

from flightloop.core.input import ControlState
from flightloop.physics.flight_model.base import KinematicState, PhysicalConstants
from flightloop.physics.flight_model.point_mass import PointMassFlightModel
from flightloop.physics.vectors import Vector3


@pytest.fixture
def model() -> PointMassFlightModel:
    """Create a flight model with default constants."""
    return PointMassFlightModel(PhysicalConstants())


class TestPhysicalConstants:
    """Test PhysicalConstants validation."""

    def test_defaults(self) -> None:
        """Test default constants describe the reference aircraft."""
        c = PhysicalConstants()
        assert c.mass == 1000.0
        assert c.wing_area == 16.2
        assert c.air_density == 1.225
        assert c.drag_coefficient == 0.03
        assert c.lift_coefficient_slope == 5.7
        assert c.gravity == 9.81
        assert c.max_thrust == 15000.0
        assert c.max_throttle == 100.0

    def test_non_positive_mass_rejected(self) -> None:
        """Test zero mass raises."""
        with pytest.raises(ValueError, match="mass must be positive"):
            PhysicalConstants(mass=0.0)

    def test_negative_gravity_rejected(self) -> None:
        """Test negative gravity raises."""
        with pytest.raises(ValueError, match="gravity must be non-negative"):
            PhysicalConstants(gravity=-1.0)

    def test_constants_are_immutable(self) -> None:
        """Test constants cannot be changed after construction."""
        c = PhysicalConstants()
        with pytest.raises(AttributeError):
            c.mass = 2000.0  # type: ignore[misc]

    def test_from_dict_unknown_key(self) -> None:
        """Test unknown configuration keys are reported."""
        with pytest.raises(ValueError, match="Unknown physics keys: wingspan"):
            PhysicalConstants.from_dict({"wingspan": 11.0})

    def test_from_dict_partial(self) -> None:
        """Test missing keys keep their defaults."""
        c = PhysicalConstants.from_dict({"mass": 1200})
        assert c.mass == 1200.0
        assert c.wing_area == 16.2


class TestForwardVector:
    """Test nose direction from Euler angles."""

    def test_level_points_down_negative_z(self, model: PointMassFlightModel) -> None:
        """Test zero attitude points along -Z."""
        forward = model.forward_vector(KinematicState())
        assert forward.x == pytest.approx(0.0)
        assert forward.y == pytest.approx(0.0)
        assert forward.z == pytest.approx(-1.0)

    def test_positive_pitch_raises_nose(self, model: PointMassFlightModel) -> None:
        """Test positive pitch tilts the nose upward."""
        forward = model.forward_vector(KinematicState(pitch=math.pi / 4))
        assert forward.y == pytest.approx(math.sqrt(0.5))
        assert forward.z == pytest.approx(-math.sqrt(0.5))

    def test_yaw_left_turns_toward_negative_x(self, model: PointMassFlightModel) -> None:
        """Test a quarter turn of yaw points the nose along -X."""
        forward = model.forward_vector(KinematicState(yaw=math.pi / 2))
        assert forward.x == pytest.approx(-1.0)
        assert forward.z == pytest.approx(0.0, abs=1e-12)

    def test_roll_does_not_move_nose(self, model: PointMassFlightModel) -> None:
        """Test rolling about the longitudinal axis keeps the nose direction."""
        forward = model.forward_vector(KinematicState(roll=0.7))
        assert forward.to_tuple() == pytest.approx((0.0, 0.0, -1.0))

    def test_forward_is_unit_length(self, model: PointMassFlightModel) -> None:
        """Test the nose vector is normalized for any attitude."""
        forward = model.forward_vector(KinematicState(pitch=0.3, roll=-0.5, yaw=2.1))
        assert forward.magnitude() == pytest.approx(1.0)


class TestForceCalculation:
    """Test individual force components."""

    def test_weight_force(self, model: PointMassFlightModel) -> None:
        """Test weight points down with magnitude m*g."""
        forces = model.compute_forces(ControlState(), KinematicState())
        assert forces.weight.to_tuple() == pytest.approx((0.0, -9810.0, 0.0))

    def test_thrust_scales_with_throttle(self, model: PointMassFlightModel) -> None:
        """Test half throttle gives half of max thrust."""
        forces = model.compute_forces(ControlState(throttle=50.0), KinematicState())
        assert forces.thrust.magnitude() == pytest.approx(7500.0)
        assert forces.thrust.z == pytest.approx(-7500.0)

    def test_no_thrust_at_idle(self, model: PointMassFlightModel) -> None:
        """Test zero throttle produces no thrust."""
        forces = model.compute_forces(ControlState(), KinematicState())
        assert forces.thrust.magnitude() == 0.0

    def test_lift_uses_pitch_as_angle_of_attack(self, model: PointMassFlightModel) -> None:
        """Test lift = q * S * CLα * pitch along world up."""
        controls = ControlState(pitch=0.1)
        state = KinematicState(velocity=Vector3(0.0, 0.0, -50.0), pitch=0.1)

        forces = model.compute_forces(controls, state)

        q = 0.5 * 1.225 * 50.0**2
        expected_lift = q * 16.2 * 5.7 * 0.1
        assert forces.lift.y == pytest.approx(expected_lift)
        assert forces.lift.x == 0.0
        assert forces.lift.z == 0.0

    def test_lift_stays_world_up_when_banked(self, model: PointMassFlightModel) -> None:
        """Test lift ignores roll and acts purely along +Y."""
        controls = ControlState(pitch=0.1, roll=0.6)
        state = KinematicState(velocity=Vector3(0.0, 0.0, -50.0), pitch=0.1, roll=0.6)

        forces = model.compute_forces(controls, state)

        assert forces.lift.x == 0.0
        assert forces.lift.z == 0.0
        assert forces.lift.y > 0.0

    def test_negative_pitch_gives_negative_lift(self, model: PointMassFlightModel) -> None:
        """Test the linear lift curve goes negative below zero pitch."""
        controls = ControlState(pitch=-0.2)
        state = KinematicState(velocity=Vector3(0.0, 0.0, -40.0))

        forces = model.compute_forces(controls, state)

        assert forces.lift.y < 0.0

    def test_no_lift_at_zero_pitch(self, model: PointMassFlightModel) -> None:
        """Test zero angle of attack gives zero lift even at speed."""
        state = KinematicState(velocity=Vector3(0.0, 0.0, -60.0))
        forces = model.compute_forces(ControlState(), state)
        assert forces.lift.magnitude() == 0.0

    def test_drag_opposes_velocity(self, model: PointMassFlightModel) -> None:
        """Test drag = q * S * CD, opposite to the velocity."""
        state = KinematicState(velocity=Vector3(30.0, 0.0, -40.0))

        forces = model.compute_forces(ControlState(), state)

        q = 0.5 * 1.225 * 50.0**2
        expected = q * 16.2 * 0.03
        assert forces.drag.magnitude() == pytest.approx(expected)
        # Direction is exactly opposite the velocity
        assert forces.drag.normalized().to_tuple() == pytest.approx((-0.6, 0.0, 0.8))

    def test_zero_speed_drag_is_zero(self, model: PointMassFlightModel) -> None:
        """Test a stationary aircraft has no drag and no NaN components."""
        forces = model.compute_forces(ControlState(throttle=40.0), KinematicState())

        assert forces.drag.to_tuple() == (0.0, 0.0, 0.0)
        assert forces.total.is_finite()

    def test_total_is_sum_of_components(self, model: PointMassFlightModel) -> None:
        """Test total equals thrust + lift + drag + weight."""
        controls = ControlState(pitch=0.2, throttle=70.0)
        state = KinematicState(velocity=Vector3(5.0, 2.0, -45.0), pitch=0.2, yaw=0.3)

        forces = model.compute_forces(controls, state)

        expected = forces.thrust + forces.lift + forces.drag + forces.weight
        assert forces.total.to_tuple() == pytest.approx(expected.to_tuple())


class TestComputeAcceleration:
    """Test net acceleration."""

    def test_gravity_only_when_idle_and_stationary(self, model: PointMassFlightModel) -> None:
        """Test a stationary aircraft at idle accelerates at -g."""
        accel = model.compute_acceleration(ControlState(), KinematicState())
        assert accel.to_tuple() == pytest.approx((0.0, -9.81, 0.0))

    def test_zero_speed_acceleration_is_finite(self, model: PointMassFlightModel) -> None:
        """Test zero velocity never produces NaN."""
        accel = model.compute_acceleration(ControlState(throttle=100.0), KinematicState())
        assert accel.is_finite()

    def test_full_throttle_level_attitude(self, model: PointMassFlightModel) -> None:
        """Test full throttle gives 15 m/s² forward and -g vertically."""
        accel = model.compute_acceleration(ControlState(throttle=100.0), KinematicState())

        assert accel.x == pytest.approx(0.0)
        assert accel.y == pytest.approx(-9.81)
        assert accel.z == pytest.approx(-15.0)

    def test_drag_decelerates(self, model: PointMassFlightModel) -> None:
        """Test drag acceleration opposes motion along -Z."""
        state = KinematicState(velocity=Vector3(0.0, 0.0, -50.0))
        accel = model.compute_acceleration(ControlState(), state)

        drag = 0.5 * 1.225 * 2500.0 * 16.2 * 0.03
        assert accel.z == pytest.approx(drag / 1000.0)

    def test_lift_can_cancel_gravity(self) -> None:
        """Test lift equal to weight gives zero vertical acceleration."""
        constants = PhysicalConstants()
        model = PointMassFlightModel(constants)
        pitch = 0.1
        # Speed where q * S * CLα * pitch == m * g
        speed = math.sqrt(
            2.0
            * constants.mass
            * constants.gravity
            / (constants.air_density * constants.wing_area * constants.lift_coefficient_slope * pitch)
        )
        controls = ControlState(pitch=pitch)
        # Horizontal motion keeps drag out of the vertical axis
        state = KinematicState(velocity=Vector3(speed, 0.0, 0.0))

        accel = model.compute_acceleration(controls, state)

        assert accel.y == pytest.approx(0.0, abs=1e-9)

    def test_inputs_are_not_mutated(self, model: PointMassFlightModel) -> None:
        """Test computing acceleration leaves controls and state untouched."""
        controls = ControlState(pitch=0.2, roll=-0.1, yaw=1.0, throttle=60.0)
        state = KinematicState(
            position=Vector3(1.0, 2.0, 3.0),
            velocity=Vector3(4.0, 5.0, -6.0),
            pitch=0.1,
            roll=0.0,
            yaw=0.9,
        )
        controls_before = (controls.pitch, controls.roll, controls.yaw, controls.throttle)
        position_before = state.position.copy()
        velocity_before = state.velocity.copy()

        model.compute_acceleration(controls, state)
        model.compute_acceleration(controls, state)

        assert (controls.pitch, controls.roll, controls.yaw, controls.throttle) == controls_before
        assert state.position == position_before
        assert state.velocity == velocity_before
        assert (state.pitch, state.roll, state.yaw) == (0.1, 0.0, 0.9)

    def test_thrust_follows_state_orientation(self, model: PointMassFlightModel) -> None:
        """Test thrust direction uses the state attitude, not the controls."""
        controls = ControlState(yaw=math.pi / 2, throttle=100.0)
        state = KinematicState(yaw=0.0)

        accel = model.compute_acceleration(controls, state)

        assert accel.z == pytest.approx(-15.0)
        assert accel.x == pytest.approx(0.0)
