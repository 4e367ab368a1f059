"""Tests for model.py: construction, derived positions, state snapshots."""

import dataclasses
import math

import numpy as np
import pytest

from model import Bob, DoublePendulum, PendulumParams, polar_to_cartesian


class TestPolarToCartesian:

    def test_straight_down(self):
        x, y = polar_to_cartesian(0.0, 0.0, 2.0, 0.0)
        assert x == pytest.approx(0.0)
        assert y == pytest.approx(-2.0)

    def test_horizontal_right(self):
        x, y = polar_to_cartesian(1.0, 1.0, 2.0, math.pi / 2)
        assert x == pytest.approx(3.0)
        assert abs(y - 1.0) < 1e-12

    def test_inverted(self):
        x, y = polar_to_cartesian(0.0, 0.0, 1.5, math.pi)
        assert abs(x) < 1e-12
        assert y == pytest.approx(1.5)

    def test_infinite_angle_gives_nan_not_error(self):
        with np.errstate(invalid="ignore"):
            x, y = polar_to_cartesian(0.0, 0.0, 1.0, math.inf)
        assert math.isnan(x)
        assert math.isnan(y)


class TestConstruction:
    """Initial state computed from the nine constructor scalars."""

    def test_zero_angles_hang_below_pivots(self):
        """Both bobs sit directly below their pivots."""
        p = DoublePendulum(3.0, -2.0, 9.81, 1.0, 2.0, 0.0, 1.0, 0.5, 0.0)
        assert p.top.position == pytest.approx((3.0, -4.0))
        assert p.bottom.position == pytest.approx((3.0, -4.5))

    def test_bottom_anchored_on_top(self):
        p = DoublePendulum(0.0, 0.0, 9.81, 1.0, 1.0, math.pi / 2,
                           2.0, 1.0, math.pi / 2)
        assert p.top.position[0] == pytest.approx(1.0)
        assert p.bottom.position[0] == pytest.approx(2.0)
        assert abs(p.bottom.position[1]) < 1e-12

    def test_velocities_and_accelerations_start_at_zero(self):
        p = DoublePendulum(0.0, 0.0, 100.0, 1.0, 150.0, math.pi,
                           1.0, 150.0, 3.0)
        for bob in (p.top, p.bottom):
            assert bob.angular_velocity == 0.0
            assert bob.angular_acceleration == 0.0

    def test_structural_accessors(self):
        p = DoublePendulum(5.0, 7.0, 3.0, 1.5, 2.0, 0.1, 0.5, 1.0, 0.2)
        assert p.origin == (5.0, 7.0)
        assert p.origin_x == 5.0
        assert p.origin_y == 7.0
        assert p.gravity == 3.0
        assert p.top.mass == 1.5
        assert p.top.length == 2.0
        assert p.top.angle == 0.1
        assert p.bottom.mass == 0.5
        assert p.bottom.length == 1.0
        assert p.bottom.angle == 0.2

    def test_origin_is_read_only(self):
        p = DoublePendulum(0.0, 0.0, 9.81, 1.0, 1.0, 0.0, 1.0, 1.0, 0.0)
        with pytest.raises(AttributeError):
            p.origin = (1.0, 1.0)
        with pytest.raises(AttributeError):
            p.gravity = 1.0

    def test_degenerate_inputs_are_accepted(self):
        """Zero mass and length are not validated at construction."""
        p = DoublePendulum(0.0, 0.0, 9.81, 0.0, 0.0, 0.3, 0.0, 0.0, 0.4)
        assert p.top.position == pytest.approx((0.0, 0.0))
        assert p.bottom.position == pytest.approx((0.0, 0.0))

    def test_from_params(self):
        params = PendulumParams(m1=2.0, m2=3.0, l1=1.5, l2=0.5, g=1.62)
        p = DoublePendulum.from_params(params, 0.0, 0.0, origin=(1.0, 0.0))
        assert p.params == params
        assert p.top.position == pytest.approx((1.0, -1.5))
        assert p.bottom.position == pytest.approx((1.0, -2.0))


class TestSnapshots:

    def test_state_is_a_copy(self):
        p = DoublePendulum(0.0, 0.0, 9.81, 1.0, 1.0, 0.4, 1.0, 1.0, -0.2)
        s = p.state
        s[0] = 99.0
        assert p.top.angle == 0.4
        assert s.dtype == np.float64
        assert list(p.state) == [0.4, -0.2, 0.0, 0.0]

    def test_positions_tuple(self):
        p = DoublePendulum(0.0, 0.0, 9.81, 1.0, 1.0, 0.0, 1.0, 1.0, 0.0)
        assert p.positions() == pytest.approx((0.0, -1.0, 0.0, -2.0))


class TestSetDynamics:

    def test_writes_state_and_refreshes_positions(self):
        p = DoublePendulum(0.0, 0.0, 9.81, 1.0, 1.0, 0.0, 1.0, 1.0, 0.0)
        p.set_dynamics([math.pi / 2, 0.0, 0.5, -0.5], (1.0, -1.0))

        assert p.top.angle == pytest.approx(math.pi / 2)
        assert p.top.angular_velocity == 0.5
        assert p.bottom.angular_velocity == -0.5
        assert p.top.angular_acceleration == 1.0
        assert p.bottom.angular_acceleration == -1.0
        # bottom hangs from the moved top bob, not from the old position
        assert p.top.position[0] == pytest.approx(1.0)
        assert p.bottom.position == pytest.approx((1.0, -1.0), abs=1e-12)

    def test_bob_fields_cannot_be_written_directly(self):
        """Angles change only through set_dynamics, so positions never go stale."""
        p = DoublePendulum(0.0, 0.0, 9.81, 1.0, 1.0, 0.0, 1.0, 1.0, 0.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.top.angle = 1.0
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.bottom.x = 5.0
        with pytest.raises(AttributeError):
            p.top = Bob(mass=1.0, length=1.0, angle=1.0)
        assert p.top.position == pytest.approx((0.0, -1.0))

    def test_is_finite(self):
        p = DoublePendulum(0.0, 0.0, 9.81, 1.0, 1.0, 0.0, 1.0, 1.0, 0.0)
        assert p.is_finite()
        with np.errstate(invalid="ignore"):
            p.set_dynamics([math.nan, 0.0, 0.0, 0.0], (0.0, 0.0))
        assert not p.is_finite()


class TestBob:

    def test_position_property(self):
        bob = Bob(mass=1.0, length=2.0, angle=0.0, x=1.0, y=-2.0)
        assert bob.position == (1.0, -2.0)
