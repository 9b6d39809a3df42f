import math

import numpy as np
import pytest
from interaction.momentum import DampedAxisPair, apply_damping, quat_multiply


def test_damping_applies_friction():
    assert apply_damping(1.0) == pytest.approx(0.92)
    assert apply_damping(-0.5, friction=0.5) == pytest.approx(-0.25)


def test_damping_snaps_to_zero():
    assert apply_damping(0.00105) == 0.0
    assert apply_damping(-0.00105) == 0.0


def test_damping_reaches_rest():
    v = 1.0
    frames = 0
    while v != 0.0:
        v = apply_damping(v)
        frames += 1
        assert frames < 130
    assert frames > 50


def test_integrate_at_rest_is_noop():
    pair = DampedAxisPair()
    assert pair.integrate() is None
    np.testing.assert_allclose(pair.orientation, [1, 0, 0, 0])


def test_yaw_rotates_about_y():
    pair = DampedAxisPair()
    pair.set_velocity(yaw=math.pi / 2, pitch=0.0)
    pair.integrate()

    s = math.sqrt(0.5)
    np.testing.assert_allclose(pair.orientation, [s, 0, s, 0], atol=1e-12)


def test_frame_delta_applies_yaw_after_pitch():
    pair = DampedAxisPair()
    pair.set_velocity(yaw=0.3, pitch=0.2)
    delta = pair.integrate()

    q_yaw = np.array([math.cos(0.15), 0, math.sin(0.15), 0])
    q_pitch = np.array([math.cos(0.1), math.sin(0.1), 0, 0])
    np.testing.assert_allclose(delta, quat_multiply(q_yaw, q_pitch))


def test_orientation_stays_unit_length():
    pair = DampedAxisPair()
    pair.set_velocity(yaw=0.37, pitch=-0.21)
    for _ in range(5000):
        pair.integrate()
    assert np.linalg.norm(pair.orientation) == pytest.approx(1.0, abs=1e-9)


def test_sub_epsilon_velocity_is_at_rest():
    pair = DampedAxisPair(epsilon=0.0001)
    pair.set_velocity(yaw=0.00005, pitch=0.0)
    assert not pair.is_moving
    assert pair.integrate() is None
