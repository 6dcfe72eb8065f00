import math

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from jointspace import FixedJointModel, FloatingJointModel, JointType, RandomNumberGenerator, VariableBounds


@pytest.fixture
def free():
    return FloatingJointModel("free")


@pytest.fixture
def free_bounds():
    return (VariableBounds(0.0, 1.0), VariableBounds(0.0, 2.0), VariableBounds(0.0, 2.0)) + (
        VariableBounds(-1.0, 1.0),
    ) * 4


def _pose(translation, euler):
    return np.concatenate([translation, Rotation.from_euler("xyz", euler).as_quat()])


def test_fixed_joint_is_trivial():
    joint = FixedJointModel("flange")
    rng = RandomNumberGenerator(0)
    assert joint.type is JointType.FIXED
    assert joint.variable_count == 0
    assert joint.state_space_dimension() == 0
    assert joint.default_values().shape == (0,)
    assert joint.random_values(rng).shape == (0,)
    assert joint.random_values_near_by(rng, [], 1.0).shape == (0,)
    assert joint.satisfies_bounds([])
    assert not joint.enforce_bounds(np.zeros(0))
    assert joint.distance([], []) == 0.0
    assert joint.maximum_extent() == 0.0
    assert joint.interpolate([], [], 0.5).shape == (0,)
    np.testing.assert_array_equal(joint.compute_transform([]), np.eye(4))
    assert joint.compute_joint_state_values(np.eye(4)).shape == (0,)


def test_floating_variables(free):
    assert free.type is JointType.FLOATING
    assert free.variable_count == 7
    assert free.state_space_dimension() == 6
    assert free.variable_names[0] == "free/trans_x"
    assert free.variable_names[-1] == "free/rot_w"
    np.testing.assert_array_equal(free.default_values(), [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0])


def test_floating_random_values(free, free_bounds):
    rng = RandomNumberGenerator(11)
    for _ in range(200):
        values = free.random_values(rng, free_bounds)
        assert free.satisfies_bounds(values, free_bounds)
        assert np.linalg.norm(values[3:]) == pytest.approx(1.0)


def test_floating_distance(free):
    a = _pose([0.0, 0.0, 0.0], [0.0, 0.0, 0.0])
    b = _pose([3.0, 4.0, 0.0], [0.0, 0.0, 0.5])
    assert free.distance(a, a) == pytest.approx(0.0, abs=1e-9)
    assert free.distance(a, b) == pytest.approx(5.0 + 0.5)
    free.angular_distance_weight = 2.0
    assert free.distance(a, b) == pytest.approx(5.0 + 1.0)
    flipped = b.copy()
    flipped[3:] = -flipped[3:]
    assert free.distance(b, flipped) == pytest.approx(0.0, abs=1e-9)


def test_floating_interpolation(free):
    a = _pose([0.0, 0.0, 0.0], [0.2, 0.0, 0.0])
    b = _pose([2.0, 0.0, 1.0], [0.2, 0.0, 1.4])
    np.testing.assert_allclose(free.interpolate(a, b, 0.0), a, atol=1e-12)
    np.testing.assert_allclose(free.interpolate(a, b, 1.0), b, atol=1e-9)
    mid = free.interpolate(a, b, 0.5)
    np.testing.assert_allclose(mid[:3], [1.0, 0.0, 0.5])
    assert free.distance(a, mid) == pytest.approx(0.5 * free.distance(a, b))


def test_floating_enforce_bounds(free, free_bounds):
    values = np.array([5.0, -1.0, 1.0, 0.0, 0.0, 0.0, 2.0])
    assert free.enforce_bounds(values, free_bounds)
    np.testing.assert_allclose(values, [1.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0])
    assert not free.enforce_bounds(values, free_bounds)
    zero = np.zeros(7)
    assert free.normalize_rotation(zero)
    np.testing.assert_array_equal(zero[3:], [0.0, 0.0, 0.0, 1.0])


def test_floating_satisfies_bounds_requires_unit_quaternion(free):
    assert free.satisfies_bounds([0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0])
    assert not free.satisfies_bounds([0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.5])


def test_floating_transform_round_trip(free):
    values = _pose([1.0, 2.0, 3.0], [0.3, -0.2, 1.0])
    T = free.compute_transform(values)
    np.testing.assert_allclose(T[:3, 3], [1.0, 2.0, 3.0])
    recovered = free.compute_joint_state_values(T)
    assert free.distance(values, recovered) == pytest.approx(0.0, abs=1e-7)
    buf = np.eye(4)
    free.update_transform(values, buf)
    np.testing.assert_allclose(buf, T)


def test_floating_near_by(free, free_bounds):
    rng = RandomNumberGenerator(17)
    near = _pose([0.5, 1.0, 1.0], [0.0, 0.5, 0.0])
    for _ in range(200):
        s = free.random_values_near_by(rng, near, 0.25, free_bounds)
        assert np.all(np.abs(s[:3] - near[:3]) <= 0.25 + 1e-12)
        angle = (Rotation.from_quat(near[3:]).inv() * Rotation.from_quat(s[3:])).magnitude()
        assert angle <= 0.25 + 1e-9


def test_floating_near_by_respects_weight(free_bounds):
    free = FloatingJointModel("free", angular_distance_weight=2.0)
    rng = RandomNumberGenerator(19)
    near = _pose([0.5, 1.0, 1.0], [0.0, 0.5, 0.0])
    largest = 0.0
    for _ in range(300):
        s = free.random_values_near_by(rng, near, 0.5, free_bounds)
        angle = (Rotation.from_quat(near[3:]).inv() * Rotation.from_quat(s[3:])).magnitude()
        assert angle <= 0.25 + 1e-9
        largest = max(largest, angle)
    assert largest > 0.2
    unweighted = FloatingJointModel("free", angular_distance_weight=0.0)
    s = unweighted.random_values_near_by(rng, near, 0.0, free_bounds)
    assert np.linalg.norm(s[3:]) == pytest.approx(1.0)


def test_floating_maximum_extent(free, free_bounds):
    assert free.maximum_extent(free_bounds) == pytest.approx(3.0 + math.pi)
    assert free.maximum_extent() == math.inf
