import numpy as np
import pytest

from jointspace import RandomNumberGenerator


def test_seed_and_generator_are_exposed():
    rng = RandomNumberGenerator(42)
    assert rng.seed == 42
    assert isinstance(rng.generator, np.random.Generator)
    assert RandomNumberGenerator().seed is None


def test_same_seed_same_sequence():
    a = RandomNumberGenerator(42)
    b = RandomNumberGenerator(a.seed)
    assert [a.uniform_real(-1.0, 1.0) for _ in range(5)] == [b.uniform_real(-1.0, 1.0) for _ in range(5)]
    np.testing.assert_array_equal(a.generator.normal(size=3), b.generator.normal(size=3))


def test_uniform_real_closed_interval():
    rng = RandomNumberGenerator(0)
    assert rng.uniform_real(1.0, 1.0) == 1.0
    for _ in range(200):
        assert 0.0 <= rng.uniform_real(0.0, 1e-300) <= 1e-300


def test_quaternion_is_unit():
    rng = RandomNumberGenerator(3)
    for _ in range(50):
        assert np.linalg.norm(rng.quaternion()) == pytest.approx(1.0)
