import math

import matplotlib

matplotlib.use("Agg")

import pytest

from jointspace import PlanarJointModel, RandomNumberGenerator, VariableBounds


@pytest.fixture
def planar():
    return PlanarJointModel("base")


@pytest.fixture
def rng():
    return RandomNumberGenerator(seed=1234)


@pytest.fixture
def planar_bounds():
    return (
        VariableBounds(-2.0, 3.0),
        VariableBounds(-1.0, 1.0),
        VariableBounds(-math.pi, math.pi),
    )
