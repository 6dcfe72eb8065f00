import math

import numpy as np
import pytest

from jointspace import Limits, VariableBounds, VariableLimits


def test_inverted_bounds_are_rejected():
    with pytest.raises(ValueError):
        VariableBounds(1.0, 0.0)


def test_default_bounds_are_unbounded():
    b = VariableBounds()
    assert not b.position_bounded
    assert not b.velocity_bounded
    assert b.clip(1e9) == 1e9


def test_contains_with_margin():
    b = VariableBounds(-1.0, 1.0)
    assert b.contains(1.0)
    assert not b.contains(1.0, margin=0.1)
    assert b.contains(0.85, margin=0.1)


def test_limits_apply_tightens_and_keeps_rates():
    bounds = (VariableBounds(-2.0, 2.0, max_velocity=1.0), VariableBounds())
    limits = Limits(q_min=np.array([-1.0, 0.0]), q_max=np.array([5.0, 3.0]))
    tightened = limits.apply(bounds)
    assert tightened[0] == VariableBounds(-1.0, 2.0, max_velocity=1.0)
    assert tightened[1] == VariableBounds(0.0, 3.0)
    # original bounds are left untouched
    assert bounds[0].min_position == -2.0


def test_limits_apply_checks_arity():
    limits = Limits(q_min=np.zeros(2), q_max=np.ones(2))
    with pytest.raises(ValueError):
        limits.apply((VariableBounds(),))


def test_limits_round_trip_and_clamp():
    bounds = (VariableBounds(-1.0, 1.0), VariableBounds(0.0, 2.0))
    limits = Limits.from_bounds(bounds)
    np.testing.assert_array_equal(limits.q_min, [-1.0, 0.0])
    np.testing.assert_array_equal(limits.clamp(np.array([5.0, -5.0])), [1.0, 0.0])


def test_variable_limits_flags():
    lim = VariableLimits.from_bounds("lift", VariableBounds(0.0, 0.6, max_effort=400.0))
    assert lim.variable_name == "lift"
    assert lim.has_position_limits and lim.has_effort_limits
    assert not lim.has_velocity_limits
    assert lim.max_velocity == math.inf
