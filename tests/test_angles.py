import math

import pytest

from jointspace.angles import angular_distance, interpolate_angle, normalize_angle, shortest_angular_difference


@pytest.mark.parametrize("angle", [0.0, 1.0, -math.pi, math.pi, -3.0])
def test_normalize_keeps_canonical_values(angle):
    assert normalize_angle(angle) == angle


@pytest.mark.parametrize("angle", [3.5, -3.5, 7.0, -20.0, 100.0, 4 * math.pi + 0.1])
def test_normalize_wraps_into_range(angle):
    wrapped = normalize_angle(angle)
    assert -math.pi <= wrapped <= math.pi
    assert math.sin(wrapped) == pytest.approx(math.sin(angle), abs=1e-9)
    assert math.cos(wrapped) == pytest.approx(math.cos(angle), abs=1e-9)
    assert normalize_angle(wrapped) == wrapped


def test_shortest_difference_crosses_boundary():
    assert shortest_angular_difference(3.0, -3.0) == pytest.approx(2 * math.pi - 6.0)
    assert shortest_angular_difference(-3.0, 3.0) == pytest.approx(6.0 - 2 * math.pi)
    assert angular_distance(3.0, -3.0) == pytest.approx(2 * math.pi - 6.0)


def test_interpolate_angle_takes_short_arc():
    mid = interpolate_angle(3.0, -3.0, 0.5)
    assert abs(abs(mid) - math.pi) < 1e-9
    assert interpolate_angle(0.5, 1.5, 0.5) == pytest.approx(1.0)
