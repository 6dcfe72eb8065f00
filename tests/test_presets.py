import math

import matplotlib.pyplot as plt
import numpy as np
import pytest

from jointspace.presets import MobileBaseDemo


@pytest.fixture
def demo():
    return MobileBaseDemo(seed=3, half_extent=4.0)


def test_sample_base_poses(demo):
    poses = demo.sample_base_poses(samples=100)
    assert poses.shape == (100, 3)
    assert np.all(np.abs(poses[:, :2]) <= 4.0)
    assert np.all(np.abs(poses[:, 2]) <= math.pi)


def test_sample_near(demo):
    near = demo.sample_near((0.0, 0.0, 3.0), distance=0.5, samples=50)
    assert np.all(np.abs(near[:, :2]) <= 0.5)


def test_interpolated_path_length_matches_distance(demo):
    start, goal = (-3.0, -2.0, 3.0), (3.0, 2.5, -3.0)
    path = demo.interpolated_path(start, goal, samples=30)
    np.testing.assert_allclose(path[0], start)
    assert demo.path_length(path) == pytest.approx(demo.base.distance(start, goal))


def test_path_demo(demo):
    result = demo.path_demo(samples=20)
    assert result.q.shape == (20, demo.chain.variable_count)
    assert result.base.shape == (20, 3)
    assert result.length > 0.0
    assert all(demo.chain.satisfies_bounds(row, demo.bounds) for row in result.q)
    assert result.q[-1, 4] == pytest.approx(0.6)


def test_plots_build_without_showing(demo):
    result = demo.path_demo(samples=10)
    fig = demo.plot_path(result.base, samples=demo.sample_base_poses(20), show=False)
    assert fig.axes[0].get_title() == "Mobile base path"
    plt.close(fig)
    fig = demo.plot_trajectory(result.tgrid, result.q, show=False)
    assert len(fig.axes) == 3
    plt.close(fig)
