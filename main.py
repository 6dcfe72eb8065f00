"""Mobile base demos executed directly without a command-line parser."""

from __future__ import annotations

import logging

from jointspace.presets import MobileBaseDemo


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    demo = MobileBaseDemo(seed=7)

    # Uniform samples over the workspace and a cluster near the origin.
    samples = demo.sample_base_poses(samples=300)
    near = demo.sample_near((0.0, 0.0, 3.0), distance=0.8, samples=150)
    start, goal = (-3.0, -2.0, 3.0), (3.0, 2.5, -3.0)
    path = demo.interpolated_path(start, goal, samples=40)
    print(f"Path length: {demo.path_length(path):.3f}")
    demo.plot_path(path, samples=samples, title="Sampling and shortest-arc interpolation")
    demo.plot_path(path, samples=near, title="Near-by samples")

    # Whole-chain trajectory following an interpolated base path.
    result = demo.path_demo(samples=60)
    demo.plot_trajectory(result.tgrid, result.q)


if __name__ == "__main__":
    main()
