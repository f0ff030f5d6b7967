from __future__ import annotations

import numpy as np
import pytest

from common.errors import InvalidConfiguration
from engine.core.path_generator import PathGenerator, generate_path


def test_generate_is_reproducible_with_seed() -> None:
    a = generate_path(10, 5.0, seed=42)
    b = generate_path(10, 5.0, seed=42)
    np.testing.assert_array_equal(a.control_points, b.control_points)
    c = generate_path(10, 5.0, seed=43)
    assert not np.array_equal(a.control_points, c.control_points)


def test_generate_points_within_range() -> None:
    curve = PathGenerator().generate(50, 2.5, seed=0)
    pts = curve.control_points
    assert pts.shape == (50, 3)
    assert np.all(np.abs(pts) <= 2.5)


def test_generate_does_not_touch_global_rng() -> None:
    np.random.seed(7)
    expected = np.random.random()
    np.random.seed(7)
    generate_path(10, 5.0, seed=1)
    assert np.random.random() == expected


@pytest.mark.parametrize("n", [2, 1, 0, -5])
def test_too_few_control_points_raise(n: int) -> None:
    with pytest.raises(InvalidConfiguration):
        PathGenerator().generate(n, 5.0, seed=42)


@pytest.mark.parametrize("r", [0.0, -1.0, float("inf"), float("nan")])
def test_bad_coordinate_range_raises(r: float) -> None:
    with pytest.raises(InvalidConfiguration):
        PathGenerator().generate(10, r, seed=42)


@pytest.mark.parametrize("seed", [-1, -5])
def test_negative_seed_raises(seed: int) -> None:
    with pytest.raises(InvalidConfiguration):
        PathGenerator().generate(10, 5.0, seed=seed)


def test_zero_seed_is_valid() -> None:
    assert generate_path(10, 5.0, seed=0).num_points == 10


def test_flatten_y_zero_gives_planar_loop() -> None:
    curve = generate_path(8, 5.0, seed=3, flatten_y=0.0)
    assert np.all(curve.control_points[:, 1] == 0.0)
    assert np.allclose(curve.sample(40)[:, 1], 0.0)


def test_from_points_keeps_order_and_type() -> None:
    gen = PathGenerator(curve_type="catmullrom", tension=0.3)
    pts = [[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]]
    curve = gen.from_points(pts)
    assert curve.curve_type == "catmullrom"
    assert curve.tension == pytest.approx(0.3)
    np.testing.assert_array_equal(curve.control_points, np.asarray(pts, dtype=float))


def test_invalid_configuration_is_value_error() -> None:
    with pytest.raises(ValueError):
        generate_path(2, 5.0)
