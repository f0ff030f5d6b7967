from __future__ import annotations

import numpy as np
import pytest

from common.errors import InvalidConfiguration
from engine.core.curve import CURVE_TYPES, Curve


def test_closure_point_at_zero_equals_point_at_one_minus(curve42: Curve) -> None:
    p0 = curve42.point_at(0.0)
    p1 = curve42.point_at(1.0 - 1e-9)
    np.testing.assert_allclose(p0, p1, atol=1e-6)
    np.testing.assert_allclose(curve42.point_at(1.0), p0, atol=1e-12)


def test_passes_through_control_points(curve42: Curve) -> None:
    n = curve42.num_points
    pts = curve42.point_at(np.arange(n) / n)
    np.testing.assert_allclose(pts, curve42.control_points, atol=1e-9)


@pytest.mark.parametrize("p", [0.0, 0.13, 0.5, 0.999])
def test_periodicity(curve42: Curve, p: float) -> None:
    np.testing.assert_allclose(curve42.point_at(p), curve42.point_at(p + 1.0), atol=1e-9)
    np.testing.assert_allclose(curve42.point_at(p), curve42.point_at(p - 3.0), atol=1e-9)


def test_continuity_dense_grid_has_bounded_steps(curve42: Curve) -> None:
    grid = np.linspace(0.0, 1.0, 20001)
    pts = curve42.point_at(grid)
    steps = np.linalg.norm(np.diff(pts, axis=0), axis=1)
    # 全長の 1/20000 の数十倍を超える跳びは無い
    assert steps.max() < curve42.length / 20000 * 50
    assert np.isfinite(pts).all()


def test_vectorized_matches_scalar(curve42: Curve) -> None:
    ps = np.array([0.0, 0.07, 0.33, 0.71, 0.95])
    vec = curve42.point_at(ps)
    assert vec.shape == (5, 3)
    for i, p in enumerate(ps):
        np.testing.assert_allclose(vec[i], curve42.point_at(float(p)), atol=1e-12)


def test_control_points_are_read_only(curve42: Curve) -> None:
    with pytest.raises(ValueError):
        curve42.control_points[0, 0] = 99.0


def test_too_few_points_raises() -> None:
    with pytest.raises(InvalidConfiguration):
        Curve([[0, 0, 0], [1, 0, 0]])


def test_bad_shape_and_nonfinite_raise() -> None:
    with pytest.raises(InvalidConfiguration):
        Curve([[0, 0], [1, 0], [0, 1]])
    with pytest.raises(InvalidConfiguration):
        Curve([[0, 0, 0], [1, 0, np.nan], [0, 1, 0]])


def test_unknown_curve_type_raises() -> None:
    with pytest.raises(InvalidConfiguration):
        Curve([[0, 0, 0], [1, 0, 0], [0, 1, 0]], curve_type="bezier")


@pytest.mark.parametrize("curve_type", CURVE_TYPES)
def test_all_curve_types_are_closed_and_interpolating(curve_type: str) -> None:
    pts = np.array([[0, 0, 0], [2, 0, 0], [2, 1, 2], [0, 1, 3], [-1, 0, 1]], dtype=float)
    c = Curve(pts, curve_type=curve_type)
    np.testing.assert_allclose(c.point_at(np.arange(5) / 5), pts, atol=1e-9)
    np.testing.assert_allclose(c.point_at(0.0), c.point_at(1.0 - 1e-10), atol=1e-6)


def test_duplicate_points_do_not_produce_nan() -> None:
    c = Curve([[0, 0, 0], [0, 0, 0], [1, 0, 0], [1, 1, 0]])
    pts = c.sample(64)
    assert np.isfinite(pts).all()


def test_sample_returns_closed_polyline(curve42: Curve) -> None:
    pts = curve42.sample(50)
    assert pts.shape == (51, 3)
    np.testing.assert_allclose(pts[0], pts[-1], atol=1e-9)
    with pytest.raises(ValueError):
        curve42.sample(0)


def test_lengths_monotonic_and_cached(curve42: Curve) -> None:
    table = curve42.lengths()
    assert table[0] == 0.0
    assert np.all(np.diff(table) >= 0.0)
    assert curve42.lengths() is table
    assert curve42.length == pytest.approx(float(table[-1]))


def test_point_at_length_is_uniform() -> None:
    # 区間長が大きく異なる曲線: パラメトリックでは速度が偏り、弧長版では揃う
    pts = [[0, 0, 0], [0.5, 0, 0], [4, 0, 1], [2, 1, 4], [-1, 0, 3]]
    c = Curve(pts)
    us = np.arange(101) / 100
    param_chords = np.linalg.norm(np.diff(c.point_at(us), axis=0), axis=1)
    arc_chords = np.linalg.norm(np.diff(c.point_at_length(us), axis=0), axis=1)
    assert param_chords.max() / param_chords.min() > 1.5
    np.testing.assert_allclose(arc_chords, c.length / 100, rtol=0.05)


def test_u_to_t_endpoints(curve42: Curve) -> None:
    assert curve42.u_to_t(0.0) == pytest.approx(0.0)
    assert curve42.u_to_t(0.5) == pytest.approx(curve42.u_to_t(1.5))


def test_tangent_is_unit(curve42: Curve) -> None:
    t = curve42.tangent_at(np.linspace(0, 1, 17))
    np.testing.assert_allclose(np.linalg.norm(t, axis=1), 1.0, atol=1e-9)


def test_frenet_frames_orthonormal_and_closed(curve42: Curve) -> None:
    tangents, normals, binormals = curve42.frenet_frames(64)
    assert tangents.shape == normals.shape == binormals.shape == (65, 3)
    for arr in (tangents, normals, binormals):
        np.testing.assert_allclose(np.linalg.norm(arr, axis=1), 1.0, atol=1e-6)
    np.testing.assert_allclose(np.sum(tangents * normals, axis=1), 0.0, atol=1e-6)
    np.testing.assert_allclose(np.sum(tangents * binormals, axis=1), 0.0, atol=1e-6)
    np.testing.assert_allclose(tangents[0], tangents[-1], atol=1e-6)
    np.testing.assert_allclose(normals[0], normals[-1], atol=1e-3)
