from __future__ import annotations

import numpy as np
import pytest

from engine.core.camera import as_gl_bytes, look_at, perspective, view_from_pose
from engine.core.flight_rig import FlightRig


def _apply(m: np.ndarray, p) -> np.ndarray:
    v = np.append(np.asarray(p, dtype=np.float64), 1.0)
    return (m.astype(np.float64) @ v)[:3]


def test_look_at_maps_eye_to_origin_and_target_to_minus_z() -> None:
    eye = (1.0, 2.0, 3.0)
    target = (4.0, 2.0, -1.0)
    view = look_at(eye, target)
    assert view.shape == (4, 4) and view.dtype == np.float32
    np.testing.assert_allclose(_apply(view, eye), 0.0, atol=1e-5)
    t = _apply(view, target)
    np.testing.assert_allclose(t[:2], 0.0, atol=1e-5)
    assert t[2] == pytest.approx(-5.0, abs=1e-5)


def test_look_at_rotation_is_orthonormal() -> None:
    view = look_at((0, 0, 0), (1, 1, 1)).astype(np.float64)
    r = view[:3, :3]
    np.testing.assert_allclose(r @ r.T, np.eye(3), atol=1e-6)
    assert np.linalg.det(r) == pytest.approx(1.0, abs=1e-6)


def test_look_at_degenerate_up_falls_back() -> None:
    view = look_at((0, 0, 0), (0, 5, 0), up=(0, 1, 0))
    assert np.isfinite(view).all()
    t = _apply(view, (0, 5, 0))
    np.testing.assert_allclose(t[:2], 0.0, atol=1e-5)


def test_look_at_eye_equals_target_is_translation() -> None:
    view = look_at((1, 2, 3), (1, 2, 3))
    np.testing.assert_allclose(view[:3, :3], np.eye(3))
    np.testing.assert_allclose(view[:3, 3], [-1, -2, -3])


def test_perspective_maps_near_far_to_ndc() -> None:
    proj = perspective(75.0, 16 / 9, 0.1, 1000.0).astype(np.float64)
    near = proj @ np.array([0.0, 0.0, -0.1, 1.0])
    far = proj @ np.array([0.0, 0.0, -1000.0, 1.0])
    assert near[2] / near[3] == pytest.approx(-1.0, abs=1e-4)
    assert far[2] / far[3] == pytest.approx(1.0, abs=1e-4)


@pytest.mark.parametrize(
    "args",
    [(0.0, 1.0, 0.1, 10.0), (180.0, 1.0, 0.1, 10.0), (60.0, 0.0, 0.1, 10.0), (60.0, 1.0, 1.0, 1.0), (60.0, 1.0, 0.0, 1.0)],
)
def test_perspective_invalid_raises(args) -> None:
    with pytest.raises(ValueError):
        perspective(*args)


def test_as_gl_bytes_is_column_major() -> None:
    m = np.arange(16, dtype=np.float32).reshape(4, 4)
    data = np.frombuffer(as_gl_bytes(m), dtype=np.float32)
    np.testing.assert_array_equal(data, m.T.ravel())


def test_view_from_pose_uses_rig_pose(curve42) -> None:
    pose = FlightRig(curve42).update(500.0)
    view = view_from_pose(pose)
    np.testing.assert_allclose(_apply(view, pose.position), 0.0, atol=1e-4)
    assert _apply(view, pose.target)[2] < 0.0
