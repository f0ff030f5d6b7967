"""
どこで: `engine.core.camera`。
何を: `CameraPose` からビュー行列（look-at）と透視投影行列を作る純関数。
なぜ: 姿勢計算（FlightRig）と GPU 側の uniform 形式を切り離し、行列をテスト可能にするため。

規約:
- 右手系。カメラは -Z を向き、+Y が上。
- 返す行列は行優先（`M @ v`）。ModernGL へ書き込む際は転置して渡す（`as_gl_bytes`）。
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .flight_rig import CameraPose


def _normalize(v: np.ndarray) -> np.ndarray:
    n = float(np.linalg.norm(v))
    return v / n if n > 0.0 else v


def look_at(
    eye: Sequence[float] | np.ndarray,
    target: Sequence[float] | np.ndarray,
    up: Sequence[float] | np.ndarray = (0.0, 1.0, 0.0),
) -> np.ndarray:
    """world → camera のビュー行列 `(4, 4) float32` を返す。

    `up` が視線と平行な場合は、視線と最も直交する座標軸を代わりに用いる。
    `eye == target` の場合は平行移動のみの行列を返す。
    """
    e = np.asarray(eye, dtype=np.float64)
    f = _normalize(np.asarray(target, dtype=np.float64) - e)
    view = np.eye(4, dtype=np.float64)
    if not np.any(f):
        view[:3, 3] = -e
        return view.astype(np.float32)

    u = np.asarray(up, dtype=np.float64)
    s = np.cross(f, u)
    if float(np.linalg.norm(s)) < 1e-9:
        alt = np.zeros(3)
        alt[int(np.argmin(np.abs(f)))] = 1.0
        s = np.cross(f, alt)
    s = _normalize(s)
    u2 = np.cross(s, f)

    view[0, :3] = s
    view[1, :3] = u2
    view[2, :3] = -f
    view[:3, 3] = -view[:3, :3] @ e
    return view.astype(np.float32)


def perspective(fov_deg: float, aspect: float, near: float, far: float) -> np.ndarray:
    """OpenGL 形式の透視投影行列 `(4, 4) float32`。

    Raises
    ------
    ValueError
        `fov_deg` が (0, 180) 外、`aspect <= 0`、`0 < near < far` を満たさない場合。
    """
    if not (0.0 < fov_deg < 180.0):
        raise ValueError(f"fov_deg は (0, 180) の範囲が必要です: got {fov_deg}")
    if aspect <= 0.0:
        raise ValueError(f"aspect は正の値が必要です: got {aspect}")
    if not (0.0 < near < far):
        raise ValueError(f"0 < near < far が必要です: got near={near}, far={far}")
    f = 1.0 / np.tan(np.radians(fov_deg) / 2.0)
    proj = np.zeros((4, 4), dtype=np.float64)
    proj[0, 0] = f / aspect
    proj[1, 1] = f
    proj[2, 2] = (far + near) / (near - far)
    proj[2, 3] = (2.0 * far * near) / (near - far)
    proj[3, 2] = -1.0
    return proj.astype(np.float32)


def view_from_pose(pose: CameraPose) -> np.ndarray:
    """`CameraPose` のビュー行列。"""
    return look_at(pose.position, pose.target, pose.up)


def as_gl_bytes(mat: np.ndarray) -> bytes:
    """行優先の行列を GLSL（列優先）の uniform 用バイト列へ。"""
    return np.ascontiguousarray(np.asarray(mat, dtype="f4").T).tobytes()


__all__ = ["look_at", "perspective", "view_from_pose", "as_gl_bytes"]
