"""
どこで: `shapes.tube`。
何を: 閉曲線に沿って円断面を押し出したチューブのワイヤーフレームを生成する。
なぜ: カメラが飛ぶトンネル本体。中心線は FlightRig と同じ `Curve` を明示的に受け取る。

構成:
- 環（ring）: 弧長等分した `tubular_segments` 箇所ごとに 1 本の閉じた円。
- 縦線: 断面の各角度 j について、全環の j 番目の頂点を結ぶ閉じた線（`radial_segments` 本）。
- 断面の向きは `Curve.frenet_frames` の法線/従法線で決める（継ぎ目のねじれ補正済み）。
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numba import njit

from engine.core.curve import Curve
from engine.core.geometry import Geometry

from .registry import shape


@njit(fastmath=True, cache=True)
def _tube_ring(
    center: np.ndarray,
    normal: np.ndarray,
    binormal: np.ndarray,
    radius: float,
    radial_segments: int,
) -> np.ndarray:
    """中心/法線/従法線から断面の円 1 本（閉, radial_segments + 1 点）を生成します。"""
    ring = np.empty((radial_segments + 1, 3), dtype=np.float32)
    for j in range(radial_segments):
        v = 2.0 * np.pi * j / radial_segments
        c = -np.cos(v)
        s = np.sin(v)
        for k in range(3):
            ring[j, k] = center[k] + radius * (c * normal[k] + s * binormal[k])
    for k in range(3):
        ring[radial_segments, k] = ring[0, k]
    return ring


def tube_rings(
    curve: Curve, tubular_segments: int, radius: float, radial_segments: int
) -> np.ndarray:
    """環の頂点配列 `(tubular_segments, radial_segments + 1, 3) float32` を返す。"""
    _tangents, normals, binormals = curve.frenet_frames(tubular_segments)
    centers = np.asarray(
        curve.point_at_length(np.arange(tubular_segments, dtype=np.float64) / tubular_segments)
    )
    rings = np.empty((tubular_segments, radial_segments + 1, 3), dtype=np.float32)
    for i in range(tubular_segments):
        rings[i] = _tube_ring(
            centers[i], normals[i], binormals[i], float(radius), int(radial_segments)
        )
    return rings


@shape
def tube(
    *,
    curve: Curve,
    tubular_segments: int = 222,
    radius: float = 0.65,
    radial_segments: int = 16,
    **params: Any,
) -> Geometry:
    """閉曲線に沿ったチューブのワイヤーフレームを生成します。

    Parameters
    ----------
    curve : Curve
        中心線。
    tubular_segments : int, default 222
        曲線方向の分割数（環の数）。3 以上。
    radius : float, default 0.65
        断面の半径。正の値。
    radial_segments : int, default 16
        断面の分割数（縦線の数）。3 以上。
    """
    if int(tubular_segments) < 3 or int(radial_segments) < 3:
        raise ValueError("tubular_segments/radial_segments は 3 以上が必要です")
    if not float(radius) > 0.0:
        raise ValueError(f"radius は正の値が必要です: got {radius}")
    ts = int(tubular_segments)
    rs = int(radial_segments)
    rings = tube_rings(curve, ts, float(radius), rs)

    lines: list[np.ndarray] = [rings[i] for i in range(ts)]
    for j in range(rs):
        column = rings[:, j, :]
        lines.append(np.vstack([column, column[:1]]))
    return Geometry.from_lines(lines)
