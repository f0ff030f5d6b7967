"""
どこで: `engine.scene.decorations`。
何を: 曲線に沿って配置する装飾（ワイヤー箱・頂点マーカー）の生成と、時刻から色を求める純関数。
なぜ: 装飾は起動時に 1 度だけ作り、毎フレームの色相サイクルは共有配列を書き換えずに
      `decoration_color(decoration, t)` で都度求めるため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from common.lfo import LFO, frac
from common.types import RGBA
from engine.core.curve import Curve
from engine.core.geometry import Geometry
from shapes.box import box
from shapes.marker import marker
from util.color import hsla

KINDS = ("box", "marker")


@dataclass(frozen=True)
class Decoration:
    """配置済みの装飾 1 個（ジオメトリは配置済み・不変）。

    - `base_hue`: 配置時に決めた色相（0..1）。
    - `p`: 配置元の曲線パラメータ（マーカーは制御点のパラメータ `i / n`）。
    """

    kind: str
    geometry: Geometry
    base_hue: float
    p: float
    saturation: float = 1.0
    lightness: float = 0.5


def _hue_ramp(hue_speed: float) -> LFO | None:
    """色相シフト用ののこぎり波（0..1）。速度 0 以下ならサイクルしない。"""
    if not hue_speed > 0.0:
        return None
    return LFO(wave="saw_up", freq=float(hue_speed))


def decoration_color(decoration: Decoration, t_sec: float, hue_speed: float = 0.1) -> RGBA:
    """時刻 `t_sec` [秒] における装飾の色（RGBA 0–1）。

    色相 = `base_hue + hue_speed * t`（周期 1 で畳み込み）。`1 / hue_speed` 秒で一巡する。
    """
    ramp = _hue_ramp(hue_speed)
    shift = ramp(t_sec) if ramp is not None else 0.0
    return hsla(frac(decoration.base_hue + shift), decoration.saturation, decoration.lightness)


def scatter_boxes(
    curve: Curve,
    *,
    count: int = 55,
    size: float = 0.075,
    jitter: tuple[float, float] = (-0.4, 0.6),
    rng: np.random.Generator | None = None,
) -> list[Decoration]:
    """曲線沿いに箱をばらまく。

    箱 i は弧長比 `p = (i / count + U(0, 0.1)) mod 1` の点から、X/Z を `U(jitter)` だけずらし、
    各軸 `U(0, π)` で回転して置く。色相は `(0.7 - p) mod 1`。
    """
    n = int(count)
    if n < 0:
        raise ValueError(f"count は 0 以上が必要です: got {count}")
    lo, hi = float(jitter[0]), float(jitter[1])
    if hi < lo:
        raise ValueError(f"jitter は (low, high) で low <= high が必要です: got {jitter}")
    rng = rng if rng is not None else np.random.default_rng()
    template = box(size=size)

    out: list[Decoration] = []
    for i in range(n):
        p = frac(i / n + float(rng.uniform(0.0, 0.1)))
        pos = np.asarray(curve.point_at_length(p), dtype=np.float64).copy()
        pos[0] += rng.uniform(lo, hi)
        pos[2] += rng.uniform(lo, hi)
        rx, ry, rz = rng.uniform(0.0, math.pi, size=3)
        g = template.rotate(float(rx), float(ry), float(rz)).translate(*map(float, pos))
        out.append(Decoration(kind="box", geometry=g, base_hue=frac(0.7 - p), p=p))
    return out


def control_point_markers(curve: Curve, *, radius: float = 0.05) -> list[Decoration]:
    """各制御点にマーカーを置く。色相は制御点の順番で一巡させる。"""
    template = marker(radius=radius)
    n = curve.num_points
    out: list[Decoration] = []
    for i, pt in enumerate(curve.control_points):
        g = template.translate(float(pt[0]), float(pt[1]), float(pt[2]))
        out.append(Decoration(kind="marker", geometry=g, base_hue=i / n, p=i / n, lightness=0.6))
    return out


__all__ = [
    "Decoration",
    "KINDS",
    "decoration_color",
    "scatter_boxes",
    "control_point_markers",
]
