from __future__ import annotations

from typing import Any

import numpy as np

from engine.core.geometry import Geometry

from .registry import shape


@shape
def marker(*, radius: float = 0.05, segments: int = 12, **params: Any) -> Geometry:
    """頂点マーカー（XY/YZ/ZX の直交 3 円）を生成します。

    発光球の代わりに線だけで球らしく見せる。各円は閉じている（先頭点を末尾に重複）。
    """
    if not float(radius) > 0.0:
        raise ValueError(f"radius は正の値が必要です: got {radius}")
    n = int(segments)
    if n < 3:
        raise ValueError("segments は 3 以上が必要です")
    t = 2 * np.pi * np.arange(n + 1) / n
    c = np.cos(t) * radius
    s = np.sin(t) * radius
    c[-1], s[-1] = c[0], s[0]
    z = np.zeros_like(t)
    circles = [
        np.stack([c, s, z], axis=1),
        np.stack([z, c, s], axis=1),
        np.stack([s, z, c], axis=1),
    ]
    return Geometry.from_lines([a.astype(np.float32) for a in circles])
