from __future__ import annotations

from typing import Any

import numpy as np

from engine.core.geometry import Geometry

from .registry import shape

# 単位立方体の頂点（±1）と 12 本の辺
_CORNERS = np.array(
    [
        [-1, -1, -1],
        [1, -1, -1],
        [1, 1, -1],
        [-1, 1, -1],
        [-1, -1, 1],
        [1, -1, 1],
        [1, 1, 1],
        [-1, 1, 1],
    ],
    dtype=np.float32,
)
_EDGES = (
    (0, 1), (1, 2), (2, 3), (3, 0),
    (4, 5), (5, 6), (6, 7), (7, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
)


@shape
def box(*, size: float = 0.075, **params: Any) -> Geometry:
    """原点中心・軸平行な立方体の 12 辺を生成します。

    Parameters
    ----------
    size : float, default 0.075
        一辺の長さ。正の値。
    """
    if not float(size) > 0.0:
        raise ValueError(f"size は正の値が必要です: got {size}")
    corners = _CORNERS * np.float32(float(size) * 0.5)
    return Geometry.from_lines([corners[[a, b]] for a, b in _EDGES])
