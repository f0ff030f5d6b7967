from __future__ import annotations

from typing import Any

from engine.core.curve import Curve
from engine.core.geometry import Geometry

from .registry import shape


@shape
def path_line(*, curve: Curve, divisions: int = 100, **params: Any) -> Geometry:
    """曲線の中心線（`divisions + 1` 点の閉じたポリライン）を生成します。"""
    return Geometry.from_lines([curve.sample(int(divisions))])
