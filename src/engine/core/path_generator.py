"""
どこで: `engine.core.path_generator`。
何を: 乱数制御点から閉曲線 `Curve` を 1 度だけ構築する PathGenerator。
なぜ: チューブの中心線とカメラ軌道を同じ曲線で共有し、シード指定で再現可能にするため。
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from common.errors import InvalidConfiguration

from .curve import Curve

logger = logging.getLogger(__name__)

MIN_CONTROL_POINTS = 3


class PathGenerator:
    """閉曲線の生成器。

    生成器自身は状態を持たない（曲線種別などの既定値のみ保持）。乱数は呼び出しごとに
    `numpy.random.default_rng(seed)` で作り、グローバル乱数状態には触れない。
    """

    def __init__(self, *, curve_type: str = "centripetal", tension: float = 0.5) -> None:
        self.curve_type = curve_type
        self.tension = float(tension)

    def generate(
        self,
        num_control_points: int = 10,
        coordinate_range: float = 5.0,
        seed: int | None = None,
        *,
        flatten_y: float = 1.0,
    ) -> Curve:
        """`[-coordinate_range, coordinate_range]^3` の一様乱数点を通る閉曲線を返す。

        Parameters
        ----------
        num_control_points : int, default 10
            制御点数（3 以上）。
        coordinate_range : float, default 5.0
            各座標の範囲（正の有限値）。
        seed : int | None
            乱数シード。同じシードなら同じ曲線。
        flatten_y : float, default 1.0
            Y 座標に掛ける係数（0 で XZ 平面上のループ）。

        Raises
        ------
        InvalidConfiguration
            制御点数が 3 未満、座標範囲が正の有限値でない、またはシードが負の場合。
        """
        n = int(num_control_points)
        if n < MIN_CONTROL_POINTS:
            raise InvalidConfiguration(
                f"num_control_points は {MIN_CONTROL_POINTS} 以上が必要です: got {num_control_points}"
            )
        r = float(coordinate_range)
        if not math.isfinite(r) or r <= 0.0:
            raise InvalidConfiguration(
                f"coordinate_range は正の有限値が必要です: got {coordinate_range}"
            )
        fy = float(flatten_y)
        if not math.isfinite(fy):
            raise InvalidConfiguration(f"flatten_y は有限値が必要です: got {flatten_y}")
        if seed is not None and int(seed) < 0:
            raise InvalidConfiguration(f"seed は 0 以上の整数が必要です: got {seed}")

        rng = np.random.default_rng(seed)
        points = rng.uniform(-r, r, size=(n, 3))
        points[:, 1] *= fy
        logger.debug("generated %d control points (range=%.3f, seed=%s)", n, r, seed)
        return self.from_points(points)

    def from_points(self, points: Sequence[Sequence[float]] | np.ndarray) -> Curve:
        """明示的な制御点列から閉曲線を構築する（順序はそのまま）。"""
        return Curve(points, curve_type=self.curve_type, tension=self.tension)


def generate_path(
    num_control_points: int = 10,
    coordinate_range: float = 5.0,
    seed: int | None = None,
    *,
    curve_type: str = "centripetal",
    tension: float = 0.5,
    flatten_y: float = 1.0,
) -> Curve:
    """`PathGenerator(...).generate(...)` の短縮形。"""
    gen = PathGenerator(curve_type=curve_type, tension=tension)
    return gen.generate(num_control_points, coordinate_range, seed, flatten_y=flatten_y)


__all__ = ["PathGenerator", "generate_path", "MIN_CONTROL_POINTS"]
