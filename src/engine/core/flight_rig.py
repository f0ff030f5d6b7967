"""
どこで: `engine.core.flight_rig`。
何を: 経過時間 [ms] から閉曲線上のカメラ姿勢（位置と注視点）を求める FlightRig。
なぜ: 時刻だけを入力とする純関数にして、ループ境界でも継ぎ目なく周回させるため。

計算（1 フレーム）:
    p        = ((elapsed_ms * time_scale) mod loop_duration_ms) / loop_duration_ms
    target_p = (p + lookahead_fraction) mod 1
    position = curve.point_at(p)
    target   = curve.point_at(target_p)

- 負の経過時間（と NaN/Inf）は 0 として扱う。
- `Curve` が閉じているので、p が 1 未満から 0 へ戻る瞬間も姿勢は連続。
- 状態は「走行中」のみ。停止は呼び出し側（ホストのループ）が決める。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from common.errors import InvalidConfiguration
from common.types import Vec3

from .curve import Curve

logger = logging.getLogger(__name__)

SAMPLING_MODES = ("parametric", "arc_length")


@dataclass(frozen=True, eq=False)
class CameraPose:
    """1 フレーム分のカメラ姿勢（毎フレーム作り直す一時値）。"""

    position: np.ndarray
    target: np.ndarray
    p: float
    target_p: float
    up: Vec3 = (0.0, 1.0, 0.0)

    @property
    def forward(self) -> np.ndarray:
        """位置→注視点の単位ベクトル（退化時はゼロベクトル）。"""
        d = np.asarray(self.target, dtype=np.float64) - np.asarray(self.position, dtype=np.float64)
        n = float(np.linalg.norm(d))
        return d / n if n > 0.0 else d


class FlightRig:
    """曲線に沿った周回カメラ。

    Parameters
    ----------
    curve : Curve
        走行する閉曲線（チューブと共有）。
    loop_duration_ms : float, default 8000
        1 周にかかる（スケール後の）時間 [ms]。
    lookahead_fraction : float, default 0.03
        注視点をどれだけ先に置くか（曲線パラメータの比, 0 < x < 1）。
    time_scale : float, default 1.0
        経過時間に掛ける係数。
    sampling : str, default "parametric"
        `"parametric"`（区間等分, 制御点間隔で速度が変わる）または `"arc_length"`（等速）。
    up : Vec3, default (0, 1, 0)
        ビュー行列用の上方向ヒント。
    """

    def __init__(
        self,
        curve: Curve,
        *,
        loop_duration_ms: float = 8000.0,
        lookahead_fraction: float = 0.03,
        time_scale: float = 1.0,
        sampling: str = "parametric",
        up: Vec3 = (0.0, 1.0, 0.0),
    ) -> None:
        self._curve = curve
        mode = str(sampling).lower()
        if mode not in SAMPLING_MODES:
            raise InvalidConfiguration(
                f"未知の sampling です: {sampling!r}（{', '.join(SAMPLING_MODES)}）"
            )
        self._sampling = mode
        self._up: Vec3 = (float(up[0]), float(up[1]), float(up[2]))
        self._loop_duration_ms = 8000.0
        self._lookahead = 0.03
        self._time_scale = 1.0
        self.configure(loop_duration_ms, lookahead_fraction, time_scale)

    # ── 設定 ─────────────────────────
    def configure(
        self,
        loop_duration_ms: float,
        lookahead_fraction: float,
        time_scale: float | None = None,
    ) -> None:
        """1 周時間・先読み量（・時間倍率）を設定する。

        Raises
        ------
        InvalidConfiguration
            ループ時間が正の有限値でない、先読みが (0, 1) 外、時間倍率が正でない場合。
        """
        d = float(loop_duration_ms)
        if not math.isfinite(d) or d <= 0.0:
            raise InvalidConfiguration(f"loop_duration_ms は正の値が必要です: got {loop_duration_ms}")
        la = float(lookahead_fraction)
        if not math.isfinite(la) or not (0.0 < la < 1.0):
            raise InvalidConfiguration(
                f"lookahead_fraction は (0, 1) の範囲が必要です: got {lookahead_fraction}"
            )
        if time_scale is not None:
            ts = float(time_scale)
            if not math.isfinite(ts) or ts <= 0.0:
                raise InvalidConfiguration(f"time_scale は正の値が必要です: got {time_scale}")
            self._time_scale = ts
        self._loop_duration_ms = d
        self._lookahead = la
        logger.debug(
            "rig configured: loop=%.1fms lookahead=%.4f time_scale=%.4f sampling=%s",
            d,
            la,
            self._time_scale,
            self._sampling,
        )

    @property
    def curve(self) -> Curve:
        return self._curve

    @property
    def loop_duration_ms(self) -> float:
        return self._loop_duration_ms

    @property
    def lookahead_fraction(self) -> float:
        return self._lookahead

    @property
    def time_scale(self) -> float:
        return self._time_scale

    @property
    def sampling(self) -> str:
        return self._sampling

    # ── 評価 ─────────────────────────
    def phase_at(self, elapsed_ms: float) -> float:
        """経過時間からループ内の位置 `p`（[0, 1)）を求める。"""
        t = float(elapsed_ms)
        if not math.isfinite(t) or t < 0.0:
            t = 0.0
        loop = self._loop_duration_ms
        scaled = t * self._time_scale
        if not math.isfinite(scaled):
            # 倍率を掛けると溢れる巨大な t は、先に実時間の 1 周ぶんで畳む
            scaled = math.fmod(t, loop / self._time_scale) * self._time_scale
        p = math.fmod(scaled, loop) / loop
        # 浮動小数誤差で 1.0 に達した場合は先頭へ
        if p >= 1.0 or p < 0.0:
            p = 0.0
        return p

    def _point(self, p: float) -> np.ndarray:
        if self._sampling == "arc_length":
            return np.asarray(self._curve.point_at_length(p))
        return np.asarray(self._curve.point_at(p))

    def update(self, elapsed_ms: float) -> CameraPose:
        """経過時間 [ms] に対するカメラ姿勢を返す。"""
        p = self.phase_at(elapsed_ms)
        target_p = math.fmod(p + self._lookahead, 1.0)
        return CameraPose(
            position=self._point(p),
            target=self._point(target_p),
            p=p,
            target_p=target_p,
            up=self._up,
        )


__all__ = ["FlightRig", "CameraPose", "SAMPLING_MODES"]
