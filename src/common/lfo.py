"""
どこで: `common.lfo`
何を: 時間 t [秒] を入力として lo..hi の値を返す LFO（低周波オシレータ）の純粋ロジック。
なぜ: 色相サイクルやマーカーの明滅など、時間変調を純関数で表すため。エンジン/IO に非依存。

設計方針:
- 純粋・決定的。副作用なし。
- 波形: sine/triangle/saw_up/saw_down/square。
- 範囲: 0..1 を既定とし、`lo..hi` へ線形射影の上で最終 clamp。
- 周波数/周期: `period` 指定時は優先（freq=1/period）。
"""

from __future__ import annotations

import math

WAVES = ("sine", "triangle", "saw_up", "saw_down", "square")


def frac(x: float) -> float:
    """x の小数部（0.0 <= r < 1.0）。負の値にも安定。"""
    r = x - math.floor(x)
    # ULP 誤差で 1.0 に丸まるケースのガード
    if r < 0.0 or r >= 1.0:
        return 0.0
    return r


def _eval_bipolar(wave: str, phi: float) -> float:
    """位相 `phi` (0..1) における波形値（-1..1）。"""
    if wave == "sine":
        return math.sin(2.0 * math.pi * phi)
    if wave == "triangle":
        return 4.0 * phi - 1.0 if phi < 0.5 else 3.0 - 4.0 * phi
    if wave == "saw_up":
        return 2.0 * phi - 1.0
    if wave == "saw_down":
        return 1.0 - 2.0 * phi
    # square
    return 1.0 if phi < 0.5 else -1.0


class LFO:
    """LFO（低周波オシレータ）。`__call__(t)` で lo..hi を返す。

    引数:
        wave: 波形種別（"sine"/"triangle"/"saw_up"/"saw_down"/"square"）。
        freq: 周波数 [Hz]。`period` 指定時は無視される。
        period: 周期 [秒]。指定時は `freq = 1/period`。
        phase: 位相 [周期単位]。wrap される。
        lo: 出力下限。
        hi: 出力上限。
    """

    __slots__ = ("_wave", "_freq", "_phase", "_lo", "_hi")

    def __init__(
        self,
        *,
        wave: str = "sine",
        freq: float | None = 1.0,
        period: float | None = None,
        phase: float = 0.0,
        lo: float = 0.0,
        hi: float = 1.0,
    ) -> None:
        w = (wave or "sine").lower()
        if w not in WAVES:
            raise ValueError(f"未知の波形です: {wave!r}（{', '.join(WAVES)}）")
        if hi <= lo:
            raise ValueError("hi は lo より大きい必要がある")
        if period is not None:
            if period <= 0.0:
                raise ValueError("period は正の値が必要")
            f = 1.0 / float(period)
        else:
            f = float(freq if freq is not None else 1.0)
            if f <= 0.0:
                raise ValueError("freq は正の値が必要")

        self._wave = w
        self._freq = f
        self._phase = float(phase)
        self._lo = float(lo)
        self._hi = float(hi)

    @property
    def freq(self) -> float:
        return self._freq

    def phase_at(self, t: float) -> float:
        """時刻 `t` [秒] の位相（0..1）。"""
        return frac(self._freq * float(t) + self._phase)

    def __call__(self, t: float) -> float:
        """時刻 `t` [秒] を評価して lo..hi の値を返す。"""
        y = _eval_bipolar(self._wave, self.phase_at(t))  # [-1,1]
        n = (y + 1.0) * 0.5  # 0..1
        out = self._lo + (self._hi - self._lo) * n
        # 最終 clamp（数値誤差ガード）
        if out < self._lo:
            return self._lo
        if out > self._hi:
            return self._hi
        return out


def lfo(
    wave: str = "sine",
    *,
    freq: float | None = 1.0,
    period: float | None = None,
    phase: float = 0.0,
    lo: float = 0.0,
    hi: float = 1.0,
) -> LFO:
    """LFO を構成して返すファクトリ。

    返り値:
        LFO: `__call__(t: float) -> float` を持つ呼び出し可能。
    """
    return LFO(wave=wave, freq=freq, period=period, phase=phase, lo=lo, hi=hi)


__all__ = ["LFO", "lfo", "frac", "WAVES"]
