"""
どこで: `engine.core` の簡易フレームドライバ。
何を: `Tickable` の列を固定順序で呼び出す FrameClock（dt 測定・経過時間の積算）。
なぜ: pyglet のスケジューラから呼ぶだけで、カメラ/シーン/レンダラの更新順と時刻を統一するため。
"""

from __future__ import annotations

import time
from typing import Sequence

from .tickable import Tickable


class FrameClock:
    """登録された Tickable を固定順序で実行し、経過時間を積算する極小クラス。"""

    def __init__(self, tickables: Sequence[Tickable] = ()):
        self._tickables = tuple(tickables)
        self._last_time = time.perf_counter()
        self._elapsed = 0.0
        self._frames = 0

    @property
    def elapsed_sec(self) -> float:
        return self._elapsed

    @property
    def elapsed_ms(self) -> float:
        """開始からの経過時間 [ms]（単調非減少）。"""
        return self._elapsed * 1000.0

    @property
    def frames(self) -> int:
        return self._frames

    # GUI フレームワークから schedule_interval で呼ばせる
    def tick(self, dt: float | None = None) -> None:
        if dt is None:  # pyglet は dt を渡してくれる
            now = time.perf_counter()  # 他フレームワーク用
            dt = now - self._last_time
            self._last_time = now

        # 時計の巻き戻りは無視（経過時間は単調）
        dt = max(0.0, float(dt))
        self._elapsed += dt
        self._frames += 1
        for t in self._tickables:
            t.tick(dt)
