"""
どこで: `api.flythrough_runner.utils`（純粋関数/小ヘルパ）。
何を: FPS/ウィンドウサイズ/シードの解決と投影行列の構築を提供。
なぜ: `api.flythrough` を薄く保ち、テスト容易性と再利用性を上げるため。
"""

from __future__ import annotations

import numpy as np

from common.settings import get as get_settings
from engine.core.camera import perspective


def resolve_fps(requested_fps: int | None, *, default: int = 60) -> int:
    """FPS を解決して 1 以上の int を返す。

    - 明示指定があればそれを優先（数値化できない値は既定へ）。
    - 0 以下は 1 に切り上げる。
    """
    if requested_fps is None:
        return max(1, int(default))
    try:
        return max(1, int(requested_fps))
    except (TypeError, ValueError):
        return max(1, int(default))


def resolve_window_size(
    window_size: tuple[int, int] | None, *, default: tuple[int, int] = (1280, 720)
) -> tuple[int, int]:
    """ウィンドウサイズ [px] を解決する。正でない/不正な値は `ValueError`。"""
    src = default if window_size is None else window_size
    try:
        w, h = int(src[0]), int(src[1])
    except (TypeError, ValueError, IndexError) as e:
        raise ValueError(f"invalid window_size: {window_size!r}") from e
    if w <= 0 or h <= 0:
        raise ValueError(f"window_size must be positive, got: {(w, h)}")
    return w, h


def resolve_seed(requested_seed: int | None, config_seed: int | None) -> int | None:
    """シードを 引数 > 設定ファイル > 環境変数 `TBF_SEED` の順で解決する（全て無ければ None）。"""
    if requested_seed is not None:
        return int(requested_seed)
    if config_seed is not None:
        return int(config_seed)
    return get_settings().SEED


def build_projection(width: int, height: int, *, fov: float, near: float, far: float) -> np.ndarray:
    """ウィンドウのアスペクト比に合わせた透視投影行列（行優先）を返す。"""
    aspect = float(width) / float(max(1, height))
    return perspective(fov, aspect, near, far)


__all__ = ["resolve_fps", "resolve_window_size", "resolve_seed", "build_projection"]
