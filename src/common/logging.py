"""
どこで: `common.logging`。
何を: ランナー/CLI 向けにロギングの最小構成を 1 度だけ適用するヘルパ。
なぜ: 各モジュールは `logging.getLogger(__name__)` を使うだけにし、ハンドラ設定をアプリ入口に集約するため。
"""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: int | str | None) -> int:
    """レベル指定（名前/数値/None）を `logging` の数値レベルへ解決する。

    None の場合は `common.settings` の `LOG_LEVEL`（`TBF_LOG_LEVEL`）を使う。
    不明な名前は INFO。
    """
    if level is None:
        from .settings import get as _get_settings

        level = _get_settings().LOG_LEVEL
    if isinstance(level, str):
        lvl = logging.getLevelName(level.strip().upper())
        return lvl if isinstance(lvl, int) else logging.INFO
    return int(level)


def setup_default_logging(level: int | str | None = None) -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば、明示指定時のみレベルを合わせる
    - `run_flythrough`/`main.py` から呼び出す想定
    """
    root = logging.getLogger()
    if root.handlers:
        # Assume the app has configured logging
        if level is not None:
            root.setLevel(resolve_level(level))
        return
    logging.basicConfig(level=resolve_level(level), format=_FORMAT)


__all__ = ["setup_default_logging", "resolve_level"]
