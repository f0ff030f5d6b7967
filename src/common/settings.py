"""
どこで: `common.settings`
何を: プロジェクトの環境変数（`TBF_` 接頭辞）を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # 乱数シード（None で毎回ランダム）
    SEED: int | None = None

    # ロギング
    LOG_LEVEL: str = "INFO"

    # 弧長テーブルの分割数（Curve.lengths の既定）
    CURVE_LENGTH_DIVISIONS: int = 200

    # Renderer
    RENDER_DEBUG: bool = False


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - 整数は `env_int`、真偽は `env_bool` を使用。
    - 弧長分割数は下限 8 に丸める。
    """
    _settings.SEED = env_int("TBF_SEED", None)
    _settings.LOG_LEVEL = env_str("TBF_LOG_LEVEL", "INFO").upper()
    _settings.CURVE_LENGTH_DIVISIONS = (
        env_int("TBF_CURVE_LENGTH_DIVISIONS", 200, min_value=8) or 200
    )
    _settings.RENDER_DEBUG = env_bool("TBF_RENDER_DEBUG", False)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
