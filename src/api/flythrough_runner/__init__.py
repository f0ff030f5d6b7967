"""
どこで: `api.flythrough_runner` パッケージ。
何を: `api.flythrough` が使う設定解決/描画初期化/フレームビューの補助モジュール群。
なぜ: ランナー本体を薄く保ち、GL に依存しない部分を単体で検証できるようにするため。
"""

from .config import FlythroughConfig, load_flythrough_config, merge_flythrough

__all__ = ["FlythroughConfig", "load_flythrough_config", "merge_flythrough"]
