"""
どこで: `common` パッケージ。
何を: 例外・型・設定・LFO・レジストリなど、全層で使う軽量ユーティリティ。
なぜ: core/shapes/scene/api から再利用する共通基盤を分離し、依存の向きを単純化するため。
"""

from .base_registry import BaseRegistry
from .errors import InvalidConfiguration

__all__ = [
    "BaseRegistry",
    "InvalidConfiguration",
]
