"""
どこで: `engine.render` 型定義。
何を: レイヤー描画用の軽量データクラス `Layer`。
なぜ: 1 フレーム内で色が異なる複数のジオメトリ（チューブ/箱/マーカー）を順描画するためのコンテナ。
"""

from __future__ import annotations

from dataclasses import dataclass

from common.types import RGBA
from engine.core.geometry import Geometry


@dataclass(frozen=True)
class Layer:
    """色付きの描画レイヤー。"""

    geometry: Geometry
    color: RGBA | None  # None なら Renderer の基準色を使用
    name: str | None = None


__all__ = ["Layer", "RGBA"]
