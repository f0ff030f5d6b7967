"""
どこで: `engine.scene` サブパッケージ。
何を: 曲線から描画シーン（チューブ/装飾）を構築し、時刻ごとのレイヤー列を提供。
なぜ: 形状生成（shapes）と描画（render）の間で、シーン単位の組み立てを一箇所にまとめるため。
"""

from .decorations import Decoration, control_point_markers, decoration_color, scatter_boxes
from .scene import Scene, build_scene

__all__ = [
    "Decoration",
    "Scene",
    "build_scene",
    "control_point_markers",
    "decoration_color",
    "scatter_boxes",
]
