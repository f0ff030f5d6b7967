"""
どこで: `engine.core` サブパッケージ。
何を: 閉曲線（Curve/PathGenerator）・カメラリグ（FlightRig）・カメラ行列・Geometry・フレーム駆動を提供。
なぜ: 計算の中核を描画や GUI から切り離し、上位層（scene/render/api）から再利用可能にするため。
"""

from .curve import Curve
from .flight_rig import CameraPose, FlightRig
from .path_generator import PathGenerator, generate_path

__all__ = ["Curve", "PathGenerator", "generate_path", "FlightRig", "CameraPose"]
