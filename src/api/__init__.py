"""
どこで: `api` 入口（高レベル公開 API）。
何を: 形状 `G`・装飾子 `shape`・`Geometry`・経路生成/カメラリグ・ランナー `run_flythrough` を再輸出。
なぜ: 利用者が単一名前空間から経路生成 → シーン構築 → 実行まで完結できるようにするため。

Usage:
    from api import FlightRig, generate_path, run_flythrough

    curve = generate_path(10, 5.0, seed=42)
    rig = FlightRig(curve, loop_duration_ms=8000, lookahead_fraction=0.03)
    pose = rig.update(1000.0)

    run_flythrough(seed=42)
"""

from common.errors import InvalidConfiguration
from common.lfo import lfo
from engine.core.curve import Curve
from engine.core.flight_rig import CameraPose, FlightRig
from engine.core.geometry import Geometry
from engine.core.path_generator import PathGenerator, generate_path
from shapes.registry import shape as shape  # 公開唯一経路（api.shape）

from .flythrough import build_flythrough, run_flythrough
from .flythrough import run_flythrough as run
from .shapes import G, ShapesAPI

__all__ = [
    # メインAPI
    "G",
    "shape",
    "run_flythrough",
    "run",
    "build_flythrough",
    "generate_path",
    "lfo",
    # クラス（高度な使用）
    "Curve",
    "PathGenerator",
    "FlightRig",
    "CameraPose",
    "Geometry",
    "ShapesAPI",
    "InvalidConfiguration",
]

__version__ = "0.1.0"
