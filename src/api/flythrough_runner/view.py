"""
どこで: `api.flythrough_runner.view`。
何を: フレームごとにカメラ姿勢を更新してレンダラへ渡し、シーンのレイヤーを描画する `FlightView`。
なぜ: FrameClock（tick）と RenderWindow（draw）の両方から呼ばれる処理を 1 つの Tickable にまとめるため。
"""

from __future__ import annotations

import logging
from typing import Any

from engine.core.camera import view_from_pose
from engine.core.flight_rig import CameraPose, FlightRig
from engine.scene.scene import Scene

logger = logging.getLogger(__name__)


class FlightView:
    """リグ/シーン/レンダラを結ぶ Tickable。

    `renderer` は `set_view(view)` と `draw(layers)` を持つ任意のオブジェクト。
    """

    def __init__(self, rig: FlightRig, scene: Scene, renderer: Any) -> None:
        self.rig = rig
        self.scene = scene
        self.renderer = renderer
        self._elapsed_ms = 0.0
        self._pose: CameraPose = rig.update(0.0)
        renderer.set_view(view_from_pose(self._pose))

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed_ms

    @property
    def pose(self) -> CameraPose:
        return self._pose

    def tick(self, dt: float) -> None:
        self._elapsed_ms += max(0.0, float(dt)) * 1000.0
        self._pose = self.rig.update(self._elapsed_ms)
        self.renderer.set_view(view_from_pose(self._pose))

    def draw(self) -> None:
        self.renderer.draw(self.scene.layers(self._elapsed_ms / 1000.0))
