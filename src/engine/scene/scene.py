"""
どこで: `engine.scene.scene`。
何を: 曲線から静的なシーン（チューブ・中心線・装飾）を組み立て、時刻ごとの描画レイヤー列を返す。
なぜ: ジオメトリ生成（起動時 1 回）と色の時間変化（毎フレーム）を分け、描画側は `layers(t)` を
      受け取るだけで済むようにするため。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from common.types import RGBA
from engine.core.curve import Curve
from engine.core.geometry import Geometry
from engine.render.types import Layer
from shapes.path_line import path_line
from shapes.tube import tube
from util.color import normalize_color

from .decorations import Decoration, control_point_markers, decoration_color, scatter_boxes

logger = logging.getLogger(__name__)


@dataclass
class Scene:
    """描画対象一式。`layers(t_sec)` は共有状態を書き換えない。"""

    curve: Curve
    tube: Geometry
    decorations: tuple[Decoration, ...] = ()
    tube_color: RGBA = (1.0, 1.0, 1.0, 1.0)
    path_line: Geometry | None = None
    path_color: RGBA = (1.0, 0.0, 0.0, 1.0)
    hue_speed: float = 0.1

    @property
    def boxes(self) -> list[Decoration]:
        return [d for d in self.decorations if d.kind == "box"]

    @property
    def markers(self) -> list[Decoration]:
        return [d for d in self.decorations if d.kind == "marker"]

    def decoration_colors(self, t_sec: float) -> list[RGBA]:
        return [decoration_color(d, t_sec, self.hue_speed) for d in self.decorations]

    def layers(self, t_sec: float) -> list[Layer]:
        """時刻 `t_sec` [秒] の描画レイヤー列（チューブ → 中心線 → 装飾の順）。"""
        out = [Layer(geometry=self.tube, color=self.tube_color, name="tube")]
        if self.path_line is not None:
            out.append(Layer(geometry=self.path_line, color=self.path_color, name="path"))
        for d, color in zip(self.decorations, self.decoration_colors(t_sec)):
            out.append(Layer(geometry=d.geometry, color=color, name=d.kind))
        return out


def build_scene(
    curve: Curve,
    *,
    tubular_segments: int = 222,
    tube_radius: float = 0.65,
    radial_segments: int = 16,
    tube_color: object = "#ffffff",
    box_count: int = 55,
    box_size: float = 0.075,
    box_jitter: Sequence[float] = (-0.4, 0.6),
    show_markers: bool = True,
    marker_radius: float = 0.05,
    show_path_line: bool = False,
    path_color: object = "#ff0000",
    hue_speed: float = 0.1,
    rng: np.random.Generator | None = None,
) -> Scene:
    """曲線から Scene を構築する。

    乱数は `rng` からのみ引くため、同じシードの Generator なら同じ配置になる。
    """
    rng = rng if rng is not None else np.random.default_rng()
    tube_geo = tube(
        curve=curve,
        tubular_segments=tubular_segments,
        radius=tube_radius,
        radial_segments=radial_segments,
    )
    decorations: list[Decoration] = scatter_boxes(
        curve,
        count=box_count,
        size=box_size,
        jitter=(float(box_jitter[0]), float(box_jitter[1])),
        rng=rng,
    )
    if show_markers:
        decorations.extend(control_point_markers(curve, radius=marker_radius))
    line_geo = path_line(curve=curve) if show_path_line else None

    scene = Scene(
        curve=curve,
        tube=tube_geo,
        decorations=tuple(decorations),
        tube_color=normalize_color(tube_color),
        path_line=line_geo,
        path_color=normalize_color(path_color),
        hue_speed=float(hue_speed),
    )
    logger.debug(
        "scene built: tube verts=%d, decorations=%d",
        tube_geo.n_vertices,
        len(scene.decorations),
    )
    return scene


__all__ = ["Scene", "build_scene"]
