"""
どこで: `engine.render` の高レベル描画。
何を: レイヤー（色付き `Geometry`）を 1 本の頂点/インデックス列にまとめて ModernGL に転送し、
      カメラ行列とフォグを設定して 1 回の LINE_STRIP で線を描画する。
なぜ: アップロード/描画/リソース寿命を一箇所に集約し、ホスト側の描画処理を単純化するため。
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

import moderngl as mgl
import numpy as np

from common.settings import get as get_settings
from engine.core.camera import as_gl_bytes
from engine.core.geometry import Geometry, concat_all
from util.color import normalize_color
from util.constants import DEFAULT_BACKGROUND, DEFAULT_LINE_COLOR, PRIMITIVE_RESTART_INDEX

from .types import Layer, RGBA

logger = logging.getLogger(__name__)


class LineRenderer:
    """レイヤー列を毎フレーム描画する。

    全レイヤーを単一の `LineMesh` に連結して保持する。
    - 位置/インデックス: レイヤーの Geometry オブジェクト列が変わったときだけ再アップロード。
    - 色: レイヤー単位の RGBA を頂点へ展開した小さなバッファ。色が変わったフレームだけ書き換える。
    """

    def __init__(
        self,
        mgl_context: Any,
        projection_matrix: np.ndarray,
        *,
        line_color: object = DEFAULT_LINE_COLOR,
        fog_color: object = DEFAULT_BACKGROUND,
        fog_density: float = 0.3,
        mesh_factory: Callable[[], Any] | None = None,
    ):
        self.ctx = mgl_context

        from .line_mesh import LineMesh  # local import
        from .shader import Shader  # local import

        self.line_program = Shader.create_shader(mgl_context)
        self.set_projection(projection_matrix)
        self.set_view(np.eye(4, dtype=np.float32))
        # 基準色を保持（レイヤー未指定時に使用）
        self._base_line_color: RGBA = normalize_color(line_color)
        self.set_fog(fog_density, fog_color)

        if mesh_factory is None:

            def mesh_factory() -> Any:
                return LineMesh(
                    ctx=mgl_context,
                    program=self.line_program,
                    primitive_restart_index=PRIMITIVE_RESTART_INDEX,
                )

        self.gpu = mesh_factory()
        # 直近にアップロードしたレイヤー Geometry 列（同一性で比較）
        self._geometries: tuple[Geometry, ...] = ()
        self._vertex_counts = np.zeros(0, dtype=np.int64)
        self._layer_colors: np.ndarray | None = None
        self._uploads = 0
        self._color_uploads = 0
        self._last_vertex_count = 0
        self._last_line_count = 0
        self._debug = bool(get_settings().RENDER_DEBUG)

    # ------------------------------------------------------------------ #
    # uniforms                                                             #
    # ------------------------------------------------------------------ #
    def set_projection(self, projection: np.ndarray) -> None:
        self.line_program["projection"].write(as_gl_bytes(projection))

    def set_view(self, view: np.ndarray) -> None:
        self.line_program["view"].write(as_gl_bytes(view))

    def set_camera(self, view: np.ndarray, projection: np.ndarray | None = None) -> None:
        """view（と任意で projection）行列を更新する。行列は行優先で受け取る。"""
        self.set_view(view)
        if projection is not None:
            self.set_projection(projection)

    def set_fog(self, density: float, color: object = DEFAULT_BACKGROUND) -> None:
        """指数二乗フォグの密度と色を設定する。密度 0 でフォグ無効。"""
        d = float(density)
        if not np.isfinite(d) or d < 0.0:
            raise ValueError(f"fog density は 0 以上の有限値が必要です: got {density}")
        r, g, b, _a = normalize_color(color)
        self.line_program["fog_density"].value = d
        self.line_program["fog_color"].value = (r, g, b)

    # ------------------------------------------------------------------ #
    # drawing                                                              #
    # ------------------------------------------------------------------ #
    def draw(self, layers: Sequence[Layer]) -> None:
        """レイヤーを 1 回の描画で描く。空の Geometry は飛ばす。"""
        visible = [
            layer for layer in layers if layer.geometry is not None and not layer.geometry.is_empty
        ]
        if not visible:
            self._last_vertex_count = 0
            self._last_line_count = 0
            return

        geometries = tuple(layer.geometry for layer in visible)
        if not self._same_geometries(geometries):
            self._upload_geometries(geometries)

        colors = np.array(
            [
                normalize_color(layer.color) if layer.color is not None else self._base_line_color
                for layer in visible
            ],
            dtype=np.float32,
        )
        if self._layer_colors is None or not np.array_equal(colors, self._layer_colors):
            self.gpu.upload_colors(np.repeat(colors, self._vertex_counts, axis=0))
            self._layer_colors = colors
            self._color_uploads += 1

        self.gpu.render(mgl.LINE_STRIP)
        self._last_vertex_count = int(self._vertex_counts.sum())
        self._last_line_count = sum(g.n_lines for g in geometries)
        if self._debug:
            logger.debug(
                "draw: layers=%d verts=%d lines=%d uploads=%d color_uploads=%d",
                len(visible),
                self._last_vertex_count,
                self._last_line_count,
                self._uploads,
                self._color_uploads,
            )

    def _same_geometries(self, geometries: tuple[Geometry, ...]) -> bool:
        if len(geometries) != len(self._geometries):
            return False
        return all(a is b for a, b in zip(geometries, self._geometries))

    def _upload_geometries(self, geometries: tuple[Geometry, ...]) -> None:
        merged = concat_all(geometries)
        verts, inds = _geometry_to_vertices_indices(merged, PRIMITIVE_RESTART_INDEX)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Uploading geometry: layers=%d verts=%d (%.1f KB), inds=%d (%.1f KB)",
                len(geometries),
                len(verts),
                verts.nbytes / 1024.0,
                len(inds),
                inds.nbytes / 1024.0,
            )
        self.gpu.upload(verts, inds)
        self._geometries = geometries
        self._vertex_counts = np.array([g.n_vertices for g in geometries], dtype=np.int64)
        # 頂点数が変われば色バッファも張り直す
        self._layer_colors = None
        self._uploads += 1

    def get_last_counts(self) -> tuple[int, int]:
        """直近 draw の頂点数/ライン数。"""
        return int(self._last_vertex_count), int(self._last_line_count)

    @property
    def upload_count(self) -> int:
        return self._uploads

    @property
    def color_upload_count(self) -> int:
        return self._color_uploads

    def release(self) -> None:
        """GPU リソースを解放。"""
        self.gpu.release()
        self.line_program.release()


# ---------- utility -------------------------------------------------------- #
def _geometry_to_vertices_indices(
    geometry: Geometry,
    primitive_restart_index: int,
) -> tuple[np.ndarray, np.ndarray]:
    """Geometry を VBO/IBO 用の配列に変換する。

    各ポリラインの終端直後に primitive restart index を挿入し、1 回の LINE_STRIP 描画で
    全ラインを描けるようにする。
    """
    coords = geometry.coords
    offsets = geometry.offsets

    num_lines = len(offsets) - 1
    total_verts = len(coords)
    total_inds = total_verts + num_lines

    indices = np.empty(total_inds, dtype=np.uint32)
    # 再始動位置（各ライン終端の直後）: offsets[1:] + 行番号
    restart_pos = offsets[1:].astype(np.int64) + np.arange(num_lines, dtype=np.int64)
    mask = np.zeros(total_inds, dtype=bool)
    mask[restart_pos] = True
    indices[~mask] = np.arange(total_verts, dtype=np.uint32)
    indices[mask] = np.uint32(primitive_restart_index)
    return coords, indices
