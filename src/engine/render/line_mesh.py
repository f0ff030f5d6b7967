"""
どこで: `engine.render` の低レベルメッシュ層。
何を: VBO/CBO/IBO/VAO の確保・更新・解放を担当し、描画可能な LineMesh を管理。
なぜ: GPU 転送の詳細を Renderer から切り離し、再確保や VAO の張り直しを一元化するため。
"""

from __future__ import annotations

from typing import Any

import numpy as np


class LineMesh:
    """シーン全体の頂点/色/インデックスを GPU に保持する。

    - VBO: 頂点座標（float32, (N, 3)）。
    - CBO: 頂点色（float32, (N, 4)）。位置とは別に毎フレーム書き換えられる。
    - IBO: 描画順のインデックス。ポリラインの区切りに primitive restart index を挟む。
    - VAO: VBO/CBO/IBO をプログラムの `in_vert`/`in_color` に結び付ける。
    """

    def __init__(
        self,
        ctx: Any,
        program: Any,
        # 既定シーン（チューブ + 装飾）が収まる程度を初期確保し、足りなければ拡張する
        initial_reserve: int = 256 * 1024,
        primitive_restart_index: int = 0xFFFFFFFF,
    ):
        self.ctx = ctx
        self.program = program
        self.initial_reserve = initial_reserve
        self.primitive_restart_index = primitive_restart_index

        self.vbo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.cbo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.ibo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.vao = self._build_vao()

        self.index_count: int = 0
        self.ctx.primitive_restart = True  # type: ignore
        self.ctx.primitive_restart_index = primitive_restart_index  # type: ignore

    def _build_vao(self) -> Any:
        return self.ctx.vertex_array(
            self.program,
            [(self.vbo, "3f", "in_vert"), (self.cbo, "4f", "in_color")],
            index_buffer=self.ibo,
        )

    def _grow(self, name: str, size: int) -> bool:
        buf = getattr(self, name)
        if size <= buf.size:
            return False
        buf.release()
        setattr(self, name, self.ctx.buffer(reserve=max(size, self.initial_reserve), dynamic=True))
        return True

    def _ensure_capacity(self, **sizes: int) -> None:
        """容量が足りなければバッファを再確保し、VAO を張り直す。"""
        grown = [self._grow(name, size) for name, size in sizes.items()]
        if any(grown):
            self.vao.release()
            self.vao = self._build_vao()

    def upload(self, vertices: np.ndarray, indices: np.ndarray) -> None:
        self._ensure_capacity(vbo=vertices.nbytes, ibo=indices.nbytes)

        self.vbo.orphan()
        self.vbo.write(vertices.tobytes())

        self.ibo.orphan()
        self.ibo.write(indices.tobytes())

        self.index_count = len(indices)

    def upload_colors(self, colors: np.ndarray) -> None:
        """頂点色 (N, 4) を書き込む。"""
        data = np.ascontiguousarray(colors, dtype=np.float32)
        self._ensure_capacity(cbo=data.nbytes)
        self.cbo.orphan()
        self.cbo.write(data.tobytes())

    def render(self, mode: int) -> None:
        if self.index_count > 0:
            self.vao.render(mode, self.index_count)

    def release(self) -> None:
        """GPU メモリを解放する（終了時）。"""
        self.vbo.release()
        self.cbo.release()
        self.ibo.release()
        self.vao.release()
