from __future__ import annotations

import numpy as np

from engine.render.line_mesh import LineMesh


class _Buffer:
    def __init__(self, size: int) -> None:
        self.size = size
        self.data = b""
        self.released = False

    def orphan(self) -> None:
        self.data = b""

    def write(self, data: bytes) -> None:
        self.data = data

    def release(self) -> None:
        self.released = True


class _VAO:
    def __init__(self, content: list) -> None:
        self.content = content
        self.calls: list[tuple[int, int]] = []
        self.released = False

    def render(self, mode: int, count: int) -> None:
        self.calls.append((mode, count))

    def release(self) -> None:
        self.released = True


class _Ctx:
    def __init__(self) -> None:
        self.vaos: list[_VAO] = []
        self.buffers: list[_Buffer] = []

    def buffer(self, reserve: int, dynamic: bool) -> _Buffer:
        buf = _Buffer(reserve)
        self.buffers.append(buf)
        return buf

    def vertex_array(self, program, content, index_buffer=None) -> _VAO:
        vao = _VAO(content)
        self.vaos.append(vao)
        return vao


def test_binds_position_and_color_attributes() -> None:
    ctx = _Ctx()
    mesh = LineMesh(ctx, program=object())
    formats = [(fmt, attr) for _buf, fmt, attr in ctx.vaos[0].content]
    assert formats == [("3f", "in_vert"), ("4f", "in_color")]
    # 位置/色/インデックスの 3 本だけを確保する
    assert len(ctx.buffers) == 3
    assert all(b.size == mesh.initial_reserve for b in ctx.buffers)
    assert mesh.initial_reserve <= 256 * 1024


def test_upload_grows_buffers_and_rebuilds_vao() -> None:
    ctx = _Ctx()
    mesh = LineMesh(ctx, program=object(), initial_reserve=64)
    assert ctx.primitive_restart is True
    verts = np.zeros((100, 3), dtype=np.float32)
    inds = np.arange(101, dtype=np.uint32)
    mesh.upload(verts, inds)
    assert mesh.vbo.size >= verts.nbytes
    assert mesh.ibo.size >= inds.nbytes
    assert len(ctx.vaos) == 2
    assert ctx.vaos[0].released
    mesh.render(3)
    assert ctx.vaos[-1].calls == [(3, 101)]


def test_upload_colors_grows_color_buffer() -> None:
    ctx = _Ctx()
    mesh = LineMesh(ctx, program=object(), initial_reserve=64)
    colors = np.ones((100, 4), dtype=np.float32)
    mesh.upload_colors(colors)
    assert mesh.cbo.size >= colors.nbytes
    assert mesh.cbo.data == colors.tobytes()
    assert len(ctx.vaos) == 2
    # 収まる書き込みでは VAO を張り直さない
    mesh.upload_colors(colors[:10])
    assert len(ctx.vaos) == 2


def test_render_noop_when_empty() -> None:
    ctx = _Ctx()
    mesh = LineMesh(ctx, program=object())
    mesh.render(3)
    assert ctx.vaos[0].calls == []


def test_release_frees_all_buffers() -> None:
    ctx = _Ctx()
    mesh = LineMesh(ctx, program=object())
    mesh.release()
    assert all(b.released for b in ctx.buffers)
    assert ctx.vaos[0].released
