"""
統合 Geometry 型（ポリライン集合）

チューブのワイヤーフレーム・箱の辺・マーカーの円・中心線など、描画されるものはすべて
`Geometry` で表す。生成（shapes）、配置（scene）、描画（render）の境界をこの 1 型に揃える。

データモデル（不変条件）:
- `coords: float32 ndarray (N, 3)`: 全頂点を 1 本の連続メモリで保持（行は XYZ）。
- `offsets: int32 ndarray (M+1,)`: 各ポリラインの開始 index（末尾は必ず N）。
- i 本目の線は `coords[offsets[i] : offsets[i+1]]`。

直感図（線0は3点、線1は2点）:

    # coords (N=5): [P0, P1, P2, Q0, Q1]
    # offsets     : [0, 3, 5]
    #   線0 = coords[0:3], 線1 = coords[3:5]

変換はすべて純関数で、新しい `Geometry` を返す。
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from common.types import Vec3

NumberLike = float | int
LineLike = np.ndarray | Sequence[NumberLike] | Sequence[Sequence[NumberLike]]


def _normalize_geometry_input(
    coords: np.ndarray,
    offsets: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """`Geometry` 生成時の内部正規化ヘルパ。"""

    coords_arr = np.ascontiguousarray(coords, dtype=np.float32)
    if coords_arr.ndim != 2 or coords_arr.shape[1] != 3:
        raise ValueError("coords は形状 (N, 3) の配列である必要があります。")

    offsets_arr = np.ascontiguousarray(offsets, dtype=np.int32)
    if offsets_arr.ndim != 1 or offsets_arr.size == 0:
        raise ValueError("offsets は 1 要素以上の 1 次元配列である必要があります。")
    if offsets_arr[0] != 0:
        raise ValueError("offsets[0] は常に 0 である必要があります。")
    if offsets_arr[-1] != coords_arr.shape[0]:
        raise ValueError("offsets[-1] は coords の行数と一致する必要があります。")
    if np.any(np.diff(offsets_arr) < 0):
        raise ValueError("offsets は単調非減少である必要があります。")
    return coords_arr, offsets_arr


def _rotation_matrix(x: float, y: float, z: float) -> np.ndarray:
    """X→Y→Z の順に適用する右手系回転行列（列ベクトル規約）。"""
    cx, sx = np.cos(x), np.sin(x)
    cy, sy = np.cos(y), np.sin(y)
    cz, sz = np.cos(z), np.sin(z)
    rx = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]], dtype=np.float64)
    ry = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]], dtype=np.float64)
    rz = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]], dtype=np.float64)
    return rz @ ry @ rx


class Geometry:
    """ポリライン集合。

    フィールド:
    - `coords (N,3) float32`
    - `offsets (M+1,) int32`
    """

    __slots__ = ("coords", "offsets")

    coords: np.ndarray
    offsets: np.ndarray

    def __init__(self, coords: np.ndarray, offsets: np.ndarray) -> None:
        self.coords, self.offsets = _normalize_geometry_input(coords, offsets)

    @classmethod
    def from_lines(cls, lines: Iterable[LineLike]) -> "Geometry":
        """線の列を統一表現に正規化して `Geometry` を生成する。

        各要素は `(K, 3)` の座標列、`(K, 2)`（Z=0 を補完）、または `(3K,)` の 1 次元ベクトル。

        Raises
        ------
        ValueError
            上記いずれの形状にも適合しない場合。
        """
        np_lines: list[np.ndarray] = []
        for line in lines:
            arr = np.asarray(line, dtype=np.float32)
            if arr.ndim == 1:
                if arr.size % 3 != 0:
                    raise ValueError(
                        "1次元入力の長さは3の倍数である必要があります（(x, y, z) の並び）"
                    )
                arr = arr.reshape(-1, 3)
            elif arr.ndim != 2:
                raise ValueError(f"座標配列の形状が不正です: {arr.shape}")
            elif arr.shape[1] == 2:
                arr = np.hstack([arr, np.zeros((arr.shape[0], 1), dtype=np.float32)])
            elif arr.shape[1] != 3:
                raise ValueError(f"座標配列の形状が不正です: {arr.shape}")
            np_lines.append(arr)

        if not np_lines:
            return cls(np.empty((0, 3), dtype=np.float32), np.array([0], dtype=np.int32))

        counts = np.array([a.shape[0] for a in np_lines], dtype=np.int32)
        offsets = np.concatenate([[0], np.cumsum(counts)]).astype(np.int32)
        return cls(np.concatenate(np_lines, axis=0), offsets)

    # ── 基本操作（すべて純粋） ────────
    def as_arrays(self, *, copy: bool = False) -> tuple[np.ndarray, np.ndarray]:
        """`(coords, offsets)` を返す。`copy=False` では読み取り専用ビュー。"""
        if copy:
            return self.coords.copy(), self.offsets.copy()
        coords_view = self.coords.view()
        offsets_view = self.offsets.view()
        coords_view.setflags(write=False)
        offsets_view.setflags(write=False)
        return coords_view, offsets_view

    @property
    def is_empty(self) -> bool:
        return self.coords.size == 0

    def lines(self) -> list[np.ndarray]:
        """各ポリラインのビュー列。"""
        o = self.offsets
        return [self.coords[o[i] : o[i + 1]] for i in range(len(o) - 1)]

    def translate(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> "Geometry":
        """平行移動（純関数）。"""
        vec = np.array([dx, dy, dz], dtype=np.float32)
        return Geometry(self.coords + vec, self.offsets.copy())

    def scale(
        self,
        sx: float,
        sy: float | None = None,
        sz: float | None = None,
        center: Vec3 = (0.0, 0.0, 0.0),
    ) -> "Geometry":
        """拡大縮小（純関数）。`sy/sz` 省略時は等方。"""
        factors = np.array(
            [sx, sx if sy is None else sy, sx if sz is None else sz], dtype=np.float32
        )
        c = np.asarray(center, dtype=np.float32)
        return Geometry((self.coords - c) * factors + c, self.offsets.copy())

    def rotate(
        self,
        x: float = 0.0,
        y: float = 0.0,
        z: float = 0.0,
        center: Vec3 = (0.0, 0.0, 0.0),
    ) -> "Geometry":
        """回転（純関数）。X→Y→Z の順に右手系で適用。角度はラジアン。

        例として `(1, 0, 0)` を Z 軸に `π/2` 回転すると `(0, 1, 0)`。
        """
        if self.is_empty or (x == 0 and y == 0 and z == 0):
            return Geometry(self.coords.copy(), self.offsets.copy())
        c = np.asarray(center, dtype=np.float64)
        rot = _rotation_matrix(x, y, z)
        out = (self.coords.astype(np.float64) - c) @ rot.T + c
        return Geometry(out, self.offsets.copy())

    def concat(self, other: "Geometry") -> "Geometry":
        """ポリライン集合の連結（純関数）。後段の offsets を先行頂点数だけシフトする。"""
        if self.is_empty:
            return Geometry(other.coords.copy(), other.offsets.copy())
        if other.is_empty:
            return Geometry(self.coords.copy(), self.offsets.copy())
        new_coords = np.vstack([self.coords, other.coords])
        new_offsets = np.hstack([self.offsets, other.offsets[1:] + self.coords.shape[0]])
        return Geometry(new_coords, new_offsets)

    def __add__(self, other: "Geometry") -> "Geometry":
        return self.concat(other)

    def __len__(self) -> int:
        """ポリライン本数（`M`）。"""
        return int(self.offsets.shape[0] - 1)

    @property
    def n_vertices(self) -> int:
        return int(self.coords.shape[0])

    @property
    def n_lines(self) -> int:
        return len(self)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"Geometry(N={self.n_vertices}, M={self.n_lines})"


def concat_all(geometries: Iterable[Geometry]) -> Geometry:
    """複数の Geometry を 1 つに連結する（空列なら空ジオメトリ）。"""
    coords: list[np.ndarray] = []
    offsets: list[np.ndarray] = [np.array([0], dtype=np.int64)]
    base = 0
    for g in geometries:
        if g.is_empty:
            continue
        coords.append(g.coords)
        offsets.append(g.offsets[1:].astype(np.int64) + base)
        base += g.n_vertices
    if not coords:
        return Geometry.from_lines([])
    return Geometry(np.concatenate(coords, axis=0), np.concatenate(offsets))


__all__ = ["Geometry", "LineLike", "concat_all"]
