"""
閉じた Catmull-Rom 曲線（飛行経路/チューブ中心線の唯一の表現）

本モジュールは、制御点列を生成順に通る閉曲線 `Curve` を提供する。チューブの押し出し
（`shapes.tube`）とカメラリグ（`engine.core.flight_rig`）は同じ `Curve` を明示的に受け取り、
メッシュ内部のパラメータから経路を逆引きすることはしない。

データモデル（不変条件）:
- `control_points: float64 ndarray (n, 3)`, `n >= 3`。生成後は書き込み禁止。
- `point_at(0) == point_at(1)`（閉曲線）。`point_at(p)` は周期 1 の連続関数。
- 各制御点 i は `p = i / n` で厳密に通過する（区間は制御点ごとに等分）。

パラメータ化:
- `point_at(p)` はパラメトリック（区間等分）。制御点間隔が不均一なら速度も不均一になる。
- `point_at_length(u)` は弧長テーブルを介した等速版（`u` は全長に対する比）。

補間の種類:
- `centripetal`（既定, alpha=0.5）/ `chordal`（alpha=1.0）: 非一様 Catmull-Rom。
- `catmullrom`: 一様 Catmull-Rom（`tension` で接線の強さを調整、0.5 が標準）。

直感図（n=4 の閉曲線、p は区間ごとに 1/4 ずつ）:

    #   p=0.00 -> P0 ── P1 <- p=0.25
    #             │      │
    #   p=0.75 -> P3 ── P2 <- p=0.50
    #   p=1.00 は P0 に戻る

使用例:
    from engine.core.path_generator import generate_path
    curve = generate_path(10, 5.0, seed=42)
    pos = curve.point_at(0.25)            # (3,)
    pts = curve.point_at(np.linspace(0, 1, 100, endpoint=False))  # (100, 3)
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from common.errors import InvalidConfiguration
from common.types import Point3

CURVE_TYPES = ("centripetal", "chordal", "catmullrom")

# 非一様 Catmull-Rom の距離指数（|Pi - Pj|^(2*alpha) を二乗距離から求める）
_DIST_POW = {"centripetal": 0.25, "chordal": 0.5}

# 重複制御点で区間幅が 0 になるのを避ける閾値
_MIN_KNOT = 1e-4


def _wrap01(t: np.ndarray) -> np.ndarray:
    """任意の実数を [0, 1) に畳み込む（負値も周期的に扱う）。"""
    w = t - np.floor(t)
    # -1e-20 のような値は 1.0 に丸まるので 0 へ寄せる
    w[w >= 1.0] = 0.0
    return w


def _cubic_coeffs(
    x0: np.ndarray, x1: np.ndarray, t0: np.ndarray, t1: np.ndarray
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """端点 x0,x1 と接線 t0,t1 から Hermite 3 次多項式の係数を返す。"""
    c0 = x0
    c1 = t0
    c2 = -3.0 * x0 + 3.0 * x1 - 2.0 * t0 - t1
    c3 = 2.0 * x0 - 2.0 * x1 + t0 + t1
    return c0, c1, c2, c3


def _rotate_about_axis(v: np.ndarray, axis: np.ndarray, angle: float) -> np.ndarray:
    """単位ベクトル `axis` 周りに `v` を `angle` [rad] 回転（Rodrigues）。"""
    c = math.cos(angle)
    s = math.sin(angle)
    return v * c + np.cross(axis, v) * s + axis * float(np.dot(axis, v)) * (1.0 - c)


class Curve:
    """制御点列を通る閉じた Catmull-Rom 曲線。

    フィールド:
    - `control_points (n,3) float64`: 読み取り専用。
    - `curve_type`: `"centripetal" | "chordal" | "catmullrom"`。
    - `tension`: `catmullrom` のときのみ使用。

    設計意図:
    - 生成後は不変。フレーム更新やデコレーション配置など複数の読み手が同時に参照できる。
    - 問い合わせはすべて純関数。弧長テーブルだけは初回問い合わせ時にメモ化する。
    """

    __slots__ = ("_points", "_curve_type", "_tension", "_length_divisions", "_lengths_cache")

    def __init__(
        self,
        points: Sequence[Sequence[float]] | np.ndarray,
        *,
        curve_type: str = "centripetal",
        tension: float = 0.5,
        length_divisions: int | None = None,
    ) -> None:
        pts = np.array(points, dtype=np.float64)
        if pts.ndim != 2 or pts.shape[1] != 3:
            raise InvalidConfiguration(f"制御点は形状 (n, 3) である必要があります: {pts.shape}")
        if pts.shape[0] < 3:
            raise InvalidConfiguration(
                f"閉曲線には 3 点以上の制御点が必要です: got {pts.shape[0]}"
            )
        if not np.all(np.isfinite(pts)):
            raise InvalidConfiguration("制御点に NaN/Inf が含まれています")
        ct = str(curve_type).lower()
        if ct not in CURVE_TYPES:
            raise InvalidConfiguration(
                f"未知の curve_type です: {curve_type!r}（{', '.join(CURVE_TYPES)}）"
            )
        if length_divisions is None:
            from common.settings import get as _get_settings

            length_divisions = _get_settings().CURVE_LENGTH_DIVISIONS
        if int(length_divisions) < 1:
            raise InvalidConfiguration("length_divisions は 1 以上が必要です")

        pts.setflags(write=False)
        self._points = pts
        self._curve_type = ct
        self._tension = float(tension)
        self._length_divisions = int(length_divisions)
        self._lengths_cache: dict[int, np.ndarray] = {}

    # ── 基本プロパティ ───────────────────
    @property
    def control_points(self) -> np.ndarray:
        """制御点（読み取り専用 `(n, 3)`）。"""
        return self._points

    @property
    def num_points(self) -> int:
        return int(self._points.shape[0])

    @property
    def curve_type(self) -> str:
        return self._curve_type

    @property
    def tension(self) -> float:
        return self._tension

    # ── 評価 ─────────────────────────
    def point_at(self, p: float | np.ndarray) -> Point3:
        """パラメータ `p` における曲線上の点を返す。

        Parameters
        ----------
        p : float | np.ndarray
            正規化パラメータ。[0,1) 外の値は周期的に畳み込む（`p` と `p + 1` は同一点）。

        Returns
        -------
        np.ndarray
            スカラ入力なら `(3,)`、形状 `(K,)` の入力なら `(K, 3)`（float64）。
        """
        arr = np.asarray(p, dtype=np.float64)
        if arr.ndim == 0:
            return self._evaluate(arr.reshape(1))[0]
        if arr.ndim != 1:
            raise ValueError(f"p はスカラまたは 1 次元配列である必要があります: {arr.shape}")
        return self._evaluate(arr)

    def _evaluate(self, t: np.ndarray) -> np.ndarray:
        pts = self._points
        n = pts.shape[0]
        s = _wrap01(t.astype(np.float64, copy=True)) * n
        seg = np.floor(s).astype(np.int64)
        w = (s - seg)[:, None]
        seg %= n

        x0 = pts[(seg - 1) % n]
        x1 = pts[seg]
        x2 = pts[(seg + 1) % n]
        x3 = pts[(seg + 2) % n]

        if self._curve_type == "catmullrom":
            k = self._tension
            c0, c1, c2, c3 = _cubic_coeffs(x1, x2, k * (x2 - x0), k * (x3 - x1))
        else:
            pw = _DIST_POW[self._curve_type]
            dt0 = np.sum((x1 - x0) ** 2, axis=1) ** pw
            dt1 = np.sum((x2 - x1) ** 2, axis=1) ** pw
            dt2 = np.sum((x3 - x2) ** 2, axis=1) ** pw
            # 重複点の安全策
            dt1 = np.where(dt1 < _MIN_KNOT, 1.0, dt1)
            dt0 = np.where(dt0 < _MIN_KNOT, dt1, dt0)
            dt2 = np.where(dt2 < _MIN_KNOT, dt1, dt2)
            dt0 = dt0[:, None]
            dt1 = dt1[:, None]
            dt2 = dt2[:, None]
            t1 = (x1 - x0) / dt0 - (x2 - x0) / (dt0 + dt1) + (x2 - x1) / dt1
            t2 = (x2 - x1) / dt1 - (x3 - x1) / (dt1 + dt2) + (x3 - x2) / dt2
            c0, c1, c2, c3 = _cubic_coeffs(x1, x2, t1 * dt1, t2 * dt1)

        return c0 + w * (c1 + w * (c2 + w * c3))

    def tangent_at(self, p: float | np.ndarray, *, delta: float = 1e-4) -> Point3:
        """パラメータ `p` における単位接線（中心差分）。"""
        arr = np.asarray(p, dtype=np.float64)
        d = self.point_at(arr + delta) - self.point_at(arr - delta)
        norm = np.linalg.norm(d, axis=-1, keepdims=True)
        norm = np.where(norm > 0.0, norm, 1.0)
        return d / norm

    def sample(self, divisions: int) -> np.ndarray:
        """`p = i / divisions` の `divisions + 1` 点（末尾は先頭と一致）。"""
        if int(divisions) < 1:
            raise ValueError("divisions は 1 以上が必要です")
        d = int(divisions)
        return self.point_at(np.arange(d + 1, dtype=np.float64) / d)

    # ── 弧長 ─────────────────────────
    def lengths(self, divisions: int | None = None) -> np.ndarray:
        """サンプル点間の累積弦長 `(divisions + 1,)`（先頭 0、末尾が全長）。"""
        d = self._length_divisions if divisions is None else int(divisions)
        if d < 1:
            raise ValueError("divisions は 1 以上が必要です")
        cached = self._lengths_cache.get(d)
        if cached is not None:
            return cached
        pts = self.sample(d)
        seg = np.linalg.norm(np.diff(pts, axis=0), axis=1)
        out = np.concatenate([[0.0], np.cumsum(seg)])
        out.setflags(write=False)
        self._lengths_cache[d] = out
        return out

    @property
    def length(self) -> float:
        """全長（弦長近似）。"""
        return float(self.lengths()[-1])

    def u_to_t(self, u: float | np.ndarray) -> np.ndarray | float:
        """弧長比 `u` をパラメータ `t` に写像する（テーブルの線形補間）。"""
        arr = np.asarray(u, dtype=np.float64)
        scalar = arr.ndim == 0
        uu = _wrap01(np.atleast_1d(arr).astype(np.float64, copy=True))
        table = self.lengths()
        d = table.shape[0] - 1
        total = table[-1]
        if total <= 0.0:
            out = uu
        else:
            target = uu * total
            i = np.searchsorted(table, target, side="right") - 1
            i = np.clip(i, 0, d - 1)
            span = table[i + 1] - table[i]
            frac = np.where(span > 0.0, (target - table[i]) / np.where(span > 0.0, span, 1.0), 0.0)
            out = (i + frac) / d
        return float(out[0]) if scalar else out

    def point_at_length(self, u: float | np.ndarray) -> Point3:
        """弧長比 `u`（0..1, 周期的）における点。等速サンプリング用。"""
        return self.point_at(self.u_to_t(u))

    # ── 押し出し用フレーム ───────────────
    def frenet_frames(self, segments: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """弧長等分 `segments + 1` 点での平行移動フレームを返す。

        Returns
        -------
        tuple[np.ndarray, np.ndarray, np.ndarray]
            `(tangents, normals, binormals)`。いずれも `(segments + 1, 3)`。

        Notes
        -----
        初期法線は接線の最小成分軸から決め、以降は隣接接線間の回転で運ぶ。閉曲線なので、
        最後に先頭/末尾の法線のずれ角を全区間へ均等配分し、継ぎ目のねじれを消す。
        """
        seg = int(segments)
        if seg < 1:
            raise ValueError("segments は 1 以上が必要です")
        ts = np.asarray(self.u_to_t(np.arange(seg + 1, dtype=np.float64) / seg))
        tangents = np.asarray(self.tangent_at(ts))
        normals = np.zeros_like(tangents)
        binormals = np.zeros_like(tangents)

        t0 = tangents[0]
        axis = np.zeros(3)
        axis[int(np.argmin(np.abs(t0)))] = 1.0
        vec = np.cross(t0, axis)
        vec /= np.linalg.norm(vec)
        normals[0] = np.cross(t0, vec)
        binormals[0] = np.cross(t0, normals[0])

        for i in range(1, seg + 1):
            normals[i] = normals[i - 1]
            vec = np.cross(tangents[i - 1], tangents[i])
            vn = float(np.linalg.norm(vec))
            if vn > 1e-12:
                vec /= vn
                theta = math.acos(max(-1.0, min(1.0, float(np.dot(tangents[i - 1], tangents[i])))))
                normals[i] = _rotate_about_axis(normals[i], vec, theta)
            binormals[i] = np.cross(tangents[i], normals[i])

        # 閉曲線の継ぎ目補正
        cos_a = max(-1.0, min(1.0, float(np.dot(normals[0], normals[seg]))))
        theta = math.acos(cos_a) / seg
        if float(np.dot(tangents[0], np.cross(normals[0], normals[seg]))) > 0.0:
            theta = -theta
        for i in range(1, seg + 1):
            normals[i] = _rotate_about_axis(normals[i], tangents[i], theta * i)
            binormals[i] = np.cross(tangents[i], normals[i])

        return tangents, normals, binormals

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"Curve(n={self.num_points}, type={self._curve_type})"


__all__ = ["Curve", "CURVE_TYPES"]
