"""共通フィクスチャ。

- 乱数シード固定
- 小さな Geometry 試料
- シード固定の閉曲線
"""

from __future__ import annotations

import numpy as np
import pytest

from engine.core.curve import Curve
from engine.core.geometry import Geometry
from engine.core.path_generator import generate_path


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def geom_empty() -> Geometry:
    return Geometry.from_lines([])


@pytest.fixture()
def geom_two_lines() -> Geometry:
    a = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]], dtype=np.float32)
    b = np.array([[0.0, 1.0, 0.0], [1.0, 1.0, 0.0], [2.0, 1.0, 0.0]], dtype=np.float32)
    return Geometry.from_lines([a, b])


@pytest.fixture()
def curve42() -> Curve:
    """`generate(10, 5, seed=42)` の曲線。"""
    return generate_path(10, 5.0, seed=42)


@pytest.fixture()
def square_curve() -> Curve:
    """XZ 平面上の正方形 4 点を通る閉曲線（対称で扱いやすい）。"""
    pts = [[1.0, 0.0, 0.0], [0.0, 0.0, 1.0], [-1.0, 0.0, 0.0], [0.0, 0.0, -1.0]]
    return Curve(pts)
