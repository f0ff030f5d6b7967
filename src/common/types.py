"""
どこで: `common` の型定義。
何を: Vec3/RGBA などの軽量エイリアス（組込みジェネリックで記述）。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

import numpy as np

Vec3 = tuple[float, float, float]
RGBA = tuple[float, float, float, float]

# 曲線の問い合わせ結果（(3,) または (K, 3) の float64 配列）
Point3 = np.ndarray


__all__ = ["Vec3", "RGBA", "Point3"]
