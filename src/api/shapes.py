"""
どこで: `api.shapes`（形状生成の高レベル API）。
何を: 登録済み shape 関数を解決して `Geometry` を返す薄いファサード `G`。
なぜ: チューブ/箱/マーカーなどの生成を `G.tube(curve=...)` の形で一様に呼べる入口を提供するため。

Notes
-----
- 実体はレジストリ（`shapes.registry`）に登録済みの shape 関数を解決し、`fn(**params)` を直接呼ぶ。
- 生成結果は常に `Geometry`。ポリライン列を返す shape は `Geometry.from_lines(...)` で包む。
- 未登録名は `AttributeError`。生成器側の引数検証は各シェイプが責任を持つ（`ValueError`）。

Examples
--------
    from api import G, generate_path

    curve = generate_path(10, 5.0, seed=42)
    g = G.tube(curve=curve, radius=0.4) + G.box(size=0.1).translate(1, 0, 0)
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

# レジストリ登録の副作用を発火させるため、shapes パッケージを 1 度だけ import すれば十分
import shapes  # noqa: F401  (登録目的の副作用)
from engine.core.geometry import Geometry, LineLike
from shapes.registry import get_shape as get_shape_generator
from shapes.registry import is_shape_registered
from shapes.registry import list_shapes as list_registered_shapes


class ShapesAPI:
    """形状 API（`G` の実体）。

    使い方:
        from api import G
        g1 = G.box(size=0.2)
        g2 = G.marker(radius=0.1)
    """

    def _build_shape_method(self, name: str) -> Callable[..., Geometry]:
        def _shape_method(**params: Any) -> Geometry:
            if not is_shape_registered(name):
                # 登録解除と整合を取るため、キャッシュ済みの属性を破棄して AttributeError を送出
                self.__dict__.pop(name, None)
                raise AttributeError(f"'{self.__class__.__name__}' has no attribute '{name}'")
            result = get_shape_generator(name)(**params)
            if isinstance(result, Geometry):
                return result
            return Geometry.from_lines(result)

        _shape_method.__name__ = name
        _shape_method.__qualname__ = f"{self.__class__.__name__}.{name}"
        return _shape_method

    @staticmethod
    def from_lines(lines: Iterable[LineLike]) -> Geometry:
        """線分集合（ポリライン列）から `Geometry` を構築する。"""
        return Geometry.from_lines(lines)

    @staticmethod
    def empty() -> Geometry:
        """空の `Geometry`（頂点ゼロ）を返す。"""
        return Geometry.from_lines([])

    @staticmethod
    def names() -> list[str]:
        """登録済みシェイプ名（ソート済み）。"""
        return list_registered_shapes()

    def __getattr__(self, name: str) -> Callable[..., Geometry]:
        """レジストリに基づき `G.<name>` を遅延生成する（未登録は AttributeError）。"""
        if name.startswith("_") or not is_shape_registered(name):
            raise AttributeError(f"'{self.__class__.__name__}' has no attribute '{name}'")
        method = self._build_shape_method(name)
        self.__dict__[name] = method
        return method

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(list_registered_shapes()))


G = ShapesAPI()

__all__ = ["G", "ShapesAPI"]
