"""
どこで: `shapes` パッケージ（関数登録）。
何を: ビルトイン shape を import 副作用で登録し、`api.shapes` から解決できるようにする。
なぜ: チューブ/箱/マーカー/中心線の生成を一箇所に集約し、シーン構築から名前で呼ぶため。
"""

# 関数版 shape 定義を import して登録（副作用）
from . import box as _register_box  # noqa: F401
from . import marker as _register_marker  # noqa: F401
from . import path_line as _register_path_line  # noqa: F401
from . import tube as _register_tube  # noqa: F401
from .registry import get_shape, is_shape_registered, list_shapes, shape  # re-export

__all__ = [
    "shape",
    "get_shape",
    "list_shapes",
    "is_shape_registered",
]
