"""
どこで: `common.errors`。
何を: 起動時の設定不備を表す例外 `InvalidConfiguration` を定義。
なぜ: 曲線生成/カメラリグの入力検証を 1 種類の例外に揃え、フレーム描画前に即時失敗させるため。
"""

from __future__ import annotations


class InvalidConfiguration(ValueError):
    """制御点数・座標範囲・ループ時間などの設定が不正な場合に送出する。

    `ValueError` の派生なので、呼び出し側は従来通り `except ValueError` でも捕捉できる。
    """


__all__ = ["InvalidConfiguration"]
