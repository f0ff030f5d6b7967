"""
どこで: `util.color`。
何を: 色指定の正規化（Hex, RGBA 0–1, RGBA 0–255）と HSL→RGB 変換を一元化。
なぜ: 設定ファイル/ランナー/シーンの色相サイクルで同一の受理仕様とエラーメッセージを使うため。
"""

from __future__ import annotations

import math
from typing import Sequence

from common.types import RGBA


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def parse_hex_color_str(s: str) -> RGBA:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    大文字/小文字は不問。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        r = int(t[0:2], 16)
        g = int(t[2:4], 16)
        b = int(t[4:6], 16)
        a = int(t[6:8], 16) if len(t) == 8 else 255
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def normalize_color(value: object) -> RGBA:
    """色を RGBA(0–1) へ正規化する。

    - 受理: Hex 文字列, (r,g,b[,a]) （0–1 または 0–255）
    - 返値: (r,g,b,a) （0–1）
    """
    if isinstance(value, str):
        return parse_hex_color_str(value)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"unsupported color type: {type(value)!r}")
    seq: Sequence[object] = value
    if len(seq) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        vals = [float(v) for v in seq]  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    if len(vals) == 3:
        vals.append(1.0 if all(0.0 <= x <= 1.0 for x in vals) else 255.0)
    # 全要素が 0..1 ならそのまま
    if all(0.0 <= x <= 1.0 for x in vals):
        r, g, b, a = vals
        return (_clamp01(r), _clamp01(g), _clamp01(b), _clamp01(a))
    # 0–255 とみなし、整数丸め → 0–1 へスケール
    r8, g8, b8, a8 = (max(0, min(255, int(round(x)))) for x in vals)
    return (r8 / 255.0, g8 / 255.0, b8 / 255.0, a8 / 255.0)


def to_u8_rgba(value: object) -> tuple[int, int, int, int]:
    """色を RGBA(0–255) へ変換する。"""
    r, g, b, a = normalize_color(value)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), int(round(a * 255)))


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0.0:
        t += 1.0
    if t > 1.0:
        t -= 1.0
    if t < 1.0 / 6.0:
        return p + (q - p) * 6.0 * t
    if t < 0.5:
        return q
    if t < 2.0 / 3.0:
        return p + (q - p) * 6.0 * (2.0 / 3.0 - t)
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[float, float, float]:
    """HSL（各 0–1）から RGB(0–1) を返す。

    色相 `h` は周期的に畳み込む（`h=1.2` は `h=0.2`、`h=-0.1` は `h=0.9`）。
    彩度/輝度は [0, 1] に clamp する。
    """
    h = h - math.floor(h)
    s = _clamp01(s)
    l = _clamp01(l)
    if s == 0.0:
        return (l, l, l)
    q = l * (1.0 + s) if l <= 0.5 else l + s - l * s
    p = 2.0 * l - q
    return (
        _clamp01(_hue_to_rgb(p, q, h + 1.0 / 3.0)),
        _clamp01(_hue_to_rgb(p, q, h)),
        _clamp01(_hue_to_rgb(p, q, h - 1.0 / 3.0)),
    )


def hsla(h: float, s: float = 1.0, l: float = 0.5, a: float = 1.0) -> RGBA:
    """`hsl_to_rgb` に不透明度を付けた RGBA(0–1)。"""
    r, g, b = hsl_to_rgb(h, s, l)
    return (r, g, b, _clamp01(a))


__all__ = [
    "parse_hex_color_str",
    "normalize_color",
    "to_u8_rgba",
    "hsl_to_rgb",
    "hsla",
]
