"""
どこで: `api.flythrough_runner.config`。
何を: YAML の `flythrough:` セクション（と呼び出し側の上書き）を型付きの `FlythroughConfig` へ変換。
なぜ: ランナー本体から「設定の読み取り/型変換/既定値」を切り離し、ヘッドレスでも検証できるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from common.env import parse_bool
from common.errors import InvalidConfiguration

# ネストしたセクション名（1 段だけマージする）
_SECTIONS = ("tube", "boxes", "markers", "camera", "window")


@dataclass(frozen=True)
class FlythroughConfig:
    # 経路
    num_control_points: int = 10
    coordinate_range: float = 5.0
    seed: int | None = None
    curve_type: str = "centripetal"
    tension: float = 0.5
    flatten_y: float = 1.0
    # カメラリグ
    loop_duration_ms: float = 8000.0
    lookahead_fraction: float = 0.03
    time_scale: float = 0.1
    sampling: str = "parametric"
    # チューブ
    tubular_segments: int = 222
    tube_radius: float = 0.65
    radial_segments: int = 16
    tube_color: Any = "#ffffff"
    # 装飾
    box_count: int = 55
    box_size: float = 0.075
    box_jitter: tuple[float, float] = (-0.4, 0.6)
    show_markers: bool = True
    marker_radius: float = 0.05
    show_path_line: bool = False
    path_color: Any = "#ff0000"
    hue_speed: float = 0.1
    # カメラ/描画
    fov: float = 75.0
    near: float = 0.1
    far: float = 1000.0
    fog_density: float = 0.3
    background: Any = "#000000"
    window_width: int = 1280
    window_height: int = 720
    fps: int = 60

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "FlythroughConfig":
        """`flythrough:` セクション相当の辞書から構築する。未指定キーは既定値。

        型変換に失敗した値は `InvalidConfiguration`（どのキーかをメッセージに含める）。
        """
        d: Mapping[str, Any] = data or {}
        tube = _section(d, "tube")
        boxes = _section(d, "boxes")
        markers = _section(d, "markers")
        camera = _section(d, "camera")
        window = _section(d, "window")
        default = cls()

        def pick(src: Mapping[str, Any], key: str, conv: Callable[[Any], Any], fallback: Any, label: str):
            if key not in src or src[key] is None:
                return fallback
            try:
                return conv(src[key])
            except (TypeError, ValueError) as e:
                raise InvalidConfiguration(f"invalid config value for {label}: {src[key]!r}") from e

        jitter = pick(boxes, "jitter", _pair, default.box_jitter, "boxes.jitter")
        return cls(
            num_control_points=pick(d, "num_control_points", int, default.num_control_points, "num_control_points"),
            coordinate_range=pick(d, "coordinate_range", float, default.coordinate_range, "coordinate_range"),
            seed=pick(d, "seed", int, default.seed, "seed"),
            curve_type=pick(d, "curve_type", str, default.curve_type, "curve_type"),
            tension=pick(d, "tension", float, default.tension, "tension"),
            flatten_y=pick(d, "flatten_y", float, default.flatten_y, "flatten_y"),
            loop_duration_ms=pick(d, "loop_duration_ms", float, default.loop_duration_ms, "loop_duration_ms"),
            lookahead_fraction=pick(d, "lookahead_fraction", float, default.lookahead_fraction, "lookahead_fraction"),
            time_scale=pick(d, "time_scale", float, default.time_scale, "time_scale"),
            sampling=pick(d, "sampling", str, default.sampling, "sampling"),
            tubular_segments=pick(tube, "tubular_segments", int, default.tubular_segments, "tube.tubular_segments"),
            tube_radius=pick(tube, "radius", float, default.tube_radius, "tube.radius"),
            radial_segments=pick(tube, "radial_segments", int, default.radial_segments, "tube.radial_segments"),
            tube_color=tube.get("color", default.tube_color),
            box_count=pick(boxes, "count", int, default.box_count, "boxes.count"),
            box_size=pick(boxes, "size", float, default.box_size, "boxes.size"),
            box_jitter=jitter,
            show_markers=pick(markers, "enabled", parse_bool, default.show_markers, "markers.enabled"),
            marker_radius=pick(markers, "radius", float, default.marker_radius, "markers.radius"),
            show_path_line=pick(d, "show_path_line", parse_bool, default.show_path_line, "show_path_line"),
            path_color=d.get("path_color", default.path_color),
            hue_speed=pick(d, "hue_speed", float, default.hue_speed, "hue_speed"),
            fov=pick(camera, "fov", float, default.fov, "camera.fov"),
            near=pick(camera, "near", float, default.near, "camera.near"),
            far=pick(camera, "far", float, default.far, "camera.far"),
            fog_density=pick(d, "fog_density", float, default.fog_density, "fog_density"),
            background=window.get("background", default.background),
            window_width=pick(window, "width", int, default.window_width, "window.width"),
            window_height=pick(window, "height", int, default.window_height, "window.height"),
            fps=pick(d, "fps", int, default.fps, "fps"),
        )


def _section(d: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    sec = d.get(name)
    if sec is None:
        return {}
    if not isinstance(sec, Mapping):
        raise InvalidConfiguration(f"config section '{name}' must be a mapping, got {type(sec).__name__}")
    return sec


def _pair(value: Any) -> tuple[float, float]:
    lo, hi = value
    return float(lo), float(hi)


def merge_flythrough(base: Mapping[str, Any] | None, override: Mapping[str, Any] | None) -> dict[str, Any]:
    """`flythrough` 辞書を上書きマージする（ネストしたセクションは 1 段だけ）。"""
    merged: dict[str, Any] = dict(base or {})
    for key, value in (override or {}).items():
        if key in _SECTIONS and isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            sec = dict(merged[key])
            sec.update(value)
            merged[key] = sec
        else:
            merged[key] = value
    return merged


def load_flythrough_config(override: Mapping[str, Any] | None = None) -> FlythroughConfig:
    """設定ファイル（`configs/default.yaml` + ルート `config.yaml`）に `override` を重ねて解決する。"""
    from util.utils import load_config

    cfg = load_config() or {}
    section = cfg.get("flythrough") if isinstance(cfg, dict) else None
    base = section if isinstance(section, Mapping) else {}
    return FlythroughConfig.from_mapping(merge_flythrough(base, override))


__all__ = ["FlythroughConfig", "load_flythrough_config", "merge_flythrough"]
