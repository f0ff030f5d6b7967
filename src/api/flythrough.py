"""
どこで: `api.flythrough`（実行ランナー）。
何を: 設定解決 → 経路生成 → シーン構築 → ウィンドウ/GL 初期化 → フレーム駆動 を結線して
      閉じたチューブの中を飛び続けるフライスルーを実行する。
なぜ: 少ない記述（`run_flythrough()` / `python main.py`）で、再現可能なシード付きの
      フライスルーを起動できるようにするため。

api.flythrough: フライスルー実行ランナー

実行フロー（概要）:
1) 設定: `configs/default.yaml` → ルート `config.yaml` → 引数 `config` の順に `flythrough:` を重ね、
   `FlythroughConfig` へ型変換する（不正値は `InvalidConfiguration`）。
2) 経路: `PathGenerator.generate(...)` で閉じた Catmull-Rom 曲線を作る。シードは
   引数 > 設定 > 環境変数 `TBF_SEED` の順に解決。
3) カメラ: `FlightRig` を構築（周期/先読み/時間スケール/サンプリング方式）。
4) シーン: チューブ・箱・マーカーを `build_scene` で 1 度だけ生成。
5) `init_only=True` ならここで Scene を返す（pyglet/ModernGL は import しない）。
6) ウィンドウ/GL: `RenderWindow` と `LineRenderer` を生成し、リサイズで投影行列を更新。
7) フレーム駆動: `FrameClock` が `FlightView.tick(dt)` を `pyglet.clock` で呼び、
   `on_draw` で `FlightView.draw()`。`ESC` でウィンドウを閉じ GL リソースを解放する。

例:
    from api import run_flythrough

    run_flythrough(seed=42, fps=60, window_size=(1280, 720))
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import numpy as np

from common.logging import setup_default_logging
from engine.core.flight_rig import FlightRig
from engine.core.path_generator import PathGenerator
from engine.scene.scene import Scene, build_scene

from .flythrough_runner.config import FlythroughConfig, load_flythrough_config
from .flythrough_runner.utils import resolve_fps, resolve_seed, resolve_window_size

logger = logging.getLogger(__name__)


def build_flythrough(cfg: FlythroughConfig, *, seed: int | None = None) -> tuple[Scene, FlightRig]:
    """設定から Scene と FlightRig を構築する（GL 非依存）。

    装飾の乱数は経路と同じシードから派生させ、同じシードなら同じシーンになる。
    """
    resolved_seed = resolve_seed(seed, cfg.seed)
    generator = PathGenerator(curve_type=cfg.curve_type, tension=cfg.tension)
    curve = generator.generate(
        cfg.num_control_points,
        cfg.coordinate_range,
        resolved_seed,
        flatten_y=cfg.flatten_y,
    )
    rig = FlightRig(
        curve,
        loop_duration_ms=cfg.loop_duration_ms,
        lookahead_fraction=cfg.lookahead_fraction,
        time_scale=cfg.time_scale,
        sampling=cfg.sampling,
    )
    deco_rng = np.random.default_rng(None if resolved_seed is None else [resolved_seed, 1])
    scene = build_scene(
        curve,
        tubular_segments=cfg.tubular_segments,
        tube_radius=cfg.tube_radius,
        radial_segments=cfg.radial_segments,
        tube_color=cfg.tube_color,
        box_count=cfg.box_count,
        box_size=cfg.box_size,
        box_jitter=cfg.box_jitter,
        show_markers=cfg.show_markers,
        marker_radius=cfg.marker_radius,
        show_path_line=cfg.show_path_line,
        path_color=cfg.path_color,
        hue_speed=cfg.hue_speed,
        rng=deco_rng,
    )
    logger.info(
        "flythrough ready: seed=%s points=%d loop=%.0fms time_scale=%g sampling=%s",
        resolved_seed,
        curve.num_points,
        rig.loop_duration_ms,
        rig.time_scale,
        rig.sampling,
    )
    return scene, rig


def run_flythrough(
    *,
    seed: int | None = None,
    fps: int | None = None,
    window_size: tuple[int, int] | None = None,
    init_only: bool = False,
    config: Mapping[str, Any] | None = None,
) -> Scene | None:
    """フライスルーを実行する。

    Parameters
    ----------
    seed : int | None
        経路/装飾の乱数シード。None で設定/環境変数、それも無ければ非決定的。
    fps : int | None
        描画更新レート。None で設定値（既定 60）。
    window_size : tuple[int, int] | None
        ウィンドウサイズ [px]。None で設定値（既定 1280x720）。
    init_only : bool
        True で設定検証とシーン構築だけを行い、Scene を返して終了する。
    config : Mapping | None
        `flythrough:` セクションへの上書き（例: `{"tube": {"radius": 0.4}}`）。

    Raises
    ------
    InvalidConfiguration
        設定値が不正な場合（制御点数不足・周期 0 以下など）。
    """
    setup_default_logging()
    cfg = load_flythrough_config(config)
    fps = resolve_fps(fps, default=cfg.fps)
    window_width, window_height = resolve_window_size(
        window_size, default=(cfg.window_width, cfg.window_height)
    )

    scene, rig = build_flythrough(cfg, seed=seed)
    if init_only:
        return scene

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet
    from pyglet.window import key

    from engine.core.frame_clock import FrameClock

    from .flythrough_runner.render import create_window_and_renderer
    from .flythrough_runner.view import FlightView

    rendering_window, mgl_ctx, line_renderer = create_window_and_renderer(
        window_width, window_height, cfg
    )
    view = FlightView(rig, scene, line_renderer)
    rendering_window.add_draw_callback(view.draw)

    frame_clock = FrameClock([view])
    pyglet.clock.schedule_interval(frame_clock.tick, 1 / fps)

    @rendering_window.event
    def on_key_press(sym, mods):  # noqa: ANN001
        if sym == key.ESCAPE:
            rendering_window.dispatch_event("on_close")

    @rendering_window.event
    def on_close():  # noqa: ANN001
        # 冪等なクリーンアップ
        if getattr(on_close, "_closed", False):
            return
        setattr(on_close, "_closed", True)
        pyglet.clock.unschedule(frame_clock.tick)
        line_renderer.release()
        logger.info("flythrough closed after %d frames", frame_clock.frames)
        rendering_window.close()
        pyglet.app.exit()

    pyglet.app.run()
    return None


__all__ = ["run_flythrough", "build_flythrough"]
