"""
どこで: `api.flythrough_runner.render`
何を: RenderWindow/ModernGL/LineRenderer の初期化。
なぜ: `api.flythrough` を薄くし、描画初期化の責務を分離するため。
"""

from __future__ import annotations

import logging
from typing import Any

import moderngl

from util.color import normalize_color

from .config import FlythroughConfig
from .utils import build_projection

logger = logging.getLogger(__name__)


def create_window_and_renderer(window_width: int, window_height: int, cfg: FlythroughConfig):
    """ウィンドウ/ModernGL/LineRenderer を生成して返す。

    Returns
    -------
    (rendering_window, mgl_ctx, line_renderer)
    """
    from engine.core.render_window import RenderWindow
    from engine.render.renderer import LineRenderer

    bg_rgba = normalize_color(cfg.background)
    rendering_window = RenderWindow(window_width, window_height, bg_color=bg_rgba)  # type: ignore[abstract]

    mgl_ctx: moderngl.Context = moderngl.create_context()
    mgl_ctx.enable(moderngl.BLEND | moderngl.DEPTH_TEST)
    mgl_ctx.blend_func = (moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA)

    fb_w, fb_h = rendering_window.get_framebuffer_size()
    projection = build_projection(fb_w, fb_h, fov=cfg.fov, near=cfg.near, far=cfg.far)
    line_renderer = LineRenderer(
        mgl_ctx,
        projection,
        fog_color=bg_rgba,
        fog_density=cfg.fog_density,
    )

    def _on_resize(width: int, height: int) -> None:
        mgl_ctx.viewport = (0, 0, width, height)
        line_renderer.set_projection(
            build_projection(width, height, fov=cfg.fov, near=cfg.near, far=cfg.far)
        )

    rendering_window.add_resize_callback(_on_resize)
    logger.debug("GL context: %s", _describe(mgl_ctx))
    return rendering_window, mgl_ctx, line_renderer


def _describe(ctx: Any) -> str:
    info = getattr(ctx, "info", None) or {}
    return f"{info.get('GL_RENDERER', '?')} / {info.get('GL_VERSION', '?')}"
