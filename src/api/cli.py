"""
どこで: `api.cli`。
何を: コマンドライン引数（シード/FPS/ウィンドウサイズ/ログレベル）を解釈して `run_flythrough` を呼ぶ。
なぜ: `python main.py` とインストール後の `tubeflight` コマンドで同じ入口を共有するため。
"""

from __future__ import annotations

import argparse

from common.logging import setup_default_logging

from .flythrough import run_flythrough


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Fly the camera through a random closed tube.")
    p.add_argument("--seed", type=int, default=None, help="path/decoration seed (default: config or TBF_SEED)")
    p.add_argument("--fps", type=int, default=None, help="frame rate (default: config fps)")
    p.add_argument("--width", type=int, default=None, help="window width in px")
    p.add_argument("--height", type=int, default=None, help="window height in px")
    p.add_argument("--log-level", default=None, help="DEBUG/INFO/WARNING (default: TBF_LOG_LEVEL)")
    p.add_argument("--init-only", action="store_true", help="build the scene and exit without a window")
    return p


def main(argv: list[str] | None = None) -> None:
    p = build_parser()
    args = p.parse_args(argv)
    if (args.width is None) != (args.height is None):
        p.error("--width and --height must be given together")
    window_size = (args.width, args.height) if args.width is not None else None

    setup_default_logging(args.log_level)
    run_flythrough(
        seed=args.seed,
        fps=args.fps,
        window_size=window_size,
        init_only=args.init_only,
    )
