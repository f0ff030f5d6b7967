from __future__ import annotations

import pytest

import api.cli as cli


def test_parser_defaults() -> None:
    args = cli.build_parser().parse_args([])
    assert args.seed is None and args.fps is None
    assert args.init_only is False


def test_main_forwards_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(cli, "run_flythrough", lambda **kw: calls.append(kw))
    monkeypatch.setattr(cli, "setup_default_logging", lambda level=None: None)
    cli.main(["--seed", "42", "--fps", "30", "--width", "640", "--height", "480", "--init-only"])
    assert calls == [
        {"seed": 42, "fps": 30, "window_size": (640, 480), "init_only": True}
    ]


def test_width_without_height_is_an_error() -> None:
    with pytest.raises(SystemExit):
        cli.main(["--width", "640"])
