from __future__ import annotations

import pytest

from api.flythrough_runner.config import load_flythrough_config
from util.utils import load_config


@pytest.mark.integration
# configs/default.yaml（ベース）とルート config.yaml（上書き）のマージ
def test_load_config_reads_default_yaml():
    cfg = load_config()
    # configs/default.yaml provides `test_marker: true` which should appear
    assert cfg.get("test_marker") is True
    assert isinstance(cfg.get("flythrough"), dict)


@pytest.mark.integration
def test_flythrough_config_from_files_and_override():
    cfg = load_flythrough_config({"fps": 24, "tube": {"radius": 0.3}})
    assert cfg.fps == 24
    assert cfg.tube_radius == 0.3
    assert cfg.tubular_segments == 222
    assert cfg.time_scale == pytest.approx(0.1)
