from __future__ import annotations

import sys

import numpy as np
import pytest

from engine.scene.scene import Scene


@pytest.mark.integration
# run_flythrough(init_only=True) は pyglet/ModernGL を import せずに Scene を返す
def test_run_flythrough_init_only_headless():
    from api import run_flythrough

    already_loaded = "pyglet" in sys.modules
    scene = run_flythrough(seed=42, init_only=True, config={"tube": {"tubular_segments": 24}})
    assert isinstance(scene, Scene)
    assert scene.tube.n_lines == 24 + 16
    assert len(scene.boxes) == 55
    if not already_loaded:
        assert "pyglet" not in sys.modules


@pytest.mark.integration
def test_same_seed_builds_same_scene():
    from api import run_flythrough

    a = run_flythrough(seed=7, init_only=True, config={"tube": {"tubular_segments": 12}})
    b = run_flythrough(seed=7, init_only=True, config={"tube": {"tubular_segments": 12}})
    np.testing.assert_array_equal(a.curve.control_points, b.curve.control_points)
    for x, y in zip(a.decorations, b.decorations):
        np.testing.assert_array_equal(x.geometry.coords, y.geometry.coords)


@pytest.mark.integration
def test_invalid_config_raises_before_window():
    from api import InvalidConfiguration, run_flythrough

    with pytest.raises(InvalidConfiguration):
        run_flythrough(init_only=True, config={"num_control_points": 2})
    with pytest.raises(InvalidConfiguration):
        run_flythrough(init_only=True, config={"loop_duration_ms": 0})


@pytest.mark.integration
def test_build_flythrough_returns_rig_with_config_values():
    from api import build_flythrough
    from api.flythrough_runner.config import FlythroughConfig

    cfg = FlythroughConfig.from_mapping({"time_scale": 0.5, "tube": {"tubular_segments": 12}})
    scene, rig = build_flythrough(cfg, seed=42)
    assert rig.time_scale == 0.5
    assert rig.curve is scene.curve
