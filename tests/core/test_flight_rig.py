from __future__ import annotations

import math

import numpy as np
import pytest

from common.errors import InvalidConfiguration
from engine.core.curve import Curve
from engine.core.flight_rig import CameraPose, FlightRig
from engine.core.path_generator import PathGenerator


def _same_pose(a: CameraPose, b: CameraPose, atol: float = 1e-9) -> bool:
    return bool(
        np.allclose(a.position, b.position, atol=atol)
        and np.allclose(a.target, b.target, atol=atol)
    )


def test_seed42_scenario() -> None:
    curve = PathGenerator().generate(num_control_points=10, coordinate_range=5, seed=42)
    rig = FlightRig(curve, loop_duration_ms=8000)
    start = rig.update(0)
    assert _same_pose(start, rig.update(8000))
    half = rig.update(4000)
    assert half.p == pytest.approx(0.5)
    assert not np.allclose(half.position, start.position)


@pytest.mark.parametrize("t", [0.0, 250.0, 1234.5, 7999.0, 20000.0])
def test_loops_exactly_after_one_period(curve42: Curve, t: float) -> None:
    rig = FlightRig(curve42, loop_duration_ms=8000)
    assert _same_pose(rig.update(t), rig.update(t + 8000.0))


def test_continuity_across_wraparound(curve42: Curve) -> None:
    rig = FlightRig(curve42, loop_duration_ms=8000)
    eps = 1e-3
    before = rig.update(8000.0 - eps)
    after = rig.update(8000.0 + eps)
    assert np.linalg.norm(before.position - after.position) < 1e-3
    assert np.linalg.norm(before.target - after.target) < 1e-3


@pytest.mark.parametrize("t", [0.0, 100.0, 3999.0, 7900.0, 7999.9])
def test_lookahead_offset_invariant(curve42: Curve, t: float) -> None:
    rig = FlightRig(curve42, loop_duration_ms=8000, lookahead_fraction=0.03)
    pose = rig.update(t)
    diff = (pose.target_p - pose.p) % 1.0
    assert diff == pytest.approx(0.03, abs=1e-12)
    np.testing.assert_allclose(pose.target, curve42.point_at(pose.target_p), atol=1e-12)


def test_time_scale_slows_the_loop(curve42: Curve) -> None:
    rig = FlightRig(curve42, loop_duration_ms=8000, time_scale=0.1)
    assert rig.phase_at(8000) == pytest.approx(0.1)
    assert _same_pose(rig.update(0), rig.update(80000))


@pytest.mark.parametrize("bad", [-1.0, float("nan"), float("inf"), float("-inf")])
def test_invalid_elapsed_is_treated_as_zero(curve42: Curve, bad: float) -> None:
    rig = FlightRig(curve42)
    assert rig.phase_at(bad) == 0.0
    assert _same_pose(rig.update(bad), rig.update(0.0))


@pytest.mark.parametrize("time_scale", [1.0, 10.0, 1e10])
def test_huge_elapsed_stays_in_range(curve42: Curve, time_scale: float) -> None:
    rig = FlightRig(curve42, time_scale=time_scale)
    for t in (1e300, 1e308, 1.7976931348623157e308):
        p = rig.phase_at(t)
        assert 0.0 <= p < 1.0
        pose = rig.update(t)
        assert np.all(np.isfinite(pose.position))
        assert np.all(np.isfinite(pose.target))


def test_arc_length_sampling_uses_uniform_parameter(curve42: Curve) -> None:
    rig = FlightRig(curve42, sampling="arc_length")
    pose = rig.update(2000)
    np.testing.assert_allclose(pose.position, curve42.point_at_length(0.25), atol=1e-12)
    assert _same_pose(rig.update(0), rig.update(8000))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"loop_duration_ms": 0},
        {"loop_duration_ms": -5},
        {"lookahead_fraction": 0.0},
        {"lookahead_fraction": 1.0},
        {"lookahead_fraction": math.nan},
        {"time_scale": 0.0},
        {"sampling": "bogus"},
    ],
)
def test_invalid_configuration_raises(curve42: Curve, kwargs: dict) -> None:
    with pytest.raises(InvalidConfiguration):
        FlightRig(curve42, **kwargs)


def test_configure_updates_and_validates(curve42: Curve) -> None:
    rig = FlightRig(curve42)
    rig.configure(4000, 0.1)
    assert rig.loop_duration_ms == 4000
    assert rig.lookahead_fraction == pytest.approx(0.1)
    assert rig.time_scale == 1.0
    with pytest.raises(InvalidConfiguration):
        rig.configure(-1, 0.1)
    # 失敗時は以前の値を保持
    assert rig.loop_duration_ms == 4000


def test_pose_forward_points_to_target(curve42: Curve) -> None:
    pose = FlightRig(curve42).update(1000)
    fwd = pose.forward
    assert np.linalg.norm(fwd) == pytest.approx(1.0)
    d = pose.target - pose.position
    np.testing.assert_allclose(fwd, d / np.linalg.norm(d))
