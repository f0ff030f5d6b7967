import numpy as np
import pytest

hypothesis = pytest.importorskip("hypothesis", reason="hypothesis is a dev optional dependency")
from hypothesis import given, settings, strategies as st  # type: ignore

from engine.core.flight_rig import FlightRig
from engine.core.path_generator import generate_path

seeds = st.integers(min_value=0, max_value=2**32 - 1)


@settings(max_examples=30, deadline=None)
@given(seed=seeds, n=st.integers(3, 16), r=st.floats(0.1, 50.0))
def test_closure_for_any_seed(seed, n, r):
    curve = generate_path(n, r, seed=seed)
    np.testing.assert_allclose(curve.point_at(0.0), curve.point_at(1.0 - 1e-10), atol=1e-6 * r)


@settings(max_examples=50, deadline=None)
@given(seed=seeds, p=st.floats(0.0, 1.0, exclude_max=True))
def test_periodicity_for_any_p(seed, p):
    curve = generate_path(6, 5.0, seed=seed)
    np.testing.assert_allclose(curve.point_at(p), curve.point_at(p + 1.0), atol=1e-9)


@settings(max_examples=50, deadline=None)
@given(seed=seeds, t=st.integers(0, 10**7))
def test_rig_loops_exactly(seed, t):
    rig = FlightRig(generate_path(10, 5.0, seed=seed), loop_duration_ms=8000)
    a = rig.update(float(t))
    b = rig.update(float(t) + 8000.0)
    np.testing.assert_allclose(a.position, b.position, atol=1e-9)
    np.testing.assert_allclose(a.target, b.target, atol=1e-9)


@settings(max_examples=50, deadline=None)
@given(
    t=st.floats(0.0, 1e6, allow_nan=False),
    la=st.floats(1e-4, 0.99),
)
def test_lookahead_is_exact_modulo_one(t, la):
    rig = FlightRig(generate_path(10, 5.0, seed=42), lookahead_fraction=la)
    pose = rig.update(t)
    diff = (pose.target_p - pose.p) % 1.0
    assert min(abs(diff - la), abs(diff - la + 1.0), abs(diff - la - 1.0)) < 1e-9
