from __future__ import annotations

import numpy as np
import pytest

from engine.core.curve import Curve
from shapes.box import box
from shapes.marker import marker
from shapes.path_line import path_line


def test_box_has_twelve_edges_of_size() -> None:
    g = box(size=0.2)
    assert g.n_lines == 12
    assert g.n_vertices == 24
    edge_lengths = [float(np.linalg.norm(line[1] - line[0])) for line in g.lines()]
    np.testing.assert_allclose(edge_lengths, 0.2, rtol=1e-6)
    np.testing.assert_allclose(g.coords.mean(axis=0), 0.0, atol=1e-7)


def test_box_invalid_size() -> None:
    with pytest.raises(ValueError):
        box(size=0.0)


def test_marker_three_closed_circles() -> None:
    g = marker(radius=0.1, segments=16)
    assert g.n_lines == 3
    for line in g.lines():
        assert len(line) == 17
        np.testing.assert_allclose(line[0], line[-1])
        np.testing.assert_allclose(np.linalg.norm(line, axis=1), 0.1, rtol=1e-5)


@pytest.mark.parametrize("kwargs", [{"radius": 0.0}, {"segments": 2}])
def test_marker_invalid(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        marker(**kwargs)


def test_path_line_follows_curve(curve42: Curve) -> None:
    g = path_line(curve=curve42, divisions=50)
    assert g.n_lines == 1
    assert g.n_vertices == 51
    np.testing.assert_allclose(g.coords, curve42.sample(50), atol=1e-5)
