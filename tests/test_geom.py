"""Tests for cg4d.geom."""
import numpy as np
import pytest

from cg4d.geom import (
    as_point, as_points, centroid, cross4, drop_axis, index_of_largest, normalize, unique_points,
)


def test_as_point_shape_checked():
    assert as_point([1, 2, 3, 4]).dtype == float
    with pytest.raises(ValueError):
        as_point([1, 2, 3])


def test_as_points_empty_and_bad_shape():
    assert as_points([]).shape == (0, 4)
    with pytest.raises(ValueError):
        as_points(np.zeros((3, 3)))


def test_cross4_is_orthogonal():
    rng = np.random.default_rng(7)
    u, v, w = rng.normal(size=(3, 4))
    n = cross4(u, v, w)
    for a in (u, v, w):
        assert np.dot(n, a) == pytest.approx(0.0, abs=1e-12)
    # |cross4| is the 3-volume of the parallelepiped
    m = np.vstack([u, v, w])
    assert np.linalg.norm(n) == pytest.approx(np.sqrt(np.linalg.det(m @ m.T)))


def test_cross4_of_basis():
    e = np.eye(4)
    np.testing.assert_allclose(np.abs(cross4(e[0], e[1], e[2])), e[3])


def test_normalize():
    np.testing.assert_allclose(normalize([0, 3, 0, 4]), [0, 0.6, 0, 0.8])
    with pytest.raises(ValueError):
        normalize(np.zeros(4))


def test_centroid_and_axes():
    pts = np.array([[0, 0, 0, 0], [2, 4, 0, -2]], dtype=float)
    np.testing.assert_allclose(centroid(pts), [1, 2, 0, -1])
    with pytest.raises(ValueError):
        centroid([])
    assert index_of_largest([0.1, -3.0, 2.0, 3.0]) == 1
    np.testing.assert_allclose(drop_axis(pts, 1), [[0, 0, 0], [2, 0, -2]])


def test_unique_points_keeps_first_occurrence():
    pts = [(1, 0, 0, 0), (0, 1, 0, 0), (1 + 1e-12, 0, 0, 0), (-0.0, 1, 0, 0)]
    out = unique_points(pts)
    assert out.shape == (2, 4)
    np.testing.assert_allclose(out, [[1, 0, 0, 0], [0, 1, 0, 0]])
    assert not np.signbit(out[1, 0])
