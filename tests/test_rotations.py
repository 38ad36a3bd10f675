"""Tests for cg4d.rotations."""
import numpy as np
import pytest

from cg4d.rotations import Plane, compose, double_rotation, isoclinic_rotation, simple_rotation


@pytest.mark.parametrize("plane", list(Plane))
def test_simple_rotation_is_orthonormal(plane):
    r = simple_rotation(plane, 0.73)
    np.testing.assert_allclose(r @ r.T, np.eye(4), atol=1e-12)
    assert np.linalg.det(r) == pytest.approx(1.0)


@pytest.mark.parametrize("plane", list(Plane))
def test_simple_rotation_fixes_complement(plane):
    r = simple_rotation(plane, 1.2)
    for axis in plane.complement.axes:
        e = np.zeros(4)
        e[axis] = 1.0
        np.testing.assert_allclose(r @ e, e, atol=1e-12)


def test_simple_rotation_direction():
    # XY by 90 degrees: x -> y
    r = simple_rotation(Plane.XY, np.pi / 2.0)
    np.testing.assert_allclose(r @ np.array([1.0, 0.0, 0.0, 0.0]), [0.0, 1.0, 0.0, 0.0], atol=1e-12)


@pytest.mark.parametrize("plane, other", [
    (Plane.XY, Plane.ZW),
    (Plane.YZ, Plane.XW),
    (Plane.ZX, Plane.YW),
])
def test_complement_pairs(plane, other):
    assert plane.complement is other
    assert other.complement is plane
    assert set(plane.axes) | set(other.axes) == {0, 1, 2, 3}


class TestDoubleRotations:

    def test_double_is_product_of_commuting_simples(self):
        a = simple_rotation(Plane.YZ, 0.4)
        b = simple_rotation(Plane.XW, -1.3)
        np.testing.assert_allclose(double_rotation(Plane.YZ, 0.4, -1.3), a @ b, atol=1e-12)
        np.testing.assert_allclose(a @ b, b @ a, atol=1e-12)

    def test_isoclinic_moves_every_vector_by_the_same_angle(self):
        r = isoclinic_rotation(Plane.ZX, 0.6)
        rng = np.random.default_rng(3)
        for v in rng.normal(size=(5, 4)):
            cos_a = np.dot(v, r @ v) / np.dot(v, v)
            assert cos_a == pytest.approx(np.cos(0.6))

    def test_compose_order(self):
        a = simple_rotation(Plane.XY, 0.3)
        b = simple_rotation(Plane.XW, 0.8)
        np.testing.assert_allclose(compose(a, b), a @ b)
        np.testing.assert_allclose(compose(), np.eye(4))
        r = compose(a, b, isoclinic_rotation(Plane.XY, 0.2))
        np.testing.assert_allclose(r @ r.T, np.eye(4), atol=1e-12)
