import numpy as np
import pytest

from vectorviz.linalg import (
    Matrix3,
    Vector3,
    apply_linear_transform_3d,
    multiply_vector_matrix,
)


def test_identity_leaves_vector_unchanged():
    v = Vector3(1.0, -2.5, 3.0)
    assert multiply_vector_matrix(v, Matrix3.identity()) == v


def test_zero_matrix_gives_zero_vector():
    assert multiply_vector_matrix(Vector3(4, 5, 6), Matrix3.zero()) == Vector3(0, 0, 0)


def test_uniform_scale():
    m = Matrix3(m11=2, m22=2, m33=2)
    assert multiply_vector_matrix(Vector3(3, 4, 0), m) == Vector3(6, 8, 0)


def test_row_major_convention():
    m = Matrix3(1, 2, 3, 4, 5, 6, 7, 8, 9)
    # first column of M
    assert multiply_vector_matrix(Vector3(1, 0, 0), m) == Vector3(1, 4, 7)
    # u.x = x*m11 + y*m12 + z*m13
    assert multiply_vector_matrix(Vector3(1, 1, 1), m) == Vector3(6, 15, 24)


def test_linearity():
    rng = np.random.default_rng(0)
    for _ in range(20):
        m = Matrix3.from_array(rng.normal(size=(3, 3)))
        a = Vector3.from_array(rng.normal(size=3))
        b = Vector3.from_array(rng.normal(size=3))
        lhs = multiply_vector_matrix(a, m) + multiply_vector_matrix(b, m)
        rhs = multiply_vector_matrix(a + b, m)
        assert lhs.as_tuple() == pytest.approx(rhs.as_tuple())


def test_apply_to_point_rows():
    m = Matrix3(1, 2, 3, 4, 5, 6, 7, 8, 9)
    pts = np.array([[1.0, 0.0, 0.0], [1.0, 1.0, 1.0]])
    out = apply_linear_transform_3d(pts, m)
    np.testing.assert_allclose(out, [[1, 4, 7], [6, 15, 24]])


def test_vector_helpers():
    v = Vector3(3, 4, 0)
    assert v.length() == pytest.approx(5.0)
    assert v.scaled(0.5) == Vector3(1.5, 2, 0)
    assert v - Vector3(1, 1, 1) == Vector3(2, 3, -1)
    assert Vector3.from_iterable([1, 2, 3]) == Vector3(1, 2, 3)


def test_matrix_helpers():
    m = Matrix3(1, 2, 3, 4, 5, 6, 7, 8, 9)
    assert m.rows() == ((1, 2, 3), (4, 5, 6), (7, 8, 9))
    assert Matrix3.from_array(m.as_array()) == m
    with pytest.raises(ValueError):
        Matrix3.from_iterable([1, 2, 3])
    with pytest.raises(ValueError):
        Matrix3.from_array(np.eye(2))
