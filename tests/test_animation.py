import numpy as np
import pytest

from vectorviz.animation import create_animation_gif, interpolate_matrix
from vectorviz.linalg import Matrix3, Vector3


def test_interpolate_matrix_endpoints():
    m = Matrix3(2, 1, 0, 0, 3, 0, 0, 0, -1)
    assert interpolate_matrix(m, 0.0) == Matrix3.identity()
    np.testing.assert_allclose(interpolate_matrix(m, 1.0).as_array(), m.as_array())
    half = interpolate_matrix(m, 0.5).as_array()
    np.testing.assert_allclose(half, (np.eye(3) + m.as_array()) / 2)


def test_interpolate_matrix_clamps_t():
    m = Matrix3(m11=4, m22=4, m33=4)
    assert interpolate_matrix(m, 2.0) == interpolate_matrix(m, 1.0)


def test_create_animation_gif(tmp_path):
    out = tmp_path / "transform.gif"
    result = create_animation_gif(
        str(out),
        Vector3(1, 2, 1),
        Matrix3(m11=2, m22=2, m33=2),
        n_frames=3,
        fps=5,
        dpi=40,
    )
    assert result == str(out)
    assert out.exists()
    assert out.stat().st_size > 0


def test_create_animation_gif_needs_two_frames(tmp_path):
    with pytest.raises(ValueError):
        create_animation_gif(str(tmp_path / "x.gif"), Vector3(1, 0, 0), Matrix3.identity(), n_frames=1)
