import numpy as np
import pytest

from vectorviz import config
from vectorviz.geometry import (
    axis_extent,
    build_axes,
    build_axis,
    build_axis_labels,
    build_component_lines,
    build_grid_plane,
    build_grids,
    build_transformed_grids,
    build_vector_arrow,
    build_vector_labels,
    derive_scene,
    fit_space_and_scale,
    grid_divisions,
    tick_count,
)
from vectorviz.linalg import Matrix3, Vector3
from vectorviz.state import DisplaySettings

ALL_OFF = DisplaySettings(False, False, False, False)


def test_axis_extent():
    assert axis_extent(100, 5) == 20
    with pytest.raises(ValueError):
        axis_extent(100, 0)
    with pytest.raises(ValueError):
        axis_extent(-1, 5)


@pytest.mark.parametrize("span, unit, expected", [
    (40, 1, 41),
    (10, 3, 4),
    (9, 3, 4),
    (3.0, 0.1, 31),
    (0.5, 1, 1),
])
def test_tick_count(span, unit, expected):
    assert tick_count(span, unit) == expected


def test_tick_count_rejects_bad_unit():
    with pytest.raises(ValueError):
        tick_count(10, 0)


def test_axes_have_ticks_every_unit():
    axes = build_axes(20)
    assert len(axes) == 3
    for k, axis in enumerate(axes):
        assert len(axis.ticks) == 41
        start = np.zeros(3)
        start[k] = -20
        first = (np.asarray(axis.ticks[0].start) + np.asarray(axis.ticks[0].end)) / 2
        last = (np.asarray(axis.ticks[-1].start) + np.asarray(axis.ticks[-1].end)) / 2
        np.testing.assert_allclose(first, start)
        np.testing.assert_allclose(last, -start)


def test_ticks_are_perpendicular_with_fixed_half_width():
    for k, axis in enumerate(build_axes(5)):
        direction = np.zeros(3)
        direction[k] = 1.0
        for tick in axis.ticks:
            d = np.asarray(tick.start) - np.asarray(tick.end)
            assert np.dot(d, direction) == pytest.approx(0.0)
            assert np.linalg.norm(d) == pytest.approx(2 * config.STRIP_LENGTH)


def test_tick_reference_swaps_near_z():
    x_axis, y_axis, z_axis = build_axes(1)
    dx = np.subtract(x_axis.ticks[0].start, x_axis.ticks[0].end)
    dy = np.subtract(y_axis.ticks[0].start, y_axis.ticks[0].end)
    dz = np.subtract(z_axis.ticks[0].start, z_axis.ticks[0].end)
    np.testing.assert_allclose(dx, [0, -0.2, 0], atol=1e-12)
    np.testing.assert_allclose(dy, [0.2, 0, 0], atol=1e-12)
    # z cross x
    np.testing.assert_allclose(dz, [0, 0.2, 0], atol=1e-12)


def test_oblique_axis():
    axis = build_axis((0, 0, 0), (3, 4, 0), "#fff", unit_length=1)
    assert len(axis.ticks) == 6
    assert axis.line.end == (3.0, 4.0, 0.0)


def test_degenerate_axis_rejected():
    with pytest.raises(ValueError):
        build_axis((1, 1, 1), (1, 1, 1), "#fff")


def test_grids_cover_the_three_planes():
    grids = build_grids(20)
    assert [g.plane for g in grids] == ["yz", "xz", "xy"]
    for g in grids:
        assert g.size == 40
        assert g.divisions == 40
        assert len(g.segments) == 2 * 41
        assert g.opacity == config.GRID_OPACITY
    off_axis = {"yz": 0, "xz": 1, "xy": 2}
    for g in grids:
        for s in g.segments:
            assert s.start[off_axis[g.plane]] == 0.0
            assert s.end[off_axis[g.plane]] == 0.0


def test_grid_plane_lines_span_the_square():
    g = build_grid_plane("xy", size=4, divisions=2)
    xs = sorted({s.start[1] for s in g.segments if s.start[0] == -2 and s.end[0] == 2})
    assert xs == [-2.0, 0.0, 2.0]
    with pytest.raises(ValueError):
        build_grid_plane("xw", size=4, divisions=2)


def test_grid_divisions_follow_tick_spacing():
    assert grid_divisions(20) == 40
    assert grid_divisions(20, 5) == 8
    assert grid_divisions(0.1, 1) == 1


def test_transformed_grid_maps_through_matrix():
    grids = build_grids(2)
    scaled = build_transformed_grids(grids, Matrix3(m11=2, m22=3, m33=1))
    assert len(scaled) == 3
    for g, t in zip(grids, scaled):
        assert len(g.segments) == len(t.segments)
        for s, ts in zip(g.segments, t.segments):
            assert ts.start == pytest.approx((2 * s.start[0], 3 * s.start[1], s.start[2]))
            assert ts.color == config.COLORS["transformed_grid"]


def test_arrow_for_regular_vector():
    arrow = build_vector_arrow(Vector3(3, 4, 0), "#00ffff")
    assert arrow.origin == (0.0, 0.0, 0.0)
    assert arrow.direction == pytest.approx((0.6, 0.8, 0.0))
    assert arrow.length == pytest.approx(5.0)
    assert arrow.tip == pytest.approx((3.0, 4.0, 0.0))
    assert arrow.head_length == config.ARROW_HEAD_LENGTH
    assert not arrow.is_zero


def test_arrow_for_zero_vector_uses_fallback_direction():
    arrow = build_vector_arrow(Vector3(0, 0, 0), "#00ffff")
    assert arrow.direction == config.ZERO_ARROW_DIRECTION
    assert arrow.length == 0.0
    assert arrow.head_length == 0.0
    assert arrow.is_zero


def test_short_arrow_head_fits_inside_vector():
    arrow = build_vector_arrow(Vector3(0.1, 0, 0), "#00ffff")
    assert arrow.head_length == pytest.approx(0.1)


def test_component_breakdown_path():
    lines = build_component_lines(Vector3(1, 2, 3))
    assert [s.start for s in lines] == [(0, 0, 0), (1, 0, 0), (1, 2, 0)]
    assert [s.end for s in lines] == [(1, 0, 0), (1, 2, 0), (1, 2, 3)]
    assert all(s.opacity == config.BREAKDOWN_OPACITY for s in lines)


def test_labels():
    axis_labels = build_axis_labels(20)
    assert [lb.text for lb in axis_labels] == ["X", "Y", "Z"]
    assert axis_labels[0].position == (20.5, 0.0, 0.0)
    assert axis_labels[2].position == (0.0, 0.0, 20.5)

    v, u = build_vector_labels(Vector3(2, 4, 6), Vector3(-2, 0, 1))
    assert (v.text, v.position) == ("v", (1.0, 2.0, 3.0))
    assert (u.text, u.position) == ("u", (-1.0, 0.0, 0.5))


@pytest.mark.parametrize("a, b, scale, length", [
    (Vector3(1, 2, 1), Vector3(1, 2, 1), 1, 10),
    (Vector3(0, 0, 0), Vector3(0, 0, 0), 1, 10),
    (Vector3(0, 0, 0), Vector3(100, 0, -20), 12, 120),
    (Vector3(0, 0, 0), Vector3(95, 0, 0), 10, 100),
])
def test_fit_space_and_scale(a, b, scale, length):
    fit = fit_space_and_scale(a, b)
    assert fit.scale == scale
    assert fit.length == length


def test_scene_with_everything_enabled():
    v = Vector3(1, 2, 1)
    scene = derive_scene(v, Matrix3.identity(), v, DisplaySettings(), generation=7)
    assert scene.generation == 7
    assert scene.axis_length == 20
    assert len(scene.axes) == 3
    assert len(scene.grids) == 3
    assert len(scene.transformed_grids) == 3
    assert len(scene.arrows) == 2
    assert [a.name for a in scene.arrows] == ["v", "u"]
    assert len(scene.labels) == 5
    assert len(scene.breakdown) == 6


def test_scene_with_everything_disabled():
    v = Vector3(1, 2, 1)
    scene = derive_scene(v, Matrix3.identity(), v, ALL_OFF)
    assert len(scene.axes) == 3
    assert len(scene.arrows) == 2
    assert scene.grids == []
    assert scene.transformed_grids == []
    assert scene.labels == []
    assert scene.breakdown == []
    assert scene.primitive_count() == 3 * (1 + 41) + 2


def test_transformed_grid_alone():
    v = Vector3(1, 2, 1)
    settings = DisplaySettings(show_grid=False, show_transformed_grid=True,
                               show_labels=False, show_vector_breakdown=False)
    scene = derive_scene(v, Matrix3(m11=2, m22=2, m33=2), Vector3(2, 4, 2), settings)
    assert scene.grids == []
    assert len(scene.transformed_grids) == 3


def test_grid_lines_follow_ticks_for_fractional_extent():
    axis_length = axis_extent(100, 3)
    plane = build_grids(axis_length)[2]
    assert plane.divisions == 66
    x_lines = [s for s in plane.segments if s.start[0] == s.end[0]]
    for s in x_lines:
        offset = s.start[0] + axis_length
        assert offset == pytest.approx(round(offset))
    assert max(s.start[0] for s in x_lines) <= axis_length


def test_grid_with_wide_tick_spacing():
    plane = build_grids(20, unit_length=5)[0]
    assert plane.divisions == 8
    ys = sorted({s.start[1] for s in plane.segments if s.start[1] == s.end[1]})
    assert ys == pytest.approx([-20 + 5 * k for k in range(9)])
