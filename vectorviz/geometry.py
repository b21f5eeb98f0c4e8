"""
Scene geometry for the vector transform view.

Everything here is plain data (points, colors, opacities, rotations): the
plotly renderer in vectorviz.figure is the only code that turns it into
traces. Each call recomputes from its inputs; nothing is cached.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

import numpy as np

from vectorviz import config
from vectorviz.linalg import Matrix3, Vector3, apply_linear_transform_3d

if TYPE_CHECKING:
    from vectorviz.state import DisplaySettings

logger = logging.getLogger(__name__)

Point = Tuple[float, float, float]

ORIGIN: Point = (0.0, 0.0, 0.0)

# Coordinate index pairs spanned by each grid plane
GRID_PLANES = {
    "yz": (1, 2),
    "xz": (0, 2),
    "xy": (0, 1),
}

# Rotation (axis, angle) taking the renderer's default XZ grid into each plane
GRID_ROTATIONS = {
    "yz": ("z", math.pi / 2),
    "xz": None,
    "xy": ("x", math.pi / 2),
}


def _pt(arr) -> Point:
    return (float(arr[0]), float(arr[1]), float(arr[2]))


# ---------- Primitives ----------

@dataclass(frozen=True)
class Segment:
    start: Point
    end: Point
    color: str
    opacity: float = 1.0


@dataclass(frozen=True)
class AxisGeometry:
    line: Segment
    ticks: Tuple[Segment, ...]


@dataclass(frozen=True)
class GridPlane:
    plane: str
    size: float
    divisions: int
    rotation: Optional[Tuple[str, float]]
    segments: Tuple[Segment, ...]
    color: str
    opacity: float


@dataclass(frozen=True)
class Arrow:
    origin: Point
    direction: Point
    length: float
    color: str
    head_length: float
    head_width: float
    name: str = ""

    @property
    def tip(self) -> Point:
        d = np.asarray(self.direction) * self.length + np.asarray(self.origin)
        return _pt(d)

    @property
    def is_zero(self) -> bool:
        return self.length == 0.0


@dataclass(frozen=True)
class Label:
    text: str
    position: Point
    color: str


@dataclass(frozen=True)
class ScaleFit:
    scale: float
    length: float


@dataclass
class SceneContents:
    """
    Everything drawn for one state of the page. A new instance replaces the
    previous one wholesale; `generation` tells the two apart.
    """
    generation: int
    axis_length: float
    unit_length: float
    axes: List[AxisGeometry] = field(default_factory=list)
    grids: List[GridPlane] = field(default_factory=list)
    transformed_grids: List[GridPlane] = field(default_factory=list)
    arrows: List[Arrow] = field(default_factory=list)
    breakdown: List[Segment] = field(default_factory=list)
    labels: List[Label] = field(default_factory=list)

    def primitive_count(self) -> int:
        n = sum(1 + len(a.ticks) for a in self.axes)
        n += sum(len(g.segments) for g in self.grids)
        n += sum(len(g.segments) for g in self.transformed_grids)
        return n + len(self.arrows) + len(self.breakdown) + len(self.labels)


# ---------- Axes ----------

def axis_extent(length: float, unit: float) -> float:
    """
    Half-length of each drawn axis: length / unit.
    """
    if length <= 0 or unit <= 0:
        raise ValueError(f"length and unit must be positive (got {length}, {unit})")
    return length / unit


def tick_count(span: float, unit_length: float = config.DEFAULT_UNIT_LENGTH) -> int:
    """
    Number of tick strips along an axis of total length `span`, one every
    `unit_length` starting at the axis start. Exact multiples get the end tick.
    """
    if unit_length <= 0:
        raise ValueError(f"unit_length must be positive (got {unit_length})")
    return int(math.floor(span / unit_length + 1e-9)) + 1


def tick_perpendicular(direction, strip_length: float = config.STRIP_LENGTH) -> np.ndarray:
    direction = np.asarray(direction, dtype=float)
    ref = np.array([0.0, 0.0, 1.0])
    if abs(direction[2]) > 0.99:
        ref = np.array([1.0, 0.0, 0.0])
    perp = np.cross(direction, ref)
    return perp / np.linalg.norm(perp) * strip_length


def build_axis(start: Sequence[float],
               end: Sequence[float],
               color: str,
               unit_length: float = config.DEFAULT_UNIT_LENGTH,
               strip_length: float = config.STRIP_LENGTH) -> AxisGeometry:
    start = np.asarray(start, dtype=float)
    end = np.asarray(end, dtype=float)
    span = float(np.linalg.norm(end - start))
    if span == 0.0:
        raise ValueError("axis start and end coincide")
    direction = (end - start) / span
    perp = tick_perpendicular(direction, strip_length)

    ticks = []
    for i in range(tick_count(span, unit_length)):
        p = start + direction * (i * unit_length)
        ticks.append(Segment(_pt(p + perp), _pt(p - perp), color))

    return AxisGeometry(line=Segment(_pt(start), _pt(end), color), ticks=tuple(ticks))


def build_axes(axis_length: float,
               color: str = config.COLORS["axis"],
               unit_length: float = config.DEFAULT_UNIT_LENGTH,
               strip_length: float = config.STRIP_LENGTH) -> List[AxisGeometry]:
    axes = []
    for k in range(3):
        e = np.zeros(3)
        e[k] = axis_length
        axes.append(build_axis(-e, e, color, unit_length, strip_length))
    return axes


def build_axis_labels(axis_length: float,
                      offset: float = config.LABEL_OFFSET,
                      color: str = config.COLORS["labels"]) -> List[Label]:
    d = axis_length + offset
    return [
        Label("X", (d, 0.0, 0.0), color),
        Label("Y", (0.0, d, 0.0), color),
        Label("Z", (0.0, 0.0, d), color),
    ]


# ---------- Grids ----------

def grid_divisions(axis_length: float, unit_length: float = config.DEFAULT_UNIT_LENGTH) -> int:
    """
    Number of grid cells across one side, one per tick interval. A leftover
    partial cell at the far edge is not counted.
    """
    return max(1, int(math.floor(2 * axis_length / unit_length + 1e-9)))


def build_grid_plane(plane: str,
                     size: float,
                     divisions: int,
                     color: str = config.COLORS["grid"],
                     opacity: float = config.GRID_OPACITY,
                     step: Optional[float] = None) -> GridPlane:
    """
    Square grid centred at the origin. Lines sit every `step` from the
    negative edge (size / divisions when not given).
    """
    if plane not in GRID_PLANES:
        raise ValueError(f"Unknown grid plane {plane!r}")
    a, b = GRID_PLANES[plane]
    half = size / 2.0
    if step is None:
        step = size / divisions

    segments = []
    for k in range(divisions + 1):
        c = -half + k * step
        for fixed, free in ((b, a), (a, b)):
            p0 = np.zeros(3)
            p1 = np.zeros(3)
            p0[fixed] = p1[fixed] = c
            p0[free], p1[free] = -half, half
            segments.append(Segment(_pt(p0), _pt(p1), color, opacity))

    return GridPlane(
        plane=plane,
        size=size,
        divisions=divisions,
        rotation=GRID_ROTATIONS[plane],
        segments=tuple(segments),
        color=color,
        opacity=opacity,
    )


def build_grids(axis_length: float,
                unit_length: float = config.DEFAULT_UNIT_LENGTH,
                color: str = config.COLORS["grid"],
                opacity: float = config.GRID_OPACITY) -> List[GridPlane]:
    size = 2 * axis_length
    divisions = grid_divisions(axis_length, unit_length)
    # grid lines share the ticks' spacing so the two line up
    step = min(unit_length, size)
    return [build_grid_plane(p, size, divisions, color, opacity, step) for p in GRID_PLANES]


def build_transformed_grids(grids: Sequence[GridPlane],
                            matrix: Matrix3,
                            color: str = config.COLORS["transformed_grid"],
                            opacity: float = config.TRANSFORMED_GRID_OPACITY) -> List[GridPlane]:
    """
    Image of each grid plane under the matrix. Lines stay lines, so mapping
    segment endpoints is enough.
    """
    out = []
    for g in grids:
        if not g.segments:
            out.append(g)
            continue
        starts = apply_linear_transform_3d([s.start for s in g.segments], matrix)
        ends = apply_linear_transform_3d([s.end for s in g.segments], matrix)
        segments = tuple(
            Segment(_pt(p), _pt(q), color, opacity) for p, q in zip(starts, ends)
        )
        out.append(GridPlane(
            plane=g.plane,
            size=g.size,
            divisions=g.divisions,
            rotation=None,
            segments=segments,
            color=color,
            opacity=opacity,
        ))
    return out


# ---------- Vectors ----------

def build_vector_arrow(vector: Vector3,
                       color: str,
                       head_length: float = config.ARROW_HEAD_LENGTH,
                       head_width: float = config.ARROW_HEAD_WIDTH,
                       name: str = "") -> Arrow:
    """
    Arrow from the origin to the vector tip. A zero vector has no direction,
    so it points along ZERO_ARROW_DIRECTION with length 0.
    """
    length = vector.length()
    if length == 0.0:
        direction = config.ZERO_ARROW_DIRECTION
    else:
        direction = _pt(vector.as_array() / length)
    return Arrow(
        origin=ORIGIN,
        direction=direction,
        length=length,
        color=color,
        head_length=min(head_length, length),
        head_width=head_width if length > 0 else 0.0,
        name=name,
    )


def build_component_lines(vector: Vector3,
                          color: str = config.COLORS["vector_breakdown"],
                          opacity: float = config.BREAKDOWN_OPACITY) -> List[Segment]:
    # 0 -> (x,0,0) -> (x,y,0) -> (x,y,z)
    px = (vector.x, 0.0, 0.0)
    pxy = (vector.x, vector.y, 0.0)
    return [
        Segment(ORIGIN, px, color, opacity),
        Segment(px, pxy, color, opacity),
        Segment(pxy, vector.as_tuple(), color, opacity),
    ]


def build_vector_labels(vector: Vector3,
                        transformed: Vector3,
                        color: str = config.COLORS["labels"]) -> List[Label]:
    return [
        Label("v", vector.scaled(0.5).as_tuple(), color),
        Label("u", transformed.scaled(0.5).as_tuple(), color),
    ]


def fit_space_and_scale(a: Vector3, b: Vector3) -> ScaleFit:
    """
    Pick a tick spacing and axis length that keep both vectors in view:
    about ten ticks across the value range, never less than ten units long.
    """
    values = a.as_tuple() + b.as_tuple()
    lo, hi = min(values), max(values)
    scale = max(1, math.ceil((hi - lo) / 10))
    return ScaleFit(scale=float(scale), length=float(max(10 * scale, hi)))


# ---------- Whole scene ----------

def derive_scene(vector: Vector3,
                 matrix: Matrix3,
                 transformed: Vector3,
                 settings: "DisplaySettings",
                 length: float = config.DEFAULT_LENGTH,
                 unit: float = config.DEFAULT_UNIT,
                 unit_length: float = config.DEFAULT_UNIT_LENGTH,
                 generation: int = 0) -> SceneContents:
    axis_length = axis_extent(length, unit)
    scene = SceneContents(
        generation=generation,
        axis_length=axis_length,
        unit_length=unit_length,
    )

    scene.axes = build_axes(axis_length, unit_length=unit_length)

    if settings.show_grid or settings.show_transformed_grid:
        grids = build_grids(axis_length, unit_length)
        if settings.show_grid:
            scene.grids = grids
        if settings.show_transformed_grid:
            scene.transformed_grids = build_transformed_grids(grids, matrix)

    scene.arrows = [
        build_vector_arrow(vector, config.COLORS["vector_initial"], name="v"),
        build_vector_arrow(transformed, config.COLORS["vector_transformed"], name="u"),
    ]

    if settings.show_labels:
        scene.labels = build_axis_labels(axis_length) + build_vector_labels(vector, transformed)

    if settings.show_vector_breakdown:
        scene.breakdown = build_component_lines(vector) + build_component_lines(transformed)

    logger.debug(
        "Scene generation %d: axis_length=%.3f, %d primitives",
        generation, axis_length, scene.primitive_count(),
    )
    return scene
