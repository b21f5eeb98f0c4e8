"""
Plotly rendering of SceneContents.

The figure is rebuilt from scratch on every Streamlit rerun; the previous
figure is simply dropped. Camera orientation survives reruns through the
relayout events that streamlit_plotly_events hands back.
"""
from __future__ import annotations

import copy
import logging
from typing import Iterable, List, MutableMapping, Optional

import numpy as np
import plotly.graph_objects as go

from vectorviz import config
from vectorviz.geometry import Arrow, GridPlane, Label, SceneContents, Segment

logger = logging.getLogger(__name__)

CAMERA_KEY = "plotly_camera"


# ---------- Geometry -> trace coordinates ----------

def build_segment_lines(segments: Iterable[Segment]):
    """
    Flatten segments into x/y/z lists separated by None, so that a single
    Scatter3d trace draws all of them.
    """
    xs, ys, zs = [], [], []
    for s in segments:
        xs.extend([s.start[0], s.end[0], None])
        ys.extend([s.start[1], s.end[1], None])
        zs.extend([s.start[2], s.end[2], None])
    return xs, ys, zs


def _lines_trace(segments, color, width, name, opacity=1.0, showlegend=False):
    xs, ys, zs = build_segment_lines(segments)
    return go.Scatter3d(
        x=xs, y=ys, z=zs,
        mode="lines",
        line=dict(width=width, color=color),
        opacity=float(opacity),
        name=name,
        showlegend=showlegend,
        hoverinfo="skip",
    )


def _grid_traces(grids: List[GridPlane], name: str) -> List[go.Scatter3d]:
    return [
        _lines_trace(g.segments, g.color, 1, f"{name} ({g.plane})", opacity=g.opacity)
        for g in grids
    ]


def _arrow_traces(arrow: Arrow) -> List[go.BaseTraceType]:
    label = arrow.name or "vector"
    if arrow.is_zero:
        return [go.Scatter3d(
            x=[arrow.origin[0]], y=[arrow.origin[1]], z=[arrow.origin[2]],
            mode="markers",
            marker=dict(size=4, color=arrow.color),
            name=f"{label} (zero)",
            hovertemplate=f"{label} = 0<extra></extra>",
        )]

    origin = np.asarray(arrow.origin, dtype=float)
    direction = np.asarray(arrow.direction, dtype=float)
    tip = origin + direction * arrow.length
    shaft_end = tip - direction * arrow.head_length
    head = direction * arrow.head_length

    shaft = go.Scatter3d(
        x=[origin[0], shaft_end[0]],
        y=[origin[1], shaft_end[1]],
        z=[origin[2], shaft_end[2]],
        mode="lines",
        line=dict(width=6, color=arrow.color),
        name=label,
        legendgroup=label,
        hoverinfo="skip",
    )
    cone = go.Cone(
        x=[tip[0]], y=[tip[1]], z=[tip[2]],
        u=[head[0]], v=[head[1]], w=[head[2]],
        anchor="tip",
        sizemode="absolute",
        sizeref=arrow.head_width,
        colorscale=[[0, arrow.color], [1, arrow.color]],
        showscale=False,
        name=label,
        legendgroup=label,
        hovertemplate=f"{label}<br>x=%{{x:.3f}}<br>y=%{{y:.3f}}<br>z=%{{z:.3f}}<extra></extra>",
    )
    return [shaft, cone]


def _label_trace(labels: List[Label]) -> go.Scatter3d:
    return go.Scatter3d(
        x=[lb.position[0] for lb in labels],
        y=[lb.position[1] for lb in labels],
        z=[lb.position[2] for lb in labels],
        mode="text",
        text=[lb.text for lb in labels],
        textfont=dict(color=[lb.color for lb in labels], size=16),
        name="labels",
        showlegend=False,
        hoverinfo="skip",
    )


# ---------- Figure ----------

def make_scene_figure(scene: SceneContents,
                      camera: Optional[dict] = None,
                      uirevision_key: str = "keep_camera_vector_v1",
                      height: int = config.FIGURE_HEIGHT) -> go.Figure:
    fig = go.Figure()

    for i, axis in enumerate(scene.axes):
        fig.add_trace(_lines_trace(
            (axis.line,) + axis.ticks, axis.line.color, 3, f"axis {'xyz'[i]}",
        ))

    for tr in _grid_traces(scene.grids, "grid"):
        fig.add_trace(tr)
    for tr in _grid_traces(scene.transformed_grids, "transformed grid"):
        fig.add_trace(tr)

    if scene.breakdown:
        fig.add_trace(_lines_trace(
            scene.breakdown,
            scene.breakdown[0].color,
            3,
            "vector breakdown",
            opacity=scene.breakdown[0].opacity,
            showlegend=True,
        ))

    for arrow in scene.arrows:
        for tr in _arrow_traces(arrow):
            fig.add_trace(tr)

    if scene.labels:
        fig.add_trace(_label_trace(scene.labels))

    if camera is None:
        camera = config.DEFAULT_CAMERA
    camera = copy.deepcopy(camera)
    camera["projection"] = dict(type="orthographic")

    r = scene.axis_length + 1.0
    axis_style = dict(range=[-r, r], showbackground=False, showgrid=False,
                      zeroline=False, showticklabels=False, title="")
    fig.update_layout(
        template="plotly_dark",
        uirevision=uirevision_key,
        scene=dict(
            xaxis=axis_style,
            yaxis=axis_style,
            zaxis=axis_style,
            aspectmode="cube",
            bgcolor=config.COLORS["background"],
        ),
        scene_camera=camera,
        margin=dict(l=0, r=0, t=40, b=0),
        legend=dict(x=0.02, y=0.98),
        height=height,
    )
    logger.debug("Figure for scene generation %d: %d traces", scene.generation, len(fig.data))
    return fig


# ---------- Camera persistence via plotly_events ----------

CAMERA_PREFIX = "scene.camera"


def _has_eye(cam) -> bool:
    eye = cam.get("eye") if isinstance(cam, dict) else None
    return isinstance(eye, dict) and all(ax in eye for ax in "xyz")


def merge_camera_event(event: dict, base: dict) -> Optional[dict]:
    """
    Camera described by one relayout event, or None if the event does not
    touch the camera. Dotted keys ("scene.camera.eye.x") patch `base`;
    a whole "scene.camera" dict replaces it.
    """
    whole = event.get(CAMERA_PREFIX)
    if isinstance(whole, dict):
        return copy.deepcopy(whole)

    patches = {
        k[len(CAMERA_PREFIX) + 1:]: v
        for k, v in event.items()
        if isinstance(k, str) and k.startswith(CAMERA_PREFIX + ".")
    }
    if not patches:
        return None

    cam = copy.deepcopy(base)
    for path, value in patches.items():
        group, _, leaf = path.partition(".")
        if not leaf:
            continue
        try:
            value = float(value)
        except (TypeError, ValueError):
            pass
        cam.setdefault(group, {})[leaf] = value
    return cam


def update_camera_from_events(events, store: MutableMapping) -> None:
    """
    Keep the user's orbit/zoom across reruns. `store` is st.session_state
    (or any dict in tests); the camera lands in store["plotly_camera"].
    A camera without a full eye position resets to DEFAULT_CAMERA.
    """
    for e in events or []:
        if not isinstance(e, dict):
            continue
        cam = merge_camera_event(e, store.get(CAMERA_KEY, config.DEFAULT_CAMERA))
        if cam is None:
            continue
        if not _has_eye(cam):
            logger.debug("Camera event without a full eye position: %r", e)
            cam = copy.deepcopy(config.DEFAULT_CAMERA)
        store[CAMERA_KEY] = cam
