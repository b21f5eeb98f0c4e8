# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 10:12:40 2026

@author: Brayden Miao
"""
# In the web UI:
# Type a vector (x,y,z) and a matrix (m11,...,m33) in the sidebar, press Transform.
# Toggle grids / labels / breakdown under Display settings.
# Rotate or zoom the plot; the view stays put across reruns.

import os

import streamlit as st
import streamlit.components.v1 as components
from streamlit_plotly_events import plotly_events

from vectorviz import config
from vectorviz.figure import CAMERA_KEY, make_scene_figure, update_camera_from_events
from vectorviz.logging_config import setup_logging
from vectorviz.animation import create_animation_gif
from vectorviz.state import PlaygroundState

VECTOR_LABEL = "Vector v (x,y,z)"
MATRIX_LABEL = "Matrix T (m11,m12,m13,...,m33)"

SETTING_LABELS = {
    "show_grid": "Show Grid",
    "show_transformed_grid": "Show Transformed Grid",
    "show_labels": "Show Labels",
    "show_vector_breakdown": "Show Vector Breakdown",
}


# ---------- LaTeX helpers ----------

def fmt(x):
    return f"{x:.3g}"


def vector_latex(v):
    return r"\begin{bmatrix} %s \\ %s \\ %s \end{bmatrix}" % (fmt(v.x), fmt(v.y), fmt(v.z))


def matrix_latex(m):
    rows = [" & ".join(fmt(x) for x in row) for row in m.rows()]
    return r"\begin{bmatrix} %s \end{bmatrix}" % r" \\ ".join(rows)


def focus_input(label):
    """
    Give keyboard focus back to a sidebar text input after this run renders.
    """
    components.html(
        f"""
        <script>
        const el = window.parent.document.querySelector('input[aria-label="{label}"]');
        if (el) {{ el.focus(); el.select(); }}
        </script>
        """,
        height=0,
    )


def show_notification(state):
    # st.toast dismisses itself, so the message goes away without a rerun
    note = state.take_unshown_notification()
    if note is None:
        return
    icon = "\u2705" if note.severity == "success" else "\u26a0\ufe0f"
    st.toast(note.message, icon=icon)


# ---------- Streamlit app ----------

def main():
    st.set_page_config(
        page_title="Vector Transformation",
        layout="wide"
    )
    setup_logging(config.LOG_LEVEL)

    if "playground" not in st.session_state:
        st.session_state.playground = PlaygroundState.default()
    if CAMERA_KEY not in st.session_state:
        st.session_state[CAMERA_KEY] = dict(config.DEFAULT_CAMERA)
    if "uirevision_key" not in st.session_state:
        st.session_state.uirevision_key = "keep_camera_vector_v1"

    state = st.session_state.playground

    # Sidebar: inputs
    st.sidebar.header("Vector Transformation")

    with st.sidebar.form("transform_form"):
        vector_text = st.text_input(VECTOR_LABEL, value=state.vector_text, placeholder="x,y,z")
        matrix_text = st.text_input(MATRIX_LABEL, value=state.matrix_text, placeholder="m11,m12,m13,...,m33")
        submitted = st.form_submit_button("Transform", use_container_width=True)

    if submitted:
        state.set_vector_text(vector_text)
        state.set_matrix_text(matrix_text)
        state.perform_transformation()

    # Sidebar: display settings
    st.sidebar.markdown("---")
    with st.sidebar.expander("Display settings", expanded=False):
        for name, label in SETTING_LABELS.items():
            value = st.checkbox(label, value=getattr(state.settings, name), key=f"setting_{name}")
            if value != getattr(state.settings, name):
                state.update_setting(name, value)

        length = st.number_input("Space length", min_value=1.0, value=float(state.length), step=10.0)
        unit = st.number_input("Unit", min_value=0.1, value=float(state.unit), step=1.0)
        unit_length = st.number_input("Tick spacing", min_value=0.1, value=float(state.unit_length), step=0.5)
        if (length, unit, unit_length) != (state.length, state.unit, state.unit_length):
            state.set_scale(length, unit, unit_length)

        if st.button("Auto-fit axes to v and u"):
            state.apply_auto_fit()
            st.rerun()

    # Sidebar: result
    st.sidebar.markdown("---")
    st.sidebar.subheader("Result")
    st.sidebar.latex("T = " + matrix_latex(state.matrix))
    st.sidebar.latex(r"\vec v = " + vector_latex(state.vector))
    st.sidebar.latex(
        r"\vec u = T \cdot \vec v = " + vector_latex(state.transformed)
    )
    st.sidebar.caption(
        f"* scale: axes span ±{state.length / state.unit:g}, ticks every {state.unit_length:g}"
    )

    show_notification(state)

    focus = state.consume_focus()
    if focus == "vector":
        focus_input(VECTOR_LABEL)
    elif focus == "matrix":
        focus_input(MATRIX_LABEL)

    # Main view
    st.title("Vector Transformation in 3D")

    scene = state.rebuild_scene()
    fig = make_scene_figure(
        scene,
        camera=st.session_state[CAMERA_KEY],
        uirevision_key=st.session_state.uirevision_key,
    )

    events = plotly_events(
        fig,
        click_event=False,
        select_event=False,
        hover_event=True,
        override_height=config.FIGURE_HEIGHT,
        key="plotly_events_vector",
    )
    update_camera_from_events(events, st.session_state)

    st.caption("Drag to rotate, scroll to zoom. Cyan is v, red is u = T·v.")

    # ---------- GIF generation ----------
    st.markdown("## GIF animation of the transformation")

    if st.button(f"Generate GIF animation ({config.GIF_FILENAME})"):
        with st.spinner("Generating GIF animation (this may take a bit)..."):
            try:
                create_animation_gif(
                    config.GIF_FILENAME,
                    state.vector,
                    state.matrix,
                    n_frames=config.GIF_FRAMES,
                    fps=config.GIF_FPS,
                    show_breakdown=state.settings.show_vector_breakdown,
                )
                st.success(f"Animation saved as {config.GIF_FILENAME}")
            except Exception as e:
                st.error(f"Failed to create animation. Error: {e}")

    if os.path.exists(config.GIF_FILENAME):
        vc1, vc2, vc3 = st.columns([1, 2, 1])
        with vc2:
            st.image(config.GIF_FILENAME)


if __name__ == "__main__":
    main()
