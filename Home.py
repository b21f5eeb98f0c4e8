# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 09:41:05 2026

@author: Brayden Miao
"""



# Home page for the Vector Transformation Playground

import base64
from pathlib import Path

import streamlit as st
import streamlit.components.v1 as components

from vectorviz import config


st.set_page_config(
    page_title="Vector Transformation Playground",
    layout="wide"
)

st.title("Vector Transformation Playground")

st.write(
    """
    Enter a vector **v** and a 3×3 matrix **T**, and see **u = T·v** drawn next to **v**
    in a rotatable 3D space.

    - Axes with unit ticks, optional grids in the three coordinate planes
    - The same grids after applying **T** (transformed grid)
    - Component breakdown of each vector into x, y and z steps
    - A GIF of **v** being carried to **u** as the matrix goes from I to T
    """
)

# ----------------------------
# Caching helper
# ----------------------------
@st.cache_data(show_spinner=False)
def load_media_b64(path_str: str, file_mtime: float) -> str:
    """
    Read a local file and return base64 string.
    Cached across Streamlit reruns. Cache invalidates automatically when the file changes
    because we include file_mtime in the cache key.
    """
    with open(path_str, "rb") as f:
        return base64.b64encode(f.read()).decode("utf-8")


def gif_preview_panel(gif_path: Path, title: str, height: int = 400) -> None:
    """
    Show the last exported GIF, if there is one.
    """
    if gif_path.exists():
        st.markdown(title)
        b64 = load_media_b64(str(gif_path), gif_path.stat().st_mtime)
        components.html(
            f'<img src="data:image/gif;base64,{b64}" style="max-width:100%;max-height:{height}px">',
            height=height,
        )
    else:
        st.info(f"{gif_path.name} not found yet. Generate it from the Vector Transform page.")


col1, col2 = st.columns(2)

with col1:
    st.subheader("Vector Transform")
    st.write(
        """
        Type the vector as `x,y,z` and the matrix row by row as
        `m11,m12,m13,m21,m22,m23,m31,m32,m33`, then press **Transform**.
        """
    )
    if st.button("Go to Vector Transform"):
        st.switch_page("pages/1_Vector_Transform.py")

with col2:
    gif_preview_panel(
        Path.cwd() / config.GIF_FILENAME,
        "##### Last exported animation",
        height=400
    )
