"""
GIF export of the transformation: v is carried to M·v along the straight
matrix path M(t) = (1 - t) I + t M, t in [0, 1].
"""
from __future__ import annotations

import logging

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import PillowWriter

from vectorviz import config
from vectorviz.geometry import build_component_lines
from vectorviz.linalg import Matrix3, Vector3, multiply_vector_matrix

logger = logging.getLogger(__name__)


def interpolate_matrix(matrix: Matrix3, t: float) -> Matrix3:
    t = float(np.clip(t, 0.0, 1.0))
    M = (1.0 - t) * np.eye(3) + t * matrix.as_array()
    return Matrix3.from_array(M)


def _plot_arrow(ax, vector: Vector3, color, label):
    ax.quiver(0, 0, 0, vector.x, vector.y, vector.z,
              color=color, linewidth=2.0, arrow_length_ratio=0.12, label=label)


def create_animation_gif(filename,
                         vector: Vector3,
                         matrix: Matrix3,
                         n_frames: int = config.GIF_FRAMES,
                         fps: int = config.GIF_FPS,
                         show_breakdown: bool = True,
                         dpi: int = 100) -> str:
    """
    Render n_frames of the path and save them as a GIF. Returns filename.
    """
    if n_frames < 2:
        raise ValueError("n_frames must be at least 2")

    transformed = multiply_vector_matrix(vector, matrix)
    extent = max(1.0, np.abs(np.concatenate([vector.as_array(), transformed.as_array()])).max())
    lim = 1.2 * extent

    fig = plt.figure(figsize=(6.4, 6.4))
    ax = fig.add_subplot(111, projection="3d")

    writer = PillowWriter(fps=fps)
    logger.info("Writing %d-frame animation to %s", n_frames, filename)

    with writer.saving(fig, filename, dpi=dpi):
        for i in range(n_frames):
            t = i / (n_frames - 1)
            u_t = multiply_vector_matrix(vector, interpolate_matrix(matrix, t))

            ax.cla()

            for k in range(3):
                e = np.zeros(3)
                e[k] = lim
                ax.plot([-e[0], e[0]], [-e[1], e[1]], [-e[2], e[2]],
                        color="goldenrod", linewidth=1.0)

            _plot_arrow(ax, vector, "c", "v")
            _plot_arrow(ax, u_t, "r", "u(t)")

            if show_breakdown:
                for seg in build_component_lines(u_t):
                    ax.plot([seg.start[0], seg.end[0]],
                            [seg.start[1], seg.end[1]],
                            [seg.start[2], seg.end[2]],
                            color="gray", linewidth=0.8, alpha=seg.opacity)

            ax.set_xlim(-lim, lim)
            ax.set_ylim(-lim, lim)
            ax.set_zlim(-lim, lim)
            ax.set_box_aspect((1, 1, 1))
            ax.view_init(elev=30, azim=45)

            ax.set_xlabel("x")
            ax.set_ylabel("y")
            ax.set_zlabel("z")

            ax.set_title(f"u(t) = ((1 - t) I + t T) v,  t = {t:.2f}")
            ax.legend(loc="upper left")

            writer.grab_frame()

    plt.close(fig)
    return filename
