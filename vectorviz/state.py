"""
Page state for the vector transform view.

One PlaygroundState object owns the raw text, the committed vector/matrix,
the display settings and the active notification. The Streamlit page keeps
it in st.session_state and talks to it only through the methods below.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, fields, replace
from typing import Optional

from vectorviz import config
from vectorviz.errors import InputError
from vectorviz.geometry import SceneContents, derive_scene, fit_space_and_scale
from vectorviz.linalg import Matrix3, Vector3, multiply_vector_matrix
from vectorviz.parsing import (
    check_matrix_input,
    check_vector_input,
    format_matrix_input,
    format_vector_input,
    parse_matrix_input,
    parse_vector_input,
)

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Transformation successful."


@dataclass(frozen=True)
class DisplaySettings:
    show_grid: bool = True
    show_transformed_grid: bool = True
    show_labels: bool = True
    show_vector_breakdown: bool = True

    @classmethod
    def names(cls):
        return [f.name for f in fields(cls)]


@dataclass(frozen=True)
class Notification:
    message: str
    severity: str  # "success" | "danger"
    created_at: float
    lifetime: float = config.NOTIFICATION_LIFETIME

    def expired(self, now: float) -> bool:
        return now - self.created_at >= self.lifetime


@dataclass
class PlaygroundState:
    vector: Vector3
    matrix: Matrix3
    transformed: Vector3
    vector_text: str
    matrix_text: str
    settings: DisplaySettings = field(default_factory=DisplaySettings)
    length: float = config.DEFAULT_LENGTH
    unit: float = config.DEFAULT_UNIT
    unit_length: float = config.DEFAULT_UNIT_LENGTH
    notification: Optional[Notification] = None
    focus_field: Optional[str] = None
    shown_notification: Optional[Notification] = None
    generation: int = 0

    @classmethod
    def default(cls) -> "PlaygroundState":
        vector = Vector3.from_iterable(config.DEFAULT_VECTOR)
        matrix = Matrix3.from_iterable(config.DEFAULT_MATRIX)
        return cls(
            vector=vector,
            matrix=matrix,
            transformed=multiply_vector_matrix(vector, matrix),
            vector_text=format_vector_input(vector),
            matrix_text=format_matrix_input(matrix),
        )

    # ---------- Raw text ----------

    def set_vector_text(self, text: str) -> None:
        self.vector_text = text

    def set_matrix_text(self, text: str) -> None:
        self.matrix_text = text

    # ---------- Commit ----------

    def perform_transformation(self, now: Optional[float] = None) -> bool:
        """
        Validate both fields and, if they pass, commit them and recompute u.

        The vector field is checked first; on failure nothing numeric
        changes, a warning is posted and focus_field names the bad input.
        """
        try:
            check_vector_input(self.vector_text)
            check_matrix_input(self.matrix_text)
        except InputError as e:
            logger.warning("Rejected %s input: %s", e.field, e.message)
            self.notify(e.message, "danger", now=now)
            self.focus_field = e.field
            return False

        self.vector = parse_vector_input(self.vector_text)
        self.matrix = parse_matrix_input(self.matrix_text)
        self.transformed = multiply_vector_matrix(self.vector, self.matrix)
        self.focus_field = None

        logger.info(
            "Transformed v=%s by M=%s -> u=%s",
            self.vector.as_tuple(), self.matrix.rows(), self.transformed.as_tuple(),
        )
        self.notify(SUCCESS_MESSAGE, "success", now=now)
        return True

    def consume_focus(self) -> Optional[str]:
        name, self.focus_field = self.focus_field, None
        return name

    # ---------- Settings ----------

    def update_setting(self, name: str, value: bool) -> None:
        if name not in DisplaySettings.names():
            raise KeyError(f"Unknown display setting {name!r}")
        self.settings = replace(self.settings, **{name: bool(value)})

    def set_scale(self, length: float, unit: float, unit_length: Optional[float] = None) -> None:
        if length <= 0 or unit <= 0:
            raise ValueError(f"length and unit must be positive (got {length}, {unit})")
        self.length = float(length)
        self.unit = float(unit)
        if unit_length is not None:
            if unit_length <= 0:
                raise ValueError(f"unit_length must be positive (got {unit_length})")
            self.unit_length = float(unit_length)

    def apply_auto_fit(self) -> None:
        """
        Size the axes around v and u: tick spacing becomes the fitted scale
        and the axis half-length the fitted length.
        """
        fit = fit_space_and_scale(self.vector, self.transformed)
        self.set_scale(length=fit.length, unit=1.0, unit_length=fit.scale)
        logger.info("Auto-fit axes: length=%s, tick spacing=%s", fit.length, fit.scale)

    # ---------- Notification ----------

    def notify(self, message: str, severity: str = "danger", now: Optional[float] = None) -> Notification:
        if now is None:
            now = time.time()
        self.notification = Notification(message, severity, now)
        return self.notification

    def active_notification(self, now: Optional[float] = None) -> Optional[Notification]:
        if self.notification is None:
            return None
        if now is None:
            now = time.time()
        if self.notification.expired(now):
            self.notification = None
        return self.notification

    def take_unshown_notification(self, now: Optional[float] = None) -> Optional[Notification]:
        """
        The active notification if the page has not displayed it yet. Each
        notification is handed out once; the page shows it as a toast that
        dismisses itself.
        """
        note = self.active_notification(now)
        if note is None or note is self.shown_notification:
            return None
        self.shown_notification = note
        return note

    # ---------- Scene ----------

    def rebuild_scene(self) -> SceneContents:
        self.generation += 1
        return derive_scene(
            self.vector,
            self.matrix,
            self.transformed,
            self.settings,
            length=self.length,
            unit=self.unit,
            unit_length=self.unit_length,
            generation=self.generation,
        )
