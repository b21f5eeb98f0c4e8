"""
Text input <-> Vector3 / Matrix3.

Validation is a separate, pure step. The parsers never raise: a token that
does not convert to a finite number becomes 0.0, so they must only be trusted
after validate_vector / validate_matrix has accepted the same text.
"""
from __future__ import annotations

import logging
import math
import re
from typing import List, Optional

from vectorviz.errors import InputError
from vectorviz.linalg import Matrix3, Vector3

logger = logging.getLogger(__name__)

VECTOR_SIZE = 3
MATRIX_SIZE = 9

VECTOR_MESSAGE = "Invalid vector input. Please enter 3 numerical values separated by commas."
MATRIX_MESSAGE = "Invalid matrix input. Please enter 9 numerical values separated by commas."

# Plain decimal or scientific notation, ASCII digits only
NUMBER_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


# ---------- Token helpers ----------

def split_tokens(text: str) -> List[str]:
    return text.split(",")


def to_number(token: str) -> Optional[float]:
    """
    Return the finite float a token spells, or None.
    Surrounding whitespace is ignored; empty / whitespace-only tokens are None.
    """
    token = token.strip()
    if not NUMBER_RE.fullmatch(token):
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_values(text: str, size: int) -> List[float]:
    values = [to_number(tok) for tok in split_tokens(text)]
    values = [0.0 if v is None else v for v in values]
    values.extend([0.0] * (size - len(values)))
    return values[:size]


# ---------- Parser ----------

def parse_vector_input(text: str) -> Vector3:
    return Vector3(*parse_values(text, VECTOR_SIZE))


def parse_matrix_input(text: str) -> Matrix3:
    return Matrix3(*parse_values(text, MATRIX_SIZE))


def format_number(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_vector_input(vector: Vector3) -> str:
    return ",".join(format_number(v) for v in vector.as_tuple())


def format_matrix_input(matrix: Matrix3) -> str:
    return ",".join(format_number(v) for v in matrix.as_tuple())


# ---------- Validator ----------

def _check(text: str, size: int, field: str, headline: str) -> None:
    tokens = split_tokens(text)
    if len(tokens) != size:
        raise InputError(
            field, "count",
            f"{headline} Found {len(tokens)} value(s).",
        )
    for i, tok in enumerate(tokens):
        # an empty slot ("1,,1") is read as 0
        if tok == "":
            continue
        if to_number(tok) is None:
            raise InputError(
                field, "non_numeric",
                f"{headline} Value {i + 1} ({tok.strip()!r}) is not a number.",
            )


def check_vector_input(text: str) -> None:
    """
    Raise InputError describing why `text` is not a valid vector.
    """
    _check(text, VECTOR_SIZE, "vector", VECTOR_MESSAGE)


def check_matrix_input(text: str) -> None:
    """
    Raise InputError describing why `text` is not a valid matrix.
    """
    _check(text, MATRIX_SIZE, "matrix", MATRIX_MESSAGE)


def validate_vector(text: str) -> bool:
    try:
        check_vector_input(text)
    except InputError as e:
        logger.debug("Vector input rejected (%s): %r", e.reason, text)
        return False
    return True


def validate_matrix(text: str) -> bool:
    try:
        check_matrix_input(text)
    except InputError as e:
        logger.debug("Matrix input rejected (%s): %r", e.reason, text)
        return False
    return True
