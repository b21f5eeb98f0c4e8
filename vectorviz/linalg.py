"""
Vector3 / Matrix3 and the matrix-vector product.
"""
from __future__ import annotations

from dataclasses import dataclass, astuple
from typing import Iterable, Tuple

import numpy as np


@dataclass(frozen=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> "Vector3":
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)

    @classmethod
    def from_array(cls, arr) -> "Vector3":
        arr = np.asarray(arr, dtype=float).reshape(3)
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def as_tuple(self) -> Tuple[float, float, float]:
        return astuple(self)

    def length(self) -> float:
        return float(np.linalg.norm(self.as_array()))

    def scaled(self, factor: float) -> "Vector3":
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)


@dataclass(frozen=True)
class Matrix3:
    """
    Row-major 3×3 matrix; mij is row i, column j.
    """
    m11: float = 0.0
    m12: float = 0.0
    m13: float = 0.0
    m21: float = 0.0
    m22: float = 0.0
    m23: float = 0.0
    m31: float = 0.0
    m32: float = 0.0
    m33: float = 0.0

    @classmethod
    def identity(cls) -> "Matrix3":
        return cls(m11=1.0, m22=1.0, m33=1.0)

    @classmethod
    def zero(cls) -> "Matrix3":
        return cls()

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> "Matrix3":
        vals = [float(v) for v in values]
        if len(vals) != 9:
            raise ValueError(f"Matrix3 needs 9 entries, got {len(vals)}")
        return cls(*vals)

    @classmethod
    def from_array(cls, arr) -> "Matrix3":
        arr = np.asarray(arr, dtype=float)
        if arr.shape != (3, 3):
            raise ValueError(f"Matrix3 needs a (3, 3) array, got {arr.shape}")
        return cls.from_iterable(arr.reshape(9))

    def as_array(self) -> np.ndarray:
        return np.array(astuple(self), dtype=float).reshape(3, 3)

    def as_tuple(self) -> Tuple[float, ...]:
        return astuple(self)

    def rows(self) -> Tuple[Tuple[float, float, float], ...]:
        e = astuple(self)
        return (e[0:3], e[3:6], e[6:9])


# ---------- Core math functions ----------

def multiply_vector_matrix(vector: Vector3, matrix: Matrix3) -> Vector3:
    """
    u = M · v, column-vector convention:

        u.x = x*m11 + y*m12 + z*m13
        u.y = x*m21 + y*m22 + z*m23
        u.z = x*m31 + y*m32 + z*m33
    """
    return Vector3.from_array(matrix.as_array() @ vector.as_array())


def apply_linear_transform_3d(points, matrix: Matrix3) -> np.ndarray:
    """
    Apply M to every row of an (n, 3) array of points.
    Row-vector convention: y = x M^T.
    """
    points = np.asarray(points, dtype=float)
    return points @ matrix.as_array().T
