"""Vectors, 4x4 matrices and the collision shapes built from them.

Matrices use the row-vector convention: a point is transformed as ``v @ M``
and translation lives in the last row.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator

_IDENTITY = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)


@dataclass(frozen=True)
class Vector2:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2:
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector3:
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> Vector3:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        if length == 0.0:
            return Vector3()
        return self / length

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )


@dataclass(frozen=True)
class Matrix4x4:
    m: tuple[tuple[float, ...], ...] = _IDENTITY

    def __post_init__(self) -> None:
        rows = tuple(tuple(float(value) for value in row) for row in self.m)
        if len(rows) != 4 or any(len(row) != 4 for row in rows):
            raise ValueError("a Matrix4x4 needs exactly 4 rows of 4 values")
        object.__setattr__(self, "m", rows)

    @classmethod
    def identity(cls) -> Matrix4x4:
        return cls(_IDENTITY)

    def __matmul__(self, other: Matrix4x4) -> Matrix4x4:
        if not isinstance(other, Matrix4x4):
            return NotImplemented
        columns = list(zip(*other.m))
        return Matrix4x4(
            tuple(
                tuple(sum(a * b for a, b in zip(row, column)) for column in columns)
                for row in self.m
            )
        )


@dataclass
class Sphere:
    center: Vector3 = field(default_factory=Vector3)
    radius: float = 0.0


@dataclass
class AABB:
    min: Vector3 = field(default_factory=Vector3)
    max: Vector3 = field(default_factory=Vector3)


def _unit_axes() -> tuple[Vector3, Vector3, Vector3]:
    return (Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0), Vector3(0.0, 0.0, 1.0))


@dataclass
class OBB:
    """Oriented box; ``size`` holds the half extents along each orientation."""

    rotation_center: Vector3 = field(default_factory=Vector3)
    scale_center: Vector3 = field(default_factory=Vector3)
    orientations: tuple[Vector3, Vector3, Vector3] = field(default_factory=_unit_axes)
    size: Vector3 = field(default_factory=lambda: Vector3(1.0, 1.0, 1.0))
    scale_center_rotated: Vector3 = field(default_factory=Vector3)


def make_rotate_x_matrix(angle: float) -> Matrix4x4:
    c, s = math.cos(angle), math.sin(angle)
    return Matrix4x4(((1, 0, 0, 0), (0, c, s, 0), (0, -s, c, 0), (0, 0, 0, 1)))


def make_rotate_y_matrix(angle: float) -> Matrix4x4:
    c, s = math.cos(angle), math.sin(angle)
    return Matrix4x4(((c, 0, -s, 0), (0, 1, 0, 0), (s, 0, c, 0), (0, 0, 0, 1)))


def make_rotate_z_matrix(angle: float) -> Matrix4x4:
    c, s = math.cos(angle), math.sin(angle)
    return Matrix4x4(((c, s, 0, 0), (-s, c, 0, 0), (0, 0, 1, 0), (0, 0, 0, 1)))


def make_rotate_xyz_matrix(rotate: Vector3) -> Matrix4x4:
    """Rotation about X, then Y, then Z."""
    return (
        make_rotate_x_matrix(rotate.x)
        @ make_rotate_y_matrix(rotate.y)
        @ make_rotate_z_matrix(rotate.z)
    )


def inverse(matrix: Matrix4x4) -> Matrix4x4:
    """Inverse by Gauss-Jordan elimination; raises ValueError if singular."""
    rows = [
        list(row) + [1.0 if i == j else 0.0 for j in range(4)]
        for i, row in enumerate(matrix.m)
    ]
    for col in range(4):
        pivot = max(range(col, 4), key=lambda r: abs(rows[r][col]))
        if abs(rows[pivot][col]) < 1e-12:
            raise ValueError("matrix is singular")
        rows[col], rows[pivot] = rows[pivot], rows[col]
        pivot_value = rows[col][col]
        rows[col] = [value / pivot_value for value in rows[col]]
        for r, row in enumerate(rows):
            factor = row[col]
            if r != col and factor != 0.0:
                rows[r] = [value - factor * p for value, p in zip(row, rows[col])]
    return Matrix4x4(tuple(tuple(row[4:]) for row in rows))


def transform_point(vector: Vector3, matrix: Matrix4x4) -> Vector3:
    """Transform a point (w = 1) and divide by the resulting w."""
    m = matrix.m
    x, y, z = vector
    tx = x * m[0][0] + y * m[1][0] + z * m[2][0] + m[3][0]
    ty = x * m[0][1] + y * m[1][1] + z * m[2][1] + m[3][1]
    tz = x * m[0][2] + y * m[1][2] + z * m[2][2] + m[3][2]
    w = x * m[0][3] + y * m[1][3] + z * m[2][3] + m[3][3]
    if w == 0.0:
        raise ValueError("transformed point has w == 0")
    return Vector3(tx / w, ty / w, tz / w)


def make_obb_world_matrix(obb: OBB, rotate_matrix: Matrix4x4) -> Matrix4x4:
    """World matrix of an OBB: the rotation part of ``rotate_matrix`` placed at the box centre."""
    center = obb.scale_center_rotated
    r = rotate_matrix.m
    return Matrix4x4(
        (
            (r[0][0], r[0][1], r[0][2], 0.0),
            (r[1][0], r[1][1], r[1][2], 0.0),
            (r[2][0], r[2][1], r[2][2], 0.0),
            (center.x, center.y, center.z, 1.0),
        )
    )


def obb_to_local_aabb(obb: OBB) -> AABB:
    """The OBB as an axis-aligned box in its own local space."""
    return AABB(min=-obb.size, max=obb.size)