"""Colliders: sphere, AABB and OBB shapes that follow a centre and can be saved."""

from __future__ import annotations

import math
from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, NamedTuple

from .datastore import DEFAULT_BASE_PATH, DataHandler
from .geometry import AABB, OBB, Sphere, Vector3, make_rotate_xyz_matrix

if TYPE_CHECKING:
    from .collision import CollisionManager

Color = tuple[float, float, float, float]

WHITE: Color = (1.0, 1.0, 1.0, 1.0)
RED: Color = (1.0, 0.0, 0.0, 1.0)

_SUBDIVISION = 10
_CENTER_SLICES = 16
_CENTER_STACKS = 8
_MARKER_RADIUS = 0.1
_AABB_HALF = Vector3(1.0, 1.0, 1.0)
_EDGES = (
    (0, 1), (1, 3), (3, 2), (2, 0),
    (4, 5), (5, 7), (7, 6), (6, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
)


class DebugLine(NamedTuple):
    """A coloured line segment for debug drawing."""

    start: Vector3
    end: Vector3
    color: Color


class CollisionType(Enum):
    SPHERE = "sphere"
    AABB = "aabb"
    OBB = "obb"


def _lat_lon_point(center: Vector3, radius: float, lat: float, lon: float) -> Vector3:
    return Vector3(
        center.x + radius * math.cos(lat) * math.cos(lon),
        center.y + radius * math.sin(lat),
        center.z + radius * math.cos(lat) * math.sin(lon),
    )


def _lat_lon_sphere(center: Vector3, radius: float, color: Color) -> Iterator[DebugLine]:
    lon_every = 2.0 * math.pi / _SUBDIVISION
    lat_every = math.pi / _SUBDIVISION
    for lat_index in range(_SUBDIVISION):
        lat = -math.pi / 2.0 + lat_every * lat_index
        for lon_index in range(_SUBDIVISION):
            lon = lon_index * lon_every
            start = _lat_lon_point(center, radius, lat, lon)
            yield DebugLine(start, _lat_lon_point(center, radius, lat, lon + lon_every), color)
            yield DebugLine(start, _lat_lon_point(center, radius, lat + lat_every, lon), color)


def _polar_point(center: Vector3, radius: float, phi: float, theta: float) -> Vector3:
    return Vector3(
        center.x + radius * math.sin(phi) * math.cos(theta),
        center.y + radius * math.cos(phi),
        center.z + radius * math.sin(phi) * math.sin(theta),
    )


def _marker_sphere(center: Vector3, radius: float) -> Iterator[DebugLine]:
    for i in range(_CENTER_SLICES):
        theta1 = i * 2.0 * math.pi / _CENTER_SLICES
        theta2 = (i + 1) * 2.0 * math.pi / _CENTER_SLICES
        for j in range(_CENTER_STACKS):
            phi1 = j * math.pi / _CENTER_STACKS
            phi2 = (j + 1) * math.pi / _CENTER_STACKS
            p1 = _polar_point(center, radius, phi1, theta1)
            p2 = _polar_point(center, radius, phi1, theta2)
            p3 = _polar_point(center, radius, phi2, theta1)
            p4 = _polar_point(center, radius, phi2, theta2)
            yield DebugLine(p1, p2, WHITE)
            yield DebugLine(p2, p4, WHITE)
            yield DebugLine(p4, p3, WHITE)
            yield DebugLine(p3, p1, WHITE)


def _box_edges(vertices: list[Vector3], color: Color) -> Iterator[DebugLine]:
    for first, second in _EDGES:
        yield DebugLine(vertices[first], vertices[second], color)


class Collider:
    """A set of collision shapes placed around a centre position and rotation.

    Subclasses usually override :meth:`center_position` and
    :meth:`center_rotation`; by default they return ``position`` and
    ``rotation``.
    """

    def __init__(self) -> None:
        self.name = ""
        self.position = Vector3()
        self.rotation = Vector3()
        self.radius = 1.0

        self.sphere = Sphere()
        self.aabb = AABB()
        self.obb = OBB()
        self.color: Color = WHITE

        self.sphere_offset = Sphere()
        self.aabb_offset = AABB()
        self.obb_offset = OBB()

        self.collision_enabled = True
        self.is_colliding = False
        self.was_colliding = False
        self.is_colliding_in_current_frame = False

        self.is_aabb = True
        self.is_obb = True
        self.is_sphere = True
        self.visible = True

        self.contacts: set[Collider] = set()
        self.last_contact: Collider | None = None

        self._data_name: str | None = None
        self._data_root: Path = Path(DEFAULT_BASE_PATH)
        self._data: DataHandler | None = None

    def add_collider(
        self,
        obj_name: str,
        manager: CollisionManager | None = None,
        data_root: str | Path = DEFAULT_BASE_PATH,
    ) -> Collider:
        """Name the collider, register it with ``manager`` and load its saved settings."""
        self.sphere_offset = Sphere(Vector3(), 0.0)
        self.aabb_offset = AABB(Vector3(), Vector3())
        self.obb_offset = OBB(
            rotation_center=Vector3(),
            scale_center=Vector3(),
            size=Vector3(1.0, 1.0, 1.0),
        )
        self.name = obj_name
        self._data_name = obj_name
        self._data_root = Path(data_root)
        if manager is not None:
            manager.add_collider(self)
        self.load()
        return self

    def center_position(self) -> Vector3:
        return self.position

    def center_rotation(self) -> Vector3:
        return self.rotation

    def update_world_transform(self) -> None:
        """Place every shape around the current centre."""
        center = self.center_position()

        self.sphere = Sphere(
            center=center + self.sphere_offset.center,
            radius=self.radius + self.sphere_offset.radius,
        )
        self.aabb = AABB(
            min=center - _AABB_HALF + self.aabb_offset.min,
            max=center + _AABB_HALF + self.aabb_offset.max,
        )

        m = make_rotate_xyz_matrix(self.center_rotation()).m
        orientations = (
            Vector3(m[0][0], m[0][1], m[0][2]),
            Vector3(m[1][0], m[1][1], m[1][2]),
            Vector3(m[2][0], m[2][1], m[2][2]),
        )
        rotation_center = center + self.obb_offset.rotation_center
        scale_center = center + self.obb_offset.scale_center
        relative = scale_center - rotation_center
        scale_center_rotated = (
            orientations[0] * relative.x
            + orientations[1] * relative.y
            + orientations[2] * relative.z
            + rotation_center
        )
        self.obb = OBB(
            rotation_center=rotation_center,
            scale_center=scale_center,
            orientations=orientations,
            size=self.obb_offset.size,
            scale_center_rotated=scale_center_rotated,
        )

    def debug_lines(self) -> Iterator[DebugLine]:
        """Line segments outlining the enabled shapes; none when hidden or disabled."""
        if not self.visible or not self.collision_enabled:
            return
        if self.is_sphere:
            yield from _lat_lon_sphere(self.sphere.center, self.sphere.radius, self.color)
        if self.is_aabb:
            yield from self._aabb_lines()
        if self.is_obb:
            yield from self._obb_lines()

    def _aabb_lines(self) -> Iterator[DebugLine]:
        lo, hi = self.aabb.min, self.aabb.max
        vertices = [
            Vector3(x, y, z)
            for z in (lo.z, hi.z)
            for y in (lo.y, hi.y)
            for x in (lo.x, hi.x)
        ]
        yield from _box_edges(vertices, self.color)

    def _obb_lines(self) -> Iterator[DebugLine]:
        obb = self.obb
        half = obb.size
        shift = obb.scale_center - obb.rotation_center
        vertices = []
        for i in range(8):
            local = Vector3(
                half.x if i & 1 else -half.x,
                half.y if i & 2 else -half.y,
                half.z if i & 4 else -half.z,
            )
            scaled = local + shift
            rotated = (
                obb.orientations[0] * scaled.x
                + obb.orientations[1] * scaled.y
                + obb.orientations[2] * scaled.z
            )
            vertices.append(obb.rotation_center + rotated)

        yield from _marker_sphere(obb.scale_center_rotated, _MARKER_RADIUS)
        yield from _box_edges(vertices, self.color)
        yield from _lat_lon_sphere(obb.rotation_center, _MARKER_RADIUS, WHITE)

    def set_collision_type(self, collision_type: CollisionType | None) -> None:
        """Enable exactly one shape; anything else disables all of them."""
        self.is_sphere = collision_type is CollisionType.SPHERE
        self.is_aabb = collision_type is CollisionType.AABB
        self.is_obb = collision_type is CollisionType.OBB

    def set_hit_color(self) -> None:
        self.color = RED

    def set_default_color(self) -> None:
        self.color = WHITE

    def reset_collision_flag(self) -> None:
        self.is_colliding_in_current_frame = False

    def on_collision(self, other: Collider) -> None:
        """Called every check while touching ``other``; remembers it as the last contact."""
        self.last_contact = other

    def on_collision_enter(self, other: Collider) -> None:
        """Called on the first check that finds ``other`` touching; adds it to ``contacts``."""
        self.contacts.add(other)

    def on_collision_out(self, other: Collider) -> None:
        """Called on the first check that finds ``other`` no longer touching; drops it."""
        self.contacts.discard(other)

    def _handler(self) -> DataHandler:
        if self._data is None:
            if self._data_name is None:
                raise RuntimeError("collider has no name; call add_collider first")
            self._data = DataHandler("Collider", self._data_name, base_path=self._data_root)
        return self._data

    def save(self) -> None:
        """Write flags and shape offsets to the collider's JSON file."""
        data = self._handler()
        data.save("isVisible", self.visible)
        data.save("isCollisionEnabled", self.collision_enabled)
        data.save("isSphere", self.is_sphere)
        data.save("isAABB", self.is_aabb)
        data.save("isOBB", self.is_obb)
        data.save("center", self.sphere_offset.center)
        data.save("radius", self.sphere_offset.radius)
        data.save("min", self.aabb_offset.min)
        data.save("max", self.aabb_offset.max)
        data.save("scaleCenter", self.obb_offset.scale_center)
        data.save("size", self.obb_offset.size)

    def load(self) -> None:
        """Read flags and shape offsets, falling back to defaults."""
        data = self._handler()
        self.visible = data.load("isVisible", True)
        self.collision_enabled = data.load("isCollisionEnabled", True)
        self.is_sphere = data.load("isSphere", True)
        self.is_aabb = data.load("isAABB", True)
        self.is_obb = data.load("isOBB", True)

        self.sphere_offset = Sphere(
            center=data.load("center", Vector3()),
            radius=data.load("radius", 0.0),
        )
        self.aabb_offset = AABB(
            min=data.load("min", Vector3()),
            max=data.load("max", Vector3()),
        )
        self.obb_offset = replace(
            self.obb_offset,
            scale_center=data.load("scaleCenter", Vector3()),
            size=data.load("size", Vector3(1.0, 1.0, 1.0)),
        )