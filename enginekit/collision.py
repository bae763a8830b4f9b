"""Shape-versus-shape intersection tests and the manager that pairs colliders."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Protocol

from .geometry import (
    AABB,
    OBB,
    Matrix4x4,
    Sphere,
    Vector3,
    inverse,
    make_obb_world_matrix,
    make_rotate_xyz_matrix,
    obb_to_local_aabb,
    transform_point,
)

_UNIT_AXES = (Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0), Vector3(0.0, 0.0, 1.0))


class ColliderLike(Protocol):
    """What the manager needs from a collider."""

    name: str
    radius: float
    sphere: Sphere
    aabb: AABB
    obb: OBB
    collision_enabled: bool
    is_sphere: bool
    is_aabb: bool
    is_obb: bool
    is_colliding: bool
    is_colliding_in_current_frame: bool

    def center_position(self) -> Vector3: ...

    def center_rotation(self) -> Vector3: ...

    def update_world_transform(self) -> None: ...

    def set_hit_color(self) -> None: ...

    def set_default_color(self) -> None: ...

    def reset_collision_flag(self) -> None: ...

    def on_collision(self, other: ColliderLike) -> None: ...

    def on_collision_enter(self, other: ColliderLike) -> None: ...

    def on_collision_out(self, other: ColliderLike) -> None: ...

    def debug_lines(self) -> Iterable: ...


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def _closest_point(point: Vector3, box: AABB) -> Vector3:
    return Vector3(
        _clamp(point.x, box.min.x, box.max.x),
        _clamp(point.y, box.min.y, box.max.y),
        _clamp(point.z, box.min.z, box.max.z),
    )


def sphere_sphere(s1: Sphere, s2: Sphere) -> bool:
    """True when the spheres touch or overlap."""
    return (s2.center - s1.center).length() <= s1.radius + s2.radius


def aabb_aabb(a: AABB, b: AABB) -> bool:
    """True when the boxes overlap on every axis (touching counts)."""
    return (
        a.min.x <= b.max.x and a.max.x >= b.min.x
        and a.min.y <= b.max.y and a.max.y >= b.min.y
        and a.min.z <= b.max.z and a.max.z >= b.min.z
    )


def aabb_sphere(aabb: AABB, sphere: Sphere) -> bool:
    """True when the point of the box nearest the sphere centre lies within the radius."""
    closest = _closest_point(sphere.center, aabb)
    return (closest - sphere.center).length() <= sphere.radius


def obb_sphere(obb: OBB, sphere: Sphere, rotate_matrix: Matrix4x4) -> bool:
    """Test a sphere against an OBB by moving the sphere into the box's local space."""
    world = make_obb_world_matrix(obb, rotate_matrix)
    local_center = transform_point(sphere.center, inverse(world))
    local_box = obb_to_local_aabb(obb)
    offset = _closest_point(local_center, local_box) - local_center
    return offset.dot(offset) <= sphere.radius * sphere.radius


def project_obb(obb: OBB, axis: Vector3) -> tuple[float, float]:
    """The (min, max) interval of ``obb`` projected onto ``axis``."""
    center = obb.scale_center_rotated.dot(axis)
    o0, o1, o2 = obb.orientations
    radius = (
        abs(o0.dot(axis)) * obb.size.x
        + abs(o1.dot(axis)) * obb.size.y
        + abs(o2.dot(axis)) * obb.size.z
    )
    return center - radius, center + radius


def project_aabb(axis: Vector3, aabb: AABB) -> tuple[float, float]:
    """The (min, max) interval of the eight corners of ``aabb`` projected onto ``axis``."""
    lo, hi = aabb.min, aabb.max
    projections = [
        axis.dot(Vector3(x, y, z))
        for z in (lo.z, hi.z)
        for y in (lo.y, hi.y)
        for x in (lo.x, hi.x)
    ]
    return min(projections), max(projections)


def _overlap_on_axis(axis: Vector3, a: OBB, b: OBB) -> bool:
    min1, max1 = project_obb(a, axis)
    min2, max2 = project_obb(b, axis)
    sum_span = (max1 - min1) + (max2 - min2)
    long_span = max(max1, max2) - min(min1, min2)
    return sum_span >= long_span


def obb_obb(a: OBB, b: OBB) -> bool:
    """Separating-axis test over the 15 candidate axes of two OBBs."""
    axes = list(a.orientations) + list(b.orientations)
    axes += [u.cross(v) for u in a.orientations for v in b.orientations]
    return all(
        _overlap_on_axis(axis.normalize(), a, b)
        for axis in axes
        if axis.length() > 0.0001
    )


def aabb_obb(aabb: AABB, obb: OBB) -> bool:
    """Separating-axis test between an axis-aligned box and an OBB."""
    aabb_center = (aabb.min + aabb.max) * 0.5
    half = (aabb.max - aabb.min) / 2.0
    t = obb.scale_center_rotated - aabb_center

    axes = list(_UNIT_AXES) + list(obb.orientations)
    axes += [u.cross(v) for u in _UNIT_AXES for v in obb.orientations]

    for raw in axes:
        if raw.length() < 1e-6:
            continue
        axis = raw.normalize()
        projection_aabb = (
            half.x * abs(axis.x) + half.y * abs(axis.y) + half.z * abs(axis.z)
        )
        obb_min, obb_max = project_obb(obb, axis)
        projection_obb = (obb_max - obb_min) / 2.0
        if abs(t.dot(axis)) > projection_aabb + projection_obb:
            return False
    return True


class CollisionManager:
    """Registers colliders under unique names and dispatches collision callbacks."""

    def __init__(self) -> None:
        self._colliders: dict[str, ColliderLike] = {}
        self._collision_states: dict[tuple[int, int], bool] = {}

    def add_collider(self, collider: ColliderLike) -> str:
        """Register ``collider``, renaming it ``name_1``, ``name_2``... on a clash."""
        base_name = collider.name
        unique_name = base_name
        suffix = 1
        while unique_name in self._colliders:
            unique_name = f"{base_name}_{suffix}"
            suffix += 1
        collider.name = unique_name
        self._colliders[unique_name] = collider
        return unique_name

    def remove_collider(self, collider: ColliderLike) -> None:
        """Unregister ``collider``; unknown colliders are ignored."""
        for name, registered in self._colliders.items():
            if registered is collider:
                del self._colliders[name]
                break

    def reset(self) -> None:
        """Forget every registered collider."""
        self._colliders.clear()

    @property
    def colliders(self) -> Mapping[str, ColliderLike]:
        """Read-only view of the registered colliders by name."""
        return MappingProxyType(self._colliders)

    def update(self) -> None:
        """Run the collision checks, then refresh transforms and colours."""
        self.check_all_collisions()
        self.update_world_transform()

    def update_world_transform(self) -> None:
        """Refresh each enabled collider and colour it by this frame's hits."""
        for collider in self._colliders.values():
            if not collider.collision_enabled:
                continue
            collider.update_world_transform()
            if collider.is_colliding_in_current_frame:
                collider.set_hit_color()
            else:
                collider.set_default_color()
            collider.reset_collision_flag()

    def check_all_collisions(self) -> None:
        """Check every pair of enabled colliders once."""
        colliders = list(self._colliders.values())
        for index, collider_a in enumerate(colliders):
            if not collider_a.collision_enabled:
                continue
            for collider_b in colliders[index + 1:]:
                if collider_b.collision_enabled:
                    self.check_collision_pair(collider_a, collider_b)

    def check_collision_pair(self, collider_a: ColliderLike, collider_b: ColliderLike) -> None:
        """Test one pair and fire enter / stay / exit callbacks."""
        a, b = collider_a, collider_b
        if not a.collision_enabled or not b.collision_enabled:
            return

        rough_distance = (a.center_position() - b.center_position()).length()
        if rough_distance > a.radius + b.radius:
            return

        key = (min(id(a), id(b)), max(id(a), id(b)))
        hit = False

        if a.is_sphere and b.is_sphere:
            hit = sphere_sphere(a.sphere, b.sphere)
        if not hit and a.is_aabb and b.is_aabb:
            hit = aabb_aabb(a.aabb, b.aabb)
        if not hit and a.is_obb and b.is_obb:
            hit = obb_obb(a.obb, b.obb)
        if not hit:
            if a.is_aabb and b.is_sphere:
                hit = aabb_sphere(a.aabb, b.sphere)
            elif a.is_sphere and b.is_aabb:
                hit = aabb_sphere(b.aabb, a.sphere)
        if not hit:
            if a.is_obb and b.is_sphere:
                hit = obb_sphere(a.obb, b.sphere, make_rotate_xyz_matrix(a.center_rotation()))
            elif a.is_sphere and b.is_obb:
                hit = obb_sphere(b.obb, a.sphere, make_rotate_xyz_matrix(b.center_rotation()))
        if not hit:
            if a.is_aabb and b.is_obb:
                hit = aabb_obb(a.aabb, b.obb)
            elif a.is_obb and b.is_aabb:
                hit = aabb_obb(b.aabb, a.obb)

        a.is_colliding = hit
        b.is_colliding = hit

        was_colliding = self._collision_states.get(key, False)
        if hit:
            a.is_colliding_in_current_frame = True
            b.is_colliding_in_current_frame = True
            if not was_colliding:
                a.on_collision_enter(b)
                b.on_collision_enter(a)
            a.on_collision(b)
            b.on_collision(a)
        elif was_colliding:
            a.on_collision_out(b)
            b.on_collision_out(a)

        self._collision_states[key] = hit

    def debug_lines(self) -> Iterator:
        """All debug line segments of the registered colliders."""
        for collider in self._colliders.values():
            yield from collider.debug_lines()