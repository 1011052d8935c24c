"""Vector and circle math shared by the layout solvers.

Every function here is pure. Callers document the frame of reference
(anchor-relative or viewport-absolute) of the vectors they pass in.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Viewport:
    """Visible area in pixels; items must stay inside its padded rectangle.

    A zero-sized viewport (a minimized window) is accepted; its padded
    rectangle is inverted, so nothing fits inside it.
    """

    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("viewport dimensions must not be negative")

    def safe_bounds(self, padding: float) -> Tuple[float, float, float, float]:
        """Return ``(min_x, min_y, max_x, max_y)`` of the padded rectangle."""

        return padding, padding, self.width - padding, self.height - padding

    def contains(self, circle: Circle, padding: float) -> bool:
        min_x, min_y, max_x, max_y = self.safe_bounds(padding)
        return (
            circle.x - circle.radius >= min_x
            and circle.x + circle.radius <= max_x
            and circle.y - circle.radius >= min_y
            and circle.y + circle.radius <= max_y
        )


@dataclass(frozen=True)
class Vector:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return add_vectors(self, other)

    def __sub__(self, other: Vector) -> Vector:
        return subtract_vectors(self, other)

    def __mul__(self, scalar: float) -> Vector:
        return scale_vector(self, scalar)

    __rmul__ = __mul__

    @classmethod
    def from_polar(cls, radius: float, angle: float) -> Vector:
        return cls(math.cos(angle) * radius, math.sin(angle) * radius)


@dataclass(frozen=True)
class Circle:
    """Uniform hitbox used for item/item and item/anchor collision checks."""

    x: float
    y: float
    radius: float

    @property
    def center(self) -> Vector:
        return Vector(self.x, self.y)


ZERO = Vector(0.0, 0.0)


def add_vectors(v1: Vector, v2: Vector) -> Vector:
    return Vector(v1.x + v2.x, v1.y + v2.y)


def subtract_vectors(v1: Vector, v2: Vector) -> Vector:
    return Vector(v1.x - v2.x, v1.y - v2.y)


def scale_vector(v: Vector, scalar: float) -> Vector:
    return Vector(v.x * scalar, v.y * scalar)


def magnitude(v: Vector) -> float:
    return math.hypot(v.x, v.y)


def normalize(v: Vector) -> Vector:
    """Return the unit vector along ``v``; the zero vector maps to itself."""

    mag = magnitude(v)
    if mag == 0.0:
        return ZERO
    return Vector(v.x / mag, v.y / mag)


def limit_magnitude(v: Vector, max_magnitude: float) -> Vector:
    """Clamp the length of ``v`` to ``max_magnitude`` without turning it."""

    mag = magnitude(v)
    if mag > max_magnitude:
        return scale_vector(normalize(v), max_magnitude)
    return v


def repulsion_force(
    circle_a: Circle,
    circle_b: Circle,
    *,
    fallback: Optional[Vector] = None,
) -> Vector:
    """Push ``circle_a`` away from ``circle_b`` by half their penetration depth.

    Non-overlapping circles produce no force. Exactly coincident centers have
    no defined axis: without ``fallback`` the result is zero, otherwise the
    push runs along the normalized ``fallback`` direction.
    """

    dx = circle_a.x - circle_b.x
    dy = circle_a.y - circle_b.y
    distance = math.hypot(dx, dy)
    combined = circle_a.radius + circle_b.radius

    if distance >= combined:
        return ZERO
    push = (combined - distance) * 0.5
    if distance > 0.0:
        return Vector(dx / distance * push, dy / distance * push)
    if fallback is None:
        return ZERO
    return scale_vector(normalize(fallback), push)


def edge_force(
    center: Vector,
    radius: float,
    viewport: Viewport,
    padding: float,
    strength: float = 0.5,
) -> Vector:
    """Restoring force for a circle crossing the padded viewport edges.

    ``center`` is viewport-absolute. Each crossed edge contributes
    ``strength`` times its crossing depth; contributions are summed per axis,
    so a circle wider than the safe rectangle is pushed from both sides.
    """

    min_x, min_y, max_x, max_y = viewport.safe_bounds(padding)

    fx = 0.0
    fy = 0.0

    # Left edge pushes +x, right edge pushes -x
    if center.x - radius < min_x:
        fx += (min_x - (center.x - radius)) * strength
    if center.x + radius > max_x:
        fx -= ((center.x + radius) - max_x) * strength

    # Top edge pushes +y, bottom edge pushes -y
    if center.y - radius < min_y:
        fy += (min_y - (center.y - radius)) * strength
    if center.y + radius > max_y:
        fy -= ((center.y + radius) - max_y) * strength

    return Vector(fx, fy)


def attraction_force(current: Vector, target: Vector, strength: float) -> Vector:
    """Linear spring pulling ``current`` toward ``target``."""

    return scale_vector(subtract_vectors(target, current), strength)


def circles_overlap(circle_a: Circle, circle_b: Circle, epsilon: float = 0.0) -> bool:
    dx = circle_a.x - circle_b.x
    dy = circle_a.y - circle_b.y
    required = circle_a.radius + circle_b.radius
    return dx * dx + dy * dy < required * required - epsilon
