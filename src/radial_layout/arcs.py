"""Safe-arc angular placement.

The orbit circle is sampled at a fixed resolution. Angles where the largest
possible item would stay inside the padded viewport are merged into safe
arcs, items are spread evenly over the total safe arc length, and the orbit
radius grows in fixed increments while any two items still overlap.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import LayoutConfig
from .geometry import Circle, Vector, Viewport, circles_overlap
from .models import ItemState, LayoutRequest

logger = logging.getLogger(__name__)

ANGLE_EPSILON = 1e-5
TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class SafeArc:
    """Contiguous angular interval in radians; ``end`` may exceed ``2pi``."""

    start: float
    end: float
    length: float


def safe_angle_mask(
    center: Vector,
    radius: float,
    item_radius: float,
    viewport: Viewport,
    padding: float,
    resolution: int,
) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(angles, safe)`` for ``resolution`` evenly spaced samples."""

    angles = np.arange(resolution, dtype=np.float64) * (TWO_PI / resolution)
    xs = center.x + radius * np.cos(angles)
    ys = center.y + radius * np.sin(angles)
    min_x, min_y, max_x, max_y = viewport.safe_bounds(padding)
    safe = (
        (xs - item_radius >= min_x)
        & (xs + item_radius <= max_x)
        & (ys - item_radius >= min_y)
        & (ys + item_radius <= max_y)
    )
    return angles, safe


def merge_safe_arcs(angles: np.ndarray, safe: np.ndarray) -> List[SafeArc]:
    """Merge runs of safe samples into arcs, joining runs across the wrap."""

    resolution = len(angles)
    if resolution == 0:
        return []
    step = TWO_PI / resolution

    arcs: List[SafeArc] = []
    arc_start: Optional[float] = None
    for i in range(resolution + 1):
        is_safe = bool(safe[i]) if i < resolution else False
        angle = float(angles[i]) if i < resolution else float(angles[-1]) + step
        if is_safe and arc_start is None:
            arc_start = angle
        elif not is_safe and arc_start is not None:
            if angle > arc_start + ANGLE_EPSILON:
                arcs.append(SafeArc(start=arc_start, end=angle, length=angle - arc_start))
            arc_start = None

    if len(arcs) > 1 and bool(safe[0]) and bool(safe[-1]):
        first = arcs[0]
        last = arcs[-1]
        wrapped = SafeArc(start=last.start, end=first.end + TWO_PI, length=last.length + first.length)
        arcs = arcs[1:-1] + [wrapped]
    return arcs


def scan_safe_arcs(
    center: Vector,
    radius: float,
    item_radius: float,
    viewport: Viewport,
    padding: float,
    resolution: int = 360,
) -> List[SafeArc]:
    angles, safe = safe_angle_mask(center, radius, item_radius, viewport, padding, resolution)
    return merge_safe_arcs(angles, safe)


def distribute_angles(arcs: Sequence[SafeArc], count: int) -> List[float]:
    """Spread ``count`` angles evenly over the concatenated safe arc length.

    Falls back to uniform spacing around the full circle when the safe
    length is negligible for ``count`` items.
    """

    if count <= 0:
        return []
    total = sum(arc.length for arc in arcs)
    if total < ANGLE_EPSILON * count:
        return [i * TWO_PI / count for i in range(count)]

    ordered = sorted(arcs, key=lambda arc: arc.start)
    slot = total / count
    angles: List[float] = []
    for i in range(count):
        target = (i + 0.5) * slot
        cumulative = 0.0
        placed: Optional[float] = None
        for arc in ordered:
            if cumulative - ANGLE_EPSILON <= target < cumulative + arc.length + ANGLE_EPSILON:
                offset = min(max(target - cumulative, 0.0), arc.length)
                placed = (arc.start + offset) % TWO_PI
                break
            cumulative += arc.length
        if placed is None:
            # Unreachable while every arc.length is finite and non-negative,
            # since the walk sums the same lengths as total; guards arcs built
            # by hand with inconsistent lengths
            first = ordered[0]
            placed = (first.start + first.length / 2.0) % TWO_PI
        angles.append(placed)
    return angles


def find_overlap(
    offsets: Sequence[Vector],
    radii: Sequence[float],
) -> Optional[Tuple[int, int]]:
    """Return the first overlapping index pair, or ``None``."""

    n = len(offsets)
    for i in range(n):
        circle_i = Circle(offsets[i].x, offsets[i].y, radii[i])
        for j in range(i + 1, n):
            circle_j = Circle(offsets[j].x, offsets[j].y, radii[j])
            if circles_overlap(circle_i, circle_j, ANGLE_EPSILON):
                return i, j
    return None


class SafeArcSolver:
    """Place items on viewport-safe arcs, growing the orbit until they fit."""

    name = "arc"

    def __init__(self, config: Optional[LayoutConfig] = None) -> None:
        self.config = config or LayoutConfig()

    def solve(self, items: Sequence[ItemState], request: LayoutRequest) -> Tuple[ItemState, ...]:
        cfg = self.config
        if not items or cfg.reference_radius <= 0.0:
            return ()

        count = len(items)
        # Any item may be hovered next, so safety is judged for the largest one
        safe_radius = max(item.base_size for item in items) * cfg.hover_scale / 2.0
        radii = [item.size / 2.0 for item in items]
        ceiling = cfg.max_orbit_radius

        radius = cfg.reference_radius
        angles: List[float] = []
        offsets: List[Vector] = []
        arcs: List[SafeArc] = []
        overlap: Optional[Tuple[int, int]] = None
        for attempt in range(1, cfg.max_radius_steps + 1):
            arcs = scan_safe_arcs(
                request.anchor_center,
                radius,
                safe_radius,
                request.viewport,
                cfg.screen_padding,
                cfg.angular_resolution,
            )
            if sum(arc.length for arc in arcs) < ANGLE_EPSILON * count:
                logger.warning(
                    "no safe arc at radius %.1f for %d items; using uniform spacing",
                    radius,
                    count,
                )
            angles = distribute_angles(arcs, count)
            offsets = [Vector.from_polar(radius, angle) for angle in angles]

            overlap = find_overlap(offsets, radii) if count > 1 else None
            if overlap is None or radius >= ceiling:
                break
            logger.debug(
                "attempt %d: items %d and %d overlap at radius %.1f",
                attempt,
                overlap[0],
                overlap[1],
                radius,
            )
            radius = min(radius + cfg.radius_increment, ceiling)

        if overlap is not None:
            logger.warning(
                "accepting residual overlap between items %d and %d at radius %.1f",
                overlap[0],
                overlap[1],
                radius,
            )
        logger.debug("safe arcs: %d arcs, %d items, orbit radius %.1f", len(arcs), count, radius)

        placed: List[ItemState] = []
        for item, angle, offset in zip(items, angles, offsets):
            moved = item.moved_to(offset.x, offset.y)
            placed.append(replace(moved, current_radius=radius, current_angle=angle))
        outside = sum(
            1
            for item, offset in zip(items, offsets)
            if not request.viewport.contains(
                Circle(
                    request.anchor_center.x + offset.x,
                    request.anchor_center.y + offset.y,
                    item.size / 2.0,
                ),
                cfg.screen_padding,
            )
        )
        if outside:
            logger.warning("%d items extend past the padded viewport at radius %.1f", outside, radius)
        return tuple(placed)
