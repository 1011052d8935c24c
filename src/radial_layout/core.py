from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .config import LayoutConfig
from .geometry import (
    ZERO,
    Circle,
    Vector,
    add_vectors,
    attraction_force,
    edge_force,
    limit_magnitude,
    magnitude,
    repulsion_force,
    scale_vector,
    subtract_vectors,
)
from .models import ItemState, LayoutRequest

logger = logging.getLogger(__name__)


class ForceRelaxationSolver:
    """Relax orbital items toward their ideal orbit while resolving collisions.

    Each call to :meth:`solve` continues from the offsets it is given, so
    repeated recomputes refine the previous layout instead of starting over.
    """

    name = "force"

    def __init__(self, config: Optional[LayoutConfig] = None) -> None:
        self.config = config or LayoutConfig()

    def solve(self, items: Sequence[ItemState], request: LayoutRequest) -> Tuple[ItemState, ...]:
        cfg = self.config
        if not items or cfg.reference_radius <= 0.0:
            return ()

        current: List[ItemState] = list(items)
        for _ in range(cfg.relaxation_iterations):
            current = self.step(current, request)

        relaxed = tuple(
            self._contain(item, request).with_polar(cfg.reference_radius) for item in current
        )
        if logger.isEnabledFor(logging.DEBUG):
            moved = max(
                magnitude(subtract_vectors(after.offset, before.offset))
                for before, after in zip(items, relaxed)
            )
            logger.debug(
                "force relaxation: %d items, %d iterations, max displacement %.3f",
                len(relaxed),
                cfg.relaxation_iterations,
                moved,
            )
        return relaxed

    def step(self, items: Sequence[ItemState], request: LayoutRequest) -> List[ItemState]:
        """Advance one synchronous relaxation iteration.

        All forces are computed from the same snapshot of ``items`` before
        any offset changes.
        """

        cfg = self.config
        forces = [ZERO for _ in items]

        # 1) Edge avoidance, in viewport-absolute coordinates
        for i, item in enumerate(items):
            forces[i] = add_vectors(forces[i], self._edge_force(item, request))

        # 2) Pairwise repulsion
        n = len(items)
        for i in range(n):
            for j in range(i + 1, n):
                force = self._repel_force(items[i], items[j])
                forces[i] = add_vectors(forces[i], force)
                forces[j] = subtract_vectors(forces[j], force)

        # 3) Repulsion from the anchor, 4) pull back toward the ideal orbit
        for i, item in enumerate(items):
            forces[i] = add_vectors(forces[i], self._anchor_force(item))
            forces[i] = add_vectors(forces[i], self._attraction_force(item))

        # 5) Clamp and integrate
        stepped: List[ItemState] = []
        for force, item in zip(forces, items):
            force = limit_magnitude(force, item.size / 2.0)
            move = scale_vector(force, cfg.damping)
            stepped.append(item.moved_to(item.x + move.x, item.y + move.y))
        return stepped

    def ideal_offset(self, item: ItemState) -> Vector:
        return Vector.from_polar(self.config.reference_radius, item.base_angle)

    def _hitbox(self, item: ItemState) -> Circle:
        return Circle(item.x, item.y, item.size / 2.0 + self.config.item_margin / 2.0)

    def _edge_force(self, item: ItemState, request: LayoutRequest) -> Vector:
        center = add_vectors(request.anchor_center, item.offset)
        return edge_force(
            center,
            item.size / 2.0,
            request.viewport,
            self.config.screen_padding,
            strength=self.config.edge_strength,
        )

    def _repel_force(self, a: ItemState, b: ItemState) -> Vector:
        # Coincident items separate along the line between their ideal slots
        fallback = subtract_vectors(self.ideal_offset(a), self.ideal_offset(b))
        if magnitude(fallback) == 0.0:
            fallback = Vector(1.0, 0.0)
        return repulsion_force(self._hitbox(a), self._hitbox(b), fallback=fallback)

    def _anchor_force(self, item: ItemState) -> Vector:
        anchor = Circle(0.0, 0.0, self.config.anchor_diameter / 2.0 + self.config.item_margin / 2.0)
        return repulsion_force(
            self._hitbox(item),
            anchor,
            fallback=Vector.from_polar(1.0, item.base_angle),
        )

    def _attraction_force(self, item: ItemState) -> Vector:
        return attraction_force(item.offset, self.ideal_offset(item), self.config.attraction_strength)

    def _contain(self, item: ItemState, request: LayoutRequest) -> ItemState:
        """Pull an item's absolute center back inside the padded viewport."""

        padding = self.config.screen_padding
        center = add_vectors(request.anchor_center, item.offset)
        radius = item.size / 2.0
        if request.viewport.contains(Circle(center.x, center.y, radius), padding):
            return item

        min_x, min_y, max_x, max_y = request.viewport.safe_bounds(padding)
        x = _clamp_axis(center.x, min_x, max_x, radius)
        y = _clamp_axis(center.y, min_y, max_y, radius)
        return item.moved_to(x - request.anchor_center.x, y - request.anchor_center.y)


def _clamp_axis(value: float, low: float, high: float, inset: float) -> float:
    # Inset only where the padded span is at least one item wide
    if high - low >= 2.0 * inset:
        low, high = low + inset, high - inset
    if low > high:
        return (low + high) / 2.0
    return min(max(value, low), high)
