"""Item data model shared by the solvers and the controller."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .config import LayoutConfig
from .geometry import Vector, Viewport


@dataclass(frozen=True)
class MenuItem:
    """Caller-supplied description of one orbital item.

    ``payload`` is opaque to the engine (icon, label, action...). When
    ``base_size`` is ``None`` the configured baseline diameter is used.
    """

    id: str
    payload: Any = None
    base_size: Optional[float] = None


@dataclass(frozen=True)
class ItemState:
    """Per-item layout state; ``x``/``y`` are relative to the anchor center."""

    id: str
    base_angle: float
    base_size: float
    x: float
    y: float
    target_x: float
    target_y: float
    current_radius: float
    current_angle: float
    scale: float = 1.0
    size: float = 0.0
    payload: Any = None

    @property
    def offset(self) -> Vector:
        return Vector(self.x, self.y)

    @property
    def radius(self) -> float:
        return self.size / 2.0

    def moved_to(self, x: float, y: float) -> ItemState:
        return replace(self, x=x, y=y, target_x=x, target_y=y)

    def with_polar(self, reference_radius: float) -> ItemState:
        """Refresh ``current_radius``/``current_angle`` from the offset."""

        radius = math.hypot(self.x, self.y)
        radius = max(0.0, min(radius, 2.0 * reference_radius))
        return replace(self, current_radius=radius, current_angle=math.atan2(self.y, self.x))

    def with_scale(self, scale: float) -> ItemState:
        return replace(self, scale=scale, size=self.base_size * scale)

    def placement(self) -> ItemPlacement:
        return ItemPlacement(
            id=self.id,
            x=self.target_x,
            y=self.target_y,
            angle=self.current_angle,
            scale=self.scale,
            size=self.size,
        )


@dataclass(frozen=True)
class ItemPlacement:
    """What the presentation layer needs to place one item."""

    id: str
    x: float
    y: float
    angle: float
    scale: float
    size: float

    def absolute(self, anchor_center: Vector) -> Vector:
        return Vector(anchor_center.x + self.x, anchor_center.y + self.y)


@dataclass(frozen=True)
class LayoutRequest:
    """Per-recompute inputs; ``anchor_center`` is viewport-absolute."""

    anchor_center: Vector
    viewport: Viewport


def _check_unique_ids(items: Sequence[MenuItem]) -> None:
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"duplicate item id {item.id!r}")
        seen.add(item.id)


def seed_items(
    items: Sequence[MenuItem],
    config: LayoutConfig,
    *,
    hovered_id: Optional[str] = None,
) -> Tuple[ItemState, ...]:
    """Place items evenly on the reference orbit, ``index / count * 2pi`` apart."""

    _check_unique_ids(items)
    count = len(items)
    reference = config.reference_radius
    states: List[ItemState] = []
    for index, item in enumerate(items):
        angle = index / count * 2.0 * math.pi
        x = math.cos(angle) * reference
        y = math.sin(angle) * reference
        base_size = config.item_base_size if item.base_size is None else float(item.base_size)
        scale = config.hover_scale if item.id == hovered_id else 1.0
        states.append(
            ItemState(
                id=item.id,
                base_angle=angle,
                base_size=base_size,
                x=x,
                y=y,
                target_x=x,
                target_y=y,
                current_radius=max(reference, 0.0),
                current_angle=angle,
                scale=scale,
                size=base_size * scale,
                payload=item.payload,
            )
        )
    return tuple(states)


def refresh_items(
    previous: Sequence[ItemState],
    items: Sequence[MenuItem],
    config: LayoutConfig,
    *,
    hovered_id: Optional[str] = None,
) -> Tuple[ItemState, ...]:
    """Carry relaxed state over to a new item set of the same cardinality.

    Positions, angles and order persist; ids, payloads and base sizes are
    taken from ``items``. A cardinality change re-seeds every item.
    """

    if len(previous) != len(items):
        return seed_items(items, config, hovered_id=hovered_id)
    _check_unique_ids(items)
    refreshed: List[ItemState] = []
    for state, item in zip(previous, items):
        base_size = config.item_base_size if item.base_size is None else float(item.base_size)
        scale = config.hover_scale if item.id == hovered_id else 1.0
        refreshed.append(
            replace(
                state,
                id=item.id,
                payload=item.payload,
                base_size=base_size,
                scale=scale,
                size=base_size * scale,
            )
        )
    return tuple(refreshed)


def apply_hover(
    items: Iterable[ItemState],
    hovered_id: Optional[str],
    hover_scale: float,
) -> Tuple[ItemState, ...]:
    """Scale the hovered item up and every other item back to baseline."""

    return tuple(
        item.with_scale(hover_scale if item.id == hovered_id else 1.0) for item in items
    )
