"""Draggable anchor point and the pointer gesture that moves it."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Tuple

from .geometry import Vector, Viewport

Point = Tuple[float, float]


@dataclass(frozen=True)
class Anchor:
    """Anchor button: top-left corner ``(x, y)`` plus a fixed diameter."""

    x: float
    y: float
    diameter: float

    @property
    def center(self) -> Vector:
        half = self.diameter / 2.0
        return Vector(self.x + half, self.y + half)

    @property
    def radius(self) -> float:
        return self.diameter / 2.0

    @classmethod
    def centered_in(cls, viewport: Viewport, diameter: float) -> Anchor:
        return cls(
            x=viewport.width / 2.0 - diameter / 2.0,
            y=viewport.height / 2.0 - diameter / 2.0,
            diameter=diameter,
        )

    def moved_to(self, x: float, y: float) -> Anchor:
        return replace(self, x=x, y=y)

    def clamped(self, viewport: Viewport) -> Anchor:
        """Keep the whole button on screen."""

        max_x = max(viewport.width - self.diameter, 0.0)
        max_y = max(viewport.height - self.diameter, 0.0)
        return replace(
            self,
            x=min(max(self.x, 0.0), max_x),
            y=min(max(self.y, 0.0), max_y),
        )


class DragGesture:
    """Track one pointer-down/move/up sequence on the anchor.

    The gesture only reports where the anchor should go. Whether the
    release counts as a click is decided by :attr:`moved_beyond_threshold`.
    """

    def __init__(self, anchor: Anchor, pointer: Point, *, threshold: float = 5.0) -> None:
        self.threshold = threshold
        self.start: Point = pointer
        self.grab_offset: Point = (pointer[0] - anchor.x, pointer[1] - anchor.y)
        self.moved_beyond_threshold = False
        self.active = True

    def move(self, anchor: Anchor, pointer: Point, viewport: Viewport) -> Anchor:
        if not self.active:
            return anchor
        if not self.moved_beyond_threshold:
            travelled = math.hypot(pointer[0] - self.start[0], pointer[1] - self.start[1])
            if travelled > self.threshold:
                self.moved_beyond_threshold = True
        moved = anchor.moved_to(pointer[0] - self.grab_offset[0], pointer[1] - self.grab_offset[1])
        return moved.clamped(viewport)

    def release(self) -> bool:
        """End the gesture; return ``True`` when it was a drag, not a click."""

        self.active = False
        return self.moved_beyond_threshold
