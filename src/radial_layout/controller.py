"""Layout state controller.

Owns the item states, the anchor and the menu/hover state machine, and
decides when the solver runs. Recomputes happen on open/close, committed
hover changes, drag completion, viewport resize and item-set changes; never
on intermediate drag moves.

The controller is single-threaded and cooperative. Hover debouncing is
modelled with due times that :meth:`LayoutController.tick` commits, so the
caller's event loop decides when time advances.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

from .anchors import Anchor, DragGesture, Point
from .config import LayoutConfig
from .geometry import Vector, Viewport
from .models import (
    ItemPlacement,
    ItemState,
    LayoutRequest,
    MenuItem,
    apply_hover,
    refresh_items,
    seed_items,
)
from .solvers import LayoutSolver, get_layout_solver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutSnapshot:
    """Everything the presentation layer needs for one frame."""

    is_open: bool
    anchor: Anchor
    viewport: Viewport
    hovered_id: Optional[str]
    placements: Tuple[ItemPlacement, ...]

    @property
    def anchor_center(self) -> Vector:
        return self.anchor.center


@dataclass(frozen=True)
class _PendingHover:
    due: float
    item_id: str
    entering: bool


class LayoutController:
    def __init__(
        self,
        items: Sequence[MenuItem],
        viewport: Viewport,
        *,
        anchor: Optional[Anchor] = None,
        config: Optional[LayoutConfig] = None,
        solver: Optional[LayoutSolver] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or LayoutConfig()
        self.solver = solver or get_layout_solver(config=self.config)
        self.viewport = viewport
        anchor = anchor or Anchor.centered_in(viewport, self.config.anchor_diameter)
        self.anchor = anchor.clamped(viewport)
        self._clock = clock

        self._items: Tuple[ItemState, ...] = seed_items(items, self.config)
        self._placements: Tuple[ItemPlacement, ...] = ()
        self.is_open = False
        self.hovered_id: Optional[str] = None
        self._pending_hover: Optional[_PendingHover] = None
        self._gesture: Optional[DragGesture] = None
        self._last_click_toggle: Optional[float] = None
        self.recompute_count = 0

    # ------------------------------------------------------------------
    # Read side

    @property
    def items(self) -> Tuple[ItemState, ...]:
        return self._items

    @property
    def placements(self) -> Tuple[ItemPlacement, ...]:
        return self._placements

    @property
    def is_dragging(self) -> bool:
        return self._gesture is not None and self._gesture.active

    def snapshot(self) -> LayoutSnapshot:
        return LayoutSnapshot(
            is_open=self.is_open,
            anchor=self.anchor,
            viewport=self.viewport,
            hovered_id=self.hovered_id,
            placements=self._placements,
        )

    # ------------------------------------------------------------------
    # Menu visibility

    def open(self) -> None:
        if self.is_open:
            return
        self.is_open = True
        logger.info("menu opened")
        self._recompute("open")

    def close(self) -> None:
        if not self.is_open:
            return
        self.is_open = False
        self._clear_hover()
        logger.info("menu closed")
        self._recompute("close")

    def toggle(self) -> None:
        if self.is_open:
            self.close()
        else:
            self.open()

    # ------------------------------------------------------------------
    # Anchor gesture

    def press_anchor(self, pointer: Point) -> None:
        self._gesture = DragGesture(self.anchor, pointer, threshold=self.config.drag_threshold)

    def drag_anchor(self, pointer: Point) -> Anchor:
        """Move the anchor with the pointer; the layout is left as it is."""

        if self._gesture is None:
            return self.anchor
        self.anchor = self._gesture.move(self.anchor, pointer, self.viewport)
        return self.anchor

    def release_anchor(self, now: Optional[float] = None) -> bool:
        """Finish the gesture; a drag recomputes, a click toggles the menu.

        Returns ``True`` when the gesture was a drag.
        """

        if self._gesture is None:
            return False
        was_drag = self._gesture.release()
        self._gesture = None
        if was_drag:
            logger.info("anchor dropped at (%.1f, %.1f)", self.anchor.x, self.anchor.y)
            self._recompute("drag")
            return True

        now = self._clock() if now is None else now
        if self._last_click_toggle is not None and now - self._last_click_toggle < self.config.click_timeout:
            logger.debug("ignoring click %.3fs after previous toggle", now - self._last_click_toggle)
            return False
        self._last_click_toggle = now
        self.toggle()
        return False

    # ------------------------------------------------------------------
    # Hover intent

    def hover_enter(self, item_id: str, now: Optional[float] = None) -> None:
        self._require_item(item_id)
        if not self.is_open:
            return
        now = self._clock() if now is None else now
        self._pending_hover = _PendingHover(now + self.config.hover_intent_delay, item_id, True)
        self.tick(now)

    def hover_leave(self, item_id: str, now: Optional[float] = None) -> None:
        self._require_item(item_id)
        if not self.is_open:
            return
        now = self._clock() if now is None else now
        self._pending_hover = _PendingHover(now + self.config.hover_leave_delay, item_id, False)
        self.tick(now)

    def tick(self, now: Optional[float] = None) -> bool:
        """Commit a due hover change; return ``True`` if it triggered a recompute."""

        pending = self._pending_hover
        if pending is None:
            return False
        now = self._clock() if now is None else now
        if now < pending.due:
            return False
        self._pending_hover = None

        if pending.entering:
            hovered = pending.item_id
        elif self.hovered_id == pending.item_id:
            hovered = None
        else:
            hovered = self.hovered_id
        if hovered == self.hovered_id:
            return False

        self.hovered_id = hovered
        self._items = apply_hover(self._items, hovered, self.config.hover_scale)
        logger.debug("hover -> %s", hovered)
        self._recompute("hover")
        return True

    def activate(self, item_id: str) -> Any:
        """Handle a click on an item: close the menu and return its payload."""

        item = self._require_item(item_id)
        self.close()
        return item.payload

    # ------------------------------------------------------------------
    # Environment changes

    def resize(self, width: float, height: float) -> None:
        self.viewport = Viewport(width, height)
        self.anchor = self.anchor.clamped(self.viewport)
        logger.info("viewport resized to %.0fx%.0f", width, height)
        self._recompute("resize")

    def set_items(self, items: Sequence[MenuItem]) -> None:
        """Replace the item set; positions persist unless its size changes."""

        ids = {item.id for item in items}
        if self.hovered_id not in ids:
            self.hovered_id = None
        if self._pending_hover is not None and self._pending_hover.item_id not in ids:
            self._pending_hover = None

        previous = self._items
        self._items = refresh_items(previous, items, self.config, hovered_id=self.hovered_id)
        reseeded = len(previous) != len(self._items)
        resized = any(a.size != b.size for a, b in zip(previous, self._items))
        if reseeded:
            logger.info("item set changed to %d items; re-seeding orbit", len(self._items))
        if reseeded or resized:
            self._recompute("items")
        elif self.is_open:
            self._placements = tuple(item.placement() for item in self._items)

    # ------------------------------------------------------------------

    def _recompute(self, reason: str) -> None:
        self.recompute_count += 1
        if not self.is_open:
            self._placements = ()
            return
        request = LayoutRequest(anchor_center=self.anchor.center, viewport=self.viewport)
        solved = self.solver.solve(self._items, request)
        if solved:
            self._items = solved
        self._placements = tuple(item.placement() for item in solved)
        logger.debug(
            "recompute #%d (%s) with %s solver: %d placements",
            self.recompute_count,
            reason,
            self.solver.name,
            len(self._placements),
        )

    def _clear_hover(self) -> None:
        self._pending_hover = None
        if self.hovered_id is not None:
            self.hovered_id = None
            self._items = apply_hover(self._items, None, self.config.hover_scale)

    def _require_item(self, item_id: str) -> ItemState:
        for item in self._items:
            if item.id == item_id:
                return item
        raise KeyError(item_id)
