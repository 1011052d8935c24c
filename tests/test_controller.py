import math
from dataclasses import replace

import pytest

from radial_layout import Anchor, Circle, LayoutConfig, LayoutController, MenuItem, Viewport

CONFIG = LayoutConfig()


def _menu(count: int = 6) -> list[MenuItem]:
    return [MenuItem(f"item-{i}", payload={"label": f"Item {i}"}) for i in range(count)]


def _controller(count: int = 6, config: LayoutConfig = CONFIG) -> LayoutController:
    return LayoutController(_menu(count), Viewport(1200.0, 800.0), config=config, clock=lambda: 0.0)


def _click(controller: LayoutController, now: float) -> None:
    center = controller.anchor.center
    controller.press_anchor((center.x, center.y))
    controller.release_anchor(now=now)


def test_anchor_starts_centered_and_menu_closed() -> None:
    controller = _controller()
    assert controller.anchor.center.x == 600.0
    assert controller.anchor.center.y == 400.0
    assert not controller.is_open
    assert controller.placements == ()
    assert controller.recompute_count == 0


def test_open_recomputes_once_and_exposes_placements() -> None:
    controller = _controller()
    controller.open()
    assert controller.recompute_count == 1
    placements = controller.placements
    assert [p.id for p in placements] == [f"item-{i}" for i in range(6)]
    for placement in placements:
        assert math.hypot(placement.x, placement.y) == pytest.approx(120.0)
        assert placement.scale == 1.0
        assert placement.size == 56.0

    controller.open()
    assert controller.recompute_count == 1


def test_click_toggles_and_respects_click_timeout() -> None:
    controller = _controller()
    _click(controller, now=0.0)
    assert controller.is_open

    _click(controller, now=0.05)
    assert controller.is_open

    _click(controller, now=1.0)
    assert not controller.is_open
    assert controller.placements == ()


def test_small_pointer_jitter_still_counts_as_click() -> None:
    controller = _controller()
    controller.press_anchor((600.0, 400.0))
    controller.drag_anchor((603.0, 401.0))
    was_drag = controller.release_anchor(now=0.0)
    assert not was_drag
    assert controller.is_open


def test_drag_moves_do_not_recompute_until_release() -> None:
    controller = _controller()
    controller.open()
    before = controller.placements

    controller.press_anchor((600.0, 400.0))
    for step in range(1, 6):
        controller.drag_anchor((600.0 + 20.0 * step, 400.0 + 10.0 * step))
        assert controller.is_dragging
        assert controller.recompute_count == 1
        assert controller.placements == before

    assert controller.anchor.center.x == pytest.approx(700.0)
    assert controller.anchor.center.y == pytest.approx(450.0)

    was_drag = controller.release_anchor(now=5.0)
    assert was_drag
    assert controller.is_open
    assert controller.recompute_count == 2
    assert not controller.is_dragging


def test_drag_clamps_anchor_to_viewport() -> None:
    controller = _controller()
    controller.press_anchor((600.0, 400.0))
    anchor = controller.drag_anchor((-500.0, -500.0))
    assert (anchor.x, anchor.y) == (0.0, 0.0)
    anchor = controller.drag_anchor((5000.0, 5000.0))
    assert (anchor.x, anchor.y) == (1200.0 - 64.0, 800.0 - 64.0)


def test_hover_commits_after_intent_delay() -> None:
    controller = _controller()
    controller.open()

    controller.hover_enter("item-1", now=0.0)
    assert controller.hovered_id is None
    assert not controller.tick(0.05)
    assert controller.recompute_count == 1

    assert controller.tick(0.08)
    assert controller.hovered_id == "item-1"
    assert controller.recompute_count == 2

    hovered = {p.id: p for p in controller.placements}["item-1"]
    assert hovered.scale == pytest.approx(1.2)
    assert hovered.size == pytest.approx(56.0 * 1.2)
    others = [p for p in controller.placements if p.id != "item-1"]
    assert all(p.size == 56.0 for p in others)


def test_moving_between_items_does_not_flicker() -> None:
    controller = _controller()
    controller.open()
    controller.hover_enter("item-1", now=0.0)
    controller.tick(0.1)

    controller.hover_leave("item-1", now=1.0)
    controller.hover_enter("item-2", now=1.01)
    assert not controller.tick(1.06)
    assert controller.hovered_id == "item-1"
    assert controller.tick(1.1)
    assert controller.hovered_id == "item-2"

    # A late leave for an item that is no longer hovered changes nothing
    controller.hover_leave("item-1", now=2.0)
    assert not controller.tick(2.1)
    assert controller.hovered_id == "item-2"

    controller.hover_leave("item-2", now=3.0)
    assert controller.tick(3.1)
    assert controller.hovered_id is None


def test_zero_delay_hover_commits_immediately() -> None:
    config = replace(CONFIG, hover_intent_delay=0.0, hover_leave_delay=0.0)
    controller = _controller(config=config)
    controller.open()
    controller.hover_enter("item-3", now=0.0)
    assert controller.hovered_id == "item-3"


def test_hover_ignored_while_closed_and_cleared_on_close() -> None:
    controller = _controller()
    controller.hover_enter("item-0", now=0.0)
    assert not controller.tick(1.0)
    assert controller.hovered_id is None

    controller.open()
    controller.hover_enter("item-0", now=2.0)
    controller.tick(3.0)
    assert controller.hovered_id == "item-0"

    controller.close()
    assert controller.hovered_id is None
    assert all(item.scale == 1.0 for item in controller.items)


def test_unknown_item_id_raises() -> None:
    controller = _controller()
    controller.open()
    with pytest.raises(KeyError):
        controller.hover_enter("missing", now=0.0)
    with pytest.raises(KeyError):
        controller.activate("missing")


def test_activate_returns_payload_and_closes() -> None:
    controller = _controller()
    controller.open()
    payload = controller.activate("item-4")
    assert payload == {"label": "Item 4"}
    assert not controller.is_open


def test_resize_clamps_anchor_and_recomputes() -> None:
    controller = _controller()
    controller.open()
    controller.resize(400.0, 300.0)
    assert controller.viewport == Viewport(400.0, 300.0)
    assert (controller.anchor.x, controller.anchor.y) == (336.0, 236.0)
    assert controller.recompute_count == 2


@pytest.mark.parametrize("solver", ["force", "arc"])
def test_resize_to_zero_viewport_keeps_every_item(solver) -> None:
    controller = _controller(config=replace(CONFIG, solver=solver))
    controller.open()
    controller.resize(0.0, 0.0)
    assert (controller.anchor.x, controller.anchor.y) == (0.0, 0.0)
    assert controller.recompute_count == 2
    assert len(controller.placements) == 6


@pytest.mark.parametrize("solver", ["force", "arc"])
def test_corner_anchor_opens_with_items_on_screen(solver) -> None:
    viewport = Viewport(1200.0, 800.0)
    controller = LayoutController(
        _menu(),
        viewport,
        anchor=Anchor(0.0, 0.0, 64.0),
        config=replace(CONFIG, solver=solver),
        clock=lambda: 0.0,
    )
    controller.open()
    center = controller.anchor.center
    for placement in controller.placements:
        point = placement.absolute(center)
        assert viewport.contains(Circle(point.x, point.y, placement.size / 2.0 - 1e-9), CONFIG.screen_padding)


def test_set_items_reseeds_only_on_cardinality_change() -> None:
    controller = _controller()
    controller.open()
    relaxed = controller.items

    renamed = [MenuItem(f"item-{i}", payload=i) for i in range(6)]
    controller.set_items(renamed)
    assert controller.recompute_count == 1
    assert [item.payload for item in controller.items] == list(range(6))
    assert [(item.x, item.y) for item in controller.items] == [(item.x, item.y) for item in relaxed]

    controller.set_items(_menu(4))
    assert controller.recompute_count == 2
    angles = [item.base_angle for item in controller.items]
    assert angles == pytest.approx([0.0, math.pi / 2, math.pi, 3 * math.pi / 2])
    assert len(controller.placements) == 4


def test_set_items_drops_stale_hover() -> None:
    controller = _controller()
    controller.open()
    controller.hover_enter("item-5", now=0.0)
    controller.tick(1.0)
    controller.set_items(_menu(3))
    assert controller.hovered_id is None


def test_duplicate_ids_rejected() -> None:
    with pytest.raises(ValueError):
        LayoutController([MenuItem("a"), MenuItem("a")], Viewport(800.0, 600.0))


def test_config_selects_arc_solver() -> None:
    controller = _controller(config=replace(CONFIG, solver="arc"))
    assert controller.solver.name == "arc"
    controller.open()
    for placement in controller.placements:
        assert math.hypot(placement.x, placement.y) == pytest.approx(120.0)


def test_explicit_anchor_is_clamped() -> None:
    controller = LayoutController(
        _menu(3),
        Viewport(500.0, 500.0),
        anchor=Anchor(x=900.0, y=-20.0, diameter=64.0),
    )
    assert (controller.anchor.x, controller.anchor.y) == (436.0, 0.0)


def test_snapshot_reflects_state() -> None:
    controller = _controller()
    controller.open()
    snapshot = controller.snapshot()
    assert snapshot.is_open
    assert snapshot.anchor_center.x == 600.0
    assert snapshot.placements == controller.placements
