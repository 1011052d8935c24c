from __future__ import annotations

import json
import math
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from radial_layout import Anchor, LayoutController, MenuItem, Viewport, export_layout, solve_layout
from radial_layout.api import render_preview_array


def _menu(count: int) -> list[MenuItem]:
    return [MenuItem(f"item-{i}") for i in range(count)]


def test_solve_layout_example_scenario() -> None:
    viewport = Viewport(1200.0, 800.0)
    anchor = Anchor.centered_in(viewport, 64.0)
    placements = solve_layout(_menu(6), anchor, viewport)

    assert len(placements) == 6
    for index, placement in enumerate(placements):
        expected = index * math.pi / 3.0
        assert placement.x == pytest.approx(120.0 * math.cos(expected), abs=1e-6)
        assert placement.y == pytest.approx(120.0 * math.sin(expected), abs=1e-6)


def test_solve_layout_accepts_solver_name_and_hover() -> None:
    viewport = Viewport(1200.0, 800.0)
    anchor = Anchor.centered_in(viewport, 64.0)
    placements = solve_layout(_menu(5), anchor, viewport, solver="arc", hovered_id="item-3")
    sizes = {p.id: p.size for p in placements}
    assert sizes["item-3"] == pytest.approx(56.0 * 1.2)
    assert sizes["item-0"] == 56.0


def test_solve_layout_empty_items() -> None:
    viewport = Viewport(800.0, 600.0)
    anchor = Anchor.centered_in(viewport, 64.0)
    assert solve_layout([], anchor, viewport, passes=3) == []
    with pytest.raises(ValueError):
        solve_layout(_menu(2), anchor, viewport, passes=0)


def test_export_layout(tmp_path: Path) -> None:
    controller = LayoutController(_menu(6), Viewport(640.0, 480.0))
    controller.open()

    summary = export_layout("unit", controller.snapshot(), output_root=tmp_path)

    manifest_path = Path(summary["layout_json_path"])
    assert manifest_path.exists()
    saved = json.loads(manifest_path.read_text(encoding="utf-8"))
    assert saved["is_open"] is True
    assert saved["viewport"] == {"width": 640.0, "height": 480.0, "padding": 20.0}
    assert len(saved["placements"]) == 6
    sample = saved["placements"][0]
    for key in ("id", "x", "y", "absolute", "angle", "scale", "size"):
        assert key in sample
    assert sample["absolute"][0] == pytest.approx(320.0 + sample["x"])

    preview_path = Path(summary["preview_path"])
    assert preview_path.exists()
    with Image.open(preview_path) as img:
        assert img.size == (640, 480)


def test_export_layout_without_preview(tmp_path: Path) -> None:
    controller = LayoutController(_menu(2), Viewport(300.0, 200.0))
    summary = export_layout("closed", controller.snapshot(), output_root=tmp_path, render_preview=False)
    assert "preview_path" not in summary
    assert summary["placements"] == []

    with pytest.raises(ValueError):
        export_layout("", controller.snapshot(), output_root=tmp_path)


def test_render_preview_array_marks_items() -> None:
    controller = LayoutController(_menu(4), Viewport(400.0, 400.0))
    controller.open()
    pixels = render_preview_array(controller.snapshot(), 20.0)
    assert pixels.shape == (400, 400, 3)
    assert pixels.dtype == np.uint8

    placement = controller.placements[0]
    point = placement.absolute(controller.anchor.center)
    assert tuple(pixels[int(point.y), int(point.x)]) == (14, 165, 233)
