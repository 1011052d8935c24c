"""High-level APIs: one-shot solving and layout export."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

import numpy as np
from PIL import Image, ImageDraw

from .anchors import Anchor
from .config import LayoutConfig
from .controller import LayoutSnapshot
from .geometry import Viewport
from .models import ItemPlacement, LayoutRequest, MenuItem, seed_items
from .solvers import LayoutSolver, get_layout_solver


def solve_layout(
    items: Sequence[MenuItem],
    anchor: Anchor,
    viewport: Viewport,
    *,
    config: LayoutConfig | None = None,
    hovered_id: str | None = None,
    solver: LayoutSolver | str | None = None,
    passes: int = 1,
) -> list[ItemPlacement]:
    """Seed ``items`` on the reference orbit and solve their placement.

    Parameters
    ----------
    items:
        Ordered item set; order fixes each item's base angle.
    anchor:
        Anchor button, top-left plus diameter, in viewport coordinates.
    viewport:
        Visible area the items must stay inside (minus the configured padding).
    config:
        Engine constants. Defaults to :class:`LayoutConfig`.
    hovered_id:
        Item to treat as hovered (scaled up by ``config.hover_scale``).
    solver:
        A solver instance, a solver name (``"force"``/``"arc"``), or ``None``
        for the one ``config`` selects.
    passes:
        Number of consecutive recomputes, each continuing from the last.
        Only the force solver depends on the previous offsets.
    """

    config = config or LayoutConfig()
    if solver is None or isinstance(solver, str):
        solver = get_layout_solver(solver, config)
    if passes < 1:
        raise ValueError("passes must be at least 1")

    states = seed_items(items, config, hovered_id=hovered_id)
    request = LayoutRequest(anchor_center=anchor.center, viewport=viewport)
    for _ in range(passes):
        solved = solver.solve(states, request)
        if not solved:
            return []
        states = solved
    return [state.placement() for state in states]


def export_layout(
    prj_id: str,
    snapshot: LayoutSnapshot,
    *,
    output_root: Path | str = "output",
    config: LayoutConfig | None = None,
    render_preview: bool = True,
) -> dict[str, Any]:
    """Write ``layout.json`` and an optional PNG preview for ``snapshot``.

    Files land in ``output_root / prj_id``; the returned summary is the
    JSON payload plus the written paths.
    """

    if not prj_id:
        raise ValueError("prj_id must be non-empty")
    config = config or LayoutConfig()

    project_dir = Path(output_root) / prj_id
    project_dir.mkdir(parents=True, exist_ok=True)

    center = snapshot.anchor_center
    summary: dict[str, Any] = {
        "project_id": prj_id,
        "is_open": snapshot.is_open,
        "hovered_id": snapshot.hovered_id,
        "viewport": {
            "width": snapshot.viewport.width,
            "height": snapshot.viewport.height,
            "padding": config.screen_padding,
        },
        "anchor": {
            "x": snapshot.anchor.x,
            "y": snapshot.anchor.y,
            "diameter": snapshot.anchor.diameter,
            "center": [center.x, center.y],
        },
        "placements": [],
    }
    for placement in snapshot.placements:
        absolute = placement.absolute(center)
        summary["placements"].append(
            {
                "id": placement.id,
                "x": placement.x,
                "y": placement.y,
                "absolute": [absolute.x, absolute.y],
                "angle": placement.angle,
                "scale": placement.scale,
                "size": placement.size,
            }
        )

    if render_preview:
        preview_path = project_dir / "layout_preview.png"
        _render_preview(snapshot, config.screen_padding).save(preview_path)
        summary["preview_path"] = str(preview_path)

    layout_json_path = project_dir / "layout.json"
    summary["layout_json_path"] = str(layout_json_path)
    layout_json_path.write_text(json.dumps(summary, ensure_ascii=False, indent=2), encoding="utf-8")
    return summary


def render_preview_array(snapshot: LayoutSnapshot, padding: float) -> np.ndarray:
    """Return the preview as an ``(H, W, 3)`` uint8 array."""

    return np.array(_render_preview(snapshot, padding), dtype=np.uint8)


def _render_preview(snapshot: LayoutSnapshot, padding: float) -> Image.Image:
    width = max(int(round(snapshot.viewport.width)), 1)
    height = max(int(round(snapshot.viewport.height)), 1)
    image = Image.new("RGB", (width, height), color=(16, 18, 24))
    draw = ImageDraw.Draw(image)

    min_x, min_y, max_x, max_y = snapshot.viewport.safe_bounds(padding)
    if max_x > min_x and max_y > min_y:
        draw.rectangle((min_x, min_y, max_x, max_y), outline=(80, 80, 96))

    center = snapshot.anchor_center
    r = snapshot.anchor.radius
    draw.ellipse((center.x - r, center.y - r, center.x + r, center.y + r), fill=(220, 220, 230))

    for placement in snapshot.placements:
        point = placement.absolute(center)
        radius = placement.size / 2.0
        hovered = placement.id == snapshot.hovered_id
        fill = (56, 189, 248) if hovered else (14, 165, 233)
        draw.ellipse(
            (point.x - radius, point.y - radius, point.x + radius, point.y + radius),
            fill=fill,
            outline=(255, 255, 255),
        )
    return image


__all__ = ["solve_layout", "export_layout", "render_preview_array"]
