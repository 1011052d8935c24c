"""Render both placement strategies side by side for one anchor position.

The left panel shows the force solver's layout over a heatmap of the force a
probe item would feel at each point; the right panel shows the safe-arc
solver's layout with its safe arcs traced on the final orbit.
"""

from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from radial_layout import (  # noqa: E402
    Anchor,
    ForceRelaxationSolver,
    LayoutConfig,
    LayoutRequest,
    MenuItem,
    SafeArcSolver,
    Viewport,
    scan_safe_arcs,
    seed_items,
)
from radial_layout.geometry import add_vectors, magnitude  # noqa: E402
from radial_layout.models import ItemState, apply_hover  # noqa: E402


def _force_vector(
    solver: ForceRelaxationSolver,
    items: tuple[ItemState, ...],
    request: LayoutRequest,
    probe: ItemState,
) -> tuple[float, float]:
    force = solver._edge_force(probe, request)
    for item in items:
        force = add_vectors(force, solver._repel_force(probe, item))
    force = add_vectors(force, solver._anchor_force(probe))
    return force.x, force.y


def _sample_force_field(
    solver: ForceRelaxationSolver,
    items: tuple[ItemState, ...],
    request: LayoutRequest,
    grid: int,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    viewport = request.viewport
    xs = np.linspace(0.0, viewport.width, grid)
    ys = np.linspace(0.0, viewport.height, grid)
    magnitudes = np.zeros((grid, grid), dtype=np.float64)
    template = items[0]
    center = request.anchor_center
    for yi, y in enumerate(ys):
        for xi, x in enumerate(xs):
            probe = template.moved_to(float(x) - center.x, float(y) - center.y)
            fx, fy = _force_vector(solver, items, request, probe)
            magnitudes[yi, xi] = math.hypot(fx, fy)
    return xs, ys, magnitudes


def _draw_items(ax, items, request: LayoutRequest, color: str) -> None:
    center = request.anchor_center
    ax.add_patch(plt.Circle((center.x, center.y), 32.0, color="lightgray"))
    for item in items:
        ax.add_patch(
            plt.Circle(
                (center.x + item.x, center.y + item.y),
                item.size / 2.0,
                facecolor=color,
                edgecolor="white",
                linewidth=1.0,
            )
        )


def _draw_padding(ax, viewport: Viewport, padding: float) -> None:
    rect = plt.Rectangle(
        (padding, padding),
        viewport.width - 2 * padding,
        viewport.height - 2 * padding,
        edgecolor="white",
        facecolor="none",
        linewidth=1.0,
        linestyle="--",
        alpha=0.6,
    )
    ax.add_patch(rect)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare the force and safe-arc radial layouts")
    parser.add_argument("--items", type=int, default=8, help="Number of orbital items")
    parser.add_argument("--width", type=float, default=1200.0, help="Viewport width")
    parser.add_argument("--height", type=float, default=800.0, help="Viewport height")
    parser.add_argument("--anchor-x", type=float, default=120.0, help="Anchor center x")
    parser.add_argument("--anchor-y", type=float, default=120.0, help="Anchor center y")
    parser.add_argument("--hover", type=int, default=None, help="Index of the hovered item")
    parser.add_argument("--passes", type=int, default=20, help="Force solver recomputes to run")
    parser.add_argument("--grid", type=int, default=120, help="Heatmap samples per axis")
    parser.add_argument("--cmap", type=str, default="magma", help="Matplotlib colormap name to use")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(__file__).with_name("radial_layout_comparison.png"),
        help="Where to save the figure",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = LayoutConfig()
    viewport = Viewport(args.width, args.height)
    anchor = Anchor(
        x=args.anchor_x - config.anchor_diameter / 2.0,
        y=args.anchor_y - config.anchor_diameter / 2.0,
        diameter=config.anchor_diameter,
    ).clamped(viewport)
    request = LayoutRequest(anchor_center=anchor.center, viewport=viewport)

    menu = [MenuItem(f"item-{i}") for i in range(args.items)]
    hovered_id = None if args.hover is None else f"item-{args.hover}"
    seeded = apply_hover(seed_items(menu, config), hovered_id, config.hover_scale)

    force_solver = ForceRelaxationSolver(config)
    relaxed = seeded
    for _ in range(max(args.passes, 1)):
        relaxed = force_solver.solve(relaxed, request)

    arc_solver = SafeArcSolver(config)
    placed = arc_solver.solve(seeded, request)

    fig, (left, right) = plt.subplots(1, 2, figsize=(14, 5))
    extent = (0.0, viewport.width, viewport.height, 0.0)

    if relaxed:
        _, _, magnitudes = _sample_force_field(force_solver, relaxed, request, args.grid)
        im = left.imshow(np.log1p(magnitudes), extent=extent, origin="upper", cmap=args.cmap)
        fig.colorbar(im, ax=left).set_label("log(1 + |force|)")
        _draw_items(left, relaxed, request, "tab:blue")
    _draw_padding(left, viewport, config.screen_padding)
    left.set_title("Force relaxation")

    right.set_facecolor("black")
    if placed:
        radius = placed[0].current_radius
        safe_radius = max(item.base_size for item in placed) * config.hover_scale / 2.0
        arcs = scan_safe_arcs(
            request.anchor_center,
            radius,
            safe_radius,
            viewport,
            config.screen_padding,
            config.angular_resolution,
        )
        center = request.anchor_center
        for arc in arcs:
            theta = np.linspace(arc.start, arc.end, 64)
            right.plot(center.x + radius * np.cos(theta), center.y + radius * np.sin(theta), color="lime")
        _draw_items(right, placed, request, "tab:orange")
        gaps = [
            magnitude(a.offset - b.offset) - (a.radius + b.radius)
            for i, a in enumerate(placed)
            for b in placed[i + 1 :]
        ]
        if gaps:
            right.set_xlabel(f"orbit radius {radius:.0f}px, min gap {min(gaps):.1f}px")
    _draw_padding(right, viewport, config.screen_padding)
    right.set_title("Safe arcs")

    for ax in (left, right):
        ax.set_xlim(0, viewport.width)
        ax.set_ylim(viewport.height, 0)
        ax.set_aspect("equal")

    fig.tight_layout()
    fig.savefig(args.output, dpi=160)
    plt.close(fig)
    print(f"Layout comparison saved to {args.output}")


if __name__ == "__main__":
    main()
