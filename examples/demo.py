"""Scripted radial-menu session: open, drag the anchor, hover, resize."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from radial_layout import LayoutConfig, LayoutController, MenuItem, Viewport, export_layout


def _print_placements(label: str, controller: LayoutController) -> None:
    center = controller.anchor.center
    print(f"{label}: anchor center ({center.x:.1f}, {center.y:.1f})")
    for placement in controller.placements:
        print(
            f"  {placement.id:<10} offset ({placement.x:7.2f}, {placement.y:7.2f})"
            f"  size {placement.size:5.1f}"
        )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a scripted radial layout session")
    parser.add_argument("--solver", choices=["force", "arc"], default="force", help="Placement strategy")
    parser.add_argument("--items", type=int, default=6, help="Number of orbital items")
    parser.add_argument("--export", type=Path, default=None, help="Directory to write layout.json + preview")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = LayoutConfig(solver=args.solver)
    items = [MenuItem(f"item-{i}", payload=f"Action {i}") for i in range(args.items)]
    controller = LayoutController(items, Viewport(1200.0, 800.0), config=config, clock=lambda: 0.0)

    center = controller.anchor.center
    controller.press_anchor((center.x, center.y))
    controller.release_anchor(now=0.0)
    _print_placements("Opened", controller)

    # Drag toward the top-left corner; the layout only updates on release
    controller.press_anchor((center.x, center.y))
    for step in range(1, 11):
        controller.drag_anchor((center.x - 50.0 * step, center.y - 32.0 * step))
    controller.release_anchor(now=1.0)
    _print_placements("After drag", controller)

    controller.hover_enter("item-0", now=2.0)
    controller.tick(2.0 + config.hover_intent_delay)
    _print_placements("Hovering item-0", controller)

    controller.resize(800.0, 600.0)
    _print_placements("After resize", controller)

    if args.export is not None:
        summary = export_layout("demo", controller.snapshot(), output_root=args.export, config=config)
        print(f"Saved layout to {summary['layout_json_path']}")


if __name__ == "__main__":
    main()
