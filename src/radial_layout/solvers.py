"""Interchangeable placement strategies behind one interface."""

from __future__ import annotations

from typing import Protocol, Sequence, Tuple, runtime_checkable

from .arcs import SafeArcSolver
from .config import LayoutConfig
from .core import ForceRelaxationSolver
from .models import ItemState, LayoutRequest


@runtime_checkable
class LayoutSolver(Protocol):
    """Protocol implemented by the placement strategies (force, arc, ...)."""

    name: str

    def solve(self, items: Sequence[ItemState], request: LayoutRequest) -> Tuple[ItemState, ...]:
        """Return new item states for ``request`` without mutating ``items``."""


def get_layout_solver(preferred: str | None = None, config: LayoutConfig | None = None) -> LayoutSolver:
    """Return the solver named ``preferred``, or the one ``config`` selects."""

    config = config or LayoutConfig()
    normalized = (preferred or config.solver).strip().lower()
    if normalized == "force":
        return ForceRelaxationSolver(config)
    if normalized == "arc":
        return SafeArcSolver(config)
    raise ValueError(f"Unknown solver '{preferred}'")


__all__ = [
    "LayoutSolver",
    "ForceRelaxationSolver",
    "SafeArcSolver",
    "get_layout_solver",
]
