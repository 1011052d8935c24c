"""Startup constants for the layout engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Literal, Mapping

SolverName = Literal["force", "arc"]
SOLVER_NAMES = ("force", "arc")


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry, relaxation and interaction parameters.

    Sizes are diameters in pixels, delays are seconds. Instances are never
    mutated; use :func:`dataclasses.replace` to derive a variant.
    """

    reference_radius: float = 120.0
    item_base_size: float = 56.0
    anchor_diameter: float = 64.0
    item_margin: float = 10.0
    screen_padding: float = 20.0
    relaxation_iterations: int = 10
    damping: float = 0.3
    attraction_strength: float = 0.05
    edge_strength: float = 0.5
    hover_scale: float = 1.2
    angular_resolution: int = 360
    radius_increment: float = 5.0
    max_radius_factor: float = 3.0
    max_radius_steps: int = 100
    drag_threshold: float = 5.0
    hover_intent_delay: float = 0.075
    hover_leave_delay: float = 0.05
    click_timeout: float = 0.15
    solver: SolverName = "force"

    def __post_init__(self) -> None:
        if self.relaxation_iterations < 0:
            raise ValueError("relaxation_iterations must be non-negative")
        if not 0.0 < self.damping <= 1.0:
            raise ValueError("damping must be in (0, 1]")
        if self.hover_scale <= 0.0:
            raise ValueError("hover_scale must be positive")
        if self.angular_resolution < 1:
            raise ValueError("angular_resolution must be at least 1")
        if self.radius_increment <= 0.0:
            raise ValueError("radius_increment must be positive")
        if self.max_radius_factor < 1.0:
            raise ValueError("max_radius_factor must be >= 1")
        if self.max_radius_steps < 1:
            raise ValueError("max_radius_steps must be at least 1")
        for name in (
            "item_base_size",
            "anchor_diameter",
            "item_margin",
            "screen_padding",
            "attraction_strength",
            "edge_strength",
            "drag_threshold",
            "hover_intent_delay",
            "hover_leave_delay",
            "click_timeout",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.solver not in SOLVER_NAMES:
            raise ValueError(f"unknown solver {self.solver!r}; expected one of {SOLVER_NAMES}")

    @property
    def max_orbit_radius(self) -> float:
        return self.reference_radius * self.max_radius_factor

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LayoutConfig:
        known = {field.name for field in fields(cls)}
        for key in data:
            if key not in known:
                msg = f"Unknown layout config key '{key}'"
                raise KeyError(msg)
        return cls(**dict(data))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
