"""radial_layout package."""

from .anchors import Anchor, DragGesture
from .api import export_layout, solve_layout
from .arcs import SafeArc, SafeArcSolver, scan_safe_arcs
from .config import LayoutConfig
from .controller import LayoutController, LayoutSnapshot
from .core import ForceRelaxationSolver
from .geometry import Circle, Vector, Viewport
from .models import ItemPlacement, ItemState, LayoutRequest, MenuItem, seed_items
from .solvers import LayoutSolver, get_layout_solver

__all__ = [
	"Anchor",
	"DragGesture",
	"Circle",
	"Vector",
	"Viewport",
	"LayoutConfig",
	"MenuItem",
	"ItemState",
	"ItemPlacement",
	"LayoutRequest",
	"seed_items",
	"LayoutSolver",
	"ForceRelaxationSolver",
	"SafeArcSolver",
	"SafeArc",
	"scan_safe_arcs",
	"get_layout_solver",
	"LayoutController",
	"LayoutSnapshot",
	"solve_layout",
	"export_layout",
]
__version__ = "0.1.0"
