"""Layout selection, fixed-position layouts and link curvature."""

from .curvature import CurvatureAssigner, assign_curvature
from .layered import layered_positions
from .selector import LayoutResult, LayoutSelector, apply_layout, unlock_positions

__all__ = [
    "CurvatureAssigner",
    "LayoutResult",
    "LayoutSelector",
    "apply_layout",
    "assign_curvature",
    "layered_positions",
    "unlock_positions",
]
