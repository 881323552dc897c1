"""Linear programming backend and helpers for Sparse LP."""

from .highs import LinearProgram, LPResult, solve_lp
from .utils import LinearConstraintSystem, build_augmented_lp, system_from_model
from .diagnostics import analyze_infeasibility

__all__ = [
    "LinearProgram",
    "LPResult",
    "solve_lp",
    "LinearConstraintSystem",
    "build_augmented_lp",
    "system_from_model",
    "analyze_infeasibility",
]
