"""Sparse LP: DC programming for cardinality-minimal points of linear systems."""

import logging

from .lp.diagnostics import analyze_infeasibility
from .lp.utils import LinearConstraintSystem, build_augmented_lp
from .schemas import ConstraintSystem, SparseLPOptions, SparseLPSolution, SparseModel
from .sparse.lp_negative import (
    solve_sparse_lp,
    solve_sparse_model,
    surrogate_gradient,
    surrogate_objective,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConstraintSystem",
    "LinearConstraintSystem",
    "SparseLPOptions",
    "SparseLPSolution",
    "SparseModel",
    "analyze_infeasibility",
    "build_augmented_lp",
    "solve_sparse_lp",
    "solve_sparse_model",
    "surrogate_gradient",
    "surrogate_objective",
]
