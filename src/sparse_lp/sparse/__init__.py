"""Cardinality-minimizing solvers for Sparse LP."""

from .lp_negative import solve_sparse_lp, solve_sparse_model, surrogate_gradient, surrogate_objective

__all__ = ["solve_sparse_lp", "solve_sparse_model", "surrogate_gradient", "surrogate_objective"]
