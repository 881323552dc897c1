from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import List, Literal, Optional, Tuple

import numpy as np
import scipy.sparse as sp
from scipy.optimize import linprog

logger = logging.getLogger(__name__)

LPStatus = Literal["optimal", "infeasible", "unbounded", "iteration_limit", "error"]


@dataclass(frozen=True, eq=False)
class LinearProgram:
    """
    ``minimize c^T x`` subject to ``A x {=,>=,<=} b`` row-wise (``csense``)
    and ``lb <= x <= ub``. Instances are never mutated; ``with_objective``
    returns a new view over the same constraint block.
    """

    c: np.ndarray
    A: sp.csr_matrix
    b: np.ndarray
    csense: np.ndarray
    lb: np.ndarray
    ub: np.ndarray

    @property
    def shape(self) -> Tuple[int, int]:
        return self.A.shape

    def with_objective(self, c: np.ndarray) -> "LinearProgram":
        c = np.asarray(c, dtype=float).reshape(-1)
        if c.shape[0] != self.A.shape[1]:
            raise ValueError(
                f"Objective has {c.shape[0]} coefficients, program has {self.A.shape[1]} columns."
            )
        return dataclasses.replace(self, c=c)


@dataclass
class LPResult:
    status: LPStatus
    x: Optional[np.ndarray] = None
    objective_value: Optional[float] = None
    iterations: int = 0
    message: str = ""


def solve_lp(program: LinearProgram, method: str = "highs") -> LPResult:
    """Solve ``program`` with SciPy's HiGHS interface."""
    try:
        bounds = _build_bounds(program)
    except ValueError as exc:
        return LPResult(status="infeasible", message=str(exc))

    A_ub, b_ub, A_eq, b_eq = _build_constraint_matrices(program)
    try:
        res = linprog(
            program.c,
            A_ub=A_ub if A_ub.shape[0] else None,
            b_ub=b_ub if b_ub.shape[0] else None,
            A_eq=A_eq if A_eq.shape[0] else None,
            b_eq=b_eq if b_eq.shape[0] else None,
            bounds=bounds,
            method=method,
        )
    except ValueError as exc:
        logger.debug("linprog rejected the program: %s", exc)
        return LPResult(status="error", message=str(exc))
    iterations = int(getattr(res, "nit", 0) or 0)

    if not res.success:
        status = _map_status(res.status)
        logger.debug("LP solve ended with status %s: %s", status, res.message)
        return LPResult(status=status, iterations=iterations, message=res.message or "")

    return LPResult(
        status="optimal",
        x=np.asarray(res.x, dtype=float),
        objective_value=float(res.fun),
        iterations=iterations,
        message=res.message or "",
    )


def _build_constraint_matrices(
    program: LinearProgram,
) -> Tuple[sp.csr_matrix, np.ndarray, sp.csr_matrix, np.ndarray]:
    csense = program.csense
    eq_rows = np.flatnonzero(csense == "E")
    le_rows = np.flatnonzero(csense == "L")
    ge_rows = np.flatnonzero(csense == "G")

    A = program.A
    A_ub = sp.vstack([A[le_rows], -A[ge_rows]], format="csr")
    b_ub = np.concatenate([program.b[le_rows], -program.b[ge_rows]])
    # rows with rhs +inf after sign normalization always hold
    active = np.flatnonzero(~np.isposinf(b_ub))
    return A_ub[active], b_ub[active], A[eq_rows], program.b[eq_rows]


def _build_bounds(program: LinearProgram) -> List[Tuple[float | None, float | None]]:
    bounds: List[Tuple[float | None, float | None]] = []
    for idx, (lb, ub) in enumerate(zip(program.lb, program.ub)):
        if lb > ub:
            raise ValueError(f"Column {idx} has inconsistent bounds (lb {lb} > ub {ub}).")
        bounds.append(
            (
                None if np.isneginf(lb) else float(lb),
                None if np.isposinf(ub) else float(ub),
            )
        )
    return bounds


def _map_status(code: int) -> LPStatus:
    mapping = {
        0: "optimal",
        1: "iteration_limit",
        2: "infeasible",
        3: "unbounded",
    }
    return mapping.get(code, "error")
