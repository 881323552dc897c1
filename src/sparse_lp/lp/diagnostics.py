from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .highs import LinearProgram, solve_lp
from .utils import LinearConstraintSystem, as_constraint_system

logger = logging.getLogger(__name__)


def analyze_infeasibility(
    constraint: Any,
    row_names: Optional[Sequence[str]] = None,
    method: str = "highs",
) -> Dict[str, Any]:
    """Very small IIS-style heuristic: drop each row and re-solve the feasibility LP."""

    try:
        system = as_constraint_system(constraint)
        system.validate()
    except ValueError as exc:
        return {
            "status": "invalid_input",
            "message": str(exc),
            "conflicting_rows": [],
            "inconsistent_bounds": [],
            "suggestions": ["Provide A, b, lb, ub and csense with matching dimensions."],
        }

    m, _ = system.shape
    names = list(row_names) if row_names is not None else [f"row_{idx}" for idx in range(m)]

    base = solve_lp(_feasibility_program(system), method=method)
    if base.status != "infeasible":
        return {
            "status": base.status,
            "message": base.message or "Constraint system is not infeasible.",
            "conflicting_rows": [],
            "inconsistent_bounds": [],
            "suggestions": [],
        }

    inconsistent = [int(idx) for idx in np.flatnonzero(system.lb > system.ub)]

    conflicts: List[str] = []
    for idx in range(m):
        keep = np.delete(np.arange(m), idx)
        relaxed = LinearConstraintSystem(
            A=system.A[keep],
            b=system.b[keep],
            lb=system.lb,
            ub=system.ub,
            csense=system.csense[keep],
        )
        result = solve_lp(_feasibility_program(relaxed), method=method)
        if result.status != "infeasible":
            conflicts.append(names[idx])
    logger.debug("Infeasibility analysis: %d conflicting rows, %d bad bounds", len(conflicts), len(inconsistent))

    suggestions = []
    if inconsistent:
        suggestions.append("Some columns have lb > ub; fix these bounds first.")
    if conflicts:
        suggestions.append("Relax or inspect the conflicting rows above.")
    if not suggestions:
        suggestions.append("Consider relaxing bounds or checking for contradictory requirements.")

    return {
        "status": "infeasible",
        "message": "Detected infeasibility; listed rows critical to infeasibility.",
        "conflicting_rows": conflicts,
        "inconsistent_bounds": inconsistent,
        "suggestions": suggestions,
    }


def _feasibility_program(system: LinearConstraintSystem) -> LinearProgram:
    _, n = system.shape
    return LinearProgram(
        c=np.zeros(n),
        A=system.A,
        b=system.b,
        csense=system.csense,
        lb=system.lb,
        ub=system.ub,
    )
