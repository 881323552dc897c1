from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import scipy.sparse as sp

from ..schemas import SENSE_ALIASES, SparseModel, normalize_senses
from .highs import LinearProgram

_MISSING_MESSAGES: Tuple[Tuple[str, str], ...] = (
    ("A", "LHS matrix is not defined"),
    ("b", "RHS vector is not defined"),
    ("lb", "Lower bound vector is not defined"),
    ("ub", "Upper bound vector is not defined"),
    ("csense", "Constraint sense vector is not defined"),
)


@dataclass(frozen=True, eq=False)
class LinearConstraintSystem:
    """Feasible set ``A x {=,>=,<=} b, lb <= x <= ub`` with one sense per row."""

    A: Optional[sp.csr_matrix] = None
    b: Optional[np.ndarray] = None
    lb: Optional[np.ndarray] = None
    ub: Optional[np.ndarray] = None
    csense: Optional[np.ndarray] = None

    @classmethod
    def from_arrays(
        cls,
        A: Any = None,
        b: Any = None,
        lb: Any = None,
        ub: Any = None,
        csense: Any = None,
    ) -> "LinearConstraintSystem":
        return cls(
            A=_coerce_matrix(A),
            b=_coerce_vector(b, "RHS vector"),
            lb=_coerce_vector(lb, "Lower bound vector"),
            ub=_coerce_vector(ub, "Upper bound vector"),
            csense=_coerce_senses(csense),
        )

    @property
    def shape(self) -> Tuple[int, int]:
        if self.A is None:
            raise ValueError("LHS matrix is not defined")
        return self.A.shape

    def missing_fields(self) -> List[str]:
        return [message for field, message in _MISSING_MESSAGES if getattr(self, field) is None]

    def validate(self) -> None:
        """Raise ``ValueError`` if a field is missing or the dimensions disagree."""
        missing = self.missing_fields()
        if missing:
            raise ValueError(missing[0])

        m, n = self.A.shape
        if self.b.shape[0] != m:
            raise ValueError(f"RHS vector has length {self.b.shape[0]}, expected {m}.")
        if self.csense.shape[0] != m:
            raise ValueError(f"Constraint sense vector has length {self.csense.shape[0]}, expected {m}.")
        if self.lb.shape[0] != n:
            raise ValueError(f"Lower bound vector has length {self.lb.shape[0]}, expected {n}.")
        if self.ub.shape[0] != n:
            raise ValueError(f"Upper bound vector has length {self.ub.shape[0]}, expected {n}.")


def as_constraint_system(constraint: Any) -> LinearConstraintSystem:
    """Accept a ``LinearConstraintSystem``, a ``ConstraintSystem`` or a mapping."""
    if isinstance(constraint, LinearConstraintSystem):
        return constraint
    if hasattr(constraint, "to_linear_system"):
        return constraint.to_linear_system()
    if isinstance(constraint, Mapping):
        return LinearConstraintSystem.from_arrays(
            A=constraint.get("A"),
            b=constraint.get("b"),
            lb=constraint.get("lb"),
            ub=constraint.get("ub"),
            csense=constraint.get("csense"),
        )
    raise ValueError(f"Unsupported constraint type {type(constraint).__name__}.")


def system_from_model(model: SparseModel) -> Tuple[LinearConstraintSystem, List[str], List[str]]:
    """
    Convert a named model into a constraint system.
    Returns the system plus column (variable) and row (constraint) names.
    """

    n = len(model.variables)
    name_to_idx = model.variable_index()
    rows: List[List[float]] = []
    rhs_values: List[float] = []
    senses: List[str] = []

    for cons in model.constraints:
        row = [0.0] * n
        for term in cons.lhs.terms:
            if term.var not in name_to_idx:
                raise ValueError(f"Constraint '{cons.name}' references unknown variable '{term.var}'")
            row[name_to_idx[term.var]] += term.coef
        rows.append(row)
        rhs_values.append(cons.rhs - cons.lhs.constant)
        senses.append(SENSE_ALIASES[cons.cmp])

    lb = [-np.inf if var.lb is None else var.lb for var in model.variables]
    ub = [np.inf if var.ub is None else var.ub for var in model.variables]

    system = LinearConstraintSystem.from_arrays(
        A=np.array(rows, dtype=float) if rows else np.empty((0, n)),
        b=rhs_values,
        lb=lb,
        ub=ub,
        csense=senses,
    )
    return system, [var.name for var in model.variables], [cons.name for cons in model.constraints]


def build_augmented_lp(system: LinearConstraintSystem, theta: float) -> LinearProgram:
    """
    Lift ``system`` to variables ``(x, t)`` with ``t >= x`` and ``t >= -x``:

        [ A   0 ] [x]   {csense}  [b]
        [ I  -I ] [t]      <=     [0]
        [-I  -I ]          <=     [0]

    with ``lb <= x <= ub`` and ``0 <= t <= max(|lb|, |ub|)``.
    The returned objective is ``[0, theta * 1]``.
    """

    m, n = system.shape
    eye = sp.identity(n, format="csr")
    A2 = sp.vstack(
        [
            sp.hstack([system.A, sp.csr_matrix((m, n))]),
            sp.hstack([eye, -eye]),
            sp.hstack([-eye, -eye]),
        ],
        format="csr",
    )
    b2 = np.concatenate([system.b, np.zeros(2 * n)])
    csense2 = np.concatenate([system.csense, np.full(2 * n, "L")])
    lb2 = np.concatenate([system.lb, np.zeros(n)])
    ub2 = np.concatenate([system.ub, np.maximum(np.abs(system.lb), np.abs(system.ub))])
    c = np.concatenate([np.zeros(n), theta * np.ones(n)])
    return LinearProgram(c=c, A=A2, b=b2, csense=csense2, lb=lb2, ub=ub2)


def _coerce_matrix(mat: Any) -> Optional[sp.csr_matrix]:
    if mat is None:
        return None
    try:
        if sp.issparse(mat):
            return sp.csr_matrix(mat, dtype=float)
        arr = np.asarray(mat, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"LHS matrix is not numeric: {exc}") from exc
    if arr.ndim == 1:
        arr = arr[np.newaxis, :]
    if arr.ndim != 2:
        raise ValueError(f"LHS matrix must be two-dimensional, got {arr.ndim} dimensions.")
    return sp.csr_matrix(arr)


def _coerce_vector(vec: Any, label: str) -> Optional[np.ndarray]:
    if vec is None:
        return None
    try:
        arr = np.asarray(vec, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label} is not numeric: {exc}") from exc
    if arr.ndim > 1 and max(arr.shape) != arr.size:
        raise ValueError(f"{label} must be a vector, got an array of shape {arr.shape}.")
    return arr.reshape(-1)


def _coerce_senses(senses: Any) -> Optional[np.ndarray]:
    if senses is None:
        return None
    if isinstance(senses, str):
        tokens: Sequence[str] = list(senses)
    else:
        try:
            tokens = list(np.asarray(senses, dtype=object).reshape(-1))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Constraint sense vector is malformed: {exc}") from exc
    return np.array(normalize_senses(tokens), dtype="<U1")
