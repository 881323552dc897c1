from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

Sense = Literal["E", "G", "L"]
Cmp = Literal["<=", ">=", "=="]
LPMethod = Literal["highs", "highs-ds", "highs-ipm"]
SparseStatus = Literal["solved", "unbounded", "infeasible", "invalid_input", "solver_error"]

SENSE_ALIASES: Dict[str, str] = {
    "E": "E",
    "G": "G",
    "L": "L",
    "==": "E",
    ">=": "G",
    "<=": "L",
}

STATUS_CODES: Dict[str, int] = {
    "solved": 1,
    "unbounded": 2,
    "infeasible": 0,
    "invalid_input": -1,
    "solver_error": -2,
}


def normalize_senses(tokens: List[str]) -> List[str]:
    """Map ``E/G/L`` (any case) and ``==/>=/<=`` onto ``E/G/L``."""
    senses = []
    for token in tokens:
        key = str(token).strip()
        if len(key) == 1:
            key = key.upper()
        if key not in SENSE_ALIASES:
            raise ValueError(f"Unknown constraint sense '{token}'.")
        senses.append(SENSE_ALIASES[key])
    return senses


class Variable(BaseModel):
    """A column of the constraint system; a ``None`` bound means the column is free on that side."""

    name: str
    lb: float | None = None
    ub: float | None = None


class LinearTerm(BaseModel):
    var: str
    coef: float


class LinearExpr(BaseModel):
    terms: List[LinearTerm] = Field(default_factory=list)
    constant: float = 0.0


class Constraint(BaseModel):
    name: str
    lhs: LinearExpr
    cmp: Cmp
    rhs: float


class SparseModel(BaseModel):
    """Named-variable feasibility set whose sparsest point is sought."""

    name: str = "problem"
    variables: List[Variable]
    constraints: List[Constraint]

    def variable_index(self) -> Dict[str, int]:
        return {var.name: idx for idx, var in enumerate(self.variables)}


class ConstraintSystem(BaseModel):
    """JSON form of ``A x {=,>=,<=} b, lb <= x <= ub``; every field may be omitted."""

    A: Optional[List[List[float]]] = None
    b: Optional[List[float]] = None
    lb: Optional[List[float]] = None
    ub: Optional[List[float]] = None
    csense: Optional[List[Sense]] = None

    @field_validator("csense", mode="before")
    @classmethod
    def _split_senses(cls, value: Any) -> Any:
        # accepts "EEL" as well as ["==", ">=", "l"]
        if isinstance(value, (str, list, tuple)):
            return normalize_senses(list(value))
        return value

    def to_linear_system(self):
        from .lp.utils import LinearConstraintSystem  # local import to avoid cycle

        return LinearConstraintSystem.from_arrays(
            A=self.A, b=self.b, lb=self.lb, ub=self.ub, csense=self.csense
        )


class SparseLPOptions(BaseModel):
    max_iterations: int = Field(default=1000, ge=0)
    epsilon: float = Field(default=1e-5, ge=0.0)
    theta: float = Field(default=0.5, gt=0.0)
    p: float = Field(default=-1.0, lt=0.0)
    lp_method: LPMethod = "highs"
    zero_tol: float = Field(default=1e-9, ge=0.0)


class SparseLPSolution(BaseModel):
    status: SparseStatus
    x: Optional[List[float]] = None
    objective_value: Optional[float] = None
    cardinality: Optional[int] = None
    elapsed_time: float = 0.0
    iterations: int = 0
    message: str = ""

    @property
    def code(self) -> int:
        return STATUS_CODES[self.status]


class SparseModelSolution(SparseLPSolution):
    values: Optional[Dict[str, float]] = None
