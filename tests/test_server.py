import json

import pytest

from sparse_lp import server
from sparse_lp.schemas import ConstraintSystem, SparseLPOptions


def make_constraint() -> ConstraintSystem:
    return ConstraintSystem(A=[[1.0, 1.0]], b=[1.0], lb=[0.0, 0.0], ub=[1.0, 1.0], csense=["E"])


def test_solve_tool_returns_json_ready_dict():
    result = server.solve_sparse_lp(make_constraint(), SparseLPOptions(max_iterations=50))

    assert result["status"] == "solved"
    assert len(result["x"]) == 2
    json.dumps(result)


def test_solve_tool_reports_invalid_input():
    result = server.solve_sparse_lp(ConstraintSystem(b=[1.0]))

    assert result["status"] == "invalid_input"
    assert result["x"] is None


def test_diagnose_tool():
    constraint = ConstraintSystem(
        A=[[1.0], [1.0]], b=[1.0, 3.0], lb=[0.0], ub=[10.0], csense=["L", "G"]
    )
    report = server.diagnose_infeasibility(constraint, row_names=["cap", "floor"])

    assert report["status"] == "infeasible"
    assert report["conflicting_rows"] == ["cap", "floor"]


def test_solve_tool_accepts_sense_string():
    constraint = ConstraintSystem(A=[[1.0, 1.0], [1.0, 0.0]], b=[1.0, 1.0], lb=[0.0, 0.0], ub=[1.0, 1.0], csense="EL")
    result = server.solve_sparse_lp(constraint, SparseLPOptions(max_iterations=50))

    assert result["status"] == "solved"
    assert sum(result["x"]) == pytest.approx(1.0, abs=1e-7)
