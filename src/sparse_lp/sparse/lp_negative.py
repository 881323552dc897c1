"""
DC programming for the sparse LP ``min ||x||_0`` subject to linear constraints.

The ``l0`` norm is approximated by the concave surrogate
``sum_i 1 - (1 + theta * |x_i|)^p`` with ``p < 0``. Each DCA step linearizes
the surrogate at the current point and solves one LP over ``(x, t)`` with
``t >= |x|``; ``theta`` grows geometrically so the surrogate sharpens towards
the true cardinality.

References:
    - Le Thi, Pham Dinh, Le, Vo, *DC approximation approaches for sparse
      optimization*, European Journal of Operational Research, 2015.
      http://dx.doi.org/10.1016/j.ejor.2014.11.031
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable, Mapping, Optional

import numpy as np

from ..lp.highs import LinearProgram, LPResult, solve_lp
from ..lp.utils import as_constraint_system, build_augmented_lp, system_from_model
from ..schemas import SparseLPOptions, SparseLPSolution, SparseModel, SparseModelSolution

logger = logging.getLogger(__name__)

THETA_GROWTH = 1.5
THETA_CAP = 1000.0

LPSolver = Callable[[LinearProgram], LPResult]
IterationCallback = Callable[[int, np.ndarray, float], Optional[bool]]


def surrogate_gradient(x: np.ndarray, theta: float, p: float) -> np.ndarray:
    """Subgradient of the second DC component: ``-p theta sign(x) (1 - (1 + theta|x|)^(p-1))``."""
    x = np.asarray(x, dtype=float)
    # (1 + theta|x|)^(p-1) via log1p; p - 1 < 0 so this only ever underflows.
    power = np.exp((p - 1.0) * np.log1p(theta * np.abs(x)))
    return -p * theta * np.sign(x) * (1.0 - power)


def surrogate_objective(x: np.ndarray, theta: float, p: float) -> float:
    """Smoothed cardinality ``sum_i 1 - (1 + theta|x_i|)^p``."""
    x = np.asarray(x, dtype=float)
    return float(np.sum(-np.expm1(p * np.log1p(theta * np.abs(x)))))


def solve_sparse_lp(
    constraint: Any,
    options: SparseLPOptions | Mapping[str, Any] | None = None,
    *,
    lp_solver: Optional[LPSolver] = None,
    clock: Callable[[], float] = time.perf_counter,
    callback: Optional[IterationCallback] = None,
) -> SparseLPSolution:
    """
    Approximate the sparsest ``x`` with ``A x {=,>=,<=} b`` and ``lb <= x <= ub``.

    ``constraint`` is a ``LinearConstraintSystem``, a ``ConstraintSystem`` or a
    mapping with keys ``A, b, lb, ub, csense``. Failures are reported through
    ``status``; ``x`` is only set when the status is ``"solved"``.
    ``callback(iteration, x, objective)`` runs after every solved step and
    stops the loop when it returns a truthy value.
    """

    try:
        if isinstance(options, SparseLPOptions):
            opts = options
        else:
            opts = SparseLPOptions.model_validate(options or {})
        system = as_constraint_system(constraint)
        system.validate()
    except ValueError as exc:
        logger.warning("Invalid sparse LP input: %s", exc)
        return SparseLPSolution(status="invalid_input", message=str(exc))

    solver = lp_solver or functools.partial(solve_lp, method=opts.lp_method)
    _, n = system.shape
    theta, p, epsilon = opts.theta, opts.p, opts.epsilon

    x = np.zeros(n)
    obj_old = surrogate_objective(x, theta, p)
    obj_new = obj_old
    augmented = build_augmented_lp(system, theta)
    t_weights = np.ones(n)

    iterations = 0
    stop = False
    start = clock()
    while iterations < opts.max_iterations and not stop:
        x_old = x

        x_bar = surrogate_gradient(x, theta, p)
        program = augmented.with_objective(np.concatenate([-x_bar, (-p * theta) * t_weights]))
        result = solver(program)

        if result.status != "optimal":
            elapsed = clock() - start
            status = result.status if result.status in ("infeasible", "unbounded") else "solver_error"
            logger.info("Sparse LP stopped at iteration %d: sub-problem %s", iterations, result.status)
            return SparseLPSolution(
                status=status,
                elapsed_time=elapsed,
                iterations=iterations,
                message=result.message or f"Sub-problem {result.status}.",
            )

        x = np.asarray(result.x, dtype=float)[:n]

        error_x = float(np.linalg.norm(x - x_old))
        obj_new = surrogate_objective(x, theta, p)
        error_obj = abs(obj_new - obj_old)
        if error_x < epsilon or error_obj < epsilon:
            stop = True
        else:
            obj_old = obj_new

        if theta < THETA_CAP:
            theta *= THETA_GROWTH
        iterations += 1
        logger.debug(
            "DCA iteration %d: objective %.6g, stopping error %.3g",
            iterations,
            obj_new,
            min(error_x, error_obj),
        )

        if callback is not None and callback(iterations, x.copy(), obj_new):
            stop = True

    elapsed = clock() - start
    cardinality = int(np.count_nonzero(np.abs(x) > opts.zero_tol))
    logger.info(
        "Sparse LP solved in %d iterations (%.3fs), %d of %d entries nonzero",
        iterations,
        elapsed,
        cardinality,
        n,
    )
    return SparseLPSolution(
        status="solved",
        x=[float(value) + 0.0 for value in x],
        objective_value=obj_new,
        cardinality=cardinality,
        elapsed_time=elapsed,
        iterations=iterations,
    )


def solve_sparse_model(
    model: SparseModel,
    options: SparseLPOptions | Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> SparseModelSolution:
    """Named-variable front end for ``solve_sparse_lp``."""
    try:
        system, columns, _ = system_from_model(model)
    except ValueError as exc:
        return SparseModelSolution(status="invalid_input", message=str(exc))

    solution = solve_sparse_lp(system, options, **kwargs)
    values = None
    if solution.x is not None:
        values = {name: value for name, value in zip(columns, solution.x)}
    return SparseModelSolution(**solution.model_dump(), values=values)
