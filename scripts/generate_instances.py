#!/usr/bin/env python3
import argparse
import json
from pathlib import Path
from typing import Optional, Tuple

import numpy as np

from sparse_lp.schemas import ConstraintSystem


def generate_sparse_recovery(
    num_rows: int,
    num_cols: int,
    nonzeros: int,
    seed: Optional[int] = None,
    bound: float = 10.0,
) -> Tuple[ConstraintSystem, np.ndarray]:
    """Random Gaussian ``A`` with ``b = A x_true`` for a ``nonzeros``-sparse ``x_true``."""
    rng = np.random.default_rng(seed)
    A = rng.standard_normal((num_rows, num_cols))
    x_true = np.zeros(num_cols)
    support = rng.choice(num_cols, size=min(nonzeros, num_cols), replace=False)
    magnitudes = rng.uniform(1.0, bound / 2.0, size=support.shape[0])
    x_true[support] = magnitudes * rng.choice([-1.0, 1.0], size=support.shape[0])
    system = ConstraintSystem(
        A=A.tolist(),
        b=(A @ x_true).tolist(),
        lb=[-bound] * num_cols,
        ub=[bound] * num_cols,
        csense=["E"] * num_rows,
    )
    return system, x_true


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate random sparse-recovery instances.")
    parser.add_argument("--rows", type=int, default=5, help="Number of equality rows")
    parser.add_argument("--cols", type=int, default=12, help="Number of variables")
    parser.add_argument("--nonzeros", type=int, default=2, help="Support size of the planted solution")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--count", type=int, default=1, help="Number of instances")
    parser.add_argument("--out", type=Path, default=None, help="Optional output file")
    args = parser.parse_args()

    payload = []
    for idx in range(args.count):
        system, x_true = generate_sparse_recovery(
            args.rows, args.cols, args.nonzeros, (args.seed or 0) + idx
        )
        payload.append({"constraint": system.model_dump(), "x_true": x_true.tolist()})

    if args.out:
        Path(args.out).write_text(json.dumps(payload, indent=2))
    else:
        print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
