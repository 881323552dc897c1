#!/usr/bin/env python3
import time

import numpy as np

from sparse_lp import SparseLPOptions, solve_sparse_lp
from scripts.generate_instances import generate_sparse_recovery


def main() -> None:
    opts = SparseLPOptions()
    cases = []
    for seed in range(3):
        cases.append((f"recovery-10x30-{seed}", *generate_sparse_recovery(10, 30, 3, seed)))
    for seed in range(2):
        cases.append((f"recovery-40x120-{seed}", *generate_sparse_recovery(40, 120, 8, seed)))

    print("name,status,cardinality,planted,iterations,time_ms")
    for name, system, x_true in cases:
        start = time.perf_counter()
        solution = solve_sparse_lp(system, opts)
        elapsed_ms = (time.perf_counter() - start) * 1000
        print(
            f"{name},{solution.status},{solution.cardinality},{np.count_nonzero(x_true)},"
            f"{solution.iterations},{elapsed_ms:.2f}"
        )


if __name__ == "__main__":
    main()
