from __future__ import annotations

import logging
import os

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from .schemas import ConstraintSystem, SparseLPOptions, SparseModel
from .lp.diagnostics import analyze_infeasibility
from .sparse.lp_negative import solve_sparse_lp as _solve_sparse_lp
from .sparse.lp_negative import solve_sparse_model as _solve_sparse_model

logger = logging.getLogger(__name__)

app = FastMCP("Sparse LP")


@app.tool()
def solve_sparse_lp(constraint: ConstraintSystem, options: SparseLPOptions | None = None) -> dict:
    """Find a sparse x with A x {=,>=,<=} b and lb <= x <= ub (csense: E, G or L per row)."""
    return _solve_sparse_lp(constraint, options).model_dump()


@app.tool()
def solve_sparse_model(model: SparseModel, options: SparseLPOptions | None = None) -> dict:
    """Find a sparse assignment of named variables satisfying the model's constraints."""
    return _solve_sparse_model(model, options).model_dump()


@app.tool()
def diagnose_infeasibility(constraint: ConstraintSystem, row_names: list[str] | None = None) -> dict:
    """Return heuristic infeasibility analysis for the given constraint system."""
    return analyze_infeasibility(constraint, row_names=row_names)


def main() -> None:
    logging.basicConfig(
        level=os.environ.get("SPARSE_LP_LOG_LEVEL", "WARNING").upper(),
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    transport = os.environ.get("MCP_TRANSPORT", "stdio")

    if transport == "stdio":
        app.run(transport="stdio")
    else:
        port = int(os.environ.get("PORT", "8081"))
        logger.info("Serving streamable HTTP on port %d", port)
        app.settings.host = "0.0.0.0"
        app.settings.port = port
        app.settings.streamable_http_path = "/mcp"
        app.settings.transport_security = TransportSecuritySettings(
            enable_dns_rebinding_protection=False,
            allowed_hosts=["*"],
            allowed_origins=["*"],
        )
        app.run(transport="streamable-http")


if __name__ == "__main__":
    main()
