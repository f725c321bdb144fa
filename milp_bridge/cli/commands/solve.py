"""Solve command: run one LP file through the selected solver"""

import json
from pathlib import Path
from typing import Optional

import click

from ...exceptions import ConfigurationError
from ...utils.solution_format import SolveRequest, save_result
from ..utils import load_config, build_session


@click.command()
@click.argument("model_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--columns", "-n", type=int, required=True, help="Number of columns (variables) in the model")
@click.option("--block", type=int, default=1, show_default=True, help="Block number reported back")
@click.option("--round", "round_id", default="", help="Round identifier reported back")
@click.option("--timeout", "-t", type=float, default=None, help="Timeout in seconds (defaults from config)")
@click.option("--int-tol", type=float, default=None, help="Integer feasibility tolerance")
@click.option("--mip-gap", type=float, default=None, help="Relative MIP gap")
@click.option("--solver", "-s", help="Solver to use if installed (gurobi, mosek, cplex, scip, lp_solve)")
@click.option("--diagnose", is_flag=True, help="Ask the solver for infeasibility diagnostics")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the JSON result to this file")
@click.option("--config", "config_file", type=click.Path(exists=True), help="JSON configuration file")
@click.option("--solver-dir", type=click.Path(file_okay=False), help="Solver output directory (defaults from config)")
def solve(
    model_file: str,
    columns: int,
    block: int,
    round_id: str,
    timeout: Optional[float],
    int_tol: Optional[float],
    mip_gap: Optional[float],
    solver: Optional[str],
    diagnose: bool,
    output: Optional[str],
    config_file: Optional[str],
    solver_dir: Optional[str],
):
    """Solve the LP-format MODEL_FILE and print the normalized result."""
    try:
        cfg = load_config(config_file, solver_dir)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    session = build_session(cfg)

    request = SolveRequest(
        block_id=block,
        round_id=round_id,
        model_text=Path(model_file).read_text(encoding="utf-8"),
        column_count=columns,
        timeout_seconds=timeout,
        integer_tolerance=int_tol,
        mip_gap=mip_gap,
        diagnose=diagnose,
        solver_id=solver,
    )
    result = session.solve(request)

    if output:
        save_result(result, Path(output))
        click.echo(f"Result saved to {output}")
    else:
        click.echo(json.dumps(result.to_dict(), indent=2))
    if result.error:
        click.echo(f"Status {result.status}: {result.error}", err=True)
    if not result.solution:
        raise SystemExit(1)
