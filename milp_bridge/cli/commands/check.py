"""Check that a solver executable can be started"""

from typing import Optional

import click

from ...exceptions import MilpBridgeException
from ..utils import load_config, build_session, require_solver


@click.command()
@click.option("--solver", "-s", help="Solver to check (defaults to the selected solver)")
@click.option("--config", "config_file", type=click.Path(exists=True), help="JSON configuration file")
def check(solver: Optional[str], config_file: Optional[str]):
    """Run the solver once without a model to see whether it works."""
    try:
        cfg = load_config(config_file)
        session = build_session(cfg)
        descriptor = require_solver(session, solver)
    except MilpBridgeException as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(f"Checking {descriptor.display_name} at {descriptor.executable_path}")
    if session.runner.probe(descriptor):
        click.echo("Solver is working")
    else:
        click.echo(f"Error: {descriptor.display_name} did not start cleanly", err=True)
        if descriptor.id == "gurobi":
            click.echo("Note: your Gurobi license may have expired", err=True)
        raise SystemExit(1)
