"""List the MILP solvers detected on this machine"""

from typing import Optional

import click

from ...exceptions import ConfigurationError
from ..utils import load_config, build_session


@click.command(name="list-solvers")
@click.option("--verbose", "-v", is_flag=True, help="Show executable and output files")
@click.option("--config", "config_file", type=click.Path(exists=True), help="JSON configuration file")
def list_solvers(verbose: bool, config_file: Optional[str]):
    """List installed solvers; the default one is marked with *."""
    try:
        cfg = load_config(config_file)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    session = build_session(cfg)
    descriptors = session.registry.list_solvers()

    click.echo("=== MILP Solvers ===")
    if not descriptors:
        click.echo("  (none)")
        return
    for d in descriptors:
        mark = "*" if d.id == session.solver_id else " "
        click.echo(f"{mark} {d.id} - {d.display_name}")
        if verbose:
            click.echo(f"      Executable: {d.executable_path}")
            click.echo(f"      Solution file: {d.paths.solution}")
            click.echo(f"      Log file: {d.paths.log}")
            click.echo(f"      Invocation: {'shell command' if d.shell else 'argument vector'}")
