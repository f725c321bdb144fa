"""Main CLI entry point (modular)"""

import click

from .commands import solve as solve_cmd
from .commands import list_solvers as list_solvers_cmd
from .commands import check as check_cmd


@click.group()
@click.version_option(version="0.1.0")
def cli():
    """Hand LP models to a locally installed MILP solver"""
    pass


# Register modular commands
cli.add_command(solve_cmd.solve)
cli.add_command(list_solvers_cmd.list_solvers)
cli.add_command(check_cmd.check)


if __name__ == "__main__":
    cli()
