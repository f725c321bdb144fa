"""Adapter for lp_solve, found in the working directory"""

from pathlib import Path
from typing import Optional

from ..config import Config
from ..parsers import lpsolve_console
from ..parsers.base import ParsedOutput
from ..registry import adapters
from .base import SolverAdapter, SolverDescriptor, SolverPaths


@adapters.register("lp_solve")
class LpSolveAdapter(SolverAdapter):
    display_name = "LP_solve"
    executable = "lp_solve"
    # lp_solve takes the first bare argument as the model file and prints many
    # warnings, so it runs as one shell command with its output redirected
    shell = True
    args = (
        "-timeout {timeout}",
        "-v4",
        "-e {int_tol}",
        "-gr {mip_gap}",
        "-time",
        "-S4",
        "-wlp {solver_model}",
        "{user_model}",
        ">{solution}",
    )
    help_args = ("-h",)
    status_messages = {
        -2: "Out of memory",
        1: "The model is sub-optimal",
        2: "The model is infeasible",
        3: "The model is unbounded",
        4: "The model is degenerative",
        5: "Numerical failure encountered",
        6: "Solver was stopped by user",
        7: "Solver time limit exceeded",
        9: "The model could be solved by presolve",
        25: "Accuracy error encountered",
    }
    usable_statuses = frozenset({1, 9})

    def solver_paths(self, out_dir: Path) -> SolverPaths:
        output = out_dir / "output.txt"
        # Console output holds both the messages and the solution
        return SolverPaths(
            user_model=out_dir / "usr_model.lp",
            solver_model=out_dir / "solver_model.lp",
            solution=output,
            log=output,
        )

    def working_dir(self, config: Config) -> Optional[Path]:
        return Path(config.working_dir).resolve()

    def parse_output(
        self,
        descriptor: SolverDescriptor,
        exit_code: Optional[int],
        log_text: str,
    ) -> ParsedOutput:
        out = lpsolve_console.parse_output(log_text)
        if exit_code:
            # lp_solve still prints values for sub-optimal solutions
            out.success = False
            out.status = exit_code
        return out
