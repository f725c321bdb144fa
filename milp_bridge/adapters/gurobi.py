"""Adapter for the Gurobi command line tool (gurobi_cl)"""

from pathlib import Path
from typing import Optional

from ..exceptions import ArtifactError, SolverReportedFailure
from ..parsers import gurobi_json
from ..parsers.base import ParsedOutput
from ..registry import adapters
from .base import SolverAdapter, SolverDescriptor, SolverPaths, read_text

LICENSE_MESSAGE = "Your Gurobi license may have expired"


@adapters.register("gurobi")
class GurobiAdapter(SolverAdapter):
    display_name = "Gurobi"
    executable = "gurobi_cl"
    args = (
        "TimeLimit={timeout}",
        "IntFeasTol={int_tol}",
        "MIPGap={mip_gap}",
        "JSONSolDetail=1",
        "LogFile={log}",
        "ResultFile={solution}",
        "ResultFile={solver_model}",
        "{user_model}",
    )
    status_messages = {
        1: "Model loaded -- no further information",
        2: "Optimal solution found",
        3: "The model is infeasible",
        4: "The model is either unbounded or infeasible",
        5: "The model is unbounded",
        6: "Aborted -- Optimal objective is worse than specified cut-off",
        7: "Halted -- Iteration limit exceeded",
        8: "Halted -- Node limit exceeded",
        9: "Halted -- Solver time limit exceeded",
        10: "Halted -- Solution count limit exceeded",
        11: "Halted -- Optimization terminated by user",
        12: "Halted -- Unrecoverable numerical difficulties",
        13: "The model is sub-optimal",
        14: "Optimization still in progress",
        15: "User-specified objective limit has been reached",
    }
    # Halted runs keep their incumbent solution
    usable_statuses = frozenset({7, 8, 9, 10, 11, 13, 15})

    def solver_paths(self, out_dir: Path) -> SolverPaths:
        return SolverPaths(
            user_model=out_dir / "usr_model.lp",
            solver_model=out_dir / "solver_model.lp",
            solution=out_dir / "model.json",
            log=out_dir / "model.log",
            diagnosis=out_dir / "model.ilp",
        )

    def diagnose_args(self):
        # Gurobi computes an irreducible inconsistent subsystem for .ilp files
        return ("ResultFile={diagnosis}",)

    def parse_output(
        self,
        descriptor: SolverDescriptor,
        exit_code: Optional[int],
        log_text: str,
    ) -> ParsedOutput:
        if exit_code == 1 and "license" not in log_text.lower():
            raise SolverReportedFailure(exit_code, LICENSE_MESSAGE)
        # The JSON file decides; the exit code only explains a missing one
        try:
            text = read_text(descriptor.paths.solution)
        except OSError as e:
            self.fail_on_exit(descriptor, exit_code)
            raise ArtifactError(f"Cannot read Gurobi solution file: {e}") from e
        try:
            return gurobi_json.parse_solution(text)
        except ArtifactError:
            self.fail_on_exit(descriptor, exit_code)
            raise
