"""Adapter for the SCIP command line tool"""

from pathlib import Path
from typing import Optional

from ..exceptions import ArtifactError
from ..parsers import scip_log
from ..parsers.base import ParsedOutput
from ..registry import adapters
from .base import SolverAdapter, SolverDescriptor, SolverPaths, read_text


@adapters.register("scip")
class ScipAdapter(SolverAdapter):
    display_name = "SCIP"
    executable = "scip"
    args = (
        "-q",
        "-l", "{log}",
        "-c", "set limits time {timeout}",
        "-c", "set numerics feastol {int_tol}",
        "-c", "set limits gap {mip_gap}",
        "-c", "read {user_model}",
        "-c", "write problem {solver_model}",
        "-c", "optimize",
        "-c", "write solution {solution}",
        "-c", "quit",
    )
    help_args = ("--version",)
    status_messages = {
        1: "Optimization terminated by user",
        2: "Halted -- Node limit exceeded",
        3: "Halted -- Total node limit exceeded",
        4: "Halted -- Stall node limit exceeded",
        5: "Halted -- Solver time limit exceeded",
        6: "Halted -- Memory limit exceeded",
        7: "Halted -- Gap limit reached",
        8: "Halted -- Solution limit reached",
        9: "Halted -- Solution improvement limit reached",
        10: "Halted -- Restart limit reached",
        11: "Optimal solution found",
        12: "The model is infeasible",
        13: "The model is unbounded",
        14: "The model is either infeasible or unbounded",
        15: "Optimization terminated by signal",
    }
    usable_statuses = frozenset({5, 7, 8, 9})

    def solver_paths(self, out_dir: Path) -> SolverPaths:
        return SolverPaths(
            user_model=out_dir / "usr_model.lp",
            solver_model=out_dir / "solver_model.lp",
            solution=out_dir / "model.sol",
            log=out_dir / "model.log",
        )

    def parse_output(
        self,
        descriptor: SolverDescriptor,
        exit_code: Optional[int],
        log_text: str,
    ) -> ParsedOutput:
        self.fail_on_exit(descriptor, exit_code)
        out = scip_log.parse_log(log_text)
        if not out.status_text:
            raise ArtifactError("SCIP log has no status line")
        if out.success:
            return scip_log.parse_solution(self._read_solution(descriptor), out)
        if descriptor.is_usable(out.status):
            # A limit was hit; the solution file may still hold an incumbent
            try:
                return scip_log.parse_solution(self._read_solution(descriptor), out)
            except ArtifactError:
                return out
        return out

    def _read_solution(self, descriptor: SolverDescriptor) -> str:
        try:
            return read_text(descriptor.paths.solution)
        except OSError as e:
            raise ArtifactError(f"Cannot read SCIP solution file: {e}") from e
