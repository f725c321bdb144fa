"""Adapter for the MOSEK command line tool"""

from pathlib import Path
from typing import Optional

from ..exceptions import ArtifactError
from ..parsers import mosek_text
from ..parsers.base import ParsedOutput
from ..registry import adapters
from .base import SolverAdapter, SolverDescriptor, SolverPaths, read_text


@adapters.register("mosek")
class MosekAdapter(SolverAdapter):
    display_name = "MOSEK"
    executable = "mosek"
    args = (
        "-d", "MSK_DPAR_OPTIMIZER_MAX_TIME", "{timeout}",
        "-d", "MSK_DPAR_MIO_TOL_ABS_RELAX_INT", "{int_tol}",
        "-d", "MSK_DPAR_MIO_TOL_REL_GAP", "{mip_gap}",
        "-out", "{solver_model}",
        "{user_model}",
    )
    help_args = ("-v",)
    # The console output is the log
    log_stdout = True
    status_messages = {
        # Solution status (MSK_SOL_STA_*)
        2: "The solution is feasible but not proven optimal",
        3: "Only a dual feasible solution was found",
        4: "The solution is feasible but not proven optimal",
        5: "The model is infeasible",
        6: "The model is unbounded",
        7: "The model is ill-posed (primal)",
        8: "The model is ill-posed (dual)",
        # Response codes returned as exit status
        1001: "Your MOSEK license has expired",
        1008: "MOSEK license file not found",
        1010: "MOSEK license is not valid for this problem size",
        1016: "No MOSEK license available (all licenses in use)",
        1020: "MOSEK license server cannot be contacted",
        1050: "Out of memory",
        1051: "Out of memory",
        10000: "Halted -- Iteration limit exceeded",
        10001: "Halted -- Solver time limit exceeded",
        10006: "Halted -- Solver stalled",
        10007: "Optimization terminated by user",
        10008: "Halted -- Relaxation limit exceeded",
        10009: "Halted -- Branch limit exceeded",
        10015: "Halted -- Integer solution limit exceeded",
        10025: "Halted -- Numerical problems",
        10030: "Halted -- Internal error",
    }
    usable_statuses = frozenset({2, 4})

    def solver_paths(self, out_dir: Path) -> SolverPaths:
        return SolverPaths(
            user_model=out_dir / "usr_model.lp",
            solver_model=out_dir / "solver_model.lp",
            solution=out_dir / "usr_model.int",
            alt_solution=out_dir / "usr_model.bas",
            log=out_dir / "mosek.log",
        )

    def parse_output(
        self,
        descriptor: SolverDescriptor,
        exit_code: Optional[int],
        log_text: str,
    ) -> ParsedOutput:
        paths = descriptor.paths
        # MOSEK writes a .int file for integer problems, else a basic solution
        solution = paths.solution if paths.solution.exists() else paths.alt_solution
        if solution is None or not solution.exists():
            self.fail_on_exit(descriptor, exit_code)
            raise ArtifactError("No MOSEK solution file found")
        try:
            text = read_text(solution)
        except OSError as e:
            raise ArtifactError(f"Cannot read MOSEK solution file: {e}") from e
        out = mosek_text.parse_solution(text)
        out.seconds = mosek_text.parse_log_seconds(log_text)
        return out
