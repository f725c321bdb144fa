"""Adapter for the CPLEX interactive optimizer"""

from pathlib import Path
from typing import Optional

from ..config import Config
from ..exceptions import ArtifactError, SolverReportedFailure
from ..parsers import cplex_xml
from ..parsers.base import ParsedOutput
from ..registry import adapters
from .base import SolverAdapter, SolverDescriptor, SolverPaths, read_text


@adapters.register("cplex")
class CplexAdapter(SolverAdapter):
    display_name = "CPLEX"
    executable = "cplex"
    # CPLEX takes its commands as quoted strings and writes cplex.log to the
    # current directory, so it runs through the shell in the output directory
    shell = True
    args = (
        "-c",
        '"set logfile cplex.log"',
        '"read usr_model.lp"',
        '"write solver_model.lp"',
        '"set timelimit {timeout}"',
        '"set mip tolerances integrality {int_tol}"',
        '"set mip tolerances mipgap {mip_gap}"',
        '"optimize"',
        '"write model.sol"',
        '"quit"',
    )
    help_args = ("-c", '"quit"')
    status_messages = {
        1: "Optimal solution found",
        2: "The model is unbounded",
        3: "The model is infeasible",
        4: "The model is either infeasible or unbounded",
        10: "Halted -- Iteration limit exceeded",
        11: "Halted -- Solver time limit exceeded",
        101: "Optimal integer solution found",
        102: "Optimal integer solution within tolerance",
        103: "The model is integer infeasible",
        104: "Halted -- Solution limit reached",
        105: "Halted -- Node limit exceeded, integer solution exists",
        106: "Halted -- Node limit exceeded, no integer solution",
        107: "Halted -- Time limit exceeded, integer solution exists",
        108: "Halted -- Time limit exceeded, no integer solution",
        109: "Halted -- Error, integer solution exists",
        110: "Halted -- Error, no integer solution",
        111: "Halted -- Memory limit exceeded, integer solution exists",
        112: "Halted -- Memory limit exceeded, no integer solution",
        113: "Aborted -- integer solution exists",
        114: "Aborted -- no integer solution",
        118: "The model is unbounded",
        119: "The model is either infeasible or unbounded",
        1016: "Community Edition -- problem size limits exceeded",
        32201: "No valid CPLEX license found",
    }
    usable_statuses = frozenset({104, 105, 107, 109, 111, 113})

    def solver_paths(self, out_dir: Path) -> SolverPaths:
        return SolverPaths(
            user_model=out_dir / "usr_model.lp",
            solver_model=out_dir / "solver_model.lp",
            solution=out_dir / "model.sol",
            log=out_dir / "cplex.log",
            diagnosis=out_dir / "model.clp",
        )

    def working_dir(self, config: Config) -> Optional[Path]:
        return Path(config.solver_dir).resolve()

    def diagnose_args(self):
        # Inserted before "quit": refine and write the conflict
        return ('"conflict"', '"write model.clp"')

    def parse_output(
        self,
        descriptor: SolverDescriptor,
        exit_code: Optional[int],
        log_text: str,
    ) -> ParsedOutput:
        failure = cplex_xml.check_log(log_text)
        if failure:
            status, message = failure
            raise SolverReportedFailure(status, descriptor.status_message(status) or message)
        self.fail_on_exit(descriptor, exit_code)
        try:
            text = read_text(descriptor.paths.solution)
        except OSError as e:
            raise ArtifactError(f"Cannot read CPLEX solution file: {e}") from e
        out = cplex_xml.parse_solution(text)
        out.seconds = cplex_xml.parse_log_seconds(log_text)
        return out
