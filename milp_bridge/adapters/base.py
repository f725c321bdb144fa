"""Base interface shared by all solver adapters"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

from ..config import Config
from ..exceptions import SolverReportedFailure
from ..parsers.base import ParsedOutput
from ..utils.solution_format import STATUS_ERROR


@dataclass(frozen=True)
class SolverPaths:
    """On-disk artifacts of one solver"""
    user_model: Path
    solver_model: Path
    solution: Path
    log: Path
    # Second place to look for the solution when `solution` is absent
    alt_solution: Optional[Path] = None
    # Extra output written in diagnose mode
    diagnosis: Optional[Path] = None

    def artifacts(self) -> List[Path]:
        """Output files that must not survive from a previous run"""
        paths = [self.log, self.solution, self.alt_solution, self.solver_model, self.diagnosis]
        return [p for p in paths if p is not None]


@dataclass(frozen=True)
class Tolerances:
    """Validated per-call solver settings"""
    timeout: int
    int_tol: float
    mip_gap: float


@dataclass
class Invocation:
    """A constructed solver command: argument vector or shell string"""
    args: Union[List[str], str]
    shell: bool = False
    cwd: Optional[Path] = None
    stdout_path: Optional[Path] = None

    @property
    def command_line(self) -> str:
        if isinstance(self.args, str):
            return self.args
        return " ".join(_quote(a) for a in self.args)


@dataclass(frozen=True)
class SolverDescriptor:
    """Everything needed to run one detected solver"""
    id: str
    display_name: str
    executable_path: Path
    model_ext: str
    paths: SolverPaths
    arg_template: Tuple[str, ...]
    adapter: "SolverAdapter" = field(compare=False, repr=False)
    status_messages: Mapping[int, str] = field(default_factory=dict)
    usable_statuses: FrozenSet[int] = frozenset()
    shell: bool = False
    cwd: Optional[Path] = None
    log_stdout: bool = False

    def status_message(self, status: int) -> Optional[str]:
        return self.status_messages.get(status)

    def is_usable(self, status: int) -> bool:
        """Whether a solution reported with this status may still be used"""
        return status in self.usable_statuses


def _quote(value: str) -> str:
    if value and not any(c in value for c in ' \t"'):
        return value
    return '"' + value.replace('"', '\\"') + '"'


def _number(value: float) -> str:
    return format(value, "g")


class SolverAdapter(ABC):
    """
    Abstract base class for the per-solver adapters.

    An adapter knows how a solver is called and how its output is read.
    Subclasses set the class attributes and implement `solver_paths` and
    `parse_output`.
    """

    id: str = ""
    display_name: str = ""
    executable: str = ""
    model_ext: str = ".lp"
    # Arguments after the executable; placeholders are filled per call
    args: Tuple[str, ...] = ()
    help_args: Tuple[str, ...] = ()
    shell: bool = False
    log_stdout: bool = False
    status_messages: Dict[int, str] = {}
    usable_statuses: FrozenSet[int] = frozenset()

    def executable_name(self, platform: str) -> str:
        return self.executable + (".exe" if platform.startswith("win") else "")

    @abstractmethod
    def solver_paths(self, out_dir: Path) -> SolverPaths:
        """Artifact paths under the solver output directory."""
        pass

    def working_dir(self, config: Config) -> Optional[Path]:
        return None

    def describe(self, executable_path: Path, config: Config) -> SolverDescriptor:
        """Build the immutable descriptor for a detected executable"""
        out_dir = Path(config.solver_dir).resolve()
        override = config.usable_statuses.get(self.id)
        usable = frozenset(override) if override is not None else frozenset(self.usable_statuses)
        return SolverDescriptor(
            id=self.id,
            display_name=self.display_name,
            executable_path=Path(executable_path),
            model_ext=self.model_ext,
            paths=self.solver_paths(out_dir),
            arg_template=tuple(self.args),
            adapter=self,
            status_messages=MappingProxyType(dict(self.status_messages)),
            usable_statuses=usable,
            shell=self.shell,
            cwd=self.working_dir(config),
            log_stdout=self.log_stdout,
        )

    def placeholders(self, descriptor: SolverDescriptor, tolerances: Tolerances) -> Dict[str, str]:
        p = descriptor.paths
        values = {
            "timeout": str(tolerances.timeout),
            "int_tol": _number(tolerances.int_tol),
            "mip_gap": _number(tolerances.mip_gap),
            "user_model": str(p.user_model),
            "solver_model": str(p.solver_model),
            "solution": str(p.solution),
            "log": str(p.log),
            "diagnosis": str(p.diagnosis or ""),
        }
        if descriptor.shell:
            values = {k: (_quote(v) if k in ("user_model", "solver_model", "solution", "log", "diagnosis") else v)
                      for k, v in values.items()}
        return values

    def diagnose_args(self) -> Tuple[str, ...]:
        """Arguments inserted before the model file in diagnose mode"""
        return ()

    def build_invocation(
        self,
        descriptor: SolverDescriptor,
        tolerances: Tolerances,
        diagnose: bool = False,
    ) -> Invocation:
        values = self.placeholders(descriptor, tolerances)
        template = list(descriptor.arg_template)
        if diagnose and self.diagnose_args():
            template[-1:-1] = self.diagnose_args()
        args = [a.format(**values) for a in template]
        if descriptor.shell:
            command = " ".join([_quote(str(descriptor.executable_path))] + args)
            return Invocation(args=command, shell=True, cwd=descriptor.cwd)
        return Invocation(
            args=[str(descriptor.executable_path)] + args,
            cwd=descriptor.cwd,
            stdout_path=descriptor.paths.log if descriptor.log_stdout else None,
        )

    def probe_invocation(self, descriptor: SolverDescriptor) -> Invocation:
        if descriptor.shell:
            command = " ".join([_quote(str(descriptor.executable_path))] + list(self.help_args))
            return Invocation(args=command, shell=True, cwd=descriptor.cwd)
        return Invocation(args=[str(descriptor.executable_path)] + list(self.help_args))

    def fail_on_exit(self, descriptor: SolverDescriptor, exit_code: Optional[int]) -> None:
        """Raise for a non-zero exit code, mapped through the status table"""
        if not exit_code:
            return
        message = descriptor.status_message(exit_code)
        if message:
            raise SolverReportedFailure(exit_code, message)
        raise SolverReportedFailure(STATUS_ERROR, f"ERROR: Unknown error (exit code {exit_code})")

    @abstractmethod
    def parse_output(
        self,
        descriptor: SolverDescriptor,
        exit_code: Optional[int],
        log_text: str,
    ) -> ParsedOutput:
        """Read the solver's solution artifacts into a ParsedOutput."""
        pass


def read_text(path: Path) -> str:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()
