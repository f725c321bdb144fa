"""
Solver adapters and the catalogue of installed solvers.

`adapters` collects the adapter classes (registered with a decorator);
`SolverRegistry.scan()` looks for the executables on this machine and keeps
one descriptor per solver found.
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Dict, Type, List, Optional, Iterable, Tuple, TYPE_CHECKING

from .config import Config, get_config

if TYPE_CHECKING:
    from .adapters.base import SolverAdapter, SolverDescriptor

logger = logging.getLogger(__name__)

# Order in which a default solver is chosen
SOLVER_PRIORITY = ("gurobi", "mosek", "cplex", "scip", "lp_solve")

GUROBI_DIR_RE = re.compile(r"gurobi(\d+)", re.I)
CPLEX_DIR_RE = re.compile(r"[/\\]cplex[/\\]bin", re.I)
MOSEK_DIR_RE = re.compile(r"[/\\]mosek[/\\]", re.I)
SCIP_DIR_RE = re.compile(r"[/\\][^/\\]*scip[^/\\]*([/\\]|$)", re.I)

# On macOS and Unix, Gurobi installs its command line tool here
UNIX_FALLBACK_DIRS = {"gurobi": [Path("/usr/local/bin")]}


class AdapterRegistry:
    def __init__(self):
        self._adapters: Dict[str, Type["SolverAdapter"]] = {}

    def register(self, solver_id: str):
        def decorator(cls: Type["SolverAdapter"]):
            cls.id = solver_id
            self._adapters[solver_id] = cls
            return cls
        return decorator

    def get_adapter(self, solver_id: str) -> Optional["SolverAdapter"]:
        cls = self._adapters.get(solver_id)
        return cls() if cls else None

    def list_adapters(self) -> List[str]:
        return list(self._adapters.keys())


# Global adapter registry instance
adapters = AdapterRegistry()


def _ensure_adapters() -> None:
    import milp_bridge.adapters.unified_bridge  # noqa: F401


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


class SolverRegistry:
    """Catalogue `id -> SolverDescriptor` of the solvers installed locally"""

    def __init__(self, config: Optional[Config] = None, fallback_dirs=None):
        self.config = config or get_config()
        self.fallback_dirs = UNIX_FALLBACK_DIRS if fallback_dirs is None else fallback_dirs
        self._solvers: Dict[str, "SolverDescriptor"] = {}
        self.default_id: Optional[str] = None

    def __contains__(self, solver_id: object) -> bool:
        return solver_id in self._solvers

    def __len__(self) -> int:
        return len(self._solvers)

    def get(self, solver_id: Optional[str]) -> Optional["SolverDescriptor"]:
        if not solver_id:
            return None
        return self._solvers.get(solver_id.lower())

    def ids(self) -> List[str]:
        return [s for s in SOLVER_PRIORITY if s in self._solvers] + \
            [s for s in self._solvers if s not in SOLVER_PRIORITY]

    def list_solvers(self) -> List["SolverDescriptor"]:
        return [self._solvers[s] for s in self.ids()]

    def register(self, descriptor: "SolverDescriptor") -> None:
        """Add a descriptor built elsewhere (e.g. for a solver at a known path)"""
        self._solvers[descriptor.id] = descriptor
        if self.default_id is None:
            self.default_id = descriptor.id

    def scan(
        self,
        path_env: Optional[str] = None,
        platform: Optional[str] = None,
        working_dir: Optional[Path] = None,
    ) -> Dict[str, "SolverDescriptor"]:
        """
        Look for solver executables and rebuild the catalogue.

        Args:
            path_env: Value of PATH to inspect (defaults to the environment)
            platform: Platform name as in sys.platform
            working_dir: Directory where lp_solve is expected

        Returns:
            The catalogue of detected solvers
        """
        _ensure_adapters()
        platform = platform or sys.platform
        if path_env is None:
            path_env = os.environ.get("PATH", "")
        working_dir = Path(working_dir) if working_dir else Path(self.config.working_dir)

        entries = [e for e in path_env.split(os.pathsep) if e]
        entries += [str(p) for p in self.config.extra_paths]

        self._solvers = {}
        self.default_id = None
        for solver_id, dirs in self._candidate_dirs(entries, platform).items():
            # First directory that holds a usable executable wins
            for directory in dirs:
                if self._add(solver_id, Path(directory), platform):
                    break

        # lp_solve is not on the PATH but next to the host application
        self._add("lp_solve", working_dir, platform)

        self.select_default(self.config.preferred_solver)
        return dict(self._solvers)

    def _candidate_dirs(self, entries: Iterable[str], platform: str) -> Dict[str, List[str]]:
        """Directories that may hold each solver, most promising first"""
        found: Dict[str, List[str]] = {}
        gurobi: List[Tuple[int, str]] = []
        for entry in entries:
            m = GUROBI_DIR_RE.search(entry)
            if m:
                gurobi.append((int(m.group(1)), entry))
            if CPLEX_DIR_RE.search(entry):
                found.setdefault("cplex", []).append(entry)
            elif MOSEK_DIR_RE.search(entry):
                found.setdefault("mosek", []).append(entry)
            elif SCIP_DIR_RE.search(entry):
                found.setdefault("scip", []).append(entry)
        if gurobi:
            # Highest version first; sort is stable for equal versions
            found["gurobi"] = [e for _, e in sorted(gurobi, key=lambda v: -v[0])]
        if not platform.startswith("win"):
            for solver_id, dirs in self.fallback_dirs.items():
                found.setdefault(solver_id, []).extend(str(d) for d in dirs)
        return found

    def _add(self, solver_id: str, directory: Path, platform: str) -> bool:
        adapter = adapters.get_adapter(solver_id)
        if adapter is None:
            return False
        exe = directory / adapter.executable_name(platform)
        if not _is_executable(exe):
            logger.warning("%s not found or not executable: %s", adapter.display_name, exe)
            return False
        logger.info("Path to %s: %s", adapter.display_name, exe)
        self._solvers[solver_id] = adapter.describe(exe, self.config)
        return True

    def select_default(self, preferred: Optional[str] = None) -> Optional[str]:
        """Pick the default solver; a preference wins only if it was detected"""
        best = next((s for s in SOLVER_PRIORITY if s in self._solvers), None)
        if best is None and self._solvers:
            best = next(iter(self._solvers))
        if preferred:
            preferred = preferred.lower()
            if preferred in self._solvers:
                best = preferred
            else:
                logger.warning("Preferred solver %r not found; using %r", preferred, best)
        self.default_id = best
        if best:
            logger.info("Selected solver: %s", self._solvers[best].display_name)
        else:
            logger.warning("No MILP solver found")
        return best
