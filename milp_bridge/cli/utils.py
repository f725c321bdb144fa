"""CLI utilities shared by the commands"""

from pathlib import Path
from typing import Optional

from ..adapters.base import SolverDescriptor
from ..config import Config, get_config
from ..exceptions import SolverNotFoundError
from ..registry import SolverRegistry
from ..session import SolverSession
from ..utils.log import configure_logging


def load_config(config_file: Optional[str] = None, solver_dir: Optional[str] = None) -> Config:
    cfg = Config.from_file(Path(config_file)) if config_file else get_config()
    if solver_dir:
        cfg.solver_dir = Path(solver_dir)
    configure_logging(cfg.log_level, cfg.log_file)
    return cfg


def build_session(cfg: Config) -> SolverSession:
    """Scan for solvers and open a session on the default one"""
    registry = SolverRegistry(cfg)
    registry.scan()
    return SolverSession(registry, cfg)


def require_solver(session: SolverSession, solver_id: Optional[str] = None) -> SolverDescriptor:
    """Descriptor of `solver_id` (or the session's solver); raises if not installed"""
    if solver_id:
        descriptor = session.registry.get(solver_id)
        if descriptor is None:
            raise SolverNotFoundError(f"Solver '{solver_id}' is not installed")
        return descriptor
    descriptor = session.descriptor
    if descriptor is None:
        raise SolverNotFoundError("No MILP solver")
    return descriptor
