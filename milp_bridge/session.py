"""
Solver session: one active solver plus validated per-call tolerances.

A session owns the solver output directory of its configuration for the
duration of a call. Sessions that must run at the same time need their own
`Config.solver_dir`.
"""

import logging
import math
from typing import Optional

from .adapters.base import SolverDescriptor, Tolerances
from .config import Config, get_config
from .exceptions import MilpBridgeException
from .normalizer import ResultNormalizer
from .registry import SolverRegistry
from .runner import ProcessRunner
from .state import SolveState
from .utils.error_handling import fold_errors
from .utils.solution_format import (
    SolveRequest,
    SolveResult,
    STATUS_NO_SOLVER,
    MSG_NO_SOLVER,
)

logger = logging.getLogger(__name__)

INT_TOL_RANGE = (1e-9, 0.1)
MIP_GAP_RANGE = (0.0, 0.5)


def _clamp(value: Optional[float], default: float, low: float, high: float) -> float:
    if value is None or not math.isfinite(value):
        return default
    return min(max(value, low), high)


def validate_tolerances(request: SolveRequest, config: Config) -> Tolerances:
    """Apply defaults and limits to the request's timeout and tolerances"""
    timeout = request.timeout_seconds
    if timeout is None or not math.isfinite(timeout) or timeout <= 0:
        timeout = config.default_timeout
    return Tolerances(
        timeout=int(math.ceil(timeout)),
        int_tol=_clamp(request.integer_tolerance, config.default_int_tolerance, *INT_TOL_RANGE),
        mip_gap=_clamp(request.mip_gap, config.default_mip_gap, *MIP_GAP_RANGE),
    )


class SolverSession:
    def __init__(
        self,
        registry: SolverRegistry,
        config: Optional[Config] = None,
        solver_id: Optional[str] = None,
        runner: Optional[ProcessRunner] = None,
        normalizer: Optional[ResultNormalizer] = None,
    ):
        self.registry = registry
        self.config = config or registry.config or get_config()
        self.solver_id: Optional[str] = None
        self.runner = runner or ProcessRunner()
        self.normalizer = normalizer or ResultNormalizer()
        self.near_zero = self.config.default_int_tolerance
        self.state = SolveState.IDLE
        self.select_solver(solver_id or registry.default_id)

    def advance(self, state: SolveState) -> None:
        logger.debug("%s -> %s", self.state.value, state.value)
        self.state = state

    def select_solver(self, solver_id: Optional[str]) -> bool:
        """Make `solver_id` the current solver if it is registered"""
        if solver_id and solver_id.lower() in self.registry:
            self.solver_id = solver_id.lower()
            return True
        if solver_id:
            logger.warning("Unknown solver %r; keeping %r", solver_id, self.solver_id)
        return False

    def resolve(self, solver_id: Optional[str] = None) -> Optional[SolverDescriptor]:
        """Descriptor for this call: the override if registered, else the current solver"""
        if solver_id:
            descriptor = self.registry.get(solver_id)
            if descriptor is not None:
                return descriptor
            logger.warning("Solver %r is not available; using %r", solver_id, self.solver_id)
        return self.registry.get(self.solver_id)

    @property
    def descriptor(self) -> Optional[SolverDescriptor]:
        return self.registry.get(self.solver_id)

    def solve(self, request: SolveRequest) -> SolveResult:
        """Write the model, run the solver and return the normalized result."""
        self.advance(SolveState.VALIDATING)
        tolerances = validate_tolerances(request, self.config)
        self.near_zero = tolerances.int_tol

        descriptor = self.resolve(request.solver_id)
        if descriptor is None:
            self.advance(SolveState.NO_SOLVER)
            result = SolveResult.empty(request)
            result.status = STATUS_NO_SOLVER
            result.error = MSG_NO_SOLVER
            return result

        logger.info("Solve block %s %s with %s", request.block_id, request.round_id, descriptor.display_name)
        result = SolveResult.empty(request)
        with fold_errors(result):
            self.advance(SolveState.WRITING_MODEL)
            self._prepare(descriptor, request)
            self.advance(SolveState.SPAWNING)
            outcome = self.runner.run(
                descriptor, request, tolerances,
                on_started=lambda: self.advance(SolveState.SOLVER_RUNNING),
            )
            result = self.normalizer.parse(descriptor, self, outcome, request)
        return result

    def _prepare(self, descriptor: SolverDescriptor, request: SolveRequest) -> None:
        paths = descriptor.paths
        try:
            paths.user_model.parent.mkdir(parents=True, exist_ok=True)
            with open(paths.user_model, "w", encoding="utf-8") as f:
                f.write(request.model_text.strip())
        except OSError as e:
            raise MilpBridgeException(f"Cannot write model file {paths.user_model}: {e}") from e
        # Output of a previous run must not be mistaken for this one
        for artifact in paths.artifacts():
            try:
                artifact.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning("Could not delete %s: %s", artifact, e)
