"""
Conversion of solver output into the canonical SolveResult.

The log is read first (a missing log counts as empty), then the adapter
reads the solver-specific solution artifacts. Whatever goes wrong while
reading or parsing ends up in the result's status and error fields.
"""

import logging
from typing import List, Mapping, TYPE_CHECKING

from .adapters.base import SolverDescriptor, read_text
from .parsers.base import ParsedOutput, column_index
from .runner import ProcessOutcome
from .state import SolveState
from .utils.error_handling import fold_errors
from .utils.solution_format import (
    SolveRequest,
    SolveResult,
    STATUS_OK,
    STATUS_ERROR,
    MSG_NO_SOLUTION,
    MSG_UNKNOWN_ERROR,
)

if TYPE_CHECKING:
    from .session import SolverSession

logger = logging.getLogger(__name__)


def dense_vector(values: Mapping[str, float], column_count: int, threshold: float) -> List[float]:
    """
    Place sparse name -> value pairs in a vector of length `column_count`.

    The column of each value is the numeric suffix of its name (1-based).
    Missing columns are 0, and magnitudes below `threshold` become exactly 0.
    """
    x = [0.0] * max(column_count, 0)
    for name, v in values.items():
        i = column_index(name)
        if i is None or not 0 <= i < len(x):
            logger.debug("Ignoring value for unknown column %r", name)
            continue
        x[i] = 0.0 if abs(v) < threshold else float(v)
    return x


class ResultNormalizer:
    def parse(
        self,
        descriptor: SolverDescriptor,
        session: "SolverSession",
        outcome: ProcessOutcome,
        request: SolveRequest,
    ) -> SolveResult:
        result = SolveResult.empty(request)
        result.seconds = outcome.elapsed

        if not outcome.spawned:
            session.advance(SolveState.SPAWN_FAILED)
            result.status = STATUS_ERROR
            result.error = f"ERROR: {outcome.error}"
            return result

        session.advance(SolveState.READING_LOG)
        log_text = self._read_log(descriptor)
        result.messages = log_text.splitlines()

        session.advance(SolveState.READING_SOLUTION)
        parsed = None
        with fold_errors(result):
            parsed = descriptor.adapter.parse_output(descriptor, outcome.exit_code, log_text)
            self._apply(descriptor, session, parsed, result)

        if parsed is None:
            session.advance(SolveState.PARSE_FAILED)
        else:
            session.advance(SolveState.NORMALIZED)
        result.model = self._read_model(descriptor)
        return result

    def _apply(
        self,
        descriptor: SolverDescriptor,
        session: "SolverSession",
        parsed: ParsedOutput,
        result: SolveResult,
    ) -> None:
        if parsed.messages is not None:
            result.messages = parsed.messages
        if parsed.seconds is not None:
            result.seconds = parsed.seconds

        if parsed.success:
            result.status = STATUS_OK
            result.error = ""
            usable = True
        elif parsed.status is None:
            result.status = STATUS_ERROR
            result.error = MSG_NO_SOLUTION
            usable = False
        else:
            result.status = parsed.status
            result.error = descriptor.status_message(parsed.status) or MSG_UNKNOWN_ERROR
            usable = descriptor.is_usable(parsed.status) and bool(parsed.values)
            logger.info("Solver status: %s - %s", result.status, result.error)

        if usable:
            result.solution = True
            result.objective = parsed.objective
            result.x = dense_vector(parsed.values, len(result.x), session.near_zero)

    def _read_log(self, descriptor: SolverDescriptor) -> str:
        try:
            return read_text(descriptor.paths.log)
        except OSError:
            logger.debug("No log file at %s", descriptor.paths.log)
            return ""

    def _read_model(self, descriptor: SolverDescriptor) -> str:
        try:
            return read_text(descriptor.paths.solver_model)
        except OSError as e:
            logger.warning("Could not read solver model file: %s", e)
            return f"ERROR reading solver model file: {e}"
