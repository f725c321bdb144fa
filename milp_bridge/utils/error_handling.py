"""Error handling utilities for solver calls"""

from contextlib import contextmanager
import logging

from milp_bridge.exceptions import (
    ArtifactError,
    MilpBridgeException,
    SolverReportedFailure,
)
from milp_bridge.utils.solution_format import (
    SolveResult,
    STATUS_ERROR,
    MSG_NO_SOLUTION,
)

logger = logging.getLogger(__name__)


@contextmanager
def fold_errors(result: SolveResult, rethrow: bool = False):
    """
    Context manager that folds solver errors into `result`.

    Usage:
        with fold_errors(result):
            ... file I/O and parsing ...

    The solution vector is reset to zeros whenever an error is folded in,
    so a failed call never reports values.
    """
    try:
        yield
    except SolverReportedFailure as e:
        if rethrow:
            raise
        result.status = e.status
        result.error = str(e)
        _clear_solution(result)
    except (ArtifactError, OSError, ValueError) as e:
        if rethrow:
            raise
        logger.warning("Could not read solver output: %s", e)
        result.status = STATUS_ERROR
        result.error = MSG_NO_SOLUTION
        _clear_solution(result)
    except MilpBridgeException as e:
        if rethrow:
            raise
        result.status = STATUS_ERROR
        result.error = f"ERROR: {e}"
        _clear_solution(result)
    except Exception as e:  # noqa: BLE001
        if rethrow:
            raise
        logger.exception("Unexpected error while solving block %s", result.block_id)
        result.status = STATUS_ERROR
        result.error = f"ERROR: {e}"
        _clear_solution(result)


def _clear_solution(result: SolveResult) -> None:
    result.solution = False
    result.objective = None
    result.x = [0.0] * len(result.x)
