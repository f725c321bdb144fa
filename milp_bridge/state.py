"""States a solve call passes through"""

from enum import Enum


class SolveState(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    NO_SOLVER = "no_solver"
    WRITING_MODEL = "writing_model"
    SPAWNING = "spawning"
    SPAWN_FAILED = "spawn_failed"
    SOLVER_RUNNING = "solver_running"
    READING_LOG = "reading_log"
    READING_SOLUTION = "reading_solution"
    PARSE_FAILED = "parse_failed"
    NORMALIZED = "normalized"

    @property
    def terminal(self) -> bool:
        return self in (
            SolveState.NO_SOLVER,
            SolveState.SPAWN_FAILED,
            SolveState.PARSE_FAILED,
            SolveState.NORMALIZED,
        )
