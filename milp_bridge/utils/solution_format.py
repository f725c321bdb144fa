"""
Request and result formats for a solver call

Provides the transient request passed in by the model compiler and the
normalized result returned to the caller, together with its JSON wire form.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, Mapping
import json
from pathlib import Path


STATUS_OK = 0
STATUS_ERROR = -13
STATUS_NO_SOLVER = -999

MSG_NO_SOLVER = "No MILP solver"
MSG_NO_SOLUTION = "No solution found"
MSG_UNKNOWN_ERROR = "Unknown solver error"


@dataclass
class SolveRequest:
    """One block of LP constraints to be solved"""
    block_id: int
    round_id: str
    model_text: str
    column_count: int
    timeout_seconds: Optional[float] = None
    integer_tolerance: Optional[float] = None
    mip_gap: Optional[float] = None
    diagnose: bool = False
    solver_id: Optional[str] = None

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "SolveRequest":
        """Build a request from the form fields posted by the browser client"""

        def number(key: str, kind=float):
            value = form.get(key)
            if value in (None, ""):
                return None
            try:
                return kind(value)
            except (TypeError, ValueError):
                return None

        diagnose = str(form.get("diagnose", "")).lower() in ("1", "true", "yes", "on")
        return cls(
            block_id=number("block", int) or 0,
            round_id=str(form.get("round", "")),
            model_text=str(form.get("data", "")),
            column_count=number("columns", int) or 0,
            timeout_seconds=number("timeout"),
            integer_tolerance=number("inttol"),
            mip_gap=number("mipgap"),
            diagnose=diagnose,
            solver_id=(form.get("solver") or None),
        )


def format_value(v: float) -> str:
    """Serialize a solution value, integral values without decimal point"""
    if v == 0:
        return "0"
    if float(v).is_integer():
        return str(int(v))
    return repr(float(v))


@dataclass
class SolveResult:
    """Normalized outcome of one solver call"""
    block_id: int
    round_id: str
    status: int = STATUS_OK
    solution: bool = False
    error: str = ""
    objective: Optional[float] = None
    x: List[float] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)
    seconds: float = 0.0
    model: str = ""

    @classmethod
    def empty(cls, request: SolveRequest) -> "SolveResult":
        """Result with an all-zero solution vector for `request`"""
        return cls(
            block_id=request.block_id,
            round_id=request.round_id,
            x=[0.0] * max(request.column_count, 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to the dictionary format expected by the client"""
        return {
            "block": self.block_id,
            "round": self.round_id,
            "status": self.status,
            "solution": self.solution,
            "error": self.error,
            "messages": list(self.messages),
            "obj": self.objective,
            "data": {
                "block": self.block_id,
                "round": self.round_id,
                "seconds": self.seconds,
                "x": [format_value(v) for v in self.x],
            },
            "model": self.model,
        }


def save_result(result: SolveResult, output_file: Path) -> None:
    """Write the result dictionary as JSON"""
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, "w") as f:
        json.dump(result.to_dict(), f, indent=2)
