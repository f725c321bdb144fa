"""
Parser for CPLEX solution (.sol) files and the cplex.log file

The .sol file looks like XML, but it is scanned linearly for key="value"
tokens: the header carries objectiveValue, solutionStatusValue and
solutionStatusString, and each <variable> carries name and value.
"""

import re
from typing import Optional, Tuple

from ..exceptions import ArtifactError
from .base import ParsedOutput

# Termination codes that mean the reported solution is optimal
SUCCESS_CODES = frozenset({1, 101, 102})

LICENSE_ERROR = 32201
INFEASIBLE_OR_UNBOUNDED = 119

_TOKEN_RE = re.compile(r'(\w+)\s*=\s*"([^"]*)"')
_ERROR_RE = re.compile(r"CPLEX Error\s+(\d+)\s*:\s*(.+)")
_TIME_RE = re.compile(r"Solution time\s*=\s*(\d+(?:\.\d+)?)\s*sec")


def check_log(log_text: str) -> Optional[Tuple[int, str]]:
    """Return (status, message) when the log reports a failure"""
    lower = log_text.lower()
    if "license" in lower:
        return LICENSE_ERROR, "No valid CPLEX license found"
    if "infeasible or unbounded" in lower:
        return INFEASIBLE_OR_UNBOUNDED, "The model is infeasible or unbounded"
    m = _ERROR_RE.search(log_text)
    if m:
        return int(m.group(1)), m.group(2).strip()
    return None


def parse_log_seconds(log_text: str) -> Optional[float]:
    m = _TIME_RE.search(log_text)
    return float(m.group(1)) if m else None


def parse_solution(text: str) -> ParsedOutput:
    out = ParsedOutput()
    name = None
    for key, value in _TOKEN_RE.findall(text):
        if key == "objectiveValue":
            out.objective = float(value)
        elif key == "solutionStatusValue":
            out.status = int(value)
        elif key == "solutionStatusString":
            out.status_text = value
        elif key == "name":
            name = value
        elif key == "value" and name is not None:
            out.values[name] = float(value)
            name = None
    if out.status is None:
        raise ArtifactError("CPLEX solution file has no solutionStatusValue")
    out.success = out.status in SUCCESS_CODES
    return out
