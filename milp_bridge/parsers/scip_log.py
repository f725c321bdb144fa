"""
Parsers for the SCIP log file and the file written by `write solution`

Log lines of interest:

    SCIP Status        : problem is solved [optimal solution found]
    Solving Time (sec) : 0.01

Solution file:

    solution status: optimal solution found
    objective value:                                    6
    X001                                                6   (obj:1)
"""

import re

from ..exceptions import ArtifactError
from .base import ParsedOutput

OPTIMAL_PHRASE = "optimal solution found"

# SCIP_STATUS codes keyed by the phrase SCIP prints for them
STATUS_CODES = {
    "user interrupt": 1,
    "node limit reached": 2,
    "total node limit reached": 3,
    "stall node limit reached": 4,
    "time limit reached": 5,
    "memory limit reached": 6,
    "gap limit reached": 7,
    "solution limit reached": 8,
    "solution improvement limit reached": 9,
    "restart limit reached": 10,
    "optimal solution found": 11,
    "infeasible": 12,
    "unbounded": 13,
    "infeasible or unbounded": 14,
    "termination signal received": 15,
}

STATUS_RE = re.compile(r"^\s*SCIP Status\s*:\s*(.*?)\s*\[(.+?)\]\s*$", re.I)
TIME_RE = re.compile(r"^\s*Solving Time \(sec\)\s*:\s*([0-9]+(?:\.[0-9]+)?)", re.I)


def parse_log(log_text: str) -> ParsedOutput:
    out = ParsedOutput()
    for line in log_text.splitlines():
        m = STATUS_RE.match(line)
        if m:
            out.status_text = m.group(2).strip().lower()
            out.status = STATUS_CODES.get(out.status_text)
            continue
        m = TIME_RE.match(line)
        if m:
            out.seconds = float(m.group(1))
    out.success = out.status_text == OPTIMAL_PHRASE
    return out


def parse_solution(text: str, out: ParsedOutput) -> ParsedOutput:
    """Add objective and values from a solution file to `out`"""
    lines = text.splitlines()
    if len(lines) < 2 or not lines[0].lower().startswith("solution status"):
        raise ArtifactError("SCIP solution file is empty or has no solution")
    key, _, value = lines[1].partition(":")
    if key.strip().lower() != "objective value":
        raise ArtifactError("SCIP solution file lacks the objective value line")
    out.objective = float(value)
    for line in lines[2:]:
        parts = line.split()
        if len(parts) < 2:
            continue
        out.values[parts[0]] = float(parts[1])
    return out
