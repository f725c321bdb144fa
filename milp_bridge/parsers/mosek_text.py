"""
Parser for MOSEK solution files (.int for integer, .bas for basic solutions)

The file starts with `KEY : value` header lines, followed by sections such as
CONSTRAINTS and VARIABLES. Each section has a column header line starting
with INDEX and then one row per item:

    INDEX  NAME  AT  ACTIVITY  LOWER LIMIT  UPPER LIMIT  ...
"""

import re
from typing import Optional

from ..exceptions import ArtifactError
from .base import ParsedOutput

# MOSEK solution status codes (MSK_SOL_STA_*)
SOLUTION_STATUS_CODES = {
    "OPTIMAL": 1,
    "PRIMAL_FEASIBLE": 2,
    "DUAL_FEASIBLE": 3,
    "PRIMAL_AND_DUAL_FEASIBLE": 4,
    "PRIMAL_INFEASIBLE_CER": 5,
    "DUAL_INFEASIBLE_CER": 6,
    "PRIMAL_ILLPOSED_CER": 7,
    "DUAL_ILLPOSED_CER": 8,
    "INTEGER_OPTIMAL": 9,
}

SECTIONS = ("CONSTRAINTS", "VARIABLES", "SYMMETRIC MATRIX VARIABLES", "CONES")

_HEADER_RE = re.compile(r"^([A-Z][A-Z ]*?)\s*:\s*(.*)$")
_TIME_RE = re.compile(r"Optimizer terminated\.\s*Time:\s*(\d+(?:\.\d+)?)")


def parse_solution(text: str) -> ParsedOutput:
    lines = text.splitlines()
    if not lines:
        raise ArtifactError("MOSEK solution file is empty")

    out = ParsedOutput()
    section = None
    for line in lines:
        stripped = line.strip()
        if not stripped:
            continue
        if stripped in SECTIONS:
            section = stripped
            continue
        if section is None:
            m = _HEADER_RE.match(stripped)
            if not m:
                continue
            key, value = m.group(1), m.group(2).strip()
            if key == "SOLUTION STATUS":
                out.status_text = value
                out.status = SOLUTION_STATUS_CODES.get(value)
                out.success = "OPTIMAL" in value
            elif key == "PRIMAL OBJECTIVE" and value:
                out.objective = float(value)
        elif section == "VARIABLES":
            if stripped.startswith("INDEX"):
                continue
            parts = stripped.split()
            if len(parts) < 4 or not parts[0].isdigit():
                continue
            out.values[parts[1]] = float(parts[3])

    if not out.status_text:
        raise ArtifactError("MOSEK solution file has no SOLUTION STATUS line")
    return out


def parse_log_seconds(log_text: str) -> Optional[float]:
    m = _TIME_RE.search(log_text)
    return float(m.group(1)) if m else None
