"""
Parser for the JSON result file written by gurobi_cl

With JSONSolDetail=1 the file holds a `SolutionInfo` object and a `Vars`
list of {"VarName": ..., "X": ...} entries.
"""

import json

from ..exceptions import ArtifactError
from .base import ParsedOutput, COLUMN_PREFIX

# Gurobi optimization status code for a proven optimum
GRB_OPTIMAL = 2


def parse_solution(text: str) -> ParsedOutput:
    if not text.strip():
        raise ArtifactError("Gurobi solution file is empty")
    try:
        sol = json.loads(text)
    except json.JSONDecodeError as e:
        raise ArtifactError(f"Gurobi solution file is not valid JSON: {e}") from e
    info = sol.get("SolutionInfo") if isinstance(sol, dict) else None
    if not isinstance(info, dict) or "Status" not in info:
        raise ArtifactError("Gurobi solution file lacks SolutionInfo.Status")

    out = ParsedOutput(status=int(info["Status"]))
    out.success = out.status == GRB_OPTIMAL
    if info.get("Runtime") is not None:
        out.seconds = float(info["Runtime"])
    if info.get("ObjVal") is not None:
        out.objective = float(info["ObjVal"])
    for i, var in enumerate(sol.get("Vars") or []):
        if not isinstance(var, dict) or var.get("X") is None:
            continue
        # Without VarName the list is in column order
        name = var.get("VarName") or f"{COLUMN_PREFIX}{i + 1}"
        out.values[name] = float(var["X"])
    return out
