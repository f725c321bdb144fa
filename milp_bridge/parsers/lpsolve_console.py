"""
Parser for the console output of lp_solve, redirected to a file

The same stream holds the solver messages and the solution:

    set_XXXX: Invalid row index 0
    ...
    Value of objective function: 6.00000000

    Actual values of the variables:
    X001                            6
    ...
    Actual values of the constraints:
    R1                              6
"""

import re

from .base import ParsedOutput, COLUMN_PREFIX

SOLVED_MARKER = "Value of objective function:"
CONSTRAINTS_MARKER = "Actual values of the constraints"

_TIME_RE = re.compile(r"in total (\d+(?:\.\d+)?) seconds")


def parse_output(text: str) -> ParsedOutput:
    lines = text.strip().splitlines()
    out = ParsedOutput(messages=[])
    i = 0
    while i < len(lines) and not out.success:
        line = lines[i]
        out.messages.append(line)
        m = _TIME_RE.search(line)
        if m:
            out.seconds = float(m.group(1))
        if line.startswith(SOLVED_MARKER):
            out.success = True
            value = line[len(SOLVED_MARKER):].strip()
            if value:
                out.objective = float(value)
        i += 1
    if not out.success:
        return out

    while i < len(lines) and not lines[i].startswith(COLUMN_PREFIX):
        i += 1
    while i < len(lines):
        line = lines[i]
        i += 1
        if line.startswith(CONSTRAINTS_MARKER):
            break
        m = _TIME_RE.search(line)
        if m:
            out.seconds = float(m.group(1))
            continue
        parts = line.split()
        if len(parts) != 2 or not parts[0].startswith(COLUMN_PREFIX):
            continue
        out.values[parts[0]] = float(parts[1])
    return out
