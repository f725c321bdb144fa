"""Common result type returned by the output format parsers"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import re

# Column variables are named X1, X001, ... with a 1-based index suffix
COLUMN_PREFIX = "X"
_INDEX_RE = re.compile(r"^" + COLUMN_PREFIX + r"(\d+)$")


@dataclass
class ParsedOutput:
    """Partial result read from one solver's output artifacts"""
    success: bool = False
    status: Optional[int] = None
    status_text: str = ""
    objective: Optional[float] = None
    seconds: Optional[float] = None
    values: Dict[str, float] = field(default_factory=dict)
    # When set, replaces the log lines as the result's messages
    messages: Optional[List[str]] = None


def column_index(name: str) -> Optional[int]:
    """Return the 0-based column index of a column variable, None for other names"""
    m = _INDEX_RE.search(name.strip())
    if not m or int(m.group(1)) < 1:
        return None
    return int(m.group(1)) - 1
