from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

import pytest

from milp_bridge.config import Config, set_config

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def _reset_global_config(monkeypatch):
    for var in (
        "MILP_SOLVER_DIR",
        "MILP_WORKING_DIR",
        "MILP_PREFERRED_SOLVER",
        "MILP_DEFAULT_TIMEOUT",
        "MILP_SOLVER_PATHS",
        "MILP_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def cfg(tmp_path: Path) -> Config:
    return Config(solver_dir=tmp_path / "solver", working_dir=tmp_path)


def write_stub(path: Path, body: str) -> Path:
    """Write an executable Python script that stands in for a solver binary"""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!{sys.executable}\n{body}", encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def write_fake_executable(path: Path) -> Path:
    """Executable file that is only looked at, never run"""
    return write_stub(path, "raise SystemExit(0)\n")


posix_only = pytest.mark.skipif(os.name == "nt", reason="stub solvers need a shebang")


@pytest.fixture
def describe(cfg: Config, tmp_path: Path):
    """Build the descriptor of a solver whose executable is a placeholder file"""
    import milp_bridge.adapters.unified_bridge  # noqa: F401
    from milp_bridge.registry import adapters

    def _describe(solver_id: str):
        adapter = adapters.get_adapter(solver_id)
        exe = write_fake_executable(tmp_path / "bin" / adapter.executable_name(sys.platform))
        return adapter.describe(exe, cfg)

    return _describe


# Pretends to be gurobi_cl: writes a log, the solver model and an optimal
# JSON solution with value 2 for every column named in the model
GUROBI_STUB = r'''
import json
import re
import sys

options = [a.split("=", 1) for a in sys.argv[1:-1]]
model = open(sys.argv[-1]).read()
names = sorted(set(re.findall(r"X\d+", model)))
with open(dict(options)["LogFile"], "w") as f:
    f.write("Optimal solution found\n")
for key, path in options:
    if key != "ResultFile":
        continue
    if path.endswith(".json"):
        sol = {
            "SolutionInfo": {"Status": 2, "Runtime": 0.01, "ObjVal": 2.0 * len(names)},
            "Vars": [{"VarName": n, "X": 2} for n in names],
        }
        with open(path, "w") as f:
            json.dump(sol, f)
    else:
        with open(path, "w") as f:
            f.write(model)
'''
