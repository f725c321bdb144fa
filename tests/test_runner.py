from __future__ import annotations

import json

from conftest import posix_only, write_stub
from milp_bridge.adapters.base import Tolerances
from milp_bridge.runner import ProcessRunner
from milp_bridge.utils.solution_format import SolveRequest

ARGV_STUB = r'''
import json
import os
import sys

with open(os.path.join(os.path.dirname(sys.argv[0]), "argv.json"), "w") as f:
    json.dump({"argv": sys.argv[1:], "cwd": os.getcwd()}, f)
print("console output")
raise SystemExit(int(os.environ.get("STUB_EXIT", "0")))
'''


def request(**kwargs):
    return SolveRequest(block_id=1, round_id="", model_text="max: X1;", column_count=1, **kwargs)


def test_gurobi_invocation_substitutes_timeout(describe):
    d = describe("gurobi")
    inv = ProcessRunner().build_invocation(d, Tolerances(5, 5e-7, 1e-4))

    assert inv.shell is False
    assert inv.args[0] == str(d.executable_path)
    assert "TimeLimit=5" in inv.args
    assert "IntFeasTol=5e-07" in inv.args
    assert "MIPGap=0.0001" in inv.args
    assert f"ResultFile={d.paths.solution}" in inv.args
    assert inv.args[-1] == str(d.paths.user_model)


def test_gurobi_diagnose_adds_iis_file(describe):
    d = describe("gurobi")
    inv = ProcessRunner().build_invocation(d, Tolerances(5, 5e-7, 1e-4), diagnose=True)

    assert inv.args[-2] == f"ResultFile={d.paths.diagnosis}"
    assert inv.args[-1] == str(d.paths.user_model)


def test_mosek_invocation_logs_console(describe):
    d = describe("mosek")
    inv = ProcessRunner().build_invocation(d, Tolerances(5, 5e-7, 1e-4))

    i = inv.args.index("MSK_DPAR_OPTIMIZER_MAX_TIME")
    assert inv.args[i + 1] == "5"
    assert inv.stdout_path == d.paths.log


def test_cplex_invocation_is_shell_command(describe, cfg):
    d = describe("cplex")
    inv = ProcessRunner().build_invocation(d, Tolerances(5, 5e-7, 1e-4), diagnose=True)

    assert inv.shell is True
    assert '"set timelimit 5"' in inv.args
    assert inv.args.endswith('"conflict" "write model.clp" "quit"')
    assert inv.cwd == cfg.solver_dir.resolve()


def test_scip_invocation(describe):
    d = describe("scip")
    inv = ProcessRunner().build_invocation(d, Tolerances(5, 5e-7, 1e-4))

    assert "set limits time 5" in inv.args
    assert f"read {d.paths.user_model}" in inv.args
    assert inv.args[-1] == "quit"


def test_lp_solve_invocation_redirects_output(describe, cfg):
    d = describe("lp_solve")
    inv = ProcessRunner().build_invocation(d, Tolerances(5, 5e-7, 1e-4))

    assert inv.shell is True
    assert "-timeout 5 " in inv.args
    assert inv.args.endswith(f">{d.paths.solution}")
    assert inv.cwd == cfg.working_dir.resolve()


def test_spawn_failure_is_reported(describe):
    d = describe("gurobi")
    d.executable_path.unlink()

    outcome = ProcessRunner().run(d, request(), Tolerances(5, 5e-7, 1e-4))

    assert not outcome.spawned
    assert outcome.exit_code is None
    assert outcome.error


@posix_only
def test_run_passes_arguments_and_exit_code(cfg, tmp_path, monkeypatch):
    import milp_bridge.adapters.unified_bridge  # noqa: F401
    from milp_bridge.registry import adapters

    stub = write_stub(tmp_path / "stub" / "gurobi_cl", ARGV_STUB)
    d = adapters.get_adapter("gurobi").describe(stub, cfg)
    monkeypatch.setenv("STUB_EXIT", "3")
    started = []

    outcome = ProcessRunner().run(d, request(), Tolerances(5, 5e-7, 1e-4), on_started=lambda: started.append(1))

    assert outcome.spawned
    assert outcome.exit_code == 3
    assert started == [1]
    seen = json.loads((stub.parent / "argv.json").read_text(encoding="utf-8"))
    assert "TimeLimit=5" in seen["argv"]


@posix_only
def test_console_output_goes_to_log(cfg, tmp_path):
    import milp_bridge.adapters.unified_bridge  # noqa: F401
    from milp_bridge.registry import adapters

    stub = write_stub(tmp_path / "stub" / "mosek", ARGV_STUB)
    d = adapters.get_adapter("mosek").describe(stub, cfg)
    d.paths.log.parent.mkdir(parents=True)

    outcome = ProcessRunner().run(d, request(), Tolerances(5, 5e-7, 1e-4))

    assert outcome.exit_code == 0
    assert d.paths.log.read_text(encoding="utf-8") == "console output\n"


@posix_only
def test_probe(cfg, tmp_path, monkeypatch):
    import milp_bridge.adapters.unified_bridge  # noqa: F401
    from milp_bridge.registry import adapters

    stub = write_stub(tmp_path / "stub" / "scip", ARGV_STUB)
    d = adapters.get_adapter("scip").describe(stub, cfg)

    assert ProcessRunner().probe(d)
    assert json.loads((stub.parent / "argv.json").read_text(encoding="utf-8"))["argv"] == ["--version"]
    monkeypatch.setenv("STUB_EXIT", "1")
    assert not ProcessRunner().probe(d)


def test_lp_solve_probe_asks_for_help(describe):
    d = describe("lp_solve")
    inv = d.adapter.probe_invocation(d)

    assert inv.shell is True
    assert inv.args.endswith(" -h")
