from __future__ import annotations

import pytest

from milp_bridge.exceptions import ArtifactError
from milp_bridge.parsers import (
    cplex_xml,
    gurobi_json,
    lpsolve_console,
    mosek_text,
    scip_log,
)
from milp_bridge.parsers.base import ParsedOutput, column_index


def read(fixtures_dir, name):
    return (fixtures_dir / name).read_text(encoding="utf-8")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("X1", 0),
        ("X001", 0),
        ("X042", 41),
        (" X7 ", 6),
        ("X0", None),
        ("R1", None),
        ("C12", None),
        ("X1_copy", None),
        ("R", None),
        ("", None),
    ],
)
def test_column_index(name, expected):
    assert column_index(name) == expected


def test_gurobi_optimal(fixtures_dir):
    out = gurobi_json.parse_solution(read(fixtures_dir, "gurobi_optimal.json"))
    assert out.success
    assert out.status == gurobi_json.GRB_OPTIMAL
    assert out.objective == 6.0
    assert out.seconds == pytest.approx(0.02)
    assert out.values == {"X001": 6.0, "X002": 1e-12, "X003": 2.5}


def test_gurobi_infeasible_has_no_values(fixtures_dir):
    out = gurobi_json.parse_solution(read(fixtures_dir, "gurobi_infeasible.json"))
    assert not out.success
    assert out.status == 3
    assert out.objective is None
    assert out.values == {}


def test_gurobi_vars_without_names_use_position():
    text = '{"SolutionInfo": {"Status": 2, "ObjVal": 1}, "Vars": [{"X": 1}, {"X": 0}]}'
    out = gurobi_json.parse_solution(text)
    assert out.values == {"X1": 1.0, "X2": 0.0}


@pytest.mark.parametrize("text", ["", "   ", "{not json", '{"Vars": []}', "[1, 2]"])
def test_gurobi_bad_file_raises(text):
    with pytest.raises(ArtifactError):
        gurobi_json.parse_solution(text)


def test_mosek_integer_solution(fixtures_dir):
    out = mosek_text.parse_solution(read(fixtures_dir, "mosek_optimal.int"))
    assert out.success
    assert out.status_text == "INTEGER_OPTIMAL"
    assert out.status == 9
    assert out.objective == 6.0
    assert out.values == {"X001": 6.0, "X002": 0.0}


def test_mosek_feasible_basic_solution(fixtures_dir):
    out = mosek_text.parse_solution(read(fixtures_dir, "mosek_feasible.bas"))
    assert not out.success
    assert out.status == 2
    assert out.values == {"X001": 4.5}


def test_mosek_without_status_raises():
    with pytest.raises(ArtifactError):
        mosek_text.parse_solution("NAME : \nVARIABLES\n")


def test_mosek_log_seconds(fixtures_dir):
    assert mosek_text.parse_log_seconds(read(fixtures_dir, "mosek.log")) == pytest.approx(0.03)
    assert mosek_text.parse_log_seconds("nothing here") is None


def test_cplex_solution(fixtures_dir):
    out = cplex_xml.parse_solution(read(fixtures_dir, "cplex_optimal.sol"))
    assert out.success
    assert out.status == 101
    assert out.status_text == "integer optimal solution"
    assert out.objective == 6.0
    # constraint names must not leak into the variable values
    assert out.values == {"X001": 6.0, "X002": 0.0, "X003": 1.25}


def test_cplex_solution_without_status_raises():
    with pytest.raises(ArtifactError):
        cplex_xml.parse_solution('<variables><variable name="X1" value="1"/></variables>')


def test_cplex_log_checks(fixtures_dir):
    assert cplex_xml.check_log(read(fixtures_dir, "cplex_optimal.log")) is None
    status, _ = cplex_xml.check_log(read(fixtures_dir, "cplex_license.log"))
    assert status == cplex_xml.LICENSE_ERROR
    status, _ = cplex_xml.check_log("MIP - Integer infeasible or unbounded.")
    assert status == cplex_xml.INFEASIBLE_OR_UNBOUNDED
    assert cplex_xml.check_log("CPLEX Error  1016: Community Edition.") == (1016, "Community Edition.")


def test_cplex_log_seconds(fixtures_dir):
    assert cplex_xml.parse_log_seconds(read(fixtures_dir, "cplex_optimal.log")) == pytest.approx(0.02)


def test_scip_log_and_solution(fixtures_dir):
    out = scip_log.parse_log(read(fixtures_dir, "scip_optimal.log"))
    assert out.success
    assert out.status == scip_log.STATUS_CODES[scip_log.OPTIMAL_PHRASE]
    assert out.seconds == pytest.approx(0.01)

    scip_log.parse_solution(read(fixtures_dir, "scip_optimal.sol"), out)
    assert out.objective == 6.0
    assert out.values == {"X001": 6.0, "X003": 1.25}


def test_scip_time_limit(fixtures_dir):
    out = scip_log.parse_log(read(fixtures_dir, "scip_timelimit.log"))
    assert not out.success
    assert out.status_text == "time limit reached"
    assert out.status == 5


@pytest.mark.parametrize("text", ["", "no solution available\n", "solution status: infeasible\nX001 1\n"])
def test_scip_bad_solution_raises(text):
    with pytest.raises(ArtifactError):
        scip_log.parse_solution(text, ParsedOutput())


def test_lp_solve_output(fixtures_dir):
    out = lpsolve_console.parse_output(read(fixtures_dir, "lp_solve_output.txt"))
    assert out.success
    assert out.objective == 6.0
    assert out.values == {"X001": 6.0, "X002": 0.0, "X003": 2.25}
    # constraint rows are not read as variables
    assert "R1" not in out.values
    assert out.messages[0] == "set_XXXX: Invalid row index 0"
    assert out.messages[-1].startswith(lpsolve_console.SOLVED_MARKER)


def test_lp_solve_infeasible(fixtures_dir):
    out = lpsolve_console.parse_output(read(fixtures_dir, "lp_solve_infeasible.txt"))
    assert not out.success
    assert out.status is None
    assert out.values == {}
    assert out.messages[-1] == "This problem is infeasible"
