from __future__ import annotations

import json
from pathlib import Path

import pytest

from milp_bridge.config import Config, get_config, set_config
from milp_bridge.exceptions import ConfigurationError


def test_defaults():
    cfg = Config()

    assert cfg.solver_dir == Path("user") / "solver"
    assert cfg.default_timeout == 30
    assert cfg.default_int_tolerance == 5e-7
    assert cfg.default_mip_gap == 1e-4
    assert cfg.preferred_solver == ""


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("MILP_SOLVER_DIR", str(tmp_path / "s"))
    monkeypatch.setenv("MILP_PREFERRED_SOLVER", "SCIP")
    monkeypatch.setenv("MILP_DEFAULT_TIMEOUT", "45")
    monkeypatch.setenv("MILP_SOLVER_PATHS", str(tmp_path / "a"))
    monkeypatch.setenv("MILP_LOG_LEVEL", "DEBUG")

    cfg = Config.from_env()

    assert cfg.solver_dir == tmp_path / "s"
    assert cfg.preferred_solver == "scip"
    assert cfg.default_timeout == 45
    assert cfg.extra_paths == [tmp_path / "a"]
    assert cfg.log_level == "DEBUG"


def test_bad_env_timeout_is_ignored(monkeypatch):
    monkeypatch.setenv("MILP_DEFAULT_TIMEOUT", "soon")

    assert Config.from_env().default_timeout == 30


def test_save_and_load(tmp_path):
    cfg = Config(
        solver_dir=tmp_path / "solver",
        preferred_solver="mosek",
        extra_paths=[tmp_path / "bin"],
        usable_statuses={"mosek": [2]},
    )
    path = tmp_path / "milp_config.json"
    cfg.save(path)

    loaded = Config.from_file(path)

    assert loaded == cfg


def test_usable_status_keys_are_lowercased(tmp_path):
    path = tmp_path / "c.json"
    path.write_text(json.dumps({"usable_statuses": {"SCIP": ["5"]}}))

    assert Config.from_file(path).usable_statuses == {"scip": [5]}


@pytest.mark.parametrize("content", ["{broken", '{"no_such_field": 1}'])
def test_invalid_file(tmp_path, content):
    path = tmp_path / "c.json"
    path.write_text(content)

    with pytest.raises(ConfigurationError):
        Config.from_file(path)


def test_get_config_reads_local_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "milp_config.json").write_text(json.dumps({"default_timeout": 99}))

    assert get_config().default_timeout == 99
    set_config(Config(default_timeout=1))
    assert get_config().default_timeout == 1
