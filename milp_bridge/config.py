"""Configuration management for the MILP solver interface"""

from dataclasses import dataclass, field
from typing import Dict, Optional, List
from pathlib import Path
import json
import os

from .exceptions import ConfigurationError


@dataclass
class Config:
    """
    Global configuration for the solver interface.

    Can be loaded from file or environment variables.
    """

    # Directories
    solver_dir: Path = Path("user") / "solver"
    working_dir: Path = Path(".")

    # Solver selection
    preferred_solver: str = ""
    extra_paths: List[Path] = field(default_factory=list)

    # Default tolerances
    default_timeout: int = 30
    default_int_tolerance: float = 5e-7
    default_mip_gap: float = 1e-4

    # Per-solver override of the statuses that still yield a usable solution
    usable_statuses: Dict[str, List[int]] = field(default_factory=dict)

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load configuration from JSON file"""
        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
        # parse nested path strings
        for key in ("solver_dir", "working_dir", "log_file"):
            if data.get(key):
                data[key] = Path(data[key])
        if "extra_paths" in data:
            data["extra_paths"] = [Path(p) for p in data["extra_paths"]]
        if "usable_statuses" in data:
            data["usable_statuses"] = {
                k.lower(): [int(c) for c in v] for k, v in data["usable_statuses"].items()
            }
        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables"""
        config = cls()

        if timeout := os.getenv("MILP_DEFAULT_TIMEOUT"):
            try:
                config.default_timeout = int(timeout)
            except ValueError:
                pass

        if solver_dir := os.getenv("MILP_SOLVER_DIR"):
            config.solver_dir = Path(solver_dir)

        if working_dir := os.getenv("MILP_WORKING_DIR"):
            config.working_dir = Path(working_dir)

        if preferred := os.getenv("MILP_PREFERRED_SOLVER"):
            config.preferred_solver = preferred.lower()

        if extra := os.getenv("MILP_SOLVER_PATHS"):
            config.extra_paths = [Path(p) for p in extra.split(os.pathsep) if p]

        if log_level := os.getenv("MILP_LOG_LEVEL"):
            config.log_level = log_level

        return config

    def save(self, path: Path) -> None:
        """Save configuration to file"""
        data = {
            "solver_dir": str(self.solver_dir),
            "working_dir": str(self.working_dir),
            "preferred_solver": self.preferred_solver,
            "extra_paths": [str(p) for p in self.extra_paths],
            "default_timeout": self.default_timeout,
            "default_int_tolerance": self.default_int_tolerance,
            "default_mip_gap": self.default_mip_gap,
            "usable_statuses": self.usable_statuses,
            "log_level": self.log_level,
            "log_file": str(self.log_file) if self.log_file else None,
        }
        with open(path, "w") as f:
            json.dump(data, f, indent=2)


_config: Optional[Config] = None


def get_config() -> Config:
    """Get global configuration instance"""
    global _config
    if _config is None:
        # Try to load from default locations
        config_paths = [
            Path("milp_config.json"),
            Path.home() / ".milp_config.json",
        ]

        for path in config_paths:
            if path.exists():
                _config = Config.from_file(path)
                break
        else:
            # Load from environment or use defaults
            _config = Config.from_env()

    return _config


def set_config(config: Optional[Config]) -> None:
    """Set global configuration instance"""
    global _config
    _config = config
