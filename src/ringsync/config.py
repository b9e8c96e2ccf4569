# src/ringsync/config.py
"""
User configuration for default run settings.

Config file (TOML), first match wins:
  1. $RINGSYNC_CONFIG
  2. Linux:   $XDG_CONFIG_HOME/ringsync/config.toml or ~/.config/ringsync/config.toml
     macOS:   ~/Library/Application Support/ringsync/config.toml
     Windows: %APPDATA%/ringsync/config.toml

A missing file means built-in defaults. Example::

    [simulation]
    n = 16
    coupling = 1.0
    dt = 0.02
    speed = 1.0
    stepper = "euler"
    seed = 1234

    [experiment]
    trials = 50
    steps = 2000
    yield_every = 10
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
import os
from pathlib import Path
import sys
from typing import Any, Mapping, Optional
import warnings

import tomllib

from ringsync.errors import ConfigError

__all__ = [
    "SimulationConfig",
    "ExperimentConfig",
    "RingConfig",
    "load_config",
    "get_config_path",
]

ENV_CONFIG = "RINGSYNC_CONFIG"


@dataclass(frozen=True)
class SimulationConfig:
    n: int = 16
    coupling: float = 1.0
    dt: float = 0.02
    speed: float = 1.0
    stepper: str = "euler"
    seed: Optional[int] = None


@dataclass(frozen=True)
class ExperimentConfig:
    trials: int = 50
    steps: int = 2000
    yield_every: int = 10


@dataclass(frozen=True)
class RingConfig:
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    experiment: ExperimentConfig = field(default_factory=ExperimentConfig)
    source: Optional[Path] = None


def get_config_path() -> Path:
    """Resolve the config file location (the file need not exist)."""
    override = os.environ.get(ENV_CONFIG)
    if override:
        return Path(override).expanduser().resolve()

    if sys.platform == "win32":
        base = os.environ.get("APPDATA")
        root = Path(base) if base else Path.home() / "AppData" / "Roaming"
    elif sys.platform == "darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        root = Path(xdg) if xdg else Path.home() / ".config"
    return (root / "ringsync" / "config.toml").resolve()


def _coerce(cls, table: Mapping[str, Any], section: str, path: Path):
    """Build a section dataclass from a TOML table with light type checking."""
    if not isinstance(table, Mapping):
        raise ConfigError(f"[{section}] in {path} must be a table")
    known = {f.name: f for f in fields(cls)}
    unknown = sorted(set(table) - set(known))
    if unknown:
        warnings.warn(
            f"Unknown keys in [{section}] of {path}: {unknown}. "
            f"Valid keys: {sorted(known)}",
            RuntimeWarning,
            stacklevel=3,
        )
    defaults = cls()
    values: dict[str, Any] = {}
    for name in known:
        if name not in table:
            continue
        raw = table[name]
        expected = getattr(defaults, name)
        if name == "seed":
            ok = isinstance(raw, int) and not isinstance(raw, bool)
        elif isinstance(expected, bool):
            ok = isinstance(raw, bool)
        elif isinstance(expected, int):
            ok = isinstance(raw, int) and not isinstance(raw, bool)
        elif isinstance(expected, float):
            ok = isinstance(raw, (int, float)) and not isinstance(raw, bool)
            raw = float(raw) if ok else raw
        else:
            ok = isinstance(raw, str)
        if not ok:
            raise ConfigError(
                f"[{section}].{name} in {path} has invalid value {raw!r}"
            )
        values[name] = raw
    return cls(**values)


def load_config(path: str | Path | None = None) -> RingConfig:
    """
    Load settings from ``path`` (default: ``get_config_path()``).

    Raises:
        ConfigError: when the file exists but is not valid TOML or a value
            has the wrong type.
    """
    cfg_path = Path(path).expanduser().resolve() if path is not None else get_config_path()
    if not cfg_path.exists():
        return RingConfig()

    try:
        with open(cfg_path, "rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse config {cfg_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config {cfg_path}: {exc}") from exc

    unknown = sorted(set(data) - {"simulation", "experiment"})
    if unknown:
        warnings.warn(
            f"Unknown sections in {cfg_path}: {unknown}",
            RuntimeWarning,
            stacklevel=2,
        )

    return RingConfig(
        simulation=_coerce(SimulationConfig, data.get("simulation", {}), "simulation", cfg_path),
        experiment=_coerce(ExperimentConfig, data.get("experiment", {}), "experiment", cfg_path),
        source=cfg_path,
    )
