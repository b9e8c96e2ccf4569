# src/ringsync/errors.py
from __future__ import annotations
from typing import Iterable

__all__ = [
    "RingsyncError",
    "ConfigError",
    "TopologyError",
    "PolicyError",
    "StepperNotFoundError",
]

class RingsyncError(Exception):
    """Base error for the ringsync package."""


class ConfigError(RingsyncError):
    """Raised when a setting, argument or configuration file is invalid."""
    def __init__(self, message: str):
        super().__init__(message)


class TopologyError(ConfigError):
    """Raised when a ring cannot be built for the requested size."""
    def __init__(self, n: object):
        self.n = n
        super().__init__(
            f"A ring needs at least 2 oscillators (got N={n!r}); "
            "N=1 has no neighbours to couple to."
        )


class PolicyError(ConfigError):
    """Raised when an initialization policy name is not recognised."""
    def __init__(self, kind: str, name: object, choices: Iterable[str]):
        self.kind = kind
        self.name = name
        self.choices = tuple(choices)
        msg = f"Unknown {kind} policy: {name!r}\n"
        msg += "Available policies:\n"
        for c in self.choices:
            msg += f"  - {c}\n"
        super().__init__(msg)


class StepperNotFoundError(RingsyncError, KeyError):
    """Raised when a stepper name or alias is not registered."""
    def __init__(self, name: str, available: Iterable[str]):
        self.name = name
        self.available = tuple(sorted(available))
        msg = f"Stepper not found: {name!r}. Registered: {', '.join(self.available)}"
        RingsyncError.__init__(self, msg)

    def __str__(self) -> str:
        return str(self.args[0])
