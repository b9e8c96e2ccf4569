# src/ringsync/steppers/registry.py
from __future__ import annotations
from typing import Dict

from .base import StepperSpec
from ringsync.errors import StepperNotFoundError

__all__ = ["register", "get_stepper", "registry", "list_steppers"]

# name -> spec instance
_registry: Dict[str, StepperSpec] = {}

def register(spec: StepperSpec) -> None:
    """
    Register a stepper spec by its meta.name and meta.aliases.
    Enforces uniqueness of the canonical name; aliases may overlap only
    if they point to the same spec instance.
    """
    name = spec.meta.name
    if name in _registry and _registry[name] is not spec:
        raise ValueError(f"Stepper '{name}' already registered with a different spec.")
    _registry[name] = spec

    for alias in spec.meta.aliases:
        if alias in _registry and _registry[alias] is not spec:
            raise ValueError(f"Alias '{alias}' already registered for a different spec.")
        _registry[alias] = spec

def get_stepper(name: str) -> StepperSpec:
    """
    Return the registered spec for 'name' (or an alias).
    Raises StepperNotFoundError (a KeyError) for unknown names.
    """
    try:
        return _registry[name]
    except KeyError:
        raise StepperNotFoundError(name, _registry.keys()) from None

def registry() -> Dict[str, StepperSpec]:
    """
    Read-only-ish view (do not mutate externally).
    """
    return dict(_registry)

def list_steppers() -> list[str]:
    """Canonical stepper names in registration order (aliases excluded)."""
    seen: list[str] = []
    for spec in _registry.values():
        if spec.meta.name not in seen:
            seen.append(spec.meta.name)
    return seen
