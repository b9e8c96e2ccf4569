from .base import StepperMeta, StepperSpec
from .registry import register, get_stepper, registry, list_steppers

# Import concrete steppers to trigger auto-registration
from . import euler, rk4

__all__ = [
    "StepperMeta", "StepperSpec",
    "register", "get_stepper", "registry", "list_steppers",
]
