from .ring import OscillatorRing
from .trajectory import Trajectory, simulate, effective_dt

__all__ = ["OscillatorRing", "Trajectory", "simulate", "effective_dt"]
