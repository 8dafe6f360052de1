"""Wraparound arcade craft with drag and cooldown-limited fire."""

from .controls import Control, ControlIntents, RotationIntent, ThrustIntent, resolve_intents
from .simulation import (
    Craft,
    CullPolicy,
    Projectile,
    Simulation,
    SimulationConfig,
    SimulationSnapshot,
    Viewport,
    step,
)

__all__ = [
    "Control",
    "ControlIntents",
    "Craft",
    "CullPolicy",
    "Projectile",
    "RotationIntent",
    "Simulation",
    "SimulationConfig",
    "SimulationSnapshot",
    "ThrustIntent",
    "Viewport",
    "resolve_intents",
    "step",
]
