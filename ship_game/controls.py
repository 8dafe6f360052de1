"""Resolve held control keys into discrete steering intents."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Collection


class Control(Enum):
    TURN_LEFT = "turn_left"
    TURN_RIGHT = "turn_right"
    THRUST_FORWARD = "thrust_forward"
    THRUST_BACKWARD = "thrust_backward"
    FIRE = "fire"


class RotationIntent(Enum):
    # value is the sign applied to the rotation speed
    TURN_CCW = 1
    TURN_CW = -1
    NONE = 0


class ThrustIntent(Enum):
    # value is the sign applied to the thrust impulse
    FORWARD = 1
    BACKWARD = -1
    NONE = 0


@dataclass(frozen=True, slots=True)
class ControlIntents:
    rotation: RotationIntent = RotationIntent.NONE
    thrust: ThrustIntent = ThrustIntent.NONE
    fire: bool = False

    @classmethod
    def idle(cls) -> ControlIntents:
        return cls()


def resolve_rotation(held: Collection[Control]) -> RotationIntent:
    if Control.TURN_LEFT in held:
        return RotationIntent.TURN_CCW
    if Control.TURN_RIGHT in held:
        return RotationIntent.TURN_CW
    return RotationIntent.NONE


def resolve_thrust(held: Collection[Control]) -> ThrustIntent:
    if Control.THRUST_FORWARD in held:
        return ThrustIntent.FORWARD
    if Control.THRUST_BACKWARD in held:
        return ThrustIntent.BACKWARD
    return ThrustIntent.NONE


def resolve_intents(held: Collection[Control]) -> ControlIntents:
    """Map the currently held controls to intents.

    Turning left wins over turning right and forward thrust wins over
    braking when both keys of a pair are held. Fire is reported whenever
    the fire key is down; the simulation applies the cooldown.
    """
    return ControlIntents(
        rotation=resolve_rotation(held),
        thrust=resolve_thrust(held),
        fire=Control.FIRE in held,
    )
