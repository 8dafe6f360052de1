from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .controls import ControlIntents, RotationIntent, ThrustIntent
from .vector_math import (
    Vector,
    add_at_angle,
    frozen,
    magnitude,
    to_vector,
    zero_vector,
)

logger = logging.getLogger(__name__)


class CullPolicy(str, Enum):
    # projectile's own position against all four edges
    OWN_POSITION = "own-position"
    # left edge uses the projectile, the other three use the craft
    LEGACY = "legacy"


@dataclass(slots=True)
class SimulationConfig:
    rotate_speed: float = math.pi  # radians per second
    thrust: float = 10.0  # units per second squared
    drag: float = 1.0  # per second
    fire_cooldown: float = 0.1  # seconds
    muzzle_boost: float = 20.0
    rest_epsilon: float = 0.001
    viewport_scale: int = 2  # drawable pixels per world unit
    cull_policy: CullPolicy = CullPolicy.OWN_POSITION
    normalize_angle: bool = False

    def __post_init__(self) -> None:
        if self.fire_cooldown < 0:
            raise ValueError("Fire cooldown must be non-negative")
        if self.viewport_scale <= 0:
            raise ValueError("Viewport scale must be positive")


@dataclass(frozen=True, slots=True)
class Viewport:
    """Playfield in world units, centred on the origin."""

    width: float
    height: float

    @classmethod
    def from_pixels(cls, width_px: int, height_px: int, scale: int = 2) -> Viewport:
        if width_px <= 0 or height_px <= 0:
            raise ValueError(f"Viewport must have a positive size, got {width_px}x{height_px}")
        if scale <= 0:
            raise ValueError("Viewport scale must be positive")
        return cls(width=float(int(width_px) // scale), height=float(int(height_px) // scale))

    @property
    def half_width(self) -> float:
        return self.width / 2.0

    @property
    def half_height(self) -> float:
        return self.height / 2.0

    def contains(self, position: Vector) -> bool:
        x, y = position
        return bool(
            -self.half_width <= x <= self.half_width
            and -self.half_height <= y <= self.half_height
        )

    def wrap(self, position: Vector) -> Vector:
        """Teleport a point that left one edge to the opposite edge.

        Each axis wraps at most once, so a point more than a full viewport
        outside stays outside until the next call.
        """
        x, y = position
        if x < -self.half_width:
            x += self.width
        elif x > self.half_width:
            x -= self.width
        if y < -self.half_height:
            y += self.height
        elif y > self.half_height:
            y -= self.height
        return to_vector((x, y))


@dataclass(slots=True, eq=False)
class Craft:
    angle: float
    velocity: Vector
    position: Vector
    last_fired: float

    @classmethod
    def spawn(cls, now: float, position: Optional[Vector] = None, angle: float = 0.0) -> Craft:
        return cls(
            angle=angle,
            velocity=zero_vector(),
            position=zero_vector() if position is None else to_vector(position),
            last_fired=now,
        )

    @property
    def speed(self) -> float:
        return magnitude(self.velocity)


@dataclass(slots=True, eq=False)
class Projectile:
    velocity: Vector
    position: Vector
    angle: float


@dataclass(frozen=True, slots=True, eq=False)
class ProjectileView:
    position: Vector
    angle: float


@dataclass(frozen=True, slots=True, eq=False)
class SimulationSnapshot:
    angle: float
    position: Vector
    velocity: Vector
    projectiles: tuple[ProjectileView, ...]

    @property
    def speed(self) -> float:
        return magnitude(self.velocity)


def rotate(craft: Craft, rotation: RotationIntent, dt: float, config: SimulationConfig) -> None:
    if rotation is RotationIntent.NONE:
        return
    craft.angle += rotation.value * config.rotate_speed * dt
    if config.normalize_angle:
        craft.angle %= math.tau


def apply_thrust(craft: Craft, thrust: ThrustIntent, dt: float, config: SimulationConfig) -> None:
    """Thrust, brake, settle or drag; exactly one of these per tick."""
    if thrust is not ThrustIntent.NONE:
        craft.velocity = add_at_angle(
            craft.velocity, thrust.value * config.thrust * dt, craft.angle
        )
    elif craft.speed < config.rest_epsilon:
        craft.velocity = zero_vector()
    else:
        craft.velocity = craft.velocity * (1.0 - config.drag * dt)


def try_fire(craft: Craft, now: float, config: SimulationConfig) -> Optional[Projectile]:
    if now - craft.last_fired <= config.fire_cooldown:
        return None
    craft.last_fired = now
    projectile = Projectile(
        velocity=add_at_angle(craft.velocity, config.muzzle_boost, craft.angle),
        position=craft.position.copy(),
        angle=craft.angle,
    )
    logger.debug(f"Fired projectile at angle {craft.angle:.3f} from {craft.position}")
    return projectile


def out_of_bounds(
    projectile: Projectile,
    craft: Craft,
    viewport: Viewport,
    policy: CullPolicy,
) -> bool:
    if policy is CullPolicy.LEGACY:
        return bool(
            projectile.position[0] < -viewport.half_width
            or craft.position[0] > viewport.half_width
            or craft.position[1] < -viewport.half_height
            or craft.position[1] > viewport.half_height
        )
    return not viewport.contains(projectile.position)


def cull_projectiles(
    projectiles: list[Projectile],
    craft: Craft,
    viewport: Viewport,
    policy: CullPolicy = CullPolicy.OWN_POSITION,
) -> list[Projectile]:
    """Drop projectiles outside the viewport, keeping firing order."""
    survivors = [p for p in projectiles if not out_of_bounds(p, craft, viewport, policy)]
    removed = len(projectiles) - len(survivors)
    if removed:
        logger.debug(f"Culled {removed} projectile(s), {len(survivors)} live")
    return survivors


def step(
    craft: Craft,
    projectiles: list[Projectile],
    intents: ControlIntents,
    elapsed_seconds: float,
    viewport_size: tuple[int, int],
    now: float,
    config: Optional[SimulationConfig] = None,
) -> tuple[Craft, list[Projectile]]:
    """Advance the craft and its projectiles by one tick.

    The craft is updated in place; the returned projectile list is new.
    ``now`` is a monotonic clock reading used only for the fire cooldown.
    """
    config = config if config is not None else SimulationConfig()
    if elapsed_seconds < 0:
        raise ValueError("Elapsed time must be non-negative")
    viewport = Viewport.from_pixels(*viewport_size, scale=config.viewport_scale)

    rotate(craft, intents.rotation, elapsed_seconds, config)
    apply_thrust(craft, intents.thrust, elapsed_seconds, config)

    projectiles = list(projectiles)
    if intents.fire:
        projectile = try_fire(craft, now, config)
        if projectile is not None:
            projectiles.append(projectile)

    # one Euler step per tick, using this tick's velocity
    if craft.speed != 0.0:
        craft.position = craft.position + craft.velocity
    craft.position = viewport.wrap(craft.position)

    survivors = cull_projectiles(projectiles, craft, viewport, config.cull_policy)
    for projectile in survivors:
        projectile.position = projectile.position + projectile.velocity
    return craft, survivors


class Simulation:
    """Player craft and its live projectiles, stepped once per frame."""

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config if config is not None else SimulationConfig()
        self.clock = clock
        self.craft = Craft.spawn(now=clock())
        self.projectiles: list[Projectile] = []

    def update(self, intents: ControlIntents, dt: float, viewport_size: tuple[int, int]) -> None:
        self.craft, self.projectiles = step(
            self.craft,
            self.projectiles,
            intents,
            dt,
            viewport_size,
            now=self.clock(),
            config=self.config,
        )

    def snapshot(self) -> SimulationSnapshot:
        return SimulationSnapshot(
            angle=self.craft.angle,
            position=frozen(self.craft.position),
            velocity=frozen(self.craft.velocity),
            projectiles=tuple(
                ProjectileView(position=frozen(p.position), angle=p.angle)
                for p in self.projectiles
            ),
        )
