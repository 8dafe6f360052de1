from __future__ import annotations

import argparse
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import pygame

from ship_game.controls import Control, resolve_intents
from ship_game.simulation import CullPolicy, Simulation, SimulationConfig, SimulationSnapshot
from ship_game.vector_math import Vector, add_at_angle, heading

logger = logging.getLogger("ship_game.game")

WIDTH, HEIGHT = 1024, 768
BACKGROUND_COLOR = (0, 0, 0)
SHIP_COLOR = (235, 240, 250)
RAIL_COLOR = (173, 255, 47)  # green-yellow
FPS_TARGET = 120

SHIP_NOSE = 12.0
SHIP_TAIL = 8.0
SHIP_TAIL_SPREAD = math.radians(140.0)
RAIL_LENGTH = 20.0
RAIL_OFFSET = 10.0


@dataclass
class KeyBindings:
    turn_left: int
    turn_right: int
    thrust_forward: int
    thrust_backward: int
    fire: int

    def as_controls(self) -> dict[int, Control]:
        return {
            self.turn_left: Control.TURN_LEFT,
            self.turn_right: Control.TURN_RIGHT,
            self.thrust_forward: Control.THRUST_FORWARD,
            self.thrust_backward: Control.THRUST_BACKWARD,
            self.fire: Control.FIRE,
        }


DEFAULT_BINDINGS = KeyBindings(
    turn_left=pygame.K_a,
    turn_right=pygame.K_d,
    thrust_forward=pygame.K_w,
    thrust_backward=pygame.K_s,
    fire=pygame.K_SPACE,
)


def held_controls(pressed: Sequence[bool], bindings: KeyBindings = DEFAULT_BINDINGS) -> set[Control]:
    """Controls whose bound key is down in a pygame.key.get_pressed() snapshot."""
    return {control for key, control in bindings.as_controls().items() if pressed[key]}


def world_to_screen(position: Vector, surface_size: tuple[int, int], scale: float) -> tuple[int, int]:
    width, height = surface_size
    x = width / 2 + position[0] * scale
    y = height / 2 - position[1] * scale
    return int(round(x)), int(round(y))


def ship_outline(position: Vector, angle: float) -> list[Vector]:
    return [
        add_at_angle(position, SHIP_NOSE, angle),
        add_at_angle(position, SHIP_TAIL, angle + SHIP_TAIL_SPREAD),
        add_at_angle(position, SHIP_TAIL, angle - SHIP_TAIL_SPREAD),
    ]


def rail_segments(position: Vector, angle: float) -> list[tuple[Vector, Vector]]:
    """Two parallel rails either side of a projectile's path."""
    half = heading(angle) * (RAIL_LENGTH / 2)
    segments = []
    for side in (angle + math.pi / 2, angle - math.pi / 2):
        centre = add_at_angle(position, RAIL_OFFSET, side)
        segments.append((centre - half, centre + half))
    return segments


def load_ship_image(path: Path) -> pygame.Surface:
    if not path.is_file():
        raise FileNotFoundError(f"Ship image not found: {path}")
    return pygame.image.load(str(path)).convert_alpha()


def draw_ship(
    surface: pygame.Surface,
    snapshot: SimulationSnapshot,
    scale: float,
    image: Optional[pygame.Surface] = None,
) -> None:
    size = surface.get_size()
    if image is None:
        points = [world_to_screen(p, size, scale) for p in ship_outline(snapshot.position, snapshot.angle)]
        pygame.draw.polygon(surface, SHIP_COLOR, points)
        return
    # the image points up; drawn at half its native size in world units
    rotated = pygame.transform.rotozoom(image, math.degrees(snapshot.angle - math.pi / 2), scale / 2)
    rect = rotated.get_rect(center=world_to_screen(snapshot.position, size, scale))
    surface.blit(rotated, rect)


def draw_projectiles(surface: pygame.Surface, snapshot: SimulationSnapshot, scale: float) -> None:
    size = surface.get_size()
    thickness = max(1, int(scale))
    for projectile in snapshot.projectiles:
        for start, end in rail_segments(projectile.position, projectile.angle):
            pygame.draw.line(
                surface,
                RAIL_COLOR,
                world_to_screen(start, size, scale),
                world_to_screen(end, size, scale),
                thickness,
            )


def draw_scene(
    surface: pygame.Surface,
    snapshot: SimulationSnapshot,
    scale: float,
    ship_image: Optional[pygame.Surface] = None,
) -> None:
    surface.fill(BACKGROUND_COLOR)
    draw_projectiles(surface, snapshot, scale)
    draw_ship(surface, snapshot, scale, ship_image)


def handle_events() -> bool:
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            return False
    return True


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Wraparound drift ship")
    parser.add_argument("--width", type=int, default=WIDTH, help="window width in pixels")
    parser.add_argument("--height", type=int, default=HEIGHT, help="window height in pixels")
    parser.add_argument("--ship-image", type=Path, default=None, help="sprite drawn instead of the outline")
    parser.add_argument(
        "--legacy-culling",
        action="store_true",
        help="cull projectiles using the craft's position on three edges",
    )
    parser.add_argument("--debug", action="store_true", help="log simulation events to the console")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if args.width <= 0 or args.height <= 0:
        raise SystemExit(f"Window size must be positive, got {args.width}x{args.height}")

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
    pygame.display.set_caption("Drift Ship")
    pygame.mouse.set_visible(False)
    clock = pygame.time.Clock()

    ship_image = load_ship_image(args.ship_image) if args.ship_image else None

    config = SimulationConfig(
        cull_policy=CullPolicy.LEGACY if args.legacy_culling else CullPolicy.OWN_POSITION,
    )
    simulation = Simulation(config=config)
    logger.debug(f"Window {screen.get_size()} with culling policy {config.cull_policy.value}")

    running = True
    while running:
        dt = clock.tick(FPS_TARGET) / 1000.0

        running = handle_events()
        if not running:
            break

        intents = resolve_intents(held_controls(pygame.key.get_pressed()))
        simulation.update(intents, dt, screen.get_size())

        draw_scene(screen, simulation.snapshot(), config.viewport_scale, ship_image)
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
