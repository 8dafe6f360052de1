from collections import defaultdict

import numpy as np
import pygame
import pytest

import game
from ship_game.controls import Control
from ship_game.simulation import Simulation


def test_held_controls_follow_bindings():
    pressed = defaultdict(bool, {pygame.K_a: True, pygame.K_d: True, pygame.K_SPACE: True})

    held = game.held_controls(pressed)

    assert held == {Control.TURN_LEFT, Control.TURN_RIGHT, Control.FIRE}


def test_world_origin_maps_to_window_centre():
    assert game.world_to_screen(np.array([0.0, 0.0]), (800, 600), 2) == (400, 300)
    # the wrap boundary lands on the window edge
    assert game.world_to_screen(np.array([200.0, 150.0]), (800, 600), 2) == (800, 0)


def test_rails_flank_projectile_path():
    (left_start, left_end), (right_start, right_end) = game.rail_segments(np.array([0.0, 0.0]), 0.0)

    assert left_start == pytest.approx([-10.0, 10.0])
    assert left_end == pytest.approx([10.0, 10.0])
    assert right_start == pytest.approx([-10.0, -10.0])
    assert right_end == pytest.approx([10.0, -10.0])


@pytest.mark.smoke
def test_scene_draws_headless(monkeypatch):
    """Render one frame to an off-screen surface."""

    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    times = iter([0.0, 1.0])
    simulation = Simulation(clock=lambda: next(times))
    simulation.update(game.resolve_intents({Control.FIRE}), 0.016, (800, 600))

    surface = pygame.Surface((800, 600))
    game.draw_scene(surface, simulation.snapshot(), 2)

    assert tuple(surface.get_at((400, 300)))[:3] == game.SHIP_COLOR
