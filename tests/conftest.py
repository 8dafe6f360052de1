import pytest

from ship_game.simulation import Craft


@pytest.fixture
def viewport_size() -> tuple[int, int]:
    """800x600 pixels, a 400x300 playfield once scaled."""

    return (800, 600)


@pytest.fixture
def craft() -> Craft:
    return Craft.spawn(now=0.0)
