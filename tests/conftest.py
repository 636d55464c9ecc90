"""Pytest configuration and shared fixtures.

This module provides common fixtures for the delver test suite: a clean
settings cache, seeded random sources, and small hand-built worlds whose
layout is known exactly.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Callable, Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from delver.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "DELVER_DEBUG": "true",
        "DELVER_LOG_LEVEL": "DEBUG",
        "DELVER_DUNGEON_MAX_ROOMS": "5",
        "DELVER_GAME_HEAL_AMOUNT": "7",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def settings() -> Any:
    """Default application settings, independent of the cached singleton."""
    from delver.core.config import Settings

    return Settings()


@pytest.fixture
def small_dungeon() -> Any:
    """Dungeon settings for a small but roomy grid."""
    from delver.core.config import DungeonSettings

    return DungeonSettings(
        grid_width=40,
        grid_height=30,
        min_room_size=4,
        max_room_size=8,
        max_rooms=10,
        max_monsters_per_room=3,
        max_items_per_room=2,
    )


# =============================================================================
# Randomness
# =============================================================================


@pytest.fixture
def rng() -> random.Random:
    """A deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def always_visible() -> Callable[[int, int], bool]:
    """Field of view in which every cell is visible."""
    return lambda x, y: True


@pytest.fixture
def never_visible() -> Callable[[int, int], bool]:
    """Field of view in which nothing is visible."""
    return lambda x, y: False


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def palette() -> Any:
    """A fixed palette so tile colors are predictable."""
    from delver.models.grid import Palette

    return Palette(wall=(50, 50, 100), floor=(100, 100, 200), jitter=0)


@pytest.fixture
def open_grid(palette: Any, rng: random.Random) -> Any:
    """A 10x10 grid with floor on every cell except the outer ring."""
    from delver.models.grid import Grid, Rect

    grid = Grid.new(10, 10, palette)
    grid.carve_room(Rect(0, 0, 9, 9), rng)
    return grid


@pytest.fixture
def world(open_grid: Any) -> Any:
    """A world on the open 10x10 grid with the player at (2, 2)."""
    from delver.models.ecs import create_player
    from delver.models.world import World

    world = World(grid=open_grid, player=create_player(2, 2))
    world.seed(99)
    return world


@pytest.fixture
def make_monster() -> Callable[..., Any]:
    """Factory for monsters with chosen stats.

    Returns:
        A function building a Basic-AI monster at (x, y).
    """
    from delver.models.ecs import BasicAi, DeathBehavior, Entity, FighterComponent

    def _make(
        x: int,
        y: int,
        *,
        name: str = "goblin",
        hp: int = 10,
        defense: int = 0,
        power: int = 3,
        experience: int = 35,
        level: int = 1,
    ) -> Entity:
        return Entity(
            name=name,
            glyph="g",
            color=(0, 255, 0),
            x=x,
            y=y,
            blocks=True,
            alive=True,
            level=level,
            fighter=FighterComponent(
                hp=hp,
                max_hp=hp,
                defense=defense,
                power=power,
                experience=experience,
                on_death=DeathBehavior.MONSTER,
            ),
            ai=BasicAi(),
        )

    return _make


@pytest.fixture
def make_item() -> Callable[..., Any]:
    """Factory for floor items of a given kind."""
    from delver.models.ecs import Entity, ItemComponent, ItemKind

    def _make(x: int, y: int, kind: ItemKind = ItemKind.HEAL, *, name: str | None = None) -> Entity:
        return Entity(
            name=name or f"{kind} item",
            glyph="!",
            x=x,
            y=y,
            item=ItemComponent(kind=kind),
        )

    return _make
