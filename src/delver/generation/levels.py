"""Level assembly: generation, population and stairs, wired into a World."""

from __future__ import annotations

import random
from collections.abc import Callable
from itertools import count

from delver.core.config import DungeonSettings, Settings, get_settings
from delver.core.logging import bind_context, get_logger, unbind_context
from delver.generation.bestiary import create_stairs
from delver.generation.dungeon import GeneratedLevel, generate
from delver.generation.population import populate_items, populate_monsters
from delver.models.ecs import Entity, create_player
from delver.models.grid import Grid, Rect
from delver.models.world import World


logger = get_logger(__name__)


def _generate_populated(
    settings: DungeonSettings,
    rng: random.Random,
    next_id: Callable[[], int],
    *,
    depth: int,
    world_path: float | None,
) -> tuple[GeneratedLevel, list[Entity], dict[int, Entity]]:
    roster: list[Entity] = []
    items: dict[int, Entity] = {}

    def populate(room: Rect, grid: Grid, start: tuple[int, int]) -> None:
        populate_monsters(room, grid, roster, settings, rng, depth=depth, reserved=(start,))
        populate_items(room, items, next_id, settings, rng)

    bind_context(depth=depth)
    try:
        level = generate(settings, rng, on_room=populate, world_path=world_path)
    finally:
        unbind_context("depth")

    stairs_x, stairs_y = level.last_room.center()
    items[next_id()] = create_stairs(stairs_x, stairs_y)
    logger.debug(
        "Level populated",
        depth=depth,
        monsters=len(roster),
        items=len(items) - 1,
        stairs=(stairs_x, stairs_y),
    )
    return level, roster, items


def create_world(
    settings: Settings | None = None,
    *,
    seed: int | None = None,
    world_path: float | None = None,
) -> World:
    """Generate the first level and a fresh player.

    Args:
        settings: Application settings; the cached singleton if omitted.
        seed: Seed for the world's random source.
        world_path: Force the level style instead of drawing it.

    Raises:
        GenerationError: If the dungeon settings leave no room to carve.
    """
    settings = settings or get_settings()
    rng = random.Random(seed)
    counter = count(1)

    level, roster, items = _generate_populated(
        settings.dungeon, rng, lambda: next(counter), depth=1, world_path=world_path
    )
    world = World(
        grid=level.grid,
        player=create_player(*level.start),
        roster=roster,
        items=items,
        item_counter=next(counter),
        depth=1,
    )
    world.attach_rng(rng)
    world.messages.add("Welcome, delver! Find the stairs and go deeper.")
    logger.info("World created", seed=seed, monsters=len(roster), items=len(items))
    return world


def build_level(
    world: World,
    settings: DungeonSettings | None = None,
    *,
    depth: int | None = None,
    world_path: float | None = None,
) -> GeneratedLevel:
    """Replace the world's level with a new one at ``depth``.

    The level is generated in full before the world is touched, so a
    :class:`GenerationError` leaves the depth, the item counter and the
    current level as they were. The player keeps their inventory; item
    identifiers keep counting from where the previous level stopped.

    Args:
        world: The world to move to the new level.
        settings: Dungeon settings; the cached singleton's if omitted.
        depth: Depth of the new level; ``world.depth`` if omitted.
        world_path: Force the level style instead of drawing it.

    Raises:
        GenerationError: If the dungeon settings leave no room to carve.
    """
    settings = settings or get_settings().dungeon
    if depth is None:
        depth = world.depth
    counter = count(world.item_counter)

    level, roster, items = _generate_populated(
        settings, world.rng, lambda: next(counter), depth=depth, world_path=world_path
    )
    world.item_counter = next(counter)
    world.depth = depth
    world.replace_level(level.grid, roster, items, level.start)
    return level


__all__ = ["create_world", "build_level"]
