"""Population planner: monsters and items for freshly carved rooms."""

from __future__ import annotations

import random
from collections.abc import Callable, Collection

from delver.core.config import DungeonSettings
from delver.core.logging import get_logger
from delver.generation.bestiary import choose_item, create_item, spawn_monster
from delver.models.ecs import Entity
from delver.models.grid import Grid, Rect


logger = get_logger(__name__)


def _occupied(x: int, y: int, grid: Grid, roster: list[Entity], reserved: Collection[tuple[int, int]]) -> bool:
    if grid.is_wall(x, y) or (x, y) in reserved:
        return True
    return any(entity.blocks and entity.pos() == (x, y) for entity in roster)


def populate_monsters(
    room: Rect,
    grid: Grid,
    roster: list[Entity],
    settings: DungeonSettings,
    rng: random.Random,
    *,
    depth: int = 1,
    reserved: Collection[tuple[int, int]] = (),
) -> list[Entity]:
    """Roll up to ``max_monsters_per_room`` monsters into ``room``.

    A roll that lands on a blocked cell (wall, a blocking entity already in
    ``roster``, or a ``reserved`` cell such as the player start) is
    skipped rather than retried.

    Returns:
        The monsters appended to ``roster``, in spawn order.
    """
    spawned: list[Entity] = []
    for _ in range(rng.randint(0, settings.max_monsters_per_room)):
        x, y = room.random_interior_cell(rng)
        if _occupied(x, y, grid, roster, reserved):
            continue
        monster = spawn_monster(rng, depth, x, y)
        roster.append(monster)
        spawned.append(monster)
        logger.debug("Monster placed", name=monster.name, x=x, y=y)
    return spawned


def populate_items(
    room: Rect,
    items: dict[int, Entity],
    next_id: Callable[[], int],
    settings: DungeonSettings,
    rng: random.Random,
) -> list[int]:
    """Roll up to ``max_items_per_room`` items into ``room``.

    Items do not block, so they may share a cell with a monster or with
    each other.

    Returns:
        The identifiers of the new items, in allocation order.
    """
    placed: list[int] = []
    for _ in range(rng.randint(0, settings.max_items_per_room)):
        x, y = room.random_interior_cell(rng)
        item_id = next_id()
        items[item_id] = create_item(choose_item(rng), x, y)
        placed.append(item_id)
    return placed


__all__ = ["populate_monsters", "populate_items"]
