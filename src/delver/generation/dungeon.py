"""Room and tunnel generator.

A level is carved out of solid wall by a fixed number of room placement
attempts. One "world path" value, drawn once per level, picks the style:

- below 0.5, "ruinous": every room is carved, overlaps merge into larger
  open areas;
- 0.5 and above, "constructed": a room touching any earlier rectangle is
  rejected.

Each accepted room is joined to the previously accepted one by an L-shaped
pair of one-tile tunnels, which keeps every floor tile reachable from the
start position.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass, field

from delver.core.config import DungeonSettings
from delver.core.exceptions import GenerationError
from delver.core.logging import bind_context, get_logger, unbind_context
from delver.models.grid import Grid, Palette, Rect


logger = get_logger(__name__)

CONSTRUCTED_THRESHOLD = 0.5

RoomCallback = Callable[[Rect, Grid, tuple[int, int]], None]
"""Called for every accepted room with the grid and the start position."""


@dataclass
class GeneratedLevel:
    """Result of one generation.

    Attributes:
        grid: The carved grid.
        start: Center of the first accepted room.
        rooms: Accepted rooms in carving order.
        world_path: The style value used for this level.
        attempts: Every rectangle drawn, accepted or not.
    """

    grid: Grid
    start: tuple[int, int]
    rooms: list[Rect] = field(default_factory=list)
    world_path: float = 0.0
    attempts: list[Rect] = field(default_factory=list)

    @property
    def constructed(self) -> bool:
        return is_constructed(self.world_path)

    @property
    def last_room(self) -> Rect:
        return self.rooms[-1]


def is_constructed(world_path: float) -> bool:
    return world_path >= CONSTRUCTED_THRESHOLD


def draw_room(settings: DungeonSettings, rng: random.Random) -> Rect | None:
    """Draw a random rectangle that fits inside the grid.

    Returns None when the drawn size cannot fit at all; the attempt is
    still spent.
    """
    width = rng.randint(settings.min_room_size, settings.max_room_size)
    height = rng.randint(settings.min_room_size, settings.max_room_size)
    if width >= settings.grid_width or height >= settings.grid_height:
        return None
    x = rng.randrange(settings.grid_width - width)
    y = rng.randrange(settings.grid_height - height)
    return Rect.from_size(x, y, width, height)


def connect_rooms(grid: Grid, previous: Rect, room: Rect, rng: random.Random) -> None:
    """Carve an L-shaped tunnel between two room centers."""
    prev_x, prev_y = previous.center()
    new_x, new_y = room.center()
    if rng.random() < 0.5:
        grid.carve_h_tunnel(prev_x, new_x, prev_y, rng)
        grid.carve_v_tunnel(prev_y, new_y, new_x, rng)
    else:
        grid.carve_v_tunnel(prev_y, new_y, prev_x, rng)
        grid.carve_h_tunnel(prev_x, new_x, new_y, rng)


def generate(
    settings: DungeonSettings,
    rng: random.Random,
    *,
    on_room: RoomCallback | None = None,
    world_path: float | None = None,
) -> GeneratedLevel:
    """Carve a new level.

    Args:
        settings: Grid size, room size bounds and attempt count.
        rng: Random source; a fixed seed reproduces the level exactly.
        on_room: Called once per accepted room, after carving and before
            the room is tunnelled to its predecessor. Population hooks in
            here.
        world_path: Style value in [0, 1). Drawn from ``rng`` if omitted.

    Returns:
        The carved level.

    Raises:
        GenerationError: If no room was accepted.
    """
    palette = Palette.generate(rng)
    grid = Grid.new(settings.grid_width, settings.grid_height, palette)
    if world_path is None:
        world_path = rng.random()
    constructed = is_constructed(world_path)

    attempts: list[Rect] = []
    rooms: list[Rect] = []
    start: tuple[int, int] | None = None
    rejected = 0

    bind_context(world_path=round(world_path, 3))
    try:
        for _ in range(settings.max_rooms):
            room = draw_room(settings, rng)
            if room is None:
                rejected += 1
                continue

            overlaps = any(room.intersects(other) for other in attempts)
            attempts.append(room)
            if constructed and overlaps:
                rejected += 1
                continue

            grid.carve_room(room, rng)
            if start is None:
                start = room.center()
            if on_room is not None:
                on_room(room, grid, start)
            if rooms:
                connect_rooms(grid, rooms[-1], room, rng)
            rooms.append(room)
    finally:
        unbind_context("world_path")

    if start is None:
        logger.warning(
            "Generation produced no rooms",
            attempts=settings.max_rooms,
            world_path=world_path,
        )
        raise GenerationError(
            "No room could be placed; adjust grid or room size settings",
            attempts=settings.max_rooms,
            accepted=0,
        )

    logger.info(
        "Level generated",
        world_path=round(world_path, 3),
        style="constructed" if constructed else "ruinous",
        accepted=len(rooms),
        rejected=rejected,
    )
    return GeneratedLevel(
        grid=grid,
        start=start,
        rooms=rooms,
        world_path=world_path,
        attempts=attempts,
    )


__all__ = [
    "CONSTRUCTED_THRESHOLD",
    "RoomCallback",
    "GeneratedLevel",
    "is_constructed",
    "draw_room",
    "connect_rooms",
    "generate",
]
