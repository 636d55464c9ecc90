"""World aggregate: the single owner of all mutable simulation state.

Generation, the AI engine and combat all mutate the same grid and roster.
They do so only through the entry points on :class:`World`, which keeps
two guarantees in one place:

- every movement passes through :meth:`World.move_by`, so nothing ever
  walks into a wall or another blocking entity;
- item identifiers come from one monotonically increasing counter and are
  never reused, so the floor map and the inventory can refer to the same
  item without aliasing either container.

The random source is private and deliberately not part of the saved
record; reload a world and call :meth:`World.seed` for reproducible play.
"""

from __future__ import annotations

import random
from collections.abc import Iterator
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from delver.core.exceptions import InvalidGameStateError, PersistenceError
from delver.core.logging import get_logger
from delver.models.ecs import Entity
from delver.models.grid import Grid
from delver.models.messages import MessageLog


logger = get_logger(__name__)


class World(BaseModel):
    """Everything that changes while the game runs.

    Attributes:
        grid: The current level's tiles.
        player: The player entity. Not part of the roster.
        roster: Monsters in spawn order. Dead monsters stay until
            :meth:`remove_dead` is called.
        items: Entities lying on the floor, keyed by item identifier.
        inventory: Items the player carries, keyed by identifier, in
            pickup order.
        messages: The player-facing message feed.
        item_counter: The identifier the next new item will receive.
        depth: Dungeon level, starting at 1.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    grid: Grid
    player: Entity
    roster: list[Entity] = Field(default_factory=list)
    items: dict[int, Entity] = Field(default_factory=dict)
    inventory: dict[int, Entity] = Field(default_factory=dict)
    messages: MessageLog = Field(default_factory=MessageLog)
    item_counter: int = Field(default=1, ge=1)
    depth: int = Field(default=1, ge=1)

    _rng: random.Random = PrivateAttr(default_factory=random.Random)

    # -------------------------------------------------------------------------
    # Randomness
    # -------------------------------------------------------------------------

    @property
    def rng(self) -> random.Random:
        return self._rng

    def seed(self, value: int | None) -> None:
        self._rng.seed(value)

    def attach_rng(self, rng: random.Random) -> None:
        """Continue an existing random stream, e.g. the one that generated the grid."""
        self._rng = rng

    # -------------------------------------------------------------------------
    # Occupancy
    # -------------------------------------------------------------------------

    def actors(self) -> Iterator[Entity]:
        """The player followed by the roster."""
        yield self.player
        yield from self.roster

    def entities(self) -> Iterator[Entity]:
        """Everything a renderer draws: floor items first, then actors."""
        yield from self.items.values()
        yield from self.actors()

    def blocking_entity_at(self, x: int, y: int) -> Entity | None:
        for entity in self.actors():
            if entity.blocks and entity.pos() == (x, y):
                return entity
        return None

    def is_blocked(self, x: int, y: int) -> bool:
        """True if (x, y) is wall, off the grid, or holds a blocking entity."""
        if self.grid.is_wall(x, y):
            return True
        return self.blocking_entity_at(x, y) is not None

    def items_at(self, x: int, y: int) -> list[tuple[int, Entity]]:
        return [(item_id, item) for item_id, item in self.items.items() if item.pos() == (x, y)]

    # -------------------------------------------------------------------------
    # Movement
    # -------------------------------------------------------------------------

    def move_by(self, entity: Entity, dx: int, dy: int) -> bool:
        """Step ``entity`` by (dx, dy) unless the target cell is blocked.

        Returns:
            True if the entity moved.
        """
        x, y = entity.x + dx, entity.y + dy
        if (dx, dy) == (0, 0) or self.is_blocked(x, y):
            return False
        entity.x = x
        entity.y = y
        return True

    def move_towards(self, entity: Entity, target_x: int, target_y: int) -> bool:
        """Take one grid step (diagonals included) towards a target cell."""
        dx = target_x - entity.x
        dy = target_y - entity.y
        distance = entity.distance(target_x, target_y)
        if distance == 0:
            return False
        return self.move_by(entity, round(dx / distance), round(dy / distance))

    # -------------------------------------------------------------------------
    # Roster and items
    # -------------------------------------------------------------------------

    def spawn(self, entity: Entity) -> Entity:
        """Append a monster to the roster; it acts after everything spawned before it."""
        self.roster.append(entity)
        logger.debug("Entity spawned", name=entity.name, x=entity.x, y=entity.y)
        return entity

    def remove_dead(self) -> list[Entity]:
        """Drop dead entities from the roster and return them."""
        dead = [entity for entity in self.roster if not entity.alive]
        if dead:
            self.roster = [entity for entity in self.roster if entity.alive]
            logger.debug("Dead entities removed", count=len(dead))
        return dead

    def next_item_id(self) -> int:
        item_id = self.item_counter
        self.item_counter = item_id + 1
        return item_id

    def add_item(self, item: Entity) -> int:
        """Put a new item on the floor under a fresh identifier."""
        item_id = self.next_item_id()
        self.items[item_id] = item
        return item_id

    def replace_level(
        self,
        grid: Grid,
        roster: list[Entity],
        items: dict[int, Entity],
        start: tuple[int, int],
    ) -> None:
        """Swap in a freshly generated level around the player.

        The inventory and the item counter carry over.
        """
        for item_id in items:
            if item_id >= self.item_counter or item_id in self.inventory:
                raise InvalidGameStateError(
                    "Generated item identifier was not allocated by this world",
                    details={"item_id": item_id, "item_counter": self.item_counter},
                )
        self.grid = grid
        self.roster = roster
        self.items = items
        self.player.place(*start)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def to_record(self) -> dict[str, Any]:
        """Dump the full state to JSON-compatible primitives."""
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_record(cls, record: dict[str, Any], *, seed: int | None = None) -> Self:
        """Rebuild a world from :meth:`to_record` output.

        Raises:
            PersistenceError: If the record is malformed or breaks an
                invariant.
        """
        try:
            world = cls.model_validate(record)
        except (ValidationError, InvalidGameStateError) as exc:
            raise PersistenceError(
                "Saved world record cannot be reconstructed",
                details={"original_error": str(exc)},
            ) from exc
        world.seed(seed)
        return world

    @classmethod
    def from_json(cls, data: str | bytes, *, seed: int | None = None) -> Self:
        try:
            world = cls.model_validate_json(data)
        except (ValidationError, InvalidGameStateError) as exc:
            raise PersistenceError(
                "Saved world JSON cannot be reconstructed",
                details={"original_error": str(exc)},
            ) from exc
        world.seed(seed)
        return world


__all__ = ["World"]
