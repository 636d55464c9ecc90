"""Pydantic V2 data model for the delver simulation core.

Submodules:
    grid: Tiles, rectangles and the carved grid.
    ecs: Entities and their Fighter/AI/Item components.
    messages: The player-facing message feed.
    world: The single-owner world aggregate and its persistence.

Example:
    >>> from delver.models import Grid, Palette, World, create_player
    >>> import random
    >>> grid = Grid.new(10, 10, Palette.generate(random.Random(1)))
    >>> world = World(grid=grid, player=create_player())
"""

from __future__ import annotations

from delver.models.ecs import (
    Ai,
    BasicAi,
    Component,
    ConfusedAi,
    DeathBehavior,
    Entity,
    FearAi,
    FighterComponent,
    ItemComponent,
    ItemKind,
    ai_depth,
    create_player,
)
from delver.models.grid import Color, Grid, Palette, Rect, Terrain, Tile
from delver.models.messages import Message, MessageLog
from delver.models.world import World


__all__ = [
    # Grid
    "Color",
    "Grid",
    "Palette",
    "Rect",
    "Terrain",
    "Tile",
    # Entities
    "Ai",
    "BasicAi",
    "Component",
    "ConfusedAi",
    "DeathBehavior",
    "Entity",
    "FearAi",
    "FighterComponent",
    "ItemComponent",
    "ItemKind",
    "ai_depth",
    "create_player",
    # Messages
    "Message",
    "MessageLog",
    # World
    "World",
]
