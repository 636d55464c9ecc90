"""delver - simulation core of a turn-based dungeon crawler.

Procedural level generation plus the entity turn engine: monster AI,
combat resolution and player intents. Rendering, input mapping and
on-disk storage are left to the caller, which reads the world between
ticks and feeds intents in.

Example:
    >>> from delver import GameLoop, Move, create_world
    >>> world = create_world(seed=42)
    >>> loop = GameLoop(world, fov=lambda x, y: True)
    >>> loop.step(Move(dx=0, dy=1)).action
    <PlayerAction.TOOK_TURN: 'took_turn'>

Modules:
    core: Configuration, logging, and base exceptions.
    models: Grid, entities, message feed and the world aggregate.
    generation: Rooms, tunnels, population and level assembly.
    engine: Combat, AI, player intents and the turn loop.
"""

from __future__ import annotations

from delver.core.config import Settings, get_settings
from delver.core.exceptions import DelverError, GenerationError, InvalidGameStateError
from delver.core.logging import configure_logging, get_logger
from delver.engine import GameLoop, Move, PlayerAction, TurnResult
from delver.generation import create_world
from delver.models import Entity, Grid, World


__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "DelverError",
    "GenerationError",
    "InvalidGameStateError",
    "GameLoop",
    "Move",
    "PlayerAction",
    "TurnResult",
    "create_world",
    "Entity",
    "Grid",
    "World",
]
