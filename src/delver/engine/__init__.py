"""Turn engine for the delver simulation core.

Submodules:
    combat: Attack rolls, damage, healing and death.
    ai: Monster behavior state machine.
    progression: Player levelling.
    actions: Player intents and their resolution.
    loop: The per-intent world tick.

Example:
    >>> from delver.engine import GameLoop, Move
    >>> from delver.generation import create_world
    >>> world = create_world(seed=7)
    >>> loop = GameLoop(world, fov=lambda x, y: True)
    >>> result = loop.step(Move(dx=1, dy=0))
"""

from __future__ import annotations

from delver.engine.actions import (
    ActionContext,
    ActionOutcome,
    CharacterSheet,
    Descend,
    DropItem,
    Exit,
    Intent,
    InventoryQuery,
    Move,
    Pickup,
    PlayerAction,
    UseItem,
    Wait,
    handle_intent,
)
from delver.engine.ai import FieldOfView, next_state, run_ai_pass, take_turn
from delver.engine.combat import heal, resolve_attack, take_damage
from delver.engine.loop import GameLoop, TurnResult, TurnStatus
from delver.engine.progression import LevelUpChoice, check_level_up, experience_to_level


__all__ = [
    # Intents
    "Intent",
    "Move",
    "Wait",
    "Pickup",
    "UseItem",
    "DropItem",
    "Descend",
    "InventoryQuery",
    "Exit",
    "PlayerAction",
    "CharacterSheet",
    "ActionContext",
    "ActionOutcome",
    "handle_intent",
    # AI
    "FieldOfView",
    "next_state",
    "take_turn",
    "run_ai_pass",
    # Combat
    "take_damage",
    "heal",
    "resolve_attack",
    # Progression
    "LevelUpChoice",
    "check_level_up",
    "experience_to_level",
    # Loop
    "GameLoop",
    "TurnResult",
    "TurnStatus",
]
