"""Player intents and their resolution.

The input layer turns key presses into :data:`Intent` values; this module
carries them out against the world and reports whether the player spent
their turn. Intents that cannot be carried out (nothing to pick up, empty
inventory slot, no stairs) never raise past :func:`handle_intent`: they
become a message in the feed and cost no turn.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from delver.core.config import Settings, get_settings
from delver.core.constants import GREEN, LIGHT_GREEN, LIGHT_VIOLET, RED, STAIRS_NAME, VIOLET, YELLOW
from delver.core.exceptions import InvalidIntentError
from delver.core.logging import get_logger
from delver.engine.ai import FieldOfView
from delver.engine.combat import heal, resolve_attack
from delver.engine.progression import LevelUpChoice, check_level_up, experience_to_level
from delver.generation.levels import build_level
from delver.models.ecs import ConfusedAi, Entity, FearAi, ItemKind
from delver.models.world import World


logger = get_logger(__name__)


# =============================================================================
# Intents
# =============================================================================


class _IntentBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Move(_IntentBase):
    """Step or attack in one of the eight directions."""

    kind: Literal["move"] = "move"
    dx: int = Field(ge=-1, le=1)
    dy: int = Field(ge=-1, le=1)


class Wait(_IntentBase):
    kind: Literal["wait"] = "wait"


class Pickup(_IntentBase):
    kind: Literal["pickup"] = "pickup"


class UseItem(_IntentBase):
    kind: Literal["use_item"] = "use_item"
    index: int


class DropItem(_IntentBase):
    kind: Literal["drop_item"] = "drop_item"
    index: int


class Descend(_IntentBase):
    kind: Literal["descend"] = "descend"


class InventoryQuery(_IntentBase):
    kind: Literal["inventory_query"] = "inventory_query"


class Exit(_IntentBase):
    kind: Literal["exit"] = "exit"


Intent = Annotated[
    Move | Wait | Pickup | UseItem | DropItem | Descend | InventoryQuery | Exit,
    Field(discriminator="kind"),
]


# =============================================================================
# Results
# =============================================================================


class PlayerAction(StrEnum):
    """What the caller should do after an intent was handled."""

    TOOK_TURN = "took_turn"
    """Run the monster AI pass."""

    DIDNT_TAKE_TURN = "didnt_take_turn"
    """Wait for the next intent."""

    EXIT = "exit"
    """Leave the game."""


@dataclass(frozen=True)
class CharacterSheet:
    """Snapshot of the player's progression for the character screen."""

    level: int
    experience: int
    experience_to_level: int
    hp: int
    max_hp: int
    power: int
    defense: int


@dataclass(frozen=True)
class ActionOutcome:
    action: PlayerAction
    sheet: CharacterSheet | None = None


@dataclass
class ActionContext:
    """Everything an intent handler may touch."""

    world: World
    fov: FieldOfView
    settings: Settings
    level_up_choice: LevelUpChoice = LevelUpChoice.CONSTITUTION


# =============================================================================
# Helpers
# =============================================================================


def _inventory_slot(world: World, index: int, intent: str) -> tuple[int, Entity]:
    slots = list(world.inventory.items())
    if not 0 <= index < len(slots):
        raise InvalidIntentError("There is no item in that slot.", intent=intent, details={"index": index})
    return slots[index]


def closest_monster(world: World, fov: FieldOfView, max_range: float) -> Entity | None:
    """The nearest living, visible monster within ``max_range`` of the player."""
    player = world.player
    closest: Entity | None = None
    closest_distance = max_range
    for monster in world.roster:
        if not monster.alive or monster.fighter is None or monster.ai is None:
            continue
        if not fov(monster.x, monster.y):
            continue
        distance = player.distance_to(monster)
        if distance > max_range:
            continue
        # Ties go to the earlier spawn.
        if closest is None or distance < closest_distance:
            closest = monster
            closest_distance = distance
    return closest


# =============================================================================
# Handlers
# =============================================================================


def _move(intent: Move, ctx: ActionContext) -> ActionOutcome:
    world = ctx.world
    player = world.player
    target = world.blocking_entity_at(player.x + intent.dx, player.y + intent.dy)
    if target is not None and target is not player and target.fighter is not None and target.alive:
        resolve_attack(player, target, world)
        check_level_up(world, ctx.settings.game, ctx.level_up_choice)
    else:
        world.move_by(player, intent.dx, intent.dy)
    return ActionOutcome(PlayerAction.TOOK_TURN)


def _wait(intent: Wait, ctx: ActionContext) -> ActionOutcome:
    return ActionOutcome(PlayerAction.TOOK_TURN)


def _pickup(intent: Pickup, ctx: ActionContext) -> ActionOutcome:
    world = ctx.world
    candidates = [(item_id, item) for item_id, item in world.items_at(*world.player.pos()) if item.item is not None]
    if not candidates:
        raise InvalidIntentError("There's no item to grab...", intent=intent.kind)

    item_id, item = candidates[0]
    if len(world.inventory) >= ctx.settings.game.inventory_capacity:
        raise InvalidIntentError(
            f"Your inventory is full, cannot pick up {item.name}.",
            intent=intent.kind,
        )

    del world.items[item_id]
    world.inventory[item_id] = item
    world.messages.add(f"You picked up a {item.name}!", GREEN)
    logger.debug("Item picked up", item_id=item_id, name=item.name)
    return ActionOutcome(PlayerAction.TOOK_TURN)


def _use_item(intent: UseItem, ctx: ActionContext) -> ActionOutcome:
    world = ctx.world
    game = ctx.settings.game
    item_id, item = _inventory_slot(world, intent.index, intent.kind)
    component = item.item
    if component is None:
        raise InvalidIntentError(f"The {item.name} cannot be used.", intent=intent.kind)

    if component.kind == ItemKind.HEAL:
        player = world.player
        if player.fighter is None or player.fighter.is_full_health:
            raise InvalidIntentError("You are already at full health.", intent=intent.kind)
        heal(player, component.amount if component.amount is not None else game.heal_amount)
        world.messages.add("Your wounds start to feel better!", LIGHT_VIOLET)

    elif component.kind == ItemKind.CONFUSE:
        target = closest_monster(world, ctx.fov, game.spell_range)
        if target is None:
            raise InvalidIntentError("No enemy is close enough to confuse.", intent=intent.kind)
        turns = component.amount if component.amount is not None else game.confuse_num_turns
        target.ai = ConfusedAi(previous=target.ai, turns_remaining=turns)
        world.messages.add(
            f"The eyes of the {target.name} look vacant, as it starts to stumble around!",
            LIGHT_GREEN,
        )

    elif component.kind == ItemKind.FEAR:
        target = closest_monster(world, ctx.fov, game.spell_range)
        if target is None:
            raise InvalidIntentError("No enemy is close enough to frighten.", intent=intent.kind)
        turns = component.amount if component.amount is not None else game.fear_num_turns
        target.ai = FearAi(previous=target.ai, turns_remaining=turns)
        world.messages.add(f"The {target.name} is frozen in fear!", LIGHT_GREEN)

    del world.inventory[item_id]
    logger.debug("Item used", item_id=item_id, kind=str(component.kind))
    return ActionOutcome(PlayerAction.TOOK_TURN)


def _drop_item(intent: DropItem, ctx: ActionContext) -> ActionOutcome:
    world = ctx.world
    item_id, item = _inventory_slot(world, intent.index, intent.kind)
    del world.inventory[item_id]
    item.place(*world.player.pos())
    world.items[item_id] = item
    world.messages.add(f"You dropped a {item.name}.", YELLOW)
    return ActionOutcome(PlayerAction.DIDNT_TAKE_TURN)


def _descend(intent: Descend, ctx: ActionContext) -> ActionOutcome:
    world = ctx.world
    player = world.player
    on_stairs = any(item.name == STAIRS_NAME for _, item in world.items_at(*player.pos()))
    if not on_stairs:
        raise InvalidIntentError("There are no stairs here.", intent=intent.kind)

    # Nothing is touched until the new level exists.
    build_level(world, ctx.settings.dungeon, depth=world.depth + 1)
    world.messages.add("You take a moment to rest, and recover your strength.", VIOLET)
    if player.fighter is not None:
        heal(player, player.fighter.max_hp // 2)
    world.messages.add(
        "After a rare moment of peace, you descend deeper into the heart of the dungeon...",
        RED,
    )
    logger.info("Player descended", depth=world.depth)
    return ActionOutcome(PlayerAction.DIDNT_TAKE_TURN)


def _inventory_query(intent: InventoryQuery, ctx: ActionContext) -> ActionOutcome:
    return ActionOutcome(PlayerAction.DIDNT_TAKE_TURN, sheet=character_sheet(ctx.world, ctx.settings))


def character_sheet(world: World, settings: Settings | None = None) -> CharacterSheet:
    settings = settings or get_settings()
    player = world.player
    fighter = player.fighter
    return CharacterSheet(
        level=player.level,
        experience=fighter.experience if fighter else 0,
        experience_to_level=experience_to_level(player.level, settings.game),
        hp=fighter.hp if fighter else 0,
        max_hp=fighter.max_hp if fighter else 0,
        power=fighter.power if fighter else 0,
        defense=fighter.defense if fighter else 0,
    )


_HANDLERS: dict[str, Callable[..., ActionOutcome]] = {
    "move": _move,
    "wait": _wait,
    "pickup": _pickup,
    "use_item": _use_item,
    "drop_item": _drop_item,
    "descend": _descend,
    "inventory_query": _inventory_query,
}


# =============================================================================
# Dispatch
# =============================================================================


def handle_intent(intent: Intent, ctx: ActionContext) -> ActionOutcome:
    """Carry out one player intent.

    A dead player can only exit. Rejected intents are reported in the
    message feed and cost no turn.

    Raises:
        GenerationError: If descending cannot build the next level. The
            world is left on the current level.
    """
    if isinstance(intent, Exit):
        return ActionOutcome(PlayerAction.EXIT)
    if not ctx.world.player.alive:
        return ActionOutcome(PlayerAction.DIDNT_TAKE_TURN)

    try:
        return _HANDLERS[intent.kind](intent, ctx)
    except InvalidIntentError as exc:
        ctx.world.messages.add(exc.message, RED)
        logger.info("Intent rejected", intent=intent.kind, reason=exc.message)
        return ActionOutcome(PlayerAction.DIDNT_TAKE_TURN)


__all__ = [
    "Move",
    "Wait",
    "Pickup",
    "UseItem",
    "DropItem",
    "Descend",
    "InventoryQuery",
    "Exit",
    "Intent",
    "PlayerAction",
    "CharacterSheet",
    "ActionOutcome",
    "ActionContext",
    "closest_monster",
    "character_sheet",
    "handle_intent",
]
