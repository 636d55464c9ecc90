"""Monster AI state machine.

Each monster's behavior is one of three states:

- ``BasicAi``: chase the player while visible, attack when adjacent.
- ``ConfusedAi``: stumble in a random direction each turn.
- ``FearAi``: stand still.

Confused and feared monsters count their turns down and return to the
state they wrapped once the count runs out. Evaluation takes the state out
of the monster, computes the next one and writes it back, so a transition
never sees its own half-updated state.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from delver.core.constants import RED
from delver.core.logging import get_logger
from delver.engine.combat import resolve_attack
from delver.models.ecs import BasicAi, ConfusedAi, Entity, FearAi
from delver.models.world import World


logger = get_logger(__name__)

FieldOfView = Callable[[int, int], bool]
"""Whether the player can see the cell (x, y). Visibility is mutual."""

AiState = BasicAi | ConfusedAi | FearAi

ATTACK_RANGE = 2.0


def _basic(monster: Entity, ai: BasicAi, world: World, fov: FieldOfView) -> AiState:
    player = world.player
    if not fov(monster.x, monster.y):
        return ai
    if monster.distance_to(player) >= ATTACK_RANGE:
        world.move_towards(monster, player.x, player.y)
    elif player.alive:
        resolve_attack(monster, player, world)
    return ai


def _count_down(monster: Entity, ai: ConfusedAi | FearAi, world: World, expiry_message: str) -> AiState:
    turns_remaining = ai.turns_remaining - 1
    if turns_remaining >= 0:
        return ai.model_copy(update={"turns_remaining": turns_remaining})
    world.messages.add(expiry_message.format(name=monster.name), RED)
    logger.debug("AI state expired", name=monster.name, state=ai.kind, restored=ai.previous.kind)
    return ai.previous


def _confused(monster: Entity, ai: ConfusedAi, world: World) -> AiState:
    if ai.turns_remaining >= 0:
        rng = world.rng
        world.move_by(monster, rng.randint(-1, 1), rng.randint(-1, 1))
    return _count_down(monster, ai, world, "The {name} is no longer confused!")


def _fear(monster: Entity, ai: FearAi, world: World) -> AiState:
    return _count_down(monster, ai, world, "The {name} is no longer scared!")


def next_state(monster: Entity, ai: AiState, world: World, fov: FieldOfView) -> AiState:
    """Act out one turn in state ``ai`` and return the state for the next turn.

    A state with ``turns_remaining = N`` acts N + 1 more times; the last of
    those turns restores the wrapped state.
    """
    if isinstance(ai, ConfusedAi):
        return _confused(monster, ai, world)
    if isinstance(ai, FearAi):
        return _fear(monster, ai, world)
    return _basic(monster, ai, world, fov)


def take_turn(monster: Entity, world: World, fov: FieldOfView) -> None:
    """Evaluate one turn for a living monster with an AI; no-op otherwise."""
    if not monster.alive or monster.ai is None:
        return
    ai = monster.ai
    monster.ai = None
    monster.ai = next_state(monster, ai, world, fov)


def run_ai_pass(roster: Iterable[Entity], world: World, fov: FieldOfView) -> None:
    """Give every monster one turn, in roster order."""
    for monster in list(roster):
        take_turn(monster, world, fov)


__all__ = [
    "FieldOfView",
    "AiState",
    "ATTACK_RANGE",
    "next_state",
    "take_turn",
    "run_ai_pass",
]
