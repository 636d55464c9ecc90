"""Combat resolution: attacks, damage, healing and death.

Damage is the only way hit points go down and :func:`heal` the only way
they go up. A killing blow settles hp at 0, flips ``alive`` and runs the
entity's death behavior before anything else can observe it.
"""

from __future__ import annotations

from delver.core.constants import CORPSE_GLYPH, DARK_RED, ORANGE, RED, WHITE
from delver.core.logging import get_logger
from delver.models.ecs import DeathBehavior, Entity
from delver.models.world import World


logger = get_logger(__name__)


# =============================================================================
# Death
# =============================================================================


def _player_death(player: Entity, world: World) -> None:
    world.messages.add("You died!", RED)
    player.glyph = CORPSE_GLYPH
    player.color = DARK_RED


def _monster_death(monster: Entity, world: World) -> None:
    experience = monster.fighter.experience if monster.fighter else 0
    world.messages.add(
        f"{monster.name} is dead! It was worth {experience} experience points.",
        ORANGE,
    )
    monster.glyph = CORPSE_GLYPH
    monster.color = DARK_RED
    monster.blocks = False
    monster.ai = None
    monster.name = f"{monster.corpse_label} of {monster.name}"


DEATH_HANDLERS = {
    DeathBehavior.PLAYER: _player_death,
    DeathBehavior.MONSTER: _monster_death,
}


# =============================================================================
# Damage and Healing
# =============================================================================


def take_damage(entity: Entity, amount: int, world: World) -> int | None:
    """Apply ``amount`` damage to ``entity``.

    Non-positive amounts are ignored; damage never heals.

    Returns:
        The entity's experience value if this blow killed it, else None.
    """
    fighter = entity.fighter
    if fighter is None or not entity.alive:
        return None
    if amount > 0:
        remaining = fighter.hp - amount
        if remaining <= 0:
            fighter.hp = 0
            entity.alive = False
            logger.info("Entity died", name=entity.name, overkill=-remaining)
            DEATH_HANDLERS[DeathBehavior(fighter.on_death)](entity, world)
            return fighter.experience
        fighter.hp = remaining
    return None


def heal(entity: Entity, amount: int) -> None:
    """Restore up to ``amount`` hp, never past ``max_hp``."""
    fighter = entity.fighter
    if fighter is None or amount <= 0:
        return
    fighter.hp = min(fighter.max_hp, fighter.hp + amount)


# =============================================================================
# Attacks
# =============================================================================


def level_modifier(attacker: Entity, defender: Entity) -> float:
    """Damage multiplier from the level gap; never below parity."""
    modifier = (attacker.level - defender.level) / 3
    if modifier <= 0:
        modifier = 1.0
    return modifier


def resolve_attack(attacker: Entity, defender: Entity, world: World) -> int:
    """Roll one attack of ``attacker`` against ``defender``.

    Both sides get an independent uniform jitter in [-1, 1]. Any experience
    from a kill is credited to the attacker.

    Returns:
        The damage dealt (0 when the attack had no effect).
    """
    rng = world.rng
    power = attacker.fighter.power if attacker.fighter else 1
    defense = defender.fighter.defense if defender.fighter else 1
    attack_roll = power + rng.uniform(-1.0, 1.0)
    defense_roll = defense + rng.uniform(-1.0, 1.0)
    damage = round(attack_roll * level_modifier(attacker, defender) - defense_roll)

    if damage <= 0:
        world.messages.add(f"{attacker.name} attacks {defender.name} but it has no effect!", WHITE)
        logger.debug("Attack had no effect", attacker=attacker.name, defender=defender.name)
        return 0

    world.messages.add(
        f"{attacker.name} attacks {defender.name} dealing {damage} damage.",
        attacker.color,
    )
    logger.debug("Attack hit", attacker=attacker.name, defender=defender.name, damage=damage)
    experience = take_damage(defender, damage, world)
    if experience is not None and attacker.fighter is not None:
        attacker.fighter.experience += experience
    return damage


__all__ = [
    "DEATH_HANDLERS",
    "take_damage",
    "heal",
    "level_modifier",
    "resolve_attack",
]
