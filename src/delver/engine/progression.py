"""Player levelling."""

from __future__ import annotations

from enum import StrEnum

from delver.core.config import GameSettings
from delver.core.constants import YELLOW
from delver.core.logging import get_logger
from delver.models.ecs import Entity
from delver.models.world import World


logger = get_logger(__name__)


class LevelUpChoice(StrEnum):
    """Stat raised on level up."""

    CONSTITUTION = "constitution"
    """More max hp, gained immediately as current hp too."""

    STRENGTH = "strength"
    """More attack power."""

    AGILITY = "agility"
    """More defense."""


def experience_to_level(level: int, settings: GameSettings) -> int:
    return settings.level_up_base + level * settings.level_up_factor


def apply_choice(player: Entity, choice: LevelUpChoice, settings: GameSettings) -> None:
    fighter = player.fighter
    if fighter is None:
        return
    if choice == LevelUpChoice.CONSTITUTION:
        fighter.max_hp += settings.level_up_hp_bonus
        fighter.hp += settings.level_up_hp_bonus
    elif choice == LevelUpChoice.STRENGTH:
        fighter.power += settings.level_up_stat_bonus
    elif choice == LevelUpChoice.AGILITY:
        fighter.defense += settings.level_up_stat_bonus


def check_level_up(
    world: World,
    settings: GameSettings,
    choice: LevelUpChoice = LevelUpChoice.CONSTITUTION,
) -> int:
    """Level the player up as many times as their experience allows.

    Returns:
        Number of levels gained.
    """
    player = world.player
    fighter = player.fighter
    if fighter is None:
        return 0

    gained = 0
    while fighter.experience >= experience_to_level(player.level, settings):
        needed = experience_to_level(player.level, settings)
        player.level += 1
        fighter.experience -= needed
        apply_choice(player, choice, settings)
        gained += 1
        world.messages.add(
            f"Your battle skills grow stronger! You reached level {player.level}!",
            YELLOW,
        )
        logger.info("Player levelled up", level=player.level, choice=str(choice))
    return gained


__all__ = [
    "LevelUpChoice",
    "experience_to_level",
    "apply_choice",
    "check_level_up",
]
