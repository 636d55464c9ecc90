"""Tests for player levelling."""

from __future__ import annotations

import pytest

from delver.core.config import GameSettings
from delver.engine.progression import LevelUpChoice, check_level_up, experience_to_level
from delver.models.world import World


class TestExperienceToLevel:
    """Tests for the level threshold."""

    def test_threshold_grows_with_level(self) -> None:
        """Test base plus level times factor."""
        settings = GameSettings()
        assert experience_to_level(1, settings) == 350
        assert experience_to_level(2, settings) == 500


class TestCheckLevelUp:
    """Tests for check_level_up()."""

    def test_below_threshold(self, world: World) -> None:
        """Test nothing happens without enough experience."""
        world.player.fighter.experience = 349

        assert check_level_up(world, GameSettings()) == 0
        assert world.player.level == 1

    def test_constitution(self, world: World) -> None:
        """Test the default choice raises max hp and hp."""
        fighter = world.player.fighter
        fighter.experience = 360
        max_hp = fighter.max_hp

        assert check_level_up(world, GameSettings()) == 1

        assert world.player.level == 2
        assert fighter.experience == 10
        assert fighter.max_hp == max_hp + 20
        assert fighter.hp == max_hp + 20
        assert "level 2" in world.messages.latest.text

    @pytest.mark.parametrize(
        ("choice", "attribute"),
        [(LevelUpChoice.STRENGTH, "power"), (LevelUpChoice.AGILITY, "defense")],
    )
    def test_stat_choices(self, world: World, choice: LevelUpChoice, attribute: str) -> None:
        """Test strength and agility raise their stat by one."""
        fighter = world.player.fighter
        fighter.experience = 350
        before = getattr(fighter, attribute)

        check_level_up(world, GameSettings(), choice)

        assert getattr(fighter, attribute) == before + 1

    def test_multiple_levels(self, world: World) -> None:
        """Test a large experience gain can level up repeatedly."""
        world.player.fighter.experience = 350 + 500 + 5

        assert check_level_up(world, GameSettings(), LevelUpChoice.STRENGTH) == 2
        assert world.player.level == 3
        assert world.player.fighter.experience == 5
