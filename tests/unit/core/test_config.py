"""Tests for configuration management."""

from __future__ import annotations

import pytest

from delver.core.config import (
    DungeonSettings,
    GameSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from delver.core.constants import INVENTORY_LETTERS
from delver.core.exceptions import ConfigurationError


class TestDungeonSettings:
    """Tests for DungeonSettings configuration."""

    def test_default_values(self) -> None:
        """Test default grid and room bounds."""
        settings = DungeonSettings()

        assert settings.grid_width == 80
        assert settings.grid_height == 43
        assert settings.min_room_size == 4
        assert settings.max_room_size == 12
        assert settings.max_rooms == 18
        assert settings.max_monsters_per_room == 3
        assert settings.max_items_per_room == 2

    def test_room_bounds_validation(self) -> None:
        """Test that max_room_size must not be below min_room_size."""
        with pytest.raises(ConfigurationError) as exc_info:
            DungeonSettings(min_room_size=8, max_room_size=5)

        assert "max_room_size" in str(exc_info.value)
        assert exc_info.value.details["config_key"] == "max_room_size"

    def test_equal_room_bounds_allowed(self) -> None:
        """Test a single fixed room size is valid."""
        settings = DungeonSettings(min_room_size=6, max_room_size=6)
        assert settings.min_room_size == settings.max_room_size == 6

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test environment variables override defaults."""
        monkeypatch.setenv("DELVER_DUNGEON_GRID_WIDTH", "50")

        assert DungeonSettings().grid_width == 50


class TestGameSettings:
    """Tests for GameSettings configuration."""

    def test_default_values(self) -> None:
        """Test default gameplay tuning."""
        settings = GameSettings()

        assert settings.heal_amount == 10
        assert settings.confuse_num_turns == 10
        assert settings.fear_num_turns == 5
        assert settings.spell_range == 8
        assert settings.inventory_capacity == 26
        assert settings.level_up_base == 200
        assert settings.level_up_factor == 150

    def test_inventory_capacity_limited_to_letters(self) -> None:
        """Test the inventory cannot outgrow the a..z menu."""
        assert GameSettings(inventory_capacity=INVENTORY_LETTERS).inventory_capacity == 26
        with pytest.raises(ValueError):
            GameSettings(inventory_capacity=INVENTORY_LETTERS + 1)


class TestSettings:
    """Tests for main Settings configuration."""

    def test_default_settings(self) -> None:
        """Test default settings initialization."""
        settings = Settings()

        assert settings.app_name == "delver"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert isinstance(settings.dungeon, DungeonSettings)
        assert isinstance(settings.game, GameSettings)

    def test_env_vars(self, mock_env_vars: dict[str, str]) -> None:
        """Test settings read from the environment."""
        settings = Settings()

        assert settings.debug is True
        assert settings.log_level == "DEBUG"
        assert settings.dungeon.max_rooms == 5
        assert settings.game.heal_amount == 7


class TestSettingsCache:
    """Tests for the settings singleton."""

    def test_get_settings_cached(self) -> None:
        """Test that get_settings returns the same instance."""
        assert get_settings() is get_settings()

    def test_clear_settings_cache(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that clearing the cache reloads settings."""
        first = get_settings()
        monkeypatch.setenv("DELVER_APP_NAME", "other")
        clear_settings_cache()

        second = get_settings()
        assert second is not first
        assert second.app_name == "other"

    def test_invalid_settings_raise_configuration_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test load failures surface as ConfigurationError."""
        monkeypatch.setenv("DELVER_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError):
            get_settings()
