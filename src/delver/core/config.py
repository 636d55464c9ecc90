"""Configuration management for delver.

Settings are loaded with pydantic-settings from environment variables and
an optional ``.env`` file. Dungeon geometry and gameplay tuning live in
separate settings classes so callers can pass just the part they need
(the generator only ever sees :class:`DungeonSettings`).

Example:
    >>> from delver.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.dungeon.max_rooms
    18

Environment Variables:
    DELVER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DELVER_DUNGEON_GRID_WIDTH: Width of the generated grid
    DELVER_DUNGEON_MAX_ROOMS: Number of room placement attempts per level
    DELVER_GAME_HEAL_AMOUNT: Hit points restored by a healing potion
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from delver.core.constants import INVENTORY_LETTERS
from delver.core.exceptions import ConfigurationError


class DungeonSettings(BaseSettings):
    """Geometry and population bounds for one generated level.

    Attributes:
        grid_width: Number of tile columns.
        grid_height: Number of tile rows.
        min_room_size: Smallest room width/height, border included.
        max_room_size: Largest room width/height, border included.
        max_rooms: Placement attempts per level (not a success count).
        max_monsters_per_room: Upper bound of the monster roll per room.
        max_items_per_room: Upper bound of the item roll per room.
    """

    model_config = SettingsConfigDict(
        env_prefix="DELVER_DUNGEON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    grid_width: int = Field(default=80, ge=1, description="Grid width in tiles")
    grid_height: int = Field(default=43, ge=1, description="Grid height in tiles")
    min_room_size: int = Field(default=4, ge=2, description="Minimum room side")
    max_room_size: int = Field(default=12, ge=2, description="Maximum room side")
    max_rooms: int = Field(default=18, ge=0, description="Room placement attempts")
    max_monsters_per_room: int = Field(default=3, ge=0, description="Monster roll bound")
    max_items_per_room: int = Field(default=2, ge=0, description="Item roll bound")

    @model_validator(mode="after")
    def validate_room_bounds(self) -> "DungeonSettings":
        """Ensure the room size range is not empty.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If max_room_size < min_room_size.
        """
        if self.max_room_size < self.min_room_size:
            raise ConfigurationError(
                f"max_room_size ({self.max_room_size}) must be at least "
                f"min_room_size ({self.min_room_size})",
                config_key="max_room_size",
            )
        return self


class GameSettings(BaseSettings):
    """Gameplay tuning: items, inventory and levelling.

    Attributes:
        heal_amount: Hit points restored by a healing potion.
        confuse_num_turns: Turns a confusion scroll lasts.
        fear_num_turns: Turns a fear scroll lasts.
        spell_range: Maximum distance for scroll targeting.
        inventory_capacity: Maximum number of carried items.
        level_up_base: Experience needed for the first level up.
        level_up_factor: Additional experience per current level.
        level_up_hp_bonus: Max hp gained when choosing constitution.
        level_up_stat_bonus: Power/defense gained when choosing those stats.
    """

    model_config = SettingsConfigDict(
        env_prefix="DELVER_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    heal_amount: int = Field(default=10, ge=0)
    confuse_num_turns: int = Field(default=10, ge=0)
    fear_num_turns: int = Field(default=5, ge=0)
    spell_range: float = Field(default=8.0, gt=0)
    inventory_capacity: int = Field(default=INVENTORY_LETTERS, ge=1, le=INVENTORY_LETTERS)
    level_up_base: int = Field(default=200, ge=1)
    level_up_factor: int = Field(default=150, ge=0)
    level_up_hp_bonus: int = Field(default=20, ge=0)
    level_up_stat_bonus: int = Field(default=1, ge=0)


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Emit JSON logs instead of console output.
        dungeon: Level generation settings.
        game: Gameplay settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DELVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="delver", description="Application name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(default=False, description="Emit JSON logs")

    dungeon: DungeonSettings = Field(default_factory=DungeonSettings)
    game: GameSettings = Field(default_factory=GameSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "DungeonSettings",
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
