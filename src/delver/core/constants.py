"""Application-wide constants for delver.

Glyphs and colors are plain data; how they are drawn is up to the
rendering layer. Colors are RGB triples.
"""

from __future__ import annotations

# =============================================================================
# Glyphs
# =============================================================================

PLAYER_GLYPH = "@"
CORPSE_GLYPH = "%"
STAIRS_GLYPH = "<"
POTION_GLYPH = "!"
SCROLL_GLYPH = "?"

STAIRS_NAME = "Stairs"
"""Display name the descend intent looks for under the player."""

# =============================================================================
# Colors
# =============================================================================

WHITE = (255, 255, 255)
RED = (255, 0, 0)
DARK_RED = (191, 0, 0)
GREEN = (0, 255, 0)
LIGHT_GREEN = (63, 255, 63)
YELLOW = (255, 255, 0)
ORANGE = (255, 127, 0)
VIOLET = (127, 0, 255)
LIGHT_VIOLET = (185, 115, 255)

# =============================================================================
# Palette Generation
# =============================================================================

PALETTE_CHANNEL_MIN = 20
"""Darkest channel value a generated floor/wall base color may take."""

PALETTE_CHANNEL_MAX = 200
"""Brightest channel value a generated floor/wall base color may take."""

PALETTE_JITTER = 12
"""Maximum per-channel deviation applied to each carved tile."""

# =============================================================================
# Player
# =============================================================================

PLAYER_NAME = "player"
PLAYER_HP = 30
PLAYER_DEFENSE = 2
PLAYER_POWER = 5

INVENTORY_LETTERS = 26
"""One inventory slot per menu letter a..z."""


__all__ = [
    "PLAYER_GLYPH",
    "CORPSE_GLYPH",
    "STAIRS_GLYPH",
    "POTION_GLYPH",
    "SCROLL_GLYPH",
    "STAIRS_NAME",
    "WHITE",
    "RED",
    "DARK_RED",
    "GREEN",
    "LIGHT_GREEN",
    "YELLOW",
    "ORANGE",
    "VIOLET",
    "LIGHT_VIOLET",
    "PALETTE_CHANNEL_MIN",
    "PALETTE_CHANNEL_MAX",
    "PALETTE_JITTER",
    "PLAYER_NAME",
    "PLAYER_HP",
    "PLAYER_DEFENSE",
    "PLAYER_POWER",
    "INVENTORY_LETTERS",
]
