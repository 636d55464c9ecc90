"""Tile grid model: terrain, exploration state and per-tile color.

The grid is indexed ``tiles[x][y]`` and starts out as solid wall. Only
carving turns tiles into floor, and it always replaces the whole tile so
that terrain and the ``blocked`` flag can never disagree.
"""

from __future__ import annotations

import random
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from delver.core.constants import PALETTE_CHANNEL_MAX, PALETTE_CHANNEL_MIN, PALETTE_JITTER
from delver.core.exceptions import InvalidGameStateError


# =============================================================================
# Type Definitions
# =============================================================================


Channel = Annotated[int, Field(ge=0, le=255)]
Color = tuple[Channel, Channel, Channel]


class Terrain(StrEnum):
    """What a tile is made of."""

    WALL = "wall"
    FLOOR = "floor"


# =============================================================================
# Palette
# =============================================================================


class Palette(BaseModel):
    """Per-level base colors for walls and floors.

    A palette is drawn once per generated level; every carved tile gets
    a slightly jittered copy of the floor color.
    """

    model_config = ConfigDict(frozen=True)

    wall: Color
    floor: Color
    jitter: int = Field(default=PALETTE_JITTER, ge=0, le=255)

    @classmethod
    def generate(cls, rng: random.Random) -> Self:
        """Draw a random wall/floor color pair."""

        def channel() -> int:
            return rng.randint(PALETTE_CHANNEL_MIN, PALETTE_CHANNEL_MAX)

        floor = (channel(), channel(), channel())
        # Walls are a darker shade of the floor so rooms read as carved stone.
        wall = (floor[0] // 2, floor[1] // 2, floor[2] // 2)
        return cls(wall=wall, floor=floor)

    def tint(self, base: Color, rng: random.Random) -> Color:
        """Return ``base`` with every channel nudged by up to ``jitter``."""

        def nudge(channel: int) -> int:
            return min(255, max(0, channel + rng.randint(-self.jitter, self.jitter)))

        red, green, blue = base
        return nudge(red), nudge(green), nudge(blue)


# =============================================================================
# Tile
# =============================================================================


class Tile(BaseModel):
    """One grid cell.

    Attributes:
        terrain: Wall or floor.
        blocked: Whether movement into the tile is impossible.
        explored: Whether the player has ever seen the tile.
        base_color: The palette color the tile was made from.
        variant_color: The jittered color actually shown.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    terrain: Terrain = Terrain.WALL
    blocked: bool = True
    explored: bool = False
    base_color: Color = (0, 0, 0)
    variant_color: Color = (0, 0, 0)

    @model_validator(mode="after")
    def validate_blocked_matches_terrain(self) -> "Tile":
        """Walls block and floors do not.

        Raises:
            InvalidGameStateError: If terrain and blocked disagree.
        """
        if self.blocked != (self.terrain == Terrain.WALL):
            raise InvalidGameStateError(
                "Tile blocked flag disagrees with terrain",
                current_state=f"{self.terrain}/blocked={self.blocked}",
            )
        return self

    @classmethod
    def wall(cls, palette: Palette) -> Self:
        return cls(
            terrain=Terrain.WALL,
            blocked=True,
            base_color=palette.wall,
            variant_color=palette.wall,
        )

    @classmethod
    def floor(cls, palette: Palette, rng: random.Random) -> Self:
        return cls(
            terrain=Terrain.FLOOR,
            blocked=False,
            base_color=palette.floor,
            variant_color=palette.tint(palette.floor, rng),
        )


# =============================================================================
# Rectangle
# =============================================================================


@dataclass(frozen=True)
class Rect:
    """Axis-aligned room rectangle with half-open bounds.

    The outer ring (``x1``, ``y1`` and everything from ``x2``/``y2`` on)
    stays wall; the interior ``[x1 + 1, x2) x [y1 + 1, y2)`` is carved.
    """

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_size(cls, x: int, y: int, width: int, height: int) -> Rect:
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1

    def center(self) -> tuple[int, int]:
        return (self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2

    def intersects(self, other: Rect) -> bool:
        """Return True if this rectangle touches or overlaps ``other``."""
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )

    def interior(self) -> Iterator[tuple[int, int]]:
        """Yield every cell that carving turns into floor."""
        for x in range(self.x1 + 1, self.x2):
            for y in range(self.y1 + 1, self.y2):
                yield x, y

    def random_interior_cell(self, rng: random.Random) -> tuple[int, int]:
        """Pick a uniformly random interior cell (border excluded)."""
        return rng.randint(self.x1 + 1, self.x2 - 1), rng.randint(self.y1 + 1, self.y2 - 1)


# =============================================================================
# Grid
# =============================================================================


class Grid(BaseModel):
    """A 2-D array of tiles plus the palette it was carved with."""

    model_config = ConfigDict(extra="forbid")

    width: int = Field(ge=1)
    height: int = Field(ge=1)
    palette: Palette
    tiles: list[list[Tile]]

    @model_validator(mode="after")
    def validate_dimensions(self) -> "Grid":
        if len(self.tiles) != self.width or any(len(col) != self.height for col in self.tiles):
            raise InvalidGameStateError(
                "Tile array does not match grid dimensions",
                details={"width": self.width, "height": self.height},
            )
        return self

    @classmethod
    def new(cls, width: int, height: int, palette: Palette) -> Self:
        """Create a grid filled with wall."""
        return cls(
            width=width,
            height=height,
            palette=palette,
            tiles=[[Tile.wall(palette) for _ in range(height)] for _ in range(width)],
        )

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Tile:
        return self.tiles[x][y]

    def is_wall(self, x: int, y: int) -> bool:
        """Out-of-bounds cells count as wall."""
        if not self.in_bounds(x, y):
            return True
        return self.tiles[x][y].blocked

    # -------------------------------------------------------------------------
    # Carving
    # -------------------------------------------------------------------------

    def carve_cell(self, x: int, y: int, rng: random.Random) -> None:
        if not self.in_bounds(x, y):
            return
        explored = self.tiles[x][y].explored
        tile = Tile.floor(self.palette, rng)
        tile.explored = explored
        self.tiles[x][y] = tile

    def carve_room(self, room: Rect, rng: random.Random) -> None:
        for x, y in room.interior():
            self.carve_cell(x, y, rng)

    def carve_h_tunnel(self, x1: int, x2: int, y: int, rng: random.Random) -> None:
        for x in range(min(x1, x2), max(x1, x2) + 1):
            self.carve_cell(x, y, rng)

    def carve_v_tunnel(self, y1: int, y2: int, x: int, rng: random.Random) -> None:
        for y in range(min(y1, y2), max(y1, y2) + 1):
            self.carve_cell(x, y, rng)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def floor_cells(self) -> Iterator[tuple[int, int]]:
        for x, column in enumerate(self.tiles):
            for y, tile in enumerate(column):
                if tile.terrain == Terrain.FLOOR:
                    yield x, y

    def check_invariants(self) -> None:
        """Re-validate every tile.

        Raises:
            InvalidGameStateError: If any tile's blocked flag disagrees
                with its terrain.
        """
        for x, column in enumerate(self.tiles):
            for y, tile in enumerate(column):
                if tile.blocked != (tile.terrain == Terrain.WALL):
                    raise InvalidGameStateError(
                        "Tile blocked flag disagrees with terrain",
                        current_state=f"{tile.terrain}/blocked={tile.blocked}",
                        details={"x": x, "y": y},
                    )


__all__ = [
    "Channel",
    "Color",
    "Terrain",
    "Palette",
    "Tile",
    "Rect",
    "Grid",
]
