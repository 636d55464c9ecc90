"""Tests for the room and tunnel generator."""

from __future__ import annotations

import random
from collections import deque

import pytest

from delver.core.config import DungeonSettings
from delver.core.exceptions import GenerationError
from delver.generation.dungeon import GeneratedLevel, draw_room, generate, is_constructed
from delver.models.grid import Grid, Rect, Terrain


def reachable_floor(grid: Grid, start: tuple[int, int]) -> set[tuple[int, int]]:
    """Flood fill over floor tiles with 4-directional moves."""
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            if (nx, ny) not in seen and not grid.is_wall(nx, ny):
                seen.add((nx, ny))
                queue.append((nx, ny))
    return seen


class TestGenerate:
    """Tests for generate()."""

    @pytest.mark.parametrize("seed", range(8))
    @pytest.mark.parametrize("world_path", [0.1, 0.9])
    def test_every_floor_tile_reachable(
        self,
        small_dungeon: DungeonSettings,
        seed: int,
        world_path: float,
    ) -> None:
        """Test no floor tile is cut off from the start position."""
        level = generate(small_dungeon, random.Random(seed), world_path=world_path)

        assert set(level.grid.floor_cells()) == reachable_floor(level.grid, level.start)

    @pytest.mark.parametrize("seed", range(5))
    def test_blocked_matches_terrain(self, small_dungeon: DungeonSettings, seed: int) -> None:
        """Test every tile's blocked flag agrees with its terrain."""
        level = generate(small_dungeon, random.Random(seed))

        level.grid.check_invariants()
        for column in level.grid.tiles:
            for tile in column:
                assert tile.blocked == (tile.terrain == Terrain.WALL)

    def test_start_is_first_room_center(self, small_dungeon: DungeonSettings, rng: random.Random) -> None:
        """Test the start position is the first accepted room's center."""
        level = generate(small_dungeon, rng)

        assert level.start == level.rooms[0].center()
        assert not level.grid.is_wall(*level.start)

    def test_border_stays_wall(self, small_dungeon: DungeonSettings, rng: random.Random) -> None:
        """Test carving never opens the outermost ring of the grid."""
        level = generate(small_dungeon, rng, world_path=0.2)
        width, height = small_dungeon.grid_width, small_dungeon.grid_height

        for x in range(width):
            assert level.grid.is_wall(x, 0)
            assert level.grid.is_wall(x, height - 1)
        for y in range(height):
            assert level.grid.is_wall(0, y)
            assert level.grid.is_wall(width - 1, y)

    @pytest.mark.parametrize("seed", range(5))
    def test_constructed_rooms_do_not_overlap(self, small_dungeon: DungeonSettings, seed: int) -> None:
        """Test constructed levels never accept intersecting rooms."""
        level = generate(small_dungeon, random.Random(seed), world_path=0.7)

        for i, room in enumerate(level.rooms):
            for other in level.rooms[i + 1 :]:
                assert not room.intersects(other)

    def test_ruinous_accepts_every_fitting_room(self, small_dungeon: DungeonSettings, rng: random.Random) -> None:
        """Test ruinous levels carve every rectangle they draw."""
        level = generate(small_dungeon, rng, world_path=0.3)

        assert level.rooms == level.attempts
        assert len(level.rooms) == small_dungeon.max_rooms

    def test_attempt_budget_is_fixed(self, small_dungeon: DungeonSettings, rng: random.Random) -> None:
        """Test rejected rooms still consume attempts."""
        level = generate(small_dungeon, rng, world_path=0.99)

        assert len(level.attempts) == small_dungeon.max_rooms
        assert len(level.rooms) <= small_dungeon.max_rooms

    def test_deterministic_for_seed(self, small_dungeon: DungeonSettings) -> None:
        """Test a fixed seed reproduces the same level."""
        first = generate(small_dungeon, random.Random(77))
        second = generate(small_dungeon, random.Random(77))

        assert first.grid == second.grid
        assert first.rooms == second.rooms
        assert first.world_path == second.world_path

    def test_on_room_called_per_accepted_room(self, small_dungeon: DungeonSettings, rng: random.Random) -> None:
        """Test the population hook sees every accepted room with the start."""
        seen: list[tuple[Rect, tuple[int, int]]] = []

        level = generate(
            small_dungeon,
            rng,
            on_room=lambda room, grid, start: seen.append((room, start)),
            world_path=0.6,
        )

        assert [room for room, _ in seen] == level.rooms
        assert all(start == level.start for _, start in seen)

    def test_room_too_big_for_grid_fails(self) -> None:
        """Test a grid smaller than the minimum room is a generation failure."""
        settings = DungeonSettings(
            grid_width=3,
            grid_height=3,
            min_room_size=4,
            max_room_size=4,
            max_rooms=1,
        )

        with pytest.raises(GenerationError) as exc_info:
            generate(settings, random.Random(0))

        assert exc_info.value.details["accepted"] == 0
        assert exc_info.value.details["attempts"] == 1

    def test_zero_attempts_fails(self, small_dungeon: DungeonSettings, rng: random.Random) -> None:
        """Test no attempts means no start position."""
        settings = small_dungeon.model_copy(update={"max_rooms": 0})

        with pytest.raises(GenerationError):
            generate(settings, rng)


class TestWorldPath:
    """Tests for the style threshold."""

    def test_threshold(self) -> None:
        """Test 0.5 and above is constructed."""
        assert not is_constructed(0.0)
        assert not is_constructed(0.49)
        assert is_constructed(0.5)
        assert is_constructed(0.99)

    def test_level_reports_style(self, small_dungeon: DungeonSettings, rng: random.Random) -> None:
        """Test the level remembers the style it was built with."""
        level: GeneratedLevel = generate(small_dungeon, rng, world_path=0.5)
        assert level.constructed
        assert level.world_path == 0.5


class TestDrawRoom:
    """Tests for room rectangle sampling."""

    def test_rooms_fit_inside_grid(self, small_dungeon: DungeonSettings, rng: random.Random) -> None:
        """Test drawn rooms stay within bounds and size limits."""
        for _ in range(200):
            room = draw_room(small_dungeon, rng)
            assert room is not None
            assert 0 <= room.x1 and room.x2 < small_dungeon.grid_width
            assert 0 <= room.y1 and room.y2 < small_dungeon.grid_height
            assert small_dungeon.min_room_size <= room.width <= small_dungeon.max_room_size

    def test_oversized_room_returns_none(self, rng: random.Random) -> None:
        """Test a size that cannot fit produces no rectangle."""
        settings = DungeonSettings(grid_width=5, grid_height=5, min_room_size=5, max_room_size=5)
        assert draw_room(settings, rng) is None
