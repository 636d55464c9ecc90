"""Procedural level generation.

Submodules:
    dungeon: Room placement and tunnel carving.
    population: Monster and item placement inside carved rooms.
    bestiary: Monster species, trait tiers and item templates.
    levels: Assembling generated levels into a World.

Example:
    >>> from delver.generation import create_world
    >>> world = create_world(seed=42)
    >>> world.depth
    1
"""

from __future__ import annotations

from delver.generation.bestiary import (
    ITEMS,
    SPECIES,
    ItemTemplate,
    Species,
    Trait,
    create_item,
    create_monster,
    create_stairs,
    nature_trait,
    tier_for_depth,
)
from delver.generation.dungeon import GeneratedLevel, generate, is_constructed
from delver.generation.levels import build_level, create_world
from delver.generation.population import populate_items, populate_monsters


__all__ = [
    # Dungeon
    "GeneratedLevel",
    "generate",
    "is_constructed",
    # Population
    "populate_monsters",
    "populate_items",
    # Bestiary
    "ITEMS",
    "SPECIES",
    "ItemTemplate",
    "Species",
    "Trait",
    "create_item",
    "create_monster",
    "create_stairs",
    "nature_trait",
    "tier_for_depth",
    # Levels
    "create_world",
    "build_level",
]
