"""Monster and item templates.

A spawned monster is a species (what it is) combined with a trait tier
(how strong it is). The tier grows with dungeon depth, so the same species
turns from a "Bush" into a "Forest" variant as the player descends.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass

from delver.core.constants import (
    GREEN,
    LIGHT_VIOLET,
    POTION_GLYPH,
    SCROLL_GLYPH,
    STAIRS_GLYPH,
    STAIRS_NAME,
    VIOLET,
    WHITE,
    YELLOW,
)
from delver.models.ecs import (
    BasicAi,
    DeathBehavior,
    Entity,
    FighterComponent,
    ItemComponent,
    ItemKind,
)
from delver.models.grid import Color


# =============================================================================
# Species and Traits
# =============================================================================


@dataclass(frozen=True)
class Species:
    """Base statistics of a monster kind.

    Attributes:
        name: Display name, e.g. "fire elemental".
        glyph: Single character drawn on the grid.
        hp: Base hit points.
        defense: Base defense.
        power: Base attack power.
        experience: Base experience awarded on death.
        weight: Relative spawn weight.
    """

    name: str
    glyph: str
    hp: int
    defense: int
    power: int
    experience: int
    weight: int


@dataclass(frozen=True)
class Trait:
    """Bonus layer applied on top of a species."""

    prefix: str
    tier: int
    experience: int
    hp: int
    defense: int
    power: int
    color: Color
    corpse_label: str


SPECIES: tuple[Species, ...] = (
    Species("fire elemental", "E", hp=10, defense=0, power=3, experience=35, weight=80),
    Species("crystal lizard", "L", hp=16, defense=1, power=4, experience=100, weight=20),
)


def nature_trait(tier: int) -> Trait:
    """Return the nature trait for ``tier``; anything above 3 is the strongest."""
    if tier <= 1:
        return Trait("Bush", 1, experience=15, hp=1, defense=1, power=1, color=GREEN, corpse_label="leaves")
    if tier == 2:
        return Trait("Tree", 2, experience=50, hp=3, defense=2, power=2, color=GREEN, corpse_label="leaves")
    return Trait("Forest", 3, experience=150, hp=7, defense=5, power=5, color=GREEN, corpse_label="leaves")


def tier_for_depth(depth: int) -> int:
    if depth <= 2:
        return 1
    if depth <= 5:
        return 2
    return 3


def choose_species(rng: random.Random, table: Sequence[Species] = SPECIES) -> Species:
    return rng.choices(table, weights=[species.weight for species in table])[0]


def create_monster(species: Species, trait: Trait, x: int, y: int) -> Entity:
    """Combine a species and a trait into a monster with Fighter and Basic AI."""
    hp = species.hp + trait.hp
    return Entity(
        name=f"{trait.prefix} {species.name}",
        glyph=species.glyph,
        color=trait.color,
        x=x,
        y=y,
        blocks=True,
        alive=True,
        corpse_label=trait.corpse_label,
        level=trait.tier,
        fighter=FighterComponent(
            hp=hp,
            max_hp=hp,
            defense=species.defense + trait.defense,
            power=species.power + trait.power,
            experience=species.experience + trait.experience,
            on_death=DeathBehavior.MONSTER,
        ),
        ai=BasicAi(),
    )


def spawn_monster(rng: random.Random, depth: int, x: int, y: int) -> Entity:
    return create_monster(choose_species(rng), nature_trait(tier_for_depth(depth)), x, y)


# =============================================================================
# Items
# =============================================================================


@dataclass(frozen=True)
class ItemTemplate:
    kind: ItemKind
    name: str
    glyph: str
    color: Color
    weight: int


ITEMS: tuple[ItemTemplate, ...] = (
    ItemTemplate(ItemKind.HEAL, "healing potion", POTION_GLYPH, VIOLET, weight=70),
    ItemTemplate(ItemKind.CONFUSE, "scroll of confusion", SCROLL_GLYPH, LIGHT_VIOLET, weight=15),
    ItemTemplate(ItemKind.FEAR, "scroll of fear", SCROLL_GLYPH, YELLOW, weight=15),
)


def choose_item(rng: random.Random, table: Sequence[ItemTemplate] = ITEMS) -> ItemTemplate:
    return rng.choices(table, weights=[template.weight for template in table])[0]


def create_item(template: ItemTemplate, x: int, y: int) -> Entity:
    return Entity(
        name=template.name,
        glyph=template.glyph,
        color=template.color,
        x=x,
        y=y,
        item=ItemComponent(kind=template.kind),
    )


def create_stairs(x: int, y: int) -> Entity:
    """Stairs are drawn even outside the field of view once explored."""
    return Entity(
        name=STAIRS_NAME,
        glyph=STAIRS_GLYPH,
        color=WHITE,
        x=x,
        y=y,
        always_visible=True,
    )


__all__ = [
    "Species",
    "Trait",
    "SPECIES",
    "nature_trait",
    "tier_for_depth",
    "choose_species",
    "create_monster",
    "spawn_monster",
    "ItemTemplate",
    "ITEMS",
    "choose_item",
    "create_item",
    "create_stairs",
]
