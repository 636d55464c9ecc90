"""Entity and component models.

Every grid-dwelling thing is an :class:`Entity`. Capabilities are optional
components:

- ``fighter``: hit points and combat stats (player and monsters)
- ``ai``: behavior state (monsters only; the player is driven by intents)
- ``item``: consumable behavior (things that can be picked up)

An inert decoration such as the stairs carries none of them.

The AI state is a tagged union. ``ConfusedAi`` and ``FearAi`` wrap the
state they temporarily replace, and the wrapped state is restored when
they run out. Nesting is structurally unbounded; every variant is frozen,
so a transition always builds a new value instead of editing the old one.
"""

from __future__ import annotations

import math
from enum import StrEnum
from typing import Annotated, Any, Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from delver.core.constants import (
    PLAYER_DEFENSE,
    PLAYER_GLYPH,
    PLAYER_HP,
    PLAYER_NAME,
    PLAYER_POWER,
    WHITE,
)
from delver.core.exceptions import InvalidGameStateError
from delver.models.grid import Color


# =============================================================================
# Type Definitions
# =============================================================================


class DeathBehavior(StrEnum):
    """What happens to an entity when its hit points run out."""

    PLAYER = "player"
    """Game over: the player becomes a corpse."""

    MONSTER = "monster"
    """The monster becomes a non-blocking corpse and stops acting."""


class ItemKind(StrEnum):
    """Consumable behaviors."""

    HEAL = "heal"
    CONFUSE = "confuse"
    FEAR = "fear"


# =============================================================================
# Base Component
# =============================================================================


class Component(BaseModel):
    """Base class for all entity components.

    Components are data containers; the engine modules implement the
    behavior that reads and mutates them.
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
        extra="ignore",
        use_enum_values=True,
    )


# =============================================================================
# Fighter Component
# =============================================================================


class FighterComponent(Component):
    """Combat capability.

    The stored ``hp`` always stays within ``[0, max_hp]``. A killing blow
    may compute a negative value, but it is settled to 0 before it is
    written back.
    """

    hp: int = Field(ge=0, description="Current hit points")
    max_hp: int = Field(ge=1, description="Maximum hit points")
    defense: int = Field(default=0, description="Damage subtracted from incoming attacks")
    power: int = Field(default=0, description="Base attack strength")
    experience: int = Field(default=0, ge=0, description="Experience held or awarded on death")
    on_death: DeathBehavior = Field(default=DeathBehavior.MONSTER)

    @model_validator(mode="after")
    def validate_hp_bounds(self) -> "FighterComponent":
        """Raises InvalidGameStateError if hp exceeds max_hp."""
        if self.hp > self.max_hp:
            raise InvalidGameStateError(
                f"hp {self.hp} exceeds max_hp {self.max_hp}",
                current_state="overhealed",
            )
        return self

    @field_validator("hp", mode="before")
    @classmethod
    def reject_negative_hp(cls, v: Any) -> Any:
        if isinstance(v, int) and v < 0:
            raise InvalidGameStateError(
                f"hp {v} is negative outside of death resolution",
                current_state="negative_hp",
            )
        return v

    @property
    def is_full_health(self) -> bool:
        return self.hp >= self.max_hp


# =============================================================================
# AI Components
# =============================================================================


class BasicAi(BaseModel):
    """Chase the player while visible and attack when adjacent."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["basic"] = "basic"


class ConfusedAi(BaseModel):
    """Stumble randomly until ``turns_remaining`` drops below zero."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["confused"] = "confused"
    previous: Ai
    turns_remaining: int


class FearAi(BaseModel):
    """Stand frozen until ``turns_remaining`` drops below zero."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["fear"] = "fear"
    previous: Ai
    turns_remaining: int


Ai = Annotated[BasicAi | ConfusedAi | FearAi, Field(discriminator="kind")]

ConfusedAi.model_rebuild()
FearAi.model_rebuild()


def ai_depth(ai: BasicAi | ConfusedAi | FearAi) -> int:
    """Number of wrapped states below ``ai`` (0 for a plain BasicAi)."""
    depth = 0
    while isinstance(ai, (ConfusedAi, FearAi)):
        ai = ai.previous
        depth += 1
    return depth


# =============================================================================
# Item Component
# =============================================================================


class ItemComponent(Component):
    """Consumable capability.

    ``amount`` is the hit points restored for HEAL and the number of turns
    for CONFUSE and FEAR. When unset, the value comes from
    :class:`delver.core.config.GameSettings` at the moment of use.
    """

    kind: ItemKind
    amount: int | None = Field(default=None, ge=0)


# =============================================================================
# Entity
# =============================================================================


class Entity(BaseModel):
    """Anything that occupies a grid cell.

    Position changes go through :meth:`delver.models.world.World.move_by`;
    :meth:`place` exists only for spawning and dropping.
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
        extra="ignore",
        use_enum_values=True,
    )

    # Identity
    uid: UUID = Field(default_factory=uuid4, description="Unique identifier")
    name: str = Field(description="Display name")
    glyph: str = Field(min_length=1, max_length=1)
    color: Color = WHITE

    # Placement
    x: int = 0
    y: int = 0
    blocks: bool = False
    always_visible: bool = False

    # State
    alive: bool = False
    corpse_label: str = Field(default="remains", description="Name prefix once dead")
    level: int = Field(default=1, ge=1)

    # Optional components
    fighter: FighterComponent | None = None
    ai: Ai | None = None
    item: ItemComponent | None = None

    def pos(self) -> tuple[int, int]:
        return self.x, self.y

    def place(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def distance(self, x: int, y: int) -> float:
        return math.hypot(x - self.x, y - self.y)

    def distance_to(self, other: Entity) -> float:
        return self.distance(other.x, other.y)

    @property
    def is_monster(self) -> bool:
        return self.fighter is not None and self.ai is not None

    def to_summary(self) -> str:
        """One-line description for debugging and logs."""
        parts = [f"{self.name} @({self.x},{self.y})"]
        if self.fighter is not None:
            parts.append(f"HP {self.fighter.hp}/{self.fighter.max_hp}")
        if self.ai is not None:
            parts.append(f"AI {self.ai.kind}")
        if not self.alive and self.fighter is not None:
            parts.append("[DEAD]")
        return " ".join(parts)


# =============================================================================
# Factory Functions
# =============================================================================


def create_player(x: int = 0, y: int = 0) -> Entity:
    """Create the player entity (Fighter only, no AI)."""
    return Entity(
        name=PLAYER_NAME,
        glyph=PLAYER_GLYPH,
        color=WHITE,
        x=x,
        y=y,
        blocks=True,
        alive=True,
        fighter=FighterComponent(
            hp=PLAYER_HP,
            max_hp=PLAYER_HP,
            defense=PLAYER_DEFENSE,
            power=PLAYER_POWER,
            on_death=DeathBehavior.PLAYER,
        ),
    )


__all__ = [
    "DeathBehavior",
    "ItemKind",
    "Component",
    "FighterComponent",
    "BasicAi",
    "ConfusedAi",
    "FearAi",
    "Ai",
    "ai_depth",
    "ItemComponent",
    "Entity",
    "create_player",
]
