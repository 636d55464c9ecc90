"""Turn loop driving the simulation one player intent at a time.

One accepted intent is one world tick:

1. The intent is resolved against the world (:mod:`delver.engine.actions`).
2. If it cost the player their turn, every monster acts once, in roster
   (spawn) order.

The loop never waits on anything mid-tick. The caller owns input and
rendering and only ever sees the world between ticks.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from delver.core.config import Settings, get_settings
from delver.core.logging import configure_from_settings, get_logger
from delver.engine.actions import (
    ActionContext,
    CharacterSheet,
    Intent,
    PlayerAction,
    handle_intent,
)
from delver.engine.ai import FieldOfView, run_ai_pass
from delver.engine.progression import LevelUpChoice
from delver.models.ecs import Entity
from delver.models.world import World


logger = get_logger(__name__)


# =============================================================================
# Turn Status
# =============================================================================


class TurnStatus(StrEnum):
    """Overall state after a tick."""

    PLAYING = "playing"
    """The player is alive and can act."""

    PLAYER_DEAD = "player_dead"
    """Game over; only exiting is possible."""

    EXITED = "exited"
    """The player asked to leave."""


@dataclass
class TurnResult:
    """Result of processing one intent.

    Attributes:
        action: Whether the intent used the player's turn.
        status: Game state after the tick.
        turn: Number of completed world turns.
        depth: Dungeon level after the tick.
        sheet: Character sheet, for inventory queries.
        messages: Feed entries added during the tick.
    """

    action: PlayerAction
    status: TurnStatus
    turn: int = 0
    depth: int = 1
    sheet: CharacterSheet | None = None
    messages: int = 0


# =============================================================================
# Game Loop
# =============================================================================


class GameLoop:
    """Drives a world tick by tick.

    Attributes:
        world: The world being simulated.
        fov: Visibility predicate supplied by the rendering layer.
        level_up_choice: Stat raised whenever the player levels up.
    """

    def __init__(
        self,
        world: World,
        fov: FieldOfView,
        level_up_choice: LevelUpChoice = LevelUpChoice.CONSTITUTION,
        *,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the game loop.

        Args:
            world: The world to simulate.
            fov: Returns whether the player currently sees a cell.
            level_up_choice: Stat to raise on level up.
            settings: Application settings; the cached singleton if omitted.
                Logging is configured from them.
        """
        self.world = world
        self.fov = fov
        self.level_up_choice = level_up_choice
        self._settings = settings or get_settings()
        configure_from_settings(self._settings)
        self._turn = 0
        self._turn_callbacks: list[Callable[[TurnResult], None]] = []

        logger.info(
            "GameLoop initialized",
            depth=world.depth,
            monsters=len(world.roster),
        )

    @property
    def turn(self) -> int:
        """Number of completed world turns."""
        return self._turn

    @property
    def is_game_over(self) -> bool:
        return not self.world.player.alive

    def add_turn_callback(self, callback: Callable[[TurnResult], None]) -> None:
        """Add a callback to be invoked after each tick.

        Args:
            callback: Function to call with TurnResult.
        """
        self._turn_callbacks.append(callback)

    def _invoke_callbacks(self, result: TurnResult) -> None:
        for callback in self._turn_callbacks:
            try:
                callback(result)
            except Exception:
                logger.exception("Turn callback failed")

    def _status(self, action: PlayerAction) -> TurnStatus:
        if action == PlayerAction.EXIT:
            return TurnStatus.EXITED
        if self.is_game_over:
            return TurnStatus.PLAYER_DEAD
        return TurnStatus.PLAYING

    def step(self, intent: Intent) -> TurnResult:
        """Resolve one intent and, if it took the turn, run the AI pass.

        Args:
            intent: The player's intent.

        Returns:
            TurnResult describing the tick.
        """
        messages_before = len(self.world.messages)
        ctx = ActionContext(
            world=self.world,
            fov=self.fov,
            settings=self._settings,
            level_up_choice=self.level_up_choice,
        )
        outcome = handle_intent(intent, ctx)

        if outcome.action == PlayerAction.TOOK_TURN:
            run_ai_pass(self.world.roster, self.world, self.fov)
            self._turn += 1

        result = TurnResult(
            action=outcome.action,
            status=self._status(outcome.action),
            turn=self._turn,
            depth=self.world.depth,
            sheet=outcome.sheet,
            messages=len(self.world.messages) - messages_before,
        )
        if result.status == TurnStatus.PLAYER_DEAD:
            logger.info("Player is dead", turn=self._turn, depth=self.world.depth)
        self._invoke_callbacks(result)
        return result

    def cleanup_dead(self) -> list[Entity]:
        """Remove dead monsters from the roster and return them."""
        return self.world.remove_dead()


__all__ = [
    "TurnStatus",
    "TurnResult",
    "GameLoop",
]
