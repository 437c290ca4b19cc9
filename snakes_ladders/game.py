"""Game engine — owns the state and paces each roll."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field, replace
from typing import Awaitable, Callable, Mapping, Protocol

from snakes_ladders.audio import AudioNotifier, NullAudio
from snakes_ladders.board import DEFAULT_TABLE, TransitionTable
from snakes_ladders.moves import (
    PLAYERS,
    GameState,
    Step,
    advance_one_step,
    begin_move,
    initial_state,
)

logger = logging.getLogger(__name__)


# ── Structured types ────────────────────────────────────────────────

@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only view handed to renderers after every state change."""

    player1_position: int
    player2_position: int
    ladders: Mapping[int, int]
    snakes: Mapping[int, int]
    current_player: int = 1
    dice_value: int = 0
    message: str = ""
    game_over: bool = False


@dataclass(frozen=True)
class Pacing:
    """Pauses (seconds) between the visible parts of a move."""

    start: float = 0.5
    step: float = 0.3
    before_jump: float = 0.5
    after_jump: float = 1.0

    @classmethod
    def instant(cls) -> Pacing:
        return cls(start=0.0, step=0.0, before_jump=0.0, after_jump=0.0)


class Dice(Protocol):
    def randint(self, a: int, b: int) -> int: ...


# ── Observer ────────────────────────────────────────────────────────

class GameObserver(Protocol):
    """Receives a snapshot whenever the state changes."""

    def on_state(self, snapshot: BoardSnapshot) -> None: ...


@dataclass
class ListObserver:
    """Default observer — collects snapshots into a list."""

    snapshots: list[BoardSnapshot] = field(default_factory=list)

    def on_state(self, snapshot: BoardSnapshot) -> None:
        self.snapshots.append(snapshot)


# ── Engine ───────────────────────────────────────────────────────────

class GameEngine:
    """Two-player game driven by roll and reset requests.

    Only one roll is resolved at a time: while a move is being walked
    out, every roll request is turned away.
    """

    def __init__(
        self,
        table: TransitionTable = DEFAULT_TABLE,
        audio: AudioNotifier | None = None,
        observer: GameObserver | None = None,
        pacing: Pacing | None = None,
        rng: Dice | None = None,
        state: GameState | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ):
        self.table = table
        self.audio = audio or NullAudio()
        self.observer = observer or ListObserver()
        self.pacing = pacing or Pacing()
        self.rng = rng or random
        self._state = state or initial_state()
        self._sleep = sleep
        self._generation = 0

    @property
    def state(self) -> GameState:
        return self._state

    def snapshot(self) -> BoardSnapshot:
        s = self._state
        return BoardSnapshot(
            player1_position=s.position(1),
            player2_position=s.position(2),
            ladders=self.table.ladders,
            snakes=self.table.snakes,
            current_player=s.current_player,
            dice_value=s.dice_value,
            message=s.message,
            game_over=s.game_over,
        )

    def can_roll(self, player: int) -> bool:
        s = self._state
        return (
            player in PLAYERS
            and not s.game_over
            and not s.is_moving
            and player == s.current_player
        )

    async def request_roll(self, player: int) -> bool:
        """Roll for *player* and play the move out. Returns False if ignored."""
        if not self.can_roll(player):
            logger.debug("Ignoring roll request from player %s", player)
            return False

        value = self.rng.randint(1, 6)
        self._commit(replace(self._state, dice_value=value))
        logger.info("Player %d rolled a %d", player, value)
        self.audio.play("roll")
        await self.resolve_move(value)
        return True

    async def resolve_move(self, spaces: int) -> None:
        """Walk the active pawn *spaces* squares, then jump and check for a win."""
        generation = self._generation
        self._commit(begin_move(self._state, spaces))
        await self._pause(self.pacing.start)

        while generation == self._generation and self._state.is_moving:
            move = self._state.move
            if move.remaining_steps == 0 and move.pending_transition is not None:
                await self._pause(self.pacing.before_jump)
                if generation != self._generation:
                    break
            step = advance_one_step(self._state, self.table)
            self._apply(step)
            if step.kind == "walk":
                await self._pause(self.pacing.step)
            elif step.kind == "jump":
                await self._pause(self.pacing.after_jump)

        if generation != self._generation:
            logger.debug("Move abandoned after reset")

    def reset(self) -> None:
        """Start a fresh game; any move still in flight is dropped."""
        self._generation += 1
        self._commit(initial_state())
        logger.info("Game reset")

    # ── internals ────────────────────────────────────────────────────

    def _apply(self, step: Step) -> None:
        player = self._state.current_player
        self._commit(step.state, notify=False)
        for event in step.events:
            if event == "ladder" or event == "snake":
                logger.info("%s → %d", step.state.message, step.state.position(player))
            elif event == "win":
                logger.info(step.state.message)
            self.audio.play(event)
        self.observer.on_state(self.snapshot())

    def _commit(self, state: GameState, notify: bool = True) -> None:
        self._state = state
        if notify:
            self.observer.on_state(self.snapshot())

    async def _pause(self, seconds: float) -> None:
        await self._sleep(seconds)
