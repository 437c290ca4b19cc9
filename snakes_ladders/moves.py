"""Pure move-resolution state machine.

A roll is resolved as a sequence of ticks. Each call to
:func:`advance_one_step` performs exactly one of:

* **walk** – move the active pawn one square forward,
* **jump** – follow the ladder or snake the pawn landed on,
* **finish** – decide the win or hand the turn to the other player.

Nothing here sleeps or plays sounds; the caller decides timing and
forwards the emitted event names to whoever is listening.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal

from snakes_ladders.board import DEFAULT_TABLE, FINAL_SQUARE, TransitionTable

PLAYERS = (1, 2)
DIE_FACES = range(1, 7)

StepKind = Literal["walk", "jump", "finish"]


def other_player(player: int) -> int:
    return 2 if player == 1 else 1


# ── State ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MoveInProgress:
    """What is left of the roll currently being resolved."""

    remaining_steps: int
    pending_transition: int | None = None  # destination square, once landed on a trigger


@dataclass(frozen=True)
class GameState:
    """Complete game state. Never mutated; every transition returns a copy."""

    positions: tuple[int, int] = (0, 0)
    current_player: int = 1
    dice_value: int = 0  # 0 = nothing rolled yet
    game_over: bool = False
    message: str = ""
    move: MoveInProgress | None = None

    @property
    def is_moving(self) -> bool:
        return self.move is not None

    def position(self, player: int) -> int:
        return self.positions[player - 1]

    def with_position(self, player: int, square: int) -> GameState:
        positions = list(self.positions)
        positions[player - 1] = square
        return replace(self, positions=(positions[0], positions[1]))


def initial_state() -> GameState:
    return GameState()


# ── Transitions ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Step:
    """Result of one tick: the new state and the events it produced."""

    state: GameState
    kind: StepKind
    events: tuple[str, ...] = field(default_factory=tuple)


def begin_move(state: GameState, spaces: int) -> GameState:
    """Enter the moving state for a roll of *spaces*."""
    if spaces not in DIE_FACES:
        raise ValueError(f"cannot move {spaces} spaces")
    if state.game_over:
        raise ValueError("game is over")
    if state.is_moving:
        raise ValueError("a move is already in progress")
    return replace(state, move=MoveInProgress(remaining_steps=spaces))


def advance_one_step(state: GameState, table: TransitionTable = DEFAULT_TABLE) -> Step:
    """Apply the next tick of the move in progress."""
    move = state.move
    if move is None:
        raise ValueError("no move in progress")
    player = state.current_player

    if move.remaining_steps > 0:
        square = state.position(player) + 1
        remaining = move.remaining_steps - 1
        new = state.with_position(player, square)
        if remaining == 0:
            dest = table.destination(square)
            if dest is None:
                new = replace(new, message="", move=MoveInProgress(0))
            else:
                new = replace(new, move=MoveInProgress(0, pending_transition=dest))
        else:
            new = replace(new, move=MoveInProgress(remaining))
        return Step(state=new, kind="walk", events=("move",))

    if move.pending_transition is not None:
        landed = state.position(player)
        if table.is_ladder(landed):
            message, event = f"Player {player} climbed a ladder!", "ladder"
        else:
            message, event = f"Player {player} hit a snake!", "snake"
        new = state.with_position(player, move.pending_transition)
        new = replace(new, message=message, move=MoveInProgress(0))
        return Step(state=new, kind="jump", events=(event,))

    # Overshoot past 100 still counts as a win
    if state.position(player) >= FINAL_SQUARE:
        new = replace(
            state, game_over=True, message=f"Player {player} wins!", move=None,
        )
        return Step(state=new, kind="finish", events=("win",))
    new = replace(state, current_player=other_player(player), move=None)
    return Step(state=new, kind="finish")


def resolve_all(
    state: GameState, spaces: int, table: TransitionTable = DEFAULT_TABLE,
) -> tuple[GameState, list[Step]]:
    """Run a whole roll to completion with no pacing."""
    state = begin_move(state, spaces)
    steps: list[Step] = []
    while state.is_moving:
        step = advance_one_step(state, table)
        steps.append(step)
        state = step.state
    return state, steps
