"""Tests for snakes_ladders.game (engine driver)."""

import asyncio
import random

import pytest

from snakes_ladders.board import DEFAULT_TABLE
from snakes_ladders.game import GameEngine, ListObserver, Pacing
from snakes_ladders.moves import GameState, initial_state


class ScriptedDice:
    """Deterministic die — returns a fixed sequence of values."""

    def __init__(self, *values: int):
        self.values = list(values)

    def randint(self, a: int, b: int) -> int:
        assert (a, b) == (1, 6)
        return self.values.pop(0)


class RecordingAudio:
    def __init__(self):
        self.loaded: dict[str, str] = {}
        self.played: list[str] = []

    def load(self, name, source):
        self.loaded[name] = source

    def play(self, name):
        self.played.append(name)


def _engine(*rolls: int, state: GameState | None = None, **kwargs):
    audio = RecordingAudio()
    observer = ListObserver()
    dice = ScriptedDice(*rolls)
    engine = GameEngine(
        audio=audio,
        observer=observer,
        pacing=kwargs.pop("pacing", Pacing.instant()),
        rng=dice,
        state=state,
        **kwargs,
    )
    return engine, audio, observer, dice


def _roll(engine: GameEngine, player: int) -> bool:
    return asyncio.run(engine.request_roll(player))


# ── scenarios ────────────────────────────────────────────────────────

def test_roll_two_from_start_climbs_ladder():
    engine, audio, _, _ = _engine(2)

    assert _roll(engine, 1) is True

    s = engine.state
    assert s.positions == (38, 0)
    assert s.dice_value == 2
    assert s.message == "Player 1 climbed a ladder!"
    assert s.current_player == 2
    assert not s.is_moving
    assert audio.played == ["roll", "move", "move", "ladder"]


def test_roll_onto_snake():
    engine, audio, _, _ = _engine(2, state=GameState(positions=(14, 0)))

    _roll(engine, 1)

    assert engine.state.position(1) == 6
    assert engine.state.message == "Player 1 hit a snake!"
    assert engine.state.current_player == 2
    assert audio.played == ["roll", "move", "move", "snake"]


def test_exact_landing_on_100_wins():
    engine, audio, _, _ = _engine(3, state=GameState(positions=(97, 0)))

    _roll(engine, 1)

    s = engine.state
    assert s.position(1) == 100
    assert s.game_over is True
    assert s.message == "Player 1 wins!"
    assert s.current_player == 1
    assert audio.played == ["roll", "move", "move", "move", "win"]


def test_overshoot_is_not_capped_and_wins():
    engine, _, _, _ = _engine(6, state=GameState(positions=(95, 0)))

    _roll(engine, 1)

    assert engine.state.position(1) == 101
    assert engine.state.game_over is True
    assert engine.state.current_player == 1


def test_player_two_can_win():
    state = GameState(positions=(10, 99), current_player=2)
    engine, _, _, _ = _engine(1, state=state)

    _roll(engine, 2)

    assert engine.state.game_over
    assert engine.state.message == "Player 2 wins!"
    assert engine.state.current_player == 2


# ── rejected rolls ───────────────────────────────────────────────────

def test_roll_for_inactive_player_is_ignored():
    engine, audio, observer, dice = _engine(4)
    before = engine.state

    assert _roll(engine, 2) is False

    assert engine.state == before
    assert audio.played == []
    assert observer.snapshots == []
    assert dice.values == [4]


@pytest.mark.parametrize("player", [0, 3, -1, "1", None])
def test_unknown_player_is_ignored(player):
    engine, audio, _, _ = _engine(4)
    before = engine.state

    assert _roll(engine, player) is False
    assert engine.state == before
    assert audio.played == []


def test_no_rolls_after_game_over():
    engine, audio, _, dice = _engine(3, 5, state=GameState(positions=(97, 20)))
    _roll(engine, 1)
    after_win = engine.state
    played = list(audio.played)

    assert _roll(engine, 1) is False
    assert _roll(engine, 2) is False

    assert engine.state == after_win
    assert audio.played == played
    assert dice.values == [5]


def test_roll_while_moving_is_ignored():
    engine, audio, _, dice = _engine(4, 3)

    async def scenario():
        task = asyncio.create_task(engine.request_roll(1))
        await asyncio.sleep(0)  # let the move start
        assert engine.state.is_moving
        before = engine.state
        played = list(audio.played)

        assert await engine.request_roll(1) is False
        assert await engine.request_roll(2) is False
        assert engine.state == before
        assert audio.played == played

        assert await task is True

    asyncio.run(scenario())
    assert engine.state.positions == (4, 0)
    assert engine.state.current_player == 2
    assert dice.values == [3]


# ── pacing ───────────────────────────────────────────────────────────

def _recording_sleep(log: list[float]):
    async def sleep(seconds: float) -> None:
        log.append(seconds)
    return sleep


def test_pauses_for_a_plain_move():
    pauses: list[float] = []
    engine, _, _, _ = _engine(
        3, state=GameState(positions=(40, 0)),
        pacing=Pacing(), sleep=_recording_sleep(pauses),
    )

    _roll(engine, 1)

    assert pauses == [0.5, 0.3, 0.3, 0.3]


def test_pauses_around_a_jump():
    pauses: list[float] = []
    engine, _, _, _ = _engine(2, pacing=Pacing(), sleep=_recording_sleep(pauses))

    _roll(engine, 1)

    assert pauses == [0.5, 0.3, 0.3, 0.5, 1.0]


def test_instant_pacing_is_all_zero():
    p = Pacing.instant()
    assert (p.start, p.step, p.before_jump, p.after_jump) == (0, 0, 0, 0)


# ── observer ─────────────────────────────────────────────────────────

def test_observer_sees_every_square():
    engine, _, observer, _ = _engine(2)

    _roll(engine, 1)

    positions = [snap.player1_position for snap in observer.snapshots]
    # dice shown, move started, two steps, ladder, turn handed over
    assert positions == [0, 0, 1, 2, 38, 38]
    assert observer.snapshots[-1].current_player == 2


def test_snapshot_carries_the_board():
    engine, _, _, _ = _engine()
    snap = engine.snapshot()
    assert snap.player1_position == 0
    assert snap.player2_position == 0
    assert dict(snap.ladders) == dict(DEFAULT_TABLE.ladders)
    assert dict(snap.snakes) == dict(DEFAULT_TABLE.snakes)
    assert snap.game_over is False


# ── reset ────────────────────────────────────────────────────────────

def test_reset_restores_initial_state():
    engine, _, observer, _ = _engine(2, 5, 4)
    _roll(engine, 1)
    _roll(engine, 2)
    _roll(engine, 1)
    assert engine.state != initial_state()

    engine.reset()

    assert engine.state == initial_state()
    assert observer.snapshots[-1].player1_position == 0
    assert observer.snapshots[-1].message == ""


def test_reset_after_win_allows_new_game():
    engine, _, _, _ = _engine(3, 4, state=GameState(positions=(97, 0)))
    _roll(engine, 1)
    assert engine.state.game_over

    engine.reset()

    assert _roll(engine, 1) is True
    assert engine.state.positions == (4, 0)


def test_reset_mid_move_drops_the_move():
    engine, audio, _, _ = _engine(5)

    async def scenario():
        task = asyncio.create_task(engine.request_roll(1))
        await asyncio.sleep(0)
        engine.reset()
        await task

    asyncio.run(scenario())
    assert engine.state == initial_state()
    assert audio.played == ["roll"]


# ── whole games ──────────────────────────────────────────────────────

def test_seeded_game_runs_to_a_winner():
    engine = GameEngine(pacing=Pacing.instant(), rng=random.Random(7))

    async def play():
        for _ in range(2000):
            if engine.state.game_over:
                return
            player = engine.state.current_player
            assert await engine.request_roll(player) is True
            if not engine.state.game_over:
                assert engine.state.current_player != player

    asyncio.run(play())
    s = engine.state
    assert s.game_over
    assert s.position(s.current_player) >= 100
    assert s.message == f"Player {s.current_player} wins!"
