"""CLI entry point: python -m snakes_ladders {play,board,demo}."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import random
from dataclasses import dataclass, field
from pathlib import Path

from rich.logging import RichHandler

from snakes_ladders.audio import (
    AudioNotifier,
    NullAudio,
    PygameMixerBackend,
    SoundBoard,
    load_default_sounds,
)
from snakes_ladders.board import DEFAULT_TABLE
from snakes_ladders.game import BoardSnapshot, GameEngine, Pacing
from snakes_ladders.moves import GameState
from snakes_ladders.render import PngBoardObserver, format_board, render_board


SOUND_DIR = Path(os.environ.get("SNAKES_LADDERS_SOUND_DIR", "sounds"))

HELP = "Commands: 1 / 2 = roll for that player, r = reset, s = sound on/off, q = quit"


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
    )


def _make_audio(args: argparse.Namespace) -> AudioNotifier:
    if args.mute:
        return NullAudio()
    board = SoundBoard(PygameMixerBackend())
    load_default_sounds(board, args.sound_dir)
    if board.failed:
        print(f"Sound disabled, could not load: {', '.join(board.failed)}")
    return board


@dataclass
class StepPrinter:
    """Prints a line each time a pawn changes square."""

    last: tuple[int, int] = (0, 0)
    extra: list = field(default_factory=list)

    def on_state(self, snapshot: BoardSnapshot) -> None:
        now = (snapshot.player1_position, snapshot.player2_position)
        for player, (before, after) in enumerate(zip(self.last, now), start=1):
            if before != after and after != 0:
                print(f"  Player {player}: {before} → {after}")
        self.last = now
        for observer in self.extra:
            observer.on_state(snapshot)


# ── play ─────────────────────────────────────────────────────────────

async def _play(args: argparse.Namespace) -> None:
    audio = _make_audio(args)
    printer = StepPrinter()
    if args.board_png:
        printer.extra.append(PngBoardObserver(args.board_png))
    engine = GameEngine(
        audio=audio,
        observer=printer,
        pacing=Pacing.instant() if args.instant else Pacing(),
        rng=random.Random(args.seed) if args.seed is not None else None,
    )

    print(format_board(engine.snapshot()))
    print(HELP)
    while True:
        state = engine.state
        prompt = "Game over. r = play again, q = quit > " if state.game_over else f"Player {state.current_player} > "
        try:
            command = (await asyncio.to_thread(input, prompt)).strip().lower()
        except EOFError:
            break

        if command in ("q", "quit"):
            break
        if command in ("1", "2"):
            if not await engine.request_roll(int(command)):
                print("Not your turn." if not state.game_over else "The game is over.")
                continue
            snap = engine.snapshot()
            print(f"Rolled a {snap.dice_value}.")
            print(format_board(snap))
            if snap.message:
                print(snap.message)
        elif command == "r":
            engine.reset()
            printer.last = (0, 0)
            print(format_board(engine.snapshot()))
        elif command == "s":
            if isinstance(audio, SoundBoard):
                audio.set_enabled(not audio.enabled)
                print(f"Sound {'on' if audio.enabled else 'off'}.")
            else:
                print("Sound is not available.")
        else:
            print(HELP)


def cmd_play(args: argparse.Namespace) -> None:
    """Interactive two-player game in the terminal."""
    asyncio.run(_play(args))


# ── board ────────────────────────────────────────────────────────────

def cmd_board(args: argparse.Namespace) -> None:
    """Render the board to a PNG."""
    state = GameState(positions=(args.p1, args.p2))
    engine = GameEngine(state=state)
    out = render_board(engine.snapshot(), output_path=args.output)
    print(f"Board saved to {out}")


# ── demo ─────────────────────────────────────────────────────────────

async def _demo(engine: GameEngine, max_rolls: int) -> int:
    rolls = 0
    while not engine.state.game_over and rolls < max_rolls:
        player = engine.state.current_player
        before = engine.state.position(player)
        await engine.request_roll(player)
        rolls += 1
        after = engine.state.position(player)
        note = f"  ({engine.state.message})" if engine.state.message else ""
        print(f"{rolls:>4}. Player {player} rolled {engine.state.dice_value}: {before} → {after}{note}")
    return rolls


def cmd_demo(args: argparse.Namespace) -> None:
    """Play a full game with both players rolling in turn."""
    engine = GameEngine(
        table=DEFAULT_TABLE,
        audio=NullAudio(),
        pacing=Pacing.instant(),
        rng=random.Random(args.seed) if args.seed is not None else None,
    )
    rolls = asyncio.run(_demo(engine, args.max_rolls))
    if engine.state.game_over:
        print(f"\nPlayer {engine.state.current_player} won after {rolls} rolls.")
    else:
        print(f"\nNo winner after {rolls} rolls.")


# ── main ─────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="snakes_ladders",
        description="Two-player Snakes & Ladders",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    p_play = sub.add_parser("play", help="Play in the terminal")
    p_play.add_argument("--mute", action="store_true", help="No sound")
    p_play.add_argument("--sound-dir", type=Path, default=SOUND_DIR, help="Directory with the sound files")
    p_play.add_argument("--instant", action="store_true", help="Skip the pauses between steps")
    p_play.add_argument("--seed", type=int, help="Seed the die")
    p_play.add_argument("--board-png", help="Keep a PNG of the board updated at this path")

    p_board = sub.add_parser("board", help="Render the board to PNG")
    p_board.add_argument("--output", "-o", default="board.png", help="Output PNG path")
    p_board.add_argument("--p1", type=int, default=0, help="Player 1 square")
    p_board.add_argument("--p2", type=int, default=0, help="Player 2 square")

    p_demo = sub.add_parser("demo", help="Play a whole game automatically")
    p_demo.add_argument("--seed", type=int, help="Seed the die")
    p_demo.add_argument("--max-rolls", type=int, default=500, help="Stop after this many rolls")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    if args.command == "play":
        cmd_play(args)
    elif args.command == "board":
        cmd_board(args)
    elif args.command == "demo":
        cmd_demo(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
