"""Snake and ladder transitions for the 10×10 board."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

FINAL_SQUARE = 100

# fmt: off
LADDERS: dict[int, int] = {
     2: 38,   7: 14,   8: 31,  15: 26,  21: 42,
    28: 84,  36: 44,  51: 67,  71: 91,  78: 98,
}

SNAKES: dict[int, int] = {
    16:  6,  47: 26,  49: 11,  56: 53,  62: 19,
    64: 60,  87: 24,  93: 73,  95: 75,
}
# fmt: on


def _check_square(square: int, what: str) -> None:
    if not 1 <= square < FINAL_SQUARE:
        raise ValueError(f"{what} square {square} must be between 1 and {FINAL_SQUARE - 1}")


@dataclass(frozen=True)
class TransitionTable:
    """Read-only lookup of ladder and snake triggers.

    Built once from two plain mappings. Construction fails with
    ``ValueError`` if a square triggers both a ladder and a snake, if a
    ladder does not go up or a snake does not go down, or if any square
    is 0 or 100 (landing on 100 must go through the win check).
    """

    ladders: Mapping[int, int] = field(default_factory=dict)
    snakes: Mapping[int, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        overlap = set(self.ladders) & set(self.snakes)
        if overlap:
            raise ValueError(f"squares are both ladder and snake: {sorted(overlap)}")
        for trigger, dest in self.ladders.items():
            _check_square(trigger, "ladder")
            _check_square(dest, "ladder destination")
            if dest <= trigger:
                raise ValueError(f"ladder {trigger} → {dest} does not go up")
        for trigger, dest in self.snakes.items():
            _check_square(trigger, "snake")
            _check_square(dest, "snake destination")
            if dest >= trigger:
                raise ValueError(f"snake {trigger} → {dest} does not go down")
        # Freeze private copies so the caller's dicts can't leak mutations in
        object.__setattr__(self, "ladders", MappingProxyType(dict(self.ladders)))
        object.__setattr__(self, "snakes", MappingProxyType(dict(self.snakes)))

    def is_trigger(self, square: int) -> bool:
        return square in self.ladders or square in self.snakes

    def is_ladder(self, square: int) -> bool:
        return square in self.ladders

    def is_snake(self, square: int) -> bool:
        return square in self.snakes

    def destination(self, square: int) -> int | None:
        """Where a pawn landing on *square* ends up, or None if it stays."""
        if square in self.ladders:
            return self.ladders[square]
        return self.snakes.get(square)

    def triggers(self) -> list[int]:
        return sorted([*self.ladders, *self.snakes])


DEFAULT_TABLE = TransitionTable(ladders=LADDERS, snakes=SNAKES)
