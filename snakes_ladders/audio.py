"""Sound effects for game events.

The engine only ever talks to an :class:`AudioNotifier`. Whatever goes
wrong in here (missing files, no audio device) stays in here: it turns
sound off and is reported through :attr:`SoundBoard.failed`, but never
changes how the game plays.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

SOUND_FILES: dict[str, str] = {
    "roll": "dice-roll.mp3",
    "move": "move.mp3",
    "ladder": "ladder.mp3",
    "snake": "snake.mp3",
    "win": "win.mp3",
}


# ── Interfaces ───────────────────────────────────────────────────────

@runtime_checkable
class AudioNotifier(Protocol):
    """Anything the engine can announce named events to."""

    def load(self, name: str, source: str | Path) -> None: ...

    def play(self, name: str) -> None: ...


class AudioBackend(Protocol):
    """Low-level sound output used by :class:`SoundBoard`."""

    def open(self) -> None: ...

    def load(self, source: str | Path) -> Any: ...

    def play(self, sound: Any) -> None: ...


class NullAudio:
    """Notifier that ignores everything."""

    def load(self, name: str, source: str | Path) -> None:
        pass

    def play(self, name: str) -> None:
        pass


# ── pygame backend ───────────────────────────────────────────────────

@dataclass
class PygameMixerBackend:
    """Plays sounds through ``pygame.mixer``."""

    _mixer: object = field(default=None, repr=False)

    def open(self) -> None:
        if self._mixer is None:
            import pygame
            pygame.mixer.init()
            self._mixer = pygame.mixer

    def load(self, source: str | Path) -> Any:
        self.open()
        return self._mixer.Sound(str(source))

    def play(self, sound: Any) -> None:
        sound.play()


# ── Sound board ──────────────────────────────────────────────────────

class SoundBoard:
    """Named sounds with a global on/off switch.

    A single failed load switches sound off for good (the user toggle
    can't turn it back on). Later loads are still attempted so that
    :attr:`failed` names every sound that could not be loaded.
    """

    def __init__(self, backend: AudioBackend):
        self.backend = backend
        self.failed: list[str] = []
        self._sounds: dict[str, Any] = {}
        self._enabled = True
        self._broken = False
        try:
            backend.open()
        except Exception as exc:
            logger.warning("Audio unavailable, sound disabled: %s", exc)
            self._broken = True

    @property
    def enabled(self) -> bool:
        return self._enabled and not self._broken

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def load(self, name: str, source: str | Path) -> None:
        try:
            self._sounds[name] = self.backend.load(source)
        except Exception as exc:
            logger.warning("Failed to load sound %s from %s: %s", name, source, exc)
            self.failed.append(name)
            self._broken = True

    def play(self, name: str) -> None:
        if not self.enabled or name not in self._sounds:
            return
        try:
            self.backend.play(self._sounds[name])
        except Exception as exc:
            logger.warning("Failed to play sound %s: %s", name, exc)


def load_default_sounds(notifier: AudioNotifier, directory: str | Path) -> None:
    """Load every event sound from *directory*."""
    directory = Path(directory)
    for name, filename in SOUND_FILES.items():
        notifier.load(name, directory / filename)
