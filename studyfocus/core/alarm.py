from __future__ import annotations

"""Audio cue played on every phase transition."""

from pathlib import Path
from typing import Callable

from loguru import logger


DEFAULT_ALARM_SOUND = "https://cdn.pixabay.com/audio/2022/03/15/audio_7020081b12.mp3"


def resolve_sound(sound_ref: str | None) -> str:
    """Maps a configured cue to a playable URL; blank means the default cue."""
    ref = (sound_ref or "").strip()
    if not ref:
        return DEFAULT_ALARM_SOUND
    if "://" in ref:
        return ref
    return Path(ref).expanduser().resolve().as_uri()


class QtMediaPlayer:
    """Plays a URL through QtMultimedia; errors surface asynchronously."""

    def __init__(self) -> None:
        from PyQt6.QtMultimedia import QAudioOutput, QMediaPlayer

        self._audio = QAudioOutput()
        self._player = QMediaPlayer()
        self._player.setAudioOutput(self._audio)
        self._player.errorOccurred.connect(self._on_error)
        self._source = ""

    def __call__(self, url: str) -> None:
        from PyQt6.QtCore import QUrl

        if url != self._source:
            self._player.setSource(QUrl(url))
            self._source = url
        self._player.stop()
        self._player.play()

    def _on_error(self, error, message: str) -> None:
        logger.warning("Alarm playback failed for {}: {}", self._source, message or error)


class SoundAlarm:
    """Fire-and-forget alarm; playback problems are logged and swallowed."""

    def __init__(self, player: Callable[[str], None] | None = None, enabled: bool = True) -> None:
        self._player = player
        self.enabled = enabled

    def play(self, sound_ref: str = "") -> None:
        if not self.enabled:
            return
        url = resolve_sound(sound_ref)
        try:
            if self._player is None:
                self._player = QtMediaPlayer()
            self._player(url)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not play alarm {}: {}", url, exc)
