"""Confirmation jingle played when a string gets tuned."""

from __future__ import annotations
import time
from typing import Sequence

import numpy as np
import sounddevice as sd

from ..core.interfaces import IChime
from ..logger import get_logger

logger = get_logger(__name__)

# C6 then G6, a short rising fifth
JINGLE_NOTES = (1046.5, 1568.0)


def synthesize_jingle(
    frequencies: Sequence[float] = JINGLE_NOTES,
    note_duration: float = 0.18,
    sample_rate: int = 44100,
    volume: float = 0.5,
) -> np.ndarray:
    """Render a sequence of decaying sine tones as float32 samples."""
    t = np.arange(int(note_duration * sample_rate)) / sample_rate
    envelope = np.exp(-6 * t / note_duration)
    tones = [np.sin(2 * np.pi * f * t) * envelope for f in frequencies]
    return (np.concatenate(tones) * volume).astype(np.float32)


class SoundDeviceChime(IChime):
    """Plays the jingle on the default output device without blocking."""

    def __init__(self, sample_rate: int = 44100, volume: float = 0.5) -> None:
        self._sample_rate = sample_rate
        self._samples = synthesize_jingle(sample_rate=sample_rate, volume=volume)
        self._duration = len(self._samples) / sample_rate
        self._playing_until = 0.0

    def play(self) -> None:
        try:
            sd.play(self._samples, self._sample_rate)
        except Exception as e:
            # A missing output device must not stop the tuner
            logger.warning(f"Could not play chime: {e}")
            return
        self._playing_until = time.monotonic() + self._duration

    def is_playing(self) -> bool:
        return time.monotonic() < self._playing_until
