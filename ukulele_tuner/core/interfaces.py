"""Defines the core interfaces for the Ukulele Tuner application."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable

import numpy as np

from .events import UiState


class IAudioInput(ABC):
    """Interface for audio input handlers."""

    @abstractmethod
    def start(self, callback: Callable[[np.ndarray, float], None]) -> bool:
        """Start capturing audio."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop capturing audio."""
        pass

    @abstractmethod
    def is_running(self) -> bool:
        """Check if audio is running."""
        pass

    @property
    @abstractmethod
    def sample_rate(self) -> int:
        """The sample rate actually in use."""
        pass


class IPitchDetector(ABC):
    """Interface for pitch detection algorithms."""

    @abstractmethod
    def estimate(self, frame: np.ndarray) -> float:
        """Estimate the frequency of an audio frame, NaN if unusable."""
        pass

    @abstractmethod
    def set_sample_rate(self, sample_rate: int) -> None:
        """Reconfigure the detector for the sample rate of the audio input."""
        pass


class IRenderer(ABC):
    """Sink for the UI states emitted by a tuning session."""

    @abstractmethod
    def render(self, state: UiState) -> None:
        """Display a UI state. The return value is never used."""
        pass


class IChime(ABC):
    """Fire-and-forget confirmation sound."""

    @abstractmethod
    def play(self) -> None:
        """Start playing the chime without blocking."""
        pass

    @abstractmethod
    def is_playing(self) -> bool:
        """Check if the chime is still playing."""
        pass
