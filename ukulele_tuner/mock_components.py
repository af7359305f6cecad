"""Mock collaborators for unit tests. Allow driving the tuner without audio."""

import math
from typing import Iterable, List

from .core.events import UiState
from .core.interfaces import IAudioInput, IChime, IPitchDetector, IRenderer


class MockAudioInput(IAudioInput):
    """Audio input whose frames are pushed by hand with ``feed``."""

    def __init__(self, sample_rate: int = 44100, fail_start: bool = False):
        self.callback = None
        self.running = False
        self.fail_start = fail_start
        self._sample_rate = sample_rate

    def start(self, callback):
        if self.fail_start:
            return False
        self.callback = callback
        self.running = True
        return True

    def stop(self):
        self.running = False

    def is_running(self):
        return self.running

    @property
    def sample_rate(self):
        return self._sample_rate

    def feed(self, frame, timestamp=0.0):
        if self.callback:
            self.callback(frame, timestamp)


class MockPitchDetector(IPitchDetector):
    """Returns scripted frequencies, one per frame, then NaN."""

    def __init__(self, frequencies: Iterable[float] = (), fail_sample_rate=None):
        self._frequencies = list(frequencies)
        self.frames = 0
        self.sample_rate = None
        self.fail_sample_rate = fail_sample_rate

    def estimate(self, frame):
        self.frames += 1
        if self._frequencies:
            return self._frequencies.pop(0)
        return math.nan

    def set_sample_rate(self, sample_rate):
        if self.fail_sample_rate is not None:
            raise self.fail_sample_rate
        self.sample_rate = sample_rate


class RecordingRenderer(IRenderer):
    """Keeps every rendered state."""

    def __init__(self):
        self.states: List[UiState] = []

    def render(self, state):
        self.states.append(state)


class MockChime(IChime):
    def __init__(self):
        self.plays = 0
        self.playing = False

    def play(self):
        self.plays += 1

    def is_playing(self):
        return self.playing
