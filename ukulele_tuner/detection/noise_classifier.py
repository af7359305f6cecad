from dataclasses import dataclass
from itertools import takewhile
from typing import Iterable, List, Optional

from ..note_types import Note
from .note_buffer import Run

# Runs of this length or shorter are considered noise
DEBOUNCE_THRESHOLD = 3
# Number of noisy runs in front of the locked note that count as short noise
SHORT_NOISE_RUNS = 3
# Minimum length of the leading silent run that counts as silence
SILENCE_RUN_LENGTH = 2


@dataclass(frozen=True)
class NoiseReport:
    long_noise: bool
    short_noise: bool
    silence: bool


def non_silent(runs: Iterable[Run]) -> List[Run]:
    return [r for r in runs if not r.is_silence]


class NoiseClassifier:
    """
    Decides whether the grouped note buffer is noise rather than a note.

    Long noise means no confident note at all. Short noise means too many
    short competing runs in front of the locked note. Silence means the most
    recent samples are silent.
    """

    def __init__(self, threshold: int = DEBOUNCE_THRESHOLD):
        self._threshold = threshold

    def is_long_noise(self, runs: Iterable[Run]) -> bool:
        """True iff every non-silent run is at most threshold samples long."""
        return all(r.length <= self._threshold for r in non_silent(runs))

    def is_short_noise(self, runs: Iterable[Run], current: Optional[Note]) -> bool:
        """True iff 3 or more noisy runs sit in front of the current note."""

        def is_noisy(run: Run) -> bool:
            return run.sample != current or run.length <= self._threshold

        noisy = list(takewhile(is_noisy, non_silent(runs)))
        return len(noisy) >= SHORT_NOISE_RUNS

    @staticmethod
    def is_silence(runs: Iterable[Run]) -> bool:
        first = next(iter(runs), None)
        return (
            first is not None
            and first.is_silence
            and first.length >= SILENCE_RUN_LENGTH
        )

    def classify(self, runs: List[Run], current: Optional[Note]) -> NoiseReport:
        return NoiseReport(
            long_noise=self.is_long_noise(runs),
            short_noise=self.is_short_noise(runs, current),
            silence=self.is_silence(runs),
        )
