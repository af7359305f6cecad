from typing import Iterable, Optional, Sequence

from ..logger import get_logger
from ..note_types import Note
from ..note_utils import chromatic_index
from .noise_classifier import DEBOUNCE_THRESHOLD
from .note_buffer import Run

logger = get_logger(__name__)


class TargetResolver:
    """
    Picks the debounced candidate note from the buffer and maps it to the
    closest string of the active tuning.
    """

    def __init__(self, threshold: int = DEBOUNCE_THRESHOLD):
        self._threshold = threshold

    def candidate(self, runs: Iterable[Run]) -> Optional[Note]:
        """The most recent non-silent run longer than the threshold, if any."""
        for run in runs:
            if not run.is_silence and run.length > self._threshold:
                return run.sample
        return None

    @staticmethod
    def closest_target(
        tuning_notes: Sequence[Note], detected: Optional[Note]
    ) -> Optional[Note]:
        """
        Return the tuning note closest to the detected note.

        Distance is measured in semitones along the chromatic index. Ties go
        to the earliest string in tuning order.
        """
        if detected is None or not tuning_notes:
            return None
        detected_index = chromatic_index(detected)
        return min(
            tuning_notes, key=lambda n: abs(chromatic_index(n) - detected_index)
        )

    def resolve(
        self, tuning_notes: Sequence[Note], runs: Iterable[Run]
    ) -> Optional[Note]:
        detected = self.candidate(runs)
        target = self.closest_target(tuning_notes, detected)
        if detected is not None and target != detected:
            logger.debug(f"Resolved {detected} to string {target}")
        return target
