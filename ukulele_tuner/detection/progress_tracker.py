from typing import Iterator, List, Optional, Sequence

from ..logger import get_logger
from ..note_types import Note

logger = get_logger(__name__)

TUNE_BUFFER_SIZE = 5


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class ProgressTracker:
    """
    Tuning progress of a single string.

    Every exact hit adds a marker to the cents buffer; the tune ratio
    saturates at 1 once ``buffer_size`` hits have been collected.
    """

    def __init__(self, note: Note, buffer_size: int = TUNE_BUFFER_SIZE):
        self.note = note
        self._buffer_size = buffer_size
        self._cents_buffer: List[int] = []
        self.tuning_complete = False
        # Survives soft resets, cleared on hard reset and after victory
        self.string_tuned = False

    def record_hit(self) -> None:
        self._cents_buffer.append(0)

    @property
    def hits(self) -> int:
        return len(self._cents_buffer)

    @property
    def tune_ratio(self) -> float:
        return clamp(len(self._cents_buffer) / self._buffer_size)

    @property
    def is_complete(self) -> bool:
        return self.tune_ratio == 1

    def mark_complete(self) -> bool:
        """
        Latch completion.

        Returns:
            True only on the tick the string first becomes complete.
        """
        if not self.is_complete or self.tuning_complete:
            return False
        self.tuning_complete = True
        self.string_tuned = True
        return True

    def reset(self, clear_mark: bool = False) -> None:
        self._cents_buffer = []
        self.tuning_complete = False
        if clear_mark:
            self.string_tuned = False

    def __repr__(self):
        return (
            f"ProgressTracker({self.note}, hits={self.hits}, "
            f"complete={self.tuning_complete}, tuned={self.string_tuned})"
        )


class StringProgress:
    """Progress trackers for every string of a tuning, in string order."""

    def __init__(self, notes: Sequence[Note], buffer_size: int = TUNE_BUFFER_SIZE):
        self._notes = tuple(notes)
        self._trackers = [ProgressTracker(n, buffer_size) for n in self._notes]

    def index_of(self, note: Note) -> int:
        return self._notes.index(note)

    def tracker_for(self, note: Note) -> ProgressTracker:
        return self._trackers[self.index_of(note)]

    def reset_all(self, clear_marks: bool = False) -> None:
        for tracker in self._trackers:
            tracker.reset(clear_mark=clear_marks)

    def reset_except(self, note: Optional[Note]) -> None:
        """Soft reset every string but ``note``, which keeps its progress."""
        for tracker in self._trackers:
            if tracker.note != note:
                tracker.reset()

    @property
    def all_tuned(self) -> bool:
        return all(t.string_tuned for t in self._trackers)

    def __getitem__(self, index: int) -> ProgressTracker:
        return self._trackers[index]

    def __iter__(self) -> Iterator[ProgressTracker]:
        return iter(self._trackers)

    def __len__(self) -> int:
        return len(self._trackers)
