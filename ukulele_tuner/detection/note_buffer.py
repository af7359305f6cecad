from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, Optional

from ..logger import get_logger
from ..note_types import Note
from ..note_utils import describe_sample

logger = get_logger(__name__)

NOTE_BUFFER_SIZE = 15


@dataclass(frozen=True)
class Run:
    """A maximal stretch of identical samples in the note buffer."""

    sample: Optional[Note]  # None for silence
    length: int

    @property
    def is_silence(self) -> bool:
        return self.sample is None


class NoteBuffer:
    """
    Fixed-size window of the most recent note-or-silence samples.

    The buffer always holds exactly ``size`` samples, starting out as silence.
    Iteration and grouping go from the most recent sample to the oldest.
    """

    def __init__(self, size: int = NOTE_BUFFER_SIZE):
        self._size = size
        self._samples: Deque[Optional[Note]] = deque([None] * size, maxlen=size)

    def push(self, sample: Optional[Note]) -> None:
        """Adds a sample, evicting the oldest one."""
        self._samples.appendleft(sample)

    def clear(self) -> None:
        self._samples.extend([None] * self._size)

    def groups(self) -> Iterator[Run]:
        """
        Group consecutive equal samples into runs, most recent run first.

        This is a fresh view over the buffer on every call.
        """
        current: Optional[Note] = None
        length = 0
        for index, sample in enumerate(self._samples):
            if index == 0:
                current, length = sample, 1
            elif sample == current:
                length += 1
            else:
                yield Run(current, length)
                current, length = sample, 1
        if length:
            yield Run(current, length)

    def describe(self) -> str:
        return "".join(describe_sample(s) for s in self._samples)

    @property
    def size(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Optional[Note]]:
        return iter(self._samples)

    def __len__(self) -> int:
        return len(self._samples)
