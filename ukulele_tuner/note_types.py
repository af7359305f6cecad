"""Type definitions for the Ukulele Tuner project."""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .exceptions import ConfigurationError

# 12-tone chromatic alphabet, sharps only
NOTE_NAMES: Tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)

MIN_TUNING_STRINGS = 3
MAX_TUNING_STRINGS = 6


@dataclass(frozen=True)
class Note:
    """A pitch class combined with an octave, e.g. G4."""

    name: str  # One of NOTE_NAMES
    octave: int

    def __post_init__(self):
        if self.name not in NOTE_NAMES:
            raise ConfigurationError(f"Unknown note name: {self.name!r}")

    def __str__(self):
        return f"{self.name}{self.octave}"


@dataclass(frozen=True)
class NoteReading:
    """A frequency mapped onto the chromatic scale.

    A reading with ``name is None`` is silence: the detector had no usable
    pitch, and ``cents`` is NaN.
    """

    name: Optional[str]
    octave: Optional[int]
    cents: float  # Signed deviation from the nearest semitone
    frequency: float  # Frequency in Hz, NaN if unusable

    @property
    def note(self) -> Optional[Note]:
        if self.name is None or self.octave is None:
            return None
        return Note(self.name, self.octave)

    @property
    def is_silence(self) -> bool:
        return self.name is None

    @property
    def has_cents(self) -> bool:
        return not math.isnan(self.cents)


@dataclass(frozen=True)
class Tuning:
    """A named, ordered set of target notes, one per instrument string."""

    name: str
    notes: Tuple[Note, ...]

    def __post_init__(self):
        count = len(self.notes)
        if not MIN_TUNING_STRINGS <= count <= MAX_TUNING_STRINGS:
            raise ConfigurationError(
                f"Tuning {self.name!r} has {count} strings, expected "
                f"{MIN_TUNING_STRINGS}-{MAX_TUNING_STRINGS}"
            )

    def __len__(self):
        return len(self.notes)

    def __str__(self):
        return f"{self.name} ({' '.join(str(n) for n in self.notes)})"
