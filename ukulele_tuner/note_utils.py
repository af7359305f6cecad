"""Utility functions for working with musical notes and frequencies."""

import math
import re
from typing import Dict, List, Optional

import numpy as np

from .exceptions import ConfigurationError
from .logger import get_logger
from .note_types import NOTE_NAMES, Note, NoteReading

# Get logger for this module
logger = get_logger(__name__)

# Standard reference: A4 = 440Hz, MIDI note 69
A4_FREQUENCY = 440.0
A4_MIDI = 69

# The chromatic index spans octaves 1 to 8, ascending
CHROMATIC_OCTAVES = range(1, 9)
CHROMATIC_NOTES: List[Note] = [
    Note(name, octave) for octave in CHROMATIC_OCTAVES for name in NOTE_NAMES
]
_CHROMATIC_INDEX: Dict[Note, int] = {n: i for i, n in enumerate(CHROMATIC_NOTES)}

# Note name, optional accidental, octave. '_' is accepted as separator (G_4).
NOTE_PATTERN = re.compile(r"^([A-Ga-g][#b]?)_?(-?[0-9]+)$")

FLAT_TO_SHARP = {
    "Ab": "G#",
    "Bb": "A#",
    "Cb": "B",
    "Db": "C#",
    "Eb": "D#",
    "Fb": "E",
    "Gb": "F#",
}


def midi_to_frequency(midi_number: int) -> float:
    """Equal-tempered frequency of a MIDI note number."""
    return A4_FREQUENCY * 2 ** ((midi_number - A4_MIDI) / 12)


def note_to_midi(note: Note) -> int:
    """MIDI number of a note in Scientific Pitch Notation (C4 = 60)."""
    return (note.octave + 1) * 12 + NOTE_NAMES.index(note.name)


def note_to_frequency(note: Note) -> float:
    """Convert a note to its reference frequency in Hz.

    Examples:
        >>> note_to_frequency(Note("A", 4))
        440.0
    """
    return midi_to_frequency(note_to_midi(note))


def get_note(frequency: float) -> NoteReading:
    """Map a frequency onto the closest note of the chromatic scale.

    NaN, infinite and non-positive frequencies are silence: the reading has
    no name and NaN cents.

    Args:
        frequency: Frequency in Hz as reported by the pitch detector

    Returns:
        NoteReading with the note name, octave and the signed deviation in cents
    """
    if frequency is None or not np.isfinite(frequency) or frequency <= 0:
        return NoteReading(None, None, math.nan, math.nan)

    half_steps = round(12 * float(np.log2(frequency / A4_FREQUENCY)))
    midi_number = A4_MIDI + half_steps

    # SPN octave calculation (C4 is middle C)
    octave = (midi_number // 12) - 1
    name = NOTE_NAMES[midi_number % 12]
    cents = 1200 * float(np.log2(frequency / midi_to_frequency(midi_number)))

    return NoteReading(name, octave, cents, float(frequency))


def chromatic_index(note: Note) -> int:
    """Position of a note in the 96-entry chromatic index, -1 if outside it."""
    return _CHROMATIC_INDEX.get(note, -1)


def normalize_to_sharp(name: str) -> str:
    name = name[0].upper() + name[1:]
    return FLAT_TO_SHARP.get(name, name)


def parse_note(text: str) -> Note:
    """Parse a note such as 'G4', 'C#4', 'Bb3' or 'G_4'.

    Raises:
        ConfigurationError: If the text is not a note with an octave
    """
    match = NOTE_PATTERN.match(str(text).strip())
    if not match:
        raise ConfigurationError(f"Invalid note: {text!r}")
    return Note(normalize_to_sharp(match.group(1)), int(match.group(2)))


def describe_sample(sample: Optional[Note]) -> str:
    """One-character picture of a sample: '-' for silence, lower case for sharps."""
    if sample is None:
        return "-"
    if "#" in sample.name:
        return sample.name[0].lower()
    return sample.name[0]
