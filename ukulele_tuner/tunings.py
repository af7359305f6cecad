"""Named string tunings supported by the tuner."""

from typing import Dict, Union

from .exceptions import ConfigurationError
from .note_types import Tuning
from .note_utils import parse_note


def _tuning(name: str, *notes: str) -> Tuning:
    return Tuning(name, tuple(parse_note(n) for n in notes))


# Ordered high-to-low as the strings appear on the fretboard diagram
TUNINGS: Dict[str, Tuning] = {
    "gCEA": _tuning("gCEA", "G4", "C4", "E4", "A4"),  # Standard, re-entrant
    "GCEA": _tuning("GCEA", "G3", "C4", "E4", "A4"),  # Low G
    "DGBE": _tuning("DGBE", "D3", "G3", "B3", "E4"),  # Baritone
}

DEFAULT_TUNING = "gCEA"


def get_tuning(tuning: Union[str, Tuning]) -> Tuning:
    """Look up a tuning by name, passing Tuning instances through.

    Raises:
        ConfigurationError: If the name is empty or not a known tuning
    """
    if isinstance(tuning, Tuning):
        return tuning
    if not tuning:
        raise ConfigurationError("No tuning given")
    try:
        return TUNINGS[tuning]
    except KeyError:
        raise ConfigurationError(
            f"Unknown tuning: {tuning!r}. Available: {', '.join(TUNINGS)}"
        ) from None
