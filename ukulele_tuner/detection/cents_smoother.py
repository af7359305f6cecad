"""
Cents smoothing for the tuning display.

Turns the raw deviation of a reading into a display value: the wrong pitch
class is clamped to +/-50 cents, and the rounding granularity depends on how
far off the string is. The displayed value then shrinks to zero as the string
approaches fully tuned.
"""

import math
from dataclasses import dataclass

from ..note_types import Note, NoteReading

MAX_SENSITIVITY = 10
WRONG_NOTE_CENTS = 50.0


def round_half_up(value: float, precision: float = 1) -> float:
    """Round to the nearest multiple of ``1 / precision``, halves going up."""
    return math.floor(value * precision + 0.5) / precision


def sensitivity_for(cents: float) -> float:
    """Rounding precision for a deviation, capped at MAX_SENSITIVITY."""
    abs_cents100 = abs(cents) * 2
    if abs_cents100 == 0:
        return MAX_SENSITIVITY
    return min(MAX_SENSITIVITY, round_half_up(100 / abs_cents100))


@dataclass(frozen=True)
class CentsReading:
    cents_rounded: float
    is_hit: bool  # Exact target note with zero rounded cents
    is_too_low: bool


class CentsSmoother:
    """Converts raw cents into the sensitivity-scaled, rounded display value."""

    def smooth(
        self, reading: NoteReading, target: Note, target_frequency: float
    ) -> CentsReading:
        is_target = reading.note == target
        is_too_low = reading.frequency < target_frequency

        if is_target:
            base_cents = reading.cents
        else:
            base_cents = -WRONG_NOTE_CENTS if is_too_low else WRONG_NOTE_CENTS

        sensitivity = sensitivity_for(base_cents)
        cents_rounded = round_half_up(base_cents, sensitivity)

        return CentsReading(
            cents_rounded=cents_rounded,
            is_hit=is_target and cents_rounded == 0,
            is_too_low=is_too_low,
        )

    @staticmethod
    def ui_cents(cents_rounded: float, tune_ratio: float) -> float:
        """Displayed deviation, settling to zero as the string gets tuned."""
        return cents_rounded * (1 - tune_ratio)
