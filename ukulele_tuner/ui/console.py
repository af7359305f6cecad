"""Plain text renderer for terminals."""

import sys
from typing import List, Optional, TextIO

from ..core.events import (
    AllTunedState,
    IdleState,
    LockedState,
    StringTunedState,
    UiState,
)
from ..core.interfaces import IRenderer
from ..logger import get_logger
from ..note_types import Tuning

logger = get_logger(__name__)

METER_WIDTH = 21  # Odd so the centre mark sits in the middle
METER_RANGE = 50.0  # Cents shown at either end of the meter


def cents_meter(cents: float, width: int = METER_WIDTH) -> str:
    """Horizontal needle for a deviation in cents, e.g. '[----|---*------]'."""
    half = width // 2
    offset = round(max(-1.0, min(1.0, cents / METER_RANGE)) * half)
    cells = ["-"] * width
    cells[half] = "|"
    cells[half + offset] = "*"
    return "[" + "".join(cells) + "]"


class ConsoleRenderer(IRenderer):
    """Writes one line per UI state, with the tuned strings on the left."""

    def __init__(self, tuning: Tuning, stream: Optional[TextIO] = None):
        self._tuning = tuning
        self._stream = stream or sys.stdout
        self._tuned: List[bool] = [False] * len(tuning)

    def _strings(self) -> str:
        return " ".join(
            f"[{note}]" if tuned else f" {note} "
            for note, tuned in zip(self._tuning.notes, self._tuned)
        )

    def render(self, state: UiState) -> None:
        if isinstance(state, IdleState):
            line = "Pluck a string"
        elif isinstance(state, LockedState):
            if state.is_close:
                hint = "in tune"
            else:
                hint = "tune up" if state.is_too_low else "tune down"
            line = (
                f"{state.note.name:<2} {cents_meter(state.cents_ui)} "
                f"{state.cents_ui:+5.1f}c {state.tune_ratio:4.0%} {hint}"
            )
        elif isinstance(state, StringTunedState):
            self._tuned[state.string_index] = True
            line = f"{state.note} is in tune!"
        elif isinstance(state, AllTunedState):
            self._tuned = [False] * len(self._tuning)
            line = f"All tuned up! ({state.tuning.name})"
        else:
            logger.warning(f"Unknown UI state: {state!r}")
            return

        self._stream.write(f"{self._strings()}  {line}\n")
        self._stream.flush()
