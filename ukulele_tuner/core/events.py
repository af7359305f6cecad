"""Event system and UI states for the Ukulele Tuner components."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional, Union

from ..logger import get_logger
from ..note_types import Note, Tuning

logger = get_logger(__name__)


class TunerEventType(Enum):
    """Event types emitted by a tuning session."""

    STATE_CHANGED = auto()


@dataclass(frozen=True)
class IdleState:
    """Nothing locked: prompt the user to pluck a string."""


@dataclass(frozen=True)
class LockedState:
    """A string is locked and being tuned."""

    note: Note
    string_index: int
    cents_ui: float
    tune_ratio: float
    is_too_low: bool
    is_close: bool  # Target note detected and nothing left to display
    label_changed: bool  # First tick showing this note name
    transition_ms: int = 500


@dataclass(frozen=True)
class StringTunedState:
    """A string just reached full tuning progress."""

    note: Note
    string_index: int


@dataclass(frozen=True)
class AllTunedState:
    """Every string of the tuning is in tune."""

    tuning: Tuning


UiState = Union[IdleState, LockedState, StringTunedState, AllTunedState]


class EventEmitter:
    """Event emitter for the tuner components."""

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners: Dict[Any, List[Callable]] = {}

    def on(self, event_type: Any, callback: Callable) -> None:
        """Register a callback for an event type.

        Args:
            event_type: Event type to listen for
            callback: Function to call when the event occurs
        """
        if event_type not in self._listeners:
            self._listeners[event_type] = []

        if callback not in self._listeners[event_type]:
            self._listeners[event_type].append(callback)
            logger.debug(f"Added listener for event {event_type}")

    def off(self, event_type: Any, callback: Callable) -> None:
        """Remove a previously registered callback."""
        listeners = self._listeners.get(event_type, [])
        if callback in listeners:
            listeners.remove(callback)

    def emit(self, event_type: Any, *args, **kwargs) -> None:
        """Emit an event.

        Listeners are observers: an error in one of them is logged and does
        not reach the emitter.

        Args:
            event_type: Event type to emit
            *args: Positional arguments to pass to listeners
            **kwargs: Keyword arguments to pass to listeners
        """
        if event_type not in self._listeners:
            return

        for callback in list(self._listeners[event_type]):
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in event listener for {event_type}: {e}")


class TunerEvents:
    """Event emitter specifically for tuner UI states."""

    def __init__(self):
        self._emitter = EventEmitter()

    def on_state(self, callback: Callable[[UiState], None]) -> None:
        """Register a callback receiving every emitted UI state."""
        self._emitter.on(TunerEventType.STATE_CHANGED, callback)

    def off_state(self, callback: Callable[[UiState], None]) -> None:
        self._emitter.off(TunerEventType.STATE_CHANGED, callback)

    def emit_state(self, state: UiState) -> None:
        self._emitter.emit(TunerEventType.STATE_CHANGED, state)


def describe_state(state: Optional[UiState]) -> str:
    """Short human readable form of a UI state, used in logs."""
    if isinstance(state, LockedState):
        return (
            f"Locked({state.note}, cents={state.cents_ui:+.1f}, "
            f"ratio={state.tune_ratio:.1f})"
        )
    if isinstance(state, StringTunedState):
        return f"StringTuned({state.note})"
    if isinstance(state, AllTunedState):
        return f"AllTuned({state.tuning.name})"
    if isinstance(state, IdleState):
        return "Idle"
    return repr(state)
