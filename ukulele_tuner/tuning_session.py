"""The tuning session: turns a stream of frequencies into UI states."""

import threading
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from .core.config import TunerSettings
from .core.events import (
    AllTunedState,
    IdleState,
    LockedState,
    StringTunedState,
    TunerEvents,
    UiState,
    describe_state,
)
from .core.interfaces import IChime, IRenderer
from .detection.cents_smoother import CentsSmoother
from .detection.noise_classifier import NoiseClassifier
from .detection.note_buffer import NoteBuffer
from .detection.progress_tracker import StringProgress
from .detection.target_resolver import TargetResolver
from .logger import get_logger
from .note_types import Note, NoteReading, Tuning
from .note_utils import get_note, note_to_frequency
from .tunings import get_tuning

# Get logger for this module
logger = get_logger(__name__)


@dataclass
class SessionState:
    """Bookkeeping of the session state machine, mutated only by tick()."""

    current_note: Optional[Note] = None
    previous_note: Optional[Note] = None
    previous_note_name: Optional[str] = None
    resetable: bool = False  # Armed once a note is locked, fires on long noise
    soft_resettable: bool = False  # Armed once a note is locked, fires on change/silence
    victory: bool = False
    victory_paused: bool = False


class TuningSession:
    """
    Debounces detected notes and tracks the tuning progress of every string.

    The session is driven by ``tick`` at a fixed interval. Each tick takes the
    latest frequency estimate and returns the UI states it produced, which are
    also sent to the renderer and the ``events`` listeners.
    """

    def __init__(
        self,
        tuning: Union[str, Tuning, None] = None,
        settings: Optional[TunerSettings] = None,
        renderer: Optional[IRenderer] = None,
        chime: Optional[IChime] = None,
        clock: Callable[[], float] = time.monotonic,
        note_mapper: Callable[[float], NoteReading] = get_note,
    ) -> None:
        """Initialize the session.

        Args:
            tuning: Tuning name or instance, defaults to the one in settings
            settings: Engine constants, defaults to TunerSettings()
            renderer: Optional sink for emitted UI states
            chime: Optional confirmation sound played when strings get tuned
            clock: Monotonic clock in seconds, used for the victory pause
            note_mapper: Maps a frequency to a NoteReading

        Raises:
            ConfigurationError: If the tuning or the settings are invalid
        """
        self.settings = (settings or TunerSettings()).validate()
        self._tuning = get_tuning(tuning or self.settings.tuning)

        self._chime = chime
        self._clock = clock
        self._note_mapper = note_mapper

        self.events = TunerEvents()
        if renderer is not None:
            self.events.on_state(renderer.render)

        self._buffer = NoteBuffer(self.settings.note_buffer_size)
        self._classifier = NoiseClassifier(self.settings.debounce_threshold)
        self._resolver = TargetResolver(self.settings.debounce_threshold)
        self._smoother = CentsSmoother()
        self._progress = self._new_progress()

        self._state = SessionState()
        self._pending_tuning: Optional[Tuning] = None
        self._victory_ends_at = 0.0
        self._lock = threading.Lock()

        logger.debug(f"TuningSession initialized with tuning {self._tuning}")

    def _new_progress(self) -> StringProgress:
        return StringProgress(self._tuning.notes, self.settings.tune_buffer_size)

    @property
    def tuning(self) -> Tuning:
        return self._tuning

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def progress(self) -> StringProgress:
        return self._progress

    @property
    def buffer(self) -> NoteBuffer:
        return self._buffer

    def select_tuning(self, tuning: Union[str, Tuning]) -> Tuning:
        """Switch to another tuning.

        The new tuning and its fresh progress take over together, with the
        hard reset on the next tick. Until then ``tuning`` and ``progress``
        still describe the old tuning.

        Raises:
            ConfigurationError: If the tuning is unknown, nothing changes then
        """
        new_tuning = get_tuning(tuning)
        with self._lock:
            self._pending_tuning = new_tuning
        logger.info(f"Tuning {new_tuning} selected")
        return new_tuning

    def reset(self) -> None:
        """Hard reset: forget the locked note and all string progress."""
        with self._lock:
            self._apply_hard_reset()

    def _apply_hard_reset(self) -> None:
        if self._pending_tuning is not None:
            self._tuning = self._pending_tuning
            self._pending_tuning = None
        self._state.victory = False
        self._state.current_note = None
        self._progress = self._new_progress()
        logger.debug(f"Hard reset applied, tuning {self._tuning}")

    def tick(self, frequency: float) -> List[UiState]:
        """Process the latest frequency estimate.

        Args:
            frequency: Latest frequency in Hz, NaN when nothing usable was heard

        Returns:
            The UI states emitted during this tick, in order
        """
        emitted: List[UiState] = []
        with self._lock:
            self._tick(frequency, emitted)

        # Listeners run unlocked, they may call reset() or select_tuning()
        for state in emitted:
            self.events.emit_state(state)
        return emitted

    def _emit(self, emitted: List[UiState], state: UiState) -> None:
        emitted.append(state)
        logger.debug(f"Emitting {describe_state(state)}")

    def _tick(self, frequency: float, emitted: List[UiState]) -> None:
        st = self._state

        if st.victory_paused:
            if self._clock() < self._victory_ends_at:
                return
            self._end_victory(emitted)

        if self._pending_tuning is not None:
            self._apply_hard_reset()

        reading = self._note_mapper(frequency)
        self._buffer.push(reading.note)

        runs = list(self._buffer.groups())
        st.current_note = self._resolver.resolve(self._tuning.notes, runs)
        noise = self._classifier.classify(runs, st.current_note)

        logger.debug(
            f"{self._buffer.describe()} current={st.current_note} "
            f"long={noise.long_noise} short={noise.short_noise} silence={noise.silence}"
        )

        if noise.long_noise and st.resetable:
            # Nothing but noise for a while after a note was locked
            st.current_note = None
            st.resetable = False
            logger.info("Signal lost, waiting for a string to be plucked")
            self._emit(emitted, IdleState())
        elif st.current_note is not None and reading.has_cents:
            if not self._chime_playing():
                st.resetable = True
                st.soft_resettable = True
                self._update_string(st.current_note, reading, emitted)

        is_note_change = st.previous_note != st.current_note
        st.previous_note = st.current_note

        if st.soft_resettable and is_note_change:
            self._progress.reset_except(st.current_note)
            st.soft_resettable = False
        elif st.soft_resettable and (noise.silence or noise.short_noise):
            st.current_note = None
            self._progress.reset_all()
            st.soft_resettable = False

    def _chime_playing(self) -> bool:
        return self._chime is not None and self._chime.is_playing()

    def _play_chime(self) -> None:
        if self._chime is not None:
            self._chime.play()

    def _update_string(
        self, target: Note, reading: NoteReading, emitted: List[UiState]
    ) -> None:
        st = self._state
        target_frequency = note_to_frequency(target)
        cents = self._smoother.smooth(reading, target, target_frequency)

        tracker = self._progress.tracker_for(target)
        if cents.is_hit:
            tracker.record_hit()

        tune_ratio = tracker.tune_ratio
        cents_ui = self._smoother.ui_cents(cents.cents_rounded, tune_ratio)

        label_changed = st.previous_note_name != target.name
        if label_changed:
            logger.info(f"Locked on string {target}")
        st.previous_note_name = target.name

        string_index = self._progress.index_of(target)
        self._emit(
            emitted,
            LockedState(
                note=target,
                string_index=string_index,
                cents_ui=cents_ui,
                tune_ratio=tune_ratio,
                is_too_low=cents.is_too_low,
                is_close=reading.note == target and cents_ui == 0,
                label_changed=label_changed,
                transition_ms=self.settings.anim_duration_ms,
            ),
        )

        if tracker.mark_complete():
            logger.info(f"String {target} is in tune")
            self._play_chime()
            self._emit(emitted, StringTunedState(target, string_index))

            if self._progress.all_tuned and not st.victory:
                self._start_victory(emitted)

    def _start_victory(self, emitted: List[UiState]) -> None:
        st = self._state
        st.victory = True
        st.victory_paused = True
        st.current_note = None
        self._progress.reset_all(clear_marks=True)
        self._victory_ends_at = self._clock() + self.settings.victory_duration_ms / 1000
        logger.info(f"All strings tuned for {self._tuning.name}")
        self._play_chime()
        self._emit(emitted, AllTunedState(self._tuning))

    def _end_victory(self, emitted: List[UiState]) -> None:
        st = self._state
        st.victory_paused = False
        st.victory = False
        logger.debug("Victory pause over")
        self._emit(emitted, IdleState())
