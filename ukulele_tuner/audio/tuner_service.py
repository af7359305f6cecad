"""Tuner service that connects audio input, pitch detection and a session."""

from __future__ import annotations
import math
import threading
from typing import Optional

import numpy as np

from ..core.interfaces import IAudioInput, IPitchDetector
from ..exceptions import AudioInputError, CollaboratorError
from ..logger import get_logger
from ..tuning_session import TuningSession

logger = get_logger(__name__)


class LatestFrequency:
    """Single-slot cell holding the most recent frequency estimate.

    The audio thread overwrites it, the sampling thread reads it once per
    tick. Older values are dropped; there is no queue.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = math.nan

    def put(self, value: float) -> None:
        with self._lock:
            self._value = value

    def get(self) -> float:
        with self._lock:
            return self._value


class TunerService:
    """Service that feeds a tuning session from live audio.

    Audio callbacks estimate a frequency for every frame and store it in a
    LatestFrequency cell. A single sampling thread ticks the session with the
    latest value every ``interval_ms``, so ticks never overlap.
    """

    def __init__(
        self,
        session: TuningSession,
        audio_input: IAudioInput,
        pitch_detector: IPitchDetector,
        interval_ms: Optional[int] = None,
    ) -> None:
        """Initialize the tuner service.

        Args:
            session: Session receiving one tick per interval
            audio_input: Audio source producing frames
            pitch_detector: Turns frames into frequency estimates
            interval_ms: Sampling interval, defaults to the session settings
        """
        self._session = session
        self._audio_input = audio_input
        self._pitch_detector = pitch_detector
        self._interval = (interval_ms or session.settings.interval_ms) / 1000

        self._latest = LatestFrequency()
        self._running = False
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def session(self) -> TuningSession:
        return self._session

    @property
    def latest_frequency(self) -> float:
        return self._latest.get()

    def start(self) -> None:
        """Start audio capture and the sampling thread.

        Raises:
            AudioInputError: If the audio input could not be started
            PitchDetectorError: If the detector rejects the audio configuration
        """
        if self._running:
            logger.warning("Tuner already running")
            return

        self._running = True
        try:
            if not self._audio_input.start(self._process_audio):
                raise AudioInputError("Could not start audio input")
            # The audio input may have fallen back to another sample rate
            self._pitch_detector.set_sample_rate(self._audio_input.sample_rate)
        except CollaboratorError:
            self._running = False
            self._audio_input.stop()
            raise

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="tuner-sampler", daemon=True
        )
        self._thread.start()
        logger.info(
            f"Tuner started: {self._session.tuning}, tick every {self._interval * 1000:.0f}ms"
        )

    def stop(self) -> None:
        """Stop sampling and release the audio input."""
        if not self._running:
            return

        self._running = False
        self._stop_event.set()
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None
        self._audio_input.stop()
        logger.info("Tuner stopped")

    def is_running(self) -> bool:
        return self._running

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the service stops. Returns True if it stopped."""
        return self._stop_event.wait(timeout)

    def _process_audio(self, audio_data: np.ndarray, timestamp: float) -> None:
        """Audio callback: estimate the frequency of a frame."""
        # Callbacks still in flight after stop() are ignored
        if not self._running:
            return
        self._latest.put(self._pitch_detector.estimate(audio_data))

    def sample_once(self):
        """Run one sampling tick with the latest frequency estimate."""
        return self._session.tick(self._latest.get())

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self.sample_once()
            except Exception:
                logger.exception("Tuning session failed, stopping the tuner")
                self._running = False
                self._stop_event.set()
                self._audio_input.stop()
                return
