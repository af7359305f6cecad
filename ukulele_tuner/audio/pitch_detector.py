"""Pitch detection backed by aubio."""

from __future__ import annotations
import math
from typing import ClassVar, Optional

import aubio
import numpy as np

from ..core.interfaces import IPitchDetector
from ..exceptions import PitchDetectorError
from ..logger import get_logger

logger = get_logger(__name__)


class AubioPitchDetector(IPitchDetector):
    """Estimates the fundamental frequency of whole audio buffers."""

    DEFAULT_METHOD: ClassVar[str] = "default"
    DEFAULT_BUFFER_SIZE: ClassVar[int] = 8192
    DEFAULT_SILENCE_DB: ClassVar[float] = -55.0  # Quieter frames report no pitch

    def __init__(
        self,
        method: str = DEFAULT_METHOD,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        sample_rate: int = 44100,
        silence_db: float = DEFAULT_SILENCE_DB,
        hop_size: Optional[int] = None,
    ) -> None:
        """Initialize the detector.

        Args:
            method: aubio pitch method ('default', 'yin', 'yinfft', ...)
            buffer_size: Analysis window in samples
            sample_rate: Audio sample rate in Hz
            silence_db: Silence threshold in dB
            hop_size: Samples per estimate, defaults to the buffer size

        Raises:
            PitchDetectorError: If aubio rejects the configuration
        """
        self._method = method
        self._buffer_size = buffer_size
        self._hop_size = hop_size or buffer_size
        self._silence_db = silence_db
        self._sample_rate = sample_rate
        self._pitch = self._create(sample_rate)

        logger.info(
            f"Pitch detector initialized: method={method}, buffer={buffer_size}, "
            f"sample_rate={sample_rate}, silence={silence_db}dB"
        )

    def _create(self, sample_rate: int):
        try:
            pitch = aubio.pitch(
                self._method, self._buffer_size, self._hop_size, sample_rate
            )
            pitch.set_unit("Hz")
            pitch.set_silence(self._silence_db)
        except (RuntimeError, ValueError) as e:
            raise PitchDetectorError(f"Could not create aubio pitch detector: {e}") from e
        return pitch

    def set_sample_rate(self, sample_rate: int) -> None:
        """Update the sample rate and reinitialize the pitch detector."""
        if sample_rate <= 0:
            raise PitchDetectorError("Sample rate must be positive")

        if sample_rate != self._sample_rate:
            logger.info(
                f"Updating pitch detector sample rate from {self._sample_rate} to {sample_rate} Hz"
            )
            self._pitch = self._create(sample_rate)
            self._sample_rate = sample_rate

    def estimate(self, frame: np.ndarray) -> float:
        """Frequency of the frame in Hz, NaN for silence or no pitch."""
        if frame.dtype != np.float32:
            frame = frame.astype(np.float32)

        # aubio expects exactly hop_size samples
        if len(frame) > self._hop_size:
            frame = frame[: self._hop_size]
        elif len(frame) < self._hop_size:
            padding = np.zeros(self._hop_size - len(frame), dtype=np.float32)
            frame = np.concatenate((frame, padding))

        frequency = float(self._pitch(frame)[0])
        return frequency if frequency > 0 else math.nan
