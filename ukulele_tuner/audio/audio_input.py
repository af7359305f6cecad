"""Audio input handling for the tuner."""

from __future__ import annotations
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, ClassVar, Optional

import numpy as np
import sounddevice as sd
import soundfile as sf

from ..core.interfaces import IAudioInput
from ..exceptions import AudioInputError
from ..logger import get_logger

logger = get_logger(__name__)

AudioCallback = Callable[[np.ndarray, float], None]


class AudioInputHandler(IAudioInput, ABC):
    """Abstract base class for audio input handlers."""

    _running: bool = False
    _sample_rate: int = 44100

    def is_running(self) -> bool:
        """Check if audio input is running.

        Returns:
            True if audio input is running, False otherwise
        """
        return self._running

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @abstractmethod
    def start(self, callback: AudioCallback) -> bool:
        """Start capturing audio and pass it to the callback.

        Args:
            callback: Function to call with audio data and timestamp

        Returns:
            True if started successfully, False otherwise
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop capturing audio."""
        pass


class SoundDeviceInput(AudioInputHandler):
    """Microphone input using the sounddevice library."""

    # Audio configuration
    SAMPLE_RATE: ClassVar[int] = 44100  # Hz
    FRAMES_PER_BUFFER: ClassVar[int] = 8192  # One pitch estimate per buffer
    CHANNELS: ClassVar[int] = 1  # Mono audio
    COMMON_RATES: ClassVar[list] = [44100, 48000, 22050, 16000, 8000]

    def __init__(
        self,
        device_id: Optional[int] = None,
        sample_rate: Optional[int] = None,
        frames_per_buffer: Optional[int] = None,
        channels: Optional[int] = None,
    ) -> None:
        """Initialize the audio input handler.

        Args:
            device_id: Audio input device ID, or None for the default input
            sample_rate: Sample rate in Hz, or None for default (44100)
            frames_per_buffer: Buffer size in frames, or None for default (8192)
            channels: Number of audio channels, or None for default (1)

        Raises:
            AudioInputError: If no usable sample rate was found for the device
        """
        self._device_id = device_id
        self._sample_rate = sample_rate or self.SAMPLE_RATE
        self._frames_per_buffer = frames_per_buffer or self.FRAMES_PER_BUFFER
        self._channels = channels or self.CHANNELS

        self._stream: Optional[sd.InputStream] = None
        self._callback: Optional[AudioCallback] = None
        self._running = False

        self._init_audio_device()

    def _candidate_rates(self) -> list:
        rates = [r for r in self.COMMON_RATES if r != self._sample_rate]
        return [self._sample_rate] + rates

    def _init_audio_device(self) -> None:
        """Find a sample rate the input device accepts."""
        for rate in self._candidate_rates():
            try:
                sd.check_input_settings(
                    device=self._device_id, samplerate=rate, channels=self._channels
                )
            except Exception as e:
                logger.warning(f"Sample rate {rate} Hz not supported: {e}")
                continue

            self._sample_rate = rate
            logger.info(
                f"Audio device initialized: ID={self._device_id}, Rate={rate}Hz"
            )
            return

        raise AudioInputError(
            "Could not initialize audio device with any supported sample rate"
        )

    def _audio_callback(
        self,
        indata: np.ndarray,
        _frames: int,
        _time_info: dict,
        status: sd.CallbackFlags,
    ) -> None:
        """Callback for processing audio data from the input stream.

        Note:
            This is called from a separate audio thread, so it should be fast
            and avoid any blocking operations to prevent audio glitches.
        """
        if status:
            logger.warning(f"Audio callback status: {status}")

        if self._callback:
            # Extract mono audio data (take first channel if multi-channel)
            audio_data = indata[:, 0] if indata.ndim > 1 else indata
            self._callback(audio_data, time.time())

    def start(self, callback: AudioCallback) -> bool:
        if self._running:
            logger.warning("Audio input already running")
            return True

        self._callback = callback
        try:
            self._stream = sd.InputStream(
                device=self._device_id,
                samplerate=self._sample_rate,
                blocksize=self._frames_per_buffer,
                channels=self._channels,
                dtype="float32",
                callback=self._audio_callback,
            )
            self._stream.start()
        except Exception as e:
            logger.error(f"Could not start audio input at {self._sample_rate} Hz: {e}")
            self._stream = None
            return False

        self._running = True
        logger.info(f"Audio input started with sample rate {self._sample_rate} Hz")
        return True

    def stop(self) -> None:
        if not self._running:
            return

        self._running = False
        if self._stream:
            try:
                self._stream.stop()
                self._stream.close()
            except Exception as e:
                logger.error(f"Error stopping audio input: {e}")
            self._stream = None
        logger.info("Audio input stopped")


class WavFileInput(AudioInputHandler):
    """Provides audio data by reading from a WAV file at playback speed."""

    def __init__(
        self,
        file_path: str,
        frames_per_buffer: int = SoundDeviceInput.FRAMES_PER_BUFFER,
        loop: bool = False,
        gain: float = 1.0,
    ) -> None:
        """
        Raises:
            AudioInputError: If the file cannot be opened
        """
        self._file_path = file_path
        self._frames_per_buffer = frames_per_buffer
        self._loop = loop
        self._gain = gain
        self._callback: Optional[AudioCallback] = None
        self._running = False
        self._thread: Optional[threading.Thread] = None

        try:
            with sf.SoundFile(self._file_path) as f:
                self._sample_rate = f.samplerate
        except (RuntimeError, OSError) as e:
            raise AudioInputError(f"Cannot open {file_path}: {e}") from e

    def start(self, callback: AudioCallback) -> bool:
        if self._running:
            return True

        self._callback = callback
        self._running = True
        self._thread = threading.Thread(
            target=self._stream_data, name="wav-reader", daemon=True
        )
        self._thread.start()
        logger.info(f"Streaming {self._file_path} at {self._sample_rate} Hz")
        return True

    def stop(self) -> None:
        self._running = False
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None

    def _stream_data(self) -> None:
        interval = self._frames_per_buffer / self._sample_rate
        try:
            with sf.SoundFile(self._file_path) as f:
                while self._running:
                    data = f.read(self._frames_per_buffer, dtype="float32", always_2d=True)
                    if len(data) < self._frames_per_buffer:
                        if not self._loop:
                            break
                        f.seek(0)
                        continue

                    audio_data = data[:, 0]
                    if self._gain != 1.0:
                        audio_data = audio_data * self._gain

                    if self._callback:
                        self._callback(audio_data, time.time())

                    # Simulate real-time playback speed
                    time.sleep(interval)
        except (RuntimeError, OSError) as e:
            logger.error(f"Error streaming WAV file: {e}")

        self._running = False
        logger.info(f"Finished streaming {self._file_path}")
