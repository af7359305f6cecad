"""Factory for creating Ukulele Tuner components."""

from typing import Dict, Optional, Type

from ..audio.audio_input import AudioInputHandler, SoundDeviceInput, WavFileInput
from ..audio.chime import SoundDeviceChime
from ..audio.pitch_detector import AubioPitchDetector
from ..audio.tuner_service import TunerService
from ..exceptions import ConfigurationError
from ..logger import get_logger
from ..tuning_session import TuningSession
from .config import ConfigManager, TunerSettings
from .interfaces import IChime, IPitchDetector, IRenderer

logger = get_logger(__name__)


class ComponentFactory:
    """Factory for creating the tuner components from configuration."""

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        settings: Optional[TunerSettings] = None,
    ):
        """Initialize the component factory.

        Args:
            config_manager: Configuration manager, or None to create a default one
            settings: Tuner settings, or None to read them from the configuration
        """
        self.config_manager = config_manager or ConfigManager()
        self.settings = settings or self.config_manager.get_settings()

        # Register default component implementations
        self.pitch_detector_classes: Dict[str, Type[IPitchDetector]] = {
            "default": AubioPitchDetector,
        }

        self.audio_input_classes: Dict[str, Type[AudioInputHandler]] = {
            "default": SoundDeviceInput,
            "wav": WavFileInput,
        }

    def create_pitch_detector(
        self, implementation: str = "default", **kwargs
    ) -> IPitchDetector:
        """Create a pitch detector.

        Raises:
            ConfigurationError: If the implementation is not registered
            PitchDetectorError: If the detector cannot be initialized
        """
        if implementation not in self.pitch_detector_classes:
            raise ConfigurationError(
                f"Unknown pitch detector implementation: {implementation}"
            )

        config = {
            "method": self.settings.pitch_method,
            "buffer_size": self.settings.buffer_size,
            "sample_rate": self.settings.sample_rate,
            "silence_db": self.settings.silence_db,
        }
        config.update(kwargs)

        instance = self.pitch_detector_classes[implementation](**config)
        logger.info(f"Created pitch detector: {implementation}")
        return instance

    def create_audio_input(
        self, implementation: str = "default", **kwargs
    ) -> AudioInputHandler:
        """Create an audio input.

        Raises:
            ConfigurationError: If the implementation is not registered
            AudioInputError: If the input cannot be opened
        """
        if implementation not in self.audio_input_classes:
            raise ConfigurationError(f"Unknown audio input implementation: {implementation}")

        if implementation == "default":
            config = self.config_manager.get_config("audio_input")
            config["sample_rate"] = self.settings.sample_rate
        else:
            config = {}
        config["frames_per_buffer"] = self.settings.buffer_size
        config.update({k: v for k, v in kwargs.items() if v is not None})

        instance = self.audio_input_classes[implementation](**config)
        logger.info(f"Created audio input: {implementation}")
        return instance

    def create_chime(self) -> IChime:
        return SoundDeviceChime(sample_rate=self.settings.sample_rate)

    def create_session(
        self,
        renderer: Optional[IRenderer] = None,
        chime: Optional[IChime] = None,
        tuning: Optional[str] = None,
    ) -> TuningSession:
        return TuningSession(
            tuning=tuning or self.settings.tuning,
            settings=self.settings,
            renderer=renderer,
            chime=chime,
        )

    def create_tuner_service(
        self,
        session: TuningSession,
        audio_input: Optional[AudioInputHandler] = None,
        pitch_detector: Optional[IPitchDetector] = None,
    ) -> TunerService:
        """Create a tuner service, building missing collaborators.

        The pitch detector is created first, so a detector failure never
        leaves an opened audio device behind.
        """
        pitch_detector = pitch_detector or self.create_pitch_detector()
        audio_input = audio_input or self.create_audio_input()

        instance = TunerService(
            session,
            audio_input=audio_input,
            pitch_detector=pitch_detector,
            interval_ms=self.settings.interval_ms,
        )
        logger.info("Created tuner service")
        return instance
