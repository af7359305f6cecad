"""Exception types raised by the Ukulele Tuner components."""


class TunerError(Exception):
    """Base class for all tuner errors."""


class ConfigurationError(TunerError, ValueError):
    """Raised when a tuning, note name or setting is invalid.

    Configuration errors are reported at construction time so that a session
    is never started with a partially valid setup.
    """


class CollaboratorError(TunerError, RuntimeError):
    """Raised when an external collaborator (audio, pitch detection) fails."""


class PitchDetectorError(CollaboratorError):
    """The pitch detector could not be created or configured."""


class AudioInputError(CollaboratorError):
    """The audio input could not be opened or started."""
