"""Core components for the Ukulele Tuner application."""

# Import interfaces for easier access
from .interfaces import (
    IAudioInput,
    IChime,
    IPitchDetector,
    IRenderer,
)

__all__ = ["IAudioInput", "IChime", "IPitchDetector", "IRenderer"]
