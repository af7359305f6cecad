"""Command-line interface for the Ukulele Tuner."""

from .main import main

__all__ = ["main"]
