"""Renderers for the tuner UI states."""

from .console import ConsoleRenderer

__all__ = ["ConsoleRenderer"]
