"""Configuration management for the Ukulele Tuner components."""

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from ..exceptions import ConfigurationError
from ..logger import get_logger
from ..tunings import DEFAULT_TUNING, get_tuning

logger = get_logger(__name__)


@dataclass
class TunerSettings:
    """Constants of the tuning engine, overridable at construction."""

    buffer_size: int = 8192  # Audio samples per pitch estimate
    interval_ms: int = 185  # Sampling tick period
    note_buffer_size: int = 15  # Depth of the note window
    tune_buffer_size: int = 5  # Exact hits needed for a tuned string
    debounce_threshold: int = 3  # Runs this short are noise
    victory_duration_ms: int = 3500
    anim_duration_ms: int = 500
    tuning: str = DEFAULT_TUNING
    silence_db: float = -55.0
    pitch_method: str = "default"
    sample_rate: int = 44100

    def validate(self) -> "TunerSettings":
        """Check the settings, raising ConfigurationError on the first problem."""
        for name in (
            "buffer_size",
            "interval_ms",
            "note_buffer_size",
            "tune_buffer_size",
            "debounce_threshold",
            "sample_rate",
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        for name in ("victory_duration_ms", "anim_duration_ms"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative")
        get_tuning(self.tuning)
        return self

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "TunerSettings":
        """Build settings from a config dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            logger.warning(f"Ignoring unknown tuner settings: {sorted(unknown)}")
        return cls(**{k: v for k, v in values.items() if k in known}).validate()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ConfigManager:
    """Configuration manager for the Ukulele Tuner components."""

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize the configuration manager.

        Args:
            config_dir: Directory to store configuration files, or None to use default
        """
        if config_dir is None:
            # Use ~/.config/ukulele_tuner by default
            home = os.path.expanduser("~")
            config_dir = os.path.join(home, ".config", "ukulele_tuner")

        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        # Default configurations
        self.default_configs = {
            "tuner": TunerSettings().to_dict(),
            "audio_input": {
                "device_id": None,
                "channels": 1,
            },
        }

        # Load existing configurations or create default ones
        self.configs = {}
        for config_name, default_config in self.default_configs.items():
            self.configs[config_name] = self.load_config(config_name, default_config)

    def load_config(self, name: str, default_config: Dict[str, Any]) -> Dict[str, Any]:
        """Load configuration from file or create default.

        Args:
            name: Configuration name
            default_config: Default configuration to use if file doesn't exist

        Returns:
            Configuration dictionary
        """
        config_file = self.config_dir / f"{name}.json"

        if config_file.exists():
            try:
                with open(config_file, "r") as f:
                    config = json.load(f)
                logger.info(f"Loaded configuration from {config_file}")
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Error loading configuration from {config_file}: {e}")
                return default_config.copy()

            # Ensure all default keys are present
            for key, value in default_config.items():
                if key not in config:
                    config[key] = value

            return config
        else:
            # Create default configuration
            config = default_config.copy()
            self.save_config(name, config)
            return config

    def save_config(self, name: str, config: Dict[str, Any]) -> bool:
        """Save configuration to file.

        Args:
            name: Configuration name
            config: Configuration dictionary

        Returns:
            True if saved successfully, False otherwise
        """
        config_file = self.config_dir / f"{name}.json"

        try:
            with open(config_file, "w") as f:
                json.dump(config, f, indent=2)
            logger.info(f"Saved configuration to {config_file}")
            return True
        except OSError as e:
            logger.error(f"Error saving configuration to {config_file}: {e}")
            return False

    def get_config(self, name: str) -> Dict[str, Any]:
        """Get configuration by name.

        Args:
            name: Configuration name

        Returns:
            Configuration dictionary
        """
        return self.configs.get(name, {}).copy()

    def get_settings(self, **overrides) -> TunerSettings:
        """Tuner settings from the 'tuner' configuration plus overrides.

        Raises:
            ConfigurationError: If the resulting settings are invalid
        """
        config = self.get_config("tuner")
        config.update({k: v for k, v in overrides.items() if v is not None})
        return TunerSettings.from_dict(config)

    def update_config(self, name: str, updates: Dict[str, Any]) -> bool:
        """Update configuration and save to file.

        Args:
            name: Configuration name
            updates: Dictionary of updates to apply

        Returns:
            True if updated and saved successfully, False otherwise
        """
        if name not in self.configs:
            logger.error(f"Unknown configuration: {name}")
            return False

        if name == "tuner":
            # Refuse to persist settings the tuner would reject on startup
            TunerSettings.from_dict({**self.configs[name], **updates})

        self.configs[name].update(updates)

        return self.save_config(name, self.configs[name])

    def reset_config(self, name: str) -> bool:
        """Reset configuration to default.

        Args:
            name: Configuration name

        Returns:
            True if reset successfully, False otherwise
        """
        if name not in self.default_configs:
            logger.error(f"Unknown configuration: {name}")
            return False

        self.configs[name] = self.default_configs[name].copy()

        return self.save_config(name, self.configs[name])
