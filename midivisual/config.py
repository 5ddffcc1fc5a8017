"""
MIDI Visual Configuration - Centralized configuration management.

Provides:
- Timing presets for different animation feels
- Type-safe configuration dataclasses
- Loading/saving from JSON/environment
"""

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .logging_config import configure_logging

DEFAULT_DURATION = 500  # ms

# Conventional properties whose neutral value is 1 rather than 0
DEFAULT_PROP_VALUES: Dict[str, float] = {
    "opacity": 1,
    "scale": 1,
    "scaleX": 1,
    "scaleY": 1,
}


@dataclass
class TimelineConfig:
    """Timeline engine defaults."""

    # Duration used by segments declared without duration or end_time (ms)
    default_duration: float = DEFAULT_DURATION

    # Base value for properties missing from a timeline's initial props
    default_values: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_PROP_VALUES))
    fallback_value: float = 0

    # Advisory validation warnings (mixed delay/at, missing duration)
    warnings_enabled: bool = True

    def default_for(self, key: str) -> float:
        """Base value for a property absent from initial props."""
        return self.default_values.get(key, self.fallback_value)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "TimelineConfig":
        """Create from dictionary."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    @classmethod
    def from_env(cls) -> "TimelineConfig":
        """Load configuration from environment variables."""
        warnings = os.environ.get("MIDIVISUAL_WARNINGS", "1").lower()
        return cls(
            default_duration=float(os.environ.get("MIDIVISUAL_DEFAULT_DURATION", str(DEFAULT_DURATION))),
            warnings_enabled=warnings not in ("0", "false", "no", "off"),
        )


# Pre-tuned presets for different animation feels
PRESETS: Dict[str, TimelineConfig] = {
    "default": TimelineConfig(),
    "snappy": TimelineConfig(
        default_duration=150,  # Percussive hits, fast arpeggios
    ),
    "smooth": TimelineConfig(
        default_duration=1200,  # Pads and sustained chords
    ),
}


def get_preset(name: str) -> TimelineConfig:
    """Get a preset by name, returns 'default' if not found."""
    return PRESETS.get(name.lower(), PRESETS["default"])


def list_presets() -> List[str]:
    """List available preset names."""
    return list(PRESETS.keys())


@dataclass
class AppConfig:
    """Complete application configuration."""

    timeline: TimelineConfig = field(default_factory=TimelineConfig)

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    def apply_logging(self) -> None:
        """Configure root logging from the logging settings."""
        configure_logging(level=self.log_level, json_output=self.json_logs)

    def save(self, path: Path) -> None:
        """Save configuration to JSON file."""
        data = {
            "timeline": self.timeline.to_dict(),
            "logging": {
                "level": self.log_level,
                "json": self.json_logs,
            },
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(data, f, indent=2)

    @classmethod
    def load(cls, path: Path) -> "AppConfig":
        """Load configuration from JSON file."""
        if not path.exists():
            return cls()

        with open(path) as f:
            data = json.load(f)

        config = cls()

        if "timeline" in data:
            config.timeline = TimelineConfig.from_dict(data["timeline"])

        logging_data = data.get("logging", {})
        if logging_data:
            config.log_level = logging_data.get("level", "INFO")
            config.json_logs = logging_data.get("json", False)

        return config


# Default config file location
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "midivisual" / "config.json"


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load configuration from file or return defaults."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    return AppConfig.load(path)


def save_config(config: AppConfig, path: Optional[Path] = None) -> None:
    """Save configuration to file."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    config.save(path)
