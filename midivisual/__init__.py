"""
MIDI Visual
Declarative animation timelines for MIDI-reactive shapes.
"""

from .config import AppConfig, TimelineConfig, get_preset, list_presets, load_config
from .logging_config import configure_logging
from .timeline import Registry, Timeline

__all__ = [
    'Timeline',
    'Registry',
    'TimelineConfig',
    'AppConfig',
    'get_preset',
    'list_presets',
    'load_config',
    'configure_logging',
]
