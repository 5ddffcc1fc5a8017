"""
Timeline module for MIDI-reactive shapes.
Provides the declarative animation timeline and the per-frame registry.
"""

from ..config import DEFAULT_DURATION, DEFAULT_PROP_VALUES
from .easing import EASING_FUNCTIONS, get_easing, list_easings
from .models import Segment, TimelineEntry
from .registry import Registry
from .sampling import sample_property, sample_props
from .timecode import InvalidTimeExpression, event_time_to_ms, is_time_expression, to_time_expression
from .timeline_engine import Timeline
from .value_animation import AnimationOptions, get_animated_value

__all__ = [
    'Timeline',
    'Registry',
    'Segment',
    'TimelineEntry',
    'AnimationOptions',
    'get_animated_value',
    'sample_property',
    'sample_props',
    'EASING_FUNCTIONS',
    'get_easing',
    'list_easings',
    'InvalidTimeExpression',
    'event_time_to_ms',
    'is_time_expression',
    'to_time_expression',
    'DEFAULT_DURATION',
    'DEFAULT_PROP_VALUES',
]
