"""
Time expressions for timeline options.

Wherever a timeline option takes a time (at, delay, duration, end_time) it
accepts either a plain millisecond count or a short clock string:

    "0:02"     ->     2000 ms
    "2:00"     ->   120000 ms
    "1:00:05"  ->  3605000 ms
    "45"       ->    45000 ms

Components are read right to left as seconds, minutes, hours.
"""

import logging
import re
from numbers import Real
from typing import Optional, Union

logger = logging.getLogger('timecode')

EventTime = Union[int, float, str]

# [[H:]MM:]SS
TIME_EXPRESSION_RE = re.compile(r"^(?:(?:(\d+):)?([0-5]?\d):([0-5]\d)|(\d+))$")

_MS_PER_UNIT = (1000, 60 * 1000, 60 * 60 * 1000)


class InvalidTimeExpression(ValueError):
    """Raised by the strict converter for strings that are not clock times."""


def is_time_expression(value) -> bool:
    """True if value is a string in [[H:]MM:]SS form."""
    return isinstance(value, str) and TIME_EXPRESSION_RE.match(value) is not None


def to_time_expression(value: str) -> str:
    """Return value unchanged if it is a valid time expression, else raise."""
    if not is_time_expression(value):
        raise InvalidTimeExpression(
            f'Value "{value}" is not a valid time format. '
            f'Expected formats: "0:02", "2:00", "1:00:05"'
        )
    return value


def time_expression_to_ms(expression: str) -> int:
    """Convert a validated time expression to milliseconds."""
    total = 0
    components = expression.split(":")
    for unit_ms, component in zip(_MS_PER_UNIT, reversed(components)):
        total += int(component) * unit_ms
    return total


def event_time_to_ms(event_time: Optional[EventTime]) -> float:
    """
    Permissive conversion of an option time to milliseconds.

    Numbers pass through unchanged. Valid time expressions are converted.
    Anything else (malformed strings, None) contributes 0 ms.
    """
    if isinstance(event_time, Real) and not isinstance(event_time, bool):
        return event_time
    if is_time_expression(event_time):
        return time_expression_to_ms(event_time)
    if event_time is not None:
        logger.debug(f"Ignoring invalid time expression {event_time!r}, using 0ms")
    return 0
