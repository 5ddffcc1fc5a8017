"""
Data models for the timeline system.
"""

from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Callable, Dict, Mapping, Optional

_OPTION_ALIASES = {
    "endTime": "end_time",
}


def is_numeric(value: Any) -> bool:
    """True for real numbers; bools are flags, not animatable values."""
    return isinstance(value, Real) and not isinstance(value, bool)


def normalize_options(options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Copy an options mapping, folding camelCase aliases to their Python names."""
    if not options:
        return {}
    return {_OPTION_ALIASES.get(key, key): value for key, value in options.items()}


@dataclass
class Segment:
    """A declared transition of one or more numeric properties."""
    target_props: Dict[str, float]
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_explicit_at(self) -> bool:
        # at=None is explicit too: the segment exists but is not triggered yet
        return "at" in self.options

    def touches(self, key: str) -> bool:
        return key in self.target_props


@dataclass
class TimelineEntry:
    """A segment with its resolved timing. Derived on every query, never stored."""
    segment: Segment
    start_time: Optional[float]  # ms relative to first invocation, None = never
    duration: float              # ms

    @property
    def is_active(self) -> bool:
        return self.start_time is not None

    @property
    def end_time(self) -> Optional[float]:
        if self.start_time is None:
            return None
        return self.start_time + self.duration

    def touches(self, key: str) -> bool:
        return self.segment.touches(key)


@dataclass
class PendingRender:
    """A deferred render queued on the registry, run at flush time."""
    validate: Callable[[], None]
    render: Callable[[], None]
